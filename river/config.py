"""User configuration for the river editor.

Settings live in ``config.toml`` under the OS-appropriate config directory.
A missing file is replaced by a commented default; a broken file or a bad
value never stops the editor, it only falls back to the default.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import platformdirs
import toml

logger = logging.getLogger(__name__)

APP_NAME = "river"

DEFAULT_NOTES_DIR = "~/Documents/DailyNotes"

DEFAULT_CONFIG_TEXT = """\
# River Editor Configuration

# Enable vim keybindings (true/false)
# When true: vim modes (Normal, Insert, Command) with vim keybindings
# When false: standard editor keybindings (always inserting)
vim_bindings = false

# Number of spaces inserted by the Tab key
tab_size = 4

# Directory where daily notes are stored
daily_notes_dir = "~/Documents/DailyNotes"

# Seconds without an edit before a typing session ends
typing_timeout_seconds = 180
"""


def _default_notes_dir() -> str:
    return os.path.expanduser(DEFAULT_NOTES_DIR)


@dataclass
class Settings:
    """Resolved settings handed to the editor."""
    vim_bindings: bool = False
    tab_size: int = 4
    daily_notes_dir: str = field(default_factory=_default_notes_dir)
    typing_timeout_seconds: int = 180


def default_config_path() -> Path:
    return Path(platformdirs.user_config_dir(APP_NAME)) / "config.toml"


def validate_setting(key: str, value: Any) -> bool:
    """Check a single value read from the config file.

    Unknown keys are accepted so older versions can read newer files.
    """
    if key == 'vim_bindings':
        return isinstance(value, bool)
    if key in ('tab_size', 'typing_timeout_seconds'):
        if isinstance(value, bool) or not isinstance(value, int):
            return False
        return value >= 1
    if key == 'daily_notes_dir':
        return isinstance(value, str) and bool(value.strip())
    return True


def settings_from_dict(data: Dict[str, Any]) -> Settings:
    """Build Settings from parsed TOML, keeping defaults for bad values."""
    settings = Settings()
    for key in ('vim_bindings', 'tab_size', 'daily_notes_dir', 'typing_timeout_seconds'):
        if key not in data:
            continue
        value = data[key]
        if not validate_setting(key, value):
            logger.warning(f"Invalid value for {key!r} in config: {value!r}, using default")
            continue
        setattr(settings, key, value)
    settings.daily_notes_dir = os.path.expanduser(settings.daily_notes_dir)
    return settings


def write_default_config(path: Path) -> bool:
    """Write the commented default config file. Returns False on failure."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            f.write(DEFAULT_CONFIG_TEXT)
        return True
    except OSError as e:
        logger.warning(f"Could not create default config {path}: {e}")
        return False


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from ``path`` (default: the user config file)."""
    path = Path(path) if path is not None else default_config_path()

    if not path.exists():
        logger.info(f"No config at {path}, writing defaults")
        write_default_config(path)
        return Settings()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = toml.load(f)
    except toml.TomlDecodeError as e:
        logger.error(f"TOML parse error in {path}: {e}, using defaults")
        return Settings()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read config {path}: {e}, using defaults")
        return Settings()

    if not isinstance(data, dict):
        logger.warning("Config file has invalid format (not a table), ignoring")
        return Settings()
    return settings_from_dict(data)
