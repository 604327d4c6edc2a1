"""River CLI entry point.

Allows running via `python -m river` and provides the console script
defined in `pyproject.toml`.
"""

from __future__ import annotations

import datetime
import logging
import sys
from pathlib import Path

import platformdirs

from .config import APP_NAME
from .version import get_version_string


def _escape_bytes(s: str) -> str:
    """Return a printable representation of raw key string."""
    return s.encode('unicode_escape').decode('ascii')


def configure_logging(debug: bool = False) -> None:
    """Send log records to a file; the terminal belongs to the editor."""
    level = logging.DEBUG if debug else logging.WARNING
    log_dir = Path(platformdirs.user_log_dir(APP_NAME))
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_dir / f"{APP_NAME}.log", encoding='utf-8')
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root = logging.getLogger()
    root.addHandler(handler)
    root.setLevel(level)


def run_keyboard_test() -> None:
    """Print parsed key events until ESC is pressed."""
    import termios
    from .terminal import TerminalInterface
    from .keyboard import KeyboardHandler, KeyEvent, KeyType

    print("Keyboard test mode: press keys to see parsed events.")
    print("Quit with ESC.")

    term = TerminalInterface()
    term.setup()

    old_settings = None
    try:
        old_settings = termios.tcgetattr(sys.stdin)
        new_settings = list(old_settings)
        new_settings[0] &= ~(termios.IXON | termios.IXOFF)
        new_settings[3] &= ~termios.ISIG
        termios.tcsetattr(sys.stdin, termios.TCSANOW, new_settings)
    except (termios.error, AttributeError, OSError):
        # Keyboard test should keep running even if termios tweaks fail
        pass

    kb = KeyboardHandler(term)

    try:
        while True:
            ev: KeyEvent | None = kb.get_key_event(timeout=None)
            if not ev:
                continue
            if ev.key_type == KeyType.SPECIAL and ev.value == 'escape':
                print("Exiting keyboard test.")
                break
            parts = [f"type={ev.key_type.value}", f"value={ev.value!r}",
                     f"raw='{_escape_bytes(ev.raw)}'"]
            flags = [name for name, on in (('alt', ev.is_alt), ('ctrl', ev.is_ctrl),
                                            ('shift', ev.is_shift)) if on]
            if flags:
                parts.append(f"flags={'+'.join(flags)}")
            print(' '.join(parts))
    finally:
        if old_settings is not None:
            try:
                termios.tcsetattr(sys.stdin, termios.TCSANOW, old_settings)
            except (termios.error, OSError):
                pass
        term.cleanup()


def show_stats(settings) -> None:
    """Full-screen statistics view; any key exits."""
    from .stats import StatsStore
    from .terminal import TerminalInterface

    summary = StatsStore(settings.daily_notes_dir).summary(datetime.date.today())
    term = TerminalInterface()
    term.setup()
    try:
        with term.term.cbreak():
            term.draw_stats_screen(summary)
            term.get_key(timeout=None)
    finally:
        term.cleanup()


def main() -> None:
    # Very small arg parsing: flags first, then an optional filename
    args = sys.argv[1:]
    debug = '--debug' in args
    args = [a for a in args if a != '--debug']

    if args and args[0] in ("--version", "-V"):
        print(get_version_string())
        return

    configure_logging(debug)

    if args and args[0] in ('--keytest', '--keyboard-test'):
        run_keyboard_test()
        return

    from .config import load_settings
    settings = load_settings()

    if args and args[0] == '--stats':
        show_stats(settings)
        return

    # Lazy import to avoid importing UI deps for --version
    from .editor import Editor
    editor = Editor(settings)
    if args:
        editor.load_file(args[0])
    else:
        editor.open_daily_note()
    try:
        editor.run()
    except OSError as e:
        logging.getLogger(__name__).error(f"Terminal error: {e}")
        print(f"river: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":  # pragma: no cover
    main()
