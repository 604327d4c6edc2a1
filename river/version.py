from __future__ import annotations

import importlib.metadata
import os
import subprocess
from pathlib import Path
from typing import NamedTuple, Optional

from .config import APP_NAME


class BuildInfo(NamedTuple):
    version: str
    commit: Optional[str]
    dirty: bool


def _run_git(args: list[str], cwd: Optional[str] = None) -> Optional[str]:
    try:
        out = subprocess.check_output(["git", *args], cwd=cwd or os.getcwd(),
                                      stderr=subprocess.DEVNULL)
        return out.decode().strip() or None
    except (OSError, subprocess.CalledProcessError):
        return None


def _package_version() -> str:
    try:
        return importlib.metadata.version(APP_NAME)
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0"


def get_build_info() -> BuildInfo:
    """Installed version, plus the git commit when running from a checkout."""
    here = str(Path(__file__).resolve().parent)
    commit = _run_git(["rev-parse", "HEAD"], cwd=here)
    dirty = False
    if commit:
        dirty = bool(_run_git(["status", "--porcelain"], cwd=here))
    return BuildInfo(version=_package_version(), commit=commit, dirty=dirty)


def get_version_string() -> str:
    info = get_build_info()
    if not info.commit:
        return f"{APP_NAME} {info.version}"
    dirty_suffix = "-dirty" if info.dirty else ""
    return f"{APP_NAME} {info.version} ({info.commit[:7]}{dirty_suffix})"
