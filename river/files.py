"""Loading and saving notes, and locating today's daily note."""

from __future__ import annotations

import datetime
import logging
import os
from pathlib import Path

from .constants import EditorConstants

logger = logging.getLogger(__name__)


def load_lines(path) -> list[str]:
    """Read a file into a list of lines.

    A missing or empty file yields a single empty line. A trailing newline
    does not produce an extra empty line, and CRLF endings are accepted.

    Raises:
        OSError: the file exists but could not be read.
        UnicodeDecodeError: the file is not valid UTF-8.
    """
    try:
        with open(path, 'r', encoding='utf-8', newline='') as f:
            content = f.read()
    except FileNotFoundError:
        return [""]

    lines = content.split('\n')
    if lines and lines[-1] == "":
        lines.pop()
    lines = [line[:-1] if line.endswith('\r') else line for line in lines]
    return lines or [""]


def save_lines(path, lines: list[str]) -> None:
    """Overwrite ``path`` with the lines joined by newlines.

    This is a direct overwrite, not an atomic replace; a crash mid-write
    can leave a truncated file.

    Raises:
        OSError: the file could not be written.
    """
    with open(path, 'w', encoding='utf-8', newline='\n') as f:
        f.write('\n'.join(lines))


def daily_note_path(notes_dir, day: datetime.date) -> Path:
    """Path of the note for ``day``, creating the notes directory if needed."""
    notes_dir = Path(os.path.expanduser(str(notes_dir)))
    notes_dir.mkdir(parents=True, exist_ok=True)
    return notes_dir / (day.strftime(EditorConstants.DATE_FORMAT) + EditorConstants.NOTE_SUFFIX)


def daily_note_header(day: datetime.date) -> str:
    return f"# {day.strftime(EditorConstants.HEADER_DATE_FORMAT)}\n\n"


def ensure_daily_note(notes_dir, day: datetime.date) -> Path:
    """Return today's note path, creating the note with a date header if absent."""
    path = daily_note_path(notes_dir, day)
    if not path.exists():
        logger.info(f"Creating daily note {path}")
        with open(path, 'w', encoding='utf-8') as f:
            f.write(daily_note_header(day))
    return path
