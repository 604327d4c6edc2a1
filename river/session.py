"""Editing state for one open note.

An EditorSession owns the buffer, the cursor and viewport, the mode
machine and the typing tracker. It knows nothing about the terminal: the
Editor feeds it key events and reads back what to draw, and tests drive
it directly.
"""

from typing import Iterable, Optional

from .buffer import TextBuffer
from .config import Settings
from .cursor import CursorViewport
from .keyboard import KeyEvent
from .modes import Mode, ModeStateMachine
from .typing_session import TypingSessionTracker
from .wrap import WordWrapEngine


class EditorSession:
    """Buffer, cursor and mode state plus the flags the main loop polls."""

    def __init__(self, settings: Optional[Settings] = None,
                 lines: Optional[Iterable[str]] = None,
                 tracker: Optional[TypingSessionTracker] = None,
                 wrap: Optional[WordWrapEngine] = None,
                 height: int = 22, width: int = 80):
        self.settings = settings or Settings()
        self.buffer = TextBuffer(lines)
        self.cursor = CursorViewport(self.buffer)
        self.wrap = wrap or WordWrapEngine()
        self.tracker = tracker or TypingSessionTracker(self.settings.typing_timeout_seconds)
        self.modes = ModeStateMachine(self.settings.vim_bindings)
        self.modes.set_mode(self, self.modes.mode)

        self.clipboard: list[str] = []
        self.last_search: Optional[str] = None
        self.status_message: Optional[str] = None
        self.quit_requested = False
        self.save_requested = False
        self.modified = False

        self.height = max(1, height)
        self.width = max(1, width)

    @property
    def mode(self) -> Mode:
        return self.modes.mode

    def resize(self, height: int, width: int) -> None:
        """Set the visible text area and keep the cursor on screen."""
        self.height = max(1, height)
        self.width = max(1, width)
        self.cursor.recompute_viewport(self.height, self.width)

    def handle_key(self, key_event: KeyEvent) -> bool:
        """Route a key through the current mode.

        Returns:
            True if the document was modified
        """
        self.status_message = None
        modified = self.modes.handle(self, key_event)
        if modified:
            self.modified = True
        self.cursor.recompute_viewport(self.height, self.width)
        return modified

    def note_edit(self) -> None:
        self.tracker.record_edit()

    def insert_char(self, ch: str) -> None:
        """Insert at the cursor, advance, and wrap if the line got too long."""
        row, col = self.cursor.position
        self.buffer.insert_char(row, col, ch)
        self.cursor.col = col + 1
        self.wrap.apply(self.buffer, self.cursor, self.width, ch)

    def search(self, forward: bool = True) -> bool:
        """Jump to the next (or previous) match of the last search term."""
        term = self.last_search
        if not term:
            self.status_message = "No previous search pattern"
            return False
        row, col = self.cursor.position
        if forward:
            found = self.buffer.find_next(term, row, col)
        else:
            found = self.buffer.find_prev(term, row, col)
        if found is None:
            self.status_message = f"Pattern not found: {term}"
            return False
        self.cursor.move_to(*found)
        return True

    def word_count(self) -> int:
        return self.buffer.word_count()

    def lines(self) -> list[str]:
        return self.buffer.lines
