"""Debounced auto-save.

Every edit re-arms a single-shot timer; the note is written once the
timer has run out, i.e. after a short pause in typing.
"""

import time
from typing import Optional

from .constants import EditorConstants


class AutoSaveTimer:
    """Resettable single-shot timer polled from the main loop."""

    def __init__(self, delay: float = EditorConstants.AUTOSAVE_DELAY):
        self.delay = delay
        self._deadline: Optional[float] = None

    @property
    def pending(self) -> bool:
        return self._deadline is not None

    def arm(self, now: Optional[float] = None) -> None:
        """Start or restart the countdown."""
        now = time.monotonic() if now is None else now
        self._deadline = now + self.delay

    def cancel(self) -> None:
        self._deadline = None

    def due(self, now: Optional[float] = None) -> bool:
        """True once the countdown has expired. Firing disarms the timer."""
        if self._deadline is None:
            return False
        now = time.monotonic() if now is None else now
        if now < self._deadline:
            return False
        self._deadline = None
        return True
