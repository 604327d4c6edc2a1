"""Active-writing time derived from the stream of edits.

Time spent with the editor open but idle does not count. A session opens
on an edit and stays open while consecutive edits arrive within the
configured timeout. Spans are folded into the day's total at every
checkpoint tick so a crash loses at most one tick of progress, and each
span is folded exactly once.
"""

from __future__ import annotations

import datetime
import logging
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class TypingSessionTracker:
    """Accumulates typing seconds for one calendar day."""

    def __init__(
        self,
        timeout_seconds: float,
        accumulated: float = 0.0,
        day: Optional[datetime.date] = None,
        clock: Callable[[], float] = time.monotonic,
        today: Callable[[], datetime.date] = datetime.date.today,
        on_rollover: Optional[Callable[[datetime.date, float], None]] = None,
    ):
        self.timeout = float(timeout_seconds)
        self.accumulated = float(accumulated)
        self._clock = clock
        self._today = today
        self.day = day or today()
        self.on_rollover = on_rollover
        self.session_start: Optional[float] = None
        self.last_activity: Optional[float] = None

    @property
    def is_open(self) -> bool:
        return self.session_start is not None

    def _now(self, now: Optional[float]) -> float:
        return self._clock() if now is None else now

    def _fold(self) -> None:
        """Add the unfolded part of the open session to the total."""
        if self.session_start is None or self.last_activity is None:
            return
        self.accumulated += max(0.0, self.last_activity - self.session_start)
        self.session_start = self.last_activity

    def _close(self) -> None:
        self._fold()
        if self.session_start is not None:
            logger.debug(f"Typing session closed, {self.accumulated:.0f}s today")
        self.session_start = None

    def check_rollover(self) -> bool:
        """Start a fresh day if the calendar date has changed.

        The finished day's total is handed to ``on_rollover`` before the
        counter is reset.
        """
        today = self._today()
        if today == self.day:
            return False
        self._close()
        finished_day, finished_seconds = self.day, self.accumulated
        logger.debug(f"Day rolled over from {finished_day} to {today}")
        if self.on_rollover is not None:
            self.on_rollover(finished_day, finished_seconds)
        self.day = today
        self.accumulated = 0.0
        self.last_activity = None
        return True

    def record_edit(self, now: Optional[float] = None) -> None:
        """Note a buffer-mutating key press."""
        now = self._now(now)
        self.check_rollover()
        if (self.session_start is None or self.last_activity is None
                or now - self.last_activity > self.timeout):
            self._close()
            self.session_start = now
            logger.debug("Typing session opened")
        self.last_activity = now

    def checkpoint(self, now: Optional[float] = None) -> None:
        """Fold progress so far; close the session once it has gone idle."""
        now = self._now(now)
        self.check_rollover()
        if self.session_start is None or self.last_activity is None:
            return
        if now - self.last_activity <= self.timeout:
            self._fold()
        else:
            self._close()

    def close(self, now: Optional[float] = None) -> None:
        """Fold the final span at shutdown."""
        self.checkpoint(now)
        self._close()

    def total_seconds(self) -> float:
        """Today's typing time including the open session's pending span."""
        total = self.accumulated
        if self.session_start is not None and self.last_activity is not None:
            total += max(0.0, self.last_activity - self.session_start)
        return total
