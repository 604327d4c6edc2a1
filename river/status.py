"""Status bar content: word count, goal progress and typing minutes."""

from dataclasses import dataclass
from enum import Enum

from .constants import EditorConstants


class StatusTier(Enum):
    """Color class of the status bar."""
    NEUTRAL = "white"
    WARNING = "yellow"
    SUCCESS = "green"


def classify(word_count: int, goal: int = EditorConstants.WORD_GOAL,
             warning: int = EditorConstants.WARNING_WORDS) -> StatusTier:
    if word_count >= goal:
        return StatusTier.SUCCESS
    if word_count >= warning:
        return StatusTier.WARNING
    return StatusTier.NEUTRAL


def goal_percent(word_count: int, goal: int = EditorConstants.WORD_GOAL) -> int:
    """Progress toward the goal in whole percent, capped at 100."""
    if goal <= 0:
        return 100
    return min(100, word_count * 100 // goal)


@dataclass
class StatusLine:
    text: str
    tier: StatusTier


def compose_status(word_count: int, typing_seconds: float, width: int) -> StatusLine:
    """Build the status bar, e.g. `` [====      ]  123 words  24% ·   5 min``.

    The progress bar takes whatever width the counters leave over, but
    never less than MIN_PROGRESS_BAR columns.
    """
    percent = goal_percent(word_count)
    minutes = int(typing_seconds) // 60

    word_str = f"{word_count:>4} words"
    percent_str = f"{percent:>3}%"
    time_str = f"{minutes:>3} min"
    tail = f" {word_str} {percent_str} · {time_str} "

    bar_width = max(EditorConstants.MIN_PROGRESS_BAR, width - len(tail) - 3)
    filled = bar_width * percent // 100
    bar = "=" * filled + " " * (bar_width - filled)

    return StatusLine(text=f" [{bar}]{tail}", tier=classify(word_count))
