"""Per-day writing statistics stored next to the daily notes.

Each day gets a small TOML file, ``.stats-YYYY-MM-DD.toml``, holding the
typing seconds and word count for that day. A file that cannot be read
or parsed is treated as if it did not exist.
"""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import toml

from .constants import EditorConstants

logger = logging.getLogger(__name__)


@dataclass
class DailyStats:
    typing_seconds: int = 0
    word_count: int = 0


@dataclass
class StatsSummary:
    """Aggregates shown by ``river --stats``."""
    today_seconds: int = 0
    streak_days: int = 0
    weekly_average_seconds: int = 0
    total_notes: int = 0
    # (day, typing_seconds) for today and the six days before it, newest first
    last_seven: list[tuple[datetime.date, int]] = field(default_factory=list)


def _non_negative_int(value) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return None
    return value


class StatsStore:
    """Reads and writes the per-day statistics files."""

    def __init__(self, notes_dir):
        self.notes_dir = Path(notes_dir)

    def path_for(self, day: datetime.date) -> Path:
        name = (EditorConstants.STATS_PREFIX
                + day.strftime(EditorConstants.DATE_FORMAT)
                + EditorConstants.STATS_SUFFIX)
        return self.notes_dir / name

    def note_path_for(self, day: datetime.date) -> Path:
        return self.notes_dir / (day.strftime(EditorConstants.DATE_FORMAT)
                                 + EditorConstants.NOTE_SUFFIX)

    def load(self, day: datetime.date) -> DailyStats:
        """Load a day's record; missing or corrupt records read as zero."""
        path = self.path_for(day)
        if not path.exists():
            return DailyStats()
        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = toml.load(f)
        except (toml.TomlDecodeError, OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read stats from {path}: {e}")
            return DailyStats()

        seconds = _non_negative_int(data.get("typing_seconds", 0))
        words = _non_negative_int(data.get("word_count", 0))
        if seconds is None or words is None:
            logger.warning(f"Stats file {path} has invalid values, ignoring")
            return DailyStats()
        return DailyStats(typing_seconds=seconds, word_count=words)

    def save(self, day: datetime.date, stats: DailyStats) -> bool:
        """Write a day's record. Returns False if the write failed."""
        path = self.path_for(day)
        try:
            self.notes_dir.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                toml.dump({
                    "typing_seconds": int(stats.typing_seconds),
                    "word_count": int(stats.word_count),
                }, f)
            return True
        except OSError as e:
            logger.warning(f"Could not save stats to {path}: {e}")
            return False

    def summary(self, today: datetime.date,
                days: int = EditorConstants.STATS_HISTORY_DAYS) -> StatsSummary:
        """Summarize the last ``days`` days ending with ``today``."""
        result = StatsSummary()
        streak_open = True
        for days_ago in range(days):
            day = today - datetime.timedelta(days=days_ago)
            seconds = self.load(day).typing_seconds

            if days_ago == 0:
                result.today_seconds = seconds
            if days_ago < 7:
                result.last_seven.append((day, seconds))

            if seconds > 0 and streak_open:
                result.streak_days += 1
            elif days_ago > 0 or seconds > 0:
                # today without writing yet does not break the streak
                streak_open = False

            if self.note_path_for(day).exists():
                result.total_notes += 1

        result.weekly_average_seconds = sum(s for _, s in result.last_seven) // 7
        return result
