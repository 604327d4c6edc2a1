"""Terminal interface using Blessed for display and Curtsies for input."""

import blessed
from typing import Optional
import sys
import select

from .constants import EditorConstants
from .status import StatusLine


class TerminalInterface:
    """Handles terminal I/O using Blessed.

    The bottom two rows are reserved: the status bar, then the command row
    (mode indicator, command line or a message).
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._curtsies_active: bool = False
        # Virtual screen state for minimal updates
        self._last_lines: list[str] | None = None
        self._last_status: str | None = None
        self._last_command: str | None = None
        self._last_width: int | None = None

    def setup(self):
        """Enter fullscreen mode and prepare terminal."""
        print(self.term.enter_fullscreen)
        print(self.term.clear)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            try:
                from curtsies import Input  # type: ignore
                # Enter raw mode immediately so reads work
                self._curtsies_input = Input(keynames='curtsies')  # type: ignore
                self._curtsies_input.__enter__()
                self._curtsies_active = True
            except Exception:
                # Without a usable tty (CI, pipes) the editor runs with no input
                self._curtsies_input = None
                self._curtsies_active = False

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self.is_fullscreen:
            print(self.term.normal + self.term.exit_fullscreen)
            print(self.term.normal_cursor)
            self.is_fullscreen = False
        if self._curtsies_input is not None:
            try:
                if self._curtsies_active:
                    self._curtsies_input.__exit__(None, None, None)  # type: ignore
            except Exception:
                # Teardown must not mask the error that ended the session
                pass
            finally:
                self._curtsies_input = None
                self._curtsies_active = False

    def invalidate_frame(self) -> None:
        """Forget the cached frame so the next update repaints everything."""
        self._last_lines = None
        self._last_status = None
        self._last_command = None
        self._last_width = None

    def update_frame(
        self,
        lines: list[str],
        cursor_y: int,
        cursor_x: int,
        status: StatusLine,
        command_text: str = "",
        command_cursor: bool = False,
    ) -> None:
        """Diff against last frame and write only changes.

        ``lines`` are the visible buffer rows; rows past the end of the
        buffer are drawn as ``~``. Falls back to a full clear on first
        paint or when geometry changes.
        """
        width = self.width
        rows = self.height

        need_full_clear = (
            self._last_lines is None
            or self._last_width != width
            or len(self._last_lines) != rows
        )
        if need_full_clear:
            print(self.term.home + self.term.clear, end='')
            self._last_lines = ["" for _ in range(rows)]
            self._last_status = None
            self._last_command = None
            self._last_width = width

        for y in range(rows):
            text = lines[y] if y < len(lines) else "~"
            new_disp = text[:width].ljust(width)
            if new_disp != self._last_lines[y]:
                print(self.term.move(y, 0) + new_disp, end='')
                self._last_lines[y] = new_disp

        status_text = status.text[:width].ljust(width)
        status_key = status.tier.value + status_text
        if status_key != (self._last_status or ""):
            color = getattr(self.term, status.tier.value)
            print(self.term.move(rows, 0) + color + status_text + self.term.normal, end='')
            self._last_status = status_key

        command_row = command_text[:width].ljust(width)
        if command_row != (self._last_command or ""):
            print(self.term.move(rows + 1, 0) + command_row, end='')
            self._last_command = command_row

        if command_cursor:
            print(self.term.move(rows + 1, min(len(command_text), width - 1)) + self.term.normal_cursor,
                  end='', flush=True)
        else:
            print(self.term.move(cursor_y, cursor_x) + self.term.normal_cursor, end='', flush=True)

    def draw_stats_screen(self, summary) -> list[str]:
        """Draw the writing statistics report full screen; returns its lines."""
        lines = format_stats_report(summary)
        lines.append("  Press any key to exit")
        print(self.term.home + self.term.clear, end='')
        for y, line in enumerate(lines[:self.term.height]):
            print(self.term.move(y, 0) + line[:self.width], end='')
        print('', end='', flush=True)
        return lines

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies key name as a string, or None on timeout.
        """
        if self._curtsies_input is not None:
            if timeout is None:
                evt = next(self._curtsies_input)  # blocks
                return str(evt)
            t = 0.0 if timeout == 0 else float(timeout)
            r, _, _ = select.select([sys.stdin], [], [], t)
            if not r:
                return None
            evt = next(self._curtsies_input)
            return str(evt)
        return None

    @property
    def width(self):
        """Terminal width in columns."""
        return max(1, self.term.width)

    @property
    def height(self):
        """Rows available for text (excluding status and command rows)."""
        return max(1, self.term.height - EditorConstants.STATUS_ROWS)


def format_stats_report(summary) -> list[str]:
    """Lines of the ``--stats`` report for a StatsSummary."""
    lines = [
        "",
        "  Writing Statistics",
        "  ==================",
        "",
        f"  Today:          {int(summary.today_seconds) // 60} min",
        f"  Current streak: {summary.streak_days} day{'s' if summary.streak_days != 1 else ''}",
        f"  Weekly average: {int(summary.weekly_average_seconds) // 60} min/day",
        f"  Total notes:    {summary.total_notes}",
        "",
        "  Last 7 days:",
    ]
    longest = max((seconds for _, seconds in summary.last_seven), default=0)
    for day, seconds in reversed(summary.last_seven):
        minutes = int(seconds) // 60
        bar_len = 0 if longest <= 0 else round(30 * seconds / longest)
        lines.append(f"  {day.strftime('%a %m/%d')}  {'█' * bar_len:<30} {minutes:>4} min")
    lines.append("")
    return lines
