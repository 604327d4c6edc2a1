"""Cursor position and scroll offsets over a TextBuffer."""

from .buffer import TextBuffer


class CursorViewport:
    """Cursor (row, col) plus the top-left visible cell of the viewport.

    ``allow_past_end`` controls whether the column may sit one past the last
    character. It is switched off in vim Normal mode, where the cursor rests
    on a character rather than between characters.
    """

    def __init__(self, buffer: TextBuffer, row: int = 0, col: int = 0):
        self.buffer = buffer
        self.row = 0
        self.col = 0
        self.row_offset = 0
        self.col_offset = 0
        self.allow_past_end = True
        self.move_to(row, col)

    @property
    def position(self) -> tuple[int, int]:
        return self.row, self.col

    def max_col(self, row: int) -> int:
        length = self.buffer.line_length(row)
        if not self.allow_past_end and length > 0:
            return length - 1
        return length

    def clamp(self) -> None:
        """Pull the cursor back inside the buffer after an edit."""
        self.row = self.buffer.clamp_row(self.row)
        self.col = max(0, min(self.col, self.max_col(self.row)))

    def move_to(self, row: int, col: int) -> None:
        self.row = row
        self.col = col
        self.clamp()

    def move(self, dx: int, dy: int) -> None:
        """Relative move; a vertical move snaps the column to the target line."""
        self.move_to(self.row + dy, self.col + dx)

    def step_left(self, cross_lines: bool = True) -> None:
        if self.col > 0:
            self.col -= 1
        elif cross_lines and self.row > 0:
            self.row -= 1
            self.col = self.max_col(self.row)

    def step_right(self, cross_lines: bool = True) -> None:
        if self.col < self.max_col(self.row):
            self.col += 1
        elif cross_lines and self.row + 1 < len(self.buffer):
            self.row += 1
            self.col = 0

    def line_start(self) -> None:
        self.col = 0

    def line_end(self) -> None:
        self.col = self.max_col(self.row)

    def recompute_viewport(self, height: int, width: int) -> None:
        """Scroll the minimum amount needed to keep the cursor visible.

        ``height`` and ``width`` are the visible text area, not the whole
        terminal. Calling this again with the same inputs changes nothing.
        """
        height = max(1, height)
        width = max(1, width)

        if self.row < self.row_offset:
            self.row_offset = self.row
        elif self.row >= self.row_offset + height:
            self.row_offset = self.row - height + 1

        if self.col < self.col_offset:
            self.col_offset = self.col
        elif self.col >= self.col_offset + width:
            self.col_offset = self.col - width + 1

    @property
    def screen_position(self) -> tuple[int, int]:
        """Cursor position relative to the viewport."""
        return self.row - self.row_offset, self.col - self.col_offset
