"""Line-oriented text buffer for the journal editor.

Lines are plain Python strings, so every index is a code point index and
multi-byte characters count as one column. All positions passed in are
clamped to the buffer instead of raising; the editor is interactive and
a stray index must never take the session down.
"""

from typing import Iterable, Optional


class TextBuffer:
    """Ordered list of lines that is never empty."""

    def __init__(self, lines: Optional[Iterable[str]] = None):
        self._lines: list[str] = list(lines) if lines is not None else [""]
        if not self._lines:
            self._lines = [""]

    def __len__(self) -> int:
        return len(self._lines)

    @property
    def lines(self) -> list[str]:
        """Copy of the current lines."""
        return list(self._lines)

    def text(self) -> str:
        return "\n".join(self._lines)

    # --- clamping helpers ---

    def clamp_row(self, row: int) -> int:
        return max(0, min(row, len(self._lines) - 1))

    def clamp_col(self, row: int, col: int) -> int:
        return max(0, min(col, len(self._lines[self.clamp_row(row)])))

    def _clamp(self, row: int, col: int) -> tuple[int, int]:
        row = self.clamp_row(row)
        return row, self.clamp_col(row, col)

    # --- queries ---

    def line_text(self, row: int) -> str:
        return self._lines[self.clamp_row(row)]

    def line_length(self, row: int) -> int:
        return len(self._lines[self.clamp_row(row)])

    def word_count(self) -> int:
        """Count maximal runs of alphanumeric characters.

        A word never spans a line break. Punctuation, including hyphens
        and apostrophes, separates words.
        """
        count = 0
        for line in self._lines:
            in_word = False
            for ch in line:
                if ch.isalnum():
                    if not in_word:
                        count += 1
                        in_word = True
                else:
                    in_word = False
        return count

    # --- mutations ---

    def insert_char(self, row: int, col: int, ch: str) -> None:
        row, col = self._clamp(row, col)
        line = self._lines[row]
        self._lines[row] = line[:col] + ch + line[col:]

    def delete_char_before(self, row: int, col: int) -> bool:
        """Delete the character left of (row, col). No-op at column 0."""
        row, col = self._clamp(row, col)
        if col == 0:
            return False
        line = self._lines[row]
        self._lines[row] = line[:col - 1] + line[col:]
        return True

    def delete_char_at(self, row: int, col: int) -> Optional[str]:
        """Delete and return the character under (row, col), if any."""
        row, col = self._clamp(row, col)
        line = self._lines[row]
        if col >= len(line):
            return None
        self._lines[row] = line[:col] + line[col + 1:]
        return line[col]

    def split_line(self, row: int, col: int) -> None:
        """Break line ``row`` in two at ``col``."""
        row, col = self._clamp(row, col)
        line = self._lines[row]
        self._lines[row:row + 1] = [line[:col], line[col:]]

    def join_line(self, row: int) -> int:
        """Append line ``row + 1`` to line ``row``.

        Returns the column where the two lines meet, or -1 when ``row``
        is the last line and there is nothing to join.
        """
        row = self.clamp_row(row)
        if row + 1 >= len(self._lines):
            return -1
        join_col = len(self._lines[row])
        self._lines[row:row + 2] = [self._lines[row] + self._lines[row + 1]]
        return join_col

    def insert_line(self, row: int, content: str = "") -> int:
        """Insert a new line before ``row`` (``len(self)`` appends).

        Returns the row the line ended up at.
        """
        row = max(0, min(row, len(self._lines)))
        self._lines.insert(row, content)
        return row

    def delete_line(self, row: int) -> str:
        """Remove line ``row`` and return its content.

        The last remaining line is cleared instead of removed.
        """
        row = self.clamp_row(row)
        removed = self._lines[row]
        if len(self._lines) > 1:
            del self._lines[row]
        else:
            self._lines[0] = ""
        return removed

    # --- word motions ---

    def next_word_start(self, row: int, col: int) -> tuple[int, int]:
        """Start of the next word, moving to the next line when none is left."""
        row, col = self._clamp(row, col)
        line = self._lines[row]
        x = col
        while x < len(line) and line[x].isalnum():
            x += 1
        while x < len(line) and not line[x].isalnum():
            x += 1
        if x < len(line):
            return row, x
        if row + 1 < len(self._lines):
            return row + 1, 0
        return row, col

    def prev_word_start(self, row: int, col: int) -> tuple[int, int]:
        """Start of the current or previous word."""
        row, col = self._clamp(row, col)
        if col == 0:
            if row > 0:
                return row - 1, max(0, len(self._lines[row - 1]) - 1)
            return row, 0
        line = self._lines[row]
        x = col - 1
        while x > 0 and not line[x].isalnum():
            x -= 1
        while x > 0 and line[x - 1].isalnum():
            x -= 1
        return row, x

    def word_end(self, row: int, col: int) -> tuple[int, int]:
        """Last character of the current or next word."""
        row, col = self._clamp(row, col)
        line = self._lines[row]
        x = col + 1
        while x < len(line) and not line[x].isalnum():
            x += 1
        if x >= len(line):
            if row + 1 < len(self._lines):
                return row + 1, 0
            return row, col
        while x + 1 < len(line) and line[x + 1].isalnum():
            x += 1
        return row, x

    # --- search ---

    def find_next(self, term: str, row: int, col: int) -> Optional[tuple[int, int]]:
        """Find ``term`` after (row, col), wrapping around to the top."""
        if not term:
            return None
        row, col = self._clamp(row, col)
        for y in range(row, len(self._lines)):
            start = col + 1 if y == row else 0
            x = self._lines[y].find(term, start)
            if x != -1:
                return y, x
        for y in range(0, row + 1):
            x = self._lines[y].find(term)
            if x != -1 and (y < row or x <= col):
                return y, x
        return None

    def find_prev(self, term: str, row: int, col: int) -> Optional[tuple[int, int]]:
        """Find ``term`` before (row, col). Does not wrap."""
        if not term:
            return None
        row, col = self._clamp(row, col)
        for y in range(row, -1, -1):
            line = self._lines[y]
            if y == row:
                # match must start strictly before col
                x = line.rfind(term, 0, col - 1 + len(term)) if col > 0 else -1
            else:
                x = line.rfind(term)
            if x != -1:
                return y, x
        return None
