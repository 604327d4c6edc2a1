"""Wrap-as-you-type line breaking.

Wrapping here splits the buffer line for real; the break is written to
the saved note like any other newline.
"""

from typing import Optional

from .buffer import TextBuffer
from .constants import EditorConstants
from .cursor import CursorViewport


class WordWrapEngine:
    """Breaks the cursor's line once typing gets close to the right edge."""

    def __init__(self, margin: int = EditorConstants.WRAP_MARGIN,
                 lookback: int = EditorConstants.WRAP_LOOKBACK):
        self.margin = margin
        self.lookback = lookback

    def limit(self, width: int) -> int:
        """Longest line the wrapper leaves behind for a given width."""
        return max(1, width - self.margin)

    def find_break(self, line: str, origin: int) -> tuple[int, int]:
        """Choose where to break ``line`` searching back from ``origin``.

        Returns ``(cut, resume)``: the first line keeps ``line[:cut]`` and
        the next line starts at ``line[resume:]``. A space inside the
        lookback window is dropped (``resume == cut + 1``); without one the
        line is cut mid-word at ``origin``.
        """
        floor = max(0, origin - 1 - self.lookback)
        for i in range(origin - 1, floor, -1):
            if line[i] == " ":
                return i, i + 1
        return origin, origin

    def apply(self, buffer: TextBuffer, cursor: CursorViewport, width: int,
              inserted: Optional[str] = None) -> bool:
        """Wrap after ``inserted`` was typed at the cursor.

        Returns True when at least one break was made. The cursor follows
        the text it was in onto the new line.
        """
        limit = self.limit(width)
        if inserted == " ":
            return False

        wrapped = False
        while cursor.col >= limit:
            line = buffer.line_text(cursor.row)
            origin = min(cursor.col, limit)
            cut, resume = self.find_break(line, origin)
            buffer.split_line(cursor.row, cut)
            if resume > cut:
                buffer.delete_char_at(cursor.row + 1, 0)
            cursor.row += 1
            cursor.col -= resume
            wrapped = True
        return wrapped


def wrap_text(text: str, width: int, engine: Optional[WordWrapEngine] = None) -> list[str]:
    """Run the wrapper over a single line of text typed from start to end."""
    engine = engine or WordWrapEngine()
    buffer = TextBuffer([text])
    cursor = CursorViewport(buffer)
    cursor.line_end()
    engine.apply(buffer, cursor, width)
    return buffer.lines
