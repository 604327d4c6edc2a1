"""Test wrap-as-you-type line breaking."""

import pytest

from river.buffer import TextBuffer
from river.cursor import CursorViewport
from river.wrap import WordWrapEngine, wrap_text


SENTENCE = ("the quick brown fox jumps over the lazy dog and then runs "
            "all the way home to tell the other foxes what it has done today")


def _type(text, width):
    buffer = TextBuffer()
    cursor = CursorViewport(buffer)
    engine = WordWrapEngine()
    for ch in text:
        buffer.insert_char(cursor.row, cursor.col, ch)
        cursor.col += 1
        engine.apply(buffer, cursor, width, ch)
    return buffer, cursor


def test_limit_never_below_one():
    engine = WordWrapEngine()
    assert engine.limit(80) == 75
    assert engine.limit(3) == 1


@pytest.mark.parametrize("width", [11, 15, 20, 33, 40, 80])
def test_wrap_text_respects_limit_and_keeps_words(width):
    lines = wrap_text(SENTENCE, width)
    limit = width - 5
    assert all(len(line) <= limit for line in lines)
    # Every break consumed exactly one space
    assert " ".join(lines) == SENTENCE


@pytest.mark.parametrize("width", [10, 12, 17, 26])
def test_wrap_text_keeps_every_character(width):
    text = "x" * 7 + " " + SENTENCE + " " + "y" * 40
    lines = wrap_text(text, width)
    assert all(len(line) <= width - 5 for line in lines)
    assert "".join(lines).replace(" ", "") == text.replace(" ", "")


def test_wrap_text_short_line_untouched():
    assert wrap_text("short", 80) == ["short"]


def test_hard_break_without_space():
    lines = wrap_text("x" * 30, 15)
    assert all(len(line) <= 10 for line in lines)
    assert "".join(lines) == "x" * 30


def test_space_outside_lookback_forces_hard_break():
    engine = WordWrapEngine(margin=5, lookback=3)
    text = "ab " + "c" * 20
    lines = wrap_text(text, 15, engine)
    # The only space sits more than three columns back from the limit
    assert lines[0] == "ab " + "c" * 7


def test_typing_moves_word_to_next_line():
    buffer, cursor = _type("aaaa bbbb cccc dddd", 20)
    assert buffer.lines == ["aaaa bbbb cccc", "dddd"]
    assert cursor.position == (1, 4)


def test_typed_space_never_wraps():
    buffer, cursor = _type("aaaa bbbb cccc ", 20)
    assert buffer.lines == ["aaaa bbbb cccc "]
    assert cursor.position == (0, 15)


def test_typing_long_text_cursor_follows():
    buffer, cursor = _type(SENTENCE, 30)
    assert all(len(line) <= 25 for line in buffer.lines)
    assert cursor.row == len(buffer) - 1
    assert cursor.col == buffer.line_length(cursor.row)
    assert " ".join(buffer.lines) == SENTENCE


def test_apply_reports_whether_it_wrapped():
    buffer = TextBuffer(["hello"])
    cursor = CursorViewport(buffer)
    cursor.line_end()
    assert WordWrapEngine().apply(buffer, cursor, 80, "o") is False
    assert WordWrapEngine().apply(buffer, cursor, 8, "o") is True
