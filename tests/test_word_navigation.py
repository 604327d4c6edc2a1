"""Test word motions (vim w/b/e) over the buffer."""

import pytest
from river.buffer import TextBuffer


def test_next_word_start_basic():
    buffer = TextBuffer(["hello world test"])
    assert buffer.next_word_start(0, 0) == (0, 6)
    assert buffer.next_word_start(0, 6) == (0, 12)


def test_next_word_start_multiple_spaces():
    buffer = TextBuffer(["hello    world"])
    assert buffer.next_word_start(0, 0) == (0, 9)


def test_next_word_start_skips_punctuation():
    buffer = TextBuffer(["foo-bar baz"])
    assert buffer.next_word_start(0, 0) == (0, 4)


def test_next_word_start_moves_to_next_line():
    buffer = TextBuffer(["last", "next line"])
    assert buffer.next_word_start(0, 1) == (1, 0)


def test_next_word_start_at_end_of_buffer_stays():
    buffer = TextBuffer(["only word"])
    assert buffer.next_word_start(0, 5) == (0, 5)


def test_prev_word_start():
    buffer = TextBuffer(["hello world test"])
    assert buffer.prev_word_start(0, 12) == (0, 6)
    assert buffer.prev_word_start(0, 8) == (0, 6)
    assert buffer.prev_word_start(0, 6) == (0, 0)


def test_prev_word_start_from_line_start_goes_up():
    buffer = TextBuffer(["above", "below"])
    assert buffer.prev_word_start(1, 0) == (0, 4)
    assert buffer.prev_word_start(0, 0) == (0, 0)


def test_word_end():
    buffer = TextBuffer(["hello world foo"])
    assert buffer.word_end(0, 0) == (0, 4)
    assert buffer.word_end(0, 4) == (0, 10)
    assert buffer.word_end(0, 6) == (0, 10)


def test_word_end_moves_to_next_line():
    buffer = TextBuffer(["end.", "more"])
    assert buffer.word_end(0, 2) == (1, 0)


@pytest.mark.parametrize("row,col", [(-1, -1), (10, 100)])
def test_out_of_range_positions_are_clamped(row, col):
    buffer = TextBuffer(["alpha beta"])
    target = buffer.next_word_start(row, col)
    assert 0 <= target[1] <= buffer.line_length(0)
