"""Test note loading/saving and daily note creation."""

import datetime

import pytest

from river.files import (daily_note_header, daily_note_path, ensure_daily_note,
                         load_lines, save_lines)

DAY = datetime.date(2026, 10, 19)


def test_missing_file_is_one_empty_line(tmp_path):
    assert load_lines(tmp_path / "nope.md") == [""]


def test_empty_file_is_one_empty_line(tmp_path):
    path = tmp_path / "empty.md"
    path.write_text("", encoding='utf-8')
    assert load_lines(path) == [""]


@pytest.mark.parametrize("content,expected", [
    ("one", ["one"]),
    ("one\ntwo\n", ["one", "two"]),
    ("one\r\ntwo\r\n", ["one", "two"]),
    ("one\n\n", ["one", ""]),
    ("ünïcödé\n", ["ünïcödé"]),
])
def test_load_lines(tmp_path, content, expected):
    path = tmp_path / "note.md"
    path.write_bytes(content.encode('utf-8'))
    assert load_lines(path) == expected


def test_load_invalid_utf8_raises(tmp_path):
    path = tmp_path / "bad.md"
    path.write_bytes(b"\xff\xfe\xfa")
    with pytest.raises(UnicodeDecodeError):
        load_lines(path)


def test_save_lines_overwrites(tmp_path):
    path = tmp_path / "note.md"
    path.write_text("old content that is longer", encoding='utf-8')
    save_lines(path, ["first", "", "third"])
    assert path.read_bytes() == "first\n\nthird".encode('utf-8')


def test_save_lines_missing_directory_raises(tmp_path):
    with pytest.raises(OSError):
        save_lines(tmp_path / "missing" / "note.md", ["x"])


def test_daily_note_path_creates_directory(tmp_path):
    notes = tmp_path / "DailyNotes"
    path = daily_note_path(notes, DAY)
    assert path == notes / "2026-10-19.md"
    assert notes.is_dir()


def test_daily_note_header():
    assert daily_note_header(DAY) == "# Monday, October 19, 2026\n\n"


def test_ensure_daily_note_creates_with_header(tmp_path):
    path = ensure_daily_note(tmp_path, DAY)
    assert path.read_text(encoding='utf-8') == "# Monday, October 19, 2026\n\n"


def test_ensure_daily_note_keeps_existing(tmp_path):
    existing = tmp_path / "2026-10-19.md"
    existing.write_text("already written", encoding='utf-8')
    assert ensure_daily_note(tmp_path, DAY) == existing
    assert existing.read_text(encoding='utf-8') == "already written"
