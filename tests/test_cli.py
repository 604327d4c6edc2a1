"""Test the command line entry point."""

from unittest.mock import patch, MagicMock

from river.__main__ import main
from river.config import Settings
from river.version import get_version_string


def test_version_flag(capsys):
    with patch('sys.argv', ['river', '--version']):
        main()
    out = capsys.readouterr().out.strip()
    assert out.startswith("river ")
    assert out == get_version_string()


@patch('river.__main__.configure_logging')
@patch('river.config.load_settings', return_value=Settings(daily_notes_dir="/tmp/notes"))
@patch('river.editor.Editor')
def test_opens_given_file(mock_editor_cls, mock_load, mock_logging):
    editor = MagicMock()
    mock_editor_cls.return_value = editor
    with patch('sys.argv', ['river', 'notes.md']):
        main()
    editor.load_file.assert_called_once_with('notes.md')
    editor.open_daily_note.assert_not_called()
    editor.run.assert_called_once()
    mock_logging.assert_called_once_with(False)


@patch('river.__main__.configure_logging')
@patch('river.config.load_settings', return_value=Settings(daily_notes_dir="/tmp/notes"))
@patch('river.editor.Editor')
def test_defaults_to_daily_note(mock_editor_cls, mock_load, mock_logging):
    editor = MagicMock()
    mock_editor_cls.return_value = editor
    with patch('sys.argv', ['river', '--debug']):
        main()
    editor.open_daily_note.assert_called_once()
    editor.load_file.assert_not_called()
    mock_logging.assert_called_once_with(True)


@patch('river.__main__.configure_logging')
@patch('river.__main__.show_stats')
@patch('river.config.load_settings')
def test_stats_flag(mock_load, mock_show_stats, mock_logging):
    settings = Settings(daily_notes_dir="/tmp/notes")
    mock_load.return_value = settings
    with patch('sys.argv', ['river', '--stats']):
        main()
    mock_show_stats.assert_called_once_with(settings)
