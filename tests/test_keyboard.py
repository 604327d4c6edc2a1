"""Test keyboard input handling."""

import pytest
from unittest.mock import MagicMock
from river.keyboard import KeyboardHandler, KeyEvent, KeyType


class MockTerminal:
    """Mock terminal interface for testing."""

    def __init__(self):
        self.term = MagicMock()
        self._key_queue = []

    def get_key(self, timeout=None):
        """Mock get_key that returns from queue."""
        if self._key_queue:
            return self._key_queue.pop(0)
        return None

    def add_key(self, key_str):
        """Add a key to the queue."""
        self._key_queue.append(key_str)


@pytest.fixture
def handler():
    return KeyboardHandler(MockTerminal())


def test_get_key_event_from_terminal():
    terminal = MockTerminal()
    handler = KeyboardHandler(terminal)

    terminal.add_key('a')
    event = handler.get_key_event()
    assert event.key_type == KeyType.REGULAR
    assert event.value == 'a'
    assert event.is_printable

    # Empty queue means timeout
    assert handler.get_key_event(timeout=0) is None


@pytest.mark.parametrize("token,key_type,value", [
    ('<UP>', KeyType.SPECIAL, 'up'),
    ('<DOWN>', KeyType.SPECIAL, 'down'),
    ('<LEFT>', KeyType.SPECIAL, 'left'),
    ('<RIGHT>', KeyType.SPECIAL, 'right'),
    ('<HOME>', KeyType.SPECIAL, 'home'),
    ('<END>', KeyType.SPECIAL, 'end'),
    ('<PAGEUP>', KeyType.SPECIAL, 'page_up'),
    ('<PAGEDOWN>', KeyType.SPECIAL, 'page_down'),
    ('<ESC>', KeyType.SPECIAL, 'escape'),
    ('<TAB>', KeyType.SPECIAL, 'tab'),
    ('<BACKSPACE>', KeyType.SPECIAL, 'backspace'),
    ('<DELETE>', KeyType.SPECIAL, 'delete'),
    ('<F1>', KeyType.SPECIAL, 'f1'),
    ('<Ctrl-j>', KeyType.SPECIAL, 'enter'),
    ('<Ctrl-m>', KeyType.SPECIAL, 'enter'),
    ('<Ctrl-h>', KeyType.SPECIAL, 'backspace'),
    ('<Ctrl-q>', KeyType.CTRL, 'q'),
    ('<Ctrl-s>', KeyType.CTRL, 's'),
    ('<Esc+b>', KeyType.ALT, 'b'),
    ('<Meta-f>', KeyType.ALT, 'f'),
])
def test_curtsies_tokens(handler, token, key_type, value):
    event = handler.parse_key(token)
    assert event.key_type == key_type
    assert event.value == value
    assert event.raw == token


@pytest.mark.parametrize("raw,key_type,value", [
    ('\r', KeyType.SPECIAL, 'enter'),
    ('\n', KeyType.SPECIAL, 'enter'),
    ('\t', KeyType.SPECIAL, 'tab'),
    ('\x7f', KeyType.SPECIAL, 'backspace'),
    ('\x1b', KeyType.SPECIAL, 'escape'),
    ('\x11', KeyType.CTRL, 'q'),
    ('\x13', KeyType.CTRL, 's'),
])
def test_raw_control_characters(handler, raw, key_type, value):
    event = handler.parse_key(raw)
    assert event.key_type == key_type
    assert event.value == value


def test_space_token_is_printable(handler):
    event = handler.parse_key('<SPACE>')
    assert event.key_type == KeyType.REGULAR
    assert event.value == ' '
    assert event.is_printable


def test_angle_bracket_characters(handler):
    assert handler.parse_key('<').value == '<'
    assert handler.parse_key('<>').value == '<>'
    event = handler.parse_key('<->')
    assert event.key_type == KeyType.REGULAR
    assert event.value == '-'


def test_unicode_character_is_printable(handler):
    event = handler.parse_key('é')
    assert event.key_type == KeyType.REGULAR
    assert event.is_printable


def test_modifier_flags(handler):
    event = handler.parse_key('<Ctrl-q>')
    assert event.is_ctrl and not event.is_alt
    event = handler.parse_key('<Esc+b>')
    assert event.is_alt and not event.is_ctrl
    event = handler.parse_key('<Shift-TAB>')
    assert event.value == 'tab'
    assert event.is_shift


def test_special_keys_are_not_printable():
    event = KeyEvent(key_type=KeyType.SPECIAL, value='a', raw='a')
    assert not event.is_printable
    event = KeyEvent(key_type=KeyType.CTRL, value='a', raw='\x01', is_ctrl=True)
    assert not event.is_printable
