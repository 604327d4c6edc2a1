"""Keyboard input handling using curtsies-style tokens."""

from typing import Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    ALT = "alt"
    CTRL = "ctrl"
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """A parsed key press: a tagged key code plus modifier flags."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The token as delivered by the terminal layer
    is_alt: bool = False
    is_ctrl: bool = False
    is_shift: bool = False

    @property
    def is_printable(self) -> bool:
        return (self.key_type == KeyType.REGULAR and len(self.value) == 1
                and self.value.isprintable())


SPECIAL_KEYS = {
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace',
    'delete', 'page_up', 'page_down', 'insert', 'tab', 'escape',
    'f1', 'f2', 'f3', 'f4', 'f5', 'f6', 'f7', 'f8', 'f9', 'f10', 'f11', 'f12',
}

_ALIASES = {
    'pageup': 'page_up',
    'pagedown': 'page_down',
    'esc': 'escape',
    'return': 'enter',
    'del': 'delete',
    'space': ' ',
    'spacebar': ' ',
    'spc': ' ',
}


class KeyboardHandler:
    """Turns terminal key tokens into KeyEvents."""

    def __init__(self, terminal_interface):
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Get the next key event, or None when the timeout expires."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies key name (e.g. '<Ctrl-q>', '<UP>') or a raw character."""
        key_str = str(key)

        if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
            return self._parse_token(key_str)

        if len(key_str) == 1:
            o = ord(key_str)
            if key_str in ('\n', '\r'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
            if key_str == '\t':
                return KeyEvent(key_type=KeyType.SPECIAL, value='tab', raw=key_str)
            if key_str in ('\x7f', '\x08'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)
            if key_str == '\x1b':
                return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw=key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z
                ch = chr(ord('a') + o - 1)
                return KeyEvent(key_type=KeyType.CTRL, value=ch, raw=key_str, is_ctrl=True)

        return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)

    def _parse_token(self, key_str: str) -> KeyEvent:
        name = key_str[1:-1]
        # Support both '-' and '+' as modifier separators (e.g., '<Esc+u>')
        parts = name.replace('+', '-').split('-')
        if parts[-1] == '' and len(parts) > 1:
            # '<Ctrl-->' style tokens where the key itself is '-'
            parts = parts[:-2] + ['-']
        mods = {p.lower() for p in parts[:-1]}
        base = parts[-1]
        lower = base.lower()
        if 'meta' in mods or 'esc' in mods:
            mods.add('alt')

        base = _ALIASES.get(lower, base if len(base) == 1 else lower)

        if 'ctrl' in mods and len(base) == 1:
            letter = base.lower()
            if letter in ('j', 'm'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
            if letter == 'i':
                return KeyEvent(key_type=KeyType.SPECIAL, value='tab', raw=key_str)
            if letter == 'h':
                return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)
            return KeyEvent(key_type=KeyType.CTRL, value=letter, raw=key_str, is_ctrl=True)
        if 'alt' in mods:
            return KeyEvent(key_type=KeyType.ALT, value=base, raw=key_str, is_alt=True)
        if base == ' ':
            return KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=' ')
        if base in SPECIAL_KEYS:
            return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str,
                            is_shift='shift' in mods)
        if len(base) == 1:
            return KeyEvent(key_type=KeyType.REGULAR, value=base, raw=key_str)
        # Unknown token; nothing binds to it
        return KeyEvent(key_type=KeyType.SPECIAL, value=lower, raw=key_str)
