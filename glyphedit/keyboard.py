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
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str  # The raw key token


SPECIAL_KEYS = {
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace',
    'delete', 'page_up', 'page_down', 'insert', 'tab',
}


class KeyboardHandler:
    """Turns terminal key tokens into KeyEvents."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Get next key event and map curtsies-style names to KeyEvent."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies key token (or a raw character) into a KeyEvent."""
        key_str = str(key)

        # Curtsies-style key names like '<LEFT>', '<Ctrl-x>', '<Esc+f>'
        if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
            return self._parse_token(key_str)

        # Single-byte ASCII control chars (Ctrl-<letter>)
        if len(key_str) == 1:
            o = ord(key_str)
            if o == 9:
                return KeyEvent(key_type=KeyType.SPECIAL, value='tab', raw=key_str)
            if o in (10, 13):
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
            if o in (8, 127):
                return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z (exclude ESC=27)
                ch = chr(ord('a') + o - 1)
                return KeyEvent(key_type=KeyType.CTRL, value=ch, raw=key_str)

        # Bare ESC
        if key_str == '\x1b':
            return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b')

        # Regular character
        return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)

    def _parse_token(self, key_str: str) -> KeyEvent:
        name = key_str[1:-1]
        # Support both '-' and '+' as modifier separators (e.g., '<Esc+u>')
        lower = name.lower().replace('+', '-')
        parts = lower.split('-')
        base = parts[-1] or '-'
        mods = set(parts[:-1])
        if mods & {'meta', 'esc'}:
            mods.add('alt')
        if base in ('pageup', 'page_up'):
            base = 'page_up'
        elif base in ('pagedown', 'page_down'):
            base = 'page_down'

        if base in ('space', 'spacebar', 'spc') and not mods:
            return KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=' ')
        if 'ctrl' in mods and len(base) == 1:
            # Ctrl-J / Ctrl-M are what terminals send for Enter
            if base in ('j', 'm'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
            if base == 'i':
                return KeyEvent(key_type=KeyType.SPECIAL, value='tab', raw=key_str)
            if base == 'h':
                return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)
            return KeyEvent(key_type=KeyType.CTRL, value=base, raw=key_str)
        if 'alt' in mods:
            return KeyEvent(key_type=KeyType.ALT, value=base, raw=key_str)
        if base in SPECIAL_KEYS:
            return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str)
        if base in ('esc', 'escape'):
            return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b')
        # Fallback: treat unknown token as special
        return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str)
