"""Keyboard input handling using curtsies-style tokens."""

import logging
from dataclasses import dataclass
from enum import IntEnum, IntFlag
from typing import Optional

logger = logging.getLogger(__name__)


class KeyCode(IntEnum):
    """Numeric key codes.

    Control keys keep their ASCII values; printable characters share
    RUNE; named keys live above 256.
    """
    NUL = 0
    CTRL_A = 1
    BACKSPACE = 8  # Ctrl-H
    TAB = 9  # Ctrl-I
    ENTER = 13  # Ctrl-M
    CTRL_Z = 26
    ESCAPE = 27
    BACKSPACE2 = 127  # DEL
    RUNE = 256
    UP = 257
    DOWN = 258
    RIGHT = 259
    LEFT = 260
    PAGE_UP = 266
    PAGE_DOWN = 267
    HOME = 268
    END = 269
    INSERT = 270
    DELETE = 271
    BACKTAB = 278
    F1 = 279
    F2 = 280
    F3 = 281
    F4 = 282
    F5 = 283
    F6 = 284
    F7 = 285
    F8 = 286
    F9 = 287
    F10 = 288
    F11 = 289
    F12 = 290
    UNKNOWN = -1


class ModMask(IntFlag):
    """Modifier bits reported alongside a key."""
    NONE = 0
    SHIFT = 1
    CTRL = 2
    ALT = 4


@dataclass(frozen=True)
class KeyEvent:
    """Represents a decoded keyboard event."""
    code: int
    rune: Optional[str] = None  # Set only when code is KeyCode.RUNE
    modifiers: ModMask = ModMask.NONE
    raw: str = ""  # The token as received from curtsies


# Base key names as they appear inside '<...>' tokens
NAMED_KEYS = {
    'esc': KeyCode.ESCAPE,
    'escape': KeyCode.ESCAPE,
    'enter': KeyCode.ENTER,
    'return': KeyCode.ENTER,
    'padenter': KeyCode.ENTER,
    'tab': KeyCode.TAB,
    'backspace': KeyCode.BACKSPACE2,
    'up': KeyCode.UP,
    'down': KeyCode.DOWN,
    'left': KeyCode.LEFT,
    'right': KeyCode.RIGHT,
    'home': KeyCode.HOME,
    'end': KeyCode.END,
    'insert': KeyCode.INSERT,
    'delete': KeyCode.DELETE,
    'pageup': KeyCode.PAGE_UP,
    'page_up': KeyCode.PAGE_UP,
    'pgup': KeyCode.PAGE_UP,
    'pagedown': KeyCode.PAGE_DOWN,
    'page_down': KeyCode.PAGE_DOWN,
    'pgdn': KeyCode.PAGE_DOWN,
}

# Ctrl-<letter> codes that terminals share with named keys
CTRL_LETTER_ALIASES = {
    'h': KeyCode.BACKSPACE,
    'i': KeyCode.TAB,
    'j': KeyCode.ENTER,
    'm': KeyCode.ENTER,
}

# Ctrl + symbol control codes
CTRL_SYMBOLS = {
    'space': KeyCode.NUL,
    '@': KeyCode.NUL,
    '[': KeyCode.ESCAPE,
    '\\': 28,
    ']': 29,
    '^': 30,
    '_': 31,
}


def function_key_code(n: int) -> int:
    """Code for function key Fn (F13 and up continue past F12)."""
    return KeyCode.F1 + n - 1


def is_ctrl_letter(code: int) -> bool:
    """True for the compact Ctrl-A..Ctrl-Z control codes."""
    return KeyCode.CTRL_A <= code <= KeyCode.CTRL_Z


class KeyboardHandler:
    """Handles keyboard input using curtsies-style key names."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Get next key token from the terminal and decode it."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies token (or bare character) into a KeyEvent.

        Args:
            key: Token such as 'a', '<SPACE>', '<Ctrl-a>' or '<Esc+UP>'

        Returns:
            Decoded KeyEvent; undecodable tokens get KeyCode.UNKNOWN
        """
        key_str = str(key)

        if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
            return self._parse_token(key_str)

        if len(key_str) == 1:
            return self._parse_char(key_str)

        logger.debug("Unrecognized key token %r", key_str)
        return KeyEvent(code=KeyCode.UNKNOWN, raw=key_str)

    def _parse_char(self, ch: str) -> KeyEvent:
        o = ord(ch)
        if ch in ('\r', '\n'):
            return KeyEvent(code=KeyCode.ENTER, raw=ch)
        if ch in ('\t', '\x08', '\x1b', '\x7f') or o == 0:
            return KeyEvent(code=o, raw=ch)
        # Ctrl-A .. Ctrl-Z arrive as bare control codes without a modifier bit
        if 1 <= o <= 26 or 28 <= o <= 31:
            return KeyEvent(code=o, raw=ch)
        return KeyEvent(code=KeyCode.RUNE, rune=ch, raw=ch)

    def _parse_token(self, key_str: str) -> KeyEvent:
        name = key_str[1:-1]
        # A separator followed by '+' or '-' is that key itself ('<Esc++>', '<Ctrl-->')
        if len(name) > 2 and name[-1] in '+-' and name[-2] in '+-':
            prefix, base = name[:-2], name[-1]
        else:
            prefix, _, base = name.replace('+', '-').rpartition('-')
        # Support both '-' and '+' as modifier separators (e.g., '<Esc+u>')
        mods = {p.lower() for p in prefix.replace('+', '-').split('-') if p}
        if not base:
            logger.debug("Unrecognized key token %r", key_str)
            return KeyEvent(code=KeyCode.UNKNOWN, raw=key_str)

        mask = ModMask.NONE
        if 'ctrl' in mods:
            mask |= ModMask.CTRL
        if mods & {'alt', 'meta', 'esc'}:
            mask |= ModMask.ALT
        if 'shift' in mods:
            mask |= ModMask.SHIFT

        lower = base.lower()

        if lower in ('space', 'spacebar', 'spc'):
            if mask & ModMask.CTRL:
                return KeyEvent(code=KeyCode.NUL, modifiers=mask, raw=key_str)
            return KeyEvent(code=KeyCode.RUNE, rune=' ', modifiers=mask, raw=key_str)

        # Ctrl-modified letters are reported as control codes
        if len(base) == 1 and mask & ModMask.CTRL:
            rest = mask & (ModMask.ALT | ModMask.SHIFT)
            if lower.isascii() and lower.isalpha():
                if lower in CTRL_LETTER_ALIASES:
                    return KeyEvent(code=CTRL_LETTER_ALIASES[lower], modifiers=rest, raw=key_str)
                return KeyEvent(code=ord(lower) - ord('a') + 1, modifiers=rest, raw=key_str)
            if base in CTRL_SYMBOLS:
                return KeyEvent(code=CTRL_SYMBOLS[base], modifiers=rest, raw=key_str)

        if len(base) == 1:
            return KeyEvent(code=KeyCode.RUNE, rune=base, modifiers=mask, raw=key_str)

        if lower == 'tab' and mask & ModMask.SHIFT:
            return KeyEvent(code=KeyCode.BACKTAB, modifiers=mask, raw=key_str)
        if lower in NAMED_KEYS:
            return KeyEvent(code=NAMED_KEYS[lower], modifiers=mask, raw=key_str)
        if lower[0] == 'f' and lower[1:].isdigit() and int(lower[1:]) >= 1:
            return KeyEvent(code=function_key_code(int(lower[1:])), modifiers=mask, raw=key_str)

        logger.debug("Unrecognized key token %r", key_str)
        return KeyEvent(code=KeyCode.UNKNOWN, modifiers=mask, raw=key_str)
