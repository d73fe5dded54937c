"""Map decoded key events to highlight identities.

Every function here is total: an event that matches nothing still gets a
synthetic ``Key[<code>]`` label so it shows up in the log (undecodable
tokens also carry their raw text: ``Key[-1:<token>]``).
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .keyboard import KeyCode, KeyEvent, ModMask, is_ctrl_letter


class ExitKey(Enum):
    """Keys whose repeated presses end the session."""
    ESCAPE = "escape"
    ENTER = "enter"
    SPACE = "space"


NAMED_LABELS = {
    KeyCode.ESCAPE: "Esc",
    KeyCode.ENTER: "Enter",
    KeyCode.TAB: "Tab",
    KeyCode.BACKTAB: "Tab",
    KeyCode.BACKSPACE: "Backspace",
    KeyCode.BACKSPACE2: "Backspace",
    KeyCode.F1: "F1",
    KeyCode.F2: "F2",
    KeyCode.F3: "F3",
    KeyCode.F4: "F4",
    KeyCode.F5: "F5",
    KeyCode.F6: "F6",
    KeyCode.F7: "F7",
    KeyCode.F8: "F8",
    KeyCode.F9: "F9",
    KeyCode.F10: "F10",
    KeyCode.F11: "F11",
    KeyCode.F12: "F12",
    KeyCode.HOME: "Home",
    KeyCode.END: "End",
    KeyCode.INSERT: "Insert",
    KeyCode.DELETE: "Delete",
    KeyCode.PAGE_UP: "PgUp",
    KeyCode.PAGE_DOWN: "PgDn",
    KeyCode.UP: "Up",
    KeyCode.DOWN: "Down",
    KeyCode.LEFT: "Left",
    KeyCode.RIGHT: "Right",
}

# Summary order matches the modifier keys on the bottom row
_MOD_NAMES = (
    (ModMask.CTRL, "Ctrl"),
    (ModMask.ALT, "Alt"),
    (ModMask.SHIFT, "Shift"),
)


@dataclass(frozen=True)
class ClassifiedEvent:
    """A key event resolved to what the keyboard should show."""
    label: str
    code: int
    modifiers: frozenset[str]
    mod_mask: ModMask = ModMask.NONE
    caps_lock: bool = False  # Heuristic, see infer_caps_lock()
    exit_key: Optional[ExitKey] = None

    @property
    def mod_summary(self) -> str:
        return modifier_summary(self.mod_mask)


def label_from_event(event: KeyEvent) -> str:
    """Resolve the semantic label for an event."""
    if event.code in NAMED_LABELS:
        return NAMED_LABELS[event.code]
    if event.code == KeyCode.RUNE and event.rune:
        if event.rune == ' ':
            return "Space"
        return event.rune.upper()
    if is_ctrl_letter(event.code):
        return chr(ord('A') + event.code - KeyCode.CTRL_A)
    if event.code == KeyCode.UNKNOWN and event.raw:
        # Keep undecodable tokens apart from each other in the log
        return f"Key[{int(event.code)}:{event.raw}]"
    return f"Key[{int(event.code)}]"


def modifiers_from_event(event: KeyEvent) -> frozenset[str]:
    """Deterministic modifier set.

    Ctrl is asserted by the modifier bit or by any code in the Ctrl-A..Ctrl-Z
    range, since many terminals only send the latter. Tab, Enter and
    Backspace share that range and light Ctrl as well.
    """
    mods = set()
    if event.modifiers & ModMask.CTRL or is_ctrl_letter(event.code):
        mods.add("Ctrl")
    if event.modifiers & ModMask.ALT:
        mods.add("Alt")
    if event.modifiers & ModMask.SHIFT:
        mods.add("Shift")
    return frozenset(mods)


def infer_caps_lock(event: KeyEvent) -> bool:
    """Best-effort guess that CapsLock is on.

    An uppercase letter arriving without the Shift bit usually means
    CapsLock, but terminals that translate Shift+letter themselves look
    exactly the same. Treat the result as a hint only.
    """
    if event.code != KeyCode.RUNE or not event.rune:
        return False
    r = event.rune
    return r.isalpha() and r.isupper() and not event.modifiers & ModMask.SHIFT


def exit_key_for(event: KeyEvent) -> Optional[ExitKey]:
    """Which exit counter, if any, this event advances."""
    if event.code == KeyCode.ESCAPE:
        return ExitKey.ESCAPE
    if event.code == KeyCode.ENTER:
        return ExitKey.ENTER
    if event.code == KeyCode.RUNE and event.rune == ' ':
        return ExitKey.SPACE
    return None


def modifier_summary(mask: ModMask) -> str:
    """Render a modifier bitmask as 'Ctrl|Alt|Shift' or 'None'."""
    parts = [name for bit, name in _MOD_NAMES if mask & bit]
    if not parts:
        return "None"
    return "|".join(parts)


def classify(event: KeyEvent) -> ClassifiedEvent:
    """Classify a decoded key event."""
    return ClassifiedEvent(
        label=label_from_event(event),
        code=int(event.code),
        modifiers=modifiers_from_event(event),
        mod_mask=ModMask(event.modifiers),
        caps_lock=infer_caps_lock(event),
        exit_key=exit_key_for(event),
    )
