"""Fixed keyboard geometry.

The layout is built once at startup: nine rows of key regions laid out
left to right, every key three rows tall. Labels double as highlight
identities, so the two Shift keys (and Ctrl, Alt, Win) light up together.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .constants import VisualizerConstants


@dataclass(frozen=True)
class KeyRegion:
    """A rectangular key on screen."""
    label: str
    x: int
    y: int
    width: int
    height: int

    @property
    def bottom(self) -> int:
        """First row below the key."""
        return self.y + self.height


KEYBOARD_ROWS: tuple[tuple[str, ...], ...] = (
    ("Esc", "F1", "F2", "F3", "F4", "F5", "F6", "F7", "F8", "F9", "F10", "F11", "F12"),
    ("`", "1", "2", "3", "4", "5", "6", "7", "8", "9", "0", "-", "=", "Backspace"),
    ("Tab", "Q", "W", "E", "R", "T", "Y", "U", "I", "O", "P", "[", "]", "\\"),
    ("CapsLock", "A", "S", "D", "F", "G", "H", "J", "K", "L", ";", "'", "Enter"),
    ("Shift", "Z", "X", "C", "V", "B", "N", "M", ",", ".", "/", "Shift"),
    ("Fn", "Ctrl", "Win", "Alt", "Space", "Alt", "Win", "Menu", "Ctrl"),
    # Navigation cluster
    ("Insert", "Home", "PgUp"),
    ("Delete", "End", "PgDn"),
    ("Left", "Down", "Right", "Up"),
)


def _layout_row(labels: Sequence[str], y: int) -> list[KeyRegion]:
    row = []
    x = 0
    for label in labels:
        width = len(label) + VisualizerConstants.KEY_PADDING
        row.append(KeyRegion(label, x, y, width, VisualizerConstants.KEY_HEIGHT))
        x += width + VisualizerConstants.KEY_GAP
    return row


def build_layout() -> list[KeyRegion]:
    """Build the key regions in row-then-left-to-right order."""
    regions: list[KeyRegion] = []
    for index, labels in enumerate(KEYBOARD_ROWS):
        regions.extend(_layout_row(labels, index * VisualizerConstants.ROW_PITCH))
    return regions


def separator_row(layout: Sequence[KeyRegion]) -> int:
    """Row of the horizontal rule drawn right below the keyboard."""
    return layout[-1].bottom


def log_capacity(layout: Sequence[KeyRegion], height: int) -> int:
    """Number of log rows that fit below the separator.

    May be zero or negative on short terminals; callers treat that as
    "no room" rather than an error.
    """
    return height - separator_row(layout) - 1
