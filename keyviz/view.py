"""Paint the keyboard and event log onto a terminal surface."""

from __future__ import annotations

from typing import AbstractSet, Iterable, Sequence

from .constants import VisualizerConstants
from .layout import KeyRegion, separator_row
from .terminal import Style


def draw_key(surface, key: KeyRegion, style: Style) -> None:
    """Fill a key's rectangle and centre its label on the top row."""
    for dx in range(key.width):
        for dy in range(key.height):
            surface.set_cell(key.x + dx, key.y + dy, ' ', style)
    start = key.x + (key.width - len(key.label)) // 2
    for i, ch in enumerate(key.label):
        surface.set_cell(start + i, key.y, ch, style)


def draw_text(surface, x: int, y: int, text: str, width: int) -> None:
    """Write text on one row, dropping characters past ``width``."""
    for i, ch in enumerate(text):
        if x + i >= width:
            break
        surface.set_cell(x + i, y, ch, Style.DEFAULT)


def render(surface, layout: Sequence[KeyRegion], pressed: AbstractSet[str],
           log: Iterable) -> None:
    """Repaint the whole frame from the given state.

    ``log`` yields LogEntry objects. The frame is not committed; call
    ``surface.show()`` afterwards.
    """
    surface.clear()
    width, _ = surface.size()

    for key in layout:
        style = Style.HIGHLIGHT if key.label in pressed else Style.DEFAULT
        draw_key(surface, key, style)

    sep_y = separator_row(layout)
    for x in range(width):
        surface.set_cell(x, sep_y, VisualizerConstants.SEPARATOR_CHAR, Style.DEFAULT)

    for i, entry in enumerate(log):
        draw_text(surface, 0, sep_y + 1 + i, entry.format(), width)
