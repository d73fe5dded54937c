"""Terminal interface using Blessed for display and Curtsies for input."""

import logging
import sys
import termios
from contextlib import contextmanager
from enum import Enum
from typing import Optional

import blessed

logger = logging.getLogger(__name__)


class Style(Enum):
    """Cell styles the visualizer paints with."""
    DEFAULT = "default"
    HIGHLIGHT = "highlight"


BLANK = (' ', Style.DEFAULT)


class TerminalInterface:
    """Cell-addressed drawing surface on top of Blessed.

    Callers paint into an in-memory frame with clear()/set_cell() and
    commit it with show(), which writes only the rows that changed since
    the previous frame.
    """

    def __init__(self, terminal: Optional[blessed.Terminal] = None):
        """Initialize with a terminal instance (or create one)."""
        self.term = terminal or blessed.Terminal()
        self.is_fullscreen = False
        self._curtsies_input: Optional[object] = None
        self._width, self._height = self._read_size()
        self._cells: list[list[tuple[str, Style]]] = self._blank_frame()
        # Rows as last written to the screen, None forces a full repaint
        self._last_lines: list[str] | None = None

    def setup(self):
        """Enter fullscreen mode and start reading keys with curtsies.

        Raises whatever curtsies raises when stdin is not a terminal;
        there is nothing useful to show without one.
        """
        from curtsies import Input

        print(self.term.enter_fullscreen, end='')
        print(self.term.hide_cursor, end='')
        print(self.term.clear, end='', flush=True)
        self.is_fullscreen = True
        if self._curtsies_input is None:
            self._curtsies_input = Input(keynames='curtsies')
            # Enter raw mode immediately so reads work
            self._curtsies_input.__enter__()

    def cleanup(self):
        """Exit fullscreen mode and restore terminal."""
        if self._curtsies_input is not None:
            try:
                self._curtsies_input.__exit__(None, None, None)
            except (termios.error, OSError) as e:
                logger.debug("Could not leave curtsies raw mode: %s", e)
            finally:
                self._curtsies_input = None
        if self.is_fullscreen:
            print(self.term.normal + self.term.exit_fullscreen, end='')
            print(self.term.normal_cursor, end='', flush=True)
            self.is_fullscreen = False

    def _read_size(self) -> tuple[int, int]:
        return int(self.term.width), int(self.term.height)

    def _blank_frame(self) -> list[list[tuple[str, Style]]]:
        return [[BLANK] * self._width for _ in range(self._height)]

    def size(self) -> tuple[int, int]:
        """Frame size as (width, height)."""
        return self._width, self._height

    def clear(self) -> None:
        """Blank the in-memory frame."""
        self._cells = self._blank_frame()

    def set_cell(self, x: int, y: int, ch: str, style: Style = Style.DEFAULT) -> None:
        """Put one character into the frame; out-of-bounds writes are ignored."""
        if 0 <= x < self._width and 0 <= y < self._height:
            self._cells[y][x] = (ch, style)

    def sync(self) -> None:
        """Pick up a new terminal geometry and force a full repaint."""
        self._width, self._height = self._read_size()
        self._cells = self._blank_frame()
        self._last_lines = None

    def _style_sequence(self, style: Style) -> str:
        if style is Style.HIGHLIGHT:
            return self.term.on_blue
        return ''

    def _compose_display_line(self, row: list[tuple[str, Style]]) -> str:
        """Compose one frame row with style changes, padded to width."""
        out = []
        active = Style.DEFAULT
        for ch, style in row:
            if style is not active:
                out.append(self.term.normal + self._style_sequence(style))
                active = style
            out.append(ch)
        # Reset at end
        if active is not Style.DEFAULT:
            out.append(self.term.normal)
        return ''.join(out)

    def show(self) -> None:
        """Write the frame, diffing against the last one shown.

        Falls back to a full clear on first paint or after sync().
        """
        lines = [self._compose_display_line(row) for row in self._cells]
        if self._last_lines is None or len(self._last_lines) != len(lines):
            print(self.term.home + self.term.normal + self.term.clear, end='')
            self._last_lines = ["" for _ in lines]

        for y, line in enumerate(lines):
            if line != self._last_lines[y]:
                print(self.term.move(y, 0) + line, end='')
                self._last_lines[y] = line
        print(self.term.home, end='', flush=True)

    def get_key(self, timeout=None):
        """Get a single keypress from the user.

        Args:
            timeout: Timeout in seconds (None for blocking, 0 for non-blocking)

        Returns:
            The curtsies token as a string, or None on timeout
        """
        if self._curtsies_input is None:
            return None
        if timeout is None:
            evt = next(self._curtsies_input)  # blocks
            return str(evt)
        # curtsies keeps bytes of partially read sequences, let it do the waiting
        evt = self._curtsies_input.send(float(timeout))
        if evt is None:
            return None
        return str(evt)


@contextmanager
def keyboard_passthrough(stream=None):
    """Let Ctrl-C/S/Q/Z/V reach the program as ordinary keys.

    Clears IXON/IXOFF (flow control), ISIG (signal keys) and IEXTEN
    (Ctrl-V literal-next) for the duration of the block.
    """
    stream = stream or sys.stdin
    old_settings = None
    try:
        old_settings = termios.tcgetattr(stream)
        new_settings = list(old_settings)
        new_settings[0] &= ~(termios.IXON | termios.IXOFF)
        new_settings[3] &= ~(termios.ISIG | termios.IEXTEN)
        termios.tcsetattr(stream, termios.TCSANOW, new_settings)
    except (termios.error, AttributeError, OSError) as e:
        logger.debug("Could not adjust terminal flags: %s", e)
        old_settings = None
    try:
        yield
    finally:
        if old_settings is not None:
            try:
                termios.tcsetattr(stream, termios.TCSANOW, old_settings)
            except (termios.error, OSError) as e:
                logger.debug("Could not restore terminal flags: %s", e)
