"""Main controller for the keyboard visualizer."""

import logging
import os
import select
import signal
from typing import Optional

from .classifier import classify
from .constants import VisualizerConstants
from .keyboard import KeyboardHandler, KeyEvent
from .layout import build_layout, log_capacity
from .session import SessionState
from .terminal import TerminalInterface, keyboard_passthrough
from .view import render

logger = logging.getLogger(__name__)

# Returned by poll_event() when the terminal was resized
RESIZE = object()


class Visualizer:
    """Reads keys, updates the session and redraws after every event."""

    def __init__(self, terminal: Optional[TerminalInterface] = None):
        """Initialize the visualizer components."""
        self.terminal = terminal or TerminalInterface()
        self.keyboard = KeyboardHandler(self.terminal)
        self.layout = build_layout()
        self.session = SessionState()
        self.running = False
        # Create pipe for resize signaling
        self._resize_pipe_r, self._resize_pipe_w = os.pipe()

    def _handle_resize(self, signum, frame):
        """Handle terminal resize signal."""
        del signum, frame # Unused
        # Write to pipe to wake up select()
        os.write(self._resize_pipe_w, VisualizerConstants.RESIZE_PIPE_MARKER)

    def run(self):
        """Run the visualizer until an exit key has been pressed enough times."""
        original_winch_handler = signal.signal(signal.SIGWINCH, self._handle_resize)
        try:
            self.terminal.setup()
            self.running = True
            logger.info("Visualizer started (%dx%d)", *self.terminal.size())
            with self.terminal.term.cbreak(), keyboard_passthrough():
                self._draw()
                while self.running:
                    event = self.poll_event()
                    if event is RESIZE:
                        self.handle_resize()
                    elif event is not None:
                        self.handle_key_event(event)
        except KeyboardInterrupt:
            # Only reachable when the terminal still generates SIGINT
            logger.info("Interrupted")
        finally:
            signal.signal(signal.SIGWINCH, original_winch_handler)
            self.close()
            self.terminal.cleanup()
            logger.info("Visualizer stopped")

    def close(self):
        """Close the resize pipe. Safe to call more than once."""
        if self._resize_pipe_r is not None:
            os.close(self._resize_pipe_r)
            os.close(self._resize_pipe_w)
            self._resize_pipe_r = self._resize_pipe_w = None

    def poll_event(self):
        """Block until a key or a resize arrives.

        Returns:
            A KeyEvent, RESIZE, or None if stdin woke us without a full key
        """
        # Use file descriptor 0 for stdin to work in all environments
        ready, _, _ = select.select([0, self._resize_pipe_r], [], [])
        if self._resize_pipe_r in ready:
            # Clear the pipe
            os.read(self._resize_pipe_r, 1024)
            return RESIZE
        if 0 in ready:
            # Non-blocking since select says it's ready
            return self.keyboard.get_key_event(timeout=0)
        return None

    def handle_resize(self):
        """Adopt the new geometry, fit the log to it and redraw."""
        self.terminal.sync()
        width, height = self.terminal.size()
        logger.debug("Terminal resized to %dx%d", width, height)
        self.session.log.trim(log_capacity(self.layout, height))
        self._draw()

    def handle_key_event(self, key_event: KeyEvent) -> bool:
        """Classify and record a key event, then redraw.

        Returns:
            True if the event ended the session
        """
        classified = classify(key_event)
        _, height = self.terminal.size()
        capacity = log_capacity(self.layout, height)
        if self.session.apply_event(classified, capacity):
            self.running = False
            return True
        self._draw()
        return False

    def _draw(self):
        """Draw the current session state to the terminal."""
        render(self.terminal, self.layout, self.session.pressed, self.session.log)
        self.terminal.show()
