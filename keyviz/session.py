"""Session state for the keyboard visualizer.

This module owns everything that changes while the visualizer runs: the
set of keys that have been pressed, the rolling event log and the exit
counters. State is held by an explicit SessionState object created by the
main loop and handed to the renderer; nothing here is global.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Iterator, List, Optional

from .classifier import ClassifiedEvent, ExitKey
from .constants import VisualizerConstants

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogEntry:
    """One line of the event log."""
    timestamp: datetime
    label: str
    code: int
    mods: str

    def format(self) -> str:
        """Format as a fixed-column log line."""
        ts = self.timestamp.strftime(VisualizerConstants.TIMESTAMP_FORMAT)
        width = VisualizerConstants.LOG_LABEL_WIDTH
        return f"{ts} | {self.label:<{width}} | Code={self.code:3d} | Mods={self.mods}"


class LogBuffer:
    """Chronological log entries, trimmed to the rows available on screen."""

    def __init__(self) -> None:
        self._entries: List[LogEntry] = []

    def append(self, entry: LogEntry) -> None:
        self._entries.append(entry)

    def trim(self, capacity: int) -> None:
        """Keep only the most recent ``capacity`` entries.

        With no room at all the buffer is emptied.
        """
        if capacity <= 0:
            self._entries.clear()
        elif len(self._entries) > capacity:
            del self._entries[:-capacity]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self._entries)

    def __getitem__(self, index):
        return self._entries[index]


class ExitCounters:
    """Press counts for the exit keys. Counts only ever go up."""

    def __init__(self, threshold: int = VisualizerConstants.EXIT_THRESHOLD):
        self.threshold = threshold
        self._counts: Dict[ExitKey, int] = {key: 0 for key in ExitKey}

    def increment(self, key: ExitKey) -> bool:
        """Count one press; True once the key has reached the threshold."""
        self._counts[key] += 1
        return self._counts[key] >= self.threshold

    def count(self, key: ExitKey) -> int:
        return self._counts[key]

    @property
    def counts(self) -> Dict[ExitKey, int]:
        return dict(self._counts)


class SessionState:
    """Pressed keys, event log and exit counters for one run."""

    def __init__(self, exit_threshold: int = VisualizerConstants.EXIT_THRESHOLD):
        self._pressed: set[str] = set()
        self.log = LogBuffer()
        self.exit_counters = ExitCounters(exit_threshold)

    @property
    def pressed(self) -> frozenset[str]:
        """Labels pressed so far this session."""
        return frozenset(self._pressed)

    def apply_event(self, event: ClassifiedEvent, capacity: int,
                    now: Optional[datetime] = None) -> bool:
        """Record a classified event.

        Args:
            event: The classified key event
            capacity: Log rows currently available below the keyboard
            now: Timestamp for the log entry (defaults to the wall clock)

        Returns:
            True if the event ends the session. In that case nothing is
            marked or logged.
        """
        if event.exit_key is not None and self.exit_counters.increment(event.exit_key):
            logger.info("Exit key %s pressed %d times, ending session",
                        event.exit_key.value, self.exit_counters.count(event.exit_key))
            return True

        self._pressed.add(event.label)
        self._pressed.update(event.modifiers)
        if event.caps_lock:
            self._pressed.add("CapsLock")

        timestamp = (now or datetime.now()).replace(microsecond=0)
        self.log.append(LogEntry(timestamp, event.label, event.code, event.mod_summary))
        self.log.trim(capacity)
        return False
