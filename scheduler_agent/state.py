"""Connection state shared by the handshake, the read loop and the heartbeat."""

import threading
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ConnectionState:
    """Everything the agent knows about its scheduler connection.

    Only ``items_processed`` is touched by the heartbeat; every other field
    belongs to the main flow.
    """

    connected: bool = False
    items_processed: int = 0
    last_line: str = ""
    last_line_valid: bool = False
    verbosity: int = 0
    _counter_lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def reset(self) -> None:
        """Zero every field except the handshake flag."""
        with self._counter_lock:
            self.items_processed = 0
        self.last_line = ""
        self.last_line_valid = False
        self.verbosity = 0

    def add_items(self, delta: int) -> None:
        with self._counter_lock:
            self.items_processed += delta

    def read_items(self) -> int:
        with self._counter_lock:
            return self.items_processed

    def accept(self, line: str) -> None:
        """Remember a data line as the caller-visible item."""
        self.last_line = line
        self.last_line_valid = True

    def invalidate(self) -> None:
        self.last_line_valid = False

    @property
    def current(self) -> Optional[str]:
        return self.last_line if self.last_line_valid else None
