"""Heartbeat timer for the scheduler agent.

Sends ``HEART: <n>`` every interval so the scheduler knows the worker is
alive and how many items it has processed, even while the main flow is
blocked waiting for the next line.
"""

import logging
import threading
from typing import Optional

from .channel import LineChannel
from .protocol import heartbeat_line
from .state import ConnectionState

logger = logging.getLogger("scheduler-agent")


class HeartbeatTimer:
    """One-shot timer that re-arms itself after every report."""

    def __init__(self, channel: LineChannel, state: ConnectionState, interval: float):
        """Initialize heartbeat timer.

        Args:
            channel: Channel the reports are written to
            state: Connection state holding the processed-item counter
            interval: Seconds between two reports
        """
        self.channel = channel
        self.state = state
        self.interval = interval
        self._lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None
        self._stopped = True

    def start(self) -> None:
        """Arm the first report."""
        with self._lock:
            if not self._stopped:
                logger.warning("Heartbeat already armed")
                return
            self._stopped = False
            self._arm()
        logger.debug(f"Armed heartbeat (interval: {self.interval}s)")

    def stop(self) -> None:
        """Cancel the pending report, if any."""
        with self._lock:
            self._stopped = True
            if self._timer:
                self._timer.cancel()
                self._timer = None

    @property
    def is_armed(self) -> bool:
        return not self._stopped

    def beat(self) -> None:
        """Report the counter now and schedule the next report.

        Does nothing once stopped, so no report can follow BYE.
        """
        with self._lock:
            if self._stopped:
                return
            self.channel.write_line(heartbeat_line(self.state.read_items()))
            self._arm()

    def _arm(self) -> None:
        if self._timer:
            self._timer.cancel()
        self._timer = threading.Timer(self.interval, self.beat)
        self._timer.name = "heartbeat"
        self._timer.daemon = True
        self._timer.start()
