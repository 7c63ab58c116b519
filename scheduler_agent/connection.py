"""Worker-side connection to the scheduler.

Typical worker:

    conn = SchedulerConnection()
    conn.connect(sys.argv)
    for line in conn:
        process(line)
        conn.heart(1)
    conn.disconnect()
"""

import logging
import sys
from typing import Callable, Iterator, List, Optional

from . import protocol
from .channel import LineChannel
from .config import AgentConfig
from .heartbeat import HeartbeatTimer
from .protocol import LineKind
from .state import ConnectionState

logger = logging.getLogger("scheduler-agent")


class SchedulerConnection:
    """The single scheduler connection a worker process owns."""

    def __init__(
        self,
        config: Optional[AgentConfig] = None,
        channel: Optional[LineChannel] = None,
        on_verbose: Optional[Callable[[int], None]] = None,
    ):
        """Initialize the connection.

        Args:
            config: Agent configuration (defaults to AgentConfig())
            channel: Line channel (defaults to stdin/stdout)
            on_verbose: Called with the new level whenever the scheduler sends VERBOSE
        """
        self.config = config or AgentConfig()
        self.channel = channel or LineChannel(buffer_size=self.config.buffer_size)
        self.on_verbose = on_verbose
        self.state = ConnectionState()
        self.heartbeat = HeartbeatTimer(self.channel, self.state, self.config.alarm_secs)

    @property
    def is_connected(self) -> bool:
        return self.state.connected

    @property
    def verbose(self) -> int:
        return self.state.verbosity

    def connect(self, args: List[str]) -> None:
        """Handshake with the scheduler.

        If the last element of ``args`` is the startup token it is removed in
        place, the version line and OK are sent, and the heartbeat is armed.
        Otherwise the worker runs standalone and nothing is sent.
        """
        if args and args[-1] == self.config.startup_token:
            self.channel.write_line(self.config.version)
            del args[-1]
            self.state.connected = True

        self.state.reset()

        if not self.state.connected:
            logger.debug("No startup token, running standalone")
            return

        self.channel.write_line(protocol.OK)
        self.heartbeat.start()
        logger.debug("Connected to scheduler")

    def heart(self, delta: int) -> None:
        """Add ``delta`` items to the count reported by the next heartbeat."""
        self.state.add_items(delta)

    def next(self) -> Optional[str]:
        """Block until the scheduler sends the next data line.

        Control lines are handled here and never returned.

        Returns:
            The data line including its terminator, or None when the job is over
        """
        self.channel.flush()

        while True:
            line = self.channel.read_line()
            kind = LineKind.CLOSE if line is None else protocol.classify(line)

            if kind is LineKind.CLOSE:
                self.state.invalidate()
                return None

            if kind is LineKind.END:
                self._reply(protocol.OK)

            elif kind is LineKind.VERBOSE:
                self.state.verbosity = protocol.parse_verbosity(line)
                self.state.invalidate()
                logger.debug(f"Verbosity set to {self.state.verbosity}")
                if self.on_verbose:
                    try:
                        self.on_verbose(self.state.verbosity)
                    except Exception as e:
                        logger.error(f"Verbose callback failed: {e}")

            elif kind is LineKind.VERSION:
                self._reply(self.config.version)
                self.state.invalidate()

            else:
                self.state.accept(line)
                return line

    def _reply(self, text: str) -> None:
        # standalone workers never talk back
        if self.state.connected:
            self.channel.write_line(text)

    def current(self) -> Optional[str]:
        """Last data line returned by next(), or None after a control line."""
        return self.state.current

    def disconnect(self) -> None:
        """Say BYE to the scheduler and exit the process with status 0."""
        self.heartbeat.stop()

        if self.state.connected:
            self.channel.write_line(protocol.BYE)
            logger.debug("Disconnected from scheduler")

        sys.exit(0)

    def __iter__(self) -> Iterator[str]:
        while True:
            line = self.next()
            if line is None:
                return
            yield line
