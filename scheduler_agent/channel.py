"""Line channel over the worker's standard input and output."""

import logging
import sys
import threading
from typing import BinaryIO, Optional

from .config import BUFFER_SIZE

logger = logging.getLogger("scheduler-agent")

ENCODING = "utf-8"

# Undecodable bytes survive as lone surrogates and encode back unchanged
ERRORS = "surrogateescape"


class LineChannel:
    """Reads scheduler lines from one binary stream and writes replies to another.

    Writes are serialised with a lock because the heartbeat writes from its
    own timer thread while the main flow may be replying.
    """

    def __init__(
        self,
        inbound: Optional[BinaryIO] = None,
        outbound: Optional[BinaryIO] = None,
        buffer_size: int = BUFFER_SIZE,
    ):
        """Initialize the channel.

        Args:
            inbound: Stream the scheduler writes to (defaults to stdin)
            outbound: Stream the scheduler reads from (defaults to stdout)
            buffer_size: Line capacity in bytes, terminator included
        """
        self.inbound = inbound if inbound is not None else sys.stdin.buffer
        self.outbound = outbound if outbound is not None else sys.stdout.buffer
        self.buffer_size = buffer_size
        self._write_lock = threading.Lock()

    def read_line(self) -> Optional[str]:
        """Block until the next line arrives.

        Returns:
            The line including its terminator, or None at end of stream
        """
        try:
            raw = self.inbound.readline(self.buffer_size)
        except (OSError, ValueError) as e:
            logger.warning(f"Read from scheduler failed, treating as end of stream: {e}")
            return None

        if not raw:
            return None

        if len(raw) == self.buffer_size and not raw.endswith(b"\n"):
            logger.warning(f"Line exceeds {self.buffer_size} bytes, remainder arrives as the next line")

        line = raw.decode(ENCODING, errors=ERRORS)
        logger.debug(f"<- {line.rstrip()}")
        return line

    def write_line(self, text: str) -> None:
        """Send one line and flush it right away."""
        data = (text + "\n").encode(ENCODING)
        with self._write_lock:
            try:
                self.outbound.write(data)
                self.outbound.flush()
            except (OSError, ValueError) as e:
                logger.warning(f"Dropped line {text!r} for scheduler: {e}")
                return
        logger.debug(f"-> {text}")

    def flush(self) -> None:
        with self._write_lock:
            try:
                self.outbound.flush()
            except (OSError, ValueError) as e:
                logger.warning(f"Flush to scheduler failed: {e}")
