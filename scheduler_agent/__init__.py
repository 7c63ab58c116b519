"""Scheduler Agent - worker-side runtime for the scheduler line protocol.

Every worker process launched by the scheduler imports this package to talk
to it over stdin/stdout.

Key responsibilities:
- Handshake with the scheduler when started with ``--scheduler_start``
- Hand data lines to the worker one at a time, consuming control lines
- Report liveness and progress with a periodic ``HEART: <n>`` line
- Say ``BYE`` and exit when the worker is done
"""

__version__ = "0.1.0"

from .config import AgentConfig
from .connection import SchedulerConnection
from .state import ConnectionState

__all__ = ["AgentConfig", "ConnectionState", "SchedulerConnection", "__version__"]
