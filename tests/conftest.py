import io
import logging

import pytest

from scheduler_agent.channel import LineChannel
from scheduler_agent.config import AgentConfig
from scheduler_agent.connection import SchedulerConnection


class FakeScheduler:
    """Both ends of an in-memory scheduler pipe."""

    def __init__(self, *lines: str, buffer_size: int = 2048):
        self.inbound = io.BytesIO("".join(lines).encode("utf-8"))
        self.outbound = io.BytesIO()
        self.channel = LineChannel(self.inbound, self.outbound, buffer_size=buffer_size)

    @property
    def received(self) -> list:
        """Lines the agent has written so far."""
        return self.outbound.getvalue().decode("utf-8").splitlines()


@pytest.fixture
def scheduler_factory():
    def _make(*lines, config=None, **kwargs):
        config = config or AgentConfig(version="test-agent 1.0")
        sched = FakeScheduler(*lines, buffer_size=config.buffer_size)
        conn = SchedulerConnection(config, channel=sched.channel, **kwargs)
        sched.conn = conn
        return sched
    return _make


@pytest.fixture
def connected(scheduler_factory):
    """Scheduler-controlled connection with the heartbeat stopped afterwards."""
    created = []

    def _make(*lines, **kwargs):
        sched = scheduler_factory(*lines, **kwargs)
        sched.conn.connect(["worker", "--scheduler_start"])
        created.append(sched)
        return sched

    yield _make

    for sched in created:
        sched.conn.heartbeat.stop()


@pytest.fixture(autouse=True)
def reset_agent_logger():
    yield
    logger = logging.getLogger("scheduler-agent")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
