"""Configuration for the scheduler agent."""

from dataclasses import dataclass, field
import os

from . import __version__

# Reserved last command-line argument the scheduler appends when it spawns a worker
STARTUP_TOKEN = "--scheduler_start"

# Seconds between two heartbeat reports
ALARM_SECS = 30

# Longest line (terminator included) accepted from the scheduler
BUFFER_SIZE = 2048


def default_version() -> str:
    """Version line sent to the scheduler on startup and on VERSION."""
    return f"scheduler-agent {__version__}"


@dataclass
class AgentConfig:
    """Configuration for a scheduler connection.

    - startup_token: last argv element marking scheduler-controlled mode
    - alarm_secs: heartbeat interval in seconds
    - buffer_size: inbound line capacity in bytes, terminator included
    - version: identifier line reported to the scheduler
    """

    startup_token: str = STARTUP_TOKEN
    alarm_secs: float = ALARM_SECS
    buffer_size: int = BUFFER_SIZE
    version: str = field(default_factory=default_version)

    # Agent behavior
    debug: bool = False

    @classmethod
    def from_env(cls) -> "AgentConfig":
        """Create config from environment variables.

        Environment variables:
        - SCHEDULER_AGENT_STARTUP_TOKEN: Reserved startup argument
        - SCHEDULER_AGENT_ALARM_SECS: Heartbeat interval in seconds
        - SCHEDULER_AGENT_BUFFER_SIZE: Inbound line capacity in bytes
        - SCHEDULER_AGENT_VERSION: Version line reported to the scheduler
        - SCHEDULER_AGENT_DEBUG: Enable debug logging
        """
        return cls(
            startup_token=os.environ.get("SCHEDULER_AGENT_STARTUP_TOKEN", STARTUP_TOKEN),
            alarm_secs=float(os.environ.get("SCHEDULER_AGENT_ALARM_SECS", str(ALARM_SECS))),
            buffer_size=int(os.environ.get("SCHEDULER_AGENT_BUFFER_SIZE", str(BUFFER_SIZE))),
            version=os.environ.get("SCHEDULER_AGENT_VERSION") or default_version(),
            debug=os.environ.get("SCHEDULER_AGENT_DEBUG", "").lower() in ("1", "true", "yes"),
        )

    def validate(self) -> list[str]:
        """Validate configuration.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if not self.startup_token:
            errors.append("startup_token is required")

        if self.alarm_secs < 1:
            errors.append(f"alarm_secs must be at least 1, got: {self.alarm_secs}")

        if self.buffer_size < 16:
            errors.append(f"buffer_size must be at least 16 bytes, got: {self.buffer_size}")

        if not self.version:
            errors.append("version is required")
        elif "\n" in self.version or "\r" in self.version:
            errors.append("version must be a single line")

        return errors
