"""Logging helpers for the scheduler agent."""

import logging
import sys


def setup_logging(debug: bool = False) -> logging.Logger:
    """Configure logging for the agent.

    Logs go to stderr; stdout carries the scheduler protocol.

    Args:
        debug: Enable debug-level logging

    Returns:
        Configured logger instance
    """
    level = logging.DEBUG if debug else logging.INFO

    logger = logging.getLogger("scheduler-agent")
    logger.setLevel(level)

    if not logger.handlers:
        formatter = logging.Formatter(
            fmt="%(asctime)s %(levelname)s [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger
