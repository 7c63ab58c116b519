#!/usr/bin/env python3
"""Scheduler Agent - reference worker for the scheduler line protocol.

The scheduler launches it with ``--scheduler_start`` as the last argument:
    scheduler-agent --debug --scheduler_start

Run by hand (no token) it reads items from stdin without any handshake.

Environment variables are described in ``AgentConfig.from_env``.
"""

import logging
import sys
from typing import List, Optional

import click

from . import __version__
from .config import AgentConfig
from .connection import SchedulerConnection
from .utils import setup_logging

logger = logging.getLogger("scheduler-agent")


def process_item(conn: SchedulerConnection, line: str) -> None:
    """Handle one work item; the reference worker only logs it."""
    item = line.rstrip("\r\n")
    if conn.verbose > 0:
        logger.info(f"Processing item: {item}")
    else:
        logger.debug(f"Processing item: {item}")


@click.command()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--version", is_flag=True, help="Show version and exit")
@click.pass_obj
def main(conn: SchedulerConnection, debug: bool, version: bool):
    """Scheduler Agent - process work items handed out by the scheduler."""
    if version:
        click.echo(conn.config.version, err=True)
        conn.disconnect()

    setup_logging(debug=debug or conn.config.debug)
    logger.info(f"Scheduler Agent v{__version__}")
    logger.info("Mode: " + ("scheduler" if conn.is_connected else "standalone"))

    processed = 0
    for line in conn:
        process_item(conn, line)
        conn.heart(1)
        processed += 1

    logger.info(f"Processed {processed} items, shutting down")
    conn.disconnect()


def run(argv: Optional[List[str]] = None, conn: Optional[SchedulerConnection] = None) -> None:
    """Console entry point.

    The handshake strips the startup token before click parses the
    remaining options.
    """
    args = list(sys.argv if argv is None else argv)

    if conn is None:
        config = AgentConfig.from_env()
        setup_logging(debug=config.debug)

        errors = config.validate()
        if errors:
            for error in errors:
                logger.error(f"Config error: {error}")
            sys.exit(1)

        conn = SchedulerConnection(config)

    conn.connect(args)
    main.main(args=args[1:], prog_name="scheduler-agent", obj=conn)


if __name__ == "__main__":
    run()
