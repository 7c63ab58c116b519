"""Wire vocabulary of the scheduler line protocol.

Scheduler -> agent (prefix match, case-sensitive):
    CLOSE            no more work, the agent should disconnect
    END              end of a batch, answered with OK
    VERBOSE <int>    set the verbosity level
    VERSION          answered with the version line
    anything else    a data line handed to the worker verbatim

Agent -> scheduler:
    <version>        on startup and in reply to VERSION
    OK               handshake acknowledgment and reply to END
    HEART: <n>       every heartbeat interval
    BYE              right before the process exits
"""

import enum
import re

CLOSE = "CLOSE"
END = "END"
VERBOSE = "VERBOSE"
VERSION = "VERSION"

OK = "OK"
BYE = "BYE"

# VERBOSE lines carry their level after "VERBOSE "
VERBOSE_OFFSET = 8

_LEADING_INT = re.compile(r"\s*([+-]?\d+)", re.ASCII)


class LineKind(enum.Enum):
    CLOSE = "close"
    END = "end"
    VERBOSE = "verbose"
    VERSION = "version"
    DATA = "data"


# Checked in this order; the first matching prefix wins
_PREFIXES = (
    (CLOSE, LineKind.CLOSE),
    (END, LineKind.END),
    (VERBOSE, LineKind.VERBOSE),
    (VERSION, LineKind.VERSION),
)


def classify(line: str) -> LineKind:
    """Classify an inbound line by its leading token.

    A data line that happens to start with a reserved token is classified as
    that control line; the protocol does not escape payloads.
    """
    for prefix, kind in _PREFIXES:
        if line.startswith(prefix):
            return kind
    return LineKind.DATA


def parse_int(text: str) -> int:
    """Leading decimal integer of ``text``, 0 when there is none."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def parse_verbosity(line: str) -> int:
    return max(0, parse_int(line[VERBOSE_OFFSET:]))


def heartbeat_line(items_processed: int) -> str:
    return f"HEART: {items_processed}"
