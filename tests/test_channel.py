import io
import logging
from unittest.mock import MagicMock

from scheduler_agent.channel import ENCODING, ERRORS, LineChannel


def test_read_lines_until_eof():
    channel = LineChannel(io.BytesIO(b"one\ntwo\n"), io.BytesIO())

    assert channel.read_line() == "one\n"
    assert channel.read_line() == "two\n"
    assert channel.read_line() is None


def test_long_line_split_at_buffer_capacity():
    channel = LineChannel(io.BytesIO(b"x" * 40 + b"\n"), io.BytesIO(), buffer_size=16)

    assert channel.read_line() == "x" * 16
    assert channel.read_line() == "x" * 16
    assert channel.read_line() == "x" * 8 + "\n"


def test_line_filling_buffer_exactly_is_whole(caplog):
    channel = LineChannel(io.BytesIO(b"x" * 15 + b"\nCLOSE\n"), io.BytesIO(), buffer_size=16)

    with caplog.at_level(logging.WARNING, logger="scheduler-agent"):
        assert channel.read_line() == "x" * 15 + "\n"
        assert channel.read_line() == "CLOSE\n"

    assert "exceeds" not in caplog.text


def test_overlong_line_logs_warning(caplog):
    channel = LineChannel(io.BytesIO(b"x" * 20 + b"\n"), io.BytesIO(), buffer_size=16)

    with caplog.at_level(logging.WARNING, logger="scheduler-agent"):
        channel.read_line()

    assert "exceeds 16 bytes" in caplog.text


def test_invalid_utf8_bytes_are_preserved():
    channel = LineChannel(io.BytesIO(b"\xff\xfeabc\n"), io.BytesIO())

    line = channel.read_line()

    assert line.endswith("abc\n")
    assert line.encode(ENCODING, ERRORS) == b"\xff\xfeabc\n"


def test_read_failure_is_end_of_stream():
    inbound = MagicMock()
    inbound.readline.side_effect = OSError("bad fd")
    channel = LineChannel(inbound, io.BytesIO())

    assert channel.read_line() is None


def test_closed_inbound_is_end_of_stream():
    inbound = io.BytesIO(b"data\n")
    inbound.close()
    channel = LineChannel(inbound, io.BytesIO())

    assert channel.read_line() is None


def test_write_line_flushes():
    outbound = MagicMock()
    channel = LineChannel(io.BytesIO(), outbound)

    channel.write_line("OK")

    outbound.write.assert_called_once_with(b"OK\n")
    outbound.flush.assert_called_once()


def test_write_to_gone_scheduler_is_dropped():
    outbound = MagicMock()
    outbound.write.side_effect = BrokenPipeError()
    channel = LineChannel(io.BytesIO(), outbound)

    channel.write_line("HEART: 1")
    channel.flush()
