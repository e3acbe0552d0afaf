import asyncio
from unittest.mock import MagicMock

import pytest

from spread.core.logging import DIAGNOSTIC_LOG_PATH, DiagnosticLog


class RecordingWriter:
    def __init__(self):
        self.writes = []

    def write(self, path, text):
        self.writes.append((path, text))


def test_start_writes_banner():
    writer = RecordingWriter()
    diag = DiagnosticLog(writer)

    diag.start()

    path, text = writer.writes[-1]
    assert path == DIAGNOSTIC_LOG_PATH
    assert text.startswith("=== spread view started ")
    assert text.endswith(" ===\n")


def test_every_line_rewrites_whole_buffer():
    writer = RecordingWriter()
    diag = DiagnosticLog(writer)
    diag.start()

    diag.log("first")
    diag.log("second")

    text = writer.writes[-1][1]
    assert len(writer.writes) == 3
    assert text.count("\n") == 3
    assert "] first\n" in text
    assert text.endswith("] second\n")


def test_buffer_keeps_last_lines():
    diag = DiagnosticLog(max_lines=3)
    for i in range(10):
        diag.log(f"msg {i}")

    assert len(diag.lines) == 3
    assert diag.lines[0].endswith("] msg 7\n")
    assert diag.lines[-1].endswith("] msg 9\n")


def test_start_resets_buffer():
    diag = DiagnosticLog()
    diag.log("old")

    diag.start()

    assert len(diag.lines) == 1
    assert diag.lines[0].startswith("===")


def test_writer_failure_is_swallowed():
    writer = MagicMock()
    writer.write.side_effect = OSError("disk full")
    diag = DiagnosticLog(writer, path="custom.log")

    diag.start()
    diag.log("still fine")

    assert writer.write.call_count == 2
    assert writer.write.call_args[0][0] == "custom.log"
    assert diag.lines[-1].endswith("] still fine\n")


@pytest.mark.asyncio
async def test_burst_inside_loop_is_batched():
    writer = RecordingWriter()
    diag = DiagnosticLog(writer)

    diag.start()
    for i in range(50):
        diag.log(f"msg {i}")
    assert writer.writes == []

    await diag.flush()

    assert 1 <= len(writer.writes) <= 2
    text = writer.writes[-1][1]
    assert text.startswith("=== spread view started ")
    assert text.endswith("] msg 49\n")


@pytest.mark.asyncio
async def test_lines_logged_during_write_are_flushed():
    writer = RecordingWriter()
    diag = DiagnosticLog(writer)

    diag.log("first")
    await asyncio.sleep(0)
    diag.log("second")
    await diag.flush()

    assert writer.writes[-1][1].endswith("] second\n")
    assert diag._flush_task is None


@pytest.mark.asyncio
async def test_writer_failure_inside_loop_is_swallowed():
    writer = MagicMock()
    writer.write.side_effect = OSError("disk full")
    diag = DiagnosticLog(writer)

    diag.log("still fine")
    await diag.flush()

    assert writer.write.call_count == 1
    assert diag.lines[-1].endswith("] still fine\n")
