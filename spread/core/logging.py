import asyncio
import sys
import os
from collections import deque
from datetime import datetime, timezone
from typing import Optional

from loguru import logger

from spread.core.protocols import LogWriter

DIAGNOSTIC_LOG_PATH = ".spread-debug.log"
DIAGNOSTIC_LOG_MAX_LINES = 500


def setup_logging(debug_mode: bool = False, log_dir: Optional[str] = "logs"):
    """
    Configures Loguru logger.

    Args:
        debug_mode: Console level DEBUG instead of INFO
        log_dir: Directory for the rotating file sink; None disables it
    """
    # Remove default handler
    logger.remove()

    # Console Handler
    level = "DEBUG" if debug_mode else "INFO"
    logger.add(sys.stderr, level=level, format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>")

    # File Handler
    if log_dir:
        if not os.path.exists(log_dir):
            os.makedirs(log_dir)
        logger.add(os.path.join(log_dir, "spread_{time}.log"), rotation="10 MB", retention="1 week", level="DEBUG")

    logger.info("Logging initialized.")


class DiagnosticLog:
    """
    Per-view diagnostic trail.

    Keeps the last ``max_lines`` timestamped lines and, when a writer is
    given, rewrites the whole buffer to ``path`` so the file can be
    inspected while the view runs. Inside an asyncio loop the rewrite runs
    in a worker thread and bursts of lines collapse into one write. Every
    line is also sent to loguru at DEBUG with the view name bound.

    Writes are best-effort: a failing writer never affects rendering.

    Example:
        diag = DiagnosticLog(FileLogWriter(root), view_name="spread-1")
        diag.start()
        diag.log("render: starting 120 entries")
    """

    def __init__(
        self,
        writer: Optional[LogWriter] = None,
        path: str = DIAGNOSTIC_LOG_PATH,
        max_lines: int = DIAGNOSTIC_LOG_MAX_LINES,
        view_name: str = "spread-view"
    ):
        self._writer = writer
        self._path = path
        self._lines: deque[str] = deque(maxlen=max_lines)
        self._logger = logger.bind(view=view_name)
        self._dirty = False
        self._flush_task: Optional[asyncio.Task] = None

    @property
    def lines(self) -> list[str]:
        return list(self._lines)

    def start(self):
        """Reset the buffer with a start banner."""
        self._lines.clear()
        self._lines.append(f"=== spread view started {_now()} ===\n")
        self._flush()

    def log(self, message: str):
        self._logger.debug(message)
        self._lines.append(f"[{_now()}] {message}\n")
        self._flush()

    async def flush(self):
        """Wait until every buffered line has been handed to the writer."""
        while self._flush_task is not None:
            await self._flush_task

    def _flush(self):
        if self._writer is None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # No loop: write inline
            self._write("".join(self._lines))
            return
        self._dirty = True
        if self._flush_task is None:
            self._flush_task = loop.create_task(self._drain())

    async def _drain(self):
        """One write in flight; lines logged meanwhile go out in the next one."""
        try:
            while self._dirty:
                self._dirty = False
                await asyncio.to_thread(self._write, "".join(self._lines))
        finally:
            self._flush_task = None

    def _write(self, text: str):
        try:
            self._writer.write(self._path, text)
        except Exception as e:
            logger.trace(f"Diagnostic log write failed: {e}")


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()
