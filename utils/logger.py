"""
Logging setup.
Call setup_logging() once at startup in main.py.

While the terminal UI is drawing, nothing may write to stdout, so records go
to a per-run log file and to a bounded in-memory buffer that the log panel
reads from.
"""

from __future__ import annotations
import logging
import sys
import time
from collections import deque
from datetime import datetime, timezone
from pathlib import Path

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s | mono_ns=%(mono_ns)d | %(message)s"
_PANEL_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


class _NsFormatter(logging.Formatter):
    """Adds monotonic nanosecond timestamp to every log record."""

    def format(self, record: logging.LogRecord) -> str:
        record.mono_ns = time.monotonic_ns()
        return super().format(record)


class LogBuffer(logging.Handler):
    """Keeps the last `capacity` formatted records for the log panel."""

    def __init__(self, capacity: int = 500) -> None:
        super().__init__()
        self.lines: deque[tuple[int, str]] = deque(maxlen=capacity)
        self.setFormatter(logging.Formatter(_PANEL_FORMAT, datefmt="%H:%M:%S"))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.lines.append((record.levelno, self.format(record)))
        except Exception:
            self.handleError(record)

    def tail(self, count: int, offset: int = 0) -> list[tuple[int, str]]:
        """`count` lines ending `offset` lines before the newest."""
        end = max(len(self.lines) - offset, 0)
        start = max(end - count, 0)
        return [self.lines[i] for i in range(start, end)]


def log_file_path(log_dir: str | Path, started_at: datetime | None = None) -> Path:
    started_at = started_at or datetime.now(timezone.utc)
    return Path(log_dir) / started_at.strftime("%Y-%m-%dT%H%M%S.%f.log")


def setup_logging(level: str = "INFO", log_dir: str | None = None, console: bool = False) -> LogBuffer:
    numeric = getattr(logging, level.upper(), logging.INFO)
    formatter = _NsFormatter(fmt=_FORMAT, datefmt="%Y-%m-%dT%H:%M:%S")

    root = logging.getLogger()
    root.setLevel(numeric)
    root.handlers.clear()

    if log_dir:
        path = log_file_path(log_dir)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        root.addHandler(file_handler)

    if console:
        stream = logging.StreamHandler(sys.stdout)
        stream.setFormatter(formatter)
        root.addHandler(stream)

    buffer = LogBuffer()
    root.addHandler(buffer)
    # Keep aiohttp's per-request chatter out of the panel
    logging.getLogger("aiohttp").setLevel(max(numeric, logging.WARNING))
    return buffer
