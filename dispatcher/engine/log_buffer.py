"""In-memory ring buffer for capturing dispatcher log records.

Records are attributed to a messenger account through the ``account``
attribute set by ``extra={"account": ...}`` on the logging call. Records
logged without it are kept but carry no account.
"""

from __future__ import annotations

import logging
import threading
from collections import deque
from dataclasses import dataclass
from datetime import datetime, timezone


def account_extra(account: str) -> dict[str, str]:
    """``extra`` mapping that tags a log record with a messenger account."""
    return {"account": account}


def _min_level(level: str | None) -> int:
    if not level:
        return 0
    value = logging.getLevelName(level.upper())
    return value if isinstance(value, int) else 0


@dataclass(slots=True)
class LogEntry:
    """A single captured log record."""

    timestamp: datetime
    level: str
    levelno: int
    logger_name: str
    message: str
    account: str | None = None


class LogBuffer:
    """Thread-safe ring buffer that stores recent log entries."""

    def __init__(self, maxlen: int = 2000) -> None:
        self._entries: deque[LogEntry] = deque(maxlen=maxlen)
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def append(self, entry: LogEntry) -> None:
        with self._lock:
            self._entries.append(entry)

    def query(
        self,
        *,
        account: str | None = None,
        level: str | None = None,
        since: datetime | None = None,
        limit: int = 100,
    ) -> list[LogEntry]:
        """Return matching entries, newest first.

        Args:
            account: Only entries attributed to this messenger account.
            level: Minimum log level name (e.g. "WARNING").
            since: Only entries logged at or after this aware timestamp.
            limit: Maximum number of entries to return.
        """
        min_level = _min_level(level)

        with self._lock:
            snapshot = list(self._entries)

        results: list[LogEntry] = []
        for entry in reversed(snapshot):
            if account is not None and entry.account != account:
                continue
            if entry.levelno < min_level:
                continue
            if since is not None and entry.timestamp < since:
                continue
            results.append(entry)
            if len(results) >= limit:
                break
        return results


class BufferHandler(logging.Handler):
    """A logging.Handler that appends formatted records to a LogBuffer."""

    def __init__(self, buffer: LogBuffer, level: int = logging.DEBUG) -> None:
        super().__init__(level)
        self.buffer = buffer

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.buffer.append(
                LogEntry(
                    timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc),
                    level=record.levelname,
                    levelno=record.levelno,
                    logger_name=record.name,
                    message=self.format(record),
                    account=getattr(record, "account", None),
                )
            )
        except Exception:
            self.handleError(record)
