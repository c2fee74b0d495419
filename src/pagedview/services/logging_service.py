"""Logging service.

Provides an in-process logging handler capturing recent ``pagedview`` log
records into a ring buffer, optionally re-publishing each one as
``DataEvent.LOG_RECORD_ADDED`` on an ``EventBus`` for diagnostics panels.

Design goals:
 - Headless testability (no Qt dependency here)
 - Filtering by level name or logger name
 - Capacity-bound ring buffer with O(1) append
 - Retrieval API returning lightweight frozen records
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional

from ..settings import ViewSettings
from .event_bus import DataEvent, EventBus

__all__ = [
    "LogEntry",
    "LoggingService",
]

ROOT_LOGGER_NAME = "pagedview"


@dataclass(frozen=True)
class LogEntry:
    level: str
    name: str
    message: str
    created: float


class _RingBufferHandler(logging.Handler):
    def __init__(self, svc: "LoggingService") -> None:
        super().__init__()
        self._svc = svc

    def emit(self, record: logging.LogRecord) -> None:  # noqa: D401
        self._svc._ingest_record(record)


class LoggingService:
    def __init__(
        self,
        capacity: int | None = None,
        *,
        bus: EventBus | None = None,
        logger_name: str = ROOT_LOGGER_NAME,
    ) -> None:
        if capacity is None:
            capacity = ViewSettings.instance.log_capacity
        self._capacity = capacity
        self._bus = bus
        self._logger_name = logger_name
        self._entries: Deque[LogEntry] = deque(maxlen=capacity)
        self._handler = _RingBufferHandler(self)
        self._handler.setLevel(logging.DEBUG)
        self._attached = False
        self._publishing = False

    # Lifecycle --------------------------------------------------------
    def attach(self, level: int = logging.DEBUG) -> None:
        if self._attached:
            return
        logger = logging.getLogger(self._logger_name)
        logger.addHandler(self._handler)
        # Ensure we don't miss lower-severity records (preserve existing if already lower)
        if logger.level == logging.NOTSET or logger.level > level:
            logger.setLevel(level)
        self._attached = True

    def detach(self) -> None:
        if not self._attached:
            return
        logging.getLogger(self._logger_name).removeHandler(self._handler)
        self._attached = False

    @property
    def attached(self) -> bool:
        return self._attached

    # Internal ingestion -----------------------------------------------
    def _ingest_record(self, record: logging.LogRecord) -> None:
        entry = LogEntry(
            level=record.levelname,
            name=record.name,
            message=record.getMessage(),
            created=record.created,
        )
        self._entries.append(entry)
        # Records logged by a failing LOG_RECORD_ADDED handler must not re-enter
        if self._bus is None or self._publishing:
            return
        self._publishing = True
        try:
            self._bus.publish(DataEvent.LOG_RECORD_ADDED, entry)
        finally:
            self._publishing = False

    # Query ------------------------------------------------------------
    def recent(self, limit: Optional[int] = None) -> List[LogEntry]:
        data = list(self._entries)
        return data[-limit:] if limit is not None else data

    def filter(
        self, *, level: str | None = None, name_contains: str | None = None
    ) -> List[LogEntry]:
        out: List[LogEntry] = []
        for e in self.recent():
            if level and e.level != level:
                continue
            if name_contains and name_contains not in e.name:
                continue
            out.append(e)
        return out

    def clear(self) -> None:
        self._entries.clear()
