"""EventBus core.

Lightweight synchronous publish/subscribe mechanism with typed events.

Goals:
 - Decouple the view model from whatever binds to it (views, tests, logging)
 - Deliver in-line: every handler has run before ``publish`` returns
 - Safe error isolation: one failing handler doesn't break the publish cycle
 - Allow one-shot (once) subscriptions
 - Provide unsubscribe handles

The bus performs no locking; callers own serialization (single-threaded use).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from time import perf_counter
from typing import Any, Dict, List, Protocol

__all__ = [
    "DataEvent",
    "Event",
    "EventBus",
    "EventHandler",
    "Subscription",
]

_logger = logging.getLogger(__name__)


class DataEvent(str, Enum):  # Using str subclass for easier JSON/UI usage
    PAGE_CHANGED = "page_changed"
    PAGE_SIZE_CHANGED = "page_size_changed"
    NUM_PAGES_CHANGED = "num_pages_changed"
    PROPERTY_CHANGED = "property_changed"  # computed scalar changed (payload PropertyChange)
    LOG_RECORD_ADDED = "log_record_added"


@dataclass
class Event:
    name: str  # matches DataEvent value or custom string
    payload: Any
    timestamp: float


class EventHandler(Protocol):  # noqa: D401 - protocol signature docs implicit
    def __call__(self, event: Event) -> None: ...  # pragma: no cover - structural


@dataclass
class Subscription:
    event: str
    handler: EventHandler
    once: bool
    active: bool = True

    def cancel(self) -> None:
        self.active = False


def _key(name: str | DataEvent) -> str:
    return name.value if isinstance(name, DataEvent) else name


class EventBus:
    """Synchronous event dispatcher.

    Handlers are invoked from a snapshot of the subscriber list so they can
    subscribe/unsubscribe while an event is being delivered. Exceptions raised
    by handlers are collected in ``errors`` (and logged) instead of escaping.
    """

    def __init__(self) -> None:
        self._subs: Dict[str, List[Subscription]] = {}
        self._errors: List[tuple[Event, BaseException]] = []

    # ------------------------------------------------------------------
    # Subscription management
    # ------------------------------------------------------------------
    def subscribe(
        self, name: str | DataEvent, handler: EventHandler, *, once: bool = False
    ) -> Subscription:
        key = _key(name)
        sub = Subscription(event=key, handler=handler, once=once)
        self._subs.setdefault(key, []).append(sub)
        return sub

    def unsubscribe(self, sub: Subscription) -> None:
        bucket = self._subs.get(sub.event)
        sub.active = False
        if not bucket:
            return
        for i, existing in enumerate(bucket):
            if existing is sub:
                bucket.pop(i)
                break
        if not bucket:
            self._subs.pop(sub.event, None)

    def clear(self) -> None:
        self._subs.clear()
        self._errors.clear()

    # ------------------------------------------------------------------
    # Publishing
    # ------------------------------------------------------------------
    def publish(self, name: str | DataEvent, payload: Any = None) -> Event:
        key = _key(name)
        evt = Event(name=key, payload=payload, timestamp=perf_counter())
        subs = list(self._subs.get(key, ()))
        to_remove: List[Subscription] = []
        for sub in subs:
            if not sub.active:
                continue
            try:
                sub.handler(evt)
            except Exception as exc:  # noqa: BLE001 - capture any handler failure
                self._errors.append((evt, exc))
                _logger.warning("Handler for %r failed: %s", key, exc, exc_info=exc)
            else:
                if sub.once:
                    to_remove.append(sub)
        # Post-cleanup (remove once-handlers)
        for sub in to_remove:
            self.unsubscribe(sub)
        return evt

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    def subscriber_count(self, name: str | DataEvent) -> int:
        return len(self._subs.get(_key(name), ()))

    def list_events(self) -> list[str]:
        return list(self._subs.keys())

    @property
    def errors(self) -> list[tuple[Event, BaseException]]:
        return list(self._errors)
