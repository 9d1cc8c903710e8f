"""Domain event values and a synchronous in-process dispatcher.

Entities return these from their transitions; they never publish them.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DomainEvent:
    occurred_at: datetime

    @property
    def name(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class PhotoApproved(DomainEvent):
    photo_id: str
    order_id: str | None
    reviewer: str


@dataclass(frozen=True)
class PhotoRejected(DomainEvent):
    photo_id: str
    order_id: str | None
    reviewer: str
    reason: str | None = None


@dataclass(frozen=True)
class ReportCompleted(DomainEvent):
    report_id: str
    order_id: str
    file_url: str


@dataclass(frozen=True)
class ReportFailed(DomainEvent):
    report_id: str
    order_id: str
    error_message: str


@dataclass(frozen=True)
class ReportFinalized(DomainEvent):
    report_id: str
    order_id: str
    generated_by: str
    recipient: str


Handler = Callable[[DomainEvent], None]


class EventDispatcher:
    """Delivers events to handlers subscribed to their type (or a base type)."""

    def __init__(self):
        self._handlers: dict[type, list[Handler]] = defaultdict(list)

    def subscribe(self, event_type: type, handler: Handler) -> None:
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: type, handler: Handler) -> bool:
        handlers = self._handlers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)
            return True
        return False

    def publish(self, event: DomainEvent) -> int:
        """Call every matching handler in subscription order. Returns the call count."""
        delivered = 0
        for event_type in type(event).__mro__:
            for handler in list(self._handlers.get(event_type, [])):
                handler(event)
                delivered += 1
        logger.debug("Published %s to %d handler(s)", event.name, delivered)
        return delivered

    def publish_all(self, events: Iterable[DomainEvent | None]) -> int:
        return sum(self.publish(e) for e in events if e is not None)
