"""Publishing of domain events returned by entity transitions."""

from __future__ import annotations

import logging
from typing import Iterable

from app.domain.events import DomainEvent, EventDispatcher
from app.schemas.event import EventMessage
from app.services.ws_manager import ws_manager

logger = logging.getLogger(__name__)

dispatcher = EventDispatcher()


def _log_event(event: DomainEvent) -> None:
    logger.info("Domain event %s: %s", event.name, event)


dispatcher.subscribe(DomainEvent, _log_event)


async def publish(events: Iterable[DomainEvent | None]) -> int:
    """Dispatch in-process, then push each event to the order's websocket watchers."""
    published = 0
    for event in events:
        if event is None:
            continue
        dispatcher.publish(event)
        order_id = getattr(event, "order_id", None)
        if order_id:
            await ws_manager.broadcast(order_id, EventMessage.from_domain(event).model_dump())
        published += 1
    return published
