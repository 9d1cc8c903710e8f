from __future__ import annotations
from datetime import datetime
from pydantic import BaseModel

from app.domain.order import Order, OrderStatus, ReadinessSummary
from app.schemas.photo import PhotoRead


class OrderCreate(BaseModel):
    order_number: str
    created_by: str
    customer_id: str | None = None


class OrderRead(BaseModel):
    id: str
    order_number: str
    customer_id: str | None = None
    created_by: str
    created_at: datetime
    status: OrderStatus
    last_modified_at: datetime
    photos: list[PhotoRead] = []

    @classmethod
    def from_domain(cls, o: Order) -> OrderRead:
        return cls(
            id=o.id,
            order_number=o.order_number,
            customer_id=o.customer_id,
            created_by=o.created_by,
            created_at=o.created_at,
            status=o.status,
            last_modified_at=o.last_modified_at,
            photos=[PhotoRead.from_domain(p) for p in o.photos],
        )


class ReadinessRead(BaseModel):
    order_id: str
    status: OrderStatus
    ready_for_qa_review: bool
    approved_photo_ids: list[str]
    pending_photo_ids: list[str]
    rejected_photo_ids: list[str]

    @classmethod
    def from_summary(cls, order_id: str, s: ReadinessSummary) -> ReadinessRead:
        return cls(
            order_id=order_id,
            status=s.status,
            ready_for_qa_review=s.ready_for_qa_review,
            approved_photo_ids=[p.id for p in s.approved],
            pending_photo_ids=[p.id for p in s.pending],
            rejected_photo_ids=[p.id for p in s.rejected],
        )
