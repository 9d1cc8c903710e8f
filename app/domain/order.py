"""Order entity and the QA-readiness evaluation over its photo documents."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable

from ulid import ULID

from app.domain.errors import IllegalStateError, require
from app.domain.photo_document import ApprovalStatus, Clock, PhotoDocument, utcnow


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


# action -> (allowed source statuses, target)
_ORDER_TRANSITIONS: dict[str, tuple[frozenset[OrderStatus], OrderStatus]] = {
    "start_processing": (frozenset({OrderStatus.PENDING}), OrderStatus.IN_PROGRESS),
    "complete_processing": (frozenset({OrderStatus.IN_PROGRESS}), OrderStatus.COMPLETED),
    "approve": (frozenset({OrderStatus.COMPLETED}), OrderStatus.APPROVED),
    "reject": (frozenset({OrderStatus.COMPLETED}), OrderStatus.REJECTED),
    "deliver": (frozenset({OrderStatus.APPROVED}), OrderStatus.DELIVERED),
    "cancel": (frozenset(OrderStatus) - {OrderStatus.DELIVERED}, OrderStatus.CANCELLED),
}

ORDER_ACTIONS = tuple(_ORDER_TRANSITIONS)


@dataclass(frozen=True)
class ReadinessSummary:
    status: OrderStatus
    approved: tuple[PhotoDocument, ...]
    pending: tuple[PhotoDocument, ...]
    rejected: tuple[PhotoDocument, ...]

    @property
    def total(self) -> int:
        return len(self.approved) + len(self.pending) + len(self.rejected)

    @property
    def ready_for_qa_review(self) -> bool:
        return self.status is OrderStatus.COMPLETED and self.total > 0


def evaluate_readiness(status: OrderStatus, photos: Iterable[PhotoDocument]) -> ReadinessSummary:
    """Partition photos by approval status.

    Readiness is deliberately coarse: COMPLETED plus at least one photo of
    any status.
    """
    status = OrderStatus(status)
    buckets: dict[ApprovalStatus, list[PhotoDocument]] = {s: [] for s in ApprovalStatus}
    for photo in photos:
        buckets[photo.status].append(photo)
    return ReadinessSummary(
        status=status,
        approved=tuple(buckets[ApprovalStatus.APPROVED]),
        pending=tuple(buckets[ApprovalStatus.PENDING]),
        rejected=tuple(buckets[ApprovalStatus.REJECTED]),
    )


class Order:
    def __init__(
        self,
        id: str,
        order_number: str,
        created_by: str,
        created_at: datetime,
        *,
        customer_id: str | None = None,
        status: OrderStatus = OrderStatus.PENDING,
        photos: Iterable[PhotoDocument] = (),
        last_modified_at: datetime | None = None,
        clock: Clock = utcnow,
    ):
        self.id = require(id, "id")
        self.order_number = require(order_number, "order_number")
        self.created_by = require(created_by, "created_by")
        self.created_at = require(created_at, "created_at")
        self._customer_id = customer_id
        self._status = OrderStatus(status)
        self._photos: list[PhotoDocument] = list(photos)
        self._last_modified_at = last_modified_at or created_at
        self._clock = clock

    @classmethod
    def create(cls, order_number: str, created_by: str, **kwargs) -> Order:
        clock = kwargs.get("clock", utcnow)
        return cls(str(ULID()), order_number, created_by, clock(), **kwargs)

    @property
    def customer_id(self) -> str | None:
        return self._customer_id

    @customer_id.setter
    def customer_id(self, value: str) -> None:
        self._customer_id = require(value, "customer_id")
        self._touch()

    @property
    def status(self) -> OrderStatus:
        return self._status

    @property
    def photos(self) -> tuple[PhotoDocument, ...]:
        return tuple(self._photos)

    @property
    def last_modified_at(self) -> datetime:
        return self._last_modified_at

    # ── photos ───────────────────────────────────────────

    def add_photo(self, photo: PhotoDocument) -> None:
        require(photo, "photo")
        photo.assign_to_order(self.id)
        self._photos.append(photo)
        self._touch()

    def get_photo(self, photo_id: str) -> PhotoDocument | None:
        return next((p for p in self._photos if p.id == photo_id), None)

    def readiness(self) -> ReadinessSummary:
        return evaluate_readiness(self._status, self._photos)

    def approved_photos(self) -> list[PhotoDocument]:
        return [p for p in self._photos if p.is_approved()]

    def pending_photos(self) -> list[PhotoDocument]:
        return [p for p in self._photos if p.is_pending()]

    def rejected_photos(self) -> list[PhotoDocument]:
        return [p for p in self._photos if p.is_rejected()]

    def is_ready_for_qa_review(self) -> bool:
        return self._status is OrderStatus.COMPLETED and bool(self._photos)

    def is_approved(self) -> bool:
        return self._status is OrderStatus.APPROVED

    def is_rejected(self) -> bool:
        return self._status is OrderStatus.REJECTED

    def is_delivered(self) -> bool:
        return self._status is OrderStatus.DELIVERED

    # ── status transitions ───────────────────────────────

    def apply(self, action: str) -> OrderStatus:
        """Run a named status transition (see ORDER_ACTIONS)."""
        try:
            allowed, target = _ORDER_TRANSITIONS[action]
        except KeyError:
            raise ValueError(f"Unknown order action: {action}") from None
        if self._status not in allowed:
            if action == "cancel":
                raise IllegalStateError("Cannot cancel an order that has already been delivered", self._status)
            verb = action.split("_")[0]
            raise IllegalStateError(f"Cannot {verb} an order with status: {self._status.value}", self._status)
        self._status = target
        self._touch()
        return target

    def start_processing(self) -> None:
        self.apply("start_processing")

    def complete_processing(self) -> None:
        self.apply("complete_processing")

    def approve(self) -> None:
        self.apply("approve")

    def reject(self) -> None:
        self.apply("reject")

    def deliver(self) -> None:
        self.apply("deliver")

    def cancel(self) -> None:
        self.apply("cancel")

    def _touch(self) -> None:
        self._last_modified_at = self._clock()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Order):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Order(id={self.id!r}, number={self.order_number!r}, status={self._status.value})"
