"""Photo document entity and its approval state machine.

PENDING -> APPROVED | REJECTED. Both outcomes are terminal. Transitions
return an event value for the caller to publish.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Iterable

from ulid import ULID

from app.domain.annotations import PhotoAnnotation
from app.domain.errors import IllegalStateError, require
from app.domain.events import PhotoApproved, PhotoRejected
from app.domain.metadata import PhotoMetadata
from app.domain.quality import DEFAULT_STANDARDS, QualityStandards, validate
from app.domain.templates import PhotoTemplate

Clock = Callable[[], datetime]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ApprovalStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @property
    def is_terminal(self) -> bool:
        return self is not ApprovalStatus.PENDING


def approval_transition(current: ApprovalStatus, target: ApprovalStatus) -> ApprovalStatus:
    """Return the new status, or raise IllegalStateError if current is already decided."""
    if target is ApprovalStatus.PENDING:
        raise ValueError("PENDING is not a transition target")
    if current is not ApprovalStatus.PENDING:
        raise IllegalStateError(f"Photo is already {current.value.lower()}", current)
    return target


class PhotoDocument:
    """One QC photo with its review state, metadata and annotations."""

    def __init__(
        self,
        id: str,
        template: PhotoTemplate,
        image_path: str,
        uploaded_by: str,
        uploaded_at: datetime,
        *,
        order_id: str | None = None,
        metadata: PhotoMetadata | None = None,
        annotations: Iterable[PhotoAnnotation] = (),
        status: ApprovalStatus = ApprovalStatus.PENDING,
        reviewed_by: str | None = None,
        reviewed_at: datetime | None = None,
        review_comment: str | None = None,
        last_modified_at: datetime | None = None,
        standards: QualityStandards = DEFAULT_STANDARDS,
        clock: Clock = utcnow,
    ):
        self.id = require(id, "id")
        self.template = require(template, "template")
        self.image_path = require(image_path, "image_path")
        self.uploaded_by = require(uploaded_by, "uploaded_by")
        self.uploaded_at = require(uploaded_at, "uploaded_at")
        self._order_id = order_id
        self._metadata = metadata
        self._annotations: list[PhotoAnnotation] = list(annotations)
        self._status = ApprovalStatus(status)
        self._reviewed_by = reviewed_by
        self._reviewed_at = reviewed_at
        self._review_comment = review_comment
        self._last_modified_at = last_modified_at or uploaded_at
        self._standards = standards
        self._clock = clock

    @classmethod
    def upload(
        cls,
        template: PhotoTemplate,
        image_path: str,
        uploaded_by: str,
        uploaded_at: datetime | None = None,
        **kwargs,
    ) -> PhotoDocument:
        """Create a new PENDING document with a generated id."""
        clock = kwargs.get("clock", utcnow)
        return cls(str(ULID()), template, image_path, uploaded_by, uploaded_at or clock(), **kwargs)

    # ── transition-owned state (read-only) ─────────────

    @property
    def order_id(self) -> str | None:
        return self._order_id

    @property
    def metadata(self) -> PhotoMetadata | None:
        return self._metadata

    @property
    def annotations(self) -> tuple[PhotoAnnotation, ...]:
        return tuple(self._annotations)

    @property
    def status(self) -> ApprovalStatus:
        return self._status

    @property
    def reviewed_by(self) -> str | None:
        return self._reviewed_by

    @property
    def reviewed_at(self) -> datetime | None:
        return self._reviewed_at

    @property
    def review_comment(self) -> str | None:
        return self._review_comment

    @property
    def last_modified_at(self) -> datetime:
        return self._last_modified_at

    def is_pending(self) -> bool:
        return self._status is ApprovalStatus.PENDING

    def is_approved(self) -> bool:
        return self._status is ApprovalStatus.APPROVED

    def is_rejected(self) -> bool:
        return self._status is ApprovalStatus.REJECTED

    # ── order binding ────────────────────────────────────

    def assign_to_order(self, order_id: str) -> None:
        self._order_id = require(order_id, "order_id")
        self._touch()

    # ── review ───────────────────────────────────────────

    def approve(self, reviewer: str, reviewed_at: datetime) -> PhotoApproved:
        new_status = approval_transition(self._status, ApprovalStatus.APPROVED)
        require(reviewer, "reviewer")
        require(reviewed_at, "reviewed_at")

        self._status = new_status
        self._reviewed_by = reviewer
        self._reviewed_at = reviewed_at
        self._last_modified_at = reviewed_at
        return PhotoApproved(
            occurred_at=reviewed_at, photo_id=self.id, order_id=self._order_id, reviewer=reviewer,
        )

    def reject(self, reviewer: str, reviewed_at: datetime, reason: str | None = None) -> PhotoRejected:
        new_status = approval_transition(self._status, ApprovalStatus.REJECTED)
        require(reviewer, "reviewer")
        require(reviewed_at, "reviewed_at")

        self._status = new_status
        self._reviewed_by = reviewer
        self._reviewed_at = reviewed_at
        self._review_comment = reason
        self._last_modified_at = reviewed_at
        return PhotoRejected(
            occurred_at=reviewed_at, photo_id=self.id, order_id=self._order_id,
            reviewer=reviewer, reason=reason,
        )

    # ── metadata / quality ───────────────────────────────

    def set_metadata(self, metadata: PhotoMetadata) -> list[str]:
        """Attach metadata and return its quality violations (not enforced here)."""
        require(metadata, "metadata")
        self._metadata = metadata
        self._touch()
        return validate(metadata, self._standards)

    def quality_violations(self) -> list[str]:
        if self._metadata is None:
            return []
        return validate(self._metadata, self._standards)

    def meets_quality_standards(self) -> bool:
        return self._metadata is not None and not validate(self._metadata, self._standards)

    # ── annotations ──────────────────────────────────────

    def add_annotation(self, annotation: PhotoAnnotation) -> bool:
        require(annotation, "annotation")
        self._annotations.append(annotation)
        self._touch()
        return True

    def remove_annotation(self, annotation_id: str) -> bool:
        require(annotation_id, "annotation_id")
        kept = [a for a in self._annotations if a.id != annotation_id]
        if len(kept) == len(self._annotations):
            return False
        self._annotations = kept
        self._touch()
        return True

    def update_annotation(self, updated: PhotoAnnotation) -> bool:
        require(updated, "annotation")
        for i, existing in enumerate(self._annotations):
            if existing.id == updated.id:
                self._annotations[i] = updated
                self._touch()
                return True
        return False

    def find_annotation(self, annotation_id: str) -> PhotoAnnotation | None:
        return next((a for a in self._annotations if a.id == annotation_id), None)

    # ── internals ────────────────────────────────────────

    def _touch(self) -> None:
        self._last_modified_at = self._clock()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PhotoDocument):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"PhotoDocument(id={self.id!r}, template={self.template.name!r}, status={self._status.value})"
