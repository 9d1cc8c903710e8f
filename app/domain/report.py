"""QC report entity.

Two lifecycles share one status enum:

generation   PENDING -> GENERATING -> COMPLETED | FAILED;  COMPLETED -> ARCHIVED
business     finalize_report() (needs a recipient) -> GENERATED -> APPROVED -> DELIVERED
             GENERATED | COMPLETED -> REJECTED;  archive_any() from anywhere

`version` only moves when a caller asks for it.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Iterable

from ulid import ULID

from app.domain.errors import IllegalStateError, require
from app.domain.events import ReportCompleted, ReportFailed, ReportFinalized
from app.domain.order import Order
from app.domain.photo_document import Clock, utcnow


class ReportStatus(str, Enum):
    PENDING = "PENDING"
    GENERATING = "GENERATING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    PROCESSING = "PROCESSING"
    GENERATED = "GENERATED"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    DELIVERED = "DELIVERED"
    ARCHIVED = "ARCHIVED"


class ReportFormat(str, Enum):
    PDF = "PDF"
    HTML = "HTML"
    DOCX = "DOCX"


_REVIEWABLE = frozenset({ReportStatus.GENERATED, ReportStatus.COMPLETED})


class Report:
    def __init__(
        self,
        id: str,
        order_id: str,
        generated_by: str,
        generated_at: datetime,
        *,
        photo_ids: Iterable[str] = (),
        title: str = "",
        format: ReportFormat = ReportFormat.PDF,
        status: ReportStatus = ReportStatus.PENDING,
        recipient: str | None = None,
        comments: str | None = None,
        version: int = 1,
        content: bytes | None = None,
        file_url: str | None = None,
        error_message: str | None = None,
        completed_at: datetime | None = None,
        approved_by: str | None = None,
        approved_at: datetime | None = None,
        last_modified_at: datetime | None = None,
        clock: Clock = utcnow,
    ):
        self.id = require(id, "id")
        self.order_id = require(order_id, "order_id")
        self.generated_by = require(generated_by, "generated_by")
        self.generated_at = require(generated_at, "generated_at")
        self._photo_ids: list[str] = list(dict.fromkeys(photo_ids))
        self._title = title
        self._format = ReportFormat(format)
        self._status = ReportStatus(status)
        self._recipient = recipient
        self._comments = comments
        self._version = version if version and version > 0 else 1
        self._content = bytes(content) if content is not None else None
        self._file_url = file_url
        self._error_message = error_message
        self._completed_at = completed_at
        self._approved_by = approved_by
        self._approved_at = approved_at
        self._last_modified_at = last_modified_at or generated_at
        self._clock = clock

    @classmethod
    def create_for_order(
        cls,
        order: Order,
        generated_by: str,
        generated_at: datetime | None = None,
        **kwargs,
    ) -> Report:
        """Start a PENDING report packaging every approved photo of a ready order."""
        require(order, "order")
        if not order.is_ready_for_qa_review():
            raise IllegalStateError(
                f"Order {order.order_number} is not ready for QA review (status: {order.status.value})",
                order.status,
            )
        approved = order.approved_photos()
        if not approved:
            raise IllegalStateError(
                f"Order {order.order_number} has no approved photos for report generation",
                order.status,
            )
        clock = kwargs.get("clock", utcnow)
        kwargs.setdefault("title", f"QC report for order {order.order_number}")
        return cls(
            str(ULID()), order.id, generated_by, generated_at or clock(),
            photo_ids=[p.id for p in approved], **kwargs,
        )

    # ── transition-owned state (read-only) ─────────────

    @property
    def photo_ids(self) -> tuple[str, ...]:
        return tuple(self._photo_ids)

    @property
    def title(self) -> str:
        return self._title

    @property
    def format(self) -> ReportFormat:
        return self._format

    @property
    def status(self) -> ReportStatus:
        return self._status

    @property
    def recipient(self) -> str | None:
        return self._recipient

    @property
    def comments(self) -> str | None:
        return self._comments

    @comments.setter
    def comments(self, value: str | None) -> None:
        self._comments = value
        self._touch()

    @property
    def version(self) -> int:
        return self._version

    @property
    def content(self) -> bytes | None:
        return self._content

    @property
    def file_url(self) -> str | None:
        return self._file_url

    @property
    def error_message(self) -> str | None:
        return self._error_message

    @property
    def completed_at(self) -> datetime | None:
        return self._completed_at

    @property
    def approved_by(self) -> str | None:
        return self._approved_by

    @property
    def approved_at(self) -> datetime | None:
        return self._approved_at

    @property
    def last_modified_at(self) -> datetime:
        return self._last_modified_at

    def is_draft(self) -> bool:
        return self._status in (ReportStatus.PENDING, ReportStatus.PROCESSING)

    def is_final(self) -> bool:
        return self._status in (ReportStatus.GENERATED, ReportStatus.APPROVED)

    def is_sent(self) -> bool:
        return self._status is ReportStatus.DELIVERED

    def is_archived(self) -> bool:
        return self._status is ReportStatus.ARCHIVED

    # ── PENDING-only edits ───────────────────────────────

    def _require_status(self, allowed: ReportStatus | frozenset[ReportStatus], what: str) -> None:
        allowed_set = allowed if isinstance(allowed, frozenset) else frozenset({allowed})
        if self._status not in allowed_set:
            names = "/".join(sorted(s.value for s in allowed_set))
            raise IllegalStateError(
                f"Cannot {what} a report that is not in {names} status (current: {self._status.value})",
                self._status,
            )

    def include_photo(self, photo_id: str) -> bool:
        """Add a photo reference. Returns False if it was already included."""
        self._require_status(ReportStatus.PENDING, "modify included photos for")
        require(photo_id, "photo_id")
        if photo_id in self._photo_ids:
            return False
        self._photo_ids.append(photo_id)
        self._touch()
        return True

    def set_title(self, title: str) -> None:
        self._require_status(ReportStatus.PENDING, "update title for")
        self._title = require(title, "title")
        self._touch()

    def set_format(self, format: ReportFormat) -> None:
        self._require_status(ReportStatus.PENDING, "update format for")
        self._format = ReportFormat(require(format, "format"))
        self._touch()

    # ── generation lifecycle ─────────────────────────────

    def start_generation(self) -> None:
        self._require_status(ReportStatus.PENDING, "start generation for")
        self._status = ReportStatus.GENERATING
        self._touch()

    def complete(self, file_url: str, completed_at: datetime) -> ReportCompleted:
        self._require_status(ReportStatus.GENERATING, "complete")
        require(file_url, "file_url")
        require(completed_at, "completed_at")
        self._file_url = file_url
        self._completed_at = completed_at
        self._status = ReportStatus.COMPLETED
        self._last_modified_at = completed_at
        return ReportCompleted(
            occurred_at=completed_at, report_id=self.id, order_id=self.order_id, file_url=file_url,
        )

    def fail(self, error_message: str) -> ReportFailed:
        self._require_status(ReportStatus.GENERATING, "mark as failed")
        self._error_message = require(error_message, "error_message")
        self._status = ReportStatus.FAILED
        self._touch()
        return ReportFailed(
            occurred_at=self._last_modified_at, report_id=self.id,
            order_id=self.order_id, error_message=error_message,
        )

    def archive(self) -> None:
        self._require_status(ReportStatus.COMPLETED, "archive")
        self._status = ReportStatus.ARCHIVED
        self._touch()

    def set_content(self, content: bytes | None) -> None:
        self._content = bytes(content) if content is not None else None
        self._touch()

    # ── business lifecycle ───────────────────────────────

    def set_recipient(self, recipient: str) -> None:
        self._recipient = require(recipient, "recipient")
        self._touch()

    def mark_processing(self) -> None:
        self._require_status(ReportStatus.PENDING, "start processing")
        self._status = ReportStatus.PROCESSING
        self._touch()

    def finalize_report(self) -> ReportFinalized:
        if self._recipient is None:
            raise IllegalStateError("Cannot finalize a report without a recipient", self._status)
        self._status = ReportStatus.GENERATED
        self._touch()
        return ReportFinalized(
            occurred_at=self._last_modified_at, report_id=self.id, order_id=self.order_id,
            generated_by=self.generated_by, recipient=self._recipient,
        )

    def approve(self, approver: str, approved_at: datetime | None = None) -> None:
        require(approver, "approver")
        if self._status is ReportStatus.APPROVED:
            raise IllegalStateError("Report is already approved", self._status)
        self._require_status(_REVIEWABLE, "approve")
        self._status = ReportStatus.APPROVED
        self._approved_by = approver
        self._approved_at = approved_at or self._clock()
        self._last_modified_at = self._approved_at

    def reject_report(self, reason: str | None = None) -> None:
        self._require_status(_REVIEWABLE, "reject")
        self._status = ReportStatus.REJECTED
        if reason is not None:
            self._comments = reason
        self._touch()

    def mark_as_sent(self) -> None:
        if self._status is not ReportStatus.APPROVED:
            raise IllegalStateError("Cannot mark a report as sent if it is not approved", self._status)
        self._status = ReportStatus.DELIVERED
        self._touch()

    def archive_any(self) -> None:
        self._status = ReportStatus.ARCHIVED
        self._touch()

    def increment_version(self) -> int:
        self._version += 1
        self._touch()
        return self._version

    def _touch(self) -> None:
        self._last_modified_at = self._clock()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Report):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self) -> str:
        return f"Report(id={self.id!r}, order_id={self.order_id!r}, status={self._status.value}, v{self._version})"
