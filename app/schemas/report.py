from __future__ import annotations
from datetime import datetime
from pydantic import BaseModel

from app.domain.report import Report, ReportFormat, ReportStatus


class ReportCreate(BaseModel):
    generated_by: str
    recipient: str | None = None
    title: str | None = None
    format: ReportFormat | None = None
    comments: str | None = None


class ReportAction(BaseModel):
    actor: str | None = None
    recipient: str | None = None
    reason: str | None = None


class ReportRead(BaseModel):
    id: str
    order_id: str
    photo_ids: list[str]
    generated_by: str
    generated_at: datetime
    title: str
    format: ReportFormat
    status: ReportStatus
    recipient: str | None = None
    comments: str | None = None
    version: int
    has_content: bool = False
    file_url: str | None = None
    error_message: str | None = None
    completed_at: datetime | None = None
    approved_by: str | None = None
    approved_at: datetime | None = None

    @classmethod
    def from_domain(cls, r: Report) -> ReportRead:
        return cls(
            id=r.id,
            order_id=r.order_id,
            photo_ids=list(r.photo_ids),
            generated_by=r.generated_by,
            generated_at=r.generated_at,
            title=r.title,
            format=r.format,
            status=r.status,
            recipient=r.recipient,
            comments=r.comments,
            version=r.version,
            has_content=r.content is not None,
            file_url=r.file_url,
            error_message=r.error_message,
            completed_at=r.completed_at,
            approved_by=r.approved_by,
            approved_at=r.approved_at,
        )
