from __future__ import annotations
from dataclasses import asdict
from typing import Any
from pydantic import BaseModel

from app.domain.events import DomainEvent


class EventMessage(BaseModel):
    event: str  # PhotoApproved | PhotoRejected | ReportCompleted | ReportFailed | ReportFinalized
    data: dict[str, Any] = {}

    @classmethod
    def from_domain(cls, e: DomainEvent) -> EventMessage:
        data = asdict(e)
        data["occurred_at"] = e.occurred_at.isoformat()
        return cls(event=e.name, data=data)
