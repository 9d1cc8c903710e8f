from __future__ import annotations

from datetime import datetime

from sqlalchemy import String, ForeignKey, JSON, DateTime, Integer, LargeBinary, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, ULIDMixin


class ReportRecord(Base, ULIDMixin):
    __tablename__ = "reports"

    order_id: Mapped[str] = mapped_column(String(26), ForeignKey("orders.id"))
    photo_ids: Mapped[list] = mapped_column(JSON, default=list)
    generated_by: Mapped[str] = mapped_column(String(100))
    generated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    title: Mapped[str] = mapped_column(String(255), default="")
    format: Mapped[str] = mapped_column(String(10), default="PDF")
    status: Mapped[str] = mapped_column(String(20), default="PENDING")  # see ReportStatus
    recipient: Mapped[str | None] = mapped_column(String(255), nullable=True, default=None)
    comments: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    version: Mapped[int] = mapped_column(Integer, default=1)
    content: Mapped[bytes | None] = mapped_column(LargeBinary, nullable=True, default=None)
    file_url: Mapped[str | None] = mapped_column(String(500), nullable=True, default=None)
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, default=None)
    approved_by: Mapped[str | None] = mapped_column(String(100), nullable=True, default=None)
    approved_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, default=None)
