from __future__ import annotations

from datetime import datetime

from sqlalchemy import String, ForeignKey, JSON, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base, ULIDMixin


class PhotoDocumentRecord(Base, ULIDMixin):
    __tablename__ = "photo_documents"

    order_id: Mapped[str | None] = mapped_column(String(26), ForeignKey("orders.id"), nullable=True)
    template_name: Mapped[str] = mapped_column(String(100))
    template_description: Mapped[str] = mapped_column(String(500), default="")
    image_path: Mapped[str] = mapped_column(String(500))
    uploaded_by: Mapped[str] = mapped_column(String(100))
    uploaded_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    status: Mapped[str] = mapped_column(String(20), default="PENDING")  # PENDING | APPROVED | REJECTED
    reviewed_by: Mapped[str | None] = mapped_column(String(100), nullable=True, default=None)
    reviewed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, default=None)
    review_comment: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    metadata_json: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    annotations_json: Mapped[list] = mapped_column(JSON, default=list)
