"""SQLAlchemy ORM models.

Rows mirror the domain entities in app.domain; app.db.crud maps between them.
"""

from app.models.base import Base
from app.models.order import OrderRecord
from app.models.photo_document import PhotoDocumentRecord
from app.models.report import ReportRecord

__all__ = ["Base", "OrderRecord", "PhotoDocumentRecord", "ReportRecord"]
