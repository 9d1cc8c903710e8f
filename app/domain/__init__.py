"""QC photo documentation lifecycle engine.

Pure, synchronous, in-memory entities. Persistence and delivery live in
app.db and app.services.
"""

from app.domain.errors import IllegalStateError, NotFoundError
from app.domain.metadata import PhotoMetadata
from app.domain.quality import QualityStandards, DEFAULT_STANDARDS, validate, is_valid
from app.domain.templates import RequiredField, PhotoTemplate, TemplateCatalog, DEFAULT_CATALOG
from app.domain.annotations import AnnotationType, PhotoAnnotation, new_annotation
from app.domain.photo_document import ApprovalStatus, PhotoDocument
from app.domain.order import OrderStatus, Order, ReadinessSummary, evaluate_readiness
from app.domain.report import ReportStatus, ReportFormat, Report

__all__ = [
    "IllegalStateError", "NotFoundError",
    "PhotoMetadata",
    "QualityStandards", "DEFAULT_STANDARDS", "validate", "is_valid",
    "RequiredField", "PhotoTemplate", "TemplateCatalog", "DEFAULT_CATALOG",
    "AnnotationType", "PhotoAnnotation", "new_annotation",
    "ApprovalStatus", "PhotoDocument",
    "OrderStatus", "Order", "ReadinessSummary", "evaluate_readiness",
    "ReportStatus", "ReportFormat", "Report",
]
