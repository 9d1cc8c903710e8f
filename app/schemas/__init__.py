"""Pydantic request/response schemas."""

from app.schemas.photo import (
    MetadataIn, MetadataRead, AnnotationCreate, AnnotationRead,
    PhotoCreate, PhotoReview, PhotoRead, QualityResult,
)
from app.schemas.order import OrderCreate, OrderRead, ReadinessRead
from app.schemas.report import ReportCreate, ReportAction, ReportRead
from app.schemas.template import TemplateRead
from app.schemas.event import EventMessage

__all__ = [
    "MetadataIn", "MetadataRead", "AnnotationCreate", "AnnotationRead",
    "PhotoCreate", "PhotoReview", "PhotoRead", "QualityResult",
    "OrderCreate", "OrderRead", "ReadinessRead",
    "ReportCreate", "ReportAction", "ReportRead",
    "TemplateRead",
    "EventMessage",
]
