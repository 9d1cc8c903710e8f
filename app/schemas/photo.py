from __future__ import annotations
from datetime import datetime
from pydantic import BaseModel, Field

from app.domain.annotations import AnnotationType, PhotoAnnotation
from app.domain.metadata import PhotoMetadata
from app.domain.photo_document import ApprovalStatus, PhotoDocument


class MetadataIn(BaseModel):
    width: int
    height: int
    file_size: int
    image_format: str
    color_space: str
    dpi: int | None = None

    def to_domain(self) -> PhotoMetadata:
        return PhotoMetadata(**self.model_dump())


class MetadataRead(MetadataIn):
    megapixels: float
    aspect_ratio: float
    resolution: str

    @classmethod
    def from_domain(cls, m: PhotoMetadata) -> MetadataRead:
        return cls(
            **m.to_dict(), megapixels=m.megapixels,
            aspect_ratio=m.aspect_ratio, resolution=m.resolution,
        )


class AnnotationCreate(BaseModel):
    x: float = Field(ge=0.0, le=1.0)
    y: float = Field(ge=0.0, le=1.0)
    text: str
    type: AnnotationType = AnnotationType.NOTE


class AnnotationRead(AnnotationCreate):
    id: str

    @classmethod
    def from_domain(cls, a: PhotoAnnotation) -> AnnotationRead:
        return cls(id=a.id, x=a.x, y=a.y, text=a.text, type=a.type)


class PhotoCreate(BaseModel):
    template: str
    template_description: str | None = None  # only for templates outside the catalog
    image_path: str
    uploaded_by: str
    metadata: MetadataIn | None = None


class PhotoReview(BaseModel):
    reviewer: str
    reviewed_at: datetime | None = None
    reason: str | None = None


class PhotoRead(BaseModel):
    id: str
    order_id: str | None = None
    template: str
    image_path: str
    uploaded_by: str
    uploaded_at: datetime
    status: ApprovalStatus
    reviewed_by: str | None = None
    reviewed_at: datetime | None = None
    review_comment: str | None = None
    metadata: MetadataRead | None = None
    annotations: list[AnnotationRead] = []
    meets_quality_standards: bool = False
    last_modified_at: datetime

    @classmethod
    def from_domain(cls, p: PhotoDocument) -> PhotoRead:
        return cls(
            id=p.id,
            order_id=p.order_id,
            template=p.template.name,
            image_path=p.image_path,
            uploaded_by=p.uploaded_by,
            uploaded_at=p.uploaded_at,
            status=p.status,
            reviewed_by=p.reviewed_by,
            reviewed_at=p.reviewed_at,
            review_comment=p.review_comment,
            metadata=MetadataRead.from_domain(p.metadata) if p.metadata else None,
            annotations=[AnnotationRead.from_domain(a) for a in p.annotations],
            meets_quality_standards=p.meets_quality_standards(),
            last_modified_at=p.last_modified_at,
        )


class QualityResult(BaseModel):
    photo_id: str | None = None
    valid: bool
    violations: list[str] = []
