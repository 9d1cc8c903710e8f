from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import crud
from app.dependencies import get_db, get_standards
from app.domain.annotations import new_annotation, PhotoAnnotation
from app.domain.photo_document import PhotoDocument
from app.domain.quality import QualityStandards
from app.schemas import (
    AnnotationCreate, AnnotationRead, MetadataIn, PhotoRead, PhotoReview, QualityResult,
)
from app.services.events import publish

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/photos", tags=["photos"])


async def load_photo(db: AsyncSession, photo_id: str, standards: QualityStandards) -> PhotoDocument:
    photo = await crud.get_photo(db, photo_id, standards)
    if photo is None:
        raise HTTPException(404, "Photo not found")
    return photo


@router.get("/{photo_id}", response_model=PhotoRead)
async def get_photo(
    photo_id: str,
    db: AsyncSession = Depends(get_db),
    standards: QualityStandards = Depends(get_standards),
):
    return PhotoRead.from_domain(await load_photo(db, photo_id, standards))


@router.put("/{photo_id}/metadata", response_model=QualityResult)
async def set_metadata(
    photo_id: str,
    body: MetadataIn,
    db: AsyncSession = Depends(get_db),
    standards: QualityStandards = Depends(get_standards),
):
    """Attach metadata. Violations are reported, not enforced."""
    photo = await load_photo(db, photo_id, standards)
    violations = photo.set_metadata(body.to_domain())
    await crud.save_photo(db, photo)
    return QualityResult(photo_id=photo.id, valid=not violations, violations=violations)


@router.post("/{photo_id}/approve", response_model=PhotoRead)
async def approve_photo(
    photo_id: str,
    body: PhotoReview,
    db: AsyncSession = Depends(get_db),
    standards: QualityStandards = Depends(get_standards),
):
    photo = await load_photo(db, photo_id, standards)
    event = photo.approve(body.reviewer, body.reviewed_at or datetime.now(timezone.utc))
    await crud.save_photo(db, photo)
    await publish([event])
    return PhotoRead.from_domain(photo)


@router.post("/{photo_id}/reject", response_model=PhotoRead)
async def reject_photo(
    photo_id: str,
    body: PhotoReview,
    db: AsyncSession = Depends(get_db),
    standards: QualityStandards = Depends(get_standards),
):
    photo = await load_photo(db, photo_id, standards)
    event = photo.reject(body.reviewer, body.reviewed_at or datetime.now(timezone.utc), body.reason)
    await crud.save_photo(db, photo)
    await publish([event])
    return PhotoRead.from_domain(photo)


@router.post("/{photo_id}/annotations", response_model=AnnotationRead, status_code=201)
async def add_annotation(
    photo_id: str,
    body: AnnotationCreate,
    db: AsyncSession = Depends(get_db),
    standards: QualityStandards = Depends(get_standards),
):
    photo = await load_photo(db, photo_id, standards)
    annotation = new_annotation(body.x, body.y, body.text, body.type)
    photo.add_annotation(annotation)
    await crud.save_photo(db, photo)
    return AnnotationRead.from_domain(annotation)


@router.put("/{photo_id}/annotations/{annotation_id}", response_model=AnnotationRead)
async def update_annotation(
    photo_id: str,
    annotation_id: str,
    body: AnnotationCreate,
    db: AsyncSession = Depends(get_db),
    standards: QualityStandards = Depends(get_standards),
):
    photo = await load_photo(db, photo_id, standards)
    updated = PhotoAnnotation(annotation_id, body.x, body.y, body.text, body.type)
    if not photo.update_annotation(updated):
        raise HTTPException(404, "Annotation not found")
    await crud.save_photo(db, photo)
    return AnnotationRead.from_domain(updated)


@router.delete("/{photo_id}/annotations/{annotation_id}", status_code=204)
async def delete_annotation(
    photo_id: str,
    annotation_id: str,
    db: AsyncSession = Depends(get_db),
    standards: QualityStandards = Depends(get_standards),
):
    photo = await load_photo(db, photo_id, standards)
    if not photo.remove_annotation(annotation_id):
        raise HTTPException(404, "Annotation not found")
    await crud.save_photo(db, photo)
