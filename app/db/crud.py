"""Load and save domain entities.

Rows are mapped to and from app.domain entities verbatim; no business rule
is checked here.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.annotations import PhotoAnnotation
from app.domain.metadata import PhotoMetadata
from app.domain.order import Order, OrderStatus
from app.domain.photo_document import ApprovalStatus, PhotoDocument
from app.domain.quality import DEFAULT_STANDARDS, QualityStandards
from app.domain.report import Report, ReportFormat, ReportStatus
from app.domain.templates import PhotoTemplate, DEFAULT_CATALOG
from app.models import OrderRecord, PhotoDocumentRecord, ReportRecord
from app.models.base import as_utc


# ── PhotoDocument ─────────────────────────────────────────

def _photo_from_record(
    rec: PhotoDocumentRecord, standards: QualityStandards = DEFAULT_STANDARDS
) -> PhotoDocument:
    template = DEFAULT_CATALOG.find(rec.template_name)
    if template is None:
        template = PhotoTemplate.of(rec.template_name, rec.template_description or rec.template_name)
    return PhotoDocument(
        rec.id,
        template,
        rec.image_path,
        rec.uploaded_by,
        as_utc(rec.uploaded_at),
        order_id=rec.order_id,
        metadata=PhotoMetadata.from_dict(rec.metadata_json) if rec.metadata_json else None,
        annotations=[PhotoAnnotation.from_dict(a) for a in rec.annotations_json or []],
        status=ApprovalStatus(rec.status),
        reviewed_by=rec.reviewed_by,
        reviewed_at=as_utc(rec.reviewed_at),
        review_comment=rec.review_comment,
        last_modified_at=as_utc(rec.last_modified_at),
        standards=standards,
    )


def _apply_photo(rec: PhotoDocumentRecord, photo: PhotoDocument) -> None:
    rec.order_id = photo.order_id
    rec.template_name = photo.template.name
    rec.template_description = photo.template.description
    rec.image_path = photo.image_path
    rec.uploaded_by = photo.uploaded_by
    rec.uploaded_at = photo.uploaded_at
    rec.status = photo.status.value
    rec.reviewed_by = photo.reviewed_by
    rec.reviewed_at = photo.reviewed_at
    rec.review_comment = photo.review_comment
    rec.metadata_json = photo.metadata.to_dict() if photo.metadata else None
    rec.annotations_json = [a.to_dict() for a in photo.annotations]
    rec.last_modified_at = photo.last_modified_at


async def _stage_photo(db: AsyncSession, photo: PhotoDocument) -> PhotoDocumentRecord:
    rec = await db.get(PhotoDocumentRecord, photo.id)
    if rec is None:
        rec = PhotoDocumentRecord(id=photo.id)
        db.add(rec)
    _apply_photo(rec, photo)
    return rec


async def save_photo(db: AsyncSession, photo: PhotoDocument) -> PhotoDocument:
    await _stage_photo(db, photo)
    await db.commit()
    return photo


async def get_photo(
    db: AsyncSession, photo_id: str, standards: QualityStandards = DEFAULT_STANDARDS
) -> PhotoDocument | None:
    rec = await db.get(PhotoDocumentRecord, photo_id)
    return _photo_from_record(rec, standards) if rec else None


async def list_photos_for_order(
    db: AsyncSession, order_id: str, standards: QualityStandards = DEFAULT_STANDARDS
) -> list[PhotoDocument]:
    result = await db.execute(
        select(PhotoDocumentRecord)
        .where(PhotoDocumentRecord.order_id == order_id)
        .order_by(PhotoDocumentRecord.uploaded_at, PhotoDocumentRecord.id)
    )
    return [_photo_from_record(r, standards) for r in result.scalars().all()]


# ── Order ─────────────────────────────────────────────────

async def save_order(db: AsyncSession, order: Order) -> Order:
    """Persist the order and every photo it holds."""
    rec = await db.get(OrderRecord, order.id)
    if rec is None:
        rec = OrderRecord(id=order.id)
        db.add(rec)
    rec.order_number = order.order_number
    rec.customer_id = order.customer_id
    rec.created_by = order.created_by
    rec.created_at = order.created_at
    rec.status = order.status.value
    rec.last_modified_at = order.last_modified_at
    for photo in order.photos:
        await _stage_photo(db, photo)
    await db.commit()
    return order


async def get_order(
    db: AsyncSession, order_id: str, standards: QualityStandards = DEFAULT_STANDARDS
) -> Order | None:
    rec = await db.get(OrderRecord, order_id)
    if rec is None:
        return None
    photos = await list_photos_for_order(db, order_id, standards)
    return Order(
        rec.id,
        rec.order_number,
        rec.created_by,
        as_utc(rec.created_at),
        customer_id=rec.customer_id,
        status=OrderStatus(rec.status),
        photos=photos,
        last_modified_at=as_utc(rec.last_modified_at),
    )


async def get_order_by_number(db: AsyncSession, order_number: str) -> Order | None:
    result = await db.execute(select(OrderRecord.id).where(OrderRecord.order_number == order_number))
    order_id = result.scalars().first()
    return await get_order(db, order_id) if order_id else None


async def list_orders(db: AsyncSession, status: OrderStatus | None = None) -> list[Order]:
    query = select(OrderRecord.id).order_by(OrderRecord.created_at)
    if status is not None:
        query = query.where(OrderRecord.status == OrderStatus(status).value)
    result = await db.execute(query)
    orders = []
    for order_id in result.scalars().all():
        order = await get_order(db, order_id)
        if order is not None:
            orders.append(order)
    return orders


# ── Report ────────────────────────────────────────────────

def _report_from_record(rec: ReportRecord) -> Report:
    return Report(
        rec.id,
        rec.order_id,
        rec.generated_by,
        as_utc(rec.generated_at),
        photo_ids=rec.photo_ids or [],
        title=rec.title,
        format=ReportFormat(rec.format),
        status=ReportStatus(rec.status),
        recipient=rec.recipient,
        comments=rec.comments,
        version=rec.version,
        content=rec.content,
        file_url=rec.file_url,
        error_message=rec.error_message,
        completed_at=as_utc(rec.completed_at),
        approved_by=rec.approved_by,
        approved_at=as_utc(rec.approved_at),
        last_modified_at=as_utc(rec.last_modified_at),
    )


async def save_report(db: AsyncSession, report: Report) -> Report:
    rec = await db.get(ReportRecord, report.id)
    if rec is None:
        rec = ReportRecord(id=report.id)
        db.add(rec)
    rec.order_id = report.order_id
    rec.photo_ids = list(report.photo_ids)
    rec.generated_by = report.generated_by
    rec.generated_at = report.generated_at
    rec.title = report.title
    rec.format = report.format.value
    rec.status = report.status.value
    rec.recipient = report.recipient
    rec.comments = report.comments
    rec.version = report.version
    rec.content = report.content
    rec.file_url = report.file_url
    rec.error_message = report.error_message
    rec.completed_at = report.completed_at
    rec.approved_by = report.approved_by
    rec.approved_at = report.approved_at
    rec.last_modified_at = report.last_modified_at
    await db.commit()
    return report


async def get_report(db: AsyncSession, report_id: str) -> Report | None:
    rec = await db.get(ReportRecord, report_id)
    return _report_from_record(rec) if rec else None


async def list_reports_for_order(db: AsyncSession, order_id: str) -> list[Report]:
    result = await db.execute(
        select(ReportRecord)
        .where(ReportRecord.order_id == order_id)
        .order_by(ReportRecord.generated_at)
    )
    return [_report_from_record(r) for r in result.scalars().all()]


async def delete_report(db: AsyncSession, report_id: str) -> bool:
    rec = await db.get(ReportRecord, report_id)
    if rec is None:
        return False
    await db.delete(rec)
    await db.commit()
    return True
