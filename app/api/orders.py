from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.db import crud
from app.dependencies import get_db, get_standards
from app.domain.order import ORDER_ACTIONS, Order, OrderStatus
from app.domain.photo_document import PhotoDocument
from app.domain.quality import QualityStandards
from app.domain.templates import resolve_template
from app.schemas import OrderCreate, OrderRead, PhotoCreate, PhotoRead, ReadinessRead

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/orders", tags=["orders"])


async def load_order(db: AsyncSession, order_id: str, standards: QualityStandards) -> Order:
    order = await crud.get_order(db, order_id, standards)
    if order is None:
        raise HTTPException(404, "Order not found")
    return order


@router.post("", response_model=OrderRead, status_code=201)
async def create_order(body: OrderCreate, db: AsyncSession = Depends(get_db)):
    if await crud.get_order_by_number(db, body.order_number):
        raise HTTPException(409, f"Order number already exists: {body.order_number}")
    order = Order.create(body.order_number, body.created_by, customer_id=body.customer_id)
    await crud.save_order(db, order)
    logger.info("Created order %s (%s)", order.order_number, order.id)
    return OrderRead.from_domain(order)


@router.get("", response_model=list[OrderRead])
async def list_orders(status: OrderStatus | None = None, db: AsyncSession = Depends(get_db)):
    return [OrderRead.from_domain(o) for o in await crud.list_orders(db, status)]


@router.get("/{order_id}", response_model=OrderRead)
async def get_order(
    order_id: str,
    db: AsyncSession = Depends(get_db),
    standards: QualityStandards = Depends(get_standards),
):
    return OrderRead.from_domain(await load_order(db, order_id, standards))


@router.post("/{order_id}/status/{action}", response_model=OrderRead)
async def change_status(
    order_id: str,
    action: str,
    db: AsyncSession = Depends(get_db),
    standards: QualityStandards = Depends(get_standards),
):
    """Run a status transition: start, complete, approve, reject, deliver, cancel."""
    order = await load_order(db, order_id, standards)
    aliases = {"start": "start_processing", "complete": "complete_processing"}
    name = aliases.get(action, action)
    if name not in ORDER_ACTIONS:
        raise HTTPException(400, f"Unknown order action: {action}")
    previous = order.status
    order.apply(name)
    await crud.save_order(db, order)
    logger.info("Order %s: %s -> %s", order.order_number, previous.value, order.status.value)
    return OrderRead.from_domain(order)


@router.get("/{order_id}/readiness", response_model=ReadinessRead)
async def get_readiness(
    order_id: str,
    db: AsyncSession = Depends(get_db),
    standards: QualityStandards = Depends(get_standards),
):
    order = await load_order(db, order_id, standards)
    return ReadinessRead.from_summary(order.id, order.readiness())


@router.post("/{order_id}/photos", response_model=PhotoRead, status_code=201)
async def upload_photo(
    order_id: str,
    body: PhotoCreate,
    db: AsyncSession = Depends(get_db),
    standards: QualityStandards = Depends(get_standards),
):
    order = await load_order(db, order_id, standards)
    try:
        template = resolve_template(body.template, body.template_description)
    except KeyError:
        raise HTTPException(400, f"Unknown photo template: {body.template}")

    photo = PhotoDocument.upload(template, body.image_path, body.uploaded_by, standards=standards)
    order.add_photo(photo)
    if body.metadata is not None:
        violations = photo.set_metadata(body.metadata.to_domain())
        if violations:
            logger.info("Photo %s uploaded with %d quality violation(s)", photo.id, len(violations))
    await crud.save_order(db, order)
    return PhotoRead.from_domain(photo)


@router.get("/{order_id}/photos", response_model=list[PhotoRead])
async def list_photos(
    order_id: str,
    db: AsyncSession = Depends(get_db),
    standards: QualityStandards = Depends(get_standards),
):
    order = await load_order(db, order_id, standards)
    return [PhotoRead.from_domain(p) for p in order.photos]
