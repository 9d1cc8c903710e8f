from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.db import crud
from app.dependencies import get_db, get_settings_dep
from app.domain.errors import NotFoundError
from app.domain.report import Report
from app.schemas import ReportAction, ReportCreate, ReportRead
from app.services.events import publish
from app.services.report_generator import MEDIA_TYPES, generate_report

logger = logging.getLogger(__name__)

router = APIRouter(tags=["reports"])


async def load_report(db: AsyncSession, report_id: str) -> Report:
    report = await crud.get_report(db, report_id)
    if report is None:
        raise HTTPException(404, "Report not found")
    return report


@router.post("/api/orders/{order_id}/reports", response_model=ReportRead, status_code=201)
async def create_report(
    order_id: str,
    body: ReportCreate,
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings_dep),
):
    try:
        report, events = await generate_report(
            db, order_id, body.generated_by,
            recipient=body.recipient, title=body.title, format=body.format,
            comments=body.comments, settings=settings,
        )
    except NotFoundError:
        raise HTTPException(404, "Order not found")
    await publish(events)
    return ReportRead.from_domain(report)


@router.get("/api/orders/{order_id}/reports", response_model=list[ReportRead])
async def list_reports(order_id: str, db: AsyncSession = Depends(get_db)):
    return [ReportRead.from_domain(r) for r in await crud.list_reports_for_order(db, order_id)]


@router.get("/api/reports/{report_id}", response_model=ReportRead)
async def get_report(report_id: str, db: AsyncSession = Depends(get_db)):
    return ReportRead.from_domain(await load_report(db, report_id))


@router.get("/api/reports/{report_id}/content")
async def get_report_content(report_id: str, db: AsyncSession = Depends(get_db)):
    report = await load_report(db, report_id)
    if report.content is None:
        raise HTTPException(404, "Report has no generated content")
    return Response(content=report.content, media_type=MEDIA_TYPES[report.format])


@router.post("/api/reports/{report_id}/{action}", response_model=ReportRead)
async def report_action(
    report_id: str,
    action: str,
    body: ReportAction | None = None,
    db: AsyncSession = Depends(get_db),
):
    """Business lifecycle: recipient, finalize, approve, reject, deliver, archive, bump-version."""
    body = body or ReportAction()
    report = await load_report(db, report_id)
    events = []

    if action == "recipient":
        if not body.recipient:
            raise HTTPException(400, "recipient is required")
        report.set_recipient(body.recipient)
    elif action == "finalize":
        events.append(report.finalize_report())
    elif action == "approve":
        if not body.actor:
            raise HTTPException(400, "actor is required")
        report.approve(body.actor, datetime.now(timezone.utc))
    elif action == "reject":
        report.reject_report(body.reason)
    elif action == "deliver":
        report.mark_as_sent()
    elif action == "archive":
        report.archive_any()
    elif action == "bump-version":
        report.increment_version()
    else:
        raise HTTPException(400, f"Unknown report action: {action}")

    await crud.save_report(db, report)
    await publish(events)
    logger.info("Report %s: %s -> %s (v%d)", report.id, action, report.status.value, report.version)
    return ReportRead.from_domain(report)


@router.delete("/api/reports/{report_id}", status_code=204)
async def delete_report(report_id: str, db: AsyncSession = Depends(get_db)):
    if not await crud.delete_report(db, report_id):
        raise HTTPException(404, "Report not found")
