"""Render QC reports for an order's approved photos.

HTML is rendered with Jinja2; PDF converts that HTML with xhtml2pdf.
"""

from __future__ import annotations

import io
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

from jinja2 import Environment, FileSystemLoader, TemplateError
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings, get_settings
from app.db import crud
from app.domain.errors import NotFoundError
from app.domain.events import DomainEvent
from app.domain.order import Order
from app.domain.photo_document import PhotoDocument
from app.domain.report import Report, ReportFormat

logger = logging.getLogger(__name__)

_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
_env = Environment(loader=FileSystemLoader(str(_TEMPLATE_DIR)), autoescape=True)

MEDIA_TYPES = {
    ReportFormat.HTML: "text/html",
    ReportFormat.PDF: "application/pdf",
    ReportFormat.DOCX: "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


class ReportRenderError(RuntimeError):
    pass


def render_html(order: Order, report: Report, photos: list[PhotoDocument]) -> str:
    template = _env.get_template("report.html.j2")
    return template.render(
        order=order,
        report=report,
        photos=photos,
        generated_on=report.generated_at.strftime("%B %d, %Y"),
    )


def render_pdf(html: str) -> bytes:
    from xhtml2pdf import pisa

    pdf_buffer = io.BytesIO()
    pisa_status = pisa.CreatePDF(io.StringIO(html), dest=pdf_buffer)
    if pisa_status.err:
        raise ReportRenderError(f"PDF generation failed with {pisa_status.err} errors")
    return pdf_buffer.getvalue()


def render_content(order: Order, report: Report) -> bytes:
    included = set(report.photo_ids)
    photos = [p for p in order.photos if p.id in included]
    html = render_html(order, report, photos)
    if report.format is ReportFormat.HTML:
        return html.encode("utf-8")
    if report.format is ReportFormat.PDF:
        return render_pdf(html)
    raise ReportRenderError(f"Unsupported report format: {report.format.value}")


def run_generation(
    order: Order,
    report: Report,
    url_prefix: str = "/api/reports",
    clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
) -> list[DomainEvent]:
    """Drive a PENDING report through generation. Returns the events to publish.

    Render failures move the report to FAILED instead of raising.
    """
    report.start_generation()
    try:
        content = render_content(order, report)
    except (TemplateError, ReportRenderError) as e:
        logger.warning("Report %s for order %s failed: %s", report.id, order.order_number, e)
        return [report.fail(str(e))]

    report.set_content(content)
    event = report.complete(f"{url_prefix}/{report.id}/content", clock())
    logger.info(
        "Report %s for order %s completed (%d photos, %d bytes)",
        report.id, order.order_number, len(report.photo_ids), len(content),
    )
    return [event]


async def generate_report(
    db: AsyncSession,
    order_id: str,
    generated_by: str,
    *,
    recipient: str | None = None,
    title: str | None = None,
    format: ReportFormat | None = None,
    comments: str | None = None,
    settings: Settings | None = None,
) -> tuple[Report, list[DomainEvent]]:
    """Create, render and persist a report for a ready order."""
    settings = settings or get_settings()
    standards = settings.quality_standards.to_standards()
    order = await crud.get_order(db, order_id, standards)
    if order is None:
        raise NotFoundError(f"Order not found: {order_id}")

    report = Report.create_for_order(
        order,
        generated_by,
        title=title or settings.reports.title_template.format(order_number=order.order_number),
        format=format or ReportFormat(settings.reports.default_format),
        recipient=recipient,
        comments=comments,
    )
    events = run_generation(order, report, settings.reports.url_prefix)
    await crud.save_report(db, report)
    return report, events
