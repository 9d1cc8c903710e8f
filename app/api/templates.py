from __future__ import annotations

from fastapi import APIRouter, HTTPException

from app.domain.templates import DEFAULT_CATALOG
from app.schemas import TemplateRead

router = APIRouter(prefix="/api/templates", tags=["templates"])


@router.get("", response_model=list[TemplateRead])
async def list_templates():
    return [TemplateRead.from_domain(t) for t in DEFAULT_CATALOG]


@router.get("/{name}", response_model=TemplateRead)
async def get_template(name: str):
    template = DEFAULT_CATALOG.find(name)
    if template is None:
        raise HTTPException(404, "Template not found")
    return TemplateRead.from_domain(template)
