"""FastAPI dependency providers for settings, DB sessions and quality standards."""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from app.config import Settings, get_settings
from app.db.engine import get_db  # noqa: F401  (re-exported for routers)
from app.domain.quality import QualityStandards


@lru_cache
def get_settings_dep() -> Settings:
    return get_settings()


def get_standards(settings: Settings = Depends(get_settings_dep)) -> QualityStandards:
    return settings.quality_standards.to_standards()
