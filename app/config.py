"""Application configuration loaded from config.yaml + environment variables."""

from __future__ import annotations

import yaml
from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings

from app.domain.quality import (
    ACCEPTED_COLOR_SPACES, ACCEPTED_FORMATS, MAX_FILE_SIZE_BYTES, MIN_DPI, MIN_MEGAPIXELS,
    QualityStandards,
)

_CONFIG_PATH = Path(__file__).resolve().parent.parent / "config.yaml"


def _load_yaml() -> dict:
    if _CONFIG_PATH.exists():
        with open(_CONFIG_PATH) as f:
            return yaml.safe_load(f) or {}
    return {}


_yaml = _load_yaml()


class QualityStandardsConfig(BaseSettings):
    min_megapixels: float = MIN_MEGAPIXELS
    max_file_size_bytes: int = MAX_FILE_SIZE_BYTES
    min_dpi: int = MIN_DPI
    accepted_formats: list[str] = Field(default_factory=lambda: sorted(ACCEPTED_FORMATS))
    accepted_color_spaces: list[str] = Field(default_factory=lambda: sorted(ACCEPTED_COLOR_SPACES))

    def to_standards(self) -> QualityStandards:
        return QualityStandards(
            min_megapixels=self.min_megapixels,
            max_file_size_bytes=self.max_file_size_bytes,
            min_dpi=self.min_dpi,
            accepted_formats=frozenset(self.accepted_formats),
            accepted_color_spaces=frozenset(self.accepted_color_spaces),
        )


class ReportConfig(BaseSettings):
    default_format: str = "HTML"
    title_template: str = "QC report for order {order_number}"
    url_prefix: str = "/api/reports"


class LoggingConfig(BaseSettings):
    level: str = "INFO"


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///data/qcdocs.db"
    quality_standards: QualityStandardsConfig = Field(default_factory=QualityStandardsConfig)
    reports: ReportConfig = Field(default_factory=ReportConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


def get_settings() -> Settings:
    """Build Settings by merging YAML defaults with env overrides."""
    y = _yaml
    qs = QualityStandardsConfig(**y.get("quality_standards", {}))
    rep = ReportConfig(**y.get("reports", {}))
    log = LoggingConfig(**y.get("logging", {}))
    db_url = y.get("database", {}).get("url", "sqlite+aiosqlite:///data/qcdocs.db")
    return Settings(
        database_url=db_url,
        quality_standards=qs,
        reports=rep,
        logging=log,
    )
