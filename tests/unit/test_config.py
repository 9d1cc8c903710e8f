from app.config import QualityStandardsConfig, Settings, get_settings
from app.domain.quality import DEFAULT_STANDARDS


def test_defaults_match_domain_standards():
    assert QualityStandardsConfig().to_standards() == DEFAULT_STANDARDS


def test_settings_sections():
    settings = get_settings()
    assert settings.database_url.startswith("sqlite+aiosqlite://")
    assert settings.reports.default_format in ("HTML", "PDF")
    assert "{order_number}" in settings.reports.title_template


def test_overrides_flow_into_standards():
    cfg = QualityStandardsConfig(min_megapixels=5.0, accepted_formats=["png"])
    standards = cfg.to_standards()
    assert standards.min_megapixels == 5.0
    assert standards.accepted_formats == frozenset({"PNG"})
    assert Settings().logging.level == "INFO"
