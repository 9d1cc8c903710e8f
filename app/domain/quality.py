"""Photo quality validator: metadata in, violation messages out."""

from __future__ import annotations

from dataclasses import dataclass, field

from app.domain.metadata import PhotoMetadata

MIN_MEGAPIXELS = 2.0
MAX_FILE_SIZE_BYTES = 10 * 1024 * 1024
MIN_DPI = 72
ACCEPTED_FORMATS = frozenset({"JPEG", "JPG", "PNG", "TIFF", "TIF"})
ACCEPTED_COLOR_SPACES = frozenset({"RGB", "sRGB", "Adobe RGB"})


@dataclass(frozen=True)
class QualityStandards:
    """Thresholds applied by validate(). Formats compare case-insensitively."""

    min_megapixels: float = MIN_MEGAPIXELS
    max_file_size_bytes: int = MAX_FILE_SIZE_BYTES
    min_dpi: int = MIN_DPI
    accepted_formats: frozenset[str] = field(default=ACCEPTED_FORMATS)
    accepted_color_spaces: frozenset[str] = field(default=ACCEPTED_COLOR_SPACES)

    def __post_init__(self):
        # normalise so membership checks can upper() the candidate
        object.__setattr__(
            self, "accepted_formats", frozenset(f.upper() for f in self.accepted_formats)
        )
        object.__setattr__(self, "accepted_color_spaces", frozenset(self.accepted_color_spaces))


DEFAULT_STANDARDS = QualityStandards()


def _listing(values: frozenset[str]) -> str:
    return ", ".join(sorted(values))


def validate(
    metadata: PhotoMetadata, standards: QualityStandards = DEFAULT_STANDARDS
) -> list[str]:
    """Run every check and return one message per failed check."""
    if metadata is None:
        raise ValueError("metadata must not be None")

    violations: list[str] = []

    if metadata.megapixels < standards.min_megapixels:
        violations.append(
            f"Resolution too low: {metadata.megapixels:.2f} MP "
            f"({metadata.resolution}), minimum is {standards.min_megapixels:.1f} MP"
        )

    if metadata.file_size > standards.max_file_size_bytes:
        violations.append(
            f"File size too large: {metadata.file_size / (1024 * 1024):.2f} MB "
            f"({metadata.file_size} bytes), maximum is "
            f"{standards.max_file_size_bytes / (1024 * 1024):.0f} MB"
        )

    if metadata.dpi is not None and metadata.dpi < standards.min_dpi:
        violations.append(
            f"DPI too low: {metadata.dpi}, minimum is {standards.min_dpi}"
        )

    if metadata.image_format.upper() not in standards.accepted_formats:
        violations.append(
            f"Unsupported image format: {metadata.image_format}, "
            f"accepted formats are {_listing(standards.accepted_formats)}"
        )

    if metadata.color_space not in standards.accepted_color_spaces:
        violations.append(
            f"Unsupported color space: {metadata.color_space}, "
            f"accepted color spaces are {_listing(standards.accepted_color_spaces)}"
        )

    return violations


def is_valid(metadata: PhotoMetadata, standards: QualityStandards = DEFAULT_STANDARDS) -> bool:
    return not validate(metadata, standards)
