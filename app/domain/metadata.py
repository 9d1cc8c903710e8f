"""Technical metadata of a captured photo."""

from __future__ import annotations

from dataclasses import dataclass, asdict
from typing import Any


@dataclass(frozen=True)
class PhotoMetadata:
    """Immutable image characteristics, validated at construction.

    width, height and file_size must be positive; image_format and
    color_space non-blank; dpi, when given, positive.
    """

    width: int
    height: int
    file_size: int
    image_format: str
    color_space: str
    dpi: int | None = None

    def __post_init__(self):
        if self.width is None or self.width <= 0:
            raise ValueError("Width must be greater than zero")
        if self.height is None or self.height <= 0:
            raise ValueError("Height must be greater than zero")
        if self.file_size is None or self.file_size <= 0:
            raise ValueError("File size must be greater than zero")
        if not self.image_format or not self.image_format.strip():
            raise ValueError("Image format must not be None or blank")
        if not self.color_space or not self.color_space.strip():
            raise ValueError("Color space must not be None or blank")
        if self.dpi is not None and self.dpi <= 0:
            raise ValueError("DPI must be greater than zero if provided")

    @property
    def megapixels(self) -> float:
        return self.width * self.height / 1_000_000

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    @property
    def resolution(self) -> str:
        return f"{self.width}x{self.height}"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PhotoMetadata:
        return cls(
            width=data["width"],
            height=data["height"],
            file_size=data["file_size"],
            image_format=data["image_format"],
            color_space=data["color_space"],
            dpi=data.get("dpi"),
        )
