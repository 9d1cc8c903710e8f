"""Annotations placed on a photo, keyed by a stable id."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ulid import ULID


class AnnotationType(str, Enum):
    NOTE = "NOTE"
    ISSUE = "ISSUE"
    HIGHLIGHT = "HIGHLIGHT"
    MEASUREMENT = "MEASUREMENT"


@dataclass(frozen=True)
class PhotoAnnotation:
    """A marker at normalized coordinates (0..1 on both axes)."""

    id: str
    x: float
    y: float
    text: str
    type: AnnotationType

    def __post_init__(self):
        if self.id is None:
            raise ValueError("Annotation id must not be None")
        if self.text is None:
            raise ValueError("Annotation text must not be None")
        if self.type is None:
            raise ValueError("Annotation type must not be None")
        if not self.text.strip():
            raise ValueError("Annotation text must not be blank")
        if not (0.0 <= self.x <= 1.0) or not (0.0 <= self.y <= 1.0):
            raise ValueError(f"Annotation coordinates must be within [0, 1], got ({self.x}, {self.y})")
        object.__setattr__(self, "type", AnnotationType(self.type))

    def with_text(self, text: str) -> PhotoAnnotation:
        return dataclasses.replace(self, text=text)

    def moved_to(self, x: float, y: float) -> PhotoAnnotation:
        return dataclasses.replace(self, x=x, y=y)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "x": self.x, "y": self.y, "text": self.text, "type": self.type.value}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PhotoAnnotation:
        return cls(data["id"], data["x"], data["y"], data["text"], AnnotationType(data["type"]))


def new_annotation(x: float, y: float, text: str,
                   type: AnnotationType = AnnotationType.NOTE) -> PhotoAnnotation:
    return PhotoAnnotation(str(ULID()), x, y, text, type)
