from __future__ import annotations
from pydantic import BaseModel

from app.domain.templates import PhotoTemplate, RequiredField


class TemplateRead(BaseModel):
    name: str
    description: str
    required_fields: list[RequiredField]

    @classmethod
    def from_domain(cls, t: PhotoTemplate) -> TemplateRead:
        return cls(
            name=t.name,
            description=t.description,
            required_fields=[f for f in RequiredField if t.is_field_required(f)],
        )
