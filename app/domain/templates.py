"""Photo template catalog.

A template names what a photo should depict and which content categories it
is expected to carry. Required fields are descriptive; nothing here checks a
photo against them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, Mapping


class RequiredField(str, Enum):
    ANNOTATIONS = "ANNOTATIONS"
    METADATA = "METADATA"
    MEASUREMENTS = "MEASUREMENTS"
    DEFECT_MARKING = "DEFECT_MARKING"
    REFERENCE_POINTS = "REFERENCE_POINTS"
    TIMESTAMP = "TIMESTAMP"
    LOCATION = "LOCATION"


@dataclass(frozen=True, eq=False)
class PhotoTemplate:
    name: str
    description: str
    required_fields: frozenset[RequiredField] = field(default_factory=frozenset)

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Template name must not be None or blank.")
        if not self.description or not self.description.strip():
            raise ValueError("Template description must not be None or blank.")
        object.__setattr__(self, "required_fields", frozenset(self.required_fields or ()))

    @classmethod
    def of(cls, name: str, description: str) -> PhotoTemplate:
        """Build a template with no required fields."""
        return cls(name, description)

    def is_field_required(self, required: RequiredField) -> bool:
        return required in self.required_fields

    def required_fields_description(self) -> str:
        if not self.required_fields:
            return "No required fields"
        names = ", ".join(f.value for f in RequiredField if f in self.required_fields)
        return f"Required fields: {names}"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PhotoTemplate):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return f"{self.name}: {self.description}"


_A = RequiredField.ANNOTATIONS
_M = RequiredField.METADATA
_MEAS = RequiredField.MEASUREMENTS
_DEF = RequiredField.DEFECT_MARKING

# name -> (description, required fields)
DEFAULT_TEMPLATE_TABLE: dict[str, tuple[str, frozenset[RequiredField]]] = {
    "TOP_VIEW_OF_JOINT": ("Take a photo from above the joint.", frozenset({_A, _M})),
    "SIDE_VIEW_OF_WELD": ("Take a photo from the side of the weld.", frozenset({_A, _M, _MEAS})),
    "FRONT_VIEW_OF_ASSEMBLY": ("Take a photo from the front of the assembly.", frozenset({_A, _M})),
    "BACK_VIEW_OF_ASSEMBLY": ("Take a photo from the back of the assembly.", frozenset({_A, _M})),
    "LEFT_VIEW_OF_ASSEMBLY": ("Take a photo from the left side of the assembly.", frozenset({_A, _M})),
    "RIGHT_VIEW_OF_ASSEMBLY": ("Take a photo from the right side of the assembly.", frozenset({_A, _M})),
    "BOTTOM_VIEW_OF_ASSEMBLY": ("Take a photo from below the assembly.", frozenset({_A, _M})),
    "CLOSE_UP_OF_WELD": ("Take a close-up photo of the weld.", frozenset({_A, _M, _MEAS, _DEF})),
    "ANGLED_VIEW_OF_JOINT": (
        "Take a photo of the joint from an angled perspective.", frozenset({_A, _M, _MEAS})
    ),
    "OVERVIEW_OF_ASSEMBLY": ("Take an overview photo of the entire assembly.", frozenset({_A, _M})),
    "CUSTOM": ("Follow specific instructions provided for this photo.", frozenset()),
}


class TemplateCatalog:
    """Closed, name-keyed set of templates built from a table."""

    def __init__(self, table: Mapping[str, tuple[str, Iterable[RequiredField]]]):
        self._templates: dict[str, PhotoTemplate] = {
            name: PhotoTemplate(name, description, frozenset(fields))
            for name, (description, fields) in table.items()
        }

    def get(self, name: str) -> PhotoTemplate:
        try:
            return self._templates[name]
        except KeyError:
            raise KeyError(f"Unknown photo template: {name}") from None

    def find(self, name: str) -> PhotoTemplate | None:
        return self._templates.get(name)

    def names(self) -> list[str]:
        return list(self._templates)

    def __iter__(self) -> Iterator[PhotoTemplate]:
        return iter(self._templates.values())

    def __len__(self) -> int:
        return len(self._templates)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, PhotoTemplate):
            return self._templates.get(item.name) == item
        return item in self._templates


DEFAULT_CATALOG = TemplateCatalog(DEFAULT_TEMPLATE_TABLE)

TOP_VIEW_OF_JOINT = DEFAULT_CATALOG.get("TOP_VIEW_OF_JOINT")
SIDE_VIEW_OF_WELD = DEFAULT_CATALOG.get("SIDE_VIEW_OF_WELD")
FRONT_VIEW_OF_ASSEMBLY = DEFAULT_CATALOG.get("FRONT_VIEW_OF_ASSEMBLY")
BACK_VIEW_OF_ASSEMBLY = DEFAULT_CATALOG.get("BACK_VIEW_OF_ASSEMBLY")
LEFT_VIEW_OF_ASSEMBLY = DEFAULT_CATALOG.get("LEFT_VIEW_OF_ASSEMBLY")
RIGHT_VIEW_OF_ASSEMBLY = DEFAULT_CATALOG.get("RIGHT_VIEW_OF_ASSEMBLY")
BOTTOM_VIEW_OF_ASSEMBLY = DEFAULT_CATALOG.get("BOTTOM_VIEW_OF_ASSEMBLY")
CLOSE_UP_OF_WELD = DEFAULT_CATALOG.get("CLOSE_UP_OF_WELD")
ANGLED_VIEW_OF_JOINT = DEFAULT_CATALOG.get("ANGLED_VIEW_OF_JOINT")
OVERVIEW_OF_ASSEMBLY = DEFAULT_CATALOG.get("OVERVIEW_OF_ASSEMBLY")
CUSTOM = DEFAULT_CATALOG.get("CUSTOM")


def resolve_template(name: str, description: str | None = None,
                     catalog: TemplateCatalog = DEFAULT_CATALOG) -> PhotoTemplate:
    """Catalog template by name, or an ad-hoc one when a description is supplied."""
    found = catalog.find(name)
    if found is not None:
        return found
    if description:
        return PhotoTemplate.of(name, description)
    raise KeyError(f"Unknown photo template: {name}")
