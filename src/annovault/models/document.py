"""Pydantic models for documents, pages and annotations.

Serialized as the JSON sidecar stored at ``.vault/<file-name>.json``.
"""

from enum import IntEnum
from typing import Any

from pydantic import BaseModel, Field, NonNegativeInt, field_validator


class AnnotationType(IntEnum):
    """Annotation subtypes; numeric codes follow the PDF annotation convention."""

    TEXT = 1
    LINE = 2
    GEOM = 3
    HIGHLIGHT = 4
    STAMP = 5
    INK = 6
    CARET = 8
    FILE_ATTACHMENT = 9
    SOUND = 10
    MOVIE = 11
    SCREEN = 12
    WIDGET = 13
    RICH_MEDIA = 14

    @classmethod
    def from_name(cls, name: str) -> "AnnotationType":
        """Look up a member by name, accepting ``Highlight``, ``HIGHLIGHT`` or ``FileAttachment``."""
        key = name.strip().replace("-", "").replace("_", "").upper()
        for member in cls:
            if member.name.replace("_", "") == key:
                return member
        raise ValueError(f"Unknown annotation type: {name!r}")


class SidecarModel(BaseModel):
    """Base for sidecar models; NaN and infinities are written as JSON constants so they load back."""

    model_config = {"frozen": False, "ser_json_inf_nan": "constants"}


class NormalizedRect(SidecarModel):
    """Bounding rectangle in normalized page coordinates (no ordering enforced)."""

    left: float
    top: float
    right: float
    bottom: float


class Annotation(SidecarModel):
    """A single annotation on a page."""

    id: str = Field(description="Opaque annotation identifier")
    annotation_type: AnnotationType
    author: str = ""
    contents: str = ""
    unique_name: str = ""
    creation_date: str = Field(default="", description="ISO 8601, not validated")
    modification_date: str = Field(default="", description="ISO 8601, not validated")
    flags: int = Field(default=0, description="Opaque flag bits")
    bounding_rect: NormalizedRect
    color: str = Field(default="", description="Hex color code, not validated")
    opacity: float = 1.0

    @field_validator("annotation_type", mode="before")
    @classmethod
    def _accept_type_names(cls, value: Any) -> Any:
        # Older sidecars spell the type by name ("Highlight")
        if isinstance(value, str):
            if value.strip().isdigit():
                return int(value)
            return AnnotationType.from_name(value)
        return value


class Page(SidecarModel):
    """Page dimensions plus its annotations in display order."""

    width: float = 0.0
    height: float = 0.0
    annotations: list[Annotation] = Field(default_factory=list)


class Document(SidecarModel):
    """Annotation overlay for one content file.

    A document without pages is valid and means "no annotations yet".
    """

    pages: dict[NonNegativeInt, Page] = Field(default_factory=dict)
    metadata: dict[str, str] = Field(default_factory=dict)

    def add_annotation(self, page_num: int, annotation: Annotation) -> None:
        """Append an annotation to a page, creating a zero-size page if needed.

        Args:
            page_num: Page number (non-negative)
            annotation: Annotation to append
        """
        if page_num < 0:
            raise ValueError(f"Page number must be non-negative: {page_num}")
        page = self.pages.setdefault(page_num, Page())
        page.annotations.append(annotation)

    def annotation_count(self) -> int:
        """Total number of annotations across all pages."""
        return sum(len(page.annotations) for page in self.pages.values())
