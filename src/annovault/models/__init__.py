"""Pydantic models for annovault."""

from .document import Annotation, AnnotationType, Document, NormalizedRect, Page
from .workspace import Workspace

__all__ = [
    "Annotation",
    "AnnotationType",
    "Document",
    "NormalizedRect",
    "Page",
    "Workspace",
]
