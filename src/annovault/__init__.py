"""Workspace vault for documents and their annotation sidecars."""

from .annotations import AnnotationStore
from .config import AnnovaultConfig
from .paths import WorkspacePaths
from .relocate import RelocateMode, relocate
from .workspace import WorkspaceManager

__version__ = "0.1.0"

__all__ = [
    "AnnotationStore",
    "AnnovaultConfig",
    "RelocateMode",
    "WorkspaceManager",
    "WorkspacePaths",
    "relocate",
]
