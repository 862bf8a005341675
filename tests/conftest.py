"""Pytest fixtures for annovault tests."""

from pathlib import Path

import pytest

from annovault.annotations import AnnotationStore
from annovault.config import AnnovaultConfig
from annovault.models.document import Annotation, AnnotationType, Document, NormalizedRect
from annovault.paths import WorkspacePaths
from annovault.workspace import WorkspaceManager


@pytest.fixture
def temp_root(tmp_path):
    """Create a temporary workspaces root for testing.

    Args:
        tmp_path: pytest's built-in temporary directory fixture

    Returns:
        Path to temporary root (not created yet)
    """
    return tmp_path / "hackxindia26"


@pytest.fixture
def root_config(temp_root):
    """Create AnnovaultConfig pointing to the temporary root."""
    return AnnovaultConfig(root=temp_root)


@pytest.fixture
def workspace_paths(root_config):
    """Create WorkspacePaths for the temporary root."""
    return WorkspacePaths.from_config(root_config)


@pytest.fixture
def manager(root_config):
    """Create a WorkspaceManager for the temporary root."""
    return WorkspaceManager.from_config(root_config)


@pytest.fixture
def store(workspace_paths):
    """Create an AnnotationStore for the temporary root."""
    return AnnotationStore(workspace_paths)


@pytest.fixture
def workspace(manager):
    """Create a workspace named 'thesis' and return its path."""
    return manager.create_workspace("thesis")


def _make_annotation(annotation_id: str = "a1", annotation_type=AnnotationType.HIGHLIGHT) -> Annotation:
    return Annotation(
        id=annotation_id,
        annotation_type=annotation_type,
        author="reviewer",
        contents="check this figure",
        unique_name=f"uid-{annotation_id}",
        creation_date="2026-01-11T09:30:00Z",
        modification_date="2026-01-11T09:45:00Z",
        flags=4,
        bounding_rect=NormalizedRect(left=0.1, top=0.2, right=0.5, bottom=0.25),
        color="#ffcc00",
        opacity=0.6,
    )


@pytest.fixture
def make_annotation():
    """Factory for fully populated annotations."""
    return _make_annotation


@pytest.fixture
def sample_document():
    """Document with two pages and metadata."""
    document = Document(metadata={"title": "Quarterly report", "source": "report.pdf"})
    document.add_annotation(0, _make_annotation("a1"))
    document.add_annotation(0, _make_annotation("a2", AnnotationType.INK))
    document.add_annotation(3, _make_annotation("a3", AnnotationType.TEXT))
    document.pages[0].width = 612.0
    document.pages[0].height = 792.0
    return document


@pytest.fixture
def text_file(tmp_path) -> Path:
    """A small UTF-8 text file outside the root."""
    path = tmp_path / "incoming" / "report.txt"
    path.parent.mkdir(parents=True)
    path.write_text("Line one\n\tindented line\n", encoding="utf-8")
    return path
