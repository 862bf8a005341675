"""Sidecar persistence of annotation documents inside a workspace vault."""

import logging

from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from .errors import (
    DeserializationFailed,
    ReadFailed,
    SerializationFailed,
    WriteFailed,
)
from .models.document import Document
from .paths import WorkspacePaths, check_file_name, check_workspace_name

logger = logging.getLogger(__name__)


class AnnotationStore:
    """Reads and writes ``<vault>/<file-name>.json`` sidecars.

    One sidecar per content file per workspace. Sidecars are created lazily on
    first save and overwritten on every later save.
    """

    def __init__(self, paths: WorkspacePaths):
        self.paths = paths

    def save(self, workspace_name: str, file_name: str, document: Document) -> None:
        """Write a document to its sidecar, creating the vault if needed.

        Args:
            workspace_name: Workspace the content file belongs to
            file_name: Base name of the content file (e.g. ``report.pdf``)
            document: Annotation document to persist

        Raises:
            SerializationFailed: If the document cannot be encoded
            WriteFailed: If the sidecar cannot be written
        """
        check_workspace_name(workspace_name)
        check_file_name(file_name)

        try:
            payload = document.model_dump_json(indent=2)
        except PydanticSerializationError as e:
            raise SerializationFailed(cause=e) from e

        sidecar = self.paths.sidecar_path(workspace_name, file_name)
        try:
            self.paths.resolve_vault(workspace_name)
            sidecar.write_text(payload, encoding="utf-8")
        except OSError as e:
            raise WriteFailed(path=sidecar, cause=e) from e

        logger.info(
            f"Saved {document.annotation_count()} annotation(s) for {file_name!r} "
            f"in workspace {workspace_name!r}"
        )

    def load(self, workspace_name: str, file_name: str) -> Document:
        """Read a document from its sidecar.

        Returns a fresh empty Document when no sidecar exists yet.

        Raises:
            ReadFailed: If the sidecar exists but cannot be read
            DeserializationFailed: If the sidecar is not a valid document
        """
        check_workspace_name(workspace_name)
        check_file_name(file_name)

        sidecar = self.paths.sidecar_path(workspace_name, file_name)
        if not sidecar.exists():
            logger.debug(f"No sidecar for {file_name!r} in workspace {workspace_name!r}")
            return Document()

        try:
            raw = sidecar.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise DeserializationFailed(path=sidecar, cause=e) from e
        except OSError as e:
            raise ReadFailed(path=sidecar, cause=e) from e

        try:
            return Document.model_validate_json(raw)
        except ValidationError as e:
            raise DeserializationFailed(path=sidecar, cause=e) from e
