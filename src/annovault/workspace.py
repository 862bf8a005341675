"""Workspace management: creation, discovery, file import and sidecar access."""

import logging
import os
from pathlib import Path
from typing import Optional, Union

from .annotations import AnnotationStore
from .config import AnnovaultConfig
from .errors import (
    AlreadyExists,
    CreateFailed,
    FileNotFound,
    InvalidName,
    PathEscape,
    ReadFailed,
    WorkspaceNotFound,
    WrongKind,
)
from .models.document import Document
from .models.workspace import Workspace
from .paths import WorkspacePaths, check_workspace_name
from .relocate import RelocateMode, relocate

logger = logging.getLogger(__name__)


class WorkspaceManager:
    """Manages workspaces under a single root directory.

    A workspace is a direct child directory of the root that contains a
    ``.vault`` directory. Nothing here is transactional: multi-step operations
    leave whatever the completed steps produced if a later step fails.
    """

    def __init__(self, root: Optional[Path] = None, paths: Optional[WorkspacePaths] = None):
        """Initialize the manager.

        Args:
            root: Directory holding all workspaces (default: <home>/hackxindia26)
            paths: Prebuilt WorkspacePaths; takes precedence over root
        """
        if paths is None:
            paths = WorkspacePaths(root) if root is not None else WorkspacePaths.default()
        self.paths = paths
        self.store = AnnotationStore(paths)

    @classmethod
    def from_config(cls, config: AnnovaultConfig) -> "WorkspaceManager":
        """Create a WorkspaceManager from an AnnovaultConfig."""
        return cls(paths=WorkspacePaths.from_config(config))

    @property
    def root(self) -> Path:
        return self.paths.root

    def list_workspaces(self) -> list[Workspace]:
        """List workspaces in file-system enumeration order (not sorted).

        Returns:
            One Workspace per root child that contains a vault; empty if the
            root does not exist yet
        """
        if not self.root.exists():
            return []

        try:
            entries = list(os.scandir(self.root))
        except OSError as e:
            raise ReadFailed("Failed to read workspaces root", path=self.root, cause=e) from e

        workspaces: list[Workspace] = []
        for entry in entries:
            path = Path(entry.path)
            try:
                if not self.paths.is_workspace_dir(path):
                    continue
            except OSError as e:
                logger.warning(f"Skipping unreadable entry {path}: {e}")
                continue
            workspaces.append(Workspace(name=entry.name, path=str(path)))

        return workspaces

    def create_workspace(self, name: str) -> Path:
        """Create a workspace directory and its vault.

        Not atomic: a crash between the two mkdir calls leaves a directory
        without a vault, which ``list_workspaces`` will not report.

        Args:
            name: Workspace name (no ``/``, ``\\`` or ``:``)

        Returns:
            Path to the new workspace directory

        Raises:
            EmptyName: If name is empty
            InvalidName: If name contains a separator or colon
            AlreadyExists: If the workspace directory already exists
            CreateFailed: If a directory cannot be created
        """
        check_workspace_name(name)

        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CreateFailed("Failed to create main folder", path=self.root, cause=e) from e

        workspace_path = self.paths.resolve_workspace(name)
        if workspace_path.exists():
            raise AlreadyExists("Workspace already exists", path=workspace_path)

        try:
            workspace_path.mkdir()
        except FileExistsError as e:
            raise AlreadyExists("Workspace already exists", path=workspace_path, cause=e) from e
        except OSError as e:
            raise CreateFailed("Failed to create workspace folder", path=workspace_path, cause=e) from e

        vault_path = self.paths.vault_dir(name)
        try:
            vault_path.mkdir()
        except OSError as e:
            raise CreateFailed("Failed to create .vault folder", path=vault_path, cause=e) from e

        logger.info(f"Created workspace {name!r} at {workspace_path}")
        return workspace_path

    def _existing_workspace(self, name: str) -> Path:
        check_workspace_name(name)
        workspace_path = self.paths.resolve_workspace(name)
        if not workspace_path.is_dir():
            raise WorkspaceNotFound(path=workspace_path)
        return workspace_path

    def add_file(self, workspace_name: str, source_path: Union[str, Path]) -> Path:
        """Copy an external file (or folder) into a workspace.

        The copy lands in the workspace root, not the vault, under the
        source's own name or a numbered variant of it.

        Returns:
            Path of the copy inside the workspace

        Raises:
            WorkspaceNotFound: If the workspace directory is absent
            SourceNotFound: If source_path does not exist
            CopyFailed: If copying fails
        """
        workspace_path = self._existing_workspace(workspace_name)
        dest = relocate(source_path, workspace_path, RelocateMode.COPY)
        logger.info(f"Added {dest.name!r} to workspace {workspace_name!r}")
        return dest

    def list_files(self, workspace_name: str) -> list[str]:
        """List regular files directly under a workspace, hiding dot-files.

        Order is unspecified.
        """
        workspace_path = self._existing_workspace(workspace_name)

        try:
            entries = list(os.scandir(workspace_path))
        except OSError as e:
            raise ReadFailed("Failed to read workspace", path=workspace_path, cause=e) from e

        files: list[str] = []
        for entry in entries:
            if entry.name.startswith("."):
                continue
            try:
                if entry.is_file():
                    files.append(entry.name)
            except OSError as e:
                logger.warning(f"Skipping unreadable entry {entry.path}: {e}")
        return files

    def resolve_workspace_file(self, workspace_name: str, file_name: str) -> Path:
        """Resolve a file inside a workspace, refusing anything outside it.

        Containment is checked on the canonical path, after ``..`` segments and
        symlinks are resolved.

        Raises:
            WorkspaceNotFound: If the workspace directory is absent
            InvalidName: If file_name contains a NUL byte
            PathEscape: If the resolved path leaves the workspace
        """
        if "\x00" in file_name:
            raise InvalidName(f"Invalid file name: {file_name!r}")
        workspace_path = self._existing_workspace(workspace_name).resolve()
        target = (workspace_path / file_name).resolve()
        if target == workspace_path or not target.is_relative_to(workspace_path):
            raise PathEscape(path=file_name)
        return target

    def read_workspace_file(self, workspace_name: str, file_name: str) -> bytes:
        """Read the raw bytes of a file inside a workspace.

        Raises:
            WorkspaceNotFound: If the workspace directory is absent
            PathEscape: If file_name resolves outside the workspace
            FileNotFound: If the file does not exist
            WrongKind: If the path is a directory
            ReadFailed: If reading fails
        """
        target = self.resolve_workspace_file(workspace_name, file_name)
        if not target.exists():
            raise FileNotFound(path=target)
        if target.is_dir():
            raise WrongKind("Path is a directory", path=target)
        try:
            return target.read_bytes()
        except OSError as e:
            raise ReadFailed(path=target, cause=e) from e

    def save_annotations(self, workspace_name: str, file_name: str, document: Document) -> None:
        """Persist the annotation document for a workspace file."""
        self.store.save(workspace_name, file_name, document)

    def load_annotations(self, workspace_name: str, file_name: str) -> Document:
        """Load the annotation document for a workspace file (empty if never saved)."""
        return self.store.load(workspace_name, file_name)
