"""Path management and workspace/vault layout for annovault."""

from pathlib import Path

from .config import AnnovaultConfig, default_root
from .errors import EmptyName, InvalidName

VAULT_DIR_NAME = ".vault"
SIDECAR_SUFFIX = ".json"

# Drive-letter colon included so names stay portable to Windows
WORKSPACE_NAME_FORBIDDEN = ("/", "\\", ":", "\x00")


def check_workspace_name(name: str) -> str:
    """Validate a workspace name.

    Raises:
        EmptyName: If the name is empty
        InvalidName: If the name contains a path separator, colon or NUL byte
    """
    if not name:
        raise EmptyName("Workspace name cannot be empty")
    if any(ch in name for ch in WORKSPACE_NAME_FORBIDDEN) or name in (".", ".."):
        raise InvalidName(f"Invalid workspace name: {name!r}")
    return name


def check_file_name(name: str) -> str:
    """Validate a bare content-file name (no directories)."""
    if not name:
        raise EmptyName("File name cannot be empty")
    if any(ch in name for ch in ("/", "\\", "\x00")) or name in (".", ".."):
        raise InvalidName(f"Invalid file name: {name!r}")
    return name


class WorkspacePaths:
    """Derives on-disk locations of workspaces and their vaults.

    Layout::

        <root>/<workspace>/                 content files
        <root>/<workspace>/.vault/          annotation sidecars
        <root>/<workspace>/.vault/<file>.json
    """

    def __init__(self, root: Path):
        """Initialize workspace paths from the root directory.

        Args:
            root: Directory holding all workspaces
        """
        self.root = Path(root)

    @classmethod
    def from_config(cls, config: AnnovaultConfig) -> "WorkspacePaths":
        """Create WorkspacePaths from an AnnovaultConfig."""
        return cls(config.root)

    @classmethod
    def default(cls) -> "WorkspacePaths":
        """Create WorkspacePaths rooted at ``<home>/hackxindia26``."""
        return cls(default_root())

    def resolve_workspace(self, name: str) -> Path:
        """Get path to a workspace directory (no side effects)."""
        return self.root / name

    def vault_dir(self, name: str) -> Path:
        """Get path to a workspace's vault directory (no side effects)."""
        return self.resolve_workspace(name) / VAULT_DIR_NAME

    def resolve_vault(self, name: str) -> Path:
        """Get path to a workspace's vault, creating it if absent.

        Args:
            name: Workspace name

        Returns:
            Path to the vault directory
        """
        vault = self.vault_dir(name)
        vault.mkdir(parents=True, exist_ok=True)
        return vault

    def sidecar_path(self, name: str, file_name: str) -> Path:
        """Get path to the annotation sidecar of a content file.

        A content file ``report.pdf`` stores annotations at
        ``.vault/report.pdf.json``.
        """
        return self.vault_dir(name) / f"{file_name}{SIDECAR_SUFFIX}"

    def is_workspace_dir(self, path: Path) -> bool:
        """Check whether a directory qualifies as a workspace (has a vault)."""
        return path.is_dir() and (path / VAULT_DIR_NAME).is_dir()
