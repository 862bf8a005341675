"""Configuration management for annovault."""

import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from .errors import HomeDirectoryUnavailable

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # Python < 3.11

logger = logging.getLogger(__name__)

ROOT_DIR_NAME = "hackxindia26"
ROOT_ENV_VAR = "ANNOVAULT_ROOT"
LOG_LEVEL_ENV_VAR = "ANNOVAULT_LOG_LEVEL"


# Any of these marks the directory whose .annovault/config.toml applies
REPO_MARKERS = (".git", "pyproject.toml", ".annovault")
REPO_CONFIG_PATH = Path(".annovault") / "config.toml"


def _find_repo_root(start_dir: Path) -> Path:
    """Return the nearest ancestor of start_dir holding a repo marker (start_dir if none)."""
    for candidate in (start_dir, *start_dir.parents):
        if any((candidate / marker).exists() for marker in REPO_MARKERS):
            return candidate
    return start_dir


def _load_repo_root_setting(repo_root: Path) -> Optional[Path]:
    """Read ``root`` from the repo's .annovault/config.toml.

    A missing file, an unreadable or malformed one, or a ``root`` that is not
    a non-empty string all yield None so resolution falls through.
    """
    config_file = repo_root / REPO_CONFIG_PATH
    try:
        data = tomllib.loads(config_file.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return None
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        logger.warning(f"Ignoring unreadable config file {config_file}: {e}")
        return None

    root_setting = data.get("root")
    if not isinstance(root_setting, str) or not root_setting:
        return None
    return Path(root_setting).expanduser().resolve()


def default_root() -> Path:
    """Return ``<home>/hackxindia26``.

    Raises:
        HomeDirectoryUnavailable: If the platform cannot report a home directory
    """
    try:
        home = Path.home()
    except (RuntimeError, KeyError) as e:
        raise HomeDirectoryUnavailable(cause=e) from e
    return home / ROOT_DIR_NAME


def resolve_root(cli_root: Optional[str] = None) -> Path:
    """Resolve the workspaces root directory with the following precedence:

    1. CLI --root option (if provided)
    2. repo-local .annovault/config.toml (walk upward from CWD)
    3. ANNOVAULT_ROOT environment variable
    4. <home>/hackxindia26

    The directory does not need to exist yet; workspace creation makes it.

    Args:
        cli_root: Root path from CLI --root option

    Returns:
        Absolute path to the workspaces root

    Raises:
        HomeDirectoryUnavailable: If falling back to the default root and no
            home directory is available
    """
    if cli_root:
        return Path(cli_root).expanduser().resolve()

    repo_root = _find_repo_root(Path.cwd())
    repo_setting = _load_repo_root_setting(repo_root)
    if repo_setting:
        return repo_setting

    env_root = os.environ.get(ROOT_ENV_VAR)
    if env_root:
        return Path(env_root).expanduser().resolve()

    return default_root()


def resolve_log_level(debug: bool = False) -> int:
    """Map --debug / ANNOVAULT_LOG_LEVEL to a logging level (default WARNING)."""
    if debug:
        return logging.DEBUG
    name = os.environ.get(LOG_LEVEL_ENV_VAR, "WARNING").upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.WARNING


class AnnovaultConfig(BaseModel):
    """Configuration for the workspace vault."""

    root: Path = Field(description="Directory holding all workspaces")

    model_config = {"frozen": False}

    @classmethod
    def from_env(cls, cli_root: Optional[str] = None) -> "AnnovaultConfig":
        """Load configuration from CLI overrides, repo config, environment or defaults."""
        return cls(root=resolve_root(cli_root))
