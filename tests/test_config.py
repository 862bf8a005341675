"""Tests for configuration and path resolution."""

import logging
from pathlib import Path

import pytest

from annovault.config import AnnovaultConfig, default_root, resolve_log_level, resolve_root
from annovault.errors import EmptyName, ErrorKind, HomeDirectoryUnavailable, InvalidName
from annovault.paths import check_file_name, check_workspace_name


@pytest.fixture
def isolated_cwd(tmp_path, monkeypatch):
    """Run from a fresh repo root that has no .annovault config."""
    cwd = tmp_path / "cwd"
    cwd.mkdir()
    (cwd / "pyproject.toml").write_text("[project]\nname = 'x'\n")
    monkeypatch.chdir(cwd)
    monkeypatch.delenv("ANNOVAULT_ROOT", raising=False)
    return cwd


def test_default_root_under_home(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))

    assert default_root() == tmp_path / "hackxindia26"


def test_default_root_without_home(monkeypatch):
    def no_home():
        raise RuntimeError("Could not determine home directory.")

    monkeypatch.setattr(Path, "home", staticmethod(no_home))

    with pytest.raises(HomeDirectoryUnavailable) as exc_info:
        default_root()
    assert exc_info.value.kind == ErrorKind.PLATFORM_UNAVAILABLE


def test_resolve_root_cli_wins(isolated_cwd, tmp_path, monkeypatch):
    monkeypatch.setenv("ANNOVAULT_ROOT", str(tmp_path / "from-env"))

    assert resolve_root(str(tmp_path / "from-cli")) == (tmp_path / "from-cli").resolve()


def test_resolve_root_repo_config(isolated_cwd, tmp_path, monkeypatch):
    config_dir = isolated_cwd / ".annovault"
    config_dir.mkdir()
    (config_dir / "config.toml").write_text(f'root = "{(tmp_path / "from-repo").as_posix()}"\n')
    monkeypatch.setenv("ANNOVAULT_ROOT", str(tmp_path / "from-env"))

    assert resolve_root() == (tmp_path / "from-repo").resolve()


def test_resolve_root_malformed_repo_config_ignored(isolated_cwd, tmp_path, monkeypatch):
    config_dir = isolated_cwd / ".annovault"
    config_dir.mkdir()
    (config_dir / "config.toml").write_text("root = [unterminated\n")
    monkeypatch.setenv("ANNOVAULT_ROOT", str(tmp_path / "from-env"))

    assert resolve_root() == (tmp_path / "from-env").resolve()


def test_resolve_root_env(isolated_cwd, tmp_path, monkeypatch):
    monkeypatch.setenv("ANNOVAULT_ROOT", str(tmp_path / "from-env"))

    assert resolve_root() == (tmp_path / "from-env").resolve()


def test_resolve_root_falls_back_to_home(isolated_cwd, tmp_path, monkeypatch):
    monkeypatch.setenv("HOME", str(tmp_path / "home"))

    assert resolve_root() == tmp_path / "home" / "hackxindia26"


def test_config_from_env(isolated_cwd, tmp_path):
    config = AnnovaultConfig.from_env(cli_root=str(tmp_path / "root"))

    assert config.model_dump() == {"root": (tmp_path / "root").resolve()}


def test_repo_root_found_from_nested_directory(isolated_cwd, tmp_path, monkeypatch):
    config_dir = isolated_cwd / ".annovault"
    config_dir.mkdir()
    (config_dir / "config.toml").write_text(f'root = "{(tmp_path / "from-repo").as_posix()}"\n')
    nested = isolated_cwd / "docs" / "drafts"
    nested.mkdir(parents=True)
    monkeypatch.chdir(nested)

    assert resolve_root() == (tmp_path / "from-repo").resolve()


def test_repo_config_non_string_root_ignored(isolated_cwd, tmp_path, monkeypatch):
    config_dir = isolated_cwd / ".annovault"
    config_dir.mkdir()
    (config_dir / "config.toml").write_text("root = 42\n")
    monkeypatch.setenv("ANNOVAULT_ROOT", str(tmp_path / "from-env"))

    assert resolve_root() == (tmp_path / "from-env").resolve()


def test_workspace_paths_layout(workspace_paths, temp_root):
    assert workspace_paths.resolve_workspace("thesis") == temp_root / "thesis"
    assert workspace_paths.vault_dir("thesis") == temp_root / "thesis" / ".vault"
    assert workspace_paths.sidecar_path("thesis", "report.pdf") == temp_root / "thesis" / ".vault" / "report.pdf.json"
    assert not temp_root.exists()


def test_resolve_vault_creates_directories(workspace_paths, temp_root):
    vault = workspace_paths.resolve_vault("thesis")

    assert vault == temp_root / "thesis" / ".vault"
    assert vault.is_dir()
    # Idempotent
    assert workspace_paths.resolve_vault("thesis") == vault


def test_name_checks():
    assert check_workspace_name("My Thesis") == "My Thesis"
    assert check_file_name("report.pdf") == "report.pdf"
    with pytest.raises(EmptyName):
        check_workspace_name("")
    with pytest.raises(InvalidName):
        check_workspace_name("a:b")
    with pytest.raises(InvalidName):
        check_file_name("a/b.pdf")
    with pytest.raises(InvalidName):
        check_workspace_name("a\x00b")
    with pytest.raises(InvalidName):
        check_file_name("report\x00.pdf")


def test_resolve_log_level(monkeypatch):
    monkeypatch.delenv("ANNOVAULT_LOG_LEVEL", raising=False)
    assert resolve_log_level() == logging.WARNING
    assert resolve_log_level(debug=True) == logging.DEBUG

    monkeypatch.setenv("ANNOVAULT_LOG_LEVEL", "info")
    assert resolve_log_level() == logging.INFO

    monkeypatch.setenv("ANNOVAULT_LOG_LEVEL", "chatty")
    assert resolve_log_level() == logging.WARNING
