"""Tests for workspace management."""

import pytest

from annovault.errors import (
    AlreadyExists,
    EmptyName,
    ErrorKind,
    FileNotFound,
    InvalidName,
    PathEscape,
    WorkspaceNotFound,
    WrongKind,
)
from annovault.workspace import WorkspaceManager


def test_create_workspace_creates_root_dir_and_vault(manager, temp_root):
    """Creating a workspace makes the root, the workspace and its .vault."""
    assert not temp_root.exists()

    path = manager.create_workspace("thesis")

    assert path == temp_root / "thesis"
    assert path.is_dir()
    assert (path / ".vault").is_dir()


def test_created_workspace_listed_exactly_once(manager):
    manager.create_workspace("thesis")
    manager.create_workspace("grant proposal")

    names = [w.name for w in manager.list_workspaces()]

    assert names.count("thesis") == 1
    assert names.count("grant proposal") == 1
    assert len(names) == 2


def test_list_workspaces_reports_paths(manager, temp_root):
    manager.create_workspace("thesis")

    (workspace,) = manager.list_workspaces()

    assert workspace.path == str(temp_root / "thesis")


def test_list_workspaces_missing_root_is_empty(manager, temp_root):
    assert not temp_root.exists()
    assert manager.list_workspaces() == []


def test_list_workspaces_ignores_dirs_without_vault(manager, temp_root):
    manager.create_workspace("real")
    (temp_root / "half-created").mkdir()
    (temp_root / "stray.txt").write_text("not a workspace")
    (temp_root / "fake").mkdir()
    (temp_root / "fake" / ".vault").write_text("a file, not a directory")

    names = [w.name for w in manager.list_workspaces()]

    assert names == ["real"]


@pytest.mark.parametrize("name", ["", "a/b", "a\\b", "C:", "x:y", "a\x00b"])
def test_create_workspace_rejects_bad_names(manager, temp_root, name):
    with pytest.raises((EmptyName, InvalidName)) as exc_info:
        manager.create_workspace(name)

    assert exc_info.value.kind == ErrorKind.INVALID_INPUT
    assert not temp_root.exists()


def test_create_workspace_empty_name_is_empty_name_error(manager):
    with pytest.raises(EmptyName):
        manager.create_workspace("")


def test_create_workspace_twice_fails(manager):
    manager.create_workspace("thesis")

    with pytest.raises(AlreadyExists) as exc_info:
        manager.create_workspace("thesis")

    assert exc_info.value.kind == ErrorKind.ALREADY_EXISTS


def test_add_file_copies_into_workspace_root(manager, workspace, text_file):
    dest = manager.add_file("thesis", text_file)

    assert dest == workspace / "report.txt"
    assert dest.read_text() == text_file.read_text()
    assert text_file.exists()


def test_add_file_twice_numbers_the_copy(manager, workspace, text_file):
    manager.add_file("thesis", text_file)
    second = manager.add_file("thesis", text_file)

    assert second == workspace / "report (1).txt"


def test_add_file_to_missing_workspace(manager, text_file):
    with pytest.raises(WorkspaceNotFound):
        manager.add_file("nope", text_file)


def test_list_files_hides_vault_and_dotfiles(manager, workspace, text_file):
    manager.add_file("thesis", text_file)
    (workspace / ".DS_Store").write_bytes(b"\x00\x01")
    (workspace / "figures").mkdir()
    (workspace / "paper.pdf").write_bytes(b"%PDF-1.7")

    files = manager.list_files("thesis")

    assert sorted(files) == ["paper.pdf", "report.txt"]


def test_list_files_missing_workspace(manager):
    with pytest.raises(WorkspaceNotFound):
        manager.list_files("nope")


def test_read_workspace_file_returns_bytes(manager, workspace):
    (workspace / "paper.pdf").write_bytes(b"%PDF-1.7\x00")

    assert manager.read_workspace_file("thesis", "paper.pdf") == b"%PDF-1.7\x00"


def test_read_workspace_file_blocks_traversal(manager, workspace, temp_root):
    secret = temp_root.parent / "secret.txt"
    secret.write_text("do not leak")

    with pytest.raises(PathEscape) as exc_info:
        manager.read_workspace_file("thesis", "../../secret.txt")
    assert exc_info.value.kind == ErrorKind.INVALID_INPUT

    with pytest.raises(PathEscape):
        manager.read_workspace_file("thesis", "../../etc/passwd")

    with pytest.raises(PathEscape):
        manager.read_workspace_file("thesis", str(secret))


def test_read_workspace_file_blocks_symlink_escape(manager, workspace, tmp_path):
    outside = tmp_path / "outside.txt"
    outside.write_text("outside")
    (workspace / "link.txt").symlink_to(outside)

    with pytest.raises(PathEscape):
        manager.read_workspace_file("thesis", "link.txt")


def test_read_workspace_file_missing_and_directory(manager, workspace):
    (workspace / "figures").mkdir()

    with pytest.raises(FileNotFound):
        manager.read_workspace_file("thesis", "missing.pdf")
    with pytest.raises(WrongKind):
        manager.read_workspace_file("thesis", "figures")


def test_manager_default_root_uses_home(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))

    manager = WorkspaceManager()

    assert manager.root == tmp_path / "hackxindia26"


def test_read_workspace_file_rejects_nul_byte(manager, workspace):
    with pytest.raises(InvalidName):
        manager.read_workspace_file("thesis", "report\x00.pdf")
