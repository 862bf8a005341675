"""Command surface invoked by the desktop shell.

Each command takes keyword arguments named the way the shell sends them and
answers with a ``CommandResponse``: either a JSON-friendly value or a
human-readable error string plus its error kind. Structured errors are
rendered to strings here and nowhere else.
"""

from __future__ import annotations

import inspect
import logging
from pathlib import Path
from typing import Any, Callable, Optional

from pydantic import BaseModel, ValidationError

from . import file_ops
from .errors import (
    AnnovaultError,
    DeserializationFailed,
    ErrorKind,
    InvalidArguments,
    UnknownCommand,
)
from .models.document import Document
from .workspace import WorkspaceManager

logger = logging.getLogger(__name__)

CommandFn = Callable[..., Any]

# name -> function(manager, **kwargs)
COMMANDS: dict[str, CommandFn] = {}


class CommandResponse(BaseModel):
    """Result of one command invocation."""

    ok: bool
    value: Any = None
    error: Optional[str] = None
    kind: Optional[ErrorKind] = None

    @classmethod
    def success(cls, value: Any = None) -> "CommandResponse":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: AnnovaultError) -> "CommandResponse":
        return cls(ok=False, error=str(error), kind=error.kind)


def command(fn: CommandFn) -> CommandFn:
    """Register a function under its own name."""
    COMMANDS[fn.__name__] = fn
    return fn


def _to_wire(value: Any) -> Any:
    """Convert return values into JSON-friendly shapes."""
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, (bytes, bytearray)):
        return list(value)
    if isinstance(value, list):
        return [_to_wire(item) for item in value]
    return value


def _as_document(document: Any) -> Document:
    if isinstance(document, Document):
        return document
    try:
        return Document.model_validate(document)
    except ValidationError as e:
        raise DeserializationFailed(cause=e) from e


# File operations

@command
def create_file(manager: WorkspaceManager, path: str, name: str) -> Path:
    return file_ops.create_file(path, name)


@command
def create_folder(manager: WorkspaceManager, path: str, name: str) -> Path:
    return file_ops.create_folder(path, name)


@command
def delete_file(manager: WorkspaceManager, path: str) -> None:
    file_ops.delete_file(path)


@command
def delete_folder(manager: WorkspaceManager, path: str) -> None:
    file_ops.delete_folder(path)


@command
def rename_entry(manager: WorkspaceManager, old_path: str, new_name: str) -> Path:
    return file_ops.rename_entry(old_path, new_name)


@command
def copy_entry(manager: WorkspaceManager, source_path: str, dest_path: str) -> Path:
    return file_ops.copy_entry(source_path, dest_path)


@command
def move_entry(manager: WorkspaceManager, source_path: str, dest_path: str) -> Path:
    return file_ops.move_entry(source_path, dest_path)


@command
def read_file_content(manager: WorkspaceManager, path: str) -> str:
    return file_ops.read_file_content(path)


@command
def write_file_content(manager: WorkspaceManager, path: str, content: str) -> None:
    file_ops.write_file_content(path, content)


@command
def write_binary_file(manager: WorkspaceManager, path: str, content: list[int]) -> None:
    try:
        data = bytes(content)
    except (TypeError, ValueError) as e:
        raise InvalidArguments("Content must be a sequence of bytes", cause=e) from e
    file_ops.write_binary_file(path, data)


@command
def is_file_binary(manager: WorkspaceManager, path: str) -> bool:
    return file_ops.is_file_binary(path)


# Workspaces

@command
def get_recent_workspaces(manager: WorkspaceManager) -> list:
    return manager.list_workspaces()


@command
def create_workspace(manager: WorkspaceManager, name: str) -> Path:
    return manager.create_workspace(name)


@command
def add_file_to_workspace(manager: WorkspaceManager, workspace_name: str, source_path: str) -> Path:
    return manager.add_file(workspace_name, source_path)


@command
def get_workspace_files(manager: WorkspaceManager, workspace_name: str) -> list[str]:
    return manager.list_files(workspace_name)


@command
def save_annotations(manager: WorkspaceManager, workspace_name: str, file_name: str, document: Any) -> None:
    manager.save_annotations(workspace_name, file_name, _as_document(document))


@command
def load_annotations(manager: WorkspaceManager, workspace_name: str, file_name: str) -> Document:
    return manager.load_annotations(workspace_name, file_name)


@command
def read_workspace_file(manager: WorkspaceManager, workspace_name: str, file_name: str) -> bytes:
    return manager.read_workspace_file(workspace_name, file_name)


def invoke(manager: WorkspaceManager, name: str, /, **kwargs: Any) -> CommandResponse:
    """Run a registered command and wrap its outcome.

    Args:
        manager: WorkspaceManager the workspace commands operate on
        name: Command name (e.g. ``create_workspace``)
        **kwargs: Command arguments

    Returns:
        CommandResponse with either ``value`` or ``error``/``kind`` set
    """
    fn = COMMANDS.get(name)
    try:
        if fn is None:
            raise UnknownCommand(f"Unknown command: {name!r}")
        try:
            inspect.signature(fn).bind(manager, **kwargs)
        except TypeError as e:
            raise InvalidArguments(f"Invalid arguments for {name}", cause=e) from e
        try:
            value = fn(manager, **kwargs)
        except ValueError as e:
            # pathlib rejects embedded NUL bytes this way
            raise InvalidArguments(f"Invalid arguments for {name}", cause=e) from e
    except AnnovaultError as e:
        logger.info(f"Command {name} failed: {e}")
        return CommandResponse.failure(e)

    return CommandResponse.success(_to_wire(value))
