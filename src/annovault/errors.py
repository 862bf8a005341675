"""Error taxonomy for annovault.

Every failure raised by the library is an ``AnnovaultError`` subclass carrying
a closed ``ErrorKind``, the path involved (when there is one) and the
underlying OS/serialization error (when there is one). Rendering to a
human-readable string happens in ``__str__``; the command surface is the only
place that turns errors into plain strings.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Optional, Union

PathLike = Union[str, Path]


class ErrorKind(str, Enum):
    """Closed set of failure categories."""

    NOT_FOUND = "not_found"
    WRONG_KIND = "wrong_kind"
    ALREADY_EXISTS = "already_exists"
    INVALID_INPUT = "invalid_input"
    BINARY_CONTENT = "binary_content"
    SERIALIZATION = "serialization"
    PLATFORM_UNAVAILABLE = "platform_unavailable"
    IO_FAILURE = "io_failure"
    UNKNOWN_COMMAND = "unknown_command"


class AnnovaultError(Exception):
    """Base class for all annovault errors."""

    kind: ErrorKind = ErrorKind.IO_FAILURE
    message: str = "Operation failed"

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        path: Optional[PathLike] = None,
        cause: Optional[BaseException] = None,
    ):
        self.path = Path(path) if path is not None else None
        self.cause = cause
        if message is not None:
            self.message = message
        super().__init__(str(self))

    def __str__(self) -> str:
        text = self.message
        if self.path is not None:
            text = f"{text}: {self.path}"
        if self.cause is not None:
            text = f"{text} ({self.cause})"
        return text


# NotFound

class SourceNotFound(AnnovaultError):
    kind = ErrorKind.NOT_FOUND
    message = "Source does not exist"


class DestinationNotFound(AnnovaultError):
    kind = ErrorKind.NOT_FOUND
    message = "Destination directory does not exist"


class WorkspaceNotFound(AnnovaultError):
    kind = ErrorKind.NOT_FOUND
    message = "Workspace does not exist"


class FileNotFound(AnnovaultError):
    kind = ErrorKind.NOT_FOUND
    message = "File or folder does not exist"


class ParentNotFound(AnnovaultError):
    kind = ErrorKind.NOT_FOUND
    message = "Parent directory does not exist"


# WrongKind

class WrongKind(AnnovaultError):
    kind = ErrorKind.WRONG_KIND
    message = "Path has the wrong kind for this operation"


# AlreadyExists

class AlreadyExists(AnnovaultError):
    kind = ErrorKind.ALREADY_EXISTS
    message = "A file or folder with that name already exists"


# InvalidInput

class EmptyName(AnnovaultError):
    kind = ErrorKind.INVALID_INPUT
    message = "Name cannot be empty"


class InvalidName(AnnovaultError):
    kind = ErrorKind.INVALID_INPUT
    message = "Invalid name"


class PathEscape(AnnovaultError):
    kind = ErrorKind.INVALID_INPUT
    message = "Path escapes the workspace directory"


class InvalidArguments(AnnovaultError):
    kind = ErrorKind.INVALID_INPUT
    message = "Invalid command arguments"


# BinaryContent

class BinaryContent(AnnovaultError):
    kind = ErrorKind.BINARY_CONTENT
    message = "File is binary and cannot be displayed as text"


# Serialization

class SerializationFailed(AnnovaultError):
    kind = ErrorKind.SERIALIZATION
    message = "Failed to serialize document"


class DeserializationFailed(AnnovaultError):
    kind = ErrorKind.SERIALIZATION
    message = "Failed to deserialize document"


# PlatformUnavailable

class HomeDirectoryUnavailable(AnnovaultError):
    kind = ErrorKind.PLATFORM_UNAVAILABLE
    message = "Could not find home directory"


# IOFailure

class CopyFailed(AnnovaultError):
    kind = ErrorKind.IO_FAILURE
    message = "Failed to copy"


class MoveFailed(AnnovaultError):
    kind = ErrorKind.IO_FAILURE
    message = "Failed to move"


class WriteFailed(AnnovaultError):
    kind = ErrorKind.IO_FAILURE
    message = "Failed to write file"


class ReadFailed(AnnovaultError):
    kind = ErrorKind.IO_FAILURE
    message = "Failed to read file"


class CreateFailed(AnnovaultError):
    kind = ErrorKind.IO_FAILURE
    message = "Failed to create"


class DeleteFailed(AnnovaultError):
    kind = ErrorKind.IO_FAILURE
    message = "Failed to delete"


class UnknownCommand(AnnovaultError):
    kind = ErrorKind.UNKNOWN_COMMAND
    message = "Unknown command"
