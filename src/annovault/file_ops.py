"""Generic file and folder operations, independent of workspaces."""

import logging
import shutil
from pathlib import Path
from typing import Union

from .errors import (
    AlreadyExists,
    BinaryContent,
    CreateFailed,
    DeleteFailed,
    FileNotFound,
    MoveFailed,
    ParentNotFound,
    ReadFailed,
    WriteFailed,
    WrongKind,
)
from .relocate import RelocateMode, relocate

logger = logging.getLogger(__name__)

PathArg = Union[str, Path]

BINARY_SNIFF_BYTES = 8192
BINARY_CONTROL_RATIO = 0.3
# TAB, LF, CR
_TEXT_CONTROL_BYTES = frozenset({9, 10, 13})


def _existing_dir(path: PathArg) -> Path:
    parent = Path(path)
    if not parent.exists():
        raise ParentNotFound(path=parent)
    if not parent.is_dir():
        raise WrongKind("Path is not a directory", path=parent)
    return parent


def _existing_file(path: PathArg) -> Path:
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFound("File does not exist", path=file_path)
    if file_path.is_dir():
        raise WrongKind("Path is a directory", path=file_path)
    return file_path


def create_file(parent: PathArg, name: str) -> Path:
    """Create an empty file inside an existing directory.

    Raises:
        ParentNotFound: If parent does not exist
        WrongKind: If parent is not a directory
        AlreadyExists: If the file already exists
    """
    file_path = _existing_dir(parent) / name
    if file_path.exists():
        raise AlreadyExists("File already exists", path=file_path)
    try:
        with open(file_path, "x", encoding="utf-8"):
            pass
    except FileExistsError as e:
        raise AlreadyExists("File already exists", path=file_path, cause=e) from e
    except OSError as e:
        raise CreateFailed("Failed to create file", path=file_path, cause=e) from e
    logger.info(f"Created file {file_path}")
    return file_path


def create_folder(parent: PathArg, name: str) -> Path:
    """Create a folder inside an existing directory."""
    folder_path = _existing_dir(parent) / name
    if folder_path.exists():
        raise AlreadyExists("Folder already exists", path=folder_path)
    try:
        folder_path.mkdir()
    except FileExistsError as e:
        raise AlreadyExists("Folder already exists", path=folder_path, cause=e) from e
    except OSError as e:
        raise CreateFailed("Failed to create folder", path=folder_path, cause=e) from e
    logger.info(f"Created folder {folder_path}")
    return folder_path


def delete_file(path: PathArg) -> None:
    """Delete a file; refuses directories.

    Raises:
        FileNotFound: If the path does not exist
        WrongKind: If the path is a directory
        DeleteFailed: If removal fails
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFound("File does not exist", path=file_path)
    if file_path.is_dir():
        raise WrongKind("Path is a directory, use delete_folder instead", path=file_path)
    try:
        file_path.unlink()
    except OSError as e:
        raise DeleteFailed("Failed to delete file", path=file_path, cause=e) from e
    logger.info(f"Deleted file {file_path}")


def delete_folder(path: PathArg) -> None:
    """Delete a folder and everything under it; refuses files."""
    folder_path = Path(path)
    if not folder_path.exists():
        raise FileNotFound("Folder does not exist", path=folder_path)
    if not folder_path.is_dir():
        raise WrongKind("Path is not a directory", path=folder_path)
    try:
        shutil.rmtree(folder_path)
    except OSError as e:
        raise DeleteFailed("Failed to delete folder", path=folder_path, cause=e) from e
    logger.info(f"Deleted folder {folder_path}")


def read_file_content(path: PathArg) -> str:
    """Read a whole file as UTF-8 text.

    Raises:
        FileNotFound: If the file does not exist
        WrongKind: If the path is a directory
        BinaryContent: If the bytes are not valid UTF-8, so the caller can
            switch to read_binary_file
        ReadFailed: If reading fails
    """
    content = read_binary_file(path)
    try:
        return content.decode("utf-8")
    except UnicodeDecodeError as e:
        raise BinaryContent(path=path, cause=e) from e


def read_binary_file(path: PathArg) -> bytes:
    """Read a whole file as raw bytes."""
    file_path = _existing_file(path)
    try:
        return file_path.read_bytes()
    except OSError as e:
        raise ReadFailed(path=file_path, cause=e) from e


def write_file_content(path: PathArg, content: str) -> None:
    """Create or overwrite a file with UTF-8 text."""
    write_binary_file(path, content.encode("utf-8"))


def write_binary_file(path: PathArg, content: bytes) -> None:
    """Create or overwrite a file with raw bytes.

    Raises:
        WrongKind: If the path is a directory
        WriteFailed: If writing fails (including a missing parent directory)
    """
    file_path = Path(path)
    if file_path.is_dir():
        raise WrongKind("Path is a directory", path=file_path)
    try:
        file_path.write_bytes(bytes(content))
    except OSError as e:
        raise WriteFailed(path=file_path, cause=e) from e
    logger.debug(f"Wrote {len(content)} byte(s) to {file_path}")


def looks_binary(sample: bytes) -> bool:
    """Decide whether a leading chunk of a file looks binary.

    Empty input is text. Any NUL byte means binary. Otherwise binary when
    more than 30% of the bytes are control characters other than TAB/LF/CR.
    """
    if not sample:
        return False
    if b"\x00" in sample:
        return True
    control = sum(1 for b in sample if b < 32 and b not in _TEXT_CONTROL_BYTES)
    return control / len(sample) > BINARY_CONTROL_RATIO


def is_file_binary(path: PathArg) -> bool:
    """Heuristically classify a file as binary from its first 8 KiB.

    This is a heuristic, not a content-type detector.
    """
    file_path = _existing_file(path)
    try:
        with open(file_path, "rb") as f:
            sample = f.read(BINARY_SNIFF_BYTES)
    except OSError as e:
        raise ReadFailed("Failed to open file", path=file_path, cause=e) from e
    result = looks_binary(sample)
    logger.debug(f"Binary heuristic for {file_path}: {result}")
    return result


def rename_entry(old_path: PathArg, new_name: str) -> Path:
    """Rename a file or folder within its parent directory.

    Raises:
        FileNotFound: If old_path does not exist
        AlreadyExists: If a sibling with new_name exists
        MoveFailed: If the rename fails
    """
    source = Path(old_path)
    if not source.exists():
        raise FileNotFound(path=source)

    new_path = source.parent / new_name
    if new_path.exists():
        raise AlreadyExists(path=new_path)

    try:
        source.rename(new_path)
    except OSError as e:
        raise MoveFailed("Failed to rename", path=source, cause=e) from e
    logger.info(f"Renamed {source} -> {new_path}")
    return new_path


def copy_entry(source_path: PathArg, dest_dir: PathArg) -> Path:
    """Copy a file or folder into dest_dir, numbering the name on conflict."""
    return relocate(source_path, dest_dir, RelocateMode.COPY)


def move_entry(source_path: PathArg, dest_dir: PathArg) -> Path:
    """Move a file or folder into dest_dir, numbering the name on conflict."""
    return relocate(source_path, dest_dir, RelocateMode.MOVE)
