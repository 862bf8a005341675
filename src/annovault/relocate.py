"""Conflict-safe copy/move of files and folders into a destination directory."""

import logging
import os
import shutil
from enum import Enum
from pathlib import Path
from typing import Union

from .errors import CopyFailed, DestinationNotFound, MoveFailed, SourceNotFound

logger = logging.getLogger(__name__)


class RelocateMode(str, Enum):
    """How a source is relocated."""

    COPY = "copy"
    MOVE = "move"


def split_name(name: str) -> tuple[str, str]:
    """Split a base name into (stem, extension) at the last dot.

    A leading dot does not start an extension, so ``.bashrc`` has none.

    Args:
        name: File or folder base name

    Returns:
        Tuple of (stem, extension); extension is "" when absent
    """
    index = name.rfind(".")
    if index <= 0:
        return name, ""
    return name[:index], name[index + 1:]


def numbered_name(name: str, counter: int) -> str:
    """Build the ``"<stem> (<n>)"`` / ``"<stem> (<n>).<ext>"`` variant of a name."""
    stem, ext = split_name(name)
    if ext:
        return f"{stem} ({counter}).{ext}"
    return f"{stem} ({counter})"


def unique_destination(dest_dir: Path, name: str) -> Path:
    """Pick a non-colliding path for ``name`` inside ``dest_dir``.

    Tries the name itself, then ``name (1)``, ``name (2)``, ... in order.
    The search is linear and has no upper bound.

    Args:
        dest_dir: Target directory
        name: Desired base name

    Returns:
        Path inside dest_dir that does not exist yet
    """
    candidate = dest_dir / name
    if not os.path.lexists(candidate):
        return candidate

    counter = 1
    while True:
        candidate = dest_dir / numbered_name(name, counter)
        if not os.path.lexists(candidate):
            logger.debug(f"Name conflict for {name!r} in {dest_dir}; using {candidate.name!r}")
            return candidate
        counter += 1


def copy_tree(src: Path, dst: Path) -> None:
    """Recursively duplicate a folder, creating destination folders lazily.

    The first failure aborts the whole copy; anything already copied stays.

    Raises:
        CopyFailed: If any folder creation, listing or file copy fails
    """
    if not dst.exists():
        try:
            dst.mkdir()
        except OSError as e:
            raise CopyFailed("Failed to create directory", path=dst, cause=e) from e

    try:
        entries = list(os.scandir(src))
    except OSError as e:
        raise CopyFailed("Failed to read directory", path=src, cause=e) from e

    for entry in entries:
        src_path = Path(entry.path)
        dst_path = dst / entry.name
        if entry.is_dir(follow_symlinks=False):
            copy_tree(src_path, dst_path)
        else:
            try:
                shutil.copy2(src_path, dst_path)
            except OSError as e:
                raise CopyFailed("Failed to copy file", path=src_path, cause=e) from e


def relocate(
    source: Union[str, Path],
    dest_dir: Union[str, Path],
    mode: RelocateMode = RelocateMode.COPY,
) -> Path:
    """Copy or move ``source`` into ``dest_dir`` without overwriting anything.

    Args:
        source: File or folder to relocate
        dest_dir: Existing destination directory
        mode: RelocateMode.COPY or RelocateMode.MOVE

    Returns:
        Final path actually used (after conflict renaming)

    Raises:
        SourceNotFound: If source does not exist
        DestinationNotFound: If dest_dir does not exist or is not a directory
        CopyFailed: If a copy step fails
        MoveFailed: If the rename fails (including across volumes)
    """
    source = Path(source)
    dest_dir = Path(dest_dir)

    if not source.exists():
        raise SourceNotFound(path=source)

    if not dest_dir.is_dir():
        raise DestinationNotFound(path=dest_dir)

    source_name = source.resolve().name if source.name in ("", ".", "..") else source.name
    final_path = unique_destination(dest_dir, source_name)

    if mode == RelocateMode.MOVE:
        try:
            os.rename(source, final_path)
        except OSError as e:
            raise MoveFailed(path=source, cause=e) from e
        logger.info(f"Moved {source} -> {final_path}")
        return final_path

    if source.is_dir():
        if _is_within(dest_dir, source):
            raise CopyFailed("Cannot copy a folder into itself", path=source)
        copy_tree(source, final_path)
    else:
        try:
            shutil.copy2(source, final_path)
        except OSError as e:
            raise CopyFailed("Failed to copy file", path=source, cause=e) from e

    logger.info(f"Copied {source} -> {final_path}")
    return final_path


def _is_within(target: Path, base: Path) -> bool:
    target = target.resolve()
    base = base.resolve()
    return target == base or base in target.parents
