"""Core I/O utilities for Cookshelf.

Single source of truth for safe file access patterns:
- Atomic file writes with fsync
- Directory management utilities
- Directory replacement that never leaves the target empty
"""
from __future__ import annotations

import logging
import os
import shutil
import tempfile
import uuid
from pathlib import Path
from typing import Callable, Optional, TextIO, Union

PathLike = Union[str, Path]

logger = logging.getLogger(__name__)


def ensure_parent_dir(path: Path) -> None:
    """Ensure the parent directory for ``path`` exists."""
    Path(path).parent.mkdir(parents=True, exist_ok=True)


def ensure_directory(path: PathLike, create: bool = True) -> Path:
    """Ensure directory exists.

    Args:
        path: Directory path to check/create
        create: If True, create directory if missing; if False, raise if missing

    Returns:
        Path: The directory path (guaranteed to exist if create=True)

    Raises:
        FileNotFoundError: If create=False and directory doesn't exist
        NotADirectoryError: If path exists but is not a directory
        OSError: If directory creation fails
    """
    path = Path(path)

    if path.exists():
        if not path.is_dir():
            raise NotADirectoryError(f"Path exists but is not a directory: {path}")
        return path

    if create:
        path.mkdir(parents=True, exist_ok=True)
        return path
    raise FileNotFoundError(f"Directory does not exist: {path}")


def atomic_write(
    path: Path,
    write_fn: Callable[[TextIO], None],
    *,
    encoding: str = "utf-8",
) -> None:
    """Write to ``path`` atomically using a temp file + fsync + rename.

    - Parent directory is created if missing
    - Data is written to a temporary file in the same directory
    - File is fsync'd, then atomically replaced
    - Any leftover temp file is cleaned up on failure

    Args:
        path: Target file path
        write_fn: Callable that writes content to the file object
        encoding: Text encoding (default: utf-8)
    """
    path = Path(path)
    ensure_parent_dir(path)

    tmp_path: Optional[Path] = None
    try:
        with tempfile.NamedTemporaryFile(
            "w",
            encoding=encoding,
            dir=str(path.parent),
            prefix=f".{path.name}.",
            delete=False,
        ) as f:
            tmp_path = Path(f.name)
            write_fn(f)
            f.flush()
            os.fsync(f.fileno())

        os.replace(str(tmp_path), str(path))
    finally:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()


def replace_directory(source: Path, destination: Path) -> Path:
    """Replace ``destination`` with the directory tree at ``source``.

    ``source`` must live on the same filesystem as ``destination`` so the
    swap is a pair of renames:

    1. the old destination is renamed aside,
    2. ``source`` is renamed into place,
    3. the old tree is deleted.

    If step 2 fails the old tree is renamed back. When the destination
    itself cannot be renamed (a mount point or the working directory), its
    entries are moved aside and the staged entries moved in instead.

    Returns:
        The destination path.
    """
    source = Path(source)
    destination = Path(destination)

    if not destination.exists():
        os.rename(source, destination)
        return destination

    aside = destination.with_name(f".{destination.name}.old-{uuid.uuid4().hex[:8]}")
    try:
        os.rename(destination, aside)
    except OSError as exc:
        logger.debug("Cannot rename %s aside (%s); swapping entries instead", destination, exc)
        _replace_entries(source, destination)
        return destination

    try:
        os.rename(source, destination)
    except OSError:
        os.rename(aside, destination)
        raise

    shutil.rmtree(aside)
    return destination


def _replace_entries(source: Path, destination: Path) -> None:
    aside = Path(tempfile.mkdtemp(prefix=f".{destination.name}.old-", dir=destination.parent))
    moved: list[str] = []
    staged: list[str] = []
    try:
        for entry in sorted(os.listdir(destination)):
            os.rename(destination / entry, aside / entry)
            moved.append(entry)
        for entry in sorted(os.listdir(source)):
            os.rename(source / entry, destination / entry)
            staged.append(entry)
    except OSError:
        # Put the previous entries back; staged entries that made it in are dropped.
        for entry in staged:
            _remove(destination / entry)
        for entry in moved:
            os.rename(aside / entry, destination / entry)
        aside.rmdir()
        raise

    shutil.rmtree(aside)
    source.rmdir()


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


__all__ = [
    "PathLike",
    "ensure_parent_dir",
    "ensure_directory",
    "atomic_write",
    "replace_directory",
]
