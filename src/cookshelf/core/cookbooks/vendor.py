"""Vendoring of resolved cookbooks into a project directory.

Cookbooks are staged in a private temporary directory beside the
destination, filtered through the project's ``chefignore`` and only then
swapped into place, so a failed run never leaves the destination empty or
half-populated.
"""
from __future__ import annotations

import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Callable, Iterable

from cookshelf.core.cookbooks.exceptions import VendorIOError
from cookshelf.core.cookbooks.ignore import IgnoreFilter, find_ignore_file
from cookshelf.core.cookbooks.models import ResolvedSource
from cookshelf.core.utils.io import ensure_directory, replace_directory

logger = logging.getLogger(__name__)


def list_files(root: Path) -> list[str]:
    """Every file under ``root`` as a sorted list of relative POSIX paths.

    Symlinks are listed (not followed), including symlinks to directories.
    """
    root = Path(root)
    found: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root, followlinks=False):
        dirpath_path = Path(dirpath)
        for name in filenames:
            found.append((dirpath_path / name).relative_to(root).as_posix())
        for name in dirnames:
            if (dirpath_path / name).is_symlink():
                found.append((dirpath_path / name).relative_to(root).as_posix())
    return sorted(found)


def copy_files(origin: Path, files: Iterable[str], target: Path) -> int:
    """Copy ``files`` (relative to ``origin``) into ``target``, keeping layout."""
    count = 0
    for rel in files:
        src = origin / rel
        dst = target / rel
        dst.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(src, dst, follow_symlinks=False)
        count += 1
    return count


class VendorExporter:
    """Copies resolved cookbooks into a vendor directory."""

    def __init__(
        self,
        root: Path,
        *,
        ignore_filter_factory: Callable[[Path], IgnoreFilter] = IgnoreFilter,
    ) -> None:
        """Initialize vendor exporter.

        Args:
            root: Project root searched for ``chefignore``
            ignore_filter_factory: Builds the filter from an ignore file path
        """
        self.root = Path(root)
        self.ignore_filter_factory = ignore_filter_factory

    def vendor(self, destination: Path | str, sources: Iterable[ResolvedSource]) -> Path:
        """Replace ``destination`` with one directory per cookbook in ``sources``.

        Returns:
            The destination path.

        Raises:
            VendorIOError: If any filesystem operation fails
        """
        destination = Path(destination).expanduser().absolute()
        ignore_file = find_ignore_file(self.root)
        if ignore_file is not None:
            logger.info("Using ignore file %s", ignore_file)

        try:
            ignore_filter = self.ignore_filter_factory(ignore_file) if ignore_file else None
            ensure_directory(destination)
            staging = Path(
                tempfile.mkdtemp(prefix=f".{destination.name}.", suffix=".staging", dir=destination.parent)
            )
        except OSError as exc:
            raise VendorIOError(exc.filename or destination, exc) from exc

        try:
            for resolved in sources:
                self._stage(resolved, staging, ignore_filter)
            replace_directory(staging, destination)
        except OSError as exc:
            shutil.rmtree(staging, ignore_errors=True)
            raise VendorIOError(exc.filename or destination, exc) from exc

        logger.info("Vendored cookbooks into %s", destination)
        return destination

    def _stage(self, resolved: ResolvedSource, staging: Path, ignore_filter: IgnoreFilter | None) -> None:
        target = staging / resolved.cookbook_name
        target.mkdir(parents=True)
        files = list_files(resolved.origin_path)
        if ignore_filter is not None:
            files = ignore_filter.remove_ignores_from(files)
        count = copy_files(resolved.origin_path, files, target)
        logger.debug("Staged %d file(s) for %s", count, resolved)


__all__ = ["VendorExporter", "list_files", "copy_files"]
