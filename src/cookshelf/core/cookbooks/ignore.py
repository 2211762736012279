"""Ignore-pattern files (``chefignore``).

One glob pattern per line; blank lines and ``#`` comments are skipped.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from cookshelf.core.cookbooks.exceptions import CookbookError
from cookshelf.core.utils.patterns import exclude_matching

logger = logging.getLogger(__name__)

IGNORE_FILENAME = "chefignore"


def find_ignore_file(root: Path) -> Path | None:
    """Locate the ignore file for a project rooted at ``root``.

    ``<root>/chefignore`` is checked first, then ``<root>/cookbooks/chefignore``.
    """
    for candidate in (Path(root) / IGNORE_FILENAME, Path(root) / "cookbooks" / IGNORE_FILENAME):
        if candidate.is_file():
            return candidate
    return None


class IgnoreFilter:
    """Removes ignored paths from file lists."""

    def __init__(self, ignore_file: Path) -> None:
        self.ignore_file = Path(ignore_file)
        try:
            content = self.ignore_file.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise CookbookError(
                f"Ignore file {self.ignore_file} is not valid UTF-8: {exc}",
                context={"path": str(self.ignore_file)},
            ) from exc
        self.patterns = self._parse(content)
        logger.debug("Loaded %d ignore pattern(s) from %s", len(self.patterns), self.ignore_file)

    @staticmethod
    def _parse(content: str) -> list[str]:
        patterns: list[str] = []
        for line in content.splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            patterns.append(stripped)
        return patterns

    def remove_ignores_from(self, file_paths: Iterable[str]) -> list[str]:
        """Return ``file_paths`` without the ignored ones, preserving order."""
        return exclude_matching(list(file_paths), self.patterns)


__all__ = ["IgnoreFilter", "find_ignore_file", "IGNORE_FILENAME"]
