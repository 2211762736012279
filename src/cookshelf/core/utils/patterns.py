"""Glob pattern matching for ignore lists.

Example:
    from cookshelf.core.utils.patterns import matches_any_pattern

    if matches_any_pattern("test/unit/default_spec.rb", ["test/*"]):
        print("ignored")
"""
from __future__ import annotations

import fnmatch
from pathlib import PurePosixPath


def matches_any_pattern(file_path: str, patterns: list[str]) -> bool:
    """Check if file matches any pattern.

    Args:
        file_path: Relative POSIX file path to check
        patterns: List of glob patterns

    Returns:
        True if file matches at least one pattern
    """
    for pattern in patterns:
        if _matches_pattern(file_path, pattern):
            return True
    return False


def exclude_matching(files: list[str], patterns: list[str]) -> list[str]:
    """Return ``files`` without the entries matching any of ``patterns``."""
    if not patterns:
        return list(files)
    return [f for f in files if not matches_any_pattern(f, patterns)]


def _matches_pattern(file_path: str, pattern: str) -> bool:
    """Internal helper to check if a file matches a pattern.

    A pattern matches when it matches:
    - the whole path: "recipes/*.rb" matches "recipes/default.rb"
    - the file name: "*~" matches "recipes/default.rb~"
    - any leading directory: ".git" or "test/*" match everything beneath them
    """
    pure = PurePosixPath(file_path)
    pat = pattern.lstrip("/")
    if pat.endswith("/"):
        pat = pat.rstrip("/")
    if not pat:
        return False

    if fnmatch.fnmatchcase(pure.as_posix(), pat):
        return True
    if "/" not in pat and fnmatch.fnmatchcase(pure.name, pat):
        return True

    for parent in pure.parents:
        if parent == PurePosixPath("."):
            continue
        if fnmatch.fnmatchcase(parent.as_posix(), pat):
            return True
        if "/" not in pat and fnmatch.fnmatchcase(parent.name, pat):
            return True
    return False


__all__ = ["matches_any_pattern", "exclude_matching"]
