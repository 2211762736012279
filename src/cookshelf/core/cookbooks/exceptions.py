"""Cookbook subsystem exceptions.

Every failure ``install()`` can surface is one of these, tagged with an
:class:`~cookshelf.core.exceptions.ErrorKind` so callers can branch on the
kind without matching class names.
"""
from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from cookshelf.core.exceptions import CookshelfError, ErrorKind


class CookbookError(CookshelfError):
    """Base exception for cookbook subsystem errors."""


class InstallSetupError(CookbookError):
    """Raised when install options or the cookshelf home are unusable."""


class ManifestError(CookbookError):
    """Raised when the Cookfile cannot be parsed or has an invalid shape."""


class ManifestNotFoundError(ManifestError, FileNotFoundError):
    """Raised when no Cookfile exists at the expected location."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        CookbookError.__init__(self, message, context=context)
        FileNotFoundError.__init__(self, message)


class EmptyManifestError(ManifestError):
    """Raised when the Cookfile declares no cookbooks."""


class LockfileError(CookbookError):
    """Raised when the lockfile cannot be parsed or has an invalid shape."""


class OutdatedCookbookSource(CookbookError):
    """Raised when a locked version no longer satisfies its declared constraint."""

    kind = ErrorKind.OUTDATED_SOURCE

    def __init__(self, name: str, declared_constraint: str, locked_version: str) -> None:
        self.name = name
        self.declared_constraint = declared_constraint
        self.locked_version = locked_version
        super().__init__(
            f"Cookbook '{name}' is locked at {locked_version}, which does not satisfy "
            f"'{declared_constraint}'. Remove it from the lockfile to re-resolve.",
            context={
                "name": name,
                "declared_constraint": declared_constraint,
                "locked_version": locked_version,
            },
        )


class ResolutionError(CookbookError):
    """Raised when no compatible set of cookbook versions can be found."""

    kind = ErrorKind.RESOLUTION_FAILED

    def __init__(
        self,
        message: str,
        *,
        name: str | None = None,
        constraint: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.name = name
        self.constraint = constraint
        self.cause = cause
        ctx: dict[str, Any] = {}
        if name:
            ctx["name"] = name
        if constraint:
            ctx["constraint"] = constraint
        if cause is not None:
            ctx["cause"] = str(cause)
        super().__init__(message, context=ctx)


class VendorIOError(CookbookError, OSError):
    """Raised when a filesystem operation fails while vendoring or saving."""

    kind = ErrorKind.IO_FAILURE

    def __init__(self, path: Path | str, cause: OSError) -> None:
        self.path = str(path)
        self.cause = cause
        message = f"I/O failure at {self.path}: {cause.strerror or cause}"
        CookbookError.__init__(self, message, context={"path": self.path, "cause": str(cause)})
        self.errno = cause.errno


__all__ = [
    "CookbookError",
    "InstallSetupError",
    "ManifestError",
    "ManifestNotFoundError",
    "EmptyManifestError",
    "LockfileError",
    "OutdatedCookbookSource",
    "ResolutionError",
    "VendorIOError",
]
