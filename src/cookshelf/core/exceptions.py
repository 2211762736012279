from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Mapping


class ErrorKind(str, Enum):
    """Tag identifying which class of failure an error belongs to."""

    SETUP = "setup"
    OUTDATED_SOURCE = "outdated_source"
    RESOLUTION_FAILED = "resolution_failed"
    IO_FAILURE = "io_failure"


class CookshelfError(Exception):
    """Base exception for Cookshelf."""

    kind: ErrorKind = ErrorKind.SETUP
    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "kind": self.kind.value,
            "context": self.context,
        }


class ConfigError(CookshelfError):
    """Raised when the cookshelf configuration file is invalid."""


__all__ = [
    "ErrorKind",
    "CookshelfError",
    "ConfigError",
]
