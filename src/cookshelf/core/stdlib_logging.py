from __future__ import annotations

import logging
import sys
from pathlib import Path

from cookshelf.core.utils.io import ensure_directory

_CONFIGURED_LOG_PATH: str | None = None
_COOKSHELF_FILE_HANDLER: logging.Handler | None = None


def _level_from_name(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(*, log_path: Path, level: str = "INFO") -> None:
    """Configure Python stdlib logging to write to `log_path` (no stderr handler).

    Idempotent per-process: if already configured for the same file, only the
    level is updated.
    """
    global _CONFIGURED_LOG_PATH, _COOKSHELF_FILE_HANDLER

    resolved = str(Path(log_path).resolve())
    root = logging.getLogger()
    root.setLevel(_level_from_name(level))

    if _CONFIGURED_LOG_PATH == resolved and _COOKSHELF_FILE_HANDLER is not None:
        _COOKSHELF_FILE_HANDLER.setLevel(_level_from_name(level))
        return

    ensure_directory(Path(resolved).parent)

    # FileHandler is also a StreamHandler, so only stdout/stderr handlers are removed.
    for h in list(root.handlers):
        if isinstance(h, logging.StreamHandler) and getattr(h, "stream", None) in (sys.stdout, sys.stderr):
            root.removeHandler(h)
            h.close()

    if _COOKSHELF_FILE_HANDLER is not None:
        root.removeHandler(_COOKSHELF_FILE_HANDLER)
        _COOKSHELF_FILE_HANDLER.close()
        _COOKSHELF_FILE_HANDLER = None

    fh = logging.FileHandler(resolved, encoding="utf-8")
    fh.setLevel(_level_from_name(level))
    fh.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
    root.addHandler(fh)

    _COOKSHELF_FILE_HANDLER = fh
    _CONFIGURED_LOG_PATH = resolved


def reset_logging_for_tests() -> None:
    """Test-only: clear the handler installed by :func:`configure_logging`."""
    global _CONFIGURED_LOG_PATH, _COOKSHELF_FILE_HANDLER
    if _COOKSHELF_FILE_HANDLER is not None:
        logging.getLogger().removeHandler(_COOKSHELF_FILE_HANDLER)
        _COOKSHELF_FILE_HANDLER.close()
    _CONFIGURED_LOG_PATH = None
    _COOKSHELF_FILE_HANDLER = None


__all__ = ["configure_logging", "reset_logging_for_tests"]
