"""Shared CLI utility functions."""
from __future__ import annotations

import argparse
from pathlib import Path

from cookshelf.core.config import CookshelfConfig
from cookshelf.core.exceptions import ConfigError
from cookshelf.core.stdlib_logging import configure_logging


def get_project_root(args: argparse.Namespace) -> Path:
    """Directory the Cookfile and ``chefignore`` are looked up from.

    Uses ``--root`` when given, else the current working directory.
    """
    root = getattr(args, "root", None)
    if root:
        return Path(root).expanduser().resolve()
    return Path.cwd()


def setup_logging(args: argparse.Namespace) -> CookshelfConfig:
    """Point logging at the configured log file and return the configuration."""
    shelf_path = getattr(args, "shelf_path", None)
    config = CookshelfConfig(Path(shelf_path) if shelf_path else None)
    level = "DEBUG" if getattr(args, "verbose", False) else config.log_level
    try:
        configure_logging(log_path=config.log_file, level=level)
    except OSError as exc:
        raise ConfigError(
            f"Cannot write log file {config.log_file}: {exc}",
            context={"path": str(config.log_file)},
        ) from exc
    return config


__all__ = ["get_project_root", "setup_logging"]
