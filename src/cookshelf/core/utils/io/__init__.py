"""I/O utilities for Cookshelf.

This package provides safe file and directory operations:
- Core: atomic writes, directory management, directory replacement
- YAML: read/write helpers on top of the atomic writer
"""
from __future__ import annotations

from .core import (
    PathLike,
    atomic_write,
    ensure_directory,
    ensure_parent_dir,
    replace_directory,
)
from .yaml import (
    parse_yaml_string,
    read_yaml,
    write_yaml,
)

__all__ = [
    # core
    "PathLike",
    "ensure_parent_dir",
    "ensure_directory",
    "atomic_write",
    "replace_directory",
    # yaml
    "read_yaml",
    "write_yaml",
    "parse_yaml_string",
]
