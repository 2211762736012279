"""Helpers for building cookbooks, Cookfiles and lockfiles on disk."""
from __future__ import annotations

import json
import textwrap
from pathlib import Path

DEFAULT_FILES = ("README.md", "recipes/default.rb", "attributes/default.rb")


def make_cookbook(
    parent: Path,
    name: str,
    version: str,
    *,
    files: tuple[str, ...] = DEFAULT_FILES,
    dependencies: dict[str, str] | None = None,
    dirname: str | None = None,
) -> Path:
    """Create ``parent/<dirname or name-version>`` with metadata and files."""
    root = parent / (dirname or f"{name}-{version}")
    root.mkdir(parents=True, exist_ok=True)
    metadata = {"name": name, "version": version, "dependencies": dependencies or {}}
    (root / "metadata.json").write_text(json.dumps(metadata), encoding="utf-8")
    for rel in files:
        target = root / rel
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(f"# {name} {version} {rel}\n", encoding="utf-8")
    return root


def write_text(path: Path, content: str) -> Path:
    """Write dedented content, creating parent directories."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return path
