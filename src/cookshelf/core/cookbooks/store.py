"""Local cookbook store.

Unpacked cookbooks live under the store directory as ``<name>-<version>/``,
each with a ``metadata.json`` describing the cookbook.
"""
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from cookshelf.core.cookbooks.constraint import VersionConstraint, sort_key

logger = logging.getLogger(__name__)

METADATA_FILENAME = "metadata.json"


@dataclass(frozen=True, slots=True)
class CookbookMetadata:
    """Parsed ``metadata.json`` of a cookbook directory.

    Attributes:
        name: Cookbook name
        version: Cookbook version
        path: Directory the metadata was read from
        dependencies: Mapping of cookbook name to constraint text
    """

    name: str
    version: str
    path: Path
    dependencies: dict[str, str] = field(default_factory=dict)

    @classmethod
    def load(cls, cookbook_dir: Path) -> CookbookMetadata:
        """Read metadata from ``cookbook_dir``.

        Raises:
            FileNotFoundError: If the directory has no metadata file
            ValueError: If the metadata is malformed
        """
        metadata_path = Path(cookbook_dir) / METADATA_FILENAME
        try:
            data: Any = json.loads(metadata_path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid {METADATA_FILENAME} in {cookbook_dir}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError(f"Invalid {METADATA_FILENAME} in {cookbook_dir}: expected an object")
        name = data.get("name")
        version = data.get("version")
        if not isinstance(name, str) or not name or not isinstance(version, str) or not version:
            raise ValueError(f"{METADATA_FILENAME} in {cookbook_dir} must define 'name' and 'version'")

        dependencies = data.get("dependencies") or {}
        if not isinstance(dependencies, dict):
            raise ValueError(f"Invalid 'dependencies' in {metadata_path}")
        return cls(
            name=name,
            version=version,
            path=Path(cookbook_dir),
            dependencies={str(k): str(v) for k, v in dependencies.items()},
        )


class CookbookStore:
    """Directory of unpacked cookbooks, one ``<name>-<version>`` dir each."""

    def __init__(self, storage_path: Path) -> None:
        """Initialize cookbook store.

        Args:
            storage_path: Directory holding the unpacked cookbooks
        """
        self.storage_path = Path(storage_path)

    def ensure_storage_path(self) -> None:
        """Ensure store directory exists."""
        self.storage_path.mkdir(parents=True, exist_ok=True)

    def cookbook_path(self, name: str, version: str) -> Path:
        return self.storage_path / f"{name}-{version}"

    def cookbook(self, name: str, version: str) -> CookbookMetadata | None:
        """Get the stored cookbook ``name`` at exactly ``version``."""
        path = self.cookbook_path(name, version)
        if not (path / METADATA_FILENAME).is_file():
            return None
        metadata = CookbookMetadata.load(path)
        if metadata.name != name or metadata.version != version:
            logger.warning("Ignoring %s: metadata says %s %s", path, metadata.name, metadata.version)
            return None
        return metadata

    def cookbooks(self, name: str | None = None) -> list[CookbookMetadata]:
        """List stored cookbooks, optionally only those called ``name``.

        Directories without valid metadata are skipped.
        """
        if not self.storage_path.is_dir():
            return []

        found: list[CookbookMetadata] = []
        for entry in sorted(self.storage_path.iterdir()):
            if not entry.is_dir():
                continue
            if name is not None and not entry.name.startswith(f"{name}-"):
                continue
            try:
                metadata = CookbookMetadata.load(entry)
            except (OSError, ValueError) as exc:
                logger.debug("Skipping %s: %s", entry, exc)
                continue
            if name is None or metadata.name == name:
                found.append(metadata)
        return found

    def satisfy(self, name: str, constraint: VersionConstraint) -> CookbookMetadata | None:
        """Highest stored version of ``name`` satisfying ``constraint``."""
        candidates = [c for c in self.cookbooks(name) if constraint.satisfies(c.version)]
        if not candidates:
            return None
        return max(candidates, key=lambda c: sort_key(c.version))


__all__ = ["CookbookStore", "CookbookMetadata", "METADATA_FILENAME"]
