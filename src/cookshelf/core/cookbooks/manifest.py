"""Cookfile loading.

The Cookfile is a YAML document listing the cookbooks a project depends on.
Its fingerprint is the SHA-256 of the file's raw bytes.
"""
from __future__ import annotations

import hashlib
import logging
from pathlib import Path
from typing import Any

import yaml

from cookshelf.core.cookbooks.exceptions import ManifestError, ManifestNotFoundError
from cookshelf.core.cookbooks.models import CookbookSource
from cookshelf.core.schemas import schema_errors
from cookshelf.core.utils.io import parse_yaml_string

logger = logging.getLogger(__name__)

DEFAULT_FILENAME = "Cookfile"


class Manifest:
    """Read-only view over a Cookfile.

    The file is read on first access and cached; the object never writes it.
    """

    def __init__(self, path: Path) -> None:
        """Initialize manifest.

        Args:
            path: Path to the Cookfile
        """
        self.path = Path(path)
        self._sources: list[CookbookSource] | None = None
        self._fingerprint: str | None = None

    def exists(self) -> bool:
        return self.path.is_file()

    @property
    def fingerprint(self) -> str:
        """SHA-256 hex digest of the Cookfile contents."""
        self._load()
        return self._fingerprint or ""

    def sources(self) -> list[CookbookSource]:
        """Declared cookbooks, in Cookfile order."""
        return list(self._load())

    def find(self, name: str) -> CookbookSource | None:
        for source in self._load():
            if source.name == name:
                return source
        return None

    def _load(self) -> list[CookbookSource]:
        if self._sources is not None:
            return self._sources

        try:
            raw = self.path.read_bytes()
        except FileNotFoundError as exc:
            raise ManifestNotFoundError(
                f"No Cookfile found at {self.path}",
                context={"path": str(self.path)},
            ) from exc

        try:
            content = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ManifestError(
                f"Cookfile {self.path} is not valid UTF-8: {exc}", context={"path": str(self.path)}
            ) from exc

        self._fingerprint = hashlib.sha256(raw).hexdigest()
        self._sources = self._parse(content)
        logger.debug("Loaded %d cookbook(s) from %s", len(self._sources), self.path)
        return self._sources

    def _parse(self, content: str) -> list[CookbookSource]:
        try:
            data: Any = parse_yaml_string(content, default={})
        except yaml.YAMLError as exc:
            raise ManifestError(
                f"Invalid Cookfile YAML: {exc}", context={"path": str(self.path)}
            ) from exc

        errors = schema_errors(data, "cookfile")
        if errors:
            raise ManifestError(
                f"Invalid Cookfile {self.path}: {'; '.join(errors)}",
                context={"path": str(self.path), "errors": errors},
            )

        sources: list[CookbookSource] = []
        seen: set[str] = set()
        for item in data.get("cookbooks") or []:
            name = item["name"]
            if name in seen:
                raise ManifestError(
                    f"Cookbook '{name}' is declared more than once in {self.path}",
                    context={"path": str(self.path), "name": name},
                )
            seen.add(name)
            try:
                sources.append(CookbookSource.from_dict(item, base_dir=self.path.parent))
            except ValueError as exc:
                raise ManifestError(
                    f"Cookbook '{name}': {exc}", context={"path": str(self.path), "name": name}
                ) from exc
        return sources


__all__ = ["Manifest", "DEFAULT_FILENAME"]
