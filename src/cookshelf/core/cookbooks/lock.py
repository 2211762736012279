"""Cookfile lock management.

The lockfile sits beside the Cookfile (``Cookfile.lock``) and records the
version every cookbook was pinned at, plus the fingerprint of the Cookfile
the pins were computed from.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterable

import yaml
from packaging import version

from cookshelf.core.cookbooks.exceptions import LockfileError, VendorIOError
from cookshelf.core.cookbooks.models import LockedSource, ResolvedSource
from cookshelf.core.schemas import schema_errors
from cookshelf.core.utils.io import read_yaml, write_yaml

logger = logging.getLogger(__name__)


class Lockfile:
    """Manages the Cookfile lock.

    Nothing touches the disk until :meth:`save`; ``update`` and the
    ``fingerprint`` setter only change the in-memory state.
    """

    def __init__(self, path: Path) -> None:
        """Initialize lockfile.

        Args:
            path: Path to the lock file
        """
        self.path = Path(path)
        self._entries: dict[str, LockedSource] | None = None
        self._fingerprint: str | None = None

    @classmethod
    def for_manifest(cls, manifest_path: Path) -> Lockfile:
        """Lockfile living beside ``manifest_path``."""
        manifest_path = Path(manifest_path)
        return cls(manifest_path.with_name(f"{manifest_path.name}.lock"))

    @property
    def fingerprint(self) -> str | None:
        """Cookfile fingerprint recorded at the last reconciliation."""
        self._load()
        return self._fingerprint

    @fingerprint.setter
    def fingerprint(self, value: str | None) -> None:
        self._load()
        self._fingerprint = value

    def sources(self) -> list[LockedSource]:
        """Locked cookbooks, in lockfile order."""
        return list(self._load().values())

    def find(self, name: str) -> LockedSource | None:
        """Get a locked cookbook by name."""
        return self._load().get(name)

    def update(self, sources: Iterable[ResolvedSource | LockedSource]) -> None:
        """Replace the locked cookbooks with ``sources``."""
        entries: dict[str, LockedSource] = {}
        for source in sources:
            if isinstance(source, ResolvedSource):
                source = LockedSource.from_resolved(source)
            entries[source.name] = source
        self._load()
        self._entries = entries

    def save(self) -> None:
        """Save lock file.

        Entries are sorted by name for deterministic output. The write is
        atomic: a failure leaves the previous lockfile in place.
        """
        entries = sorted(self._load().values(), key=lambda e: e.name)
        data: dict[str, Any] = {
            "sha": self._fingerprint,
            "cookbooks": [entry.to_dict() for entry in entries],
        }
        try:
            write_yaml(self.path, data, sort_keys=False)
        except OSError as exc:
            raise VendorIOError(self.path, exc) from exc
        logger.info("Saved %d locked cookbook(s) to %s", len(entries), self.path)

    def _load(self) -> dict[str, LockedSource]:
        if self._entries is not None:
            return self._entries

        try:
            data = read_yaml(self.path, default={}, raise_on_error=True) if self.path.exists() else {}
        except yaml.YAMLError as exc:
            raise LockfileError(
                f"Invalid lockfile YAML: {exc}", context={"path": str(self.path)}
            ) from exc

        errors = schema_errors(data, "lockfile")
        if errors:
            raise LockfileError(
                f"Invalid lockfile {self.path}: {'; '.join(errors)}",
                context={"path": str(self.path), "errors": errors},
            )

        entries: dict[str, LockedSource] = {}
        for item in data.get("cookbooks") or []:
            entry = LockedSource.from_dict(item)
            if entry.name in entries:
                raise LockfileError(
                    f"Cookbook '{entry.name}' is locked more than once in {self.path}",
                    context={"path": str(self.path), "name": entry.name},
                )
            try:
                version.Version(entry.locked_version)
            except version.InvalidVersion as exc:
                raise LockfileError(
                    f"Cookbook '{entry.name}' is locked at invalid version "
                    f"'{entry.locked_version}' in {self.path}",
                    context={
                        "path": str(self.path),
                        "name": entry.name,
                        "locked_version": entry.locked_version,
                    },
                ) from exc
            entries[entry.name] = entry

        self._fingerprint = data.get("sha")
        self._entries = entries
        return entries


__all__ = ["Lockfile"]
