"""Cookbook data models.

Provides immutable dataclasses for declared, resolved and locked cookbooks.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from cookshelf.core.cookbooks.constraint import VersionConstraint

DEFAULT_GROUP = "default"


@dataclass(frozen=True, slots=True)
class CookbookSource:
    """A cookbook declared in the Cookfile.

    Attributes:
        name: Unique cookbook identifier
        constraint: Version constraint the cookbook must satisfy
        path: Optional local location of the cookbook (absolute once loaded)
        groups: Groups the cookbook belongs to
    """

    name: str
    constraint: VersionConstraint = field(default_factory=lambda: VersionConstraint.parse(None))
    path: str | None = None
    groups: tuple[str, ...] = (DEFAULT_GROUP,)

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, base_dir: Path | None = None) -> CookbookSource:
        """Create CookbookSource from a Cookfile entry.

        Args:
            data: Dictionary with ``name`` and optional ``version``, ``path``, ``group``
            base_dir: Directory relative ``path`` values are resolved against

        Raises:
            ValueError: If the version constraint cannot be parsed
        """
        raw_groups = data.get("group") or [DEFAULT_GROUP]
        if isinstance(raw_groups, str):
            raw_groups = [raw_groups]

        path = data.get("path")
        if path and base_dir is not None:
            path = str((base_dir / Path(path).expanduser()).resolve())

        return cls(
            name=data["name"],
            constraint=VersionConstraint.parse(data.get("version")),
            path=path,
            groups=tuple(raw_groups),
        )


@dataclass(frozen=True, slots=True)
class ResolvedSource:
    """A cookbook source bound to a concrete version and on-disk location.

    Attributes:
        source: The declared (or transitively required) source
        version: Version chosen by the resolver
        origin_path: Directory holding the cookbook's files
        cookbook_name: Name from the cookbook's metadata
    """

    source: CookbookSource
    version: str
    origin_path: Path
    cookbook_name: str

    @property
    def name(self) -> str:
        return self.source.name

    @property
    def constraint(self) -> VersionConstraint:
        return self.source.constraint

    def __str__(self) -> str:
        return f"{self.name} ({self.version})"


@dataclass(frozen=True, slots=True)
class LockedSource:
    """Entry in the lockfile.

    Attributes:
        name: Cookbook name
        locked_version: Version pinned at the last reconciliation
        path: Local location, when the Cookfile declared one
    """

    name: str
    locked_version: str
    path: str | None = None

    @classmethod
    def from_resolved(cls, resolved: ResolvedSource) -> LockedSource:
        return cls(name=resolved.name, locked_version=resolved.version, path=resolved.source.path)

    def to_source(self) -> CookbookSource:
        """Source pinned to exactly the locked version."""
        return CookbookSource(
            name=self.name,
            constraint=VersionConstraint.exact(self.locked_version),
            path=self.path,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        result: dict[str, Any] = {"name": self.name, "locked_version": self.locked_version}
        if self.path is not None:
            result["path"] = self.path
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LockedSource:
        """Create from dictionary."""
        required_keys = {"name", "locked_version"}
        missing = required_keys - set(data.keys())
        if missing:
            raise ValueError(f"Missing required keys: {sorted(missing)}")
        return cls(
            name=data["name"],
            locked_version=str(data["locked_version"]),
            path=data.get("path"),
        )


__all__ = [
    "DEFAULT_GROUP",
    "CookbookSource",
    "ResolvedSource",
    "LockedSource",
]
