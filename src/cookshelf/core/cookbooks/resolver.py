"""Cookbook resolution.

The installer only needs something that turns a list of sources into
concrete versions; :class:`Resolver` is that capability.
:class:`StoreResolver` is the default implementation, backed by a local
:class:`~cookshelf.core.cookbooks.store.CookbookStore`.
"""
from __future__ import annotations

import logging
from collections import deque
from pathlib import Path
from typing import Iterable, Protocol

from cookshelf.core.cookbooks.constraint import VersionConstraint
from cookshelf.core.cookbooks.exceptions import ResolutionError
from cookshelf.core.cookbooks.models import CookbookSource, ResolvedSource
from cookshelf.core.cookbooks.store import CookbookMetadata, CookbookStore

logger = logging.getLogger(__name__)


class Resolver(Protocol):
    """Resolves a set of cookbook sources to concrete versions."""

    def resolve(self, sources: Iterable[CookbookSource]) -> list[ResolvedSource]:
        """Return one resolved cookbook per requested source (plus dependencies).

        Raises:
            ResolutionError: If no compatible set of versions exists
        """
        ...


class StoreResolver:
    """Greedy resolver over a local cookbook store.

    Each requested source is resolved in order: a declared ``path`` wins,
    otherwise the highest stored version satisfying the constraint is used.
    Dependencies from cookbook metadata are then resolved breadth-first.
    A cookbook already chosen at a version that does not satisfy a later
    constraint fails resolution; there is no backtracking.
    """

    def __init__(self, store: CookbookStore) -> None:
        self.store = store

    def resolve(self, sources: Iterable[CookbookSource]) -> list[ResolvedSource]:
        requested = list(sources)
        logger.debug("Resolving %d cookbook source(s)", len(requested))

        chosen: dict[str, ResolvedSource] = {}
        queue: deque[CookbookSource] = deque(requested)
        while queue:
            source = queue.popleft()
            existing = chosen.get(source.name)
            if existing is not None:
                if not source.constraint.satisfies(existing.version):
                    raise ResolutionError(
                        f"Cookbook '{source.name}' is required at '{source.constraint}' "
                        f"but {existing.version} was already selected",
                        name=source.name,
                        constraint=str(source.constraint),
                    )
                continue

            metadata = self._metadata_for(source)
            chosen[source.name] = ResolvedSource(
                source=source,
                version=metadata.version,
                origin_path=metadata.path,
                cookbook_name=metadata.name,
            )
            for dep_name, dep_constraint in metadata.dependencies.items():
                queue.append(self._dependency(source, dep_name, dep_constraint))

        logger.debug("Resolved %d cookbook(s)", len(chosen))
        return list(chosen.values())

    def _metadata_for(self, source: CookbookSource) -> CookbookMetadata:
        if source.path:
            try:
                metadata = CookbookMetadata.load(Path(source.path))
            except (OSError, ValueError) as exc:
                raise ResolutionError(
                    f"Cannot read cookbook '{source.name}' at {source.path}: {exc}",
                    name=source.name,
                    constraint=str(source.constraint),
                    cause=exc,
                ) from exc
            if not source.constraint.satisfies(metadata.version):
                raise ResolutionError(
                    f"Cookbook '{source.name}' at {source.path} is version {metadata.version}, "
                    f"which does not satisfy '{source.constraint}'",
                    name=source.name,
                    constraint=str(source.constraint),
                )
            return metadata

        metadata = self.store.satisfy(source.name, source.constraint)
        if metadata is None:
            raise ResolutionError(
                f"No cookbook '{source.name}' satisfying '{source.constraint}' "
                f"in {self.store.storage_path}",
                name=source.name,
                constraint=str(source.constraint),
            )
        return metadata

    def _dependency(self, parent: CookbookSource, name: str, constraint_text: str) -> CookbookSource:
        try:
            constraint = VersionConstraint.parse(constraint_text)
        except ValueError as exc:
            raise ResolutionError(
                f"Cookbook '{parent.name}' declares an invalid constraint for '{name}': {exc}",
                name=name,
                constraint=constraint_text,
                cause=exc,
            ) from exc
        return CookbookSource(name=name, constraint=constraint)


__all__ = ["Resolver", "StoreResolver"]
