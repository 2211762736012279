"""Reconciliation of the Cookfile against its lockfile.

When the Cookfile fingerprint matches the one recorded in the lockfile, the
locked versions are re-resolved as exact pins. Otherwise the Cookfile's
sources are resolved and every previously locked version is checked
against the (possibly tightened) declared constraint before anything is
written.
"""
from __future__ import annotations

import logging

from cookshelf.core.cookbooks.exceptions import OutdatedCookbookSource
from cookshelf.core.cookbooks.lock import Lockfile
from cookshelf.core.cookbooks.manifest import Manifest
from cookshelf.core.cookbooks.models import ResolvedSource
from cookshelf.core.cookbooks.resolver import Resolver

logger = logging.getLogger(__name__)


class Reconciler:
    """Brings a lockfile in line with its Cookfile."""

    def __init__(self, manifest: Manifest, lockfile: Lockfile, resolver: Resolver) -> None:
        self.manifest = manifest
        self.lockfile = lockfile
        self.resolver = resolver

    def is_unchanged(self) -> bool:
        return self.manifest.fingerprint == self.lockfile.fingerprint

    def reconcile(self) -> list[ResolvedSource]:
        """Resolve, validate and persist; return the resolved cookbooks.

        The lockfile is updated and saved only after every check passed.

        Raises:
            OutdatedCookbookSource: If a locked version violates its declared constraint
            ResolutionError: If the resolver cannot satisfy the sources
        """
        if self.is_unchanged():
            logger.info("Cookfile unchanged; resolving locked cookbooks")
            resolved = self.resolver.resolve(
                [locked.to_source() for locked in self.lockfile.sources()]
            )
        else:
            logger.info("Cookfile changed; resolving declared cookbooks")
            resolved = self.resolver.resolve(self.manifest.sources())
            resolved = self.diff(resolved)

        self.lockfile.update(resolved)
        self.lockfile.fingerprint = self.manifest.fingerprint
        self.lockfile.save()
        return resolved

    def diff(self, resolved: list[ResolvedSource]) -> list[ResolvedSource]:
        """Check freshly resolved cookbooks against their previous pins.

        A cookbook without a previous pin is new and always accepted. One
        whose pin no longer satisfies the declared constraint aborts the
        whole reconciliation.
        """
        accepted: list[ResolvedSource] = []
        for source in resolved:
            locked = self.lockfile.find(source.name)
            if locked is None:
                logger.info("New cookbook %s", source)
            elif not source.constraint.satisfies(locked.locked_version):
                logger.error(
                    "Locked %s %s does not satisfy '%s'",
                    locked.name,
                    locked.locked_version,
                    source.constraint,
                )
                raise OutdatedCookbookSource(
                    name=source.name,
                    declared_constraint=str(source.constraint),
                    locked_version=locked.locked_version,
                )
            else:
                logger.debug("Cookbook %s supersedes lock %s", source, locked.locked_version)
            accepted.append(source)
        return accepted


__all__ = ["Reconciler"]
