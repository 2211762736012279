"""Cookbook installation.

:class:`Installer` composes the Cookfile, its lockfile, a resolver and the
vendor exporter into a single ``install()``:

1. setup validation (options, cookshelf home, Cookfile, lockfile shape)
2. reconciliation (fingerprint check, resolution, constraint check, save)
3. vendoring, when a destination path was requested
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from cookshelf.core.config import CookshelfConfig
from cookshelf.core.cookbooks.exceptions import (
    EmptyManifestError,
    InstallSetupError,
    LockfileError,
    ManifestNotFoundError,
)
from cookshelf.core.cookbooks.lock import Lockfile
from cookshelf.core.cookbooks.manifest import DEFAULT_FILENAME, Manifest
from cookshelf.core.cookbooks.models import ResolvedSource
from cookshelf.core.cookbooks.reconcile import Reconciler
from cookshelf.core.cookbooks.resolver import Resolver, StoreResolver
from cookshelf.core.cookbooks.store import CookbookStore
from cookshelf.core.cookbooks.vendor import VendorExporter
from cookshelf.core.utils.io import ensure_directory

logger = logging.getLogger(__name__)


@dataclass
class InstallOptions:
    """Options accepted by :class:`Installer`.

    Attributes:
        path: Vendor destination; vendoring is skipped when empty
        cookfile: Cookfile location, relative to the project root
        only: Vendor only cookbooks in these groups
        except_groups: Vendor everything except cookbooks in these groups
        shelf_path: Cookshelf home override
    """

    path: str | None = None
    cookfile: str = DEFAULT_FILENAME
    only: list[str] = field(default_factory=list)
    except_groups: list[str] = field(default_factory=list)
    shelf_path: str | None = None


class Installer:
    """Installs the cookbooks of one Cookfile."""

    def __init__(
        self,
        options: InstallOptions,
        *,
        manifest: Manifest,
        lockfile: Lockfile,
        resolver: Resolver,
        config: CookshelfConfig | None = None,
        exporter: VendorExporter | None = None,
        root: Path | None = None,
    ) -> None:
        self.options = options
        self.manifest = manifest
        self.lockfile = lockfile
        self.resolver = resolver
        self.root = Path(root) if root is not None else Path.cwd()
        self.config = config or CookshelfConfig(
            Path(options.shelf_path) if options.shelf_path else None
        )
        self.exporter = exporter or VendorExporter(self.root)

    @classmethod
    def from_options(cls, options: InstallOptions, *, root: Path | None = None) -> Installer:
        """Build an installer with the default collaborators for ``options``."""
        root = Path(root) if root is not None else Path.cwd()
        config = CookshelfConfig(Path(options.shelf_path) if options.shelf_path else None)
        manifest_path = root / Path(options.cookfile or DEFAULT_FILENAME).expanduser()
        return cls(
            options,
            manifest=Manifest(manifest_path),
            lockfile=Lockfile.for_manifest(manifest_path),
            resolver=StoreResolver(CookbookStore(config.cookbook_store)),
            config=config,
            exporter=VendorExporter(root),
            root=root,
        )

    def install(self) -> list[ResolvedSource]:
        """Reconcile the lockfile and vendor cookbooks if a path was given.

        Returns:
            The resolved cookbooks recorded in the lockfile.
        """
        self.validate()

        resolved = Reconciler(self.manifest, self.lockfile, self.resolver).reconcile()
        logger.info("Installed %d cookbook(s)", len(resolved))

        if self.options.path:
            destination = self.root / Path(self.options.path).expanduser()
            self.exporter.vendor(destination, self.filter(resolved))
        return resolved

    def filter(self, resolved: list[ResolvedSource]) -> list[ResolvedSource]:
        """Apply the ``only`` / ``except_groups`` options.

        Cookbooks the Cookfile does not declare (transitive dependencies)
        are always kept.
        """
        only = set(self.options.only)
        excluded = set(self.options.except_groups)
        if not only and not excluded:
            return list(resolved)

        kept: list[ResolvedSource] = []
        for source in resolved:
            declared = self.manifest.find(source.name)
            if declared is not None:
                groups = set(declared.groups)
                if only and not groups & only:
                    continue
                if excluded and groups <= excluded:
                    continue
            kept.append(source)
        return kept

    # Setup validation -------------------------------------------------------

    def validate(self) -> None:
        """Run every setup guard; the first failure raises."""
        self.validate_options()
        self.ensure_shelf_directory()
        self.ensure_manifest()
        self.ensure_manifest_content()
        self.ensure_lockfile()

    def validate_options(self) -> None:
        options = self.options
        if options.path is not None and not isinstance(options.path, str):
            raise InstallSetupError(f"Invalid vendor path: {options.path!r}")
        for label, groups in (("only", options.only), ("except", options.except_groups)):
            if not isinstance(groups, (list, tuple)) or not all(isinstance(g, str) and g for g in groups):
                raise InstallSetupError(f"Invalid '{label}' groups: {groups!r}")
        if options.only and options.except_groups:
            raise InstallSetupError(
                "Cannot specify both 'only' and 'except' groups",
                context={"only": list(options.only), "except": list(options.except_groups)},
            )

    def ensure_shelf_directory(self) -> None:
        try:
            ensure_directory(self.config.home)
            CookbookStore(self.config.cookbook_store).ensure_storage_path()
        except OSError as exc:
            raise InstallSetupError(
                f"Cannot use cookshelf home {self.config.home}: {exc}",
                context={"path": str(self.config.home)},
            ) from exc

    def ensure_manifest(self) -> None:
        if not self.manifest.exists():
            raise ManifestNotFoundError(
                f"No Cookfile found at {self.manifest.path}",
                context={"path": str(self.manifest.path)},
            )

    def ensure_manifest_content(self) -> None:
        if not self.manifest.sources():
            raise EmptyManifestError(
                f"Cookfile {self.manifest.path} does not declare any cookbooks",
                context={"path": str(self.manifest.path)},
            )

    def ensure_lockfile(self) -> None:
        if self.lockfile.path.exists() and not self.lockfile.path.is_file():
            raise LockfileError(
                f"Lockfile {self.lockfile.path} is not a file",
                context={"path": str(self.lockfile.path)},
            )
        # Parses and validates the lockfile.
        self.lockfile.sources()


def install(options: InstallOptions, *, root: Path | None = None) -> list[ResolvedSource]:
    """Build an :class:`Installer` for ``options`` and run it."""
    return Installer.from_options(options, root=root).install()


__all__ = ["InstallOptions", "Installer", "install"]
