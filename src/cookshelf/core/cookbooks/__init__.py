"""Cookshelf cookbook subsystem.

Key components:
- Manifest: Read-only view over the Cookfile
- Lockfile: Pinned versions plus the Cookfile fingerprint they came from
- StoreResolver: Default resolver backed by the local cookbook store
- Reconciler: Fingerprint check, resolution and constraint validation
- VendorExporter: Staged, filtered copy of cookbooks into a directory
- Installer: Composes all of the above into ``install()``
"""
from __future__ import annotations

from cookshelf.core.cookbooks.constraint import VersionConstraint
from cookshelf.core.cookbooks.exceptions import (
    CookbookError,
    EmptyManifestError,
    InstallSetupError,
    LockfileError,
    ManifestError,
    ManifestNotFoundError,
    OutdatedCookbookSource,
    ResolutionError,
    VendorIOError,
)
from cookshelf.core.cookbooks.ignore import IgnoreFilter, find_ignore_file
from cookshelf.core.cookbooks.installer import InstallOptions, Installer, install
from cookshelf.core.cookbooks.lock import Lockfile
from cookshelf.core.cookbooks.manifest import Manifest
from cookshelf.core.cookbooks.models import CookbookSource, LockedSource, ResolvedSource
from cookshelf.core.cookbooks.reconcile import Reconciler
from cookshelf.core.cookbooks.resolver import Resolver, StoreResolver
from cookshelf.core.cookbooks.store import CookbookMetadata, CookbookStore
from cookshelf.core.cookbooks.vendor import VendorExporter

__all__ = [
    # Installer
    "Installer",
    "InstallOptions",
    "install",
    # Manifest / lock
    "Manifest",
    "Lockfile",
    "Reconciler",
    # Resolution
    "Resolver",
    "StoreResolver",
    "CookbookStore",
    "CookbookMetadata",
    # Vendoring
    "VendorExporter",
    "IgnoreFilter",
    "find_ignore_file",
    # Models
    "CookbookSource",
    "ResolvedSource",
    "LockedSource",
    "VersionConstraint",
    # Exceptions
    "CookbookError",
    "InstallSetupError",
    "ManifestError",
    "ManifestNotFoundError",
    "EmptyManifestError",
    "LockfileError",
    "OutdatedCookbookSource",
    "ResolutionError",
    "VendorIOError",
]
