"""Cookbook version constraints.

Constraints are written the way cookbook authors write them (``~> 1.2``,
``>= 0.4.0``, ``= 1.1.0``) and evaluated with :mod:`packaging`.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field

from packaging import specifiers, version

CONSTRAINT_PATTERN = re.compile(r"^(?P<op>~>|>=|<=|==|!=|~=|=|>|<)?\s*(?P<version>[0-9][0-9A-Za-z.\-+]*)$")

DEFAULT_CONSTRAINT = ">= 0.0.0"


def _to_specifier(operator: str, version_spec: str) -> str:
    if operator == "~>":
        # "~> 1" pins nothing beyond the lower bound; "~> 1.2" and "~> 1.2.3"
        # have the same meaning as PEP 440's compatible-release operator.
        if "." not in version_spec:
            return f">={version_spec}"
        return f"~={version_spec}"
    if operator == "=":
        return f"=={version_spec}"
    return f"{operator}{version_spec}"


@dataclass(frozen=True)
class VersionConstraint:
    """A predicate over version strings, e.g. ``~> 1.2``."""

    operator: str
    version_spec: str
    _specifier: specifiers.SpecifierSet = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        try:
            spec = specifiers.SpecifierSet(_to_specifier(self.operator, self.version_spec))
        except specifiers.InvalidSpecifier as exc:
            raise ValueError(f"Invalid version constraint: {self}") from exc
        object.__setattr__(self, "_specifier", spec)

    def satisfies(self, version_string: str) -> bool:
        """Check if a version satisfies this constraint."""
        try:
            ver = version.Version(str(version_string))
        except version.InvalidVersion:
            return False
        return self._specifier.contains(ver, prereleases=True)

    def __str__(self) -> str:
        return f"{self.operator} {self.version_spec}"

    @classmethod
    def parse(cls, constraint_str: str | None) -> VersionConstraint:
        """Parse a constraint such as ``'~> 1.2'``; empty means any version."""
        text = (constraint_str or "").strip() or DEFAULT_CONSTRAINT
        match = CONSTRAINT_PATTERN.match(text)
        if not match:
            raise ValueError(f"Invalid version constraint: {constraint_str}")
        return cls(operator=match.group("op") or "=", version_spec=match.group("version"))

    @classmethod
    def exact(cls, version_string: str) -> VersionConstraint:
        """Constraint matching exactly one version (used for locked pins)."""
        return cls(operator="=", version_spec=version_string)


def sort_key(version_string: str) -> version.Version:
    """Sort key for version strings; unparseable versions sort lowest."""
    try:
        return version.Version(version_string)
    except version.InvalidVersion:
        return version.Version("0")


__all__ = ["VersionConstraint", "DEFAULT_CONSTRAINT", "sort_key"]
