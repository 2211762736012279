"""Tests for cookbook version constraints."""
from __future__ import annotations

import pytest


class TestVersionConstraintParse:
    """Constraint text is parsed into operator + version."""

    def test_bare_version_means_equality(self) -> None:
        from cookshelf.core.cookbooks.constraint import VersionConstraint

        constraint = VersionConstraint.parse("1.1.0")

        assert constraint.operator == "="
        assert constraint.version_spec == "1.1.0"
        assert str(constraint) == "= 1.1.0"

    def test_empty_constraint_accepts_any_version(self) -> None:
        from cookshelf.core.cookbooks.constraint import VersionConstraint

        for text in (None, "", "   "):
            constraint = VersionConstraint.parse(text)
            assert str(constraint) == ">= 0.0.0"
            assert constraint.satisfies("0.0.1")
            assert constraint.satisfies("42.0.0")

    @pytest.mark.parametrize("text", ["latest", "~> ", ">= one", "1.0 || 2.0"])
    def test_invalid_constraint_raises_value_error(self, text: str) -> None:
        from cookshelf.core.cookbooks.constraint import VersionConstraint

        with pytest.raises(ValueError):
            VersionConstraint.parse(text)

    def test_exact_pins_one_version(self) -> None:
        from cookshelf.core.cookbooks.constraint import VersionConstraint

        pin = VersionConstraint.exact("0.0.4")

        assert pin.satisfies("0.0.4")
        assert not pin.satisfies("0.0.5")

    def test_constraints_compare_by_value(self) -> None:
        from cookshelf.core.cookbooks.constraint import VersionConstraint

        assert VersionConstraint.parse(">= 1.0") == VersionConstraint.parse(">=1.0")


class TestVersionConstraintSatisfies:
    """Constraint operators follow cookbook semantics."""

    @pytest.mark.parametrize(
        "constraint,version,expected",
        [
            ("~> 1.2", "1.2.0", True),
            ("~> 1.2", "1.9.3", True),
            ("~> 1.2", "2.0.0", False),
            ("~> 1.2.3", "1.2.9", True),
            ("~> 1.2.3", "1.3.0", False),
            ("~> 1", "7.0.0", True),
            ("= 1.1.0", "1.1.0", True),
            ("= 1.1.0", "1.1.1", False),
            ("!= 1.1.0", "1.1.1", True),
            ("> 0.0.4", "0.0.4", False),
            ("< 2.0", "1.9.9", True),
            (">= 0.4", "0.4.0", True),
            ("<= 0.4", "0.4.1", False),
        ],
    )
    def test_operator_semantics(self, constraint: str, version: str, expected: bool) -> None:
        from cookshelf.core.cookbooks.constraint import VersionConstraint

        assert VersionConstraint.parse(constraint).satisfies(version) is expected

    def test_unparseable_version_never_satisfies(self) -> None:
        from cookshelf.core.cookbooks.constraint import VersionConstraint

        assert not VersionConstraint.parse(">= 0.0.0").satisfies("not-a-version")


class TestSortKey:
    def test_sorts_numerically(self) -> None:
        from cookshelf.core.cookbooks.constraint import sort_key

        versions = ["1.10.0", "1.2.0", "1.9.1"]

        assert sorted(versions, key=sort_key) == ["1.2.0", "1.9.1", "1.10.0"]
