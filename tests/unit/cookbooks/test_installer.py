"""Tests for the installer orchestration."""
from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from helpers.cookbooks import make_cookbook, write_text

COOKFILE = """
cookbooks:
  - name: build-essential
    version: "~> 1.1"
  - name: chef-client
    version: "= 0.0.4"
    group: [production]
  - name: minitest-handler
    group: [test, integration]
"""


def _populate_store(store: Path) -> None:
    make_cookbook(store, "build-essential", "1.1.0")
    make_cookbook(store, "chef-client", "0.0.4", dependencies={"cron": ">= 1.0"})
    make_cookbook(store, "cron", "1.2.0")
    make_cookbook(store, "minitest-handler", "0.2.1")


class TestInstallerSetup:
    """Setup guards run before any reconciliation."""

    def _installer(self, project: Path, **option_overrides):
        from cookshelf.core.cookbooks.installer import InstallOptions, Installer

        return Installer.from_options(InstallOptions(**option_overrides), root=project)

    def test_missing_cookfile(self, project: Path) -> None:
        from cookshelf.core.cookbooks.exceptions import ManifestNotFoundError
        from cookshelf.core.exceptions import ErrorKind

        with pytest.raises(ManifestNotFoundError) as excinfo:
            self._installer(project).install()

        assert isinstance(excinfo.value, FileNotFoundError)
        assert excinfo.value.kind is ErrorKind.SETUP
        assert excinfo.value.context["path"] == str(project / "Cookfile")

    def test_empty_cookfile(self, project: Path) -> None:
        from cookshelf.core.cookbooks.exceptions import EmptyManifestError

        write_text(project / "Cookfile", "cookbooks: []\n")

        with pytest.raises(EmptyManifestError):
            self._installer(project).install()

    def test_only_and_except_are_exclusive(self, project: Path) -> None:
        from cookshelf.core.cookbooks.exceptions import InstallSetupError

        write_text(project / "Cookfile", COOKFILE)

        with pytest.raises(InstallSetupError, match="both"):
            self._installer(project, only=["test"], except_groups=["production"]).install()

    def test_rejects_malformed_groups(self, project: Path) -> None:
        from cookshelf.core.cookbooks.exceptions import InstallSetupError

        with pytest.raises(InstallSetupError, match="'only'"):
            self._installer(project, only="test").install()

    def test_creates_shelf_and_store(self, project: Path, isolated_shelf: Path) -> None:
        installer = self._installer(project)
        write_text(project / "Cookfile", COOKFILE)

        installer.ensure_shelf_directory()

        assert (isolated_shelf / "cookbooks").is_dir()

    def test_unusable_shelf(self, project: Path, tmp_path: Path) -> None:
        from cookshelf.core.cookbooks.exceptions import InstallSetupError

        blocker = write_text(tmp_path / "blocker", "file\n")

        with pytest.raises(InstallSetupError, match="cookshelf home"):
            self._installer(project, shelf_path=str(blocker)).install()

    def test_lockfile_must_be_a_file(self, project: Path) -> None:
        from cookshelf.core.cookbooks.exceptions import LockfileError

        write_text(project / "Cookfile", COOKFILE)
        (project / "Cookfile.lock").mkdir()

        with pytest.raises(LockfileError, match="not a file"):
            self._installer(project).install()

    def test_invalid_lockfile_is_rejected_before_resolution(self, project: Path) -> None:
        from cookshelf.core.cookbooks.exceptions import LockfileError

        write_text(project / "Cookfile", COOKFILE)
        write_text(project / "Cookfile.lock", "cookbooks: [{name: nginx}]\n")
        resolver = MagicMock()

        from cookshelf.core.cookbooks.installer import InstallOptions, Installer
        from cookshelf.core.cookbooks.lock import Lockfile
        from cookshelf.core.cookbooks.manifest import Manifest

        installer = Installer(
            InstallOptions(),
            manifest=Manifest(project / "Cookfile"),
            lockfile=Lockfile(project / "Cookfile.lock"),
            resolver=resolver,
            root=project,
        )

        with pytest.raises(LockfileError):
            installer.install()
        resolver.resolve.assert_not_called()

    def test_unparseable_pin_with_unchanged_cookfile(self, project: Path) -> None:
        from cookshelf.core.cookbooks.exceptions import LockfileError
        from cookshelf.core.cookbooks.manifest import Manifest

        cookfile = write_text(project / "Cookfile", COOKFILE)
        write_text(
            project / "Cookfile.lock",
            f"""
            sha: "{Manifest(cookfile).fingerprint}"
            cookbooks:
              - name: build-essential
                locked_version: not-a-version
            """,
        )

        with pytest.raises(LockfileError, match="build-essential"):
            self._installer(project).install()


class TestInstallerInstall:
    def test_install_locks_and_returns_resolved(self, project: Path, store_dir: Path) -> None:
        from cookshelf.core.cookbooks.installer import InstallOptions, install
        from cookshelf.core.cookbooks.lock import Lockfile
        from cookshelf.core.cookbooks.manifest import Manifest

        _populate_store(store_dir)
        write_text(project / "Cookfile", COOKFILE)

        resolved = install(InstallOptions(), root=project)

        assert [(r.name, r.version) for r in resolved] == [
            ("build-essential", "1.1.0"),
            ("chef-client", "0.0.4"),
            ("minitest-handler", "0.2.1"),
            ("cron", "1.2.0"),
        ]
        lockfile = Lockfile(project / "Cookfile.lock")
        assert lockfile.fingerprint == Manifest(project / "Cookfile").fingerprint
        assert [s.name for s in lockfile.sources()] == [
            "build-essential",
            "chef-client",
            "cron",
            "minitest-handler",
        ]
        assert not (project / "vendor").exists()

    def test_install_twice_is_stable(self, project: Path, store_dir: Path) -> None:
        from cookshelf.core.cookbooks.installer import InstallOptions, install

        _populate_store(store_dir)
        write_text(project / "Cookfile", COOKFILE)

        install(InstallOptions(), root=project)
        first = (project / "Cookfile.lock").read_text(encoding="utf-8")
        make_cookbook(store_dir, "cron", "1.3.0")
        install(InstallOptions(), root=project)

        assert (project / "Cookfile.lock").read_text(encoding="utf-8") == first

    def test_install_vendors_into_path(self, project: Path, store_dir: Path) -> None:
        from cookshelf.core.cookbooks.installer import InstallOptions, install

        _populate_store(store_dir)
        write_text(project / "Cookfile", COOKFILE)
        write_text(project / "chefignore", "README.md\n")

        install(InstallOptions(path="vendor/cookbooks"), root=project)

        vendor = project / "vendor" / "cookbooks"
        assert sorted(p.name for p in vendor.iterdir()) == [
            "build-essential",
            "chef-client",
            "cron",
            "minitest-handler",
        ]
        assert not (vendor / "cron" / "README.md").exists()
        assert (vendor / "cron" / "recipes" / "default.rb").is_file()

    def test_empty_path_skips_vendoring(self, project: Path) -> None:
        from cookshelf.core.cookbooks.installer import InstallOptions, Installer

        exporter = MagicMock()
        installer = Installer(
            InstallOptions(path=""),
            manifest=MagicMock(),
            lockfile=MagicMock(),
            resolver=MagicMock(),
            exporter=exporter,
            root=project,
        )
        installer.validate = MagicMock()

        installer.install()

        exporter.vendor.assert_not_called()

    def test_collaborators_are_injected(self, project: Path) -> None:
        from cookshelf.core.cookbooks.installer import InstallOptions, Installer

        resolved = [MagicMock(name="resolved")]
        manifest = MagicMock()
        manifest.fingerprint = "abc123"
        lockfile = MagicMock()
        lockfile.fingerprint = "abc123"
        lockfile.sources.return_value = []
        resolver = MagicMock()
        resolver.resolve.return_value = resolved
        exporter = MagicMock()

        installer = Installer(
            InstallOptions(path="/tmp"),
            manifest=manifest,
            lockfile=lockfile,
            resolver=resolver,
            exporter=exporter,
            root=project,
        )
        installer.validate = MagicMock()

        assert installer.install() == resolved
        lockfile.save.assert_called_once_with()
        exporter.vendor.assert_called_once_with(Path("/tmp"), resolved)


class TestInstallerFilter:
    """Group filters narrow what is vendored, never what is locked."""

    def _filtered(self, project: Path, store_dir: Path, **groups) -> list[str]:
        from cookshelf.core.cookbooks.installer import InstallOptions, install

        _populate_store(store_dir)
        write_text(project / "Cookfile", COOKFILE)
        install(InstallOptions(path="vendor", **groups), root=project)
        return sorted(p.name for p in (project / "vendor").iterdir())

    def test_only(self, project: Path, store_dir: Path) -> None:
        assert self._filtered(project, store_dir, only=["production"]) == ["chef-client", "cron"]

    def test_except(self, project: Path, store_dir: Path) -> None:
        assert self._filtered(project, store_dir, except_groups=["test", "integration"]) == [
            "build-essential",
            "chef-client",
            "cron",
        ]

    def test_except_keeps_cookbooks_with_remaining_groups(self, project: Path, store_dir: Path) -> None:
        assert self._filtered(project, store_dir, except_groups=["test"]) == [
            "build-essential",
            "chef-client",
            "cron",
            "minitest-handler",
        ]

    def test_filter_does_not_change_lockfile(self, project: Path, store_dir: Path) -> None:
        from cookshelf.core.cookbooks.lock import Lockfile

        self._filtered(project, store_dir, only=["production"])

        assert len(Lockfile(project / "Cookfile.lock").sources()) == 4
