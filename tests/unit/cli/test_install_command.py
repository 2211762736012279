"""Tests for `cookshelf install`."""
from __future__ import annotations

import json
from pathlib import Path

import pytest

from helpers.cookbooks import make_cookbook, write_text

COOKFILE = """
cookbooks:
  - name: chef-client
    version: "= 0.0.4"
"""


@pytest.fixture
def populated(project: Path, store_dir: Path) -> Path:
    make_cookbook(store_dir, "chef-client", "0.0.4", dependencies={"cron": ">= 1.0"})
    make_cookbook(store_dir, "cron", "1.2.0")
    write_text(project / "Cookfile", COOKFILE)
    return project


class TestInstallCommand:
    def test_text_output(self, populated: Path, capsys: pytest.CaptureFixture[str]) -> None:
        from cookshelf.cli._dispatcher import main

        code = main(["install", "--path", "vendor"])

        assert code == 0
        out = capsys.readouterr().out
        assert "Using chef-client (0.0.4)" in out
        assert "Using cron (1.2.0)" in out
        assert "Vendored cookbooks to vendor" in out
        assert (populated / "vendor" / "cron" / "metadata.json").is_file()

    def test_json_output(self, populated: Path, store_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
        from cookshelf.cli._dispatcher import main

        code = main(["install", "--json"])

        assert code == 0
        payload = json.loads(capsys.readouterr().out)
        assert payload["vendor_path"] is None
        assert payload["cookbooks"] == [
            {"name": "chef-client", "version": "0.0.4", "path": str(store_dir / "chef-client-0.0.4")},
            {"name": "cron", "version": "1.2.0", "path": str(store_dir / "cron-1.2.0")},
        ]

    def test_root_flag(self, populated: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        from cookshelf.cli._dispatcher import main

        monkeypatch.chdir(tmp_path)

        assert main(["install", "--root", str(populated)]) == 0
        assert (populated / "Cookfile.lock").is_file()

    def test_logs_to_shelf_log_file(self, populated: Path, isolated_shelf: Path) -> None:
        from cookshelf.cli._dispatcher import main

        main(["install", "--verbose"])

        log = (isolated_shelf / "logs" / "cookshelf.log").read_text(encoding="utf-8")
        assert "Resolving" in log
        assert "Saved 2 locked cookbook(s)" in log

    def test_missing_cookfile_exits_with_error(self, project: Path, capsys: pytest.CaptureFixture[str]) -> None:
        from cookshelf.cli._dispatcher import main

        code = main(["install"])

        assert code == 1
        assert "Error: No Cookfile found" in capsys.readouterr().err

    def test_conflict_reported_as_json(self, populated: Path, capsys: pytest.CaptureFixture[str]) -> None:
        from cookshelf.cli._dispatcher import main

        write_text(
            populated / "Cookfile.lock",
            """
            sha: stale
            cookbooks:
              - name: chef-client
                locked_version: 0.0.3
            """,
        )

        code = main(["install", "--json"])

        assert code == 1
        payload = json.loads(capsys.readouterr().err)
        assert payload["error"] == "install_error"
        assert payload["code"] == "OutdatedCookbookSource"
        assert payload["kind"] == "outdated_source"
        assert payload["context"]["locked_version"] == "0.0.3"

    def test_only_and_except_are_mutually_exclusive(self, project: Path) -> None:
        from cookshelf.cli._dispatcher import main

        with pytest.raises(SystemExit):
            main(["install", "--only", "a", "--except", "b"])

    def test_unusable_shelf_path_exits_with_error(
        self, project: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        from cookshelf.cli._dispatcher import main

        shelf_file = write_text(tmp_path / "shelf-file", "not a directory\n")

        code = main(["install", "--shelf-path", str(shelf_file), "--json"])

        assert code == 1
        payload = json.loads(capsys.readouterr().err)
        assert payload["code"] == "ConfigError"
        assert payload["kind"] == "setup"
