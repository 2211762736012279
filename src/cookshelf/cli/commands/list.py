"""
Cookshelf list command.

SUMMARY: List the cookbooks pinned in the lockfile
"""
from __future__ import annotations

import argparse

from cookshelf.cli import OutputFormatter, add_cookfile_flag, add_json_flag, add_root_flag, get_project_root
from cookshelf.core.exceptions import CookshelfError

SUMMARY = "List the cookbooks pinned in the lockfile"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    add_cookfile_flag(parser)
    add_root_flag(parser)
    add_json_flag(parser)


def main(args: argparse.Namespace) -> int:
    """List locked cookbooks."""
    from cookshelf.core.cookbooks.lock import Lockfile

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        lockfile = Lockfile.for_manifest(get_project_root(args) / args.cookfile)
        locked = sorted(lockfile.sources(), key=lambda s: s.name)
    except CookshelfError as e:
        formatter.error(e, error_code="list_error")
        return 1

    if formatter.json_mode:
        formatter.json_output({"sha": lockfile.fingerprint, "cookbooks": [s.to_dict() for s in locked]})
        return 0

    if not locked:
        formatter.text("No cookbooks locked. Run `cookshelf install` first.")
        return 0

    formatter.text("Cookbooks locked in the Cookfile.lock:")
    for source in locked:
        formatter.text(f"  * {source.name} ({source.locked_version})")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    parsed = parser.parse_args()
    raise SystemExit(main(parsed))
