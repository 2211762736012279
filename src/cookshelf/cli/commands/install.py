"""
Cookshelf install command.

SUMMARY: Install the cookbooks declared in the Cookfile
"""
from __future__ import annotations

import argparse

from cookshelf.cli import (
    OutputFormatter,
    add_cookfile_flag,
    add_json_flag,
    add_root_flag,
    add_shelf_path_flag,
    add_verbose_flag,
    get_project_root,
    setup_logging,
)
from cookshelf.core.exceptions import CookshelfError

SUMMARY = "Install the cookbooks declared in the Cookfile"


def register_args(parser: argparse.ArgumentParser) -> None:
    """Register command-specific arguments."""
    parser.add_argument(
        "--path",
        "-p",
        help="Vendor the installed cookbooks into this directory",
    )
    groups = parser.add_mutually_exclusive_group()
    groups.add_argument(
        "--only",
        nargs="+",
        default=[],
        metavar="GROUP",
        help="Vendor only cookbooks in these groups",
    )
    groups.add_argument(
        "--except",
        dest="except_groups",
        nargs="+",
        default=[],
        metavar="GROUP",
        help="Vendor all cookbooks except those in these groups",
    )
    add_cookfile_flag(parser)
    add_root_flag(parser)
    add_shelf_path_flag(parser)
    add_json_flag(parser)
    add_verbose_flag(parser)


def main(args: argparse.Namespace) -> int:
    """Install cookbooks."""
    from cookshelf.core.cookbooks.installer import InstallOptions, install

    formatter = OutputFormatter(json_mode=getattr(args, "json", False))

    try:
        setup_logging(args)
        options = InstallOptions(
            path=args.path,
            cookfile=args.cookfile,
            only=list(args.only),
            except_groups=list(args.except_groups),
            shelf_path=args.shelf_path,
        )
        resolved = install(options, root=get_project_root(args))
    except CookshelfError as e:
        formatter.error(e, error_code="install_error")
        return 1

    if formatter.json_mode:
        formatter.json_output(
            {
                "cookbooks": [
                    {"name": r.name, "version": r.version, "path": str(r.origin_path)}
                    for r in resolved
                ],
                "vendor_path": args.path,
            }
        )
        return 0

    for r in resolved:
        formatter.text(f"Using {r.name} ({r.version})")
    if args.path:
        formatter.text(f"Vendored cookbooks to {args.path}")
    return 0


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    register_args(parser)
    parsed = parser.parse_args()
    raise SystemExit(main(parsed))
