"""Common CLI argument registration utilities.

This module provides reusable argument registration functions to reduce
duplication across CLI commands.
"""
from __future__ import annotations

import argparse


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    """Add --json flag for JSON output mode."""
    parser.add_argument(
        "--json",
        action="store_true",
        help="Output as JSON",
    )


def add_cookfile_flag(parser: argparse.ArgumentParser) -> None:
    """Add --cookfile flag for a non-default Cookfile location."""
    parser.add_argument(
        "--cookfile",
        "-b",
        default="Cookfile",
        help="Path to the Cookfile (default: ./Cookfile)",
    )


def add_root_flag(parser: argparse.ArgumentParser) -> None:
    """Add --root flag for project root override."""
    parser.add_argument(
        "--root",
        type=str,
        help="Project root holding the Cookfile and chefignore (default: current directory)",
    )


def add_shelf_path_flag(parser: argparse.ArgumentParser) -> None:
    """Add --shelf-path flag for the cookshelf home override."""
    parser.add_argument(
        "--shelf-path",
        type=str,
        help="Cookshelf home directory (default: $COOKSHELF_PATH or ~/.cookshelf)",
    )


def add_verbose_flag(parser: argparse.ArgumentParser) -> None:
    """Add --verbose flag (debug logging)."""
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log at DEBUG level",
    )


__all__ = [
    "add_json_flag",
    "add_cookfile_flag",
    "add_root_flag",
    "add_shelf_path_flag",
    "add_verbose_flag",
]
