"""
Cookshelf CLI package.

Provides the command-line interface with auto-discovery of commands
from ``cookshelf/cli/commands``.

Framework utilities for building CLI commands:
- _output: Output formatting (JSON/text modes)
- _args: Common argument registration helpers
- _utils: Shared CLI utilities
"""
from ._output import OutputFormatter
from ._args import (
    add_cookfile_flag,
    add_json_flag,
    add_root_flag,
    add_shelf_path_flag,
    add_verbose_flag,
)
from ._utils import get_project_root, setup_logging

__all__ = [
    # Output formatting
    "OutputFormatter",
    # Argument helpers
    "add_json_flag",
    "add_cookfile_flag",
    "add_root_flag",
    "add_shelf_path_flag",
    "add_verbose_flag",
    # Utilities
    "get_project_root",
    "setup_logging",
]
