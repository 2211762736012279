"""Unified CLI output formatting utilities.

This module provides consistent output formatting for all Cookshelf CLI
commands, supporting both JSON and text output modes.
"""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional

from cookshelf.core.exceptions import CookshelfError


class OutputFormatter:
    """Unified output formatter for CLI commands."""

    def __init__(self, json_mode: bool = False, indent: int = 2):
        """Initialize formatter.

        Args:
            json_mode: If True, output JSON; otherwise output text
            indent: JSON indentation level
        """
        self.json_mode = json_mode
        self.indent = indent

    def error(
        self,
        error: Exception,
        message: Optional[str] = None,
        *,
        error_code: str = "error",
    ) -> None:
        """Output error result.

        Cookshelf errors contribute their kind and context to JSON output.
        """
        msg = message or str(error)
        if self.json_mode:
            output: Dict[str, Any] = {
                "error": error_code,
                "message": msg,
            }
            if isinstance(error, CookshelfError):
                payload = error.to_json_error()
                output["code"] = payload["code"]
                output["kind"] = payload["kind"]
                output["context"] = payload["context"]
            print(json.dumps(output, indent=self.indent, default=str), file=sys.stderr)
        else:
            print(f"Error: {msg}", file=sys.stderr)

    def json_output(self, data: Any) -> None:
        """Output raw JSON data."""
        print(json.dumps(data, indent=self.indent, default=str))

    def text(self, message: str) -> None:
        """Output plain text message (suppressed in JSON mode)."""
        if not self.json_mode:
            print(message)


__all__ = ["OutputFormatter"]
