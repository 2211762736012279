"""Cookshelf configuration.

Configuration is read from ``<home>/config.yaml`` where ``home`` is the
cookshelf home directory (``$COOKSHELF_PATH`` or ``~/.cookshelf``).

Configuration sources (highest to lowest priority):
1. Environment variables: COOKSHELF_LOG_LEVEL, COOKSHELF_COOKBOOK_STORE
2. ``<home>/config.yaml``
3. Built-in defaults
"""
from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from cookshelf.core.exceptions import ConfigError
from cookshelf.core.schemas import schema_errors
from cookshelf.core.utils.io import read_yaml

logger = logging.getLogger(__name__)

ENV_HOME = "COOKSHELF_PATH"
ENV_LOG_LEVEL = "COOKSHELF_LOG_LEVEL"
ENV_COOKBOOK_STORE = "COOKSHELF_COOKBOOK_STORE"

DEFAULT_HOME = "~/.cookshelf"
DEFAULT_COOKBOOK_STORE = "cookbooks"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FILE = "logs/cookshelf.log"


def default_home() -> Path:
    """Cookshelf home directory from the environment, else ``~/.cookshelf``."""
    return Path(os.environ.get(ENV_HOME) or DEFAULT_HOME).expanduser()


class CookshelfConfig:
    """Load and access cookshelf configuration."""

    def __init__(self, home: Path | None = None) -> None:
        """Initialize configuration.

        Args:
            home: Cookshelf home directory (defaults to :func:`default_home`)
        """
        self.home = Path(home).expanduser() if home is not None else default_home()
        self._config: dict[str, Any] | None = None

    @property
    def config_path(self) -> Path:
        """Path to config.yaml."""
        return self.home / "config.yaml"

    def _load(self) -> dict[str, Any]:
        """Load configuration from file.

        Returns:
            Configuration dictionary, empty if file doesn't exist
        """
        if self._config is not None:
            return self._config

        try:
            data = read_yaml(self.config_path, default={}, raise_on_error=True) if self.config_path.exists() else {}
        except yaml.YAMLError as exc:
            raise ConfigError(
                f"Invalid configuration YAML in {self.config_path}: {exc}",
                context={"path": str(self.config_path)},
            ) from exc

        errors = schema_errors(data, "config")
        if errors:
            raise ConfigError(
                f"Invalid configuration {self.config_path}: {'; '.join(errors)}",
                context={"path": str(self.config_path), "errors": errors},
            )
        self._config = data
        return self._config

    def _home_relative(self, value: str) -> Path:
        raw = Path(value).expanduser()
        return raw if raw.is_absolute() else self.home / raw

    @property
    def cookbook_store(self) -> Path:
        """Directory of the local cookbook store."""
        value = os.environ.get(ENV_COOKBOOK_STORE) or self._load().get("cookbook_store")
        return self._home_relative(value or DEFAULT_COOKBOOK_STORE)

    @property
    def log_level(self) -> str:
        value = os.environ.get(ENV_LOG_LEVEL) or (self._load().get("logging") or {}).get("level")
        return str(value or DEFAULT_LOG_LEVEL).upper()

    @property
    def log_file(self) -> Path:
        value = (self._load().get("logging") or {}).get("file")
        return self._home_relative(value or DEFAULT_LOG_FILE)


__all__ = ["CookshelfConfig", "default_home", "ENV_HOME", "ENV_LOG_LEVEL", "ENV_COOKBOOK_STORE"]
