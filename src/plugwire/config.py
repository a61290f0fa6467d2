"""Configuration loading and dot-path access."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from plugwire.errors import ConfigError, ConfigNotFoundError

__all__ = ["Config", "DEFAULT_SETUP_TIMEOUT_MS", "DEFAULT_VERSION"]

DEFAULT_SETUP_TIMEOUT_MS = 30000
DEFAULT_VERSION = "0.0.0"


class Config:
    """Configuration accessor with dot-path key support.

    Recognized keys:
        providers.setup_timeout: Per-hook setup timeout in milliseconds (0 disables).
        providers.default_version: Version assigned to preloaded providers without one.
        providers.specs: Provider specifications, see ``plugwire.manifest``.
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}

    @classmethod
    def from_yaml(cls, path: str | Path) -> Config:
        """Load configuration from a YAML mapping file.

        Raises:
            ConfigNotFoundError: If the file does not exist.
            ConfigError: If the file is not valid YAML or not a mapping.
        """
        config_path = Path(path)
        if not config_path.exists():
            raise ConfigNotFoundError(config_path=str(config_path))

        content = config_path.read_text(encoding="utf-8")
        try:
            parsed = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(message=f"Invalid YAML in configuration file: {config_path}") from e

        if parsed is None:
            return cls()
        if not isinstance(parsed, dict):
            raise ConfigError(message=f"Configuration file must be a YAML mapping: {config_path}")
        return cls(parsed)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-path key."""
        parts = key.split(".")
        current: Any = self._data
        for part in parts:
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return default
        return current

    @property
    def setup_timeout_ms(self) -> int:
        """Per-hook setup timeout in milliseconds. 0 disables the timeout."""
        val = self.get("providers.setup_timeout")
        if val is None:
            return DEFAULT_SETUP_TIMEOUT_MS
        if isinstance(val, bool) or not isinstance(val, int) or val < 0:
            raise ConfigError(message=f"providers.setup_timeout must be a non-negative integer, got {val!r}")
        return val

    @property
    def default_version(self) -> str:
        """Version assigned to preloaded providers that declare none."""
        val = self.get("providers.default_version")
        return str(val) if val is not None else DEFAULT_VERSION
