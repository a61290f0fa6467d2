"""YAML provider manifests.

A manifest lists provider specifications declaratively::

    providers:
      - myapp.providers.billing
      - name: search
        locator: myapp.providers.search:SearchProvider
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pydantic
import yaml
from pydantic import BaseModel, ConfigDict, Field

from plugwire.config import Config
from plugwire.errors import ConfigError, ConfigNotFoundError
from plugwire.registry.naming import PROVIDER_NAME_PATTERN
from plugwire.registry.types import ProviderSpec

__all__ = ["ManifestEntry", "ProviderManifest", "load_manifest", "specs_from_config"]


class ManifestEntry(BaseModel):
    """One provider entry in a manifest."""

    model_config = ConfigDict(extra="forbid")

    locator: str = Field(min_length=1)
    name: str | None = Field(default=None, pattern=f"^{PROVIDER_NAME_PATTERN.pattern}$")


class ProviderManifest(BaseModel):
    """A validated list of manifest entries."""

    providers: list[str | ManifestEntry] = Field(default_factory=list)

    def to_specs(self) -> list[Any]:
        """Convert entries to specs accepted by :func:`plugwire.setup`."""
        specs: list[Any] = []
        for entry in self.providers:
            if isinstance(entry, str):
                specs.append(entry)
            else:
                specs.append(ProviderSpec(name=entry.name, locator=entry.locator))
        return specs


def _validate(data: Any, source: str) -> ProviderManifest:
    try:
        return ProviderManifest.model_validate(data)
    except pydantic.ValidationError as e:
        errors = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigError(message=f"Invalid provider manifest {source}: {errors}") from e


def load_manifest(path: str | Path) -> list[Any]:
    """Load a YAML manifest file and return its provider specifications.

    Raises:
        ConfigNotFoundError: If the file does not exist.
        ConfigError: If the file is not valid YAML or fails validation.
    """
    manifest_path = Path(path)
    if not manifest_path.exists():
        raise ConfigNotFoundError(config_path=str(manifest_path))

    content = manifest_path.read_text(encoding="utf-8")
    try:
        parsed = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise ConfigError(message=f"Invalid YAML in manifest file: {manifest_path}") from e

    if parsed is None:
        return []
    if not isinstance(parsed, dict):
        raise ConfigError(message=f"Manifest file must be a YAML mapping: {manifest_path}")
    return _validate(parsed, str(manifest_path)).to_specs()


def specs_from_config(config: Config) -> list[Any]:
    """Return the specifications listed under ``providers.specs`` in *config*."""
    raw = config.get("providers.specs")
    if raw is None:
        return []
    return _validate({"providers": raw}, "providers.specs").to_specs()
