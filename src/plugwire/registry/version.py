"""Provider version resolution."""

from __future__ import annotations

from importlib import metadata
from typing import Any

from plugwire.config import DEFAULT_VERSION
from plugwire.environment import LogFunction, null_log
from plugwire.errors import VersionResolutionError
from plugwire.registry.locator import top_level_package
from plugwire.registry.types import NormalizedSpec

__all__ = ["VersionResolver", "distribution_version"]


def distribution_version(locator: str) -> str:
    """Return the version of the installed distribution that ships *locator*.

    Raises:
        VersionResolutionError: If no installed distribution provides the
            locator's top-level package.
    """
    package = top_level_package(locator)
    distributions = metadata.packages_distributions().get(package) or []
    if not distributions:
        raise VersionResolutionError(
            locator=locator,
            reason=f"no installed distribution provides package '{package}'",
        )
    try:
        return metadata.version(distributions[0])
    except metadata.PackageNotFoundError as exc:
        raise VersionResolutionError(
            locator=locator,
            reason=f"distribution '{distributions[0]}' has no metadata",
        ) from exc


class VersionResolver:
    """Derives a provider's version.

    Order: the provider's own ``version`` attribute, then the metadata of the
    distribution its locator was imported from, then ``default_version``.
    """

    def __init__(self, log: LogFunction = null_log, default_version: str = DEFAULT_VERSION) -> None:
        self._log = log
        self._default_version = default_version

    def resolve(self, spec: NormalizedSpec, name: str) -> str:
        declared: Any = getattr(spec.instance, "version", None)
        if declared:
            return str(declared)

        if spec.locator:
            return distribution_version(spec.locator)

        self._log(
            f"Provider '{name}' appears to be preloaded, but does not publish a version number. "
            f"Setting version '{self._default_version}'",
            "debug",
        )
        return self._default_version
