"""Provider name resolution and validation."""

from __future__ import annotations

import re
from typing import Any

from plugwire.environment import LogFunction, null_log
from plugwire.errors import ProviderNameError
from plugwire.registry.types import NormalizedSpec

__all__ = ["PROVIDER_NAME_PATTERN", "NameResolver", "is_valid_name"]

PROVIDER_NAME_PATTERN = re.compile(r"[A-Za-z0-9_.\-]+")


def is_valid_name(name: Any) -> bool:
    """Return True if *name* is a string made only of ``[A-Za-z0-9_.-]``."""
    return isinstance(name, str) and PROVIDER_NAME_PATTERN.fullmatch(name) is not None


class NameResolver:
    """Derives the registration name of a normalized spec.

    The spec's explicit name wins over the provider's ``name`` attribute. The
    effective name, whichever source it came from, must match
    :data:`PROVIDER_NAME_PATTERN` in full.
    """

    def __init__(self, log: LogFunction = null_log) -> None:
        self._log = log

    def resolve(self, spec: NormalizedSpec) -> str:
        """Return the effective name.

        Raises:
            ProviderNameError: If no name is available or it is invalid.
        """
        declared = getattr(spec.instance, "name", None)

        if not spec.name and not declared:
            raise ProviderNameError(name=None, reason="neither the specification nor the provider declares a name")

        if spec.name:
            name = spec.name
        else:
            self._log(f"Provider publishes a name, specification does not, using provider name ('{declared}')", "debug")
            name = declared

        if not is_valid_name(name):
            raise ProviderNameError(
                name=name,
                reason="should only contain alphanumeric characters, '-', '_' and '.'",
            )
        return name
