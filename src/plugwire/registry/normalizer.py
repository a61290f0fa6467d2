"""Normalization of heterogeneous provider specifications."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Callable

from plugwire.environment import LogFunction, null_log
from plugwire.errors import SpecResolutionError
from plugwire.registry.locator import resolve_locator
from plugwire.registry.types import NormalizedSpec

__all__ = ["SpecNormalizer"]

_INVALID_SPEC_TYPES = (bool, int, float, complex, bytes, bytearray, list, tuple, set, frozenset)


class SpecNormalizer:
    """Turns a provider specification into a :class:`NormalizedSpec`.

    Accepted shapes:
        - ``"pkg.module"`` / ``"pkg.module:attr"``: a locator string.
        - a mapping with ``instance`` or ``locator`` and an optional ``name``.
        - any other object exposing the same attributes (e.g. ``ProviderSpec``).
    """

    def __init__(
        self,
        log: LogFunction = null_log,
        resolver: Callable[[str], Any] = resolve_locator,
    ) -> None:
        self._log = log
        self._resolve = resolver

    def normalize(self, spec: Any) -> NormalizedSpec:
        """Normalize a single specification.

        Raises:
            SpecResolutionError: If the spec has an invalid shape, names no
                module source, or its locator fails to resolve.
        """
        if isinstance(spec, str):
            self._log(f"Loading provider '{spec}'...", "debug")
            return NormalizedSpec(locator=spec, instance=self._resolve(spec))

        if spec is None or isinstance(spec, _INVALID_SPEC_TYPES):
            raise SpecResolutionError(
                spec=spec,
                reason=f"invalid specification type '{type(spec).__name__}' (expected str, mapping or spec object)",
            )

        if isinstance(spec, Mapping):
            get = spec.get
        else:
            def get(key: str, default: Any = None) -> Any:
                return getattr(spec, key, default)

        name = get("name")
        instance = get("instance")
        locator = get("locator")
        self._log(f"Reading provider specification: {spec!r}", "debug")

        if instance is not None:
            if isinstance(instance, str):
                self._log(f"'instance' is a string, loading it as locator '{instance}'...", "debug")
                return NormalizedSpec(name=name, locator=instance, instance=self._resolve(instance))
            return NormalizedSpec(name=name, instance=instance)

        if locator:
            if not isinstance(locator, str):
                raise SpecResolutionError(spec=spec, reason=f"'locator' must be a string, got {type(locator).__name__}")
            self._log(f"Loading provider module '{locator}'...", "debug")
            return NormalizedSpec(name=name, locator=locator, instance=self._resolve(locator))

        raise SpecResolutionError(spec=spec, reason="specification names neither a locator nor a preloaded instance")
