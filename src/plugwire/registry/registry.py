"""Provider registry: name to provider mapping with last-write-wins semantics."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Callable, Iterator

from plugwire.errors import InvalidInputError
from plugwire.registry.types import ProviderDescriptor

logger = logging.getLogger(__name__)

__all__ = ["ProviderRegistry", "REGISTRY_EVENTS"]

REGISTRY_EVENTS = ("register", "replace")


class ProviderRegistry(Mapping):
    """Mapping from provider name to live provider instance.

    Registering a name that already exists overwrites the previous entry.
    The registry is also what providers receive as the second argument of
    their ``setup`` hook, so it can be used for cross-provider lookups.
    """

    def __init__(self, providers: Mapping[str, Any] | None = None) -> None:
        self._providers: dict[str, Any] = {}
        self._descriptors: dict[str, ProviderDescriptor] = {}
        self._callbacks: dict[str, list[Callable[..., Any]]] = {event: [] for event in REGISTRY_EVENTS}
        for name, provider in (providers or {}).items():
            self.register(name, provider)

    # ----- Mapping protocol -----

    def __getitem__(self, name: str) -> Any:
        return self._providers[name]

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._providers))

    def __len__(self) -> int:
        return len(self._providers)

    def __repr__(self) -> str:
        return f"ProviderRegistry({sorted(self._providers)!r})"

    # ----- Registration -----

    def register(self, name: str, provider: Any, descriptor: ProviderDescriptor | None = None) -> None:
        """Store *provider* under *name*, replacing any existing entry.

        Raises:
            InvalidInputError: If name is empty.
        """
        if not name:
            raise InvalidInputError(message="provider name must be a non-empty string")

        replaced = name in self._providers
        if replaced:
            logger.debug("Replacing provider '%s'", name)
        self._providers[name] = provider
        if descriptor is None:
            descriptor = ProviderDescriptor(name=name, version=str(getattr(provider, "version", None) or "0.0.0"))
        self._descriptors[name] = descriptor

        self._trigger_event("replace" if replaced else "register", name, provider)

    # ----- Query Methods -----

    def get(self, name: str, default: Any = None) -> Any:
        """Look up a provider by name. Returns *default* if not found."""
        return self._providers.get(name, default)

    def has(self, name: str) -> bool:
        return name in self._providers

    def list(self, prefix: str | None = None) -> list[str]:
        """Return sorted provider names, optionally filtered by prefix."""
        names = list(self._providers)
        if prefix is not None:
            names = [n for n in names if n.startswith(prefix)]
        return sorted(names)

    def iter(self) -> Iterator[tuple[str, Any]]:
        """Return an iterator of (name, provider) tuples (snapshot-based)."""
        return iter(list(self._providers.items()))

    @property
    def count(self) -> int:
        return len(self._providers)

    @property
    def names(self) -> list[str]:
        """Sorted list of registered provider names."""
        return sorted(self._providers)

    def describe(self, name: str) -> ProviderDescriptor | None:
        """Return the registration metadata for *name*, or None."""
        return self._descriptors.get(name)

    def version_of(self, name: str) -> str | None:
        descriptor = self._descriptors.get(name)
        return descriptor.version if descriptor is not None else None

    # ----- Event System -----

    def on(self, event: str, callback: Callable[..., Any]) -> None:
        """Register a callback(name, provider) for 'register' or 'replace'.

        Raises:
            InvalidInputError: If event name is invalid.
        """
        if event not in self._callbacks:
            raise InvalidInputError(message=f"Invalid event: {event}. Must be one of {', '.join(REGISTRY_EVENTS)}")
        self._callbacks[event].append(callback)

    def _trigger_event(self, event: str, name: str, provider: Any) -> None:
        """Trigger all callbacks for an event. Errors are logged and swallowed."""
        for cb in list(self._callbacks.get(event, [])):
            try:
                cb(name, provider)
            except Exception as e:
                logger.error("Callback error for event '%s' on provider '%s': %s", event, name, e)
