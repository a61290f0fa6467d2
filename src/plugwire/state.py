"""In-memory scoped state capability handed to providers through their environment."""

from __future__ import annotations

from typing import Any

__all__ = ["StateStore"]


class StateStore:
    """Async key/value store that can hand out isolated child scopes.

    A store passed as ``Environment.state`` acts as a delegate: each provider
    receives ``store.scope(<provider name>)`` instead of the store itself, so
    providers never observe each other's writes.
    """

    def __init__(self, namespace: str = "") -> None:
        self._namespace = namespace
        self._data: dict[str, Any] = {}
        self._scopes: dict[str, StateStore] = {}

    @property
    def namespace(self) -> str:
        """Dotted path of this scope relative to the root store."""
        return self._namespace

    def scope(self, name: str) -> StateStore:
        """Return the child scope for *name*, creating it on first use."""
        if not name:
            raise ValueError("scope name must be a non-empty string")
        child = self._scopes.get(name)
        if child is None:
            namespace = f"{self._namespace}.{name}" if self._namespace else name
            child = StateStore(namespace)
            self._scopes[name] = child
        return child

    async def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    async def remove(self, key: str) -> bool:
        """Delete *key*. Returns False if it was not present."""
        return self._data.pop(key, _MISSING) is not _MISSING

    async def keys(self) -> list[str]:
        return sorted(self._data)

    def __repr__(self) -> str:
        return f"StateStore(namespace={self._namespace!r})"


_MISSING = object()
