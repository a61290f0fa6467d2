"""Registry types: ProviderSpec, NormalizedSpec, Endpoint, MountedEndpoint, ProviderDescriptor."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Callable

from plugwire.environment import UNSET

__all__ = [
    "HTTP_METHODS",
    "STREAMING_METHOD",
    "Endpoint",
    "MountedEndpoint",
    "NormalizedSpec",
    "ProviderDescriptor",
    "ProviderSpec",
]

HTTP_METHODS = frozenset({"connect", "delete", "get", "head", "options", "patch", "post", "put", "trace"})
STREAMING_METHOD = "ws"


@dataclass
class ProviderSpec:
    """Caller-supplied description of how to obtain a provider.

    Set ``instance`` for a preloaded provider (a string is treated as a
    locator), or ``locator`` to import one. ``name`` overrides the name the
    provider declares.
    """

    name: str | None = None
    locator: str | None = None
    instance: Any = None


@dataclass
class NormalizedSpec:
    """Uniform record produced by the SpecNormalizer."""

    instance: Any
    name: str | None = None
    locator: str | None = None


@dataclass
class Endpoint:
    """An HTTP endpoint declared by a provider."""

    route: Any
    method: Any
    handler: Any
    openapi: Any = None
    security: Any = UNSET

    @classmethod
    def from_declaration(cls, declaration: Any) -> Endpoint:
        """Read an endpoint from a mapping or an attribute-bearing object."""
        if isinstance(declaration, Endpoint):
            return declaration
        if isinstance(declaration, Mapping):
            get = declaration.get
        else:
            def get(key: str, default: Any = None) -> Any:
                return getattr(declaration, key, default)
        return cls(
            route=get("route"),
            method=get("method"),
            handler=get("handler"),
            openapi=get("openapi"),
            security=get("security", UNSET),
        )


@dataclass
class MountedEndpoint:
    """Record of an endpoint that was mounted on a provider's sub-surface."""

    provider: str
    method: str
    route: str
    mount_path: str
    handler: Callable[..., Any]
    security: Any = None
    openapi: Any = None


@dataclass
class ProviderDescriptor:
    """Registration metadata kept alongside each provider instance."""

    name: str
    version: str
    locator: str | None = None
    prefix: str | None = None
    endpoints: list[MountedEndpoint] = field(default_factory=list)
