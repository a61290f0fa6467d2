"""plugwire provider registry and registration pipeline.

Provides spec normalization, name and version resolution, the provider
registry, setup orchestration and endpoint mounting.

Usage::

    from plugwire.registry import ProviderRegistry

    registry = ProviderRegistry()
    registry.register("billing", billing_provider)
"""

from __future__ import annotations

from plugwire.registry.endpoints import EndpointRegistrar, request_origin, validate_endpoint, wrap_handler
from plugwire.registry.locator import resolve_locator
from plugwire.registry.naming import PROVIDER_NAME_PATTERN, NameResolver, is_valid_name
from plugwire.registry.normalizer import SpecNormalizer
from plugwire.registry.orchestrator import ProviderScope, SetupOrchestrator
from plugwire.registry.registry import REGISTRY_EVENTS, ProviderRegistry
from plugwire.registry.types import (
    HTTP_METHODS,
    STREAMING_METHOD,
    Endpoint,
    MountedEndpoint,
    NormalizedSpec,
    ProviderDescriptor,
    ProviderSpec,
)
from plugwire.registry.version import VersionResolver, distribution_version

__all__ = [
    "HTTP_METHODS",
    "PROVIDER_NAME_PATTERN",
    "REGISTRY_EVENTS",
    "STREAMING_METHOD",
    "Endpoint",
    "EndpointRegistrar",
    "MountedEndpoint",
    "NameResolver",
    "NormalizedSpec",
    "ProviderDescriptor",
    "ProviderRegistry",
    "ProviderScope",
    "ProviderSpec",
    "SetupOrchestrator",
    "SpecNormalizer",
    "VersionResolver",
    "distribution_version",
    "is_valid_name",
    "request_origin",
    "resolve_locator",
    "validate_endpoint",
    "wrap_handler",
]
