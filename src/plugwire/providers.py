"""Provider registration: resolve specs, run setup hooks, mount endpoints."""

from __future__ import annotations

from collections.abc import Mapping, MutableMapping
from typing import Any, Iterable

from plugwire.config import Config
from plugwire.environment import Environment
from plugwire.errors import InvalidInputError, PlugwireError
from plugwire.registry.endpoints import EndpointRegistrar
from plugwire.registry.naming import NameResolver
from plugwire.registry.normalizer import SpecNormalizer
from plugwire.registry.orchestrator import SetupOrchestrator
from plugwire.registry.registry import ProviderRegistry
from plugwire.registry.types import ProviderDescriptor
from plugwire.registry.version import VersionResolver

__all__ = ["resolve_specs", "setup"]


def _as_spec_list(specs: Any) -> list[Any]:
    if specs is None:
        return []
    if isinstance(specs, (list, tuple)):
        return list(specs)
    return [specs]


def _publish_version(provider: Any, version: str, name: str, log: Any) -> None:
    """Set ``version`` on a provider that declares none. The descriptor keeps it regardless."""
    if getattr(provider, "version", None):
        return
    try:
        setattr(provider, "version", version)
    except (AttributeError, TypeError) as e:
        log(f"Cannot set version on provider '{name}' ({e}), keeping it in the registry only", "debug")


def resolve_specs(
    specs: Iterable[Any],
    registry: ProviderRegistry,
    environment: Environment,
    config: Config,
) -> int:
    """Normalize, name and version every spec, registering the survivors in order.

    Each spec is guarded on its own: a failure is logged and the spec dropped,
    the remaining specs are still processed. Returns the number registered.
    """
    log = environment.log
    normalizer = SpecNormalizer(log=log)
    names = NameResolver(log=log)
    versions = VersionResolver(log=log, default_version=config.default_version)

    registered = 0
    for spec in specs:
        try:
            normalized = normalizer.normalize(spec)
            name = names.resolve(normalized)
            version = versions.resolve(normalized, name)
        except PlugwireError as e:
            log(f"Skipping provider specification {spec!r}: {e}", "warning")
            continue
        except Exception as e:
            log(f"Failed to load provider specification {spec!r}: {e}", "error")
            continue

        _publish_version(normalized.instance, version, name, log)

        if normalized.locator:
            log(f"Registering provider module '{normalized.locator}' v{version} as '{name}'", "info")
        else:
            log(f"Registering anonymous provider v{version} as '{name}'", "info")

        registry.register(
            name,
            normalized.instance,
            ProviderDescriptor(name=name, version=version, locator=normalized.locator),
        )
        registered += 1
    return registered


async def setup(
    specs: Any,
    environment: Environment,
    registry: ProviderRegistry | Mapping[str, Any] | None = None,
    *,
    config: Config | None = None,
) -> ProviderRegistry:
    """Register providers and mount their endpoints.

    Args:
        specs: A list of provider specifications, a single specification, or
            None/empty for a no-op.
        environment: Shared environment; its ``router`` is the root surface.
        registry: Existing registry to extend. Any other mapping is copied into
            a new ProviderRegistry; when it is mutable, new registrations are
            written back into it as well. A new registry is created when omitted.
        config: Overrides ``environment.config``.

    Returns:
        The registry, mapping provider names to live provider instances.

    Raises:
        SetupHookError: If any provider's setup hook fails or times out. Some
            providers may already own mounted sub-surfaces at that point.
    """
    if environment is None or getattr(environment, "router", None) is None:
        raise InvalidInputError(message="setup() requires an environment with a router")

    if registry is None:
        registry = ProviderRegistry()
    elif not isinstance(registry, ProviderRegistry):
        caller_mapping = registry
        registry = ProviderRegistry(caller_mapping)
        if isinstance(caller_mapping, MutableMapping):
            registry.on("register", caller_mapping.__setitem__)
            registry.on("replace", caller_mapping.__setitem__)

    spec_list = _as_spec_list(specs)
    if not spec_list:
        return registry

    config = config if config is not None else environment.config
    log = environment.log
    log("Loading providers...", "info")

    resolve_specs(spec_list, registry, environment, config)

    orchestrator = SetupOrchestrator(environment, timeout_ms=config.setup_timeout_ms)
    scopes = await orchestrator.run(registry)

    registrar = EndpointRegistrar(environment)
    for name, scope in scopes.items():
        provider = registry[name]
        mounted = registrar.register(name, provider, scope.router)
        descriptor = registry.describe(name)
        if descriptor is not None:
            descriptor.endpoints = mounted

    return registry
