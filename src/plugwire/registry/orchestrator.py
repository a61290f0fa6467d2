"""Setup orchestration: per-provider environments and concurrent setup hooks."""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable

from plugwire.environment import Environment
from plugwire.errors import SetupHookError, SetupTimeoutError
from plugwire.registry.registry import ProviderRegistry
from plugwire.routing import RoutingSurface

logger = logging.getLogger(__name__)

__all__ = ["ProviderScope", "SetupOrchestrator"]


@dataclass
class ProviderScope:
    """The private environment and routing sub-surface owned by one provider."""

    name: str
    environment: Environment
    router: RoutingSurface


class SetupOrchestrator:
    """Builds provider environments and runs every setup hook concurrently.

    All hooks are launched before any is awaited. The first hook to fail (or
    to exceed ``timeout_ms``) cancels the others and aborts the whole run
    with :class:`SetupHookError`.
    """

    def __init__(self, environment: Environment, timeout_ms: int = 30000) -> None:
        self._environment = environment
        self._timeout_ms = timeout_ms

    def prepare(self, registry: ProviderRegistry) -> dict[str, ProviderScope]:
        """Allocate a sub-surface and environment copy for every provider."""
        scopes: dict[str, ProviderScope] = {}
        for name, _provider in registry.iter():
            router = self._environment.router.mount(f"/{name}")
            environment = self._environment.for_provider(name, router)
            scopes[name] = ProviderScope(name=name, environment=environment, router=router)
            descriptor = registry.describe(name)
            if descriptor is not None:
                descriptor.prefix = f"/{name}"
        return scopes

    async def run(self, registry: ProviderRegistry) -> dict[str, ProviderScope]:
        """Prepare scopes, then invoke and jointly await every setup hook.

        Raises:
            SetupHookError: If any hook raises, rejects or times out.
        """
        scopes = self.prepare(registry)

        pending: dict[str, Awaitable[Any]] = {}
        for name, provider in registry.iter():
            setup = getattr(provider, "setup", None)
            if setup is None or not callable(setup):
                continue
            logger.debug("Invoking setup hook of provider '%s'", name)
            try:
                result = setup(scopes[name].environment, registry)
            except Exception as exc:
                _cancel_all(pending)
                raise SetupHookError(provider=name, reason=str(exc), cause=exc) from exc
            if inspect.isawaitable(result):
                pending[name] = result

        if pending:
            await self._await_all(pending)
        return scopes

    async def _await_all(self, pending: dict[str, Awaitable[Any]]) -> None:
        tasks = {
            asyncio.ensure_future(self._guard(name, awaitable)): name
            for name, awaitable in pending.items()
        }
        try:
            await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _guard(self, name: str, awaitable: Awaitable[Any]) -> Any:
        """Await one hook, translating failures and timeouts into SetupHookError."""
        try:
            if self._timeout_ms > 0:
                return await asyncio.wait_for(awaitable, timeout=self._timeout_ms / 1000)
            return await awaitable
        except asyncio.TimeoutError as exc:
            raise SetupTimeoutError(provider=name, timeout_ms=self._timeout_ms, cause=exc) from exc
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            raise SetupHookError(provider=name, reason=str(exc), cause=exc) from exc


def _cancel_all(pending: dict[str, Awaitable[Any]]) -> None:
    """Close coroutines collected before a synchronous setup failure."""
    for awaitable in pending.values():
        if inspect.iscoroutine(awaitable):
            awaitable.close()
        elif isinstance(awaitable, asyncio.Future):
            awaitable.cancel()
