"""Endpoint validation, handler wrapping and mounting."""

from __future__ import annotations

import functools
import inspect
import json
import re
import uuid
from typing import Any, Callable

from plugwire.environment import UNSET, Environment, LogFunction
from plugwire.errors import EndpointValidationError, HandlerRuntimeError
from plugwire.registry.types import HTTP_METHODS, STREAMING_METHOD, Endpoint, MountedEndpoint
from plugwire.routing import RoutingSurface

__all__ = [
    "ROUTE_PATTERN",
    "EndpointRegistrar",
    "request_origin",
    "validate_endpoint",
    "wrap_handler",
]

# A bare "/" is the provider root; any other route carries no trailing slash.
ROUTE_PATTERN = re.compile(r"/|(/[^/]+)*")


def request_origin(args: tuple[Any, ...]) -> str:
    """Best-effort description of where a request came from."""
    if not args:
        return "unknown"
    request = args[0]
    client = getattr(request, "client", None)
    host = getattr(client, "host", None)
    if host:
        return str(host)
    if isinstance(client, str) and client:
        return client
    remote = getattr(request, "remote_addr", None)
    return str(remote) if remote else "unknown"


def _dump_error(error: Exception, trace_id: str, mount_path: str, origin: str) -> str:
    described = HandlerRuntimeError(route=mount_path, origin=origin, error=error, trace_id=trace_id)
    payload = described.to_dict()
    if hasattr(error, "to_dict"):
        payload["error"] = error.to_dict()
    else:
        payload["error"] = {"args": [repr(a) for a in error.args]}
    return json.dumps(payload, default=str)


def wrap_handler(
    handler: Callable[..., Any],
    mount_path: str,
    log: LogFunction,
    router: RoutingSurface,
) -> Callable[..., Any]:
    """Wrap *handler* so exceptions are logged and answered with a failure response.

    The wrapper keeps the handler's sync/async nature. Awaitables returned
    by other callables are awaited under the same guard. On failure it logs at
    ``error`` with a fresh trace id and the request origin, logs a JSON dump
    at ``debug``, and returns ``router.failure_response(trace_id, error)``.
    """

    def on_failure(error: Exception, args: tuple[Any, ...]) -> Any:
        trace_id = uuid.uuid4().hex
        origin = request_origin(args)
        log(
            f"An unexpected error occurred while accessing {mount_path} from {origin} "
            f"(trace ID: {trace_id}): {error}",
            "error",
        )
        log(_dump_error(error, trace_id, mount_path, origin), "debug")
        return router.failure_response(trace_id, error)

    if inspect.iscoroutinefunction(handler):

        @functools.wraps(handler)
        async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return await handler(*args, **kwargs)
            except Exception as error:
                return on_failure(error, args)

        return async_wrapper

    async def settle(awaitable: Any, args: tuple[Any, ...]) -> Any:
        try:
            return await awaitable
        except Exception as error:
            return on_failure(error, args)

    @functools.wraps(handler)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            result = handler(*args, **kwargs)
        except Exception as error:
            return on_failure(error, args)
        # async __call__ objects and coroutine-returning callables
        if inspect.isawaitable(result):
            return settle(result, args)
        return result

    return wrapper


def validate_endpoint(provider: str, endpoint: Endpoint) -> str:
    """Check route, method and handler in that order. Returns the lowercased method.

    Raises:
        EndpointValidationError: On the first gate that fails.
    """
    if not isinstance(endpoint.route, str) or ROUTE_PATTERN.fullmatch(endpoint.route) is None:
        raise EndpointValidationError(provider=provider, field="route", value=endpoint.route)

    method = endpoint.method.lower() if isinstance(endpoint.method, str) else None
    if method not in HTTP_METHODS and method != STREAMING_METHOD:
        raise EndpointValidationError(provider=provider, field="method", value=endpoint.method)

    if not callable(endpoint.handler):
        raise EndpointValidationError(provider=provider, field="handler", value=endpoint.handler)

    return method


class EndpointRegistrar:
    """Mounts the endpoints a provider declares onto its private sub-surface."""

    def __init__(self, environment: Environment) -> None:
        self._environment = environment
        self._log = environment.log

    def register(self, name: str, provider: Any, router: RoutingSurface) -> list[MountedEndpoint]:
        """Validate and mount every endpoint of *provider*, in declaration order.

        Invalid endpoints are logged and skipped; the rest still mount.
        """
        declarations = getattr(provider, "endpoints", None)
        if not declarations or not isinstance(declarations, (list, tuple)):
            return []

        self._log(f"Registering endpoints for '{name}':", "info")
        mounted: list[MountedEndpoint] = []
        for declaration in declarations:
            endpoint = Endpoint.from_declaration(declaration)
            try:
                method = validate_endpoint(name, endpoint)
            except EndpointValidationError as e:
                self._log(str(e), "warning")
                continue
            mounted.append(self._mount(name, endpoint, method, router))
        return mounted

    def _mount(self, name: str, endpoint: Endpoint, method: str, router: RoutingSurface) -> MountedEndpoint:
        route = endpoint.route
        mount_path = f"/{name}{route}"
        self._log(f"{method.upper():>7} {mount_path}", "info")

        if method == STREAMING_METHOD:
            router.websocket(route, endpoint.handler)
            return MountedEndpoint(
                provider=name,
                method=method,
                route=route,
                mount_path=mount_path,
                handler=endpoint.handler,
            )

        handler = wrap_handler(endpoint.handler, mount_path, self._log, router)
        if endpoint.openapi is not None:
            handler.openapi = endpoint.openapi

        security = self._environment.security if endpoint.security is UNSET else endpoint.security
        chain: list[Callable[..., Any]] = [handler]
        if security:
            chain.insert(0, security)

        router.add(method, route, chain)
        return MountedEndpoint(
            provider=name,
            method=method,
            route=route,
            mount_path=mount_path,
            handler=handler,
            security=security or None,
            openapi=getattr(handler, "openapi", None),
        )
