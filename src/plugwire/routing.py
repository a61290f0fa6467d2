"""Routing surfaces: the protocol plugwire mounts onto, plus an in-memory reference router."""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Protocol, Sequence, runtime_checkable

from pydantic import BaseModel

__all__ = [
    "ErrorResponse",
    "Request",
    "Route",
    "Router",
    "RoutingSurface",
    "run_chain",
]


class ErrorResponse(BaseModel):
    """Generic failure body returned when a wrapped handler raises."""

    status_code: int = 500
    error: str = "internal_error"
    trace_id: str | None = None


@runtime_checkable
class RoutingSurface(Protocol):
    """The capability plugwire needs from an HTTP routing facility.

    ``handlers`` passed to :meth:`add` is an ordered chain: zero or more
    middleware callables ``middleware(request, call_next)`` followed by the
    terminal handler ``handler(request)``.
    """

    prefix: str

    def mount(self, prefix: str) -> RoutingSurface:
        """Create a sub-surface attached under *prefix* and return it."""
        ...

    def add(self, method: str, path: str, handlers: Sequence[Callable[..., Any]]) -> None:
        """Register a handler chain for *method* at *path*."""
        ...

    def websocket(self, path: str, handler: Callable[..., Any]) -> None:
        """Register a raw streaming handler at *path*."""
        ...

    def failure_response(self, trace_id: str, error: Exception) -> Any:
        """Build the response sent when a wrapped handler fails."""
        ...


@dataclass
class Request:
    """Minimal request object dispatched by :class:`Router`."""

    method: str
    path: str
    client: str | None = None
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None
    state: dict[str, Any] = field(default_factory=dict)


@dataclass
class Route:
    """A handler chain registered on a router."""

    method: str
    path: str
    handlers: list[Callable[..., Any]]
    websocket: bool = False

    @property
    def endpoint(self) -> Callable[..., Any]:
        """The terminal handler of the chain."""
        return self.handlers[-1]


async def run_chain(handlers: Sequence[Callable[..., Any]], request: Any) -> Any:
    """Run a middleware chain ending in a handler, awaiting results where needed."""

    async def call(index: int) -> Any:
        fn = handlers[index]
        if index == len(handlers) - 1:
            result = fn(request)
        else:
            result = fn(request, lambda: call(index + 1))
        if inspect.isawaitable(result):
            result = await result
        return result

    return await call(0)


class Router:
    """In-memory routing surface.

    Sub-surfaces created by :meth:`mount` stay live: routes added to them
    after mounting are visible through the parent's :meth:`find` and
    :meth:`dispatch`.
    """

    def __init__(self, prefix: str = "") -> None:
        self.prefix = prefix
        self.parent: Router | None = None
        self.routes: list[Route] = []
        self.children: list[Router] = []

    @property
    def full_prefix(self) -> str:
        """Prefix of this surface as seen from the root router."""
        if self.parent is None:
            return self.prefix
        return self.parent.full_prefix + self.prefix

    def mount(self, prefix: str) -> Router:
        child = Router(prefix)
        child.parent = self
        self.children.append(child)
        return child

    def add(self, method: str, path: str, handlers: Sequence[Callable[..., Any]] | Callable[..., Any]) -> None:
        chain = [handlers] if callable(handlers) else list(handlers)
        if not chain:
            raise ValueError(f"No handlers given for {method.upper()} {path}")
        self.routes.append(Route(method=method.lower(), path=path, handlers=chain))

    def websocket(self, path: str, handler: Callable[..., Any]) -> None:
        self.routes.append(Route(method="ws", path=path, handlers=[handler], websocket=True))

    def failure_response(self, trace_id: str, error: Exception) -> ErrorResponse:
        return ErrorResponse(status_code=500, error="internal_error", trace_id=trace_id)

    def iter_routes(self) -> Iterator[tuple[str, Route]]:
        """Yield ``(full_path, route)`` for this surface and every sub-surface."""
        base = self.full_prefix
        for route in self.routes:
            yield base + route.path, route
        for child in self.children:
            yield from child.iter_routes()

    def paths(self) -> list[tuple[str, str]]:
        """Sorted ``(METHOD, full_path)`` pairs of every registered route."""
        return sorted((route.method.upper(), path) for path, route in self.iter_routes())

    def find(self, method: str, path: str) -> Route | None:
        """Return the first route registered for *method* at *path*, or None."""
        method = method.lower()
        for full_path, route in self.iter_routes():
            if route.method == method and full_path == path:
                return route
        return None

    async def dispatch(self, request: Request) -> Any:
        """Route *request* through its handler chain and return the result."""
        route = self.find(request.method, request.path)
        if route is None:
            return ErrorResponse(status_code=404, error="not_found")
        return await run_chain(route.handlers, request)

    def __repr__(self) -> str:
        return f"Router(prefix={self.full_prefix!r}, routes={len(self.routes)})"
