"""Routing surface backed by Starlette routers.

Usage::

    from starlette.applications import Starlette
    from plugwire.contrib.starlette import StarletteSurface

    surface = StarletteSurface()
    env = create_environment(router=surface)
    await plugwire.setup(specs, env)
    app = Starlette(routes=surface.router.routes)
"""

from __future__ import annotations

from typing import Any, Callable, Sequence

from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Mount, Route, Router, WebSocketRoute

from plugwire.routing import run_chain

__all__ = ["StarletteSurface"]


class StarletteSurface:
    """Adapts a ``starlette.routing.Router`` to the RoutingSurface protocol.

    Sub-surfaces are live ``Mount`` entries, so routes added after mounting
    are served. An empty route on a sub-surface is served at ``/<name>/``.
    """

    def __init__(self, router: Router | None = None, prefix: str = "") -> None:
        self.router = router if router is not None else Router()
        self.prefix = prefix

    def mount(self, prefix: str) -> StarletteSurface:
        child = StarletteSurface(prefix=prefix)
        self.router.routes.append(Mount(prefix, app=child.router))
        return child

    def add(self, method: str, path: str, handlers: Sequence[Callable[..., Any]]) -> None:
        chain = list(handlers)

        async def endpoint(request: Request) -> Any:
            return await run_chain(chain, request)

        self.router.routes.append(Route(path or "/", endpoint, methods=[method.upper()]))

    def websocket(self, path: str, handler: Callable[..., Any]) -> None:
        self.router.routes.append(WebSocketRoute(path or "/", handler))

    def failure_response(self, trace_id: str, error: Exception) -> JSONResponse:
        return JSONResponse({"error": "internal_error", "trace_id": trace_id}, status_code=500)

    def __repr__(self) -> str:
        return f"StarletteSurface(prefix={self.prefix!r}, routes={len(self.router.routes)})"
