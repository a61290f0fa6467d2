"""Tests for the in-memory Router and the middleware chain runner."""

from __future__ import annotations

from typing import Any

import pytest

from plugwire.routing import ErrorResponse, Request, Router, RoutingSurface, run_chain


class TestRouter:
    def test_is_a_routing_surface(self) -> None:
        assert isinstance(Router(), RoutingSurface)

    def test_mounted_routes_use_full_prefix(self) -> None:
        root = Router()
        sub = root.mount("/p")
        sub.add("GET", "/items", lambda request: "items")
        sub.add("post", "", lambda request: "root")
        assert root.paths() == [("GET", "/p/items"), ("POST", "/p")]
        assert sub.full_prefix == "/p"

    def test_routes_added_after_mount_are_visible(self) -> None:
        root = Router()
        sub = root.mount("/late")
        assert root.find("get", "/late/x") is None
        sub.add("get", "/x", lambda request: None)
        assert root.find("GET", "/late/x") is not None

    def test_add_accepts_single_callable(self) -> None:
        router = Router()

        def handler(request: Any) -> None:
            return None

        router.add("get", "/x", handler)
        assert router.find("get", "/x").handlers == [handler]

    def test_add_rejects_empty_chain(self) -> None:
        with pytest.raises(ValueError):
            Router().add("get", "/x", [])

    def test_websocket_route(self) -> None:
        router = Router()
        router.websocket("/live", lambda socket: None)
        route = router.find("ws", "/live")
        assert route.websocket

    def test_failure_response(self) -> None:
        response = Router().failure_response("abc", RuntimeError("x"))
        assert response == ErrorResponse(status_code=500, error="internal_error", trace_id="abc")


class TestDispatch:
    @pytest.mark.asyncio
    async def test_not_found(self) -> None:
        response = await Router().dispatch(Request(method="GET", path="/missing"))
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_async_handler(self) -> None:
        router = Router()

        async def handler(request: Request) -> str:
            return request.path

        router.add("get", "/x", handler)
        assert await router.dispatch(Request(method="get", path="/x")) == "/x"


class TestRunChain:
    @pytest.mark.asyncio
    async def test_middleware_order_and_passthrough(self) -> None:
        calls: list[str] = []

        def outer(request: Any, call_next: Any) -> Any:
            calls.append("outer")
            return call_next()

        async def inner(request: Any, call_next: Any) -> Any:
            calls.append("inner")
            return await call_next()

        def handler(request: Any) -> str:
            calls.append("handler")
            return "done"

        assert await run_chain([outer, inner, handler], object()) == "done"
        assert calls == ["outer", "inner", "handler"]

    @pytest.mark.asyncio
    async def test_middleware_can_short_circuit(self) -> None:
        def deny(request: Any, call_next: Any) -> str:
            return "denied"

        def handler(request: Any) -> str:
            raise AssertionError("handler must not run")

        assert await run_chain([deny, handler], object()) == "denied"
