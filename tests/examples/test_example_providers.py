"""Tests for the example providers in the examples/ directory."""

from __future__ import annotations

import importlib.util
import pathlib
from typing import Any

import pydantic
import pytest

import plugwire
from plugwire.environment import Environment
from plugwire.routing import ErrorResponse, Request, Router
from plugwire.state import StateStore
from provider_helpers import RecordingLog

PROJECT_ROOT = pathlib.Path(__file__).resolve().parent.parent.parent


def _load_example_module(relative_path: str):
    """Load a Python module from a path relative to PROJECT_ROOT using importlib."""
    full_path = PROJECT_ROOT / relative_path
    spec = importlib.util.spec_from_file_location(full_path.stem, str(full_path))
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod


def require_token(request: Any, call_next: Any) -> Any:
    if request.headers.get("authorization") != "Bearer secret":
        return ErrorResponse(status_code=401, error="unauthorized")
    return call_next()


# --- greeter ---


class TestGreeterProvider:
    @pytest.mark.asyncio
    async def test_mounts_hello_endpoint(self, env: Environment, router: Router) -> None:
        greeter = _load_example_module("examples/providers/greeter.py")
        registry = await plugwire.setup([{"instance": greeter}], env)

        assert registry.version_of("greeter") == "1.0.0"
        assert router.paths() == [("POST", "/greeter/hello")]
        assert router.find("post", "/greeter/hello").endpoint.openapi == {"post": {"summary": "Greet a caller"}}

    @pytest.mark.asyncio
    async def test_greeting_comes_from_environment_extras(self, router: Router, log: RecordingLog) -> None:
        greeter = _load_example_module("examples/providers/greeter.py")
        env = Environment(router=router, log=log, extras={"greeting": "Howdy"})
        await plugwire.setup([{"instance": greeter}], env)

        response = await router.dispatch(Request(method="POST", path="/greeter/hello", body={"name": "Ada"}))
        assert response == {"message": "Howdy, Ada!"}
        assert log.contains("greeting 'Howdy'", "debug")


# --- inventory ---


class TestInventoryProvider:
    @pytest.fixture
    def inventory_env(self, router: Router, log: RecordingLog) -> Environment:
        return Environment(router=router, log=log, security=require_token, state=StateStore())

    @pytest.mark.asyncio
    async def test_state_round_trip(self, inventory_env: Environment, router: Router) -> None:
        inventory = _load_example_module("examples/providers/inventory.py")
        await plugwire.setup([{"instance": inventory.InventoryProvider()}], inventory_env)

        added = await router.dispatch(
            Request(
                method="POST",
                path="/inventory/items",
                headers={"authorization": "Bearer secret"},
                body={"sku": "A-1", "quantity": 3},
            )
        )
        assert added == {"sku": "A-1", "quantity": 3}

        listed = await router.dispatch(Request(method="GET", path="/inventory/items"))
        assert listed == {"items": [{"sku": "A-1", "quantity": 3}]}
        assert await inventory_env.state.scope("inventory").keys() == ["items"]

    @pytest.mark.asyncio
    async def test_write_requires_ambient_security(self, inventory_env: Environment, router: Router) -> None:
        inventory = _load_example_module("examples/providers/inventory.py")
        await plugwire.setup([{"instance": inventory.InventoryProvider()}], inventory_env)

        response = await router.dispatch(Request(method="POST", path="/inventory/items", body={"sku": "A-1"}))
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_invalid_body_is_answered_with_failure(
        self, inventory_env: Environment, router: Router, log: RecordingLog
    ) -> None:
        inventory = _load_example_module("examples/providers/inventory.py")
        await plugwire.setup([{"instance": inventory.InventoryProvider()}], inventory_env)

        response = await router.dispatch(
            Request(
                method="POST",
                path="/inventory/items",
                headers={"authorization": "Bearer secret"},
                body={"quantity": "many"},
            )
        )
        assert response.status_code == 500
        assert log.contains(response.trace_id, "error")

    def test_item_model_validates(self) -> None:
        inventory = _load_example_module("examples/providers/inventory.py")
        with pytest.raises(pydantic.ValidationError):
            inventory.Item.model_validate({"quantity": 1})
