"""Shared test fixtures for the plugwire test suite."""

from __future__ import annotations

import importlib
import sys
import textwrap
import uuid
from pathlib import Path
from typing import Callable

import pytest

from plugwire.environment import Environment
from plugwire.routing import Router
from provider_helpers import RecordingLog


# === Fixtures ===


@pytest.fixture
def log() -> RecordingLog:
    """A log function that records all messages."""
    return RecordingLog()


@pytest.fixture
def router() -> Router:
    """A fresh in-memory root router."""
    return Router()


@pytest.fixture
def env(router: Router, log: RecordingLog) -> Environment:
    """Environment wired to the recording log and in-memory router."""
    return Environment(router=router, log=log)


@pytest.fixture
def provider_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Callable[[str], str]:
    """Factory writing provider source to an importable module. Returns the module name."""
    monkeypatch.syspath_prepend(str(tmp_path))
    created: list[str] = []

    def factory(source: str, module_name: str | None = None) -> str:
        module_name = module_name or f"pw_provider_{uuid.uuid4().hex[:10]}"
        (tmp_path / f"{module_name}.py").write_text(textwrap.dedent(source))
        created.append(module_name)
        importlib.invalidate_caches()
        return module_name

    yield factory

    for module_name in created:
        sys.modules.pop(module_name, None)
