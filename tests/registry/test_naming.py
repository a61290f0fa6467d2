"""Tests for NameResolver and provider name validation."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

import pytest

from plugwire.errors import ProviderNameError
from plugwire.registry.naming import NameResolver, is_valid_name
from plugwire.registry.types import NormalizedSpec
from provider_helpers import RecordingLog


def _spec(name: str | None = None, declared: Any = None) -> NormalizedSpec:
    instance = SimpleNamespace() if declared is None else SimpleNamespace(name=declared)
    return NormalizedSpec(name=name, instance=instance)


class TestIsValidName:
    @pytest.mark.parametrize("name", ["alpha", "a-b", "a_b", "a.b", "A9", "v1.2-beta_3"])
    def test_valid(self, name: str) -> None:
        assert is_valid_name(name)

    @pytest.mark.parametrize("name", ["", "a b", "a/b", "a!", "ünïcode", "name\n", None, 12])
    def test_invalid(self, name: Any) -> None:
        assert not is_valid_name(name)


class TestNameResolver:
    def test_spec_name_overrides_declared_name(self) -> None:
        assert NameResolver().resolve(_spec(name="override", declared="declared")) == "override"

    def test_declared_name_used_when_no_override(self, log: RecordingLog) -> None:
        assert NameResolver(log=log).resolve(_spec(declared="declared")) == "declared"
        assert log.contains("specification does not")

    def test_no_name_raises(self) -> None:
        with pytest.raises(ProviderNameError, match="neither the specification nor the provider"):
            NameResolver().resolve(_spec())

    def test_invalid_effective_name_raises(self) -> None:
        with pytest.raises(ProviderNameError) as exc_info:
            NameResolver().resolve(_spec(declared="bad name!"))
        assert exc_info.value.code == "PROVIDER_NAME_INVALID"

    def test_invalid_override_is_rejected_even_if_declared_name_is_valid(self) -> None:
        with pytest.raises(ProviderNameError):
            NameResolver().resolve(_spec(name="bad/name", declared="fine"))

    def test_valid_override_accepted_even_if_declared_name_is_invalid(self) -> None:
        """Only the effective name is validated."""
        assert NameResolver().resolve(_spec(name="fine", declared="not fine!")) == "fine"

    def test_non_string_declared_name_raises(self) -> None:
        with pytest.raises(ProviderNameError):
            NameResolver().resolve(_spec(declared=123))
