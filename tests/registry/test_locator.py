"""Tests for locator resolution: resolve_locator(), split_locator(), top_level_package()."""

from __future__ import annotations

import pytest

from plugwire.errors import LocatorError
from plugwire.registry.locator import resolve_locator, split_locator, top_level_package
from provider_helpers import BasicProvider


class TestSplitLocator:
    def test_module_only(self) -> None:
        assert split_locator("pkg.mod") == ("pkg.mod", None)

    def test_module_and_attribute(self) -> None:
        assert split_locator("pkg.mod:Thing.default") == ("pkg.mod", "Thing.default")

    def test_trailing_colon_means_no_attribute(self) -> None:
        assert split_locator("pkg.mod:") == ("pkg.mod", None)

    def test_top_level_package(self) -> None:
        assert top_level_package("pkg.sub.mod:attr") == "pkg"
        assert top_level_package("yaml") == "yaml"


class TestResolveLocator:
    def test_imports_module(self, provider_module) -> None:
        """A bare module path returns the imported module object."""
        mod_name = provider_module("name = 'located'\n")
        resolved = resolve_locator(mod_name)
        assert resolved.__name__ == mod_name
        assert resolved.name == "located"

    def test_returns_attribute(self) -> None:
        """'module:attr' returns the named attribute."""
        resolved = resolve_locator("provider_helpers:basic_instance")
        assert isinstance(resolved, BasicProvider)

    def test_instantiates_classes(self) -> None:
        """A class found through the locator is instantiated."""
        resolved = resolve_locator("provider_helpers:BasicProvider")
        assert isinstance(resolved, BasicProvider)

    def test_follows_dotted_attribute_paths(self) -> None:
        resolved = resolve_locator("provider_helpers:Factory.default")
        assert isinstance(resolved, BasicProvider)

    def test_missing_module_raises(self) -> None:
        with pytest.raises(LocatorError, match="cannot import module") as exc_info:
            resolve_locator("plugwire_no_such_module_xyz")
        assert exc_info.value.locator == "plugwire_no_such_module_xyz"
        assert exc_info.value.code == "LOCATOR_ERROR"

    def test_module_raising_on_import_raises(self, provider_module) -> None:
        """Exceptions raised while importing are wrapped in LocatorError."""
        mod_name = provider_module("raise RuntimeError('boom during import')\n")
        with pytest.raises(LocatorError, match="raised while loading"):
            resolve_locator(mod_name)

    def test_missing_attribute_raises(self) -> None:
        with pytest.raises(LocatorError, match="not found"):
            resolve_locator("provider_helpers:does_not_exist")

    def test_class_failing_to_instantiate_raises(self, provider_module) -> None:
        mod_name = provider_module(
            """
            class NeedsArgs:
                def __init__(self, required):
                    self.required = required
            """
        )
        with pytest.raises(LocatorError, match="cannot instantiate"):
            resolve_locator(f"{mod_name}:NeedsArgs")

    @pytest.mark.parametrize("locator", ["", "   "])
    def test_empty_locator_raises(self, locator: str) -> None:
        with pytest.raises(LocatorError, match="non-empty"):
            resolve_locator(locator)
