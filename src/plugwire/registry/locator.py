"""Locator resolution: turn ``package.module[:attribute]`` strings into live objects."""

from __future__ import annotations

import importlib
import inspect
from typing import Any

from plugwire.errors import LocatorError

__all__ = ["resolve_locator", "split_locator", "top_level_package"]


def split_locator(locator: str) -> tuple[str, str | None]:
    """Split a locator into its module path and optional attribute path."""
    if ":" in locator:
        module_path, attr_path = locator.split(":", 1)
        return module_path, attr_path or None
    return locator, None


def top_level_package(locator: str) -> str:
    """Return the top-level import package a locator lives in."""
    module_path, _ = split_locator(locator)
    return module_path.split(".", 1)[0]


def resolve_locator(locator: str) -> Any:
    """Resolve a locator to a provider object.

    ``pkg.mod`` returns the imported module. ``pkg.mod:attr`` returns the named
    attribute, following dotted paths (``pkg.mod:Factory.default``). A class
    found this way is instantiated with no arguments.

    Raises:
        LocatorError: If the module cannot be imported, raises while
            importing, or the attribute does not exist.
    """
    if not isinstance(locator, str) or not locator.strip():
        raise LocatorError(locator=str(locator), reason="locator must be a non-empty string")

    module_path, attr_path = split_locator(locator.strip())

    try:
        target: Any = importlib.import_module(module_path)
    except ImportError as exc:
        raise LocatorError(locator=locator, reason=f"cannot import module '{module_path}': {exc}") from exc
    except Exception as exc:
        raise LocatorError(locator=locator, reason=f"module '{module_path}' raised while loading: {exc}") from exc

    if attr_path is None:
        return target

    for part in attr_path.split("."):
        try:
            target = getattr(target, part)
        except AttributeError as exc:
            raise LocatorError(
                locator=locator,
                reason=f"attribute '{attr_path}' not found in module '{module_path}'",
            ) from exc

    if inspect.isclass(target):
        try:
            target = target()
        except Exception as exc:
            raise LocatorError(locator=locator, reason=f"cannot instantiate '{attr_path}': {exc}") from exc
    return target
