"""Environment passed to providers, and the log function contract."""

from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from typing import Any, Callable

from plugwire.config import Config
from plugwire.routing import Router, RoutingSurface
from plugwire.state import StateStore

__all__ = [
    "UNSET",
    "Environment",
    "LogFunction",
    "create_environment",
    "log_to",
    "null_log",
]

LogFunction = Callable[..., None]

_LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
    "critical": logging.CRITICAL,
}


class _Unset:
    """Marker for 'not specified', distinct from an explicit None."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


def log_to(logger: logging.Logger) -> LogFunction:
    """Adapt a ``logging.Logger`` to the ``log(message, level)`` contract."""

    def log(message: str, level: str = "info") -> None:
        logger.log(_LEVELS.get(level, logging.INFO), "%s", message)

    return log


def null_log(message: str, level: str = "info") -> None:
    """Log function that discards everything."""
    return None


@dataclass
class Environment:
    """Configuration object shared with every provider.

    Each provider receives a shallow copy whose ``router`` is its private
    sub-surface. ``security`` is the ambient middleware applied to endpoints
    that do not declare their own; leave it ``UNSET`` (or ``None``) for none.
    """

    router: RoutingSurface
    log: LogFunction = field(default_factory=lambda: log_to(logging.getLogger("plugwire")))
    security: Any = UNSET
    state: Any = None
    config: Config = field(default_factory=Config)
    extras: dict[str, Any] = field(default_factory=dict)

    def for_provider(self, name: str, router: RoutingSurface) -> Environment:
        """Return the shallow copy handed to provider *name*.

        A :class:`StateStore` delegate is narrowed to the provider's own scope;
        any other ``state`` value is forwarded as-is.
        """
        state = self.state
        if isinstance(state, StateStore):
            state = state.scope(name)
        return dataclasses.replace(self, router=router, state=state)


def create_environment(
    router: RoutingSurface | None = None,
    log: LogFunction | None = None,
    security: Any = UNSET,
    state: Any = None,
    config: Config | None = None,
) -> Environment:
    """Build an Environment, creating an in-memory Router when none is given."""
    return Environment(
        router=router if router is not None else Router(),
        log=log if log is not None else log_to(logging.getLogger("plugwire")),
        security=security,
        state=state,
        config=config if config is not None else Config(),
    )
