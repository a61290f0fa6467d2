"""plugwire - dynamic provider registration and endpoint mounting."""

from __future__ import annotations

# Core
from plugwire.providers import resolve_specs, setup
from plugwire.registry import (
    Endpoint,
    MountedEndpoint,
    ProviderDescriptor,
    ProviderRegistry,
    ProviderSpec,
)

# Environment
from plugwire.environment import UNSET, Environment, create_environment, log_to, null_log
from plugwire.state import StateStore

# Routing
from plugwire.routing import ErrorResponse, Request, Router, RoutingSurface

# Config
from plugwire.config import Config
from plugwire.manifest import load_manifest, specs_from_config

# Errors
from plugwire.errors import (
    ConfigError,
    ConfigNotFoundError,
    EndpointValidationError,
    ErrorCodes,
    HandlerRuntimeError,
    InvalidInputError,
    LocatorError,
    PlugwireError,
    ProviderNameError,
    SetupHookError,
    SetupTimeoutError,
    SpecResolutionError,
    VersionResolutionError,
)

__version__ = "0.1.0"

__all__ = [
    # Core
    "setup",
    "resolve_specs",
    "ProviderRegistry",
    "ProviderSpec",
    "ProviderDescriptor",
    "Endpoint",
    "MountedEndpoint",
    # Environment
    "UNSET",
    "Environment",
    "create_environment",
    "log_to",
    "null_log",
    "StateStore",
    # Routing
    "RoutingSurface",
    "Router",
    "Request",
    "ErrorResponse",
    # Config
    "Config",
    "load_manifest",
    "specs_from_config",
    # Errors
    "ErrorCodes",
    "PlugwireError",
    "ConfigError",
    "ConfigNotFoundError",
    "InvalidInputError",
    "SpecResolutionError",
    "LocatorError",
    "VersionResolutionError",
    "ProviderNameError",
    "EndpointValidationError",
    "SetupHookError",
    "SetupTimeoutError",
    "HandlerRuntimeError",
]
