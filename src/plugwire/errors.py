"""Error hierarchy for the plugwire registration engine."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

__all__ = [
    "PlugwireError",
    "ConfigNotFoundError",
    "ConfigError",
    "InvalidInputError",
    "SpecResolutionError",
    "LocatorError",
    "VersionResolutionError",
    "ProviderNameError",
    "EndpointValidationError",
    "SetupHookError",
    "SetupTimeoutError",
    "HandlerRuntimeError",
    "ErrorCodes",
]


class PlugwireError(Exception):
    """Base error for all plugwire errors."""

    def __init__(
        self,
        code: str,
        message: str,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
        trace_id: str | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details: dict[str, Any] = details or {}
        self.cause = cause
        self.trace_id = trace_id
        self.timestamp = datetime.now(timezone.utc).isoformat()

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-friendly representation of the error."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
            "cause": repr(self.cause) if self.cause is not None else None,
            "trace_id": self.trace_id,
            "timestamp": self.timestamp,
        }


class ConfigNotFoundError(PlugwireError):
    """Raised when a configuration file cannot be found."""

    def __init__(self, config_path: str, **kwargs: Any) -> None:
        super().__init__(
            code="CONFIG_NOT_FOUND",
            message=f"Configuration file not found: {config_path}",
            details={"config_path": config_path},
            **kwargs,
        )


class ConfigError(PlugwireError):
    """Raised when configuration is invalid."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(code="CONFIG_INVALID", message=message, **kwargs)


class InvalidInputError(PlugwireError):
    """Raised for invalid input."""

    def __init__(self, message: str = "Invalid input", **kwargs: Any) -> None:
        super().__init__(code="GENERAL_INVALID_INPUT", message=message, **kwargs)


class SpecResolutionError(PlugwireError):
    """Raised when a provider specification cannot be turned into a provider."""

    def __init__(self, spec: Any, reason: str, code: str = "SPEC_RESOLUTION_ERROR", **kwargs: Any) -> None:
        super().__init__(
            code=code,
            message=f"Cannot resolve provider specification {spec!r}: {reason}",
            details={"spec": repr(spec), "reason": reason},
            **kwargs,
        )

    @property
    def reason(self) -> str:
        """Why the specification was rejected."""
        return self.details["reason"]


class LocatorError(SpecResolutionError):
    """Raised when a locator string cannot be imported or resolved."""

    def __init__(self, locator: str, reason: str, **kwargs: Any) -> None:
        super().__init__(spec=locator, reason=reason, code="LOCATOR_ERROR", **kwargs)
        self.details["locator"] = locator

    @property
    def locator(self) -> str:
        """The locator that failed to resolve."""
        return self.details["locator"]


class VersionResolutionError(SpecResolutionError):
    """Raised when a locator-based provider has no discoverable package version."""

    def __init__(self, locator: str, reason: str, **kwargs: Any) -> None:
        super().__init__(spec=locator, reason=reason, code="VERSION_RESOLUTION_ERROR", **kwargs)
        self.details["locator"] = locator


class ProviderNameError(PlugwireError):
    """Raised when a provider has no usable registration name."""

    def __init__(self, name: Any, reason: str, **kwargs: Any) -> None:
        super().__init__(
            code="PROVIDER_NAME_INVALID",
            message=f"Invalid provider name {name!r}: {reason}",
            details={"name": name, "reason": reason},
            **kwargs,
        )


class EndpointValidationError(PlugwireError):
    """Raised when a declared endpoint fails shape validation."""

    def __init__(self, provider: str, field: str, value: Any, **kwargs: Any) -> None:
        super().__init__(
            code="ENDPOINT_INVALID",
            message=f"Invalid endpoint {field} for provider '{provider}': {value!r}",
            details={"provider": provider, "field": field, "value": repr(value)},
            **kwargs,
        )

    @property
    def field(self) -> str:
        """The endpoint field that failed validation (route, method or handler)."""
        return self.details["field"]


class SetupHookError(PlugwireError):
    """Raised when a provider's setup hook fails. Aborts the whole registration call."""

    def __init__(self, provider: str, reason: str, code: str = "SETUP_HOOK_FAILED", **kwargs: Any) -> None:
        super().__init__(
            code=code,
            message=f"Setup failed for provider '{provider}': {reason}",
            details={"provider": provider, "reason": reason},
            **kwargs,
        )

    @property
    def provider(self) -> str:
        """Name of the provider whose setup failed."""
        return self.details["provider"]


class SetupTimeoutError(SetupHookError):
    """Raised when a provider's setup hook exceeds the configured timeout."""

    def __init__(self, provider: str, timeout_ms: int, **kwargs: Any) -> None:
        super().__init__(
            provider=provider,
            reason=f"setup timed out after {timeout_ms}ms",
            code="SETUP_TIMEOUT",
            **kwargs,
        )
        self.details["timeout_ms"] = timeout_ms

    @property
    def timeout_ms(self) -> int:
        """The timeout value in milliseconds."""
        return self.details["timeout_ms"]


class HandlerRuntimeError(PlugwireError):
    """Describes an exception raised inside a wrapped endpoint handler."""

    def __init__(self, route: str, origin: str, error: Exception, **kwargs: Any) -> None:
        super().__init__(
            code="HANDLER_RUNTIME_ERROR",
            message=f"Unexpected error while accessing {route} from {origin}: {error}",
            details={
                "route": route,
                "origin": origin,
                "error_type": type(error).__name__,
                "error_message": str(error),
            },
            cause=error,
            **kwargs,
        )


class ErrorCodes:
    """All plugwire error codes as constants.

    Example:
        if error.code == ErrorCodes.SETUP_TIMEOUT:
            handle_slow_provider()
    """

    CONFIG_NOT_FOUND = "CONFIG_NOT_FOUND"
    CONFIG_INVALID = "CONFIG_INVALID"
    GENERAL_INVALID_INPUT = "GENERAL_INVALID_INPUT"
    SPEC_RESOLUTION_ERROR = "SPEC_RESOLUTION_ERROR"
    LOCATOR_ERROR = "LOCATOR_ERROR"
    VERSION_RESOLUTION_ERROR = "VERSION_RESOLUTION_ERROR"
    PROVIDER_NAME_INVALID = "PROVIDER_NAME_INVALID"
    ENDPOINT_INVALID = "ENDPOINT_INVALID"
    SETUP_HOOK_FAILED = "SETUP_HOOK_FAILED"
    SETUP_TIMEOUT = "SETUP_TIMEOUT"
    HANDLER_RUNTIME_ERROR = "HANDLER_RUNTIME_ERROR"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError("ErrorCodes is immutable")
