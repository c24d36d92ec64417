"""Unified exception hierarchy for nexuscore.

All errors raised by the package inherit from NexusError. This module provides:
- Base exception hierarchy with stable error codes
- ErrorRegistry for mapping codes back to exception types

Usage:
    from nexuscore.exceptions import (
        NexusError,
        ConfigurationError,
        PermissionDeniedError,
    )

Applications may define thin subclasses for their own errors:
    @register_error("TENANT_ERROR")
    class TenantError(NexusError):
        code = "TENANT_ERROR"
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar, cast

__all__ = [
    "NexusError",
    "ConfigurationError",
    "SecurityError",
    "PermissionDeniedError",
    "ErrorRegistry",
    "error_registry",
    "register_error",
]


# ---- Exception Hierarchy ----------------------------------------------------


class NexusError(Exception):
    """Base exception for nexuscore.

    Attributes:
        code: Stable error code string (e.g. "PERMISSION_DENIED").
        message: Human-readable error description.
        details: Additional context as keyword arguments.
    """

    code: str = "INTERNAL_ERROR"
    message: str = "An internal error occurred"

    def __init__(self, message: str | None = None, code: str | None = None, **kwargs: Any) -> None:
        self.message = message or self.message
        self.code = code or self.code
        self.details = kwargs
        super().__init__(self.message)


class ConfigurationError(NexusError):
    """Invalid or inconsistent configuration (role table, menu tree, settings)."""

    code: str = "CONFIGURATION_ERROR"
    message: str = "Invalid configuration"


class SecurityError(NexusError):
    """Authorization failure."""

    code: str = "SECURITY_ERROR"


class PermissionDeniedError(SecurityError):
    """A role lacks the permission (or the role) a page or action requires."""

    code: str = "PERMISSION_DENIED"
    message: str = "Access denied"


# ---- Error Registry ---------------------------------------------------------

_E = TypeVar("_E", bound=type[NexusError])


class ErrorRegistry:
    """Registry for mapping stable error codes to exception types."""

    def __init__(self) -> None:
        self._errors: dict[str, type[NexusError]] = {}

    def register(self, code: str, error_cls: type[NexusError]) -> None:
        self._errors[code] = error_cls

    def get(self, code: str) -> type[NexusError] | None:
        return self._errors.get(code)

    def all(self) -> dict[str, type[NexusError]]:
        return dict(self._errors)


error_registry = ErrorRegistry()


def register_error(code: str) -> Callable[[_E], _E]:
    """Decorator to register a custom error type.

    Usage:
        @register_error("MY_CUSTOM_ERROR")
        class MyCustomError(NexusError):
            code = "MY_CUSTOM_ERROR"
    """

    def decorator(cls: _E) -> _E:
        error_registry.register(code, cls)
        return cls

    return cast(Callable[[_E], _E], decorator)


error_registry.register("INTERNAL_ERROR", NexusError)
error_registry.register("CONFIGURATION_ERROR", ConfigurationError)
error_registry.register("SECURITY_ERROR", SecurityError)
error_registry.register("PERMISSION_DENIED", PermissionDeniedError)
