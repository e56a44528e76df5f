"""Custom exceptions for windowed list operations.

This module defines a hierarchy of exceptions for the failure modes that
must reach the caller. Out-of-range navigation and dispatch of unregistered
commands are boundary conditions and never raise.
"""


class WindowedListError(Exception):
    """Base exception for all windowed list errors."""


class InvariantViolationError(WindowedListError):
    """Raised when a viewport transition produces an inconsistent state."""

    def __init__(self, message: str, violations: list[str] | None = None) -> None:
        super().__init__(message)
        self.violations = violations or []


class RouterUsageError(WindowedListError):
    """Raised when the command router is used outside an active focus context."""


class ConfigError(WindowedListError):
    """Raised when configuration is invalid or cannot be loaded."""
