"""Custom exceptions for the Vault provider.

This module defines the errors raised by resources, data sources and the
backend client so callers can tell local validation failures apart from
failures reported by Vault.
"""

from typing import Optional


class ProviderError(Exception):
    """Base exception for provider errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        """Initialize provider error.

        Args:
            message: Error message
            details: Additional error details
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return error string representation."""
        if self.details:
            return f"{self.message} (details: {self.details})"
        return self.message


class ValidationError(ProviderError):
    """Raised when a configuration fails local validation.

    No backend call has been made when this is raised.
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None,
    ):
        super().__init__(message, details)


class BackendError(ProviderError):
    """Raised when a write, read, delete or list against Vault fails."""

    def __init__(
        self,
        message: str,
        operation: Optional[str] = None,
        path: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        details = dict(details or {})
        if operation is not None:
            details.setdefault("operation", operation)
        if path is not None:
            details.setdefault("path", path)
        super().__init__(message, details)
        self.operation = operation
        self.path = path


class VaultAuthenticationError(BackendError):
    """Raised when authentication to Vault fails."""

    def __init__(
        self,
        message: str = "Vault authentication failed",
        details: Optional[dict] = None,
    ):
        super().__init__(message, operation="login", details=details)


class ResourceNotFoundError(ProviderError):
    """Raised when importing an identifier that does not exist in Vault."""

    def __init__(
        self,
        type_name: str,
        identifier: str,
        message: Optional[str] = None,
    ):
        full_message = (
            message
            or f"Cannot import non-existent remote object {type_name} '{identifier}'"
        )
        super().__init__(full_message)
        self.type_name = type_name
        self.identifier = identifier
