"""
Exception hierarchy for the concierge backend.

Provides layered exception structure for domain-specific errors.
All exceptions include context for observability and debugging.

Dependencies: None (pure domain layer)
System role: Centralized exception handling across the application
"""

from typing import Any


class ConciergeException(Exception):
    """Base exception for all concierge application errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize base exception with message and optional context.

        Args:
            message: Human-readable error message
            details: Optional dictionary of additional context for debugging
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation including details."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ValidationError(ConciergeException):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ConfigurationError(ConciergeException):
    """Raised when a component is constructed without required settings."""

    def __init__(self, message: str, setting: str | None = None) -> None:
        super().__init__(message, {"setting": setting} if setting else None)


class SessionNotFoundError(ConciergeException):
    """Raised when a session cannot be found."""

    def __init__(self, session_id: str, details: dict[str, Any] | None = None) -> None:
        """
        Initialize session not found error.

        Args:
            session_id: ID of the missing session
            details: Additional context
        """
        details = details or {}
        details["session_id"] = session_id
        super().__init__(f"Session not found: {session_id}", details)


class CMSError(ConciergeException):
    """Raised when a CMS query fails."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        details = details or {}
        if status_code is not None:
            details["status_code"] = status_code
        self.status_code = status_code
        super().__init__(message, details)


class VectorStoreError(ConciergeException):
    """Raised when vector store operations fail."""

    def __init__(
        self,
        message: str,
        operation: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """
        Initialize vector store error.

        Args:
            message: Error message
            operation: Operation that failed (upsert, query, delete)
            details: Additional context
        """
        details = details or {}
        if operation:
            details["operation"] = operation
        super().__init__(message, details)


class KeyValueStoreError(ConciergeException):
    """Raised when the key-value store cannot be reached or configured."""


class ProviderError(ConciergeException):
    """Raised when a completion provider call fails or returns an unusable response."""

    def __init__(
        self,
        provider: str,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        """
        Initialize provider error.

        Args:
            provider: Declared name of the provider that failed
            message: Error message
            status_code: Upstream HTTP status, when the failure carried one
            body: Upstream response body or raw payload
        """
        self.provider = provider
        self.status_code = status_code
        self.body = body
        super().__init__(
            f"{provider} returned an error: {message}",
            {"provider": provider, "status_code": status_code, "body": body},
        )


class ProviderConfigurationError(ConfigurationError):
    """Raised when a completion provider is missing its credentials."""


class RecordkeepingError(ConciergeException):
    """Raised when the external recordkeeping system rejects a request."""
