"""
Base exception classes for the Tessera accounts service.

Each module should define its own exceptions that inherit from these bases.
The API layer maps the base kinds onto HTTP statuses, so a module exception
only has to pick the right parent.
"""

from typing import Optional, Any


class TesseraError(Exception):
    """
    Base exception for all Tessera errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


class NotFoundError(TesseraError):
    """Resource not found."""

    pass


class ValidationError(TesseraError):
    """Input validation failed."""

    pass


class ConflictError(TesseraError):
    """Resource already exists or is already in the requested state."""

    pass


class AuthenticationError(TesseraError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(TesseraError):
    """Authorization failed (insufficient permissions)."""

    pass


class ExternalServiceError(TesseraError):
    """Error communicating with an external service."""

    def __init__(
        self,
        message: str,
        service: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, code, details)
        self.service = service
        self.details["service"] = service


class InternalError(TesseraError):
    """
    Unexpected failure inside a workflow.

    The message keeps the original error text for diagnostics; the
    underlying exception is chained via ``__cause__``.
    """

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, code="INTERNAL_ERROR", details=details)
