"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from typing import Optional

from shared.exceptions import (
    AuthenticationError,
    ConflictError,
    ExternalServiceError,
    ValidationError,
)


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(InvalidTokenError):
    """Raised when a JWT token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message)
        self.code = "TOKEN_EXPIRED"


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class InvalidOtpError(ValidationError):
    """Raised when the identity provider rejects an OTP."""

    def __init__(self, message: str = "Invalid or expired OTP"):
        super().__init__(message, code="INVALID_OTP")


class InvalidMagicCodeError(AuthenticationError):
    """Raised when a seeded account presents anything but the magic code."""

    def __init__(self):
        super().__init__("Invalid OTP for seeded account", code="INVALID_OTP")


class RegistrationIncompleteError(AuthenticationError):
    """Raised when an unverified user tries to log in."""

    def __init__(self):
        super().__init__(
            "Please complete your registration by verifying your email. "
            "A new verification code has been sent.",
            code="REGISTRATION_INCOMPLETE",
        )


class UserNotVerifiedError(AuthenticationError):
    """Raised when a login OTP is requested for an unverified user."""

    def __init__(self):
        super().__init__("User not verified", code="USER_NOT_VERIFIED")


class AlreadyVerifiedError(ConflictError):
    """Raised when a registration OTP is requested for a verified user."""

    def __init__(self):
        super().__init__("User is already verified", code="ALREADY_VERIFIED")


class InvalidRefreshTokenError(AuthenticationError):
    """Raised when a refresh token cannot be redeemed."""

    def __init__(self, message: str = "Invalid refresh token"):
        super().__init__(message, code="INVALID_REFRESH_TOKEN")


class SessionExpiredError(AuthenticationError):
    """Raised when the provider reports the session as expired or used."""

    def __init__(self):
        super().__init__(
            "Session expired. Please log in again.",
            code="SESSION_EXPIRED",
        )


class GatewayError(ExternalServiceError):
    """Raised when Supabase Auth rejects or fails a request."""

    def __init__(
        self,
        message: str,
        provider_code: Optional[str] = None,
        status: Optional[int] = None,
    ):
        super().__init__(
            message,
            service="supabase",
            code="GATEWAY_ERROR",
            details={"provider_code": provider_code, "status": status},
        )
        self.provider_code = provider_code
        self.status = status
