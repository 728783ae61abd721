"""
Authentication module.

Handles OTP registration and login, locally issued tokens for seeded
accounts, and session refresh through Supabase Auth.

Public API:
- IAuthService: Interface for auth workflows
- IIdentityGateway: Interface to the identity provider
- TokenIssuer: Local JWT minting/verification
- Auth models: TokenPair, LoginSession, VerifiedRegistration, ...
- Auth exceptions: InvalidTokenError, InvalidOtpError, SessionExpiredError, ...
"""

from .interfaces import IAuthService, IIdentityGateway
from .models import (
    AuthConfig,
    LoginSession,
    OtpVerification,
    ProviderSession,
    RegisterRequest,
    TokenClaims,
    TokenKind,
    TokenPair,
    VerifiedRegistration,
)
from .tokens import TokenIssuer
from .exceptions import (
    AlreadyVerifiedError,
    ExpiredTokenError,
    GatewayError,
    InvalidMagicCodeError,
    InvalidOtpError,
    InvalidRefreshTokenError,
    InvalidTokenError,
    MissingTokenError,
    RegistrationIncompleteError,
    SessionExpiredError,
    UserNotVerifiedError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "IIdentityGateway",
    # Models
    "AuthConfig",
    "LoginSession",
    "OtpVerification",
    "ProviderSession",
    "RegisterRequest",
    "TokenClaims",
    "TokenKind",
    "TokenPair",
    "VerifiedRegistration",
    # Tokens
    "TokenIssuer",
    # Exceptions
    "AlreadyVerifiedError",
    "ExpiredTokenError",
    "GatewayError",
    "InvalidMagicCodeError",
    "InvalidOtpError",
    "InvalidRefreshTokenError",
    "InvalidTokenError",
    "MissingTokenError",
    "RegistrationIncompleteError",
    "SessionExpiredError",
    "UserNotVerifiedError",
]
