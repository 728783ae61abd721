"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to the API layer through the interface.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from modules.users.models import User, UserRole
from shared.config import Settings


class TokenKind(str, Enum):
    """Kinds of locally issued tokens."""

    ACCESS = "access"
    REFRESH = "refresh"


class TokenClaims(BaseModel):
    """
    Identity claims carried by locally issued tokens.

    Refresh tokens additionally carry ``type="refresh"``; access tokens
    carry no type claim.
    """

    id: str = Field(..., description="User ID")
    email: str = Field(..., description="User's email")
    role: UserRole = Field(default=UserRole.USER, description="User role")
    type: Optional[TokenKind] = Field(None, description="Token type marker")

    model_config = {"frozen": True, "extra": "ignore"}


class TokenPair(BaseModel):
    """An access/refresh token pair as returned to clients."""

    access_token: str
    refresh_token: str


class ProviderSession(BaseModel):
    """
    Session returned by Supabase Auth.

    Either token may be missing from a malformed provider response;
    callers must check before relaying.
    """

    access_token: Optional[str] = None
    refresh_token: Optional[str] = None


class OtpVerification(BaseModel):
    """Result of redeeming an OTP with the identity provider."""

    external_user_id: str = Field(..., description="Supabase user ID")
    session: Optional[ProviderSession] = None


class AuthConfig(BaseModel):
    """
    Read-only configuration injected into the auth service.

    Built once from Settings; workflows never read the environment.
    """

    superadmin_email: Optional[str] = None
    provider_jwt_secret: str = ""

    model_config = {"frozen": True}

    @classmethod
    def from_settings(cls, settings: Settings) -> "AuthConfig":
        return cls(
            superadmin_email=settings.superadmin_email or None,
            provider_jwt_secret=settings.supabase_jwt_secret,
        )


# -------------------------------------------------------------------------
# Request payloads
# -------------------------------------------------------------------------


class RegisterRequest(BaseModel):
    """Body of a registration request."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    email: str
    username: Optional[str] = None
    first_name: str
    last_name: str
    role: UserRole = UserRole.USER
    date_of_birth: Optional[str] = Field(
        None, description="ISO-8601 date; validated by the service"
    )
    country: Optional[str] = None


class EmailRequest(BaseModel):
    """Body carrying only an email (login and OTP resends)."""

    email: str


class VerifyOtpRequest(BaseModel):
    """Body of an OTP verification request."""

    email: str
    otp: str


class RefreshTokenRequest(BaseModel):
    """Body of a token refresh request."""

    refresh_token: str = Field(..., min_length=1)


# -------------------------------------------------------------------------
# Workflow results
# -------------------------------------------------------------------------


class VerifiedRegistration(User):
    """The verified user row plus the provider session tokens."""

    access_token: str = Field(..., alias="access_token")
    refresh_token: str = Field(..., alias="refresh_token")


class LoginSession(BaseModel):
    """Tokens issued by a successful login verification."""

    access_token: str
    refresh_token: str
    user: User
