"""
Authentication module interfaces.

The API layer depends on IAuthService, and the auth service depends on
IIdentityGateway, not on Supabase directly. This enables testing with
mocks and swapping the identity provider.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from modules.users.models import User
from .models import (
    LoginSession,
    OtpVerification,
    ProviderSession,
    RegisterRequest,
    TokenPair,
    VerifiedRegistration,
)


@runtime_checkable
class IIdentityGateway(Protocol):
    """
    Contract with the external identity provider.

    Implementations translate protocol calls only; they never read or
    write the user store.
    """

    async def request_otp(
        self, email: str, metadata: Optional[dict[str, Any]] = None
    ) -> None:
        """
        Ask the provider to deliver an OTP to ``email``.

        Args:
            email: Recipient address
            metadata: Optional user metadata stored by the provider

        Raises:
            GatewayError: If the provider rejects the request
        """
        ...

    async def verify_otp(self, email: str, code: str) -> OtpVerification:
        """
        Redeem an OTP.

        Returns:
            The provider user id and, when issued, the session

        Raises:
            InvalidOtpError: If the provider rejects the code
            GatewayError: On any other provider failure
        """
        ...

    async def refresh_session(self, refresh_token: str) -> Optional[ProviderSession]:
        """
        Exchange a provider refresh token for a new session.

        Returns:
            The new session, or None if the provider returned none

        Raises:
            GatewayError: If the token is expired, invalid or already used
        """
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    This protocol defines the contract that the auth module exposes
    to the API layer. Implementations must provide all these methods.
    """

    async def register(self, request: RegisterRequest) -> User:
        """Create an unverified user and send a registration OTP."""
        ...

    async def verify_registration(self, email: str, otp: str) -> VerifiedRegistration:
        """Redeem a registration OTP and mark the user verified."""
        ...

    async def login(self, email: str) -> User:
        """Start a login; sends a login OTP unless the account is seeded."""
        ...

    async def verify_login(self, email: str, otp: str) -> LoginSession:
        """Redeem a login OTP (or the seeded magic code) for a token pair."""
        ...

    async def resend_registration_otp(self, email: str) -> User:
        """Send a fresh registration OTP to an unverified user."""
        ...

    async def resend_login_otp(self, email: str) -> User:
        """Send a fresh login OTP to a verified user."""
        ...

    async def refresh_token(self, token: str) -> TokenPair:
        """Exchange a local or provider refresh token for a new pair."""
        ...

    async def validate_token(self, token: str) -> User:
        """
        Resolve a bearer access token to the stored user.

        Raises:
            AuthenticationError: If the token is missing, invalid or expired
        """
        ...

    async def get_user_by_id(self, user_id: str) -> User:
        """
        Get a user by their ID.

        Raises:
            UserNotFoundError: If no user matches
        """
        ...

    async def get_user_by_email(self, email: str) -> Optional[User]:
        """Get a user by email, or None."""
        ...
