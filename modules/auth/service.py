"""
Authentication service implementation.

Runs the OTP registration/login workflows and the token refresh pipeline,
branching between seeded accounts (magic code, locally signed tokens) and
provider-managed accounts (Supabase OTPs and sessions).
"""

import logging
from contextlib import contextmanager
from datetime import date, datetime
from typing import Iterator, Optional

import jwt

from modules.users.exceptions import UserAlreadyExistsError, UserNotFoundError
from modules.users.interfaces import IUserRepository
from modules.users.models import AccountKind, NewUser, User, UserRole, classify_account
from shared.exceptions import (
    ExternalServiceError,
    InternalError,
    TesseraError,
    ValidationError,
)

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
from .interfaces import IAuthService, IIdentityGateway
from .models import (
    AuthConfig,
    LoginSession,
    RegisterRequest,
    TokenClaims,
    TokenKind,
    TokenPair,
    VerifiedRegistration,
)
from .tokens import TokenIssuer

logger = logging.getLogger(__name__)

# The only code a seeded account accepts at login
SEEDED_MAGIC_CODE = "000000"

# Provider refresh failures that mean "log in again"; matched case-insensitively
_EXPIRED_SESSION_MARKERS = ("token expired", "invalid refresh token", "already used")


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Every workflow loads the user fresh, classifies it once, and branches on
    the resulting AccountKind. Domain errors propagate unchanged; storage and
    provider failures are wrapped into InternalError at the workflow boundary.
    """

    def __init__(
        self,
        users: IUserRepository,
        gateway: IIdentityGateway,
        tokens: TokenIssuer,
        config: AuthConfig,
    ):
        self._users = users
        self._gateway = gateway
        self._tokens = tokens
        self._config = config

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    async def register(self, request: RegisterRequest) -> User:
        """
        Create an unverified user and send a registration OTP.

        The role is attached as provider metadata so the Supabase user
        carries it from the start.
        """
        with _workflow_boundary("register user"):
            if await self._users.find_by_email(request.email) is not None:
                raise UserAlreadyExistsError(request.email)

            user = await self._users.insert(
                NewUser(
                    email=request.email,
                    first_name=request.first_name,
                    last_name=request.last_name,
                    role=request.role,
                    date_of_birth=_parse_date(request.date_of_birth),
                    country=request.country,
                )
            )
            logger.info("Requesting registration OTP for user %s", user.id)
            await self._gateway.request_otp(
                request.email, {"role": request.role.value}
            )
            return user

    async def verify_registration(self, email: str, otp: str) -> VerifiedRegistration:
        with _workflow_boundary("verify registration"):
            verification = await self._gateway.verify_otp(email, otp)
            session = verification.session
            if session is None or not session.access_token or not session.refresh_token:
                raise InvalidOtpError()

            await self._bootstrap_superadmin(email)

            user = await self._users.mark_verified(email, verification.external_user_id)
            return VerifiedRegistration(
                **user.model_dump(),
                access_token=session.access_token,
                refresh_token=session.refresh_token,
            )

    async def resend_registration_otp(self, email: str) -> User:
        with _workflow_boundary("resend registration OTP"):
            user = await self._require_user(email)
            if user.verified:
                raise AlreadyVerifiedError()

            await self._gateway.request_otp(email, {"role": user.role.value})
            return user

    async def _bootstrap_superadmin(self, email: str) -> None:
        """Create the configured superadmin row on its first verification."""
        if not self._config.superadmin_email or email != self._config.superadmin_email:
            return
        if await self._users.find_by_email(email) is not None:
            return

        try:
            await self._users.insert(
                NewUser(
                    email=email,
                    first_name="Admin",
                    last_name="User",
                    role=UserRole.ADMIN,
                    verified=True,
                )
            )
            logger.info("Bootstrapped superadmin account")
        except UserAlreadyExistsError:
            # a concurrent verification created it first
            pass

    # -------------------------------------------------------------------------
    # Login
    # -------------------------------------------------------------------------

    async def login(self, email: str) -> User:
        """
        Start a login.

        Seeded accounts skip OTP delivery entirely. Unverified provider
        accounts are sent a registration OTP and refused, which nudges them
        back into the registration flow.
        """
        with _workflow_boundary("login user"):
            user = await self._require_user(email)
            kind = classify_account(user)

            if kind is AccountKind.SEEDED:
                logger.info("Seeded account %s: skipping OTP delivery", user.id)
                return user

            if not user.verified:
                await self._gateway.request_otp(email, {"role": user.role.value})
                raise RegistrationIncompleteError()

            await self._gateway.request_otp(email)
            return user

    async def verify_login(self, email: str, otp: str) -> LoginSession:
        with _workflow_boundary("verify login"):
            user = await self._require_user(email)
            kind = classify_account(user)

            if kind is AccountKind.SEEDED:
                if otp != SEEDED_MAGIC_CODE:
                    raise InvalidMagicCodeError()
                pair = self._tokens.issue_pair(user)
                logger.info("Seeded account %s logged in", user.id)
                return LoginSession(
                    access_token=pair.access_token,
                    refresh_token=pair.refresh_token,
                    user=user,
                )

            verification = await self._gateway.verify_otp(email, otp)
            session = verification.session
            if session is None or not session.access_token or not session.refresh_token:
                raise InvalidOtpError()

            return LoginSession(
                access_token=session.access_token,
                refresh_token=session.refresh_token,
                user=user,
            )

    async def resend_login_otp(self, email: str) -> User:
        with _workflow_boundary("resend login OTP"):
            user = await self._require_user(email)
            if not user.verified:
                raise UserNotVerifiedError()

            await self._gateway.request_otp(email)
            return user

    # -------------------------------------------------------------------------
    # Token refresh
    # -------------------------------------------------------------------------

    async def refresh_token(self, token: str) -> TokenPair:
        """
        Exchange a refresh token for a new pair.

        Stage one asks the local issuer whether it minted the token. Only
        tokens it does not recognise reach stage two, the provider.
        """
        logger.info("Refresh token request received")

        claims = self._tokens.decode_refresh(token)
        if claims is not None:
            with _workflow_boundary("refresh session"):
                return await self._refresh_seeded(claims)

        logger.info("Not a locally issued refresh token, trying Supabase refresh")
        return await self._refresh_with_provider(token)

    async def _refresh_seeded(self, claims: TokenClaims) -> TokenPair:
        user = await self._users.find_by_email(claims.email)
        if user is None:
            raise InvalidRefreshTokenError("User not found")
        if classify_account(user) is not AccountKind.SEEDED:
            raise InvalidRefreshTokenError("Not a seeded account")

        logger.info("Token refresh successful for seeded account %s", user.id)
        return self._tokens.issue_pair(user)

    async def _refresh_with_provider(self, token: str) -> TokenPair:
        try:
            session = await self._gateway.refresh_session(token)
        except GatewayError as e:
            if _is_expired_session(e.message):
                raise SessionExpiredError() from e
            logger.error("Error refreshing token: %s", e.message)
            raise InternalError("Failed to refresh session. Please try again.") from e
        except Exception as e:
            logger.error("Error refreshing token: %s", e)
            raise InternalError("Failed to refresh session. Please try again.") from e

        if session is None:
            logger.error("No session returned after refresh")
            raise InvalidRefreshTokenError()
        if not session.access_token or not session.refresh_token:
            logger.error("Session missing required tokens")
            raise InvalidRefreshTokenError()

        logger.info("Token refresh successful")
        return TokenPair(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
        )

    # -------------------------------------------------------------------------
    # Current user
    # -------------------------------------------------------------------------

    async def validate_token(self, token: str) -> User:
        """
        Resolve a bearer token to the stored user.

        Locally issued access tokens are tried first, then Supabase access
        tokens. Refresh tokens are never accepted as bearer credentials.
        """
        if not token:
            raise MissingTokenError()

        email = self._local_access_email(token) or self._provider_access_email(token)

        user = await self._users.find_by_email(email)
        if user is None:
            raise InvalidTokenError("User not found")
        return user

    def _local_access_email(self, token: str) -> Optional[str]:
        try:
            claims = self._tokens.verify(token)
        except ExpiredTokenError:
            raise
        except InvalidTokenError:
            return None
        if claims.type is TokenKind.REFRESH:
            raise InvalidTokenError("Refresh tokens cannot be used for authentication")
        return claims.email

    def _provider_access_email(self, token: str) -> str:
        if not self._config.provider_jwt_secret:
            raise InvalidTokenError()
        try:
            payload = jwt.decode(
                token,
                self._config.provider_jwt_secret,
                algorithms=["HS256"],
                audience="authenticated",
            )
        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e))

        email = payload.get("email")
        if not email:
            raise InvalidTokenError("Token carries no email")
        return email

    async def get_user_by_id(self, user_id: str) -> User:
        return await self._users.find_by_id(user_id)

    async def get_user_by_email(self, email: str) -> Optional[User]:
        return await self._users.find_by_email(email)

    async def _require_user(self, email: str) -> User:
        user = await self._users.find_by_email(email)
        if user is None:
            raise UserNotFoundError(email)
        return user


@contextmanager
def _workflow_boundary(action: str) -> Iterator[None]:
    """
    Re-raise domain errors, wrap everything else into InternalError.

    Provider and storage failures keep their message for diagnostics but
    never leave the service as their original type.
    """
    try:
        yield
    except ExternalServiceError as e:
        logger.error("Failed to %s: %s", action, e.message)
        raise InternalError(f"Failed to {action}: {e.message}") from e
    except TesseraError as e:
        logger.info("Could not %s: %s", action, e.message)
        raise
    except Exception as e:
        logger.error("Failed to %s: %s", action, e)
        raise InternalError(f"Failed to {action}: {e}") from e


def _parse_date(value: Optional[str]) -> Optional[date]:
    """Parse an ISO-8601 date or datetime string."""
    if value is None:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        raise ValidationError("Invalid date format")


def _is_expired_session(message: str) -> bool:
    lowered = (message or "").lower()
    return any(marker in lowered for marker in _EXPIRED_SESSION_MARKERS)

