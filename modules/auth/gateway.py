"""
Supabase Auth gateway.

Thin protocol translator between the auth service and Supabase's OTP
endpoints. Provider errors are converted to GatewayError / InvalidOtpError;
nothing here reads the user store.
"""

import logging
from typing import Any, Optional

from supabase import AsyncClient, AuthApiError, AuthError

from .exceptions import GatewayError, InvalidOtpError
from .interfaces import IIdentityGateway
from .models import OtpVerification, ProviderSession

logger = logging.getLogger(__name__)


class SupabaseIdentityGateway(IIdentityGateway):
    """
    IIdentityGateway backed by Supabase Auth email OTPs.

    Uses an anon-key client that neither persists nor auto-refreshes
    sessions; sessions are relayed to the caller as-is.
    """

    def __init__(self, client: AsyncClient):
        self._client = client

    async def request_otp(
        self, email: str, metadata: Optional[dict[str, Any]] = None
    ) -> None:
        credentials: dict[str, Any] = {"email": email}
        if metadata:
            credentials["options"] = {"data": metadata}

        try:
            await self._client.auth.sign_in_with_otp(credentials)
        except AuthError as e:
            logger.error("Supabase rejected OTP request: %s", e.message)
            raise _gateway_error(e) from e

    async def verify_otp(self, email: str, code: str) -> OtpVerification:
        try:
            response = await self._client.auth.verify_otp(
                {"email": email, "token": code, "type": "email"}
            )
        except AuthApiError as e:
            # 4xx from the verify endpoint means the code itself was refused
            if e.status is not None and e.status < 500 and e.status != 429:
                raise InvalidOtpError() from e
            raise _gateway_error(e) from e
        except AuthError as e:
            raise _gateway_error(e) from e

        if response is None or response.user is None:
            raise InvalidOtpError()

        return OtpVerification(
            external_user_id=response.user.id,
            session=_to_provider_session(response.session),
        )

    async def refresh_session(self, refresh_token: str) -> Optional[ProviderSession]:
        try:
            response = await self._client.auth.refresh_session(refresh_token)
        except AuthError as e:
            logger.error("Error refreshing session: %s", e.message)
            raise _gateway_error(e) from e

        if response is None:
            return None
        return _to_provider_session(response.session)


def _to_provider_session(session: Any) -> Optional[ProviderSession]:
    """Copy the token fields out of a supabase Session."""
    if session is None:
        return None
    return ProviderSession(
        access_token=getattr(session, "access_token", None) or None,
        refresh_token=getattr(session, "refresh_token", None) or None,
    )


def _gateway_error(error: AuthError) -> GatewayError:
    return GatewayError(
        error.message,
        provider_code=getattr(error, "code", None),
        status=getattr(error, "status", None),
    )
