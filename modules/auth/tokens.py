"""
Locally issued JWTs for seeded accounts.

Seeded accounts never go through Supabase, so their sessions are signed
here with the process-wide ``JWT_SECRET``.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from modules.users.models import User
from .exceptions import ExpiredTokenError, InvalidTokenError
from .models import TokenClaims, TokenKind, TokenPair


ACCESS_TOKEN_TTL = timedelta(hours=24)
REFRESH_TOKEN_TTL = timedelta(days=30)


class TokenIssuer:
    """
    Mints and verifies HS256 token pairs.

    Access tokens carry ``{id, email, role}``. Refresh tokens carry the
    same claims plus ``type="refresh"``.
    """

    ALGORITHM = "HS256"

    def __init__(self, secret: str):
        if not secret:
            raise ValueError("JWT secret cannot be empty")
        self._secret = secret

    def mint(self, claims: TokenClaims, kind: TokenKind) -> str:
        """
        Sign a token of the given kind.

        Args:
            claims: Identity claims; any ``type`` on them is ignored
            kind: Access (24h) or refresh (30d)

        Returns:
            The encoded JWT
        """
        now = datetime.now(timezone.utc)
        ttl = REFRESH_TOKEN_TTL if kind is TokenKind.REFRESH else ACCESS_TOKEN_TTL

        payload = {
            "id": claims.id,
            "email": claims.email,
            "role": claims.role.value,
            "iat": now,
            "exp": now + ttl,
        }
        if kind is TokenKind.REFRESH:
            payload["type"] = TokenKind.REFRESH.value

        return jwt.encode(payload, self._secret, algorithm=self.ALGORITHM)

    def issue_pair(self, user: User) -> TokenPair:
        """Mint a fresh access/refresh pair for a user."""
        claims = TokenClaims(id=user.id, email=user.email, role=user.role)
        return TokenPair(
            access_token=self.mint(claims, TokenKind.ACCESS),
            refresh_token=self.mint(claims, TokenKind.REFRESH),
        )

    def verify(self, token: str) -> TokenClaims:
        """
        Verify signature and expiry and return the claims.

        Raises:
            ExpiredTokenError: If the token has expired
            InvalidTokenError: If the signature or payload is invalid
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self.ALGORITHM])
            return TokenClaims(**payload)
        except jwt.ExpiredSignatureError as e:
            raise ExpiredTokenError() from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e)) from e
        except (PydanticValidationError, TypeError) as e:
            raise InvalidTokenError("Malformed token payload") from e

    def decode_refresh(self, token: str) -> Optional[TokenClaims]:
        """
        Return the claims if ``token`` is a valid local refresh token.

        Returns:
            The claims, or None for anything this issuer did not mint as a
            refresh token (foreign signature, expired, access token,
            garbage)
        """
        try:
            claims = self.verify(token)
        except InvalidTokenError:
            return None
        if claims.type is not TokenKind.REFRESH:
            return None
        return claims
