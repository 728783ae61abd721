"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
an in-memory user store, a mocked identity gateway and a wired AuthService.
"""

from datetime import datetime, timezone, timedelta
from typing import Optional
from unittest.mock import AsyncMock
from uuid import uuid4

import jwt  # PyJWT
import pytest

from api.dependencies import reset_container
from modules.auth.interfaces import IIdentityGateway
from modules.auth.models import AuthConfig, OtpVerification, ProviderSession
from modules.auth.service import AuthService
from modules.auth.tokens import TokenIssuer
from modules.users.exceptions import UserAlreadyExistsError, UserNotFoundError
from modules.users.models import NewUser, User, UserRole, new_seeded_external_id
from shared.config import get_settings


# Test secrets (only for testing)
TEST_JWT_SECRET = "test-local-signing-secret-0123456789abcdef"
TEST_PROVIDER_JWT_SECRET = "test-supabase-jwt-secret-0123456789abcdef"
SUPERADMIN_EMAIL = "root@tessera.test"


class InMemoryUserRepository:
    """IUserRepository over a dict, enforcing email uniqueness like the table."""

    def __init__(self) -> None:
        self.rows: dict[str, User] = {}
        self.inserts: list[NewUser] = []

    async def find_by_email(self, email: str) -> Optional[User]:
        return self.rows.get(email)

    async def find_by_id(self, user_id: str) -> User:
        for user in self.rows.values():
            if user.id == user_id:
                return user
        raise UserNotFoundError(user_id)

    async def insert(self, data: NewUser) -> User:
        self.inserts.append(data)
        if data.email in self.rows:
            raise UserAlreadyExistsError(data.email)
        user = User(id=str(uuid4()), **data.model_dump())
        self.rows[data.email] = user
        return user

    async def mark_verified(self, email: str, external_user_id: str) -> User:
        if email not in self.rows:
            raise UserNotFoundError(email)
        user = self.rows[email].model_copy(
            update={"verified": True, "external_user_id": external_user_id}
        )
        self.rows[email] = user
        return user

    def add(
        self,
        email: str,
        verified: bool = True,
        external_user_id: Optional[str] = None,
        role: UserRole = UserRole.USER,
    ) -> User:
        """Store a row directly, bypassing insert bookkeeping."""
        user = User(
            id=str(uuid4()),
            email=email,
            first_name="Test",
            last_name="User",
            role=role,
            verified=verified,
            external_user_id=external_user_id,
        )
        self.rows[email] = user
        return user


def create_provider_token(
    email: str = "test@example.com",
    user_id: str = "supabase-user-123",
    expired: bool = False,
    secret: str = TEST_PROVIDER_JWT_SECRET,
) -> str:
    """Create a Supabase-style access token."""
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)
    payload = {
        "sub": user_id,
        "email": email,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings and the service container around each test."""
    get_settings.cache_clear()
    reset_container()
    yield
    get_settings.cache_clear()
    reset_container()


@pytest.fixture
def user_store() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def provider_session() -> ProviderSession:
    return ProviderSession(
        access_token="supabase-access-token",
        refresh_token="supabase-refresh-token",
    )


@pytest.fixture
def gateway(provider_session: ProviderSession) -> AsyncMock:
    """Identity gateway mock; OTP verification succeeds by default."""
    mock = AsyncMock(spec=IIdentityGateway)
    mock.request_otp.return_value = None
    mock.verify_otp.return_value = OtpVerification(
        external_user_id="supabase-user-123",
        session=provider_session,
    )
    mock.refresh_session.return_value = ProviderSession(
        access_token="new-supabase-access-token",
        refresh_token="new-supabase-refresh-token",
    )
    return mock


@pytest.fixture
def token_issuer() -> TokenIssuer:
    return TokenIssuer(TEST_JWT_SECRET)


@pytest.fixture
def auth_config() -> AuthConfig:
    return AuthConfig(
        superadmin_email=SUPERADMIN_EMAIL,
        provider_jwt_secret=TEST_PROVIDER_JWT_SECRET,
    )


@pytest.fixture
def service(user_store, gateway, token_issuer, auth_config) -> AuthService:
    return AuthService(
        users=user_store,
        gateway=gateway,
        tokens=token_issuer,
        config=auth_config,
    )


@pytest.fixture
def seeded_user(user_store: InMemoryUserRepository) -> User:
    return user_store.add("seed@x.com", external_user_id=new_seeded_external_id())


@pytest.fixture
def provider_user(user_store: InMemoryUserRepository) -> User:
    return user_store.add("member@x.com", external_user_id="supabase-user-456")


@pytest.fixture
def unverified_user(user_store: InMemoryUserRepository) -> User:
    return user_store.add("pending@x.com", verified=False, role=UserRole.ORGANIZER)


@pytest.fixture
def provider_token():
    """Factory for Supabase-style access tokens."""
    return create_provider_token


@pytest.fixture
def sign_local():
    """Factory signing an arbitrary payload with the local test secret."""

    def _sign(payload: dict, secret: str = TEST_JWT_SECRET) -> str:
        return jwt.encode(payload, secret, algorithm="HS256")

    return _sign


@pytest.fixture
def api_client(service):
    """TestClient whose routes run against the wired in-memory service."""
    from fastapi.testclient import TestClient

    from api.app import create_app
    from api.dependencies import get_auth_service

    app = create_app()
    app.dependency_overrides[get_auth_service] = lambda: service
    return TestClient(app, raise_server_exceptions=False)
