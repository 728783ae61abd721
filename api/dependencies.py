"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Each module exposes its service through an interface,
and this file creates the concrete implementations.

Supabase clients are async and created on first use, so the container's
accessors are coroutines.
"""

from typing import TYPE_CHECKING

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService, IIdentityGateway
    from modules.auth.tokens import TokenIssuer
    from modules.users.interfaces import IUserRepository


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(self) -> None:
        self._user_repository: "IUserRepository | None" = None
        self._identity_gateway: "IIdentityGateway | None" = None
        self._token_issuer: "TokenIssuer | None" = None
        self._auth_service: "IAuthService | None" = None

    async def user_repository(self) -> "IUserRepository":
        """Get the user repository instance."""
        if self._user_repository is None:
            from modules.users.repository import UserRepository
            from shared.database import get_supabase_client
            self._user_repository = UserRepository(await get_supabase_client())
        return self._user_repository

    async def identity_gateway(self) -> "IIdentityGateway":
        """Get the Supabase Auth gateway instance."""
        if self._identity_gateway is None:
            from modules.auth.gateway import SupabaseIdentityGateway
            from shared.database import get_supabase_auth_client
            self._identity_gateway = SupabaseIdentityGateway(
                await get_supabase_auth_client()
            )
        return self._identity_gateway

    def token_issuer(self) -> "TokenIssuer":
        """Get the local token issuer instance."""
        if self._token_issuer is None:
            from modules.auth.tokens import TokenIssuer
            from shared.config import get_settings
            settings = get_settings()
            if not settings.jwt_secret:
                raise RuntimeError(
                    "Token signing secret missing. Set the JWT_SECRET environment variable."
                )
            self._token_issuer = TokenIssuer(settings.jwt_secret)
        return self._token_issuer

    async def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.models import AuthConfig
            from modules.auth.service import AuthService
            from shared.config import get_settings
            self._auth_service = AuthService(
                users=await self.user_repository(),
                gateway=await self.identity_gateway(),
                tokens=self.token_issuer(),
                config=AuthConfig.from_settings(get_settings()),
            )
        return self._auth_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._user_repository = None
        self._identity_gateway = None
        self._token_issuer = None
        self._auth_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


async def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return await get_container().auth()
