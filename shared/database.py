"""
Supabase client factory.

Two async clients are kept per process:
- a service-role client for the ``users`` table (bypasses RLS)
- an anon-key client for Supabase Auth OTP calls

Auth calls sign a session into the client that makes them, so they never
run on the data client.
"""

from typing import Optional
from supabase import AsyncClient, acreate_client
from supabase.lib.client_options import AsyncClientOptions

from .config import get_settings

# Module-level client cache
_service_client: Optional[AsyncClient] = None
_auth_client: Optional[AsyncClient] = None


async def get_supabase_client() -> AsyncClient:
    """
    Get Supabase client with service role (bypasses RLS).

    Use this for backend operations on the user table.

    Returns:
        Async Supabase client configured with the service role key
    """
    global _service_client

    if _service_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_service_role_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables."
            )
        _service_client = await acreate_client(
            settings.supabase_url,
            settings.supabase_service_role_key,
        )

    return _service_client


async def get_supabase_auth_client() -> AsyncClient:
    """
    Get Supabase client used for OTP issuance, verification and refresh.

    Sessions are neither persisted nor refreshed in the background; the
    service relays them to the caller instead.

    Returns:
        Async Supabase client configured with the anon key
    """
    global _auth_client

    if _auth_client is None:
        settings = get_settings()
        if not settings.supabase_url or not settings.supabase_anon_key:
            raise RuntimeError(
                "Supabase configuration missing. "
                "Set SUPABASE_URL and SUPABASE_ANON_KEY environment variables."
            )
        _auth_client = await acreate_client(
            settings.supabase_url,
            settings.supabase_anon_key,
            options=AsyncClientOptions(
                auto_refresh_token=False,
                persist_session=False,
            ),
        )

    return _auth_client


def reset_client_cache() -> None:
    """
    Reset the cached database clients.

    Useful for testing or when configuration changes.
    """
    global _service_client, _auth_client
    _service_client = None
    _auth_client = None
