"""
Shared infrastructure for the Tessera accounts service.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- repository: Base repository with storage error translation

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import get_supabase_auth_client, get_supabase_client, reset_client_cache
from .exceptions import (
    TesseraError,
    NotFoundError,
    ValidationError,
    ConflictError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
    InternalError,
)

__all__ = [
    "Settings",
    "get_settings",
    "get_supabase_auth_client",
    "get_supabase_client",
    "reset_client_cache",
    "TesseraError",
    "NotFoundError",
    "ValidationError",
    "ConflictError",
    "AuthenticationError",
    "AuthorizationError",
    "ExternalServiceError",
    "InternalError",
]
