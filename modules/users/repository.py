"""
User repository for database access.

Encapsulates all Supabase queries and row mapping for the ``users`` table.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from supabase import PostgrestAPIError

from shared.exceptions import ConflictError
from shared.repository import BaseRepository
from .exceptions import (
    ExternalIdAlreadyLinkedError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from .models import NewUser, User

USERS_TABLE = "users"

# Postgres SQLSTATE codes that have a domain meaning for this table
UNIQUE_VIOLATION = "23505"


def _unique_violation(err: PostgrestAPIError) -> ConflictError:
    """Pick the conflict matching the violated unique constraint."""
    text = f"{err.message or ''} {err.details or ''}"
    if "external_user_id" in text:
        return ExternalIdAlreadyLinkedError()
    return UserAlreadyExistsError()


class UserRepository(BaseRepository[User]):
    """
    Repository for user data access.

    All methods return ``User`` models mapped from database rows.

    Note: This repository does NOT decide who may authenticate.
    The auth service is responsible for those checks.
    """

    constraint_errors = {
        UNIQUE_VIOLATION: _unique_violation,
    }

    async def find_by_email(self, email: str) -> Optional[User]:
        """Get a user by exact email, or None."""
        result = (
            await self._db.table(USERS_TABLE)
            .select("*")
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    async def find_by_id(self, user_id: str) -> User:
        """
        Get a user by id.

        Raises:
            UserNotFoundError: If no row matches.
        """
        result = (
            await self._db.table(USERS_TABLE)
            .select("*")
            .eq("id", user_id)
            .limit(1)
            .execute()
        )
        if not result.data:
            raise UserNotFoundError(user_id)
        return self._map_to_user(result.data[0])

    async def insert(self, data: NewUser) -> User:
        """
        Insert a user row.

        Args:
            data: Column values; ``id`` and timestamps come from the database.

        Returns:
            The created user.

        Raises:
            UserAlreadyExistsError: If the email (or external id) is taken.
        """
        row = data.model_dump(mode="json", exclude_none=True)
        try:
            result = await self._db.table(USERS_TABLE).insert(row).execute()
        except PostgrestAPIError as err:
            raise self.translate_error(err) from err
        return self._map_to_user(result.data[0])

    async def mark_verified(self, email: str, external_user_id: str) -> User:
        """
        Flag a user as verified and link it to the identity provider.

        Raises:
            UserNotFoundError: If no row matches the email.
        """
        data: dict[str, Any] = {
            "external_user_id": external_user_id,
            "verified": True,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        try:
            result = (
                await self._db.table(USERS_TABLE)
                .update(data)
                .eq("email", email)
                .execute()
            )
        except PostgrestAPIError as err:
            raise self.translate_error(err) from err

        if not result.data:
            raise UserNotFoundError(email)
        return self._map_to_user(result.data[0])

    def _map_to_user(self, data: dict[str, Any]) -> User:
        """Map database row to User model."""
        return User.model_validate(data)
