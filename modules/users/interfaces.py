"""
Users module interface.

The auth module depends on IUserRepository, not the Supabase-backed
implementation. Tests substitute an in-memory store.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import NewUser, User


@runtime_checkable
class IUserRepository(Protocol):
    """
    Interface for user record storage.

    No other component touches the ``users`` table directly.
    """

    async def find_by_email(self, email: str) -> Optional[User]:
        """
        Look up a user by exact email.

        Returns:
            The user, or None if no row matches
        """
        ...

    async def find_by_id(self, user_id: str) -> User:
        """
        Look up a user by id.

        Raises:
            UserNotFoundError: If no row matches
        """
        ...

    async def insert(self, data: NewUser) -> User:
        """
        Insert a new user.

        Raises:
            UserAlreadyExistsError: If the email is already stored
        """
        ...

    async def mark_verified(self, email: str, external_user_id: str) -> User:
        """
        Set ``verified`` and store the identity provider's user id.

        Raises:
            UserNotFoundError: If no row matches the email
        """
        ...
