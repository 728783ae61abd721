"""
Base repository class for database access.

Provides a common abstraction layer for repositories, encapsulating
Supabase client access and the translation of storage errors into
domain exceptions.
"""

from typing import Callable, Generic, TypeVar

from supabase import AsyncClient, PostgrestAPIError

from .exceptions import TesseraError


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for all repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints
    - SQLSTATE-to-exception translation via ``constraint_errors``

    Subclasses declare which Postgres error codes map to which domain
    exception factory. Codes not in the table are re-raised untouched.

    Example:
        class UserRepository(BaseRepository[User]):
            constraint_errors = {"23505": lambda err: UserAlreadyExistsError()}

            async def insert(self, data: dict) -> User:
                try:
                    result = await self._db.table("users").insert(data).execute()
                except PostgrestAPIError as err:
                    raise self.translate_error(err) from err
                return User.model_validate(result.data[0])
    """

    constraint_errors: dict[str, Callable[[PostgrestAPIError], TesseraError]] = {}

    def __init__(self, db: AsyncClient) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Async Supabase client instance for database operations.
        """
        self._db = db

    def translate_error(self, error: PostgrestAPIError) -> Exception:
        """
        Map a PostgREST error onto a domain exception.

        Args:
            error: The error raised by the PostgREST client.

        Returns:
            The domain exception registered for the error's SQLSTATE code,
            or the original error when the code is not registered.
        """
        factory = self.constraint_errors.get(error.code or "")
        if factory is None:
            return error
        return factory(error)
