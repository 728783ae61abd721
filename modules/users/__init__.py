"""
Users module.

Typed access to the ``users`` table.

Public API:
- IUserRepository: Interface for user storage
- User, NewUser, UserRole, AccountKind: Models
- classify_account: Seeded vs provider-managed classification
- Users exceptions: UserNotFoundError, UserAlreadyExistsError,
  ExternalIdAlreadyLinkedError
"""

from .interfaces import IUserRepository
from .models import (
    SEEDED_ACCOUNT_PREFIX,
    AccountKind,
    NewUser,
    User,
    UserRole,
    classify_account,
    new_seeded_external_id,
)
from .exceptions import (
    ExternalIdAlreadyLinkedError,
    UserAlreadyExistsError,
    UserNotFoundError,
)

__all__ = [
    # Interface
    "IUserRepository",
    # Models
    "SEEDED_ACCOUNT_PREFIX",
    "AccountKind",
    "NewUser",
    "User",
    "UserRole",
    "classify_account",
    "new_seeded_external_id",
    # Exceptions
    "ExternalIdAlreadyLinkedError",
    "UserAlreadyExistsError",
    "UserNotFoundError",
]
