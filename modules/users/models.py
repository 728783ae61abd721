"""
User record data models.

Rows are stored with snake_case columns and exposed on the wire in
camelCase (``firstName``, ``externalUserId``...).
"""

from datetime import date, datetime
from enum import Enum
from typing import Optional
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


# externalUserId prefix reserved for accounts provisioned without Supabase
SEEDED_ACCOUNT_PREFIX = "sb_"


class UserRole(str, Enum):
    """Roles carried as a claim on issued tokens."""

    USER = "user"
    ADMIN = "admin"
    ORGANIZER = "organizer"


class AccountKind(str, Enum):
    """How an account authenticates."""

    SEEDED = "seeded"  # magic code + locally signed tokens
    PROVIDER = "provider"  # Supabase OTP + Supabase sessions


class User(BaseModel):
    """A row of the ``users`` table."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str
    email: str
    first_name: str
    last_name: str
    role: UserRole = UserRole.USER
    verified: bool = False
    external_user_id: Optional[str] = None
    date_of_birth: Optional[date] = None
    country: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class NewUser(BaseModel):
    """Column values for a user insert. ``id`` is left to the database."""

    email: str
    first_name: str
    last_name: str
    role: UserRole = UserRole.USER
    verified: bool = False
    external_user_id: Optional[str] = None
    date_of_birth: Optional[date] = None
    country: Optional[str] = None


def classify_account(user: User) -> AccountKind:
    """
    Derive the account kind from the stored external user id.

    Must be called on a freshly loaded row; the result is only valid for
    the request that loaded it.
    """
    external_id = user.external_user_id
    if external_id is not None and external_id.startswith(SEEDED_ACCOUNT_PREFIX):
        return AccountKind.SEEDED
    return AccountKind.PROVIDER


def new_seeded_external_id() -> str:
    """Generate an external user id that marks an account as seeded."""
    return f"{SEEDED_ACCOUNT_PREFIX}{uuid4()}"
