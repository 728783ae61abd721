"""
Users module exceptions.
"""

from shared.exceptions import ConflictError, NotFoundError


class UserNotFoundError(NotFoundError):
    """Raised when no user row matches the lookup key."""

    def __init__(self, key: str):
        super().__init__(
            "User not found",
            code="USER_NOT_FOUND",
            details={"key": key},
        )


class UserAlreadyExistsError(ConflictError):
    """Raised when a user with the same email is already stored."""

    def __init__(self, email: str = ""):
        super().__init__(
            "Email already exists",
            code="EMAIL_EXISTS",
            details={"email": email} if email else {},
        )


class ExternalIdAlreadyLinkedError(ConflictError):
    """Raised when a provider user id is already linked to another row."""

    def __init__(self, external_user_id: str = ""):
        super().__init__(
            "External user already linked to another account",
            code="EXTERNAL_ID_EXISTS",
            details={"external_user_id": external_user_id} if external_user_id else {},
        )
