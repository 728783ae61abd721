"""API models package."""

from .errors import ErrorResponse
from .responses import LoginSessionResponse, UserMessageResponse

__all__ = [
    "ErrorResponse",
    "LoginSessionResponse",
    "UserMessageResponse",
]
