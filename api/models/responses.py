"""
Success envelopes for the user routes.

Field names here are the wire contract consumed by the frontend.
"""

from pydantic import BaseModel

from modules.auth.models import LoginSession
from modules.users.models import User


class UserMessageResponse(BaseModel):
    """``{message, data: user}`` envelope used by login and OTP resends."""

    message: str
    data: User


class LoginSessionResponse(BaseModel):
    """``{message, data: {access_token, refresh_token, user}}`` envelope."""

    message: str
    data: LoginSession
