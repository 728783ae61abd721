"""
Error response models.

Standardized error responses for the API. Clients only ever see a stable
message and code; no stack traces or internal identifiers.
"""

from pydantic import BaseModel
from typing import Optional


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str
    code: Optional[str] = None
