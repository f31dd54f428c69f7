"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from typing import Optional
from pydantic import BaseModel, Field


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated user in the system.

    This model is populated from verified access-token claims and made
    available to route handlers via dependency injection. ``username`` is
    the canonical identity key: every device and sketch query is scoped
    by it.
    """

    username: str = Field(..., description="Unique username (canonical owner key)")
    email: str = Field(..., description="User's email address")

    model_config = {
        "frozen": True,  # Make immutable for safety
        "extra": "ignore",  # Ignore extra claims (iat, exp)
    }


class ApiResponse(BaseModel):
    """
    Uniform response envelope.

    Every non-resource endpoint answers with this shape; errors use it too
    (with ``success=False``).
    """

    success: bool = True
    message: str = ""
    message_code: Optional[str] = None
