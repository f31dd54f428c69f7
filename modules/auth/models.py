"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class TokenIntent(str, Enum):
    """Purpose tag carried by single-use intent tokens."""

    VALIDATE_ACCOUNT = "validate-account"
    RESET_PASSWORD = "reset-password"


class Identity(BaseModel):
    """
    A user's durable account record.

    Owned by the credential store. ``username`` and ``email`` are each
    unique; at most one refresh token is outstanding at a time.
    """

    id: Optional[str] = Field(None, description="Store-assigned row ID")
    username: str
    email: str
    password_hash: str
    refresh_token: Optional[str] = None
    validated: bool = False
    admin: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class AccessTokenClaims(BaseModel):
    """Decoded access-token payload."""

    email: str
    username: str
    iat: int
    exp: int


class IntentTokenClaims(BaseModel):
    """Decoded intent-token payload."""

    email: str
    intent: Optional[str] = None
    iat: int
    exp: int


class AccessToken(BaseModel):
    """A freshly issued access token and its absolute expiry."""

    access_token: str
    expires_at: datetime


class SigninResult(BaseModel):
    """Everything a successful signin hands back to the client."""

    username: str
    access_token: str
    access_token_expiration: datetime
    refresh_token: str


# -----------------------------------------------------------------------------
# HTTP request / response bodies
# -----------------------------------------------------------------------------


class SignupRequest(BaseModel):
    username: str
    email: str
    password: str


class SigninRequest(BaseModel):
    email: str
    password: str


class RefreshTokenRequest(BaseModel):
    refresh_token: str


class EmailRequest(BaseModel):
    """Body of the forgot-password and activation endpoints."""

    email: str


class ResetPasswordRequest(BaseModel):
    password: str
    reset_token: str


class SigninResponse(BaseModel):
    success: bool = True
    message: str = "Enjoy your token!"
    message_code: str = "SIGNIN_SUCCESS"
    username: str
    access_token: str
    access_token_expiration: datetime
    refresh_token: str


class TokenResponse(BaseModel):
    success: bool = True
    message: str = "Enjoy your token!"
    message_code: str = "TOKEN_ISSUED"
    access_token: str
    access_token_expiration: datetime
