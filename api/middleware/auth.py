"""
Bearer-token authentication middleware.

Extracts an access token from the request (header, query string or body,
in the configured order), verifies it and exposes the caller's identity
to route handlers. Verification is a pure signature + expiry check; the
credential store is never consulted.
"""

import logging
from typing import Optional, Sequence

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from modules.auth.exceptions import MissingTokenError
from modules.auth.issuer import AccessTokenIssuer
from shared.config import Settings, get_settings
from shared.exceptions import AuthenticationError
from shared.models import AuthenticatedUser

from ..dependencies import get_token_issuer

logger = logging.getLogger(__name__)

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


async def _from_body(request: Request, field: str) -> Optional[str]:
    if request.method in ("GET", "HEAD", "OPTIONS"):
        return None
    content_type = request.headers.get("content-type", "")

    if content_type.startswith(JSON_CONTENT_TYPE):
        try:
            data = await request.json()
        except ValueError:
            return None
        value = data.get(field) if isinstance(data, dict) else None
    elif content_type.startswith(FORM_CONTENT_TYPES):
        value = (await request.form()).get(field)
    else:
        return None

    return value if isinstance(value, str) and value else None


async def extract_token(
    request: Request,
    sources: Sequence[str],
    field: str = "access_token",
    credentials: Optional[HTTPAuthorizationCredentials] = None,
) -> Optional[str]:
    """
    Find a bearer token in the request.

    Args:
        request: Incoming request
        sources: Ordered subset of "header", "query", "body"
        field: Query/body field name holding the token
        credentials: Parsed ``Authorization: Bearer`` header, if any

    Returns:
        The first token found, or None
    """
    for source in sources:
        if source == "header":
            token = credentials.credentials if credentials else None
        elif source == "query":
            token = request.query_params.get(field)
        elif source == "body":
            token = await _from_body(request, field)
        else:
            continue
        if token:
            return token
    return None


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
    issuer: AccessTokenIssuer = Depends(get_token_issuer),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    No token -> MissingTokenError (403); bad or expired token ->
    InvalidTokenError / ExpiredTokenError (401). On success the user is
    also stored on ``request.state.user``.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"username": user.username}
    """
    token = await extract_token(request, settings.token_sources, settings.token_field, credentials)
    if token is None:
        raise MissingTokenError()

    try:
        user = issuer.verify(token)
    except AuthenticationError as e:
        logger.debug("Rejected token on %s %s: %s", request.method, request.url.path, e.code)
        raise

    request.state.user = user
    return user


async def get_optional_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
    issuer: AccessTokenIssuer = Depends(get_token_issuer),
) -> Optional[AuthenticatedUser]:
    """
    Dependency that optionally extracts user if authenticated.

    Use this for endpoints that work with or without authentication.
    """
    token = await extract_token(request, settings.token_sources, settings.token_field, credentials)
    if token is None:
        return None

    try:
        return issuer.verify(token)
    except AuthenticationError:
        return None

