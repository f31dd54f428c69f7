"""
Authentication API endpoints.

Public routes: none of them require a bearer token. Errors are raised as
domain exceptions and rendered by the API exception handlers.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_auth_service
from shared.models import ApiResponse

from .interfaces import IAuthService
from .models import (
    EmailRequest,
    RefreshTokenRequest,
    ResetPasswordRequest,
    SigninRequest,
    SigninResponse,
    SignupRequest,
    TokenResponse,
)

router = APIRouter()


@router.post("/signup", response_model=ApiResponse, status_code=201)
async def signup(
    request: SignupRequest,
    service: IAuthService = Depends(get_auth_service),
) -> ApiResponse:
    """Register a new user."""
    await service.signup(request.username, request.email, request.password)
    return ApiResponse(message="User Registration successful", message_code="SIGNUP_SUCCESS")


@router.post("/signin", response_model=SigninResponse)
async def signin(
    request: SigninRequest,
    service: IAuthService = Depends(get_auth_service),
) -> SigninResponse:
    """
    Authenticate with email and password.

    Returns a one-hour access token and the user's refresh token. The
    refresh token stays the same across signins until it is revoked.
    """
    result = await service.signin(request.email, request.password)
    return SigninResponse(
        username=result.username,
        access_token=result.access_token,
        access_token_expiration=result.access_token_expiration,
        refresh_token=result.refresh_token,
    )


@router.post("/token", response_model=TokenResponse)
async def token(
    request: RefreshTokenRequest,
    service: IAuthService = Depends(get_auth_service),
) -> TokenResponse:
    """Exchange a refresh token for a new access token."""
    access = await service.refresh_access_token(request.refresh_token)
    return TokenResponse(
        access_token=access.access_token,
        access_token_expiration=access.expires_at,
    )


@router.post("/token/revoke", response_model=ApiResponse)
async def token_revoke(
    request: RefreshTokenRequest,
    service: IAuthService = Depends(get_auth_service),
) -> ApiResponse:
    """Revoke the caller's refresh token."""
    await service.revoke_refresh_token(request.refresh_token)
    return ApiResponse(message="Refresh token revoked", message_code="TOKEN_REVOKED")


@router.post("/forgotpassword", response_model=ApiResponse)
async def forgot_password(
    request: EmailRequest,
    service: IAuthService = Depends(get_auth_service),
) -> ApiResponse:
    """Email a password-reset link."""
    await service.forgot_password(request.email)
    return ApiResponse(message="Password reset email sent", message_code="RESET_EMAIL_SENT")


@router.post("/resetpassword", response_model=ApiResponse)
async def reset_password(
    request: ResetPasswordRequest,
    service: IAuthService = Depends(get_auth_service),
) -> ApiResponse:
    """Set a new password using the token from the reset email."""
    await service.reset_password(request.reset_token, request.password)
    return ApiResponse(message="Password updated", message_code="PASSWORD_RESET")


@router.post("/activation", response_model=ApiResponse)
async def request_activation(
    request: EmailRequest,
    service: IAuthService = Depends(get_auth_service),
) -> ApiResponse:
    """
    Email an account-activation link.

    Answers the same way whether or not the email is registered.
    """
    await service.request_activation(request.email)
    return ApiResponse(
        message="If the email is registered, an activation link was sent",
        message_code="ACTIVATION_EMAIL_SENT",
    )
