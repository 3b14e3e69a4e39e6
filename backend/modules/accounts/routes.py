"""
Account lifecycle API endpoints.

Registration, email verification, login, token refresh, password reset,
logout and account deletion. Domain errors propagate to the application
exception handler, which maps them to HTTP statuses.
"""

from typing import Optional

from fastapi import APIRouter, Cookie, Depends, Response, status

from api.middleware.auth import get_current_user
from api.dependencies import get_account_service
from modules.auth.exceptions import MissingTokenError
from modules.auth.models import SessionTokens
from shared.config import Settings, get_settings
from shared.models import AuthenticatedUser

from .interfaces import IAccountService
from .models import (
    AccessTokenResponse,
    CheckCodeRequest,
    CheckPasswordResetRequest,
    CodeDispatch,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    SendCodeRequest,
)

router = APIRouter()

REFRESH_COOKIE_NAME = "refreshToken"
REFRESH_COOKIE_PATH = "/api/users"

DISPATCH_MESSAGES = {
    CodeDispatch.SENT: "Email code sent",
    CodeDispatch.EXISTING_CODE_VALID: "Existing email code is still valid",
    CodeDispatch.ALREADY_VERIFIED: "Email already verified",
}


def set_refresh_cookie(response: Response, refresh_token: str, settings: Settings) -> None:
    """Deliver the refresh token in an HttpOnly cookie scoped to the account endpoints."""
    response.set_cookie(
        key=REFRESH_COOKIE_NAME,
        value=refresh_token,
        max_age=settings.refresh_token_expire_days * 24 * 60 * 60,
        path=REFRESH_COOKIE_PATH,
        httponly=True,
        secure=settings.is_production(),
        samesite="strict",
    )


def clear_refresh_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=REFRESH_COOKIE_NAME,
        path=REFRESH_COOKIE_PATH,
        httponly=True,
        secure=settings.is_production(),
        samesite="strict",
    )


def _session_response(
    response: Response,
    tokens: SessionTokens,
    message: str,
    settings: Settings,
) -> AccessTokenResponse:
    set_refresh_cookie(response, tokens.refresh_token, settings)
    return AccessTokenResponse(message=message, access_token=tokens.access_token)


# =============================================================================
# Registration and verification
# =============================================================================

@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def register(
    request: RegisterRequest,
    service: IAccountService = Depends(get_account_service),
) -> MessageResponse:
    """
    Create an unverified account.

    The client should then call send-verification-code.
    """
    await service.register(
        request.first_name,
        request.last_name,
        request.email,
        request.password,
    )
    return MessageResponse(message="User registered")


@router.post("/send-verification-code", response_model=MessageResponse)
async def send_verification_code(
    request: SendCodeRequest,
    response: Response,
    service: IAccountService = Depends(get_account_service),
) -> MessageResponse:
    """
    Email a verification code.

    Returns 201 when a new code was sent, 200 when the existing code is
    still valid or the email is already verified.
    """
    dispatch = await service.send_verification_code(request.email, request.force_resend)
    if dispatch is CodeDispatch.SENT:
        response.status_code = status.HTTP_201_CREATED
    return MessageResponse(message=DISPATCH_MESSAGES[dispatch], code=dispatch.value)


@router.post(
    "/check-verification-code",
    response_model=AccessTokenResponse,
    response_model_exclude_none=True,
)
async def check_verification_code(
    request: CheckCodeRequest,
    response: Response,
    service: IAccountService = Depends(get_account_service),
    settings: Settings = Depends(get_settings),
) -> AccessTokenResponse:
    """
    Verify the email with a code and start a session.

    The access token is returned in the body; the refresh token is set as
    an HttpOnly cookie.
    """
    result = await service.check_verification_code(request.email, request.email_code)
    if result.tokens is None:
        return AccessTokenResponse(message="Email already verified")
    return _session_response(response, result.tokens, "Email verified", settings)


# =============================================================================
# Sessions
# =============================================================================

@router.post("/login", response_model=AccessTokenResponse)
async def login(
    request: LoginRequest,
    response: Response,
    service: IAccountService = Depends(get_account_service),
    settings: Settings = Depends(get_settings),
) -> AccessTokenResponse:
    """Log in with email and password."""
    tokens = await service.login(request.email, request.password)
    return _session_response(response, tokens, "Login successful", settings)


@router.post("/refresh-token", response_model=AccessTokenResponse)
async def refresh_token(
    refresh_token: Optional[str] = Cookie(default=None, alias=REFRESH_COOKIE_NAME),
    service: IAccountService = Depends(get_account_service),
) -> AccessTokenResponse:
    """
    Mint a new access token from the refresh-token cookie.

    A missing cookie is a 401; an invalid or expired one is a 403.
    """
    if not refresh_token:
        raise MissingTokenError("No refresh token provided")

    access_token = service.refresh_access_token(refresh_token)
    return AccessTokenResponse(message="Access token refreshed", access_token=access_token)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    settings: Settings = Depends(get_settings),
) -> MessageResponse:
    """Clear the refresh-token cookie."""
    clear_refresh_cookie(response, settings)
    return MessageResponse(message="Logged out")


# =============================================================================
# Password reset
# =============================================================================

@router.post("/send-password-reset-code", response_model=MessageResponse)
async def send_password_reset_code(
    request: SendCodeRequest,
    service: IAccountService = Depends(get_account_service),
) -> MessageResponse:
    """Email a password reset code to a verified account."""
    dispatch = await service.send_password_reset_code(request.email, request.force_resend)
    return MessageResponse(message=DISPATCH_MESSAGES[dispatch], code=dispatch.value)


@router.post("/check-password-reset-code", response_model=MessageResponse)
async def check_password_reset_code(
    request: CheckPasswordResetRequest,
    service: IAccountService = Depends(get_account_service),
) -> MessageResponse:
    """Replace the password using a reset code."""
    await service.check_password_reset_code(request.email, request.email_code, request.new_password)
    return MessageResponse(message="Password updated")


# =============================================================================
# Deletion
# =============================================================================

@router.post("/delete-user", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    response: Response,
    user: AuthenticatedUser = Depends(get_current_user),
    service: IAccountService = Depends(get_account_service),
    settings: Settings = Depends(get_settings),
) -> None:
    """Delete the caller's account and everything that references it."""
    await service.delete_account(user.id)
    clear_refresh_cookie(response, settings)
