from __future__ import annotations

import logging
import os

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import JSONResponse

from src.application.dtos.auth_dto import LoginPageResponse, LoginRequest, LoginResponse
from src.application.dtos.common_dto import ErrorResponse, SuccessResponse
from src.domain.errors import AuthError, BackendError
from src.infrastructure.api.dependencies import (
    get_auth_adapter,
    get_request_token,
    session_cookie_name,
)
from src.infrastructure.database.supabase_client import SupabaseAuthAdapter

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin",
    tags=["Authentication"],
    responses={422: {"description": "Validation Error - Invalid request format"}},
)


@router.get(
    "/login",
    response_model=LoginPageResponse,
    summary="Login Page",
    description="Target of every redirect issued by the admin session guard.",
)
async def login_page():
    return LoginPageResponse()


@router.post(
    "/login",
    response_model=LoginResponse,
    status_code=status.HTTP_200_OK,
    summary="Sign In",
    description="""
    Sign in with the admin email and password.

    On success the access token is returned and also stored in an HTTP-only
    session cookie, so either can be used for the admin pages.

    **Errors**: 401 with the auth service's message when the credentials are rejected.
    """,
    responses={401: {"model": ErrorResponse, "description": "Unauthorized - Invalid login credentials"}},
)
def login(
    body: LoginRequest,
    response: Response,
    auth: SupabaseAuthAdapter = Depends(get_auth_adapter),
):
    try:
        session = auth.sign_in(body.email.strip(), body.password)
    except AuthError as exc:
        logger.info("Admin sign-in rejected for %s: %s", body.email, exc)
        raise
    logger.info("Admin %s signed in", session.email)
    response.set_cookie(
        key=session_cookie_name(),
        value=session.access_token,
        httponly=True,
        samesite="lax",
        secure=os.getenv("ENV", "development") == "production",
    )
    return LoginResponse(
        access_token=session.access_token,
        user_id=session.user_id,
        email=session.email,
        expires_at=session.expires_at,
    )


@router.post(
    "/logout",
    response_model=SuccessResponse,
    summary="Sign Out",
    description="""
    End the admin session and clear the session cookie. Safe to call when signed out.

    The cookie is cleared even when the auth service fails to revoke the
    session; that case answers 502 so the caller knows the token may still be live.
    """,
    responses={502: {"model": ErrorResponse, "description": "Bad Gateway - Session not revoked"}},
)
def logout(
    response: Response,
    token: str | None = Depends(get_request_token),
    auth: SupabaseAuthAdapter = Depends(get_auth_adapter),
):
    if token:
        try:
            auth.sign_out(token)
        except BackendError as exc:
            logger.error("Admin sign-out failed: %s", exc)
            failed = JSONResponse(
                status_code=status.HTTP_502_BAD_GATEWAY,
                content={"detail": f"Sign-out failed: {exc}"},
            )
            failed.delete_cookie(session_cookie_name())
            return failed
    response.delete_cookie(session_cookie_name())
    return SuccessResponse(message="Signed out")
