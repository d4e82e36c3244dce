# 📄 File: authhub/modules/user_management/presentation/api/v1/auth.py
# 🧭 Purpose (Layman Explanation):
# The web addresses for signing in and out, asking for and completing a password reset and
# confirming an email address.
#
# 🧪 Purpose (Technical Summary):
# FastAPI authentication endpoints on top of the auth operations; every declared channel of each
# operation has exactly one HTTP status through its ChannelResponder.
# Logout additionally requires a valid, unrevoked bearer access token.
#
# 🔗 Dependencies:
# - FastAPI router, Body, Depends, Query
# - authhub.modules.user_management.presentation.dependencies (get_current_user)
# - authhub.api.responder.ChannelResponder
# - authhub.shared.core.dependencies (Container)
#
# 🔄 Connected Modules / Calls From:
# - authhub.api.v1.router (mounted under /api/v1)
# - Links in verification emails (GET /auth/verify-email)

"""
Authentication API Endpoints

Endpoints:
- POST /auth/login: Email/password authentication, returns a JWT pair
- POST /auth/logout: Revokes the access and refresh tokens
- POST /auth/forgot-password: Password reset initiation
- POST /auth/reset-password: Password reset completion
- GET /auth/verify-email: Email verification from the emailed link
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.responses import JSONResponse

from authhub.api.responder import ChannelResponder
from authhub.modules.user_management.application.operations.auth import (
    ForgotPassword,
    LoginUser,
    LogoutUser,
    ResetPassword,
    VerifyEmail,
)
from authhub.modules.user_management.presentation.api.schemas.auth_schemas import (
    LoginResponse,
    MessageResponse,
    ResetPasswordResponse,
    VerifyEmailResponse,
)
from authhub.modules.user_management.presentation.api.schemas.user_schemas import ErrorResponse
from authhub.modules.user_management.presentation.dependencies import get_current_user
from authhub.shared.core.dependencies import Container, get_container

logger = logging.getLogger(__name__)

auth_router = APIRouter(prefix="/auth", tags=["Authentication"])

login_responder = ChannelResponder(
    LoginUser,
    {
        "SUCCESS": status.HTTP_200_OK,
        "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
        "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
        "ACCOUNT_NOT_VERIFIED": status.HTTP_403_FORBIDDEN,
    },
    success_model=LoginResponse,
    error_model=ErrorResponse,
)
logout_responder = ChannelResponder(
    LogoutUser,
    {"SUCCESS": status.HTTP_200_OK, "INVALID_TOKEN": status.HTTP_401_UNAUTHORIZED},
    success_model=MessageResponse,
    error_model=ErrorResponse,
)
forgot_password_responder = ChannelResponder(
    ForgotPassword,
    {
        "SUCCESS": status.HTTP_200_OK,
        "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
        "ACCOUNT_NOT_VERIFIED": status.HTTP_403_FORBIDDEN,
    },
    success_model=MessageResponse,
    error_model=ErrorResponse,
)
reset_password_responder = ChannelResponder(
    ResetPassword,
    {
        "SUCCESS": status.HTTP_200_OK,
        "TOKEN_NOT_FOUND": status.HTTP_404_NOT_FOUND,
        "TOKEN_EXPIRED": status.HTTP_410_GONE,
        "INVALID_TOKEN": status.HTTP_400_BAD_REQUEST,
        "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    },
    success_model=ResetPasswordResponse,
    error_model=ErrorResponse,
)
verify_email_responder = ChannelResponder(
    VerifyEmail,
    {
        "SUCCESS": status.HTTP_200_OK,
        "TOKEN_NOT_FOUND": status.HTTP_404_NOT_FOUND,
        "TOKEN_EXPIRED": status.HTTP_410_GONE,
        "INVALID_TOKEN": status.HTTP_400_BAD_REQUEST,
        "USER_NOT_FOUND": status.HTTP_404_NOT_FOUND,
        "ALREADY_VERIFIED": status.HTTP_409_CONFLICT,
    },
    success_model=VerifyEmailResponse,
    error_model=ErrorResponse,
)


@auth_router.post(
    "/login",
    summary="User login",
    description="Authenticate with email and password",
    responses=login_responder.responses(),
)
async def login(
    payload: Dict[str, Any] = Body(...),
    container: Container = Depends(get_container),
) -> JSONResponse:
    outcome = await container.login_user().execute(payload)
    return login_responder.respond(outcome)


@auth_router.post(
    "/logout",
    summary="User logout",
    description="Revoke the access and refresh tokens issued at login",
    responses=logout_responder.responses(),
    dependencies=[Depends(get_current_user)],
)
async def logout(
    payload: Dict[str, Any] = Body(...),
    container: Container = Depends(get_container),
) -> JSONResponse:
    outcome = await container.logout_user().execute(payload)
    return logout_responder.respond(outcome)


@auth_router.post(
    "/forgot-password",
    summary="Request password reset",
    description="Email a password reset link to a verified account",
    responses=forgot_password_responder.responses(),
)
async def forgot_password(
    payload: Dict[str, Any] = Body(...),
    container: Container = Depends(get_container),
) -> JSONResponse:
    outcome = await container.forgot_password().execute(payload)
    return forgot_password_responder.respond(outcome)


@auth_router.post(
    "/reset-password",
    summary="Reset password",
    description="Set a new password with the token from the reset email",
    responses=reset_password_responder.responses(),
)
async def reset_password(
    payload: Dict[str, Any] = Body(...),
    container: Container = Depends(get_container),
) -> JSONResponse:
    outcome = await container.reset_password().execute(payload)
    return reset_password_responder.respond(outcome)


@auth_router.get(
    "/verify-email",
    summary="Verify email address",
    description="Target of the link in the verification email",
    responses=verify_email_responder.responses(),
)
async def verify_email(
    token: str = Query("", description="Verification token from the email link"),
    container: Container = Depends(get_container),
) -> JSONResponse:
    outcome = await container.verify_email().execute({"token": token})
    return verify_email_responder.respond(outcome)
