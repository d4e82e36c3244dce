# 📄 File: authhub/modules/user_management/presentation/api/schemas/auth_schemas.py
# 🧭 Purpose (Layman Explanation):
# Describes what the sign-in, sign-out and password endpoints send back.
#
# 🧪 Purpose (Technical Summary):
# Pydantic response schemas for the authentication endpoints (OpenAPI documentation only).
#
# 🔗 Dependencies:
# - pydantic
#
# 🔄 Connected Modules / Calls From:
# - authhub.modules.user_management.presentation.api.v1.auth

from datetime import datetime

from pydantic import BaseModel, Field


class LoginResponse(BaseModel):
    """Access/refresh token pair issued at login."""
    user_id: str
    access_token: str
    access_token_expires: datetime
    refresh_token: str
    refresh_token_expires: datetime


class MessageResponse(BaseModel):
    message: str = Field(..., examples=["Password reset link sent to your email"])


class ResetPasswordResponse(MessageResponse):
    user_id: str


class VerifyEmailResponse(BaseModel):
    user_id: str
