# 📄 File: authhub/modules/user_management/application/commands/auth_commands.py
# 🧭 Purpose (Layman Explanation):
# The requests people send to sign in, sign out, ask for a new password, set the new password
# and confirm their email address.
#
# 🧪 Purpose (Technical Summary):
# Pydantic command models for the authentication operations.
#
# 🔗 Dependencies:
# - pydantic for command validation
#
# 🔄 Connected Modules / Calls From:
# - authhub.modules.user_management.application.operations.auth
# - authhub.modules.user_management.presentation.api.v1.auth

import re

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator

from authhub.modules.user_management.application.commands.user_commands import check_password_strength

JWT_SHAPE = re.compile(r"^[A-Za-z0-9\-_]+\.[A-Za-z0-9\-_]+\.[A-Za-z0-9\-_]*$")


class LoginCommand(BaseModel):
    """Email/password credentials."""

    email: EmailStr
    password: str = Field(..., min_length=1)

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class LogoutCommand(BaseModel):
    """The pair of tokens issued at login, both revoked together."""

    model_config = ConfigDict(populate_by_name=True)

    access_token: str = Field(..., min_length=1, validation_alias=AliasChoices("access_token", "accessToken"))
    refresh_token: str = Field(..., min_length=1, validation_alias=AliasChoices("refresh_token", "refreshToken"))

    @field_validator("access_token", "refresh_token")
    @classmethod
    def validate_jwt_shape(cls, v: str) -> str:
        if not JWT_SHAPE.match(v):
            raise ValueError("Invalid token format")
        return v


class ForgotPasswordCommand(BaseModel):
    """Address that should receive the reset link."""

    email: EmailStr

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()


class ResetPasswordCommand(BaseModel):
    """Reset token from the email link plus the new password."""

    model_config = ConfigDict(populate_by_name=True)

    token: str = Field(..., min_length=1)
    new_password: str = Field(..., validation_alias=AliasChoices("new_password", "newPassword", "password"))

    @field_validator("new_password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return check_password_strength(v)


class VerifyEmailCommand(BaseModel):
    """Verification token from the email link."""

    token: str = Field(..., min_length=1)
