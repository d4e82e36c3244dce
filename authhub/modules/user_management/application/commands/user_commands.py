# 📄 File: authhub/modules/user_management/application/commands/user_commands.py
# 🧭 Purpose (Layman Explanation):
# This file defines the "create user", "update user" and "delete user" requests and the rules their
# data must follow, like a password strong enough and typed twice the same way.
#
# 🧪 Purpose (Technical Summary):
# Pydantic command models for user lifecycle operations. Validation failures raise pydantic
# ValidationError, which the operations surface on their VALIDATION_ERROR channel.
#
# 🔗 Dependencies:
# - pydantic for command validation and serialization
# - authhub.modules.user_management.domain.models.user (roles, genders)
#
# 🔄 Connected Modules / Calls From:
# - authhub.modules.user_management.application.operations.user (CreateUser, UpdateUser, DeleteUser)
# - authhub.modules.user_management.presentation.api.v1.users (request bodies)

import re
from datetime import date
from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator

from authhub.modules.user_management.domain.models.user import Gender, UserRole

NAME_PATTERN = re.compile(r"^[a-zA-Z0-9]+$")
UPDATE_NAME_PATTERN = re.compile(r"^[a-zA-Z0-9 ]+$")
PASSWORD_PATTERN = re.compile(r"^(?=.*\d)(?=.*[A-Z])(?=.*[a-z])(?=.*[!@#$%^&*])[\w!@#$%^&*]{8,}$")
PASSWORD_RULES = (
    "Password must be at least 8 characters and include uppercase, lowercase, "
    "number and special character"
)


def check_password_strength(value: str) -> str:
    if not PASSWORD_PATTERN.match(value):
        raise ValueError(PASSWORD_RULES)
    return value


class CreateUserCommand(BaseModel):
    """
    Command for registering a new user account.

    The password is hashed by the operation; it never leaves the
    application layer in clear text.
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    name: str = Field(..., min_length=1, description="Alphanumeric display name", examples=["Jane"])
    email: EmailStr = Field(..., description="User's email address", examples=["jane@example.com"])
    username: str = Field(..., min_length=1, max_length=64, description="Unique username", examples=["jane"])
    password: str = Field(..., description="Raw password", examples=["Str0ng!Pass"])
    repeat_password: str = Field(
        ...,
        validation_alias=AliasChoices("repeat_password", "repeatPassword"),
        description="Password confirmation",
    )
    role: UserRole = Field(default=UserRole.USER, description="User role")
    birth_date: Optional[date] = Field(
        default=None,
        validation_alias=AliasChoices("birth_date", "birthDate"),
        description="Date of birth",
    )
    gender: Optional[Gender] = Field(default=None, description="Gender")

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not NAME_PATTERN.match(v):
            raise ValueError("Name must be alphanumeric")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return check_password_strength(v)

    @model_validator(mode="after")
    def passwords_match(self) -> "CreateUserCommand":
        if self.password != self.repeat_password:
            raise ValueError("Passwords do not match")
        return self


class UpdateUserCommand(BaseModel):
    """Partial update of a user; only the fields provided are changed."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True, extra="forbid")

    name: Optional[str] = None
    email: Optional[EmailStr] = None
    username: Optional[str] = Field(default=None, min_length=1, max_length=64)
    password: Optional[str] = None
    role: Optional[UserRole] = None
    birth_date: Optional[date] = Field(default=None, validation_alias=AliasChoices("birth_date", "birthDate"))
    gender: Optional[Gender] = None
    is_verified: Optional[bool] = Field(default=None, validation_alias=AliasChoices("is_verified", "isVerified"))

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not UPDATE_NAME_PATTERN.match(v):
            raise ValueError("Name must contain only alphanumeric characters and spaces")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v is not None else v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: Optional[str]) -> Optional[str]:
        return check_password_strength(v) if v is not None else v

    def changes(self) -> Dict[str, Any]:
        """Only the fields the caller actually sent."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class DeleteUserCommand(BaseModel):
    """Command for removing a user account."""

    user_id: str = Field(..., min_length=1, validation_alias=AliasChoices("user_id", "userId", "id"))
