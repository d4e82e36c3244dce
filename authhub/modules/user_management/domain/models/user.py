# 📄 File: authhub/modules/user_management/domain/models/user.py
# 🧭 Purpose (Layman Explanation):
# Defines what a "user" is in the account service - name, email, username, role and whether
# they confirmed their email address - plus the page of users returned by listings.
# 🧪 Purpose (Technical Summary):
# Pydantic domain models for the User aggregate, the internal password-bearing variant used only
# by login and password flows, role/gender enumerations and the generic pagination envelope.
# 🔗 Dependencies:
# pydantic, datetime, typing, uuid
# 🔄 Connected Modules / Calls From:
# user_repository.py, user operations, domain events, SQLAlchemy mappers, API schemas

import math
import uuid
from datetime import date, datetime, timezone
from enum import Enum
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field

T = TypeVar("T")


class UserRole(str, Enum):
    """User role enumeration"""
    ADMIN = "ADMIN"
    USER = "USER"


class Gender(str, Enum):
    """Gender enumeration"""
    MALE = "MALE"
    FEMALE = "FEMALE"
    NON_BINARY = "NON-BINARY"


class User(BaseModel):
    """
    User domain model.

    Never carries the password hash; see ``UserWithPassword`` for the
    credential-checking flows.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    name: str
    email: EmailStr
    username: str
    role: UserRole = UserRole.USER
    birth_date: Optional[date] = None
    gender: Optional[Gender] = None
    is_verified: bool = False
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def public_view(self) -> "User":
        return User.model_validate(self.model_dump(include=set(User.model_fields)))


class UserWithPassword(User):
    """User plus stored password hash, returned only by credential lookups."""
    password_hash: str = Field(repr=False)

    def without_password(self) -> User:
        return self.public_view()


class Page(BaseModel, Generic[T]):
    """One page of a listing."""
    body: List[T]
    total: int
    page: int
    limit: int
    last_page: int

    @classmethod
    def build(cls, body: List[T], total: int, page: int, limit: int) -> "Page[T]":
        return cls(
            body=body,
            total=total,
            page=page,
            limit=limit,
            last_page=math.ceil(total / limit) if limit else 0,
        )
