# 📄 File: authhub/modules/user_management/domain/models/token.py
# 🧭 Purpose (Layman Explanation):
# A stored token is the one-time code we email to people so they can confirm their address
# or choose a new password. This file says what such a code looks like and when it stops working.
# 🧪 Purpose (Technical Summary):
# Token domain model with type enumeration and expiry/revocation checks.
# 🔗 Dependencies:
# pydantic, datetime, uuid
# 🔄 Connected Modules / Calls From:
# token_repository.py, token and auth operations, SQLAlchemy token mapper

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TokenType(str, Enum):
    """Token type enumeration"""
    ACCESS = "ACCESS"
    REFRESH = "REFRESH"
    VERIFICATION = "VERIFICATION"
    RESET_PASSWORD = "RESET_PASSWORD"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _aware(value: datetime) -> datetime:
    # sqlite hands back naive datetimes
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


class Token(BaseModel):
    """Persisted one-time token bound to a user."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    user_id: str
    token: str
    type: TokenType
    expires_at: datetime
    is_revoked: bool = False
    created_at: Optional[datetime] = Field(default_factory=_utcnow)
    updated_at: Optional[datetime] = Field(default_factory=_utcnow)

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return (now or _utcnow()) > _aware(self.expires_at)

    def is_valid(self, now: Optional[datetime] = None) -> bool:
        return not self.is_revoked and not self.is_expired(now)


@dataclass(frozen=True)
class TokenLifetimes:
    """How long each kind of token stays valid."""
    access_minutes: int = 30
    refresh_days: int = 30
    reset_password_minutes: int = 10
    verify_email_minutes: int = 10

    @property
    def refresh_minutes(self) -> int:
        return self.refresh_days * 24 * 60
