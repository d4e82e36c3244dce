"""
In-memory collaborators for operation, choreography and API tests.

They implement the domain interfaces faithfully enough for the operations
under test without a database, redis or a mail server.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from authhub.modules.user_management.domain.models.token import Token, TokenType
from authhub.modules.user_management.domain.models.user import Page, User, UserWithPassword
from authhub.modules.user_management.domain.repositories.token_repository import TokenRepository
from authhub.modules.user_management.domain.repositories.user_repository import UserRepository
from authhub.modules.user_management.domain.services.email import EmailMessage, EmailService
from authhub.modules.user_management.domain.services.security import (
    PasswordHasher,
    TokenBlackList,
    TokenGenerator,
)
from authhub.shared.core.exceptions import DuplicateResourceError

TEST_PASSWORD = "Str0ng!Pass"


def make_user(**overrides) -> UserWithPassword:
    data = {
        "name": "Jane",
        "email": "jane@example.com",
        "username": "jane",
        "password_hash": f"hashed::{TEST_PASSWORD}",
    }
    data.update(overrides)
    return UserWithPassword(**data)


def make_token(user_id: str, token_type: TokenType = TokenType.VERIFICATION, minutes: int = 10, **overrides) -> Token:
    data = {
        "user_id": user_id,
        "token": f"{token_type.value.lower()}-secret",
        "type": token_type,
        "expires_at": datetime.now(timezone.utc) + timedelta(minutes=minutes),
    }
    data.update(overrides)
    return Token(**data)


class InMemoryUserRepository(UserRepository):
    def __init__(self):
        self.rows: Dict[str, UserWithPassword] = {}

    async def create(self, user: UserWithPassword) -> User:
        stored = user.model_copy(update={"email": user.email.lower()})
        self._check_unique(stored)
        self.rows[stored.id] = stored
        return stored.without_password()

    async def get_by_id(self, user_id: str) -> Optional[User]:
        row = self.rows.get(user_id)
        return row.without_password() if row else None

    async def get_by_email(self, email: str) -> Optional[User]:
        row = self._by_email(email)
        return row.without_password() if row else None

    async def get_by_username(self, username: str) -> Optional[User]:
        for row in self.rows.values():
            if row.username == username:
                return row.without_password()
        return None

    async def get_by_email_with_password(self, email: str) -> Optional[UserWithPassword]:
        return self._by_email(email)

    async def list(self, page: int = 1, limit: int = 10) -> Page[User]:
        ordered = sorted(self.rows.values(), key=lambda u: (u.created_at, u.id))
        body = [u.without_password() for u in ordered[(page - 1) * limit:page * limit]]
        return Page[User].build(body=body, total=len(ordered), page=page, limit=limit)

    async def update(self, user_id: str, changes: Dict[str, Any]) -> Optional[User]:
        row = self.rows.get(user_id)
        if row is None:
            return None
        updated = row.model_copy(update={**changes, "updated_at": datetime.now(timezone.utc)})
        self._check_unique(updated)
        self.rows[user_id] = updated
        return updated.without_password()

    async def delete(self, user_id: str) -> bool:
        return self.rows.pop(user_id, None) is not None

    def _check_unique(self, candidate: UserWithPassword) -> None:
        for row in self.rows.values():
            if row.id == candidate.id:
                continue
            for field_name in ("email", "username"):
                if getattr(row, field_name) == getattr(candidate, field_name):
                    raise DuplicateResourceError(f"User {field_name} already exists", field=field_name)

    def _by_email(self, email: str) -> Optional[UserWithPassword]:
        for row in self.rows.values():
            if row.email == email.lower():
                return row
        return None


class InMemoryTokenRepository(TokenRepository):
    def __init__(self):
        self.rows: Dict[str, Token] = {}

    async def create(self, token: Token) -> Token:
        self.rows[token.id] = token
        return token

    async def get_by_id(self, token_id: str) -> Optional[Token]:
        return self.rows.get(token_id)

    async def get_by_token(self, token: str) -> Optional[Token]:
        for row in self.rows.values():
            if row.token == token:
                return row
        return None

    async def list_by_user_id(self, user_id: str, token_type: Optional[TokenType] = None) -> List[Token]:
        return [
            row for row in self.rows.values()
            if row.user_id == user_id and (token_type is None or row.type == token_type)
        ]

    async def update(self, token_id: str, changes: Dict[str, Any]) -> Optional[Token]:
        row = self.rows.get(token_id)
        if row is None:
            return None
        self.rows[token_id] = row.model_copy(update=changes)
        return self.rows[token_id]

    async def revoke(self, token_id: str) -> bool:
        return await self.update(token_id, {"is_revoked": True}) is not None

    async def delete(self, token_id: str) -> bool:
        return self.rows.pop(token_id, None) is not None

    async def remove_expired(self) -> int:
        expired = [row.id for row in self.rows.values() if row.is_expired()]
        for token_id in expired:
            del self.rows[token_id]
        return len(expired)


class PlainPasswordHasher(PasswordHasher):
    """Reversible stand-in for bcrypt; keeps tests fast."""

    async def hash(self, password: str) -> str:
        return f"hashed::{password}"

    async def verify(self, password: str, password_hash: str) -> bool:
        return password_hash == f"hashed::{password}"


class SequentialTokenGenerator(TokenGenerator):
    def __init__(self, prefix: str = "tok"):
        self._prefix = prefix
        self._count = 0

    def generate(self, token_type: TokenType) -> str:
        self._count += 1
        return f"{self._prefix}-{token_type.value.lower()}-{self._count}"


class InMemoryBlackList(TokenBlackList):
    def __init__(self):
        self.entries: Dict[str, int] = {}

    async def add(self, token: str, ttl_seconds: int) -> None:
        self.entries[token] = ttl_seconds

    async def contains(self, token: str) -> bool:
        return token in self.entries


class RecordingEmailService(EmailService):
    def __init__(self, available: bool = True):
        self.available = available
        self.sent: List[EmailMessage] = []

    async def verify(self) -> bool:
        return self.available

    async def send(self, message: EmailMessage) -> None:
        self.sent.append(message)
