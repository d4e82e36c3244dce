# 📄 File: authhub/modules/user_management/domain/services/security.py
# 🧭 Purpose (Layman Explanation):
# Describes the security helpers the account rules rely on - scrambling passwords, making login
# tokens and one-time codes, and remembering which login tokens were signed out
# 🧪 Purpose (Technical Summary):
# Abstract collaborator interfaces for password hashing, JWT issuance/validation, opaque token
# generation and the revoked-token blacklist; concrete adapters live in shared.core.security
# and infrastructure.external
# 🔗 Dependencies:
# abc, typing, datetime
# 🔄 Connected Modules / Calls From:
# CreateUser, UpdateUser, LoginUser, LogoutUser, ResetPassword, ForgotPassword,
# CreateTokenOnUserCreation, shared.core.security adapters

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict

from ..models.token import TokenType


@dataclass(frozen=True)
class IssuedToken:
    """A freshly signed token and the moment it stops being valid."""
    token: str
    expires_at: datetime


class PasswordHasher(ABC):
    """Hashes and checks passwords."""

    @abstractmethod
    async def hash(self, password: str) -> str:
        pass

    @abstractmethod
    async def verify(self, password: str, password_hash: str) -> bool:
        pass


class TokenGenerator(ABC):
    """Produces opaque one-time tokens for verification and reset links."""

    @abstractmethod
    def generate(self, token_type: TokenType) -> str:
        pass


class JWTTokenGenerator(ABC):
    """Issues and validates signed JWTs."""

    @abstractmethod
    def issue(self, claims: Dict[str, Any], token_type: TokenType, expires_in_minutes: int) -> IssuedToken:
        """
        Sign a JWT.

        Args:
            claims: Custom claims (``user_id``, ``email``, ``role``...)
            token_type: Recorded in the ``type`` claim
            expires_in_minutes: Lifetime of the token

        Returns:
            IssuedToken: Encoded token and its expiry
        """
        pass

    @abstractmethod
    def validate(self, token: str, token_type: TokenType) -> Dict[str, Any]:
        """
        Decode and check a JWT.

        Raises:
            AuthenticationError: If the token is malformed, expired or of another type
        """
        pass


class TokenBlackList(ABC):
    """Remembers revoked JWTs until they would have expired anyway."""

    @abstractmethod
    async def add(self, token: str, ttl_seconds: int) -> None:
        pass

    @abstractmethod
    async def contains(self, token: str) -> bool:
        pass
