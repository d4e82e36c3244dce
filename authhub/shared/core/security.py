"""
Security adapters for password hashing, JWT signing and one-time token generation.
Concrete implementations of the user management security interfaces.
"""

import asyncio
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from authhub.modules.user_management.domain.models.token import TokenType
from authhub.modules.user_management.domain.services.security import (
    IssuedToken,
    JWTTokenGenerator,
    PasswordHasher,
    TokenGenerator,
)
from authhub.shared.core.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


class BcryptPasswordHasher(PasswordHasher):
    """
    bcrypt hashing through passlib.

    Hashing is CPU bound, so both calls run in a worker thread to keep the
    event loop responsive.
    """

    def __init__(self, rounds: int = 12):
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    async def hash(self, password: str) -> str:
        return await asyncio.to_thread(self._context.hash, password)

    async def verify(self, password: str, password_hash: str) -> bool:
        try:
            return await asyncio.to_thread(self._context.verify, password, password_hash)
        except ValueError as e:
            # unknown or corrupt hash format
            logger.warning(f"Password verification failed: {e}")
            return False


class JoseJWTTokenGenerator(JWTTokenGenerator):
    """Signs and validates JWTs with python-jose."""

    def __init__(self, secret_key: str, algorithm: str = "HS256"):
        self.secret_key = secret_key
        self.algorithm = algorithm

    def issue(self, claims: Dict[str, Any], token_type: TokenType, expires_in_minutes: int) -> IssuedToken:
        """
        Create a signed JWT carrying the given claims.

        Args:
            claims: Token payload data
            token_type: Stored in the ``type`` claim
            expires_in_minutes: Token lifetime

        Returns:
            IssuedToken: Encoded JWT and its expiry
        """
        now = datetime.now(timezone.utc)
        expire = now + timedelta(minutes=expires_in_minutes)

        to_encode = dict(claims)
        to_encode.update({
            "exp": expire,
            "iat": now,
            "type": token_type.value,
        })

        encoded_jwt = jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)
        logger.debug(f"{token_type.value} token created for user: {claims.get('user_id')}")
        return IssuedToken(token=encoded_jwt, expires_at=expire)

    def validate(self, token: str, token_type: TokenType) -> Dict[str, Any]:
        """
        Decode a JWT and check its type.

        Returns:
            Dict[str, Any]: Decoded claims

        Raises:
            AuthenticationError: If the token is expired, malformed or of another type
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise AuthenticationError("Token has expired")
        except JWTError as e:
            logger.warning(f"JWT validation failed: {e}")
            raise AuthenticationError("Could not validate credentials")

        if payload.get("type") != token_type.value:
            raise AuthenticationError(
                "Invalid token type",
                details={"expected": token_type.value, "received": payload.get("type")},
            )
        return payload


class SecretsTokenGenerator(TokenGenerator):
    """URL-safe random tokens for verification and reset links."""

    def __init__(self, nbytes: int = 32):
        self._nbytes = nbytes

    def generate(self, token_type: TokenType) -> str:
        return secrets.token_urlsafe(self._nbytes)
