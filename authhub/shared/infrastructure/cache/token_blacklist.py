"""
Redis-backed blacklist of revoked JWTs.
A revoked token is stored until the moment it would have expired on its own.
"""

import hashlib
import logging

from redis.asyncio import Redis
from redis.exceptions import RedisError

from authhub.modules.user_management.domain.services.security import TokenBlackList
from authhub.shared.core.exceptions import CacheError

logger = logging.getLogger(__name__)


class RedisTokenBlackList(TokenBlackList):
    """
    TokenBlackList on a redis.asyncio client.

    Tokens are keyed by their SHA-256 digest so raw JWTs never reach redis.
    """

    def __init__(self, client: Redis, prefix: str = "authhub:blacklist:"):
        self._client = client
        self._prefix = prefix

    def _key(self, token: str) -> str:
        return f"{self._prefix}{hashlib.sha256(token.encode('utf-8')).hexdigest()}"

    async def add(self, token: str, ttl_seconds: int) -> None:
        key = self._key(token)
        try:
            await self._client.set(key, "1", ex=max(1, int(ttl_seconds)))
        except RedisError as e:
            logger.error(f"Failed to blacklist token: {e}")
            raise CacheError("Failed to blacklist token", operation="set", key=key) from e

    async def contains(self, token: str) -> bool:
        key = self._key(token)
        try:
            return bool(await self._client.exists(key))
        except RedisError as e:
            logger.error(f"Failed to read token blacklist: {e}")
            raise CacheError("Failed to read token blacklist", operation="exists", key=key) from e
