# 📄 File: authhub/shared/config/redis.py
#
# 🧭 Purpose (Layman Explanation):
# Connection settings for Redis, the fast memory store we use to remember which login tokens
# were signed out.
#
# 🧪 Purpose (Technical Summary):
# Lazily created redis.asyncio client and connection pool built from REDIS_URL, with
# environment-dependent socket timeouts, a ping health check and orderly shutdown.
#
# 🔗 Dependencies:
# - redis (redis.asyncio)
# - authhub.shared.config.settings
#
# 🔄 Connected Modules / Calls From:
# - authhub.shared.infrastructure.cache.token_blacklist (RedisTokenBlackList)
# - authhub.shared.core.dependencies (composition root), health router

from typing import Any, Dict, Optional

import redis.asyncio as redis
from redis.asyncio import ConnectionPool, Redis

from .settings import Settings


class RedisConfig:
    """Redis connection management."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._connection_pool: Optional[ConnectionPool] = None
        self._redis_client: Optional[Redis] = None

    @property
    def redis_url(self) -> str:
        return self.settings.REDIS_URL

    @property
    def connection_kwargs(self) -> Dict[str, Any]:
        """Get Redis connection configuration."""
        base_config = {
            "encoding": "utf-8",
            "decode_responses": True,
            "retry_on_timeout": True,
            "health_check_interval": 30,
        }

        if self.settings.is_production:
            base_config.update({
                "socket_timeout": 5.0,
                "socket_connect_timeout": 5.0,
                "socket_keepalive": True,
            })
        else:
            base_config.update({
                "socket_timeout": 10.0,
                "socket_connect_timeout": 10.0,
            })

        return base_config

    def create_connection_pool(self) -> ConnectionPool:
        if self._connection_pool is None:
            self._connection_pool = ConnectionPool.from_url(self.redis_url, **self.connection_kwargs)
        return self._connection_pool

    def create_redis_client(self) -> Redis:
        """Create Redis client with connection pool."""
        if self._redis_client is None:
            self._redis_client = Redis(connection_pool=self.create_connection_pool())
        return self._redis_client

    async def health_check(self) -> Dict[str, Any]:
        try:
            await self.create_redis_client().ping()
        except redis.RedisError as e:
            return {"status": "unhealthy", "error": str(e)}
        return {"status": "healthy"}

    async def close_connections(self) -> None:
        """Close Redis connections and cleanup."""
        if self._redis_client is not None:
            await self._redis_client.aclose()
            self._redis_client = None

        if self._connection_pool is not None:
            await self._connection_pool.disconnect()
            self._connection_pool = None
