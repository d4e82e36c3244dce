# 📄 File: authhub/shared/infrastructure/database/connection.py
#
# 🧭 Purpose (Layman Explanation):
# Opens and closes the connection to the database where accounts and one-time codes are stored,
# and can tell whether the database is answering.
#
# 🧪 Purpose (Technical Summary):
# Async SQLAlchemy engine ownership: declarative Base, engine creation from DATABASE_URL
# (sqlite+aiosqlite by default), schema creation, health check and disposal.
#
# 🔗 Dependencies:
# - sqlalchemy (async engine, declarative base)
# - aiosqlite (default async driver)
# - authhub.shared.config.settings (database configuration)
#
# 🔄 Connected Modules / Calls From:
# - authhub.shared.infrastructure.database.session (session factory)
# - user_management infrastructure models (Base)
# - authhub.main (startup/shutdown), health router

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import declarative_base

logger = logging.getLogger(__name__)

Base = declarative_base()


class DatabaseConnectionManager:
    """
    Owns the async engine for one database URL.
    """

    def __init__(self, database_url: str, echo: bool = False):
        self._database_url = database_url
        self._echo = echo
        self._engine: Optional[AsyncEngine] = None
        self._health_check_query = text("SELECT 1")

    def _build_connection_params(self) -> Dict[str, Any]:
        """Build SQLAlchemy engine parameters for the configured URL."""
        params: Dict[str, Any] = {"url": self._database_url, "echo": self._echo}
        if self._database_url.startswith("sqlite"):
            params["connect_args"] = {"check_same_thread": False}
        else:
            params["pool_pre_ping"] = True
            params["pool_recycle"] = 3600
        return params

    def initialize(self) -> AsyncEngine:
        """Create the engine if it does not exist yet."""
        if self._engine is not None:
            logger.warning("Database engine already initialized")
            return self._engine

        logger.info("Initializing database engine...")
        self._engine = create_async_engine(**self._build_connection_params())
        return self._engine

    async def create_all(self) -> None:
        """Create every table registered on Base."""
        engine = self.initialize() if self._engine is None else self._engine
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ensured")

    async def health_check(self) -> Dict[str, Any]:
        """
        Run ``SELECT 1`` and return a structured status.
        """
        timestamp = datetime.now(timezone.utc).isoformat()
        if self._engine is None:
            return {"status": "unhealthy", "error": "Database engine not initialized", "timestamp": timestamp}

        try:
            async with self._engine.connect() as conn:
                result = await conn.execute(self._health_check_query)
                result.scalar()
        except Exception as e:
            logger.warning(f"Database health check failed: {e}")
            return {"status": "unhealthy", "error": str(e), "timestamp": timestamp}

        return {"status": "healthy", "timestamp": timestamp}

    async def close(self) -> None:
        """Dispose of the engine and all pooled connections."""
        if self._engine is None:
            logger.warning("Database engine not initialized, nothing to close")
            return

        logger.info("Closing database engine...")
        await self._engine.dispose()
        self._engine = None
        logger.info("Database engine closed")

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database not initialized. Call initialize() first.")
        return self._engine

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None
