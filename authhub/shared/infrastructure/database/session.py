# 📄 File: authhub/shared/infrastructure/database/session.py
#
# 🧭 Purpose (Layman Explanation):
# Hands out short "conversations" with the database. Each one either saves all of its changes
# or none of them.
#
# 🧪 Purpose (Technical Summary):
# Async SQLAlchemy session factory with commit-on-success / rollback-on-error semantics.
# Repositories open one session per call, so concurrently running event subscribers never
# share a session.
#
# 🔗 Dependencies:
# - sqlalchemy.ext.asyncio (AsyncSession, async_sessionmaker)
# - authhub.shared.infrastructure.database.connection (engine)
# - authhub.shared.core.exceptions.DatabaseError
#
# 🔄 Connected Modules / Calls From:
# - user_management infrastructure repository implementations
# - authhub.shared.core.dependencies (composition root)

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import exc
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from authhub.shared.core.exceptions import DatabaseError
from authhub.shared.infrastructure.database.connection import DatabaseConnectionManager

logger = logging.getLogger(__name__)


class DatabaseSessionManager:
    """
    Manages database sessions with transaction handling and automatic cleanup.
    """

    def __init__(self, connection: DatabaseConnectionManager):
        self._connection = connection
        self._session_factory: Optional[async_sessionmaker] = None

    def _factory(self) -> async_sessionmaker:
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                self._connection.initialize() if not self._connection.is_initialized else self._connection.engine,
                class_=AsyncSession,
                expire_on_commit=False,  # keep objects readable after commit
                autoflush=True,
            )
            logger.info("Database session factory initialized")
        return self._session_factory

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Open a session that commits when the block exits cleanly.

        Yields:
            AsyncSession: Database session

        Raises:
            DatabaseError: If SQLAlchemy fails; the transaction is rolled back
        """
        session: AsyncSession = self._factory()()
        try:
            yield session
            await session.commit()
        except exc.SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"Database error occurred, transaction rolled back: {e}")
            raise DatabaseError(f"Database operation failed: {e}") from e
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()
