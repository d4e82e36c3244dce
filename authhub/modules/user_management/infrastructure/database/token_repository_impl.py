# 📄 File: authhub/modules/user_management/infrastructure/database/token_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Saves, finds and throws away the one-time codes sent by email.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of TokenRepository with one session per call, plus bulk removal of
# expired tokens used by the startup housekeeping step.
#
# 🔗 Dependencies:
# - authhub.modules.user_management.domain.repositories.token_repository (interface)
# - authhub.modules.user_management.infrastructure.database.models (TokenModel)
# - authhub.shared.infrastructure.database.session (DatabaseSessionManager)
#
# 🔄 Connected Modules / Calls From:
# - Token, auth and notification operations; authhub.main (expired token purge)

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select

from authhub.modules.user_management.domain.models.token import Token, TokenType
from authhub.modules.user_management.domain.repositories.token_repository import TokenRepository
from authhub.modules.user_management.infrastructure.database.models import TokenModel
from authhub.shared.infrastructure.database.session import DatabaseSessionManager

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = {"token", "type", "expires_at", "is_revoked"}


class TokenRepositoryImpl(TokenRepository):
    """SQLAlchemy implementation of the TokenRepository interface."""

    def __init__(self, sessions: DatabaseSessionManager):
        self._sessions = sessions

    async def create(self, token: Token) -> Token:
        async with self._sessions.session() as session:
            token_model = TokenModel(
                id=token.id,
                user_id=token.user_id,
                token=token.token,
                type=token.type,
                expires_at=token.expires_at,
                is_revoked=token.is_revoked,
                created_at=token.created_at,
                updated_at=token.updated_at,
            )
            session.add(token_model)
            await session.flush()
            created = Token.model_validate(token_model)

        logger.info(f"Stored {created.type.value} token {created.id} for user {created.user_id}")
        return created

    async def get_by_id(self, token_id: str) -> Optional[Token]:
        async with self._sessions.session() as session:
            token_model = await session.get(TokenModel, token_id)
            return Token.model_validate(token_model) if token_model else None

    async def get_by_token(self, token: str) -> Optional[Token]:
        async with self._sessions.session() as session:
            result = await session.execute(select(TokenModel).where(TokenModel.token == token))
            token_model = result.scalar_one_or_none()
            return Token.model_validate(token_model) if token_model else None

    async def list_by_user_id(self, user_id: str, token_type: Optional[TokenType] = None) -> List[Token]:
        stmt = select(TokenModel).where(TokenModel.user_id == user_id)
        if token_type is not None:
            stmt = stmt.where(TokenModel.type == token_type)
        stmt = stmt.order_by(TokenModel.created_at.desc())

        async with self._sessions.session() as session:
            result = await session.execute(stmt)
            return [Token.model_validate(m) for m in result.scalars().all()]

    async def update(self, token_id: str, changes: Dict[str, Any]) -> Optional[Token]:
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update token fields: {sorted(unknown)}")

        async with self._sessions.session() as session:
            token_model = await session.get(TokenModel, token_id)
            if token_model is None:
                return None
            for field_name, value in changes.items():
                setattr(token_model, field_name, value)
            token_model.updated_at = datetime.now(timezone.utc)
            await session.flush()
            return Token.model_validate(token_model)

    async def revoke(self, token_id: str) -> bool:
        return await self.update(token_id, {"is_revoked": True}) is not None

    async def delete(self, token_id: str) -> bool:
        async with self._sessions.session() as session:
            result = await session.execute(delete(TokenModel).where(TokenModel.id == token_id))
            return result.rowcount > 0

    async def remove_expired(self) -> int:
        async with self._sessions.session() as session:
            result = await session.execute(
                delete(TokenModel).where(TokenModel.expires_at < datetime.now(timezone.utc))
            )
            removed = result.rowcount or 0

        if removed:
            logger.info(f"Removed {removed} expired tokens")
        return removed
