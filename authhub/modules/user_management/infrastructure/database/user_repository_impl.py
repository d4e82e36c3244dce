# 📄 File: authhub/modules/user_management/infrastructure/database/user_repository_impl.py
# 🧭 Purpose (Layman Explanation):
# Saves, finds, changes and removes user accounts in the database.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy implementation of UserRepository. Every method opens its own session through the
# DatabaseSessionManager, maps UserModel rows to domain models and lets DatabaseError propagate
# to the calling operation, which reports it on its ERROR channel. Unique violations on email or
# username surface as DuplicateResourceError so a lost signup race is still a conflict.
#
# 🔗 Dependencies:
# - authhub.modules.user_management.domain.repositories.user_repository (interface)
# - authhub.modules.user_management.infrastructure.database.models (UserModel)
# - authhub.shared.infrastructure.database.session (DatabaseSessionManager)
#
# 🔄 Connected Modules / Calls From:
# - User, auth and notification operations (through the composition root)

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError

from authhub.modules.user_management.domain.models.user import Page, User, UserWithPassword
from authhub.modules.user_management.domain.repositories.user_repository import UserRepository
from authhub.modules.user_management.infrastructure.database.models import UserModel
from authhub.shared.core.exceptions import DatabaseError, DuplicateResourceError
from authhub.shared.infrastructure.database.session import DatabaseSessionManager

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = {"name", "email", "username", "password_hash", "role", "birth_date", "gender", "is_verified"}
UNIQUE_FIELDS = ("email", "username")


class UserRepositoryImpl(UserRepository):
    """
    SQLAlchemy implementation of the UserRepository interface.
    """

    def __init__(self, sessions: DatabaseSessionManager):
        """
        Args:
            sessions: Session manager; one session is opened per call
        """
        self._sessions = sessions

    async def create(self, user: UserWithPassword) -> User:
        try:
            async with self._sessions.session() as session:
                user_model = self._domain_to_model(user)
                session.add(user_model)
                await session.flush()
                created = self._model_to_domain(user_model)
        except DatabaseError as e:
            raise _duplicate_or(e)

        logger.info(f"Created user with ID: {created.id}")
        return created

    async def get_by_id(self, user_id: str) -> Optional[User]:
        return await self._get_one(UserModel.id == user_id)

    async def get_by_email(self, email: str) -> Optional[User]:
        return await self._get_one(UserModel.email == email.lower())

    async def get_by_username(self, username: str) -> Optional[User]:
        return await self._get_one(UserModel.username == username)

    async def get_by_email_with_password(self, email: str) -> Optional[UserWithPassword]:
        async with self._sessions.session() as session:
            result = await session.execute(select(UserModel).where(UserModel.email == email.lower()))
            user_model = result.scalar_one_or_none()
            return UserWithPassword.model_validate(user_model) if user_model else None

    async def list(self, page: int = 1, limit: int = 10) -> Page[User]:
        """
        One page of users ordered by creation date.

        Args:
            page: 1-based page number
            limit: Page size
        """
        async with self._sessions.session() as session:
            total = (await session.execute(select(func.count()).select_from(UserModel))).scalar_one()
            result = await session.execute(
                select(UserModel)
                .order_by(UserModel.created_at, UserModel.id)
                .offset((page - 1) * limit)
                .limit(limit)
            )
            body = [self._model_to_domain(m) for m in result.scalars().all()]

        return Page[User].build(body=body, total=total, page=page, limit=limit)

    async def update(self, user_id: str, changes: Dict[str, Any]) -> Optional[User]:
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update user fields: {sorted(unknown)}")

        try:
            async with self._sessions.session() as session:
                user_model = await session.get(UserModel, user_id)
                if user_model is None:
                    logger.debug(f"User not found for update: {user_id}")
                    return None

                for field_name, value in changes.items():
                    setattr(user_model, field_name, value)
                user_model.updated_at = datetime.now(timezone.utc)

                await session.flush()
                updated = self._model_to_domain(user_model)
        except DatabaseError as e:
            raise _duplicate_or(e)

        logger.info(f"Updated user {user_id}: {sorted(changes)}")
        return updated

    async def delete(self, user_id: str) -> bool:
        async with self._sessions.session() as session:
            result = await session.execute(delete(UserModel).where(UserModel.id == user_id))
            deleted = result.rowcount > 0

        if deleted:
            logger.info(f"Deleted user {user_id}")
        return deleted

    # =========================================================================
    # MAPPING
    # =========================================================================

    async def _get_one(self, criterion) -> Optional[User]:
        async with self._sessions.session() as session:
            result = await session.execute(select(UserModel).where(criterion))
            user_model = result.scalar_one_or_none()
            return self._model_to_domain(user_model) if user_model else None

    def _model_to_domain(self, user_model: UserModel) -> User:
        """Convert SQLAlchemy model to domain entity; the password hash is dropped."""
        return User.model_validate(user_model)

    def _domain_to_model(self, user: UserWithPassword) -> UserModel:
        """Convert domain entity to SQLAlchemy model."""
        return UserModel(
            id=user.id,
            name=user.name,
            email=user.email.lower(),
            username=user.username,
            password_hash=user.password_hash,
            role=user.role,
            birth_date=user.birth_date,
            gender=user.gender,
            is_verified=user.is_verified,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )


def _duplicate_or(error: DatabaseError) -> Exception:
    """Map a unique violation on email or username to DuplicateResourceError; return other errors unchanged."""
    cause = error.__cause__
    if not isinstance(cause, IntegrityError):
        return error

    text = str(cause.orig).lower()
    for field_name in UNIQUE_FIELDS:
        if field_name in text:
            duplicate = DuplicateResourceError(f"User {field_name} already exists", resource_type="user", field=field_name)
            duplicate.__cause__ = cause
            return duplicate
    return error
