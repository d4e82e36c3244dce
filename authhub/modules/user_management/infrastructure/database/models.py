# 📄 File: authhub/modules/user_management/infrastructure/database/models.py
# 🧭 Purpose (Layman Explanation):
# Describes the two database tables of the account service: one row per user and one row per
# one-time code we sent out.
#
# 🧪 Purpose (Technical Summary):
# SQLAlchemy ORM models for users and tokens. String UUID primary keys keep the schema portable
# between sqlite and PostgreSQL. tokens.user_id is indexed but carries no foreign key: token
# cleanup after a user deletion is done by the DeleteTokensOnUserDeletion subscriber.
#
# 🔗 Dependencies:
# - SQLAlchemy ORM
# - authhub.shared.infrastructure.database.connection (Base)
#
# 🔄 Connected Modules / Calls From:
# - user_repository_impl.py and token_repository_impl.py (CRUD operations)
# - DatabaseConnectionManager.create_all (schema creation)

from uuid import uuid4

from sqlalchemy import Boolean, Column, Date, DateTime, String, func
from sqlalchemy import Enum as SAEnum

from authhub.modules.user_management.domain.models.token import TokenType
from authhub.modules.user_management.domain.models.user import Gender, UserRole
from authhub.shared.infrastructure.database.connection import Base


def _uuid() -> str:
    return str(uuid4())


# =============================================================================
# USER MODEL
# =============================================================================

class UserModel(Base):
    """
    SQLAlchemy model for user accounts.
    """
    __tablename__ = "users"

    id = Column(
        String(36),
        primary_key=True,
        default=_uuid,
        nullable=False,
        comment="Unique identifier for each user"
    )
    name = Column(String(100), nullable=False, comment="Display name")
    email = Column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="Lower-cased email address"
    )
    username = Column(
        String(64),
        unique=True,
        nullable=False,
        index=True,
        comment="Unique login handle"
    )
    password_hash = Column(String(255), nullable=False, comment="bcrypt hash")
    role = Column(
        SAEnum(UserRole, name="user_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=UserRole.USER,
    )
    birth_date = Column(Date, nullable=True)
    gender = Column(
        SAEnum(Gender, name="gender", values_callable=lambda e: [m.value for m in e]),
        nullable=True,
    )
    is_verified = Column(
        Boolean,
        nullable=False,
        default=False,
        comment="Email verification status"
    )
    created_at = Column(DateTime(timezone=True), nullable=False, default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, email={self.email})>"


# =============================================================================
# TOKEN MODEL
# =============================================================================

class TokenModel(Base):
    """
    SQLAlchemy model for verification and password reset tokens.
    """
    __tablename__ = "tokens"

    id = Column(String(36), primary_key=True, default=_uuid, nullable=False)
    user_id = Column(String(36), nullable=False, index=True, comment="Owner of the token")
    token = Column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="Opaque token value sent by email"
    )
    type = Column(
        SAEnum(TokenType, name="token_type", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    expires_at = Column(DateTime(timezone=True), nullable=False)
    is_revoked = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, default=func.now(), onupdate=func.now())

    def __repr__(self) -> str:
        return f"<TokenModel(id={self.id}, type={self.type}, user_id={self.user_id})>"
