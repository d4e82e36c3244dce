# 📄 File: authhub/modules/user_management/domain/events/user_events.py
# 🧭 Purpose (Layman Explanation):
# Defines the things that "happen" to accounts - a user signed up, a user was removed, a verification
# code was issued, someone asked for a password reset - so other parts of the service can react
# 🧪 Purpose (Technical Summary):
# Immutable domain events with fixed payload shapes per event name, plus the closed enumeration
# of event names the user-management choreography publishes and subscribes to
# 🔗 Dependencies:
# pydantic, authhub.shared.events.base, user/token domain models
# 🔄 Connected Modules / Calls From:
# CreateUser, DeleteUser, ForgotPassword (publishers); CreateTokenOnUserCreation,
# SendEmailOnUserCreation, SendEmailOnForgotPassword, DeleteTokensOnUserDeletion (subscribers)

from enum import Enum
from typing import ClassVar

from authhub.modules.user_management.domain.models.token import Token
from authhub.modules.user_management.domain.models.user import User
from authhub.shared.events.base import DomainEvent


class UserEventType(str, Enum):
    """Every event name used by the user management module."""
    USER_CREATED = "UserCreated"
    USER_DELETED = "UserDeleted"
    TOKEN_CREATED = "TokenCreated"
    FORGOT_PASSWORD = "ForgotPassword"


class UserCreated(DomainEvent):
    """
    Event fired once a new user has been persisted.

    Triggers:
    - Verification token creation
    """
    event_type: ClassVar[str] = UserEventType.USER_CREATED.value

    user: User


class UserDeleted(DomainEvent):
    """
    Event fired after a user account has been removed.

    Triggers:
    - Deletion of every token the user owned
    """
    event_type: ClassVar[str] = UserEventType.USER_DELETED.value

    user_id: str


class TokenCreated(DomainEvent):
    """
    Event fired when a verification token has been stored for a new user.

    Triggers:
    - Verification email
    """
    event_type: ClassVar[str] = UserEventType.TOKEN_CREATED.value

    user: User


class ForgotPassword(DomainEvent):
    """
    Event fired when a password reset token was issued.

    Triggers:
    - Password reset email
    """
    event_type: ClassVar[str] = UserEventType.FORGOT_PASSWORD.value

    user: User
    token: Token
