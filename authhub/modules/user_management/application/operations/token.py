# 📄 File: authhub/modules/user_management/application/operations/token.py
# 🧭 Purpose (Layman Explanation):
# Behind-the-scenes bookkeeping for one-time codes: a new account gets a verification code,
# and when an account is removed all of its codes are removed with it.
#
# 🧪 Purpose (Technical Summary):
# Event-subscribing operations. CreateTokenOnUserCreation reacts to UserCreated by storing a
# VERIFICATION token and publishing TokenCreated; DeleteTokensOnUserDeletion reacts to
# UserDeleted by deleting every token owned by the removed user.
#
# 🔗 Dependencies:
# - authhub.shared.core.bootstrap.EventSubscriberOperation
# - TokenRepository, TokenGenerator, TokenLifetimes
#
# 🔄 Connected Modules / Calls From:
# - authhub.shared.core.dependencies (singletons bootstrapped at startup)
# - DomainEventBus deliveries of UserCreated / UserDeleted

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Mapping, Union

from authhub.modules.user_management.domain.events.user_events import (
    TokenCreated,
    UserCreated,
    UserDeleted,
    UserEventType,
)
from authhub.modules.user_management.domain.models.token import Token, TokenLifetimes, TokenType
from authhub.modules.user_management.domain.models.user import User
from authhub.modules.user_management.domain.repositories.token_repository import TokenRepository
from authhub.modules.user_management.domain.services.security import TokenGenerator
from authhub.shared.core.bootstrap import EventSubscriberOperation
from authhub.shared.utils.logging import get_logger

logger = get_logger(__name__)


class CreateTokenOnUserCreation(EventSubscriberOperation):
    """
    Issue the email verification token for a freshly created user.

    Accepts the ``UserCreated`` event or the user itself. On success the
    stored token is emitted together with the user and ``TokenCreated`` is
    published so the verification email goes out.
    """

    class Output(str, Enum):
        SUCCESS = "SUCCESS"
        ERROR = "ERROR"

    subscribes_to = (UserEventType.USER_CREATED,)
    failure_code = "TOKEN_CREATION_FAILED"
    log_payload = False

    def __init__(
        self,
        tokens: TokenRepository,
        generator: TokenGenerator,
        lifetimes: TokenLifetimes,
        event_bus,
        logger=None,
    ):
        super().__init__(logger=logger, event_bus=event_bus)
        self._tokens = tokens
        self._generator = generator
        self._lifetimes = lifetimes

    async def run(self, source: Union[UserCreated, User]) -> None:
        if isinstance(source, UserCreated):
            user, metadata = source.user, source.child_metadata(actor=self.name)
        else:
            user, metadata = source, None

        token = await self._tokens.create(
            Token(
                user_id=user.id,
                token=self._generator.generate(TokenType.VERIFICATION),
                type=TokenType.VERIFICATION,
                expires_at=datetime.now(timezone.utc) + timedelta(minutes=self._lifetimes.verify_email_minutes),
            )
        )
        logger.info("Verification token stored", user_id=user.id, token_id=token.id)

        if metadata is not None:
            self.publish(TokenCreated(user=user, metadata=metadata))
        else:
            self.publish(TokenCreated(user=user))

        self.emit_success({"user": user, "token": token})


class DeleteTokensOnUserDeletion(EventSubscriberOperation):
    """Remove every token that belonged to a deleted user."""

    class Output(str, Enum):
        SUCCESS = "SUCCESS"
        ERROR = "ERROR"
        TOKEN_NOT_FOUND = "TOKEN_NOT_FOUND"

    subscribes_to = (UserEventType.USER_DELETED,)
    failure_code = "TOKEN_DELETION_FAILED"

    def __init__(self, tokens: TokenRepository, event_bus=None, logger=None):
        super().__init__(logger=logger, event_bus=event_bus)
        self._tokens = tokens

    async def run(self, source: Union[UserDeleted, str, Mapping[str, Any]]) -> None:
        if isinstance(source, UserDeleted):
            user_id = source.user_id
        elif isinstance(source, str):
            user_id = source
        else:
            user_id = source["user_id"]

        tokens = await self._tokens.list_by_user_id(user_id)
        if not tokens:
            self.emit(self.Output.TOKEN_NOT_FOUND, f"There are no tokens for user {user_id}")
            return

        for token in tokens:
            await self._tokens.delete(token.id)

        logger.info(f"Deleted {len(tokens)} tokens", user_id=user_id)
        self.emit_success(
            {"user_id": user_id, "deleted": len(tokens), "message": "All tokens from the user was deleted successfully"}
        )
