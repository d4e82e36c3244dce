# 📄 File: authhub/modules/user_management/application/operations/notification.py
# 🧭 Purpose (Layman Explanation):
# Sends the two emails people get from us: "please confirm your address" after signing up and
# "here is your password reset link" after asking for one.
#
# 🧪 Purpose (Technical Summary):
# Event-subscribing notification operations. SendEmailOnUserCreation reacts to TokenCreated,
# re-reads the user and their verification token and sends the verification mail;
# SendEmailOnForgotPassword reacts to ForgotPassword and sends the reset mail. Both check the
# mail server first and report an unreachable server on AVAILABILITY_ERROR.
#
# 🔗 Dependencies:
# - authhub.shared.core.bootstrap.EventSubscriberOperation
# - UserRepository, TokenRepository, EmailService
#
# 🔄 Connected Modules / Calls From:
# - authhub.shared.core.dependencies (singletons bootstrapped at startup)
# - DomainEventBus deliveries of TokenCreated / ForgotPassword

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Mapping, Optional, Union

from authhub.modules.user_management.domain.events.user_events import (
    ForgotPassword,
    TokenCreated,
    UserEventType,
)
from authhub.modules.user_management.domain.models.token import Token, TokenType
from authhub.modules.user_management.domain.models.user import User
from authhub.modules.user_management.domain.repositories.token_repository import TokenRepository
from authhub.modules.user_management.domain.repositories.user_repository import UserRepository
from authhub.modules.user_management.domain.services.email import EmailMessage, EmailService
from authhub.shared.core.bootstrap import EventSubscriberOperation
from authhub.shared.core.exceptions import OperationError
from authhub.shared.utils.logging import get_logger

logger = get_logger(__name__)

EMAIL_UNAVAILABLE_MESSAGE = "Email service unavailable. Please try again later or contact support."

VERIFICATION_TEMPLATE = "email-verification-token"
RESET_PASSWORD_TEMPLATE = "reset-password"


class _EmailOperation(EventSubscriberOperation):
    """Shared plumbing for operations that end in sending one email."""

    failure_code = "EMAIL_SEND_FAILED"

    def __init__(
        self,
        email: EmailService,
        public_base_url: str,
        subject_prefix: str = "",
        event_bus=None,
        logger=None,
    ):
        super().__init__(logger=logger, event_bus=event_bus)
        self._email = email
        self._base_url = public_base_url.rstrip("/")
        self._subject_prefix = subject_prefix

    def _subject(self, text: str) -> str:
        return f"{self._subject_prefix} {text}".strip()

    async def _email_available(self) -> bool:
        """
        Check the mail server.

        Emits ``AVAILABILITY_ERROR`` when it reports itself unreachable and
        ``ERROR`` when the check itself fails; returns False in both cases.
        """
        try:
            available = await self._email.verify()
        except Exception as e:
            self.emit_error(OperationError("EMAIL_SERVICE_VERIFY_FAILED", "Failed to verify email service", e))
            return False

        if not available:
            logger.warning("Email service reported unavailable", operation=self.name)
            self.emit(self.Output.AVAILABILITY_ERROR, EMAIL_UNAVAILABLE_MESSAGE)
            return False
        return True

    async def _send(self, message: EmailMessage) -> bool:
        try:
            await self._email.send(message)
        except Exception as e:
            self.emit_error(OperationError(self.failure_code, f"Failed to send email to {message.to}", e))
            return False
        return True


class SendEmailOnUserCreation(_EmailOperation):
    """
    Send the account verification email.

    The user is re-read from the repository so a verification that already
    happened is noticed; the most recent VERIFICATION token is used.
    """

    class Output(str, Enum):
        SUCCESS = "SUCCESS"
        ERROR = "ERROR"
        AVAILABILITY_ERROR = "AVAILABILITY_ERROR"
        USER_NOT_FOUND = "USER_NOT_FOUND"
        TOKEN_NOT_FOUND = "TOKEN_NOT_FOUND"
        ALREADY_VERIFIED = "ALREADY_VERIFIED"

    subscribes_to = (UserEventType.TOKEN_CREATED,)

    def __init__(
        self,
        users: UserRepository,
        tokens: TokenRepository,
        email: EmailService,
        public_base_url: str,
        verify_email_minutes: int,
        subject_prefix: str = "",
        event_bus=None,
        logger=None,
    ):
        super().__init__(email, public_base_url, subject_prefix, event_bus=event_bus, logger=logger)
        self._users = users
        self._tokens = tokens
        self._expires_in_minutes = verify_email_minutes

    async def _latest_verification_token(self, user_id: str) -> Optional[Token]:
        tokens = await self._tokens.list_by_user_id(user_id, TokenType.VERIFICATION)
        if not tokens:
            return None
        return max(tokens, key=lambda t: t.expires_at)

    async def run(self, source: Union[TokenCreated, User, Mapping[str, Any]]) -> None:
        if isinstance(source, TokenCreated):
            email = source.user.email
        elif isinstance(source, User):
            email = source.email
        else:
            email = source["email"]

        user = await self._users.get_by_email(email)
        if user is None:
            self.emit(self.Output.USER_NOT_FOUND, f"User with email {email} not found")
            return

        if user.is_verified:
            self.emit(self.Output.ALREADY_VERIFIED, {"user_id": user.id, "email": user.email})
            return

        try:
            token = await self._latest_verification_token(user.id)
        except Exception as e:
            self.emit_error(OperationError("REPOSITORY_ERROR", "Failed to load verification token", e))
            return

        if token is None:
            self.emit(self.Output.TOKEN_NOT_FOUND, f"No verification token found for user {user.id}")
            return

        if not await self._email_available():
            return

        message = EmailMessage(
            to=user.email,
            subject=self._subject("Validate Your User Account"),
            template=VERIFICATION_TEMPLATE,
            context={
                "name": user.name,
                "verification_url": f"{self._base_url}/auth/verify-email?token={token.token}",
                "expires_in_minutes": self._expires_in_minutes,
                "current_year": datetime.now(timezone.utc).year,
            },
        )
        if not await self._send(message):
            return

        logger.info("Verification email sent", user_id=user.id)
        self.emit_success({"user_id": user.id, "email": user.email})


class SendEmailOnForgotPassword(_EmailOperation):
    """Send the password reset link carried by a ``ForgotPassword`` event."""

    class Output(str, Enum):
        SUCCESS = "SUCCESS"
        ERROR = "ERROR"
        AVAILABILITY_ERROR = "AVAILABILITY_ERROR"

    subscribes_to = (UserEventType.FORGOT_PASSWORD,)

    def __init__(
        self,
        email: EmailService,
        public_base_url: str,
        reset_password_minutes: int,
        subject_prefix: str = "",
        event_bus=None,
        logger=None,
    ):
        super().__init__(email, public_base_url, subject_prefix, event_bus=event_bus, logger=logger)
        self._expires_in_minutes = reset_password_minutes

    async def run(self, event: ForgotPassword) -> None:
        if not await self._email_available():
            return

        user, token = event.user, event.token
        message = EmailMessage(
            to=user.email,
            subject=self._subject("Reset Your Password"),
            template=RESET_PASSWORD_TEMPLATE,
            context={
                "name": user.name,
                "reset_url": f"{self._base_url}/auth/reset-pass?token={token.token}",
                "expires_in_minutes": self._expires_in_minutes,
                "current_year": datetime.now(timezone.utc).year,
            },
        )
        if not await self._send(message):
            return

        logger.info("Password reset email sent", user_id=user.id)
        self.emit_success({"user_id": user.id, "email": user.email})
