# 📄 File: authhub/modules/user_management/application/operations/auth.py
# 🧭 Purpose (Layman Explanation):
# Signing in and out, asking for a password reset, choosing a new password and confirming an
# email address. Each action ends with one clear answer such as "wrong password" or "link expired".
#
# 🧪 Purpose (Technical Summary):
# Authentication operations on the typed-output Operation base: credential check and JWT pair
# issuance, JWT revocation through the redis blacklist, reset-token issuance (publishes
# ForgotPassword), reset-token redemption and email verification with type and expiry checks.
#
# 🔗 Dependencies:
# - authhub.shared.core.operation (Operation base)
# - user/token repositories, security services (hasher, JWT, opaque tokens, blacklist)
# - authhub.shared.core.exceptions.AuthenticationError (JWT validation failures)
#
# 🔄 Connected Modules / Calls From:
# - authhub.shared.core.dependencies (per-request factories)
# - authhub.modules.user_management.presentation.api.v1.auth

import asyncio
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Mapping, Union

from authhub.modules.user_management.application.commands.auth_commands import (
    ForgotPasswordCommand,
    LoginCommand,
    LogoutCommand,
    ResetPasswordCommand,
    VerifyEmailCommand,
)
from authhub.modules.user_management.domain.events.user_events import ForgotPassword as ForgotPasswordEvent
from authhub.modules.user_management.domain.models.token import Token, TokenLifetimes, TokenType
from authhub.modules.user_management.domain.repositories.token_repository import TokenRepository
from authhub.modules.user_management.domain.repositories.user_repository import UserRepository
from authhub.modules.user_management.domain.services.security import (
    JWTTokenGenerator,
    PasswordHasher,
    TokenBlackList,
    TokenGenerator,
)
from authhub.shared.core.exceptions import AuthenticationError
from authhub.shared.core.operation import Operation
from authhub.shared.utils.logging import get_logger

logger = get_logger(__name__)


class LoginUser(Operation):
    """
    Check credentials and issue an access/refresh JWT pair.

    Unknown email, wrong password and unverified account are distinct
    channels; the wrong-password message stays generic.
    """

    class Output(str, Enum):
        SUCCESS = "SUCCESS"
        ERROR = "ERROR"
        VALIDATION_ERROR = "VALIDATION_ERROR"
        INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
        USER_NOT_FOUND = "USER_NOT_FOUND"
        ACCOUNT_NOT_VERIFIED = "ACCOUNT_NOT_VERIFIED"

    failure_code = "LOGIN_FAILED"
    log_payload = False

    def __init__(
        self,
        users: UserRepository,
        hasher: PasswordHasher,
        jwt: JWTTokenGenerator,
        lifetimes: TokenLifetimes,
        logger=None,
    ):
        super().__init__(logger=logger)
        self._users = users
        self._hasher = hasher
        self._jwt = jwt
        self._lifetimes = lifetimes

    async def run(self, credentials: Union[LoginCommand, Mapping[str, Any]]) -> None:
        credentials = self.validate_input(LoginCommand, credentials)
        if credentials is None:
            return

        user = await self._users.get_by_email_with_password(credentials.email)
        if user is None:
            logger.warning(f"Authentication failed: no user found with email {credentials.email}")
            self.emit(self.Output.USER_NOT_FOUND, f"No user found with email {credentials.email}")
            return

        if not await self._hasher.verify(credentials.password, user.password_hash):
            logger.warning("Authentication failed: invalid credentials", user_id=user.id)
            self.emit(self.Output.INVALID_CREDENTIALS, "Invalid email or password.")
            return

        if not user.is_verified:
            self.emit(self.Output.ACCOUNT_NOT_VERIFIED, "Please verify your email before logging in.")
            return

        access = self._jwt.issue(
            {"user_id": user.id, "email": user.email, "role": user.role.value},
            TokenType.ACCESS,
            self._lifetimes.access_minutes,
        )
        refresh = self._jwt.issue(
            {"user_id": user.id},
            TokenType.REFRESH,
            self._lifetimes.refresh_minutes,
        )

        logger.info("User logged in", user_id=user.id)
        self.emit_success(
            {
                "user_id": user.id,
                "access_token": access.token,
                "access_token_expires": access.expires_at,
                "refresh_token": refresh.token,
                "refresh_token_expires": refresh.expires_at,
            }
        )


class LogoutUser(Operation):
    """Blacklist both tokens of a session for the rest of their lifetime."""

    class Output(str, Enum):
        SUCCESS = "SUCCESS"
        ERROR = "ERROR"
        VALIDATION_ERROR = "VALIDATION_ERROR"
        INVALID_TOKEN = "INVALID_TOKEN"

    failure_code = "LOGOUT_FAILED"
    log_payload = False

    def __init__(self, jwt: JWTTokenGenerator, blacklist: TokenBlackList, logger=None):
        super().__init__(logger=logger)
        self._jwt = jwt
        self._blacklist = blacklist

    def _remaining_seconds(self, claims: Mapping[str, Any]) -> int:
        expires = int(claims.get("exp", 0))
        now = int(datetime.now(timezone.utc).timestamp())
        return max(1, expires - now)

    async def run(self, tokens: Union[LogoutCommand, Mapping[str, Any]]) -> None:
        tokens = self.validate_input(LogoutCommand, tokens)
        if tokens is None:
            return

        try:
            access_claims = self._jwt.validate(tokens.access_token, TokenType.ACCESS)
            refresh_claims = self._jwt.validate(tokens.refresh_token, TokenType.REFRESH)
        except AuthenticationError as e:
            logger.warning(f"Logout rejected: {e.message}")
            self.emit(self.Output.INVALID_TOKEN, "Invalid or missing tokens provided.")
            return

        await asyncio.gather(
            self._blacklist.add(tokens.access_token, self._remaining_seconds(access_claims)),
            self._blacklist.add(tokens.refresh_token, self._remaining_seconds(refresh_claims)),
        )

        self.emit_success({"message": "Successfully logged out."})


class ForgotPassword(Operation):
    """
    Issue a reset-password token for a verified account.

    Publishes ``ForgotPassword`` so the reset email is sent out of band.
    """

    class Output(str, Enum):
        SUCCESS = "SUCCESS"
        ERROR = "ERROR"
        VALIDATION_ERROR = "VALIDATION_ERROR"
        USER_NOT_FOUND = "USER_NOT_FOUND"
        ACCOUNT_NOT_VERIFIED = "ACCOUNT_NOT_VERIFIED"

    failure_code = "FORGOT_PASSWORD_FAILED"
    log_payload = False

    def __init__(
        self,
        users: UserRepository,
        tokens: TokenRepository,
        generator: TokenGenerator,
        lifetimes: TokenLifetimes,
        event_bus,
        logger=None,
    ):
        super().__init__(logger=logger, event_bus=event_bus)
        self._users = users
        self._tokens = tokens
        self._generator = generator
        self._lifetimes = lifetimes

    async def run(self, command: Union[ForgotPasswordCommand, Mapping[str, Any]]) -> None:
        command = self.validate_input(ForgotPasswordCommand, command)
        if command is None:
            return

        user = await self._users.get_by_email(command.email)
        if user is None:
            self.emit(self.Output.USER_NOT_FOUND, f"No user found with email {command.email}")
            return

        if not user.is_verified:
            self.emit(self.Output.ACCOUNT_NOT_VERIFIED, "Please verify your email before resetting password")
            return

        token = await self._tokens.create(
            Token(
                user_id=user.id,
                token=self._generator.generate(TokenType.RESET_PASSWORD),
                type=TokenType.RESET_PASSWORD,
                expires_at=datetime.now(timezone.utc) + timedelta(minutes=self._lifetimes.reset_password_minutes),
            )
        )

        self.publish(ForgotPasswordEvent(user=user, token=token))
        self.emit_success({"message": "Password reset link sent to your email"})


class ResetPassword(Operation):
    """Redeem a reset-password token and store the new password."""

    class Output(str, Enum):
        SUCCESS = "SUCCESS"
        ERROR = "ERROR"
        VALIDATION_ERROR = "VALIDATION_ERROR"
        TOKEN_NOT_FOUND = "TOKEN_NOT_FOUND"
        TOKEN_EXPIRED = "TOKEN_EXPIRED"
        INVALID_TOKEN = "INVALID_TOKEN"
        USER_NOT_FOUND = "USER_NOT_FOUND"

    failure_code = "RESET_PASSWORD_FAILED"
    log_payload = False

    def __init__(self, users: UserRepository, tokens: TokenRepository, hasher: PasswordHasher, logger=None):
        super().__init__(logger=logger)
        self._users = users
        self._tokens = tokens
        self._hasher = hasher

    async def run(self, command: Union[ResetPasswordCommand, Mapping[str, Any]]) -> None:
        command = self.validate_input(ResetPasswordCommand, command)
        if command is None:
            return

        record = await self._tokens.get_by_token(command.token)
        if record is None:
            self.emit(self.Output.TOKEN_NOT_FOUND, "Invalid or expired password reset link.")
            return

        if record.type != TokenType.RESET_PASSWORD:
            logger.warning(
                f"Password reset with a {record.type.value} token", token_id=record.id
            )
            self.emit(self.Output.INVALID_TOKEN, "Invalid password reset link.")
            return

        if record.is_expired():
            await self._tokens.delete(record.id)
            self.emit(self.Output.TOKEN_EXPIRED, "Password reset link has expired. Please request a new one.")
            return

        user = await self._users.get_by_id(record.user_id)
        if user is None:
            self.emit(self.Output.USER_NOT_FOUND, "User not found for this password reset link.")
            return

        password_hash = await self._hasher.hash(command.new_password)
        await self._users.update(user.id, {"password_hash": password_hash})
        await self._tokens.delete(record.id)

        self.emit_success({"message": "Password has been reset successfully.", "user_id": user.id})


class VerifyEmail(Operation):
    """Redeem a verification token and mark the account verified."""

    class Output(str, Enum):
        SUCCESS = "SUCCESS"
        ERROR = "ERROR"
        VALIDATION_ERROR = "VALIDATION_ERROR"
        TOKEN_NOT_FOUND = "TOKEN_NOT_FOUND"
        TOKEN_EXPIRED = "TOKEN_EXPIRED"
        INVALID_TOKEN = "INVALID_TOKEN"
        USER_NOT_FOUND = "USER_NOT_FOUND"
        ALREADY_VERIFIED = "ALREADY_VERIFIED"

    failure_code = "VERIFY_EMAIL_FAILED"

    def __init__(self, users: UserRepository, tokens: TokenRepository, logger=None):
        super().__init__(logger=logger)
        self._users = users
        self._tokens = tokens

    async def run(self, command: Union[str, VerifyEmailCommand, Mapping[str, Any]]) -> None:
        if isinstance(command, str):
            command = {"token": command}
        command = self.validate_input(VerifyEmailCommand, command)
        if command is None:
            return

        record = await self._tokens.get_by_token(command.token)
        if record is None:
            self.emit(self.Output.TOKEN_NOT_FOUND, "Verification token not found")
            return

        if record.type != TokenType.VERIFICATION:
            self.emit(self.Output.INVALID_TOKEN, "Invalid token for verification")
            return

        if record.is_expired():
            self.emit(self.Output.TOKEN_EXPIRED, "Verification token has expired")
            return

        user = await self._users.get_by_id(record.user_id)
        if user is None:
            self.emit(self.Output.USER_NOT_FOUND, "User not found for this verification token")
            return

        if user.is_verified:
            self.emit(self.Output.ALREADY_VERIFIED, {"user_id": user.id})
            return

        await self._users.update(user.id, {"is_verified": True})
        await self._tokens.delete(record.id)

        self.emit_success({"user_id": user.id})
