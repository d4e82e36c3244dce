"""
Composition root and FastAPI dependencies for the AuthHub service.
Builds every collaborator once, hands out one fresh operation per request and wires the
event subscribers before the first request arrives.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import Request

from authhub.modules.user_management.application.operations.auth import (
    ForgotPassword,
    LoginUser,
    LogoutUser,
    ResetPassword,
    VerifyEmail,
)
from authhub.modules.user_management.application.operations.notification import (
    SendEmailOnForgotPassword,
    SendEmailOnUserCreation,
)
from authhub.modules.user_management.application.operations.token import (
    CreateTokenOnUserCreation,
    DeleteTokensOnUserDeletion,
)
from authhub.modules.user_management.application.operations.user import (
    CreateUser,
    DeleteUser,
    GetAllUsers,
    GetUser,
    UpdateUser,
)
from authhub.modules.user_management.domain.models.token import TokenLifetimes
from authhub.modules.user_management.domain.repositories.token_repository import TokenRepository
from authhub.modules.user_management.domain.repositories.user_repository import UserRepository
from authhub.modules.user_management.domain.services.email import EmailService
from authhub.modules.user_management.domain.services.security import (
    JWTTokenGenerator,
    PasswordHasher,
    TokenBlackList,
    TokenGenerator,
)
from authhub.modules.user_management.infrastructure.database.token_repository_impl import TokenRepositoryImpl
from authhub.modules.user_management.infrastructure.database.user_repository_impl import UserRepositoryImpl
from authhub.shared.config.redis import RedisConfig
from authhub.shared.config.settings import Settings
from authhub.shared.core.bootstrap import EventSubscriberOperation, run_bootstrappers
from authhub.shared.core.event_bus import DomainEventBus
from authhub.shared.core.security import BcryptPasswordHasher, JoseJWTTokenGenerator, SecretsTokenGenerator
from authhub.shared.infrastructure.cache.token_blacklist import RedisTokenBlackList
from authhub.shared.infrastructure.database.connection import DatabaseConnectionManager
from authhub.shared.infrastructure.database.session import DatabaseSessionManager
from authhub.shared.infrastructure.email.email_service import LoggingEmailService, SMTPEmailService
from authhub.shared.utils.logging import get_logger

logger = logging.getLogger(__name__)


class Container:
    """
    Owns the long-lived collaborators of one application instance.

    Any collaborator can be passed in explicitly; the rest are built from
    settings. Operations are built per call, the four event subscribers
    once per container.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        users: Optional[UserRepository] = None,
        tokens: Optional[TokenRepository] = None,
        hasher: Optional[PasswordHasher] = None,
        jwt: Optional[JWTTokenGenerator] = None,
        generator: Optional[TokenGenerator] = None,
        blacklist: Optional[TokenBlackList] = None,
        email: Optional[EmailService] = None,
        event_bus: Optional[DomainEventBus] = None,
    ):
        self.settings = settings
        self.database = None
        self.redis = None

        if users is None or tokens is None:
            self.database = DatabaseConnectionManager(settings.DATABASE_URL, echo=settings.DB_ECHO)
            sessions = DatabaseSessionManager(self.database)
            users = users or UserRepositoryImpl(sessions)
            tokens = tokens or TokenRepositoryImpl(sessions)

        hasher = hasher or BcryptPasswordHasher(rounds=settings.BCRYPT_ROUNDS)
        jwt = jwt or JoseJWTTokenGenerator(settings.JWT_SECRET_KEY, settings.JWT_ALGORITHM)
        generator = generator or SecretsTokenGenerator()

        if blacklist is None:
            self.redis = RedisConfig(settings)
            blacklist = RedisTokenBlackList(self.redis.create_redis_client(), settings.REDIS_BLACKLIST_PREFIX)

        if email is None:
            if settings.SMTP_ENABLED:
                email = SMTPEmailService(
                    host=settings.SMTP_HOST,
                    port=settings.SMTP_PORT,
                    sender=settings.EMAIL_FROM,
                    username=settings.SMTP_USERNAME,
                    password=settings.SMTP_PASSWORD,
                    use_tls=settings.SMTP_USE_TLS,
                    timeout=settings.SMTP_TIMEOUT,
                )
            else:
                email = LoggingEmailService()

        self.users = users
        self.tokens = tokens
        self.hasher = hasher
        self.jwt = jwt
        self.generator = generator
        self.blacklist = blacklist
        self.email = email
        self.event_bus = event_bus if event_bus is not None else DomainEventBus()
        self.lifetimes = TokenLifetimes(
            access_minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES,
            refresh_days=settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS,
            reset_password_minutes=settings.JWT_RESET_PASSWORD_EXPIRE_MINUTES,
            verify_email_minutes=settings.JWT_VERIFY_EMAIL_EXPIRE_MINUTES,
        )
        self.operation_logger = get_logger("authhub.operations")
        self.subscribers: List[EventSubscriberOperation] = self._build_subscribers()
        self._bootstrapped = False

    # =========================================================================
    # EVENT SUBSCRIBERS
    # =========================================================================

    def _build_subscribers(self) -> List[EventSubscriberOperation]:
        base_url = self.settings.public_base_url
        prefix = self.settings.EMAIL_SUBJECT_PREFIX
        return [
            CreateTokenOnUserCreation(
                self.tokens, self.generator, self.lifetimes, self.event_bus, logger=self.operation_logger
            ),
            SendEmailOnUserCreation(
                self.users,
                self.tokens,
                self.email,
                base_url,
                self.lifetimes.verify_email_minutes,
                subject_prefix=prefix,
                event_bus=self.event_bus,
                logger=self.operation_logger,
            ),
            SendEmailOnForgotPassword(
                self.email,
                base_url,
                self.lifetimes.reset_password_minutes,
                subject_prefix=prefix,
                event_bus=self.event_bus,
                logger=self.operation_logger,
            ),
            DeleteTokensOnUserDeletion(self.tokens, event_bus=self.event_bus, logger=self.operation_logger),
        ]

    def bootstrap(self) -> int:
        """
        Register every subscriber on the bus once and seal it.

        Later calls are no-ops so subscribers never receive an event twice.
        """
        if self._bootstrapped:
            logger.warning("Container already bootstrapped, skipping")
            return 0
        count = run_bootstrappers(self.subscribers, self.event_bus)
        self._bootstrapped = True
        return count

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    async def startup(self) -> None:
        if self.database is not None:
            await self.database.create_all()
        removed = await self.tokens.remove_expired()
        logger.info(f"Purged {removed} expired tokens at startup")
        self.bootstrap()

    async def shutdown(self) -> None:
        await self.event_bus.drain()
        if self.database is not None:
            await self.database.close()
        if self.redis is not None:
            await self.redis.close_connections()

    # =========================================================================
    # OPERATION FACTORIES
    # =========================================================================

    def create_user(self) -> CreateUser:
        return CreateUser(self.users, self.hasher, self.event_bus, logger=self.operation_logger)

    def get_user(self) -> GetUser:
        return GetUser(self.users, logger=self.operation_logger)

    def get_all_users(self) -> GetAllUsers:
        return GetAllUsers(self.users, logger=self.operation_logger)

    def update_user(self) -> UpdateUser:
        return UpdateUser(self.users, self.hasher, logger=self.operation_logger)

    def delete_user(self) -> DeleteUser:
        return DeleteUser(self.users, self.event_bus, logger=self.operation_logger)

    def login_user(self) -> LoginUser:
        return LoginUser(self.users, self.hasher, self.jwt, self.lifetimes, logger=self.operation_logger)

    def logout_user(self) -> LogoutUser:
        return LogoutUser(self.jwt, self.blacklist, logger=self.operation_logger)

    def forgot_password(self) -> ForgotPassword:
        return ForgotPassword(
            self.users, self.tokens, self.generator, self.lifetimes, self.event_bus, logger=self.operation_logger
        )

    def reset_password(self) -> ResetPassword:
        return ResetPassword(self.users, self.tokens, self.hasher, logger=self.operation_logger)

    def verify_email(self) -> VerifyEmail:
        return VerifyEmail(self.users, self.tokens, logger=self.operation_logger)


def get_container(request: Request) -> Container:
    """FastAPI dependency returning the application's container."""
    return request.app.state.container


async def health_status(container: Container) -> Dict[str, Any]:
    """Collect database and redis health for the health router."""
    checks: Dict[str, Any] = {"event_bus": container.event_bus.get_stats()}
    if container.database is not None:
        checks["database"] = await container.database.health_check()
    if container.redis is not None:
        checks["redis"] = await container.redis.health_check()
    return checks
