"""
Pytest configuration shared by every AuthHub test.

Provides domain object factories, the in-memory collaborators from
tests.fakes and a fresh DomainEventBus per test.
"""

import pytest

from authhub.modules.user_management.domain.models.token import TokenLifetimes
from authhub.modules.user_management.domain.models.user import User, UserWithPassword
from authhub.shared.core.event_bus import DomainEventBus
from tests.fakes import (
    InMemoryBlackList,
    InMemoryTokenRepository,
    InMemoryUserRepository,
    PlainPasswordHasher,
    RecordingEmailService,
    SequentialTokenGenerator,
    make_user,
)


@pytest.fixture
def user() -> User:
    """A stored, unverified user (public view)."""
    return make_user().without_password()


@pytest.fixture
def verified_user() -> UserWithPassword:
    return make_user(is_verified=True)


@pytest.fixture
def lifetimes() -> TokenLifetimes:
    return TokenLifetimes(access_minutes=30, refresh_days=30, reset_password_minutes=10, verify_email_minutes=10)


@pytest.fixture
def bus() -> DomainEventBus:
    return DomainEventBus(name="test")


@pytest.fixture
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def tokens() -> InMemoryTokenRepository:
    return InMemoryTokenRepository()


@pytest.fixture
def hasher() -> PlainPasswordHasher:
    return PlainPasswordHasher()


@pytest.fixture
def generator() -> SequentialTokenGenerator:
    return SequentialTokenGenerator()


@pytest.fixture
def blacklist() -> InMemoryBlackList:
    return InMemoryBlackList()


@pytest.fixture
def mailer() -> RecordingEmailService:
    return RecordingEmailService()
