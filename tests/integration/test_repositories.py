"""Integration tests for the SQLAlchemy repositories on a file-backed aiosqlite database."""

import asyncio
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from authhub.modules.user_management.application.operations.user import CreateUser, UpdateUser
from authhub.modules.user_management.domain.models.token import TokenType
from authhub.modules.user_management.infrastructure.database.token_repository_impl import TokenRepositoryImpl
from authhub.modules.user_management.infrastructure.database.user_repository_impl import UserRepositoryImpl
from authhub.shared.core.event_bus import DomainEventBus
from authhub.shared.core.exceptions import DuplicateResourceError
from authhub.shared.infrastructure.database.connection import DatabaseConnectionManager
from authhub.shared.infrastructure.database.session import DatabaseSessionManager
from tests.fakes import TEST_PASSWORD, PlainPasswordHasher, make_token, make_user

SIGNUP = {
    "name": "Jane",
    "email": "jane@example.com",
    "username": "jane",
    "password": TEST_PASSWORD,
    "repeatPassword": TEST_PASSWORD,
}


@pytest.fixture
async def database(tmp_path):
    manager = DatabaseConnectionManager(f"sqlite+aiosqlite:///{tmp_path / 'authhub.db'}")
    await manager.create_all()
    yield manager
    await manager.close()


@pytest.fixture
def sessions(database):
    return DatabaseSessionManager(database)


@pytest.fixture
def user_repo(sessions):
    return UserRepositoryImpl(sessions)


@pytest.fixture
def token_repo(sessions):
    return TokenRepositoryImpl(sessions)


class TestDatabaseConnectionManager:
    async def test_health_check(self, database):
        health = await database.health_check()

        assert health["status"] == "healthy"

    async def test_uninitialized_manager_is_unhealthy(self, tmp_path):
        manager = DatabaseConnectionManager(f"sqlite+aiosqlite:///{tmp_path / 'other.db'}")

        assert (await manager.health_check())["status"] == "unhealthy"
        with pytest.raises(RuntimeError):
            manager.engine


class TestUserRepositoryImpl:
    async def test_create_and_lookups(self, user_repo):
        created = await user_repo.create(make_user(email="Jane@Example.com"))

        assert created.email == "jane@example.com"
        assert (await user_repo.get_by_id(created.id)).username == "jane"
        assert (await user_repo.get_by_email("JANE@example.com")).id == created.id
        assert (await user_repo.get_by_username("jane")).id == created.id
        assert await user_repo.get_by_id("missing") is None

    async def test_password_hash_only_from_credential_lookup(self, user_repo):
        created = await user_repo.create(make_user())

        assert not hasattr(await user_repo.get_by_id(created.id), "password_hash")
        with_password = await user_repo.get_by_email_with_password("jane@example.com")
        assert with_password.password_hash == "hashed::Str0ng!Pass"

    async def test_duplicate_email_is_reported_by_field(self, user_repo):
        await user_repo.create(make_user())

        with pytest.raises(DuplicateResourceError) as exc_info:
            await user_repo.create(make_user(username="other"))

        assert exc_info.value.field == "email"
        assert exc_info.value.status_code == 409

    async def test_duplicate_username_is_reported_by_field(self, user_repo):
        await user_repo.create(make_user())

        with pytest.raises(DuplicateResourceError) as exc_info:
            await user_repo.create(make_user(email="other@example.com"))

        assert exc_info.value.field == "username"

    async def test_update_onto_taken_username_is_reported_by_field(self, user_repo):
        await user_repo.create(make_user())
        other = await user_repo.create(make_user(email="other@example.com", username="other"))

        with pytest.raises(DuplicateResourceError) as exc_info:
            await user_repo.update(other.id, {"username": "jane"})

        assert exc_info.value.field == "username"
        assert (await user_repo.get_by_id(other.id)).username == "other"

    async def test_list_pages(self, user_repo):
        for i in range(5):
            await user_repo.create(make_user(email=f"u{i}@example.com", username=f"u{i}"))

        page = await user_repo.list(page=2, limit=2)

        assert page.total == 5
        assert page.last_page == 3
        assert [u.username for u in page.body] == ["u2", "u3"]

    async def test_update(self, user_repo):
        created = await user_repo.create(make_user())

        updated = await user_repo.update(created.id, {"is_verified": True, "name": "Jane Doe"})

        assert updated.is_verified
        assert updated.name == "Jane Doe"
        assert (await user_repo.get_by_id(created.id)).is_verified

    async def test_update_missing_and_unknown_fields(self, user_repo):
        assert await user_repo.update("missing", {"name": "x"}) is None
        with pytest.raises(ValueError):
            await user_repo.update("missing", {"id": "x"})

    async def test_delete(self, user_repo):
        created = await user_repo.create(make_user())

        assert await user_repo.delete(created.id)
        assert not await user_repo.delete(created.id)
        assert await user_repo.get_by_id(created.id) is None



class TestConcurrentUserWrites:
    async def test_simultaneous_signups_yield_one_user_and_one_conflict(self, user_repo):
        def signup():
            return CreateUser(user_repo, PlainPasswordHasher(), DomainEventBus()).execute(SIGNUP)

        outcomes = await asyncio.gather(signup(), signup())

        assert sorted(outcome.channel for outcome in outcomes) == ["SUCCESS", "USER_EXISTS"]
        assert (await user_repo.list()).total == 1

    async def test_insert_conflict_after_clean_precheck_is_user_exists(self, user_repo):
        await user_repo.create(make_user())
        user_repo.get_by_email = AsyncMock(return_value=None)
        user_repo.get_by_username = AsyncMock(return_value=None)

        outcome = await CreateUser(user_repo, PlainPasswordHasher(), DomainEventBus()).execute(SIGNUP)

        assert outcome.channel == "USER_EXISTS"
        assert outcome.payload == "User with email jane@example.com already exists."

    async def test_update_conflict_after_clean_precheck_is_email_taken(self, user_repo):
        await user_repo.create(make_user())
        other = await user_repo.create(make_user(email="other@example.com", username="other"))
        user_repo.get_by_email = AsyncMock(return_value=None)

        outcome = await UpdateUser(user_repo, PlainPasswordHasher()).execute(other.id, {"email": "jane@example.com"})

        assert outcome.channel == "EMAIL_TAKEN"
        assert outcome.payload == "Email jane@example.com is already in use"

class TestTokenRepositoryImpl:
    async def test_create_and_get(self, token_repo):
        created = await token_repo.create(make_token("u-1"))

        assert (await token_repo.get_by_token(created.token)).id == created.id
        assert (await token_repo.get_by_id(created.id)).type == TokenType.VERIFICATION
        assert await token_repo.get_by_token("missing") is None

    async def test_list_by_user_with_type_filter(self, token_repo):
        await token_repo.create(make_token("u-1", TokenType.VERIFICATION))
        await token_repo.create(make_token("u-1", TokenType.RESET_PASSWORD))
        await token_repo.create(make_token("u-2", TokenType.VERIFICATION, token="another"))

        assert len(await token_repo.list_by_user_id("u-1")) == 2
        [reset] = await token_repo.list_by_user_id("u-1", TokenType.RESET_PASSWORD)
        assert reset.type == TokenType.RESET_PASSWORD

    async def test_expiry_survives_round_trip(self, token_repo):
        created = await token_repo.create(make_token("u-1", minutes=-1))

        assert (await token_repo.get_by_id(created.id)).is_expired()

    async def test_revoke_and_delete(self, token_repo):
        created = await token_repo.create(make_token("u-1"))

        assert await token_repo.revoke(created.id)
        assert not (await token_repo.get_by_id(created.id)).is_valid()
        assert await token_repo.delete(created.id)
        assert not await token_repo.delete(created.id)

    async def test_remove_expired(self, token_repo):
        await token_repo.create(make_token("u-1", minutes=-10, token="old"))
        kept = await token_repo.create(make_token("u-1", minutes=10, token="fresh"))

        assert await token_repo.remove_expired() == 1
        assert [t.id for t in await token_repo.list_by_user_id("u-1")] == [kept.id]

    async def test_expiry_in_the_future_is_valid(self, token_repo):
        created = await token_repo.create(
            make_token("u-1", expires_at=datetime.now(timezone.utc) + timedelta(hours=1))
        )

        assert (await token_repo.get_by_id(created.id)).is_valid()
