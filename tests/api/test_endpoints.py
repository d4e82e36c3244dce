"""
API tests for the v1 routers.

The application is built around a Container holding in-memory
collaborators and driven through httpx's ASGI transport, so event bus
handlers run on the test loop and can be drained between requests.
"""

import pytest
from httpx import ASGITransport, AsyncClient

from authhub.main import create_application
from authhub.modules.user_management.domain.models.user import UserRole
from authhub.shared.config.settings import Settings
from authhub.shared.core.dependencies import Container
from tests.fakes import (
    TEST_PASSWORD,
    InMemoryBlackList,
    InMemoryTokenRepository,
    InMemoryUserRepository,
    PlainPasswordHasher,
    RecordingEmailService,
    SequentialTokenGenerator,
    make_user,
)

API = "/api/v1"

SIGNUP = {
    "name": "Jane",
    "email": "jane@example.com",
    "username": "jane",
    "password": TEST_PASSWORD,
    "repeatPassword": TEST_PASSWORD,
}


@pytest.fixture
def settings():
    return Settings(PUBLIC_BASE_URL="https://auth.example.com", LOG_FORMAT="text")


@pytest.fixture
async def container(settings):
    container = Container(
        settings,
        users=InMemoryUserRepository(),
        tokens=InMemoryTokenRepository(),
        hasher=PlainPasswordHasher(),
        generator=SequentialTokenGenerator(),
        blacklist=InMemoryBlackList(),
        email=RecordingEmailService(),
    )
    await container.startup()
    yield container
    await container.shutdown()


@pytest.fixture
async def client(settings, container):
    app = create_application(settings, container)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


async def signup(client, container, **overrides):
    response = await client.post(f"{API}/users", json={**SIGNUP, **overrides})
    await container.event_bus.drain()
    return response


async def verification_token(container, user_id):
    [token] = await container.tokens.list_by_user_id(user_id)
    return token.token


async def login(client, email):
    response = await client.post(f"{API}/auth/login", json={"email": email, "password": TEST_PASSWORD})
    return response.json()


async def bearer(client, container, role=UserRole.ADMIN, username="admin"):
    email = f"{username}@example.com"
    await container.users.create(make_user(name=username, email=email, username=username, role=role, is_verified=True))
    tokens = await login(client, email)
    return {"Authorization": f"Bearer {tokens['access_token']}"}


class TestUsersEndpoints:
    async def test_signup_returns_201_without_password(self, client, container):
        response = await signup(client, container)

        assert response.status_code == 201
        body = response.json()
        assert body["email"] == "jane@example.com"
        assert body["is_verified"] is False
        assert "password_hash" not in body
        assert len(container.email.sent) == 1

    async def test_duplicate_signup_is_409(self, client, container):
        await signup(client, container)

        response = await signup(client, container)

        assert response.status_code == 409
        error = response.json()["error"]
        assert error["code"] == "USER_EXISTS"
        assert error["message"] == "User with email jane@example.com already exists."

    async def test_invalid_signup_is_422_with_field_errors(self, client, container):
        response = await signup(client, container, email="not-an-email")

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["code"] == "VALIDATION_ERROR"
        assert error["details"]["errors"][0]["loc"] == ["email"]

    async def test_get_list_update_delete(self, client, container):
        admin = await bearer(client, container)
        user_id = (await signup(client, container)).json()["id"]

        assert (await client.get(f"{API}/users/{user_id}", headers=admin)).json()["id"] == user_id

        listing = (await client.get(f"{API}/users", params={"page": 1, "limit": 5}, headers=admin)).json()
        assert listing["total"] == 2
        assert user_id in [user["id"] for user in listing["body"]]

        patched = await client.patch(f"{API}/users/{user_id}", json={"name": "Jane Doe"}, headers=admin)
        assert patched.status_code == 200
        assert patched.json()["name"] == "Jane Doe"

        deleted = await client.delete(f"{API}/users/{user_id}", headers=admin)
        await container.event_bus.drain()
        assert deleted.status_code == 200
        assert deleted.json() == {"user_id": user_id, "message": "Deletion was successful"}
        assert await container.tokens.list_by_user_id(user_id) == []

    async def test_unknown_user_is_404(self, client, container):
        admin = await bearer(client, container)

        response = await client.get(f"{API}/users/missing", headers=admin)

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "USER_NOT_FOUND"

    async def test_patch_conflicts_are_409(self, client, container):
        admin = await bearer(client, container)
        user_id = (await signup(client, container)).json()["id"]
        await signup(client, container, email="other@example.com", username="other")

        response = await client.patch(f"{API}/users/{user_id}", json={"username": "other"}, headers=admin)

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "USERNAME_TAKEN"

    async def test_repository_failure_is_500_with_operation_code(self, client, container):
        admin = await bearer(client, container)
        stored_lookup = container.users.get_by_id

        async def failing_lookup(user_id):
            if user_id == "anything":
                raise RuntimeError("db down")
            return await stored_lookup(user_id)

        container.users.get_by_id = failing_lookup

        response = await client.get(f"{API}/users/anything", headers={**admin, "X-Request-ID": "req-42"})

        assert response.status_code == 500
        error = response.json()["error"]
        assert error["code"] == "GET_USER_FAILED"
        assert error["request_id"] == "req-42"
        assert response.headers["X-Request-ID"] == "req-42"


class TestUsersAccessControl:
    @pytest.mark.parametrize(
        "method, path",
        [("get", "/users"), ("get", "/users/some-id"), ("patch", "/users/some-id"), ("delete", "/users/some-id")],
    )
    async def test_missing_token_is_401(self, client, method, path):
        kwargs = {"json": {"name": "x"}} if method == "patch" else {}

        response = await getattr(client, method)(f"{API}{path}", **kwargs)

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        error = response.json()["error"]
        assert error["code"] == "AUTHENTICATION_ERROR"
        assert error["message"] == "No token provided"

    async def test_signup_stays_public(self, client, container):
        assert (await signup(client, container)).status_code == 201

    async def test_malformed_token_is_401(self, client):
        response = await client.get(f"{API}/users", headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTHENTICATION_ERROR"

    async def test_refresh_token_is_not_an_access_token(self, client, container):
        await bearer(client, container)
        tokens = await login(client, "admin@example.com")

        response = await client.get(f"{API}/users", headers={"Authorization": f"Bearer {tokens['refresh_token']}"})

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Invalid token type"

    async def test_token_revoked_by_logout_is_401(self, client, container):
        await bearer(client, container)
        tokens = await login(client, "admin@example.com")
        headers = {"Authorization": f"Bearer {tokens['access_token']}"}
        assert (await client.get(f"{API}/users", headers=headers)).status_code == 200

        logout = await client.post(
            f"{API}/auth/logout",
            json={"accessToken": tokens["access_token"], "refreshToken": tokens["refresh_token"]},
            headers=headers,
        )
        assert logout.status_code == 200

        response = await client.get(f"{API}/users", headers=headers)

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Token has been revoked"

    async def test_token_of_deleted_user_is_401(self, client, container):
        headers = await bearer(client, container, role=UserRole.USER, username="gone")
        [row] = [row for row in container.users.rows.values() if row.username == "gone"]
        await container.users.delete(row.id)

        response = await client.get(f"{API}/users", headers=headers)

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Unauthorized access"

    async def test_user_role_can_read(self, client, container):
        user = await bearer(client, container, role=UserRole.USER, username="reader")

        response = await client.get(f"{API}/users", headers=user)

        assert response.status_code == 200
        assert response.json()["total"] == 1

    @pytest.mark.parametrize("method", ["patch", "delete"])
    async def test_user_role_cannot_modify(self, client, container, method):
        user = await bearer(client, container, role=UserRole.USER, username="reader")
        target_id = (await signup(client, container)).json()["id"]
        kwargs = {"json": {"name": "Changed"}} if method == "patch" else {}

        response = await getattr(client, method)(f"{API}/users/{target_id}", headers=user, **kwargs)

        assert response.status_code == 403
        error = response.json()["error"]
        assert error["code"] == "AUTHORIZATION_ERROR"
        assert error["details"]["required_roles"] == ["ADMIN"]
        assert container.users.rows[target_id].name == "Jane"


class TestAuthEndpoints:
    async def test_verify_login_logout_flow(self, client, container):
        user_id = (await signup(client, container)).json()["id"]

        unverified = await client.post(f"{API}/auth/login", json={"email": "jane@example.com", "password": TEST_PASSWORD})
        assert unverified.status_code == 403

        token = await verification_token(container, user_id)
        verified = await client.get(f"{API}/auth/verify-email", params={"token": token})
        assert verified.status_code == 200
        assert verified.json() == {"user_id": user_id}

        again = await client.get(f"{API}/auth/verify-email", params={"token": token})
        assert again.status_code == 404

        login = await client.post(f"{API}/auth/login", json={"email": "jane@example.com", "password": TEST_PASSWORD})
        assert login.status_code == 200
        tokens = login.json()

        logout = await client.post(
            f"{API}/auth/logout",
            json={"accessToken": tokens["access_token"], "refreshToken": tokens["refresh_token"]},
            headers={"Authorization": f"Bearer {tokens['access_token']}"},
        )
        assert logout.status_code == 200
        assert logout.json() == {"message": "Successfully logged out."}

    async def test_wrong_password_is_401(self, client, container):
        await signup(client, container)

        response = await client.post(f"{API}/auth/login", json={"email": "jane@example.com", "password": "nope"})

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "INVALID_CREDENTIALS"

    async def test_unknown_login_is_404(self, client):
        response = await client.post(f"{API}/auth/login", json={"email": "ghost@example.com", "password": "x"})

        assert response.status_code == 404

    async def test_logout_with_swapped_tokens_is_401(self, client, container):
        user_id = (await signup(client, container)).json()["id"]
        await client.get(f"{API}/auth/verify-email", params={"token": await verification_token(container, user_id)})
        tokens = (await client.post(
            f"{API}/auth/login", json={"email": "jane@example.com", "password": TEST_PASSWORD}
        )).json()

        response = await client.post(
            f"{API}/auth/logout",
            json={"access_token": tokens["refresh_token"], "refresh_token": tokens["access_token"]},
            headers={"Authorization": f"Bearer {tokens['access_token']}"},
        )

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "INVALID_TOKEN"

    async def test_logout_without_bearer_token_is_401(self, client, container):
        await bearer(client, container)
        tokens = await login(client, "admin@example.com")

        response = await client.post(
            f"{API}/auth/logout",
            json={"accessToken": tokens["access_token"], "refreshToken": tokens["refresh_token"]},
        )

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "AUTHENTICATION_ERROR"
        assert not await container.blacklist.contains(tokens["access_token"])

    async def test_forgot_and_reset_password(self, client, container):
        user_id = (await signup(client, container)).json()["id"]
        await client.get(f"{API}/auth/verify-email", params={"token": await verification_token(container, user_id)})

        forgot = await client.post(f"{API}/auth/forgot-password", json={"email": "jane@example.com"})
        await container.event_bus.drain()
        assert forgot.status_code == 200

        reset_url = container.email.sent[-1].context["reset_url"]
        assert reset_url.startswith("https://auth.example.com/auth/reset-pass?token=")
        reset_token = reset_url.split("token=")[1]

        reset = await client.post(
            f"{API}/auth/reset-password", json={"token": reset_token, "newPassword": "N3w!Passw0rd"}
        )
        assert reset.status_code == 200
        assert reset.json()["user_id"] == user_id

        reused = await client.post(
            f"{API}/auth/reset-password", json={"token": reset_token, "newPassword": "N3w!Passw0rd"}
        )
        assert reused.status_code == 404

    async def test_forgot_password_for_unverified_account_is_403(self, client, container):
        await signup(client, container)

        response = await client.post(f"{API}/auth/forgot-password", json={"email": "jane@example.com"})

        assert response.status_code == 403
        assert response.json()["error"]["code"] == "ACCOUNT_NOT_VERIFIED"

    async def test_verify_email_without_token_is_422(self, client):
        response = await client.get(f"{API}/auth/verify-email")

        assert response.status_code == 422


class TestServiceEndpoints:
    async def test_health_reports_event_bus(self, client):
        response = await client.get(f"{API}/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["checks"]["event_bus"]["sealed"] is True
        assert body["checks"]["event_bus"]["subscription_count"] == 4

    async def test_root(self, client):
        response = await client.get("/")

        assert response.json()["api_base"] == API

    async def test_request_id_is_generated_when_missing(self, client):
        response = await client.get(f"{API}/health")

        assert response.headers["X-Request-ID"]
