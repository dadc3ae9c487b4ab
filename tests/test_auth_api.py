"""HTTP-level tests for login, logout and the session/CSRF cookies."""

import uuid

import pytest

from conftest import TEST_SECRET, LaggyStore, RecordingSleep
from storefront.application import create_app
from storefront.session.readiness import SessionReadiness
from storefront.support import Config, Crypto

PASSWORD = "correct-horse"
PASSWORD_HASH = Crypto.hash_password(PASSWORD, rounds=4)


class FakeUser:
    def __init__(self, id, email, roles):
        self.id = id
        self.email = email
        self.password_hash = PASSWORD_HASH
        self.roles = roles

    def to_dict(self):
        return {"id": self.id, "email": self.email, "roles": self.roles}


class FakeUserModel:
    users = [FakeUser(1, "ada@example.com", ["customer", "seller"])]

    @classmethod
    async def find_by_email(cls, email):
        return next((u for u in cls.users if u.email == email), None)

    @classmethod
    async def find(cls, pk):
        return next((u for u in cls.users if str(u.id) == str(pk)), None)


@pytest.fixture(autouse=True)
def no_session_gc():
    Config.set("session.SESSION_LOTTERY", [0, 100])


def build_app(store, readiness=None):
    return create_app(
        name=f"storefront_test_{uuid.uuid4().hex[:8]}",
        store=store,
        user_model=FakeUserModel,
        init_db=False,
        configure_logging=False,
        readiness=readiness or SessionReadiness(store, max_attempts=3, initial_delay=0, sleep=RecordingSleep()),
    )


def set_cookies(response):
    return response.headers.get_list("set-cookie")


def cookie_named(response, name):
    return next((c for c in set_cookies(response) if c.startswith(f"{name}=")), None)


async def login(app, email="ada@example.com", password=PASSWORD):
    return await app.asgi_client.post("/api/auth/login", json={"email": email, "password": password})


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_issues_session_and_csrf_token(self):
        store = LaggyStore(hidden_reads=1)
        app = build_app(store)

        _, response = await login(app)

        assert response.status == 200
        body = response.json
        assert body["success"] is True
        assert body["data"]["user"]["email"] == "ada@example.com"
        assert "password_hash" not in body["data"]["user"]

        session_id = Crypto.verify_signed_data(response.cookies["sessionId"], TEST_SECRET)
        assert session_id is not None
        assert body["data"]["csrfToken"] == Crypto.generate_csrf_token(session_id, TEST_SECRET)
        assert response.cookies["csrf-token"] == body["data"]["csrfToken"]

        record = await store.find(session_id)
        assert record.data["user_id"] == "1"
        assert record.data["user_roles"] == ["customer", "seller"]

    @pytest.mark.asyncio
    async def test_session_cookie_attributes(self):
        app = build_app(LaggyStore())

        _, response = await login(app)

        session_cookie = cookie_named(response, "sessionId").lower()
        assert "httponly" in session_cookie
        assert "samesite=lax" in session_cookie
        csrf_cookie = cookie_named(response, "csrf-token").lower()
        assert "httponly" not in csrf_cookie
        assert "samesite=strict" in csrf_cookie

    @pytest.mark.asyncio
    async def test_request_id_header(self):
        app = build_app(LaggyStore())
        _, response = await login(app)
        assert len(response.headers["x-request-id"]) == 10

    @pytest.mark.asyncio
    async def test_wrong_password(self):
        app = build_app(LaggyStore())

        _, response = await login(app, password="wrong-password")

        assert response.status == 401
        assert response.json["code"] == "AUTHENTICATION_ERROR"
        assert cookie_named(response, "sessionId") is None
        assert cookie_named(response, "csrf-token") is None

    @pytest.mark.asyncio
    async def test_unknown_user(self):
        app = build_app(LaggyStore())
        _, response = await login(app, email="nobody@example.com")
        assert response.status == 401

    @pytest.mark.asyncio
    async def test_missing_fields(self):
        app = build_app(LaggyStore())

        _, response = await app.asgi_client.post("/api/auth/login", json={"email": "not-an-email"})

        assert response.status == 400
        assert response.json["code"] == "VALIDATION_ERROR"
        assert set(response.json["errors"]) == {"email", "password"}

    @pytest.mark.asyncio
    async def test_session_never_visible_means_unauthenticated(self):
        store = LaggyStore(hidden_reads=100)
        readiness = SessionReadiness(store, max_attempts=2, initial_delay=0, sleep=RecordingSleep())
        app = build_app(store, readiness)

        _, response = await login(app)

        assert response.status == 401
        # One read when the request session starts, then two verification reads
        assert store.reads == 3
        assert cookie_named(response, "sessionId") is None
        assert cookie_named(response, "csrf-token") is None

    @pytest.mark.asyncio
    async def test_save_failure_skips_verification(self):
        store = LaggyStore(upsert_error=ConnectionError("write refused"))
        app = build_app(store)

        _, response = await login(app)

        assert response.status == 401
        assert store.reads == 1
        assert cookie_named(response, "csrf-token") is None


class TestAuthenticatedRequests:

    async def logged_in(self, app):
        _, response = await login(app)
        session_cookie = response.cookies["sessionId"]
        csrf_token = response.json["data"]["csrfToken"]
        return session_cookie, csrf_token

    @pytest.mark.asyncio
    async def test_me_requires_session(self):
        app = build_app(LaggyStore())

        _, response = await app.asgi_client.get("/api/auth/me")

        assert response.status == 401
        assert response.json["message"] == "Authentication required"

    @pytest.mark.asyncio
    async def test_me_with_session(self):
        app = build_app(LaggyStore())
        session_cookie, _ = await self.logged_in(app)

        _, response = await app.asgi_client.get(
            "/api/auth/me", headers={"cookie": f"sessionId={session_cookie}"}
        )

        assert response.status == 200
        assert response.json["data"]["user"]["id"] == 1

    @pytest.mark.asyncio
    async def test_unsigned_session_cookie_is_ignored(self):
        store = LaggyStore()
        app = build_app(store)
        session_cookie, _ = await self.logged_in(app)
        raw_id = Crypto.verify_signed_data(session_cookie, TEST_SECRET)

        _, response = await app.asgi_client.get(
            "/api/auth/me", headers={"cookie": f"sessionId={raw_id}"}
        )

        assert response.status == 401

    @pytest.mark.asyncio
    async def test_logout_requires_csrf_header(self):
        app = build_app(LaggyStore())
        session_cookie, _ = await self.logged_in(app)

        _, response = await app.asgi_client.post(
            "/api/auth/logout", headers={"cookie": f"sessionId={session_cookie}"}
        )

        assert response.status == 403
        assert response.json["code"] == "CSRF_TOKEN_MISSING"

    @pytest.mark.asyncio
    async def test_logout_rejects_token_of_other_session(self):
        app = build_app(LaggyStore())
        session_cookie, _ = await self.logged_in(app)

        _, response = await app.asgi_client.post(
            "/api/auth/logout",
            headers={
                "cookie": f"sessionId={session_cookie}",
                "x-csrf-token": Crypto.generate_csrf_token("someone-else", TEST_SECRET),
            },
        )

        assert response.status == 403
        assert response.json["code"] == "CSRF_TOKEN_INVALID"

    @pytest.mark.asyncio
    async def test_logout_destroys_session_and_clears_csrf_cookie(self):
        store = LaggyStore()
        app = build_app(store)
        session_cookie, csrf_token = await self.logged_in(app)
        session_id = Crypto.verify_signed_data(session_cookie, TEST_SECRET)

        _, response = await app.asgi_client.post(
            "/api/auth/logout",
            headers={
                "cookie": f"sessionId={session_cookie}; csrf-token={csrf_token}",
                "x-csrf-token": csrf_token,
            },
        )

        assert response.status == 200
        assert await store.find(session_id) is None
        cleared = cookie_named(response, "csrf-token").lower()
        assert "max-age=0" in cleared

        _, response = await app.asgi_client.get(
            "/api/auth/me", headers={"cookie": f"sessionId={session_cookie}"}
        )
        assert response.status == 401

    @pytest.mark.asyncio
    async def test_relogin_rotates_session(self):
        store = LaggyStore()
        app = build_app(store)
        first_cookie, _ = await self.logged_in(app)
        first_id = Crypto.verify_signed_data(first_cookie, TEST_SECRET)

        _, response = await app.asgi_client.post(
            "/api/auth/login",
            json={"email": "ada@example.com", "password": PASSWORD},
            headers={"cookie": f"sessionId={first_cookie}"},
        )

        second_id = Crypto.verify_signed_data(response.cookies["sessionId"], TEST_SECRET)
        assert second_id != first_id
        assert await store.find(first_id) is None

    @pytest.mark.asyncio
    async def test_logout_rejects_non_ascii_token(self):
        app = build_app(LaggyStore())
        session_cookie, _ = await self.logged_in(app)

        _, response = await app.asgi_client.post(
            "/api/auth/logout",
            headers={
                "cookie": f"sessionId={session_cookie}",
                "x-csrf-token": "café".encode("latin-1"),
            },
        )

        assert response.status == 403
        assert response.json["code"] == "CSRF_TOKEN_INVALID"
