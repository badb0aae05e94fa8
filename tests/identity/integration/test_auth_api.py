"""Integration tests for the authentication endpoints via TestClient."""

import inspect

import pytest

from storefront.identity.api.routes import REFRESH_COOKIE, login, register


def _register(client, email="ada@example.com", password="s3cret-pass", name="Ada"):
    return client.post("/auth/register", json={"name": name, "email": email, "password": password})


class TestRegisterEndpoint:
    def test_register(self, client):
        response = _register(client)
        assert response.status_code == 201
        body = response.json()
        assert body["token"]
        assert body["user"]["email"] == "ada@example.com"
        assert body["user"]["role"] == "customer"
        assert "password_hash" not in body["user"]

    def test_register_sets_http_only_refresh_cookie(self, client):
        response = _register(client)
        cookie = response.headers["set-cookie"]
        assert cookie.startswith(f"{REFRESH_COOKIE}=")
        assert "HttpOnly" in cookie
        assert "samesite=lax" in cookie.lower()

    def test_duplicate_email_conflicts(self, client):
        _register(client, email="ada@example.com")
        response = _register(client, email="Ada@Example.com")
        assert response.status_code == 409
        assert response.json() == {"message": "Email already registered"}

    def test_missing_fields(self, client):
        response = client.post("/auth/register", json={"email": "ada@example.com"})
        assert response.status_code == 400
        assert response.json()["message"] == "Missing name, email, or password"


class TestLoginEndpoint:
    def test_login(self, client, make_user):
        make_user()
        response = client.post("/auth/login", json={"email": "ada@example.com", "password": "s3cret-pass"})
        assert response.status_code == 200
        assert response.json()["user"]["name"] == "Ada"
        assert REFRESH_COOKIE in response.cookies

    def test_invalid_credentials(self, client, make_user):
        make_user()
        response = client.post("/auth/login", json={"email": "ada@example.com", "password": "nope-nope"})
        assert response.status_code == 401
        assert response.json() == {"message": "Invalid credentials"}


class TestRefreshAndLogout:
    def test_refresh_with_cookie(self, client):
        _register(client)
        response = client.post("/auth/refresh")
        assert response.status_code == 200
        assert response.json()["token"]

    def test_refresh_without_cookie(self, client):
        response = client.post("/auth/refresh")
        assert response.status_code == 401
        assert response.json() == {"message": "Missing refresh token"}

    def test_refresh_fails_after_logout(self, client):
        refresh_token = _register(client).cookies[REFRESH_COOKIE]

        logout = client.post("/auth/logout")
        assert logout.status_code == 200
        assert logout.json() == {"ok": True}

        client.cookies.set(REFRESH_COOKIE, refresh_token)
        response = client.post("/auth/refresh")
        assert response.status_code == 401


class TestMeEndpoint:
    def test_me(self, client):
        token = _register(client).json()["token"]
        response = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 200
        assert response.json()["email"] == "ada@example.com"

    def test_me_requires_token(self, client):
        response = client.get("/auth/me")
        assert response.status_code == 401
        assert response.json() == {"message": "Missing token"}

    def test_me_rejects_garbage_token(self, client):
        response = client.get("/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"


@pytest.mark.parametrize("route", [register, login])
def test_password_routes_run_in_threadpool(route):
    assert not inspect.iscoroutinefunction(route)
