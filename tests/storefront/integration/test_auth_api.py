"""Integration tests for registration, login and access control."""

import asyncio
from datetime import timedelta

from storefront.api import routes
from storefront.identity import security
from storefront.identity.security import create_access_token, decode_access_token


def _on_event_loop():
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


class TestRegisterAPI:
    def test_register_returns_201(self, client):
        response = client.post(
            "/auth/register",
            json={"email": "lucia@example.com", "password": "secreto1", "name": "Lucía"},
        )
        assert response.status_code == 201
        assert "user_id" in response.json()

    def test_duplicate_email_returns_400(self, client):
        body = {"email": "lucia@example.com", "password": "secreto1", "name": "Lucía"}
        client.post("/auth/register", json=body)

        response = client.post("/auth/register", json=body)
        assert response.status_code == 400

    def test_short_password_returns_400(self, client):
        response = client.post(
            "/auth/register",
            json={"email": "lucia@example.com", "password": "123", "name": "Lucía"},
        )
        assert response.status_code == 400


class TestLoginAPI:
    def test_login_issues_token_with_role(self, client):
        client.post(
            "/auth/register",
            json={"email": "lucia@example.com", "password": "secreto1", "name": "Lucía"},
        )

        response = client.post("/auth/login", json={"email": "lucia@example.com", "password": "secreto1"})

        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["user"]["role"] == "USER"
        assert decode_access_token(body["access_token"])["sub"] == body["user"]["id"]

    def test_wrong_password_returns_401(self, client):
        client.post(
            "/auth/register",
            json={"email": "lucia@example.com", "password": "secreto1", "name": "Lucía"},
        )

        response = client.post("/auth/login", json={"email": "lucia@example.com", "password": "wrong-one"})
        assert response.status_code == 401


class TestAccessControl:
    def test_cart_without_token_returns_401(self, client):
        assert client.get("/cart").status_code == 401

    def test_garbage_token_returns_401(self, client):
        response = client.get("/cart", headers={"Authorization": "Bearer not-a-jwt"})
        assert response.status_code == 401

    def test_expired_token_returns_401(self, client, shopper):
        token = create_access_token(shopper.id, shopper.role, expires_delta=timedelta(seconds=-1))
        response = client.get("/orders", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401

    def test_dashboard_without_token_returns_401(self, client):
        assert client.get("/dashboard/stats").status_code == 401

    def test_dashboard_as_user_returns_403(self, client, shopper_headers):
        assert client.get("/dashboard/stats", headers=shopper_headers).status_code == 403

    def test_dashboard_as_admin_returns_200(self, client, admin_headers):
        assert client.get("/dashboard/stats", headers=admin_headers).status_code == 200


class TestPasswordHashingThread:
    def test_register_and_login_hash_outside_the_event_loop(self, client, monkeypatch):
        calls = []

        def hash_password(password):
            calls.append(("hash", _on_event_loop()))
            return security.hash_password(password)

        def verify_password(password, hashed):
            calls.append(("verify", _on_event_loop()))
            return security.verify_password(password, hashed)

        monkeypatch.setattr(routes, "hash_password", hash_password)
        monkeypatch.setattr(routes, "verify_password", verify_password)

        client.post("/auth/register", json={"email": "lucia@example.com", "password": "secreto1", "name": "Lucía"})
        response = client.post("/auth/login", json={"email": "lucia@example.com", "password": "secreto1"})

        assert response.status_code == 200
        assert calls == [("hash", False), ("verify", False)]
