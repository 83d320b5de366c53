"""Tests for registration, profile and user search."""
from datetime import datetime, timedelta, timezone

import jwt

from upfor.config import settings
from upfor.security import create_access_token
from tests.conftest import create_test_user


class TestRegistration:

    def test_register_returns_token_and_user(self, client):
        resp = client.post("/api/users/", json={"name": "Alice", "email": "Alice@Example.com"})
        assert resp.status_code == 201
        data = resp.json()
        assert data["user"]["name"] == "Alice"
        assert data["user"]["email"] == "alice@example.com"
        assert data["user"]["status"]["mode"] == "OFF"
        assert jwt.decode(data["token"], settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])["sub"] == data["user"]["id"]

    def test_duplicate_email_is_409(self, client):
        create_test_user(client, name="Alice", email="alice@example.com")
        resp = client.post("/api/users/", json={"name": "Other", "email": "alice@example.com"})
        assert resp.status_code == 409

    def test_bad_email_is_400(self, client):
        resp = client.post("/api/users/", json={"name": "Alice", "email": "not-an-email"})
        assert resp.status_code == 400


class TestAuth:

    def test_missing_header_is_401(self, client):
        assert client.get("/api/users/me").status_code == 401

    def test_expired_token_is_401(self, client):
        user = create_test_user(client, name="Alice")
        token = create_access_token(user["id"], now=datetime.now(timezone.utc) - timedelta(days=30))
        resp = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401

    def test_token_for_unknown_user_is_401(self, client):
        token = create_access_token("ghost")
        resp = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401

    def test_wrong_secret_is_401(self, client):
        user = create_test_user(client, name="Alice")
        token = jwt.encode({"sub": user["id"]}, "some-other-secret", algorithm="HS256")
        resp = client.get("/api/users/me", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401


class TestProfile:

    def test_get_me(self, client):
        user = create_test_user(client, name="Alice")
        resp = client.get("/api/users/me", headers=user["headers"])
        assert resp.status_code == 200
        assert resp.json()["id"] == user["id"]

    def test_partial_update(self, client):
        user = create_test_user(client, name="Alice")
        client.patch("/api/users/me", headers=user["headers"], json={"bio": "hi", "homeLocation": "Oslo"})
        resp = client.patch("/api/users/me", headers=user["headers"], json={"useCustomLocation": True})
        assert resp.status_code == 200
        data = resp.json()
        assert data["bio"] == "hi"
        assert data["homeLocation"] == "Oslo"
        assert data["useCustomLocation"] is True

    def test_bio_too_long_is_400(self, client):
        user = create_test_user(client, name="Alice")
        resp = client.patch("/api/users/me", headers=user["headers"], json={"bio": "x" * 281})
        assert resp.status_code == 400


class TestSearch:

    def test_search_by_name_excludes_self(self, client):
        alice = create_test_user(client, name="Alice")
        create_test_user(client, name="Alicia")
        create_test_user(client, name="Bob")
        resp = client.get("/api/users/search?q=ali", headers=alice["headers"])
        assert resp.status_code == 200
        assert [u["name"] for u in resp.json()] == ["Alicia"]

    def test_short_query_returns_nothing(self, client):
        alice = create_test_user(client, name="Alice")
        create_test_user(client, name="Bob")
        assert client.get("/api/users/search?q=bo", headers=alice["headers"]).json() == []


def test_health(client):
    assert client.get("/api/health").json() == {"status": "ok"}
