"""
HTTP tests for /api/auth.
"""

import uuid

from practicedesk.core.tokens import get_token_service

from conftest import bearer, signup


class TestSignupEndpoint:
    def test_signup_returns_token_and_user(self, client):
        resp = client.post(
            "/api/auth/signup",
            json={"email": "U@F.com", "firm_name": "Firm", "password": "secret1"},
        )

        assert resp.status_code == 201
        body = resp.json()
        assert body["token"]
        assert body["user"]["email"] == "u@f.com"
        assert body["user"]["firm_name"] == "Firm"
        assert "password_hash" not in body["user"]
        assert "password" not in body["user"]

    def test_duplicate_signup_conflict(self, client):
        signup(client, email="A@x.com")

        resp = client.post(
            "/api/auth/signup",
            json={"email": "a@x.com", "firm_name": "Other", "password": "secret1"},
        )

        assert resp.status_code == 409
        assert resp.json() == {"detail": "User with this email already exists"}

    def test_signup_validation(self, client):
        resp = client.post(
            "/api/auth/signup",
            json={"email": "not-an-email", "firm_name": "Firm", "password": "123"},
        )
        assert resp.status_code == 422

    def test_signup_rejects_extra_fields(self, client):
        resp = client.post(
            "/api/auth/signup",
            json={
                "email": "u@f.com",
                "firm_name": "Firm",
                "password": "secret1",
                "id": str(uuid.uuid4()),
            },
        )
        assert resp.status_code == 422


class TestLoginEndpoint:
    def test_login_ok(self, client):
        _, user = signup(client, email="u@f.com", password="secret1")

        resp = client.post(
            "/api/auth/login", json={"email": "u@f.com", "password": "secret1"}
        )

        assert resp.status_code == 200
        assert resp.json()["user"]["id"] == user["id"]

    def test_login_failures_indistinguishable(self, client):
        signup(client, email="u@f.com", password="secret1")

        wrong_password = client.post(
            "/api/auth/login", json={"email": "u@f.com", "password": "wrong1"}
        )
        unknown_email = client.post(
            "/api/auth/login", json={"email": "ghost@f.com", "password": "secret1"}
        )

        assert wrong_password.status_code == unknown_email.status_code == 401
        assert wrong_password.json() == unknown_email.json()


class TestMeEndpoint:
    def test_me(self, client):
        token, user = signup(client)

        resp = client.get("/api/auth/me", headers=bearer(token))

        assert resp.status_code == 200
        assert resp.json()["id"] == user["id"]

    def test_me_without_token(self, client):
        resp = client.get("/api/auth/me")

        assert resp.status_code == 401
        assert resp.headers["www-authenticate"] == "Bearer"

    def test_me_with_bad_token(self, client):
        resp = client.get("/api/auth/me", headers=bearer("not.a.token"))
        assert resp.status_code == 401

    def test_me_for_vanished_user(self, client):
        token = get_token_service().issue(uuid.uuid4(), "gone@f.com")

        resp = client.get("/api/auth/me", headers=bearer(token))

        assert resp.status_code == 404
        assert resp.json() == {"detail": "User not found"}


def test_health(client):
    assert client.get("/").json()["status"] == "ok"


def test_matter_statuses(client):
    resp = client.get("/api/matter-statuses")

    assert resp.status_code == 200
    options = resp.json()
    assert options[0] == {"value": 1, "label": "Intake"}
    assert {"value": 6, "label": "Pending Resolution"} in options
    assert all(o["value"] != 0 for o in options)
