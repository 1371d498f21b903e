"""
Test configuration and fixtures.

Provides:
- Fresh in-memory SQLite database per test
- TestClient with the session dependency overridden
- Helpers for signing users up and building bearer headers
"""
import os
from typing import Generator

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, SQLModel

# Settings are read at import time; set them before importing the app.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-that-is-at-least-32-chars"
os.environ["JWT_ISSUER"] = "practicedesk-test"
os.environ["JWT_AUDIENCE"] = "practicedesk-test-clients"

from practicedesk.main import app  # noqa: E402
from practicedesk.core.tokens import TokenService  # noqa: E402
from practicedesk.database import get_session, make_engine  # noqa: E402
from practicedesk.repositories.user_repo import UserRepository  # noqa: E402
from practicedesk.services.auth_service import AuthService  # noqa: E402

TEST_SECRET = os.environ["JWT_SECRET_KEY"]
TEST_ISSUER = os.environ["JWT_ISSUER"]
TEST_AUDIENCE = os.environ["JWT_AUDIENCE"]


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest.fixture
def engine():
    engine = make_engine("sqlite://")
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine) -> Generator[Session, None, None]:
    with Session(engine) as session:
        yield session


# =============================================================================
# Service Fixtures
# =============================================================================


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(
        secret_key=TEST_SECRET,
        issuer=TEST_ISSUER,
        audience=TEST_AUDIENCE,
    )


@pytest.fixture
def auth_service(token_service) -> AuthService:
    return AuthService(UserRepository(), token_service)


# =============================================================================
# HTTP Fixtures
# =============================================================================


@pytest.fixture
def client(engine) -> Generator[TestClient, None, None]:
    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def signup(
    client: TestClient,
    email: str = "owner@firm.com",
    firm_name: str = "Firm LLP",
    password: str = "secret1",
) -> tuple[str, dict]:
    """Sign up through the API and return (token, user)."""
    resp = client.post(
        "/api/auth/signup",
        json={"email": email, "firm_name": firm_name, "password": password},
    )
    assert resp.status_code == 201, resp.text
    body = resp.json()
    return body["token"], body["user"]


def create_customer(client: TestClient, token: str, **overrides) -> dict:
    payload = {"name": "Acme", "phone_number": "555-1234"}
    payload.update(overrides)
    resp = client.post("/api/customers", json=payload, headers=bearer(token))
    assert resp.status_code == 201, resp.text
    return resp.json()


def create_matter(client: TestClient, token: str, customer_id: str, **overrides) -> dict:
    payload = {"name": "Case1", "description": "desc", "status": 1}
    payload.update(overrides)
    resp = client.post(
        f"/api/customers/{customer_id}/matters",
        json=payload,
        headers=bearer(token),
    )
    assert resp.status_code == 201, resp.text
    return resp.json()
