"""
Tests for signup, login and identity resolution.
"""

import uuid
from datetime import timedelta

import pytest

from practicedesk.core.errors import (
    DuplicateUserError,
    InvalidCredentialsError,
    NotFoundError,
    UnauthenticatedError,
)
from practicedesk.core.passwords import verify_password
from practicedesk.core.tokens import TokenService, utc_now
from practicedesk.repositories.user_repo import UserRepository
from practicedesk.schemas.user import LoginRequest, SignUpRequest
from practicedesk.services.auth_service import AuthService

from conftest import TEST_AUDIENCE, TEST_ISSUER, TEST_SECRET


def _signup(service, session, email="u@f.com", password="secret1"):
    return service.sign_up(
        session,
        SignUpRequest(email=email, firm_name="Firm", password=password),
    )


class BlindUserRepository(UserRepository):
    """Never finds an existing email, as if a concurrent signup slipped past."""

    def get_by_email(self, session, email):
        return None


# =============================================================================
# Signup
# =============================================================================


class TestSignUp:
    def test_creates_user_and_token(self, auth_service, session):
        result = _signup(auth_service, session, email="New@Firm.com")

        assert result.user.email == "new@firm.com"
        assert result.user.firm_name == "Firm"
        assert auth_service.resolve_identity(result.token) == result.user.id

    def test_password_stored_hashed(self, auth_service, session):
        result = _signup(auth_service, session)
        user = UserRepository().get_by_id(session, result.user.id)

        assert user.password_hash != "secret1"
        assert verify_password("secret1", user.password_hash)

    def test_duplicate_email_case_insensitive(self, auth_service, session):
        _signup(auth_service, session, email="A@x.com")

        with pytest.raises(DuplicateUserError):
            _signup(auth_service, session, email="a@x.com")

    def test_unique_constraint_backstops_race(self, token_service, session):
        service = AuthService(BlindUserRepository(), token_service)
        _signup(service, session, email="race@x.com")

        with pytest.raises(DuplicateUserError):
            _signup(service, session, email="RACE@x.com")

        # session is still usable after the rollback
        assert UserRepository().get_by_email(session, "race@x.com") is not None


# =============================================================================
# Login
# =============================================================================


class TestLogin:
    def test_login_success(self, auth_service, session):
        created = _signup(auth_service, session, email="u@f.com")

        result = auth_service.login(
            session, LoginRequest(email="U@F.com", password="secret1")
        )

        assert result.user.id == created.user.id
        assert auth_service.resolve_identity(result.token) == created.user.id

    def test_wrong_password_and_unknown_email_identical(self, auth_service, session):
        _signup(auth_service, session, email="u@f.com")

        with pytest.raises(InvalidCredentialsError) as wrong_password:
            auth_service.login(session, LoginRequest(email="u@f.com", password="nope00"))
        with pytest.raises(InvalidCredentialsError) as unknown_email:
            auth_service.login(
                session, LoginRequest(email="nobody@f.com", password="secret1")
            )

        assert type(wrong_password.value) is type(unknown_email.value)
        assert wrong_password.value.detail == unknown_email.value.detail
        assert wrong_password.value.status_code == unknown_email.value.status_code

    def test_authenticate_returns_none_on_failure(self, auth_service, session):
        _signup(auth_service, session, email="u@f.com")

        assert auth_service.authenticate(session, "u@f.com", "wrong") is None
        assert auth_service.authenticate(session, "x@f.com", "secret1") is None
        assert auth_service.authenticate(session, "u@f.com", "secret1") is not None


# =============================================================================
# Identity
# =============================================================================


class TestIdentity:
    def test_resolve_rejects_garbage(self, auth_service):
        with pytest.raises(UnauthenticatedError):
            auth_service.resolve_identity("garbage")

    def test_resolve_rejects_expired(self, session):
        old = TokenService(
            TEST_SECRET,
            TEST_ISSUER,
            TEST_AUDIENCE,
            clock=lambda: utc_now() - timedelta(days=2),
        )
        service = AuthService(UserRepository(), old)
        token = old.issue(uuid.uuid4(), "u@f.com")

        with pytest.raises(UnauthenticatedError):
            service.resolve_identity(token)

    def test_get_profile(self, auth_service, session):
        created = _signup(auth_service, session)
        user = auth_service.get_profile(session, created.user.id)
        assert user.email == "u@f.com"

    def test_get_profile_missing(self, auth_service, session):
        with pytest.raises(NotFoundError):
            auth_service.get_profile(session, uuid.uuid4())
