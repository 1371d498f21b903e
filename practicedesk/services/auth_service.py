# practicedesk/services/auth_service.py
import logging
import uuid

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from practicedesk.core.errors import (
    DuplicateUserError,
    InvalidCredentialsError,
    NotFoundError,
    UnauthenticatedError,
)
from practicedesk.core.passwords import hash_password, verify_password
from practicedesk.core.tokens import TokenError, TokenService
from practicedesk.models.user import User
from practicedesk.repositories.user_repo import UserRepository
from practicedesk.schemas.user import (
    AuthResponse,
    LoginRequest,
    SignUpRequest,
    UserRead,
)

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class AuthService:
    """
    Signup, login and identity resolution.

    Responsibilities:
      - keep emails unique case-insensitively
      - hash and verify passwords
      - issue tokens / resolve them back to a user id
    """

    def __init__(self, repo: UserRepository, tokens: TokenService):
        self.repo = repo
        self.tokens = tokens

    def _auth_response(self, user: User) -> AuthResponse:
        token = self.tokens.issue(user.id, user.email)
        return AuthResponse(token=token, user=UserRead.model_validate(user))

    # ----- Account operations -----

    def sign_up(self, session: Session, payload: SignUpRequest) -> AuthResponse:
        """
        Create an account and log it in.

        The pre-check gives a clean error in the common case; the UNIQUE
        constraint on users.email catches signups that race past it.

        Raises:
            DuplicateUserError: email already registered (any casing).
        """
        email = normalize_email(payload.email)

        if self.repo.get_by_email(session, email) is not None:
            logger.warning("Signup rejected, email already registered: %s", email)
            raise DuplicateUserError()

        user = User(
            email=email,
            password_hash=hash_password(payload.password),
            firm_name=payload.firm_name,
        )
        try:
            user = self.repo.create(session, user)
        except IntegrityError:
            session.rollback()
            logger.warning("Signup lost duplicate-email race: %s", email)
            raise DuplicateUserError()

        logger.info("New user created with email: %s", user.email)
        return self._auth_response(user)

    def authenticate(
        self,
        session: Session,
        email: str,
        password: str,
    ) -> User | None:
        """
        Check credentials.

        Returns the user on success and None otherwise. Unknown email and
        wrong password are deliberately the same result.
        """
        user = self.repo.get_by_email(session, normalize_email(email))
        if user is None:
            return None
        if not verify_password(password, user.password_hash):
            return None
        return user

    def login(self, session: Session, payload: LoginRequest) -> AuthResponse:
        """
        Raises:
            InvalidCredentialsError: unknown email or wrong password.
        """
        user = self.authenticate(session, payload.email, payload.password)
        if user is None:
            logger.warning("Login failed for email: %s", normalize_email(payload.email))
            raise InvalidCredentialsError()

        logger.info("User logged in: %s", user.email)
        return self._auth_response(user)

    # ----- Identity -----

    def resolve_identity(self, token: str) -> uuid.UUID:
        """
        Map a bearer token to a user id.

        Raises:
            UnauthenticatedError: token malformed, tampered or expired.
        """
        try:
            identity = self.tokens.validate(token)
        except TokenError as exc:
            logger.info("Token rejected: %s", exc.__class__.__name__)
            raise UnauthenticatedError("Invalid or expired token")
        return identity.user_id

    def get_profile(self, session: Session, user_id: uuid.UUID) -> User:
        """
        Raises:
            NotFoundError: the token's user no longer exists.
        """
        user = self.repo.get_by_id(session, user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user
