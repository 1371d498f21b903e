# practicedesk/core/auth.py
import uuid

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from practicedesk.core.errors import UnauthenticatedError
from practicedesk.core.tokens import TokenService, get_token_service
from practicedesk.repositories.user_repo import UserRepository
from practicedesk.services.auth_service import AuthService

# HTTP Bearer scheme:
# - auto_error=False => a missing Authorization header reaches us as None,
#   so it goes through the same 401 path as a bad token.
bearer_scheme = HTTPBearer(auto_error=False)


def get_auth_service(
    tokens: TokenService = Depends(get_token_service),
) -> AuthService:
    """FastAPI dependency building the AuthService around the shared token service."""
    return AuthService(UserRepository(), tokens)


def require_user_id(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    auth_service: AuthService = Depends(get_auth_service),
) -> uuid.UUID:
    """
    Enforce authentication and return the caller's user id.

    Flow:
      1. No Authorization header => 401.
      2. Validate the JWT (signature, issuer, audience, expiry).
      3. Return the `sub` claim as a UUID.

    The user row is not loaded here; routes that need it go through the
    services, which report a vanished user themselves.

    Raises:
        UnauthenticatedError(401): missing, malformed, tampered or
        expired token.
    """
    if credentials is None:
        raise UnauthenticatedError("Authentication required")

    return auth_service.resolve_identity(credentials.credentials)
