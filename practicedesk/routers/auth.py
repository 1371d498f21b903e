# practicedesk/routers/auth.py
import uuid

from fastapi import APIRouter, Depends, status
from sqlmodel import Session

from practicedesk.core.auth import get_auth_service, require_user_id
from practicedesk.database import get_session
from practicedesk.schemas.user import (
    AuthResponse,
    LoginRequest,
    SignUpRequest,
    UserRead,
)
from practicedesk.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/signup",
    response_model=AuthResponse,
    status_code=status.HTTP_201_CREATED,
)
def sign_up(
    payload: SignUpRequest,
    session: Session = Depends(get_session),
    service: AuthService = Depends(get_auth_service),
):
    """
    Create a firm account.

    Returns a bearer token and the new profile.
    Email is compared case-insensitively; duplicates get 409.
    """
    return service.sign_up(session, payload)


@router.post("/login", response_model=AuthResponse)
def login(
    payload: LoginRequest,
    session: Session = Depends(get_session),
    service: AuthService = Depends(get_auth_service),
):
    """
    Exchange email + password for a bearer token.

    Unknown email and wrong password both return the same 401.
    """
    return service.login(session, payload)


@router.get("/me", response_model=UserRead)
def read_me(
    session: Session = Depends(get_session),
    user_id: uuid.UUID = Depends(require_user_id),
    service: AuthService = Depends(get_auth_service),
):
    """
    Return the authenticated user's profile.

    Auth:
      - Requires a valid bearer token.
    """
    return service.get_profile(session, user_id)
