# practicedesk/core/errors.py
"""
Domain error taxonomy.

Services and the access guard raise these instead of HTTPException so
the core stays usable without FastAPI. `main.py` maps every AppError to
a JSON response using `status_code` and `detail`; anything else becomes
a generic 500.
"""

from fastapi import status


class AppError(Exception):
    """Base class for errors that are safe to show to clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    detail: str = "Internal server error"

    def __init__(self, detail: str | None = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class DuplicateUserError(AppError):
    status_code = status.HTTP_409_CONFLICT
    detail = "User with this email already exists"


class InvalidCredentialsError(AppError):
    """Unknown email and wrong password share this one outcome."""

    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Invalid email or password"


class UnauthenticatedError(AppError):
    """Missing, invalid or expired bearer token."""

    status_code = status.HTTP_401_UNAUTHORIZED
    detail = "Not authenticated"


class AccessDeniedError(AppError):
    """
    Raised by the access guard when a resource is absent OR owned by
    another user. Both cases look the same to the caller.
    """

    status_code = status.HTTP_404_NOT_FOUND
    detail = "Not found"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    detail = "Access denied"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    detail = "Not found"
