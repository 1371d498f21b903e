# practicedesk/core/tokens.py
import binascii
import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Any, Callable

from jose import jwt, JWTError, ExpiredSignatureError
from jose.utils import base64url_decode, base64url_encode

from practicedesk.core.config import get_settings

logger = logging.getLogger(__name__)


class TokenError(Exception):
    """Base class for every token validation failure."""


class MalformedTokenError(TokenError):
    """Token is not structurally a JWT, or lacks a usable identity claim."""


class InvalidTokenError(TokenError):
    """Bad signature, issuer or audience."""


class TokenExpiredError(TokenError):
    """Token is past its `exp` claim."""


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _require_canonical_segments(token: str) -> None:
    """
    Reject segments whose base64url text isn't the canonical encoding of
    its bytes. The decoder ignores the unused low bits of the last
    character, so without this check several spellings of one signature
    would all verify.
    """
    segments = token.split(".")
    if len(segments) != 3:
        raise MalformedTokenError("Token must have three segments")

    for segment in segments:
        try:
            raw = segment.encode("ascii")
            canonical = base64url_encode(base64url_decode(raw))
        except (binascii.Error, ValueError) as exc:
            raise InvalidTokenError("Token segment is not valid base64url") from exc
        if canonical != raw:
            raise InvalidTokenError("Token segment is not canonical base64url")


@dataclass(frozen=True)
class TokenIdentity:
    """Verified claims of a bearer token."""

    user_id: uuid.UUID
    email: str | None
    token_id: str | None
    issued_at: datetime
    expires_at: datetime


class TokenService:
    """
    Issues and validates HS256 bearer tokens.

    Holds no state between calls besides its (immutable) signing
    configuration. `clock` only drives issuance; validation checks expiry
    against the real current time with zero leeway.
    """

    def __init__(
        self,
        secret_key: str,
        issuer: str,
        audience: str,
        algorithm: str = "HS256",
        expire_hours: int = 24,
        clock: Callable[[], datetime] = utc_now,
    ):
        self._secret_key = secret_key
        self._issuer = issuer
        self._audience = audience
        self._algorithm = algorithm
        self._lifetime = timedelta(hours=expire_hours)
        self._clock = clock

    @property
    def lifetime(self) -> timedelta:
        return self._lifetime

    def issue(self, user_id: uuid.UUID, email: str) -> str:
        """
        Create a signed token for a user.

        Claims:
          - sub:   user id
          - email: user email
          - jti:   unique token id
          - iat / exp: issued-at and absolute expiry (unix seconds)
          - iss / aud: configured issuer and audience
        """
        issued_at = self._clock()
        expires_at = issued_at + self._lifetime
        claims: dict[str, Any] = {
            "sub": str(user_id),
            "email": email,
            "jti": str(uuid.uuid4()),
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
            "iss": self._issuer,
            "aud": self._audience,
        }
        return jwt.encode(claims, self._secret_key, algorithm=self._algorithm)

    def validate(self, token: str) -> TokenIdentity:
        """
        Verify a token and return its identity.

        Failure kinds:
          - MalformedTokenError: the token doesn't parse as a JWT (wrong
            segment count, bad base64, header/claims not JSON objects) or
            has no valid sub. Most bit flips inside the header or payload
            land here, since they break the base64 or the JSON.
          - InvalidTokenError: the token parses but isn't the one we
            signed: bad signature, non-canonical base64 in any segment,
            wrong issuer or audience.
          - TokenExpiredError: token is past expiry.

        All of them derive from TokenError.
        """
        # Parse without verifying first so structural garbage is reported
        # separately from signature failures.
        try:
            jwt.get_unverified_header(token)
            jwt.get_unverified_claims(token)
        except (JWTError, AttributeError, TypeError) as exc:
            raise MalformedTokenError("Token is not a valid JWT") from exc

        _require_canonical_segments(token)

        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                audience=self._audience,
                issuer=self._issuer,
                options={"leeway": 0, "require_exp": True, "require_iat": True},
            )
        except ExpiredSignatureError as exc:
            raise TokenExpiredError("Token has expired") from exc
        except JWTError as exc:
            raise InvalidTokenError(str(exc)) from exc

        try:
            user_id = uuid.UUID(payload["sub"])
        except (KeyError, TypeError, ValueError) as exc:
            raise MalformedTokenError("Token has no valid subject") from exc

        return TokenIdentity(
            user_id=user_id,
            email=payload.get("email"),
            token_id=payload.get("jti"),
            issued_at=datetime.fromtimestamp(payload["iat"], tz=timezone.utc),
            expires_at=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )


@lru_cache
def get_token_service() -> TokenService:
    """Process-wide token service built once from settings."""
    settings = get_settings()
    return TokenService(
        secret_key=settings.JWT_SECRET_KEY,
        issuer=settings.JWT_ISSUER,
        audience=settings.JWT_AUDIENCE,
        algorithm=settings.JWT_ALGORITHM,
        expire_hours=settings.JWT_EXPIRE_HOURS,
    )
