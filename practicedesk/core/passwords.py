# practicedesk/core/passwords.py
"""
Salted PBKDF2 password hashing.

Stored format: base64(salt || derived_key), 32 bytes each, using
PBKDF2-HMAC-SHA256 with a fixed iteration count. Changing any of the
constants below invalidates every stored hash.
"""

import base64
import binascii
import hashlib
import hmac
import secrets

SALT_BYTES = 32
KEY_BYTES = 32
ITERATIONS = 10_000
DIGEST = "sha256"


def _derive(plaintext: str, salt: bytes) -> bytes:
    return hashlib.pbkdf2_hmac(
        DIGEST,
        plaintext.encode("utf-8"),
        salt,
        ITERATIONS,
        dklen=KEY_BYTES,
    )


def hash_password(plaintext: str) -> str:
    """Hash a plaintext password with a fresh random salt."""
    salt = secrets.token_bytes(SALT_BYTES)
    key = _derive(plaintext, salt)
    return base64.b64encode(salt + key).decode("ascii")


def verify_password(plaintext: str, encoded: str) -> bool:
    """
    Check `plaintext` against a stored hash.

    Malformed stored values fail closed: this returns False instead of
    raising.
    """
    try:
        raw = base64.b64decode(encoded, validate=True)
    except (binascii.Error, TypeError, ValueError):
        return False

    if len(raw) != SALT_BYTES + KEY_BYTES:
        return False

    salt, expected = raw[:SALT_BYTES], raw[SALT_BYTES:]
    try:
        actual = _derive(plaintext, salt)
    except (AttributeError, TypeError):
        return False
    return hmac.compare_digest(actual, expected)
