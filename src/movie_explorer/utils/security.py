"""Security utilities for password hashing and JWT handling."""

import base64
import hashlib
import logging
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
from jose import JWTError, jwt

from movie_explorer.config import INSECURE_SECRET_KEYS, get_settings
from movie_explorer.exceptions import InsecureSecretKeyError
from movie_explorer.schemas.user import Principal, UserPublic

logger = logging.getLogger(__name__)


def _password_bytes(password: str) -> bytes:
    # bcrypt ignores input past 72 bytes, so feed it a fixed-length digest
    digest = hashlib.sha256(password.encode("utf-8")).digest()
    return base64.b64encode(digest)


def hash_password(password: str) -> str:
    """Hash a plain text password using bcrypt."""
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(_password_bytes(password), salt)
    return hashed.decode("utf-8")


def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    """Verify a plain text password against a hashed password.

    A missing or malformed hash counts as a mismatch.
    """
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed_password.encode("utf-8"))
    except (ValueError, TypeError) as e:
        logger.warning("Password verification failed on malformed hash: %s", e)
        return False


def _signing_key() -> str:
    secret_key = get_settings().secret_key
    if not secret_key or secret_key in INSECURE_SECRET_KEYS:
        raise InsecureSecretKeyError()
    return secret_key


def create_access_token(
    user: Principal | UserPublic,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a JWT access token for a user.

    Args:
        user: The user the token identifies. Its id becomes the "sub" claim
              (as a string); email and name are included for the client.
        expires_delta: Optional custom expiration time. Defaults to settings value.

    Returns:
        Encoded JWT token string

    Raises:
        InsecureSecretKeyError: If SECRET_KEY is unset or a known placeholder.
    """
    settings = get_settings()
    secret_key = _signing_key()

    now = datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt_access_token_expire_minutes)

    to_encode = {
        "sub": str(user.id),
        "email": user.email,
        "name": user.name,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(to_encode, secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any] | None:
    """Decode and validate a JWT access token.

    Args:
        token: The JWT token string to decode

    Returns:
        Decoded token payload if valid, None if invalid or expired
    """
    settings = get_settings()
    try:
        return jwt.decode(
            token,
            _signing_key(),
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None
