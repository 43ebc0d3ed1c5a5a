"""Security utilities for authentication and password hashing."""
import logging
import time
from datetime import timedelta
from typing import Any

import bcrypt
from jose import JWTError, jwt

from app.config import settings

logger = logging.getLogger(__name__)


def _truncate_password(password: str) -> bytes:
    """Truncate password to 72 bytes (bcrypt limit)."""
    password_bytes = password.encode('utf-8')
    if len(password_bytes) > 72:
        password_bytes = password_bytes[:72]
    return password_bytes


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash.

    Args:
        plain_password: Plain text password
        hashed_password: Hashed password

    Returns:
        bool: True if password matches
    """
    password_bytes = _truncate_password(plain_password)
    hashed_bytes = hashed_password.encode('utf-8') if isinstance(hashed_password, str) else hashed_password

    try:
        return bcrypt.checkpw(password_bytes, hashed_bytes)
    except ValueError as e:
        logger.error(f"Password verification error: {e}")
        return False


def get_password_hash(password: str) -> str:
    """Hash a password.

    Args:
        password: Plain text password

    Returns:
        str: Hashed password
    """
    password_bytes = _truncate_password(password)
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode('utf-8')


def create_access_token(
    subject: str | Any,
    expires_delta: timedelta | None = None,
    claims: dict[str, Any] | None = None,
) -> str:
    """Create JWT access token.

    Args:
        subject: Token subject (the user ID)
        expires_delta: Token expiration time
        claims: Extra identity claims (email, username)

    Returns:
        str: JWT token
    """
    if expires_delta:
        delta_seconds = int(expires_delta.total_seconds())
    else:
        delta_seconds = settings.jwt_access_token_expire_minutes * 60
    # exp must be an integer unix timestamp
    exp_ts = int(time.time()) + delta_seconds
    to_encode = dict(claims or {})
    to_encode.update({"exp": exp_ts, "sub": str(subject)})
    encoded_jwt = jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )
    if isinstance(encoded_jwt, bytes):
        return encoded_jwt.decode("utf-8")
    return encoded_jwt


def decode_access_token(token: str) -> dict | None:
    """Decode JWT access token.

    Args:
        token: JWT token

    Returns:
        dict | None: Decoded payload or None if invalid
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
        return payload
    except JWTError:
        return None
