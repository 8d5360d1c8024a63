"""Security utilities: password hashing, password policy and JWT access tokens."""

import re
from datetime import datetime, timedelta, timezone
from typing import Any
from uuid import uuid4

import jwt
from argon2 import PasswordHasher
from argon2.exceptions import VerificationError, VerifyMismatchError

from orthosim.core.config import settings
from orthosim.core.logging import get_logger

logger = get_logger(__name__)

_password_hasher = PasswordHasher()

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128

_PASSWORD_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"[a-zA-Z]"), "Password must contain at least one letter"),
    (re.compile(r"[0-9]"), "Password must contain at least one number"),
    (re.compile(r"[^a-zA-Z0-9]"), "Password must contain at least one special character"),
)


def hash_password(plain_password: str) -> str:
    """Hash a plain password using Argon2."""
    return _password_hasher.hash(plain_password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    """Verify a plain password against a hash."""
    try:
        _password_hasher.verify(password_hash, plain_password)
        return True
    except VerifyMismatchError:
        return False
    except VerificationError as e:
        logger.warning("Password verification error", extra={"error": str(e)})
        return False


def check_password_strength(password: str) -> str:
    """Return the password unchanged or raise ValueError naming the first failed rule."""
    if len(password) < PASSWORD_MIN_LENGTH:
        raise ValueError(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")
    for pattern, message in _PASSWORD_RULES:
        if not pattern.search(password):
            raise ValueError(message)
    return password


def create_access_token(
    user_id: str,
    user_type: str,
    mentor_profile_id: str | None = None,
    trainee_profile_id: str | None = None,
) -> str:
    """Create a JWT access token enriched with the caller's profile ids."""
    now = datetime.now(timezone.utc)
    expire = now + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    payload = {
        "sub": str(user_id),
        "user_type": user_type,
        "mentor_profile_id": mentor_profile_id,
        "trainee_profile_id": trainee_profile_id,
        "iat": now,
        "exp": expire,
        "jti": str(uuid4()),
        "type": "access",
    }

    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALG)


def verify_access_token(token: str) -> dict[str, Any]:
    """Verify and decode a JWT access token."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALG])
    except jwt.ExpiredSignatureError:
        raise jwt.InvalidTokenError("Token has expired") from None
    except jwt.InvalidTokenError as e:
        raise jwt.InvalidTokenError(f"Invalid token: {e}") from e

    if payload.get("type") != "access":
        raise jwt.InvalidTokenError("Token is not an access token")
    return payload
