"""
Password hashing and access token helpers.

Passwords are stored as bcrypt hashes. Access tokens are HS256 JWTs whose
``sub`` claim is the user id; every token also carries a random ``jti`` so two
logins in the same second never produce the same token string.
"""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import bcrypt
from jose import JWTError, jwt

from taskmanager.core.errors import AuthenticationError
from taskmanager.server.core.config import AuthConfig, settings


def _auth_config(config: Optional[AuthConfig]) -> AuthConfig:
    return config or settings.auth


def hash_password(password: str, *, config: Optional[AuthConfig] = None) -> str:
    """Hash a plain text password with bcrypt.

    Args:
        password: Plain text password
        config: Auth configuration (defaults to the global settings)

    Returns:
        The bcrypt hash as a UTF-8 string
    """
    rounds = _auth_config(config).bcrypt_rounds
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plain text password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(subject: str | int, *, config: Optional[AuthConfig] = None) -> str:
    """Issue a signed access token for a user.

    Args:
        subject: The user id stored in the ``sub`` claim
        config: Auth configuration (defaults to the global settings)

    Returns:
        The encoded JWT
    """
    cfg = _auth_config(config)
    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "sub": str(subject),
        "iat": now,
        "jti": uuid.uuid4().hex,
    }
    if cfg.access_token_expire_minutes > 0:
        payload["exp"] = now + timedelta(minutes=cfg.access_token_expire_minutes)
    return jwt.encode(payload, cfg.jwt_secret, algorithm=cfg.jwt_algorithm)


def decode_access_token(token: str, *, config: Optional[AuthConfig] = None) -> dict[str, Any]:
    """Verify a token signature (and expiry, when present) and return its claims.

    Raises:
        AuthenticationError: If the token is malformed, tampered with or expired.
    """
    cfg = _auth_config(config)
    try:
        payload = jwt.decode(token, cfg.jwt_secret, algorithms=[cfg.jwt_algorithm])
    except JWTError as e:
        raise AuthenticationError("Please authenticate.", details=str(e)) from e
    if not payload.get("sub"):
        raise AuthenticationError("Please authenticate.", details="token has no subject")
    return payload
