"""
Password hashing and session tokens.
"""
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import jwt
from werkzeug.security import check_password_hash, generate_password_hash

from flight_dispatch.core.config import Settings


class InvalidTokenError(Exception):
    """Raised when a session token is missing, malformed, expired or forged"""
    pass


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    if not password_hash:
        return False
    return check_password_hash(password_hash, password)


def create_access_token(settings: Settings, *, driver_id: int, email: str, name: str) -> str:
    """
    Issue a signed session token for a driver.

    Args:
        settings: Application settings (secret, algorithm, lifetime)
        driver_id: Subject of the token
        email: Driver email, echoed in the claims
        name: Driver name, echoed in the claims

    Returns:
        Encoded JWT
    """
    expires_at = datetime.now(timezone.utc) + timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS)
    claims = {
        "sub": str(driver_id),
        "email": email,
        "name": name,
        "exp": expires_at,
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(settings: Settings, token: str) -> Dict[str, Any]:
    """
    Verify a session token and return its claims with ``id`` as an int.

    Raises:
        InvalidTokenError: If verification fails
    """
    try:
        claims = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
        claims["id"] = int(claims["sub"])
    except (jwt.PyJWTError, KeyError, TypeError, ValueError) as e:
        raise InvalidTokenError(str(e))
    return claims
