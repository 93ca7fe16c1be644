"""
Bearer token encoding and verification.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from catalog.api.config import get_secret_key, get_token_algorithm, get_token_expire_minutes


class InvalidTokenError(Exception):
    """Raised when a bearer token can't be decoded or names no user."""


def create_access_token(user_id: int, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed JWT whose subject is the user id."""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=get_token_expire_minutes())
    )
    to_encode = {"sub": str(user_id), "exp": expire}
    return jwt.encode(to_encode, get_secret_key(), algorithm=get_token_algorithm())


def decode_access_token(token: str) -> int:
    """
    Verify a JWT and return the user id it was issued for.

    Raises:
        InvalidTokenError: If the signature, expiry or subject is invalid
    """
    try:
        payload = jwt.decode(token, get_secret_key(), algorithms=[get_token_algorithm()])
    except JWTError as e:
        raise InvalidTokenError(str(e)) from e

    subject = payload.get("sub")
    if subject is None:
        raise InvalidTokenError("Token has no subject")
    try:
        return int(subject)
    except (TypeError, ValueError) as e:
        raise InvalidTokenError("Token subject is not a user id") from e
