"""Password hashing and access-token helpers."""
from __future__ import annotations

from datetime import UTC, datetime, timedelta

import bcrypt
from jose import ExpiredSignatureError, JWTError, jwt

from inkpost.core.errors import AuthError
from inkpost.core.settings import Settings

# bcrypt only considers the first 72 bytes of a password.
MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int = 12) -> str:
    """Return a salted bcrypt hash of `password`."""
    digest = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds))
    return digest.decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Return True if `password` matches the stored bcrypt hash."""
    encoded = password.encode("utf-8")
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(
    user_id: int,
    settings: Settings,
    expires_delta: timedelta | None = None,
) -> str:
    """Issue a signed, time-limited token whose subject is the user id."""
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    expires = datetime.now(UTC) + lifetime
    payload = {"sub": str(user_id), "exp": expires}
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> int:
    """Verify `token` and return the user id it was issued for.

    Raises:
        AuthError: If the token is expired, malformed, or carries no usable subject.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError as err:
        raise AuthError("Token has expired, please log in again") from err
    except JWTError as err:
        raise AuthError("Invalid token") from err

    subject = payload.get("sub")
    if subject is None:
        raise AuthError()
    try:
        return int(subject)
    except (TypeError, ValueError) as err:
        raise AuthError() from err
