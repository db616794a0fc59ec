"""Session token issuing and signature verification.

Tokens are HS256 JWTs carrying ``sub`` (admin id), ``email``, ``role``,
``iat`` and ``exp``. This module is the second, cryptographic phase of
authentication; the cheap structural/expiry pre-check lives in
``session.SessionVerifier``.

No token revocation: once issued, a token is valid until expiry. Logout only
clears the client cookie.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from config.settings import settings
from src.rc_common.errors import UnauthenticatedError

_ALGORITHM = settings.JWT_ALGORITHM  # "HS256"
_SESSION_EXPIRE = timedelta(minutes=settings.SESSION_EXPIRE_MINUTES)


def session_max_age_seconds() -> int:
    return int(_SESSION_EXPIRE.total_seconds())


def create_session_token(admin_id: str, email: str, role: str) -> str:
    """Issue a session token for an admin (default lifetime: 7 days)."""
    now = datetime.now(UTC)
    payload = {
        "sub": admin_id,
        "email": email,
        "role": role,
        "iat": now,
        "exp": now + _SESSION_EXPIRE,
    }
    return str(jwt.encode(payload, settings.JWT_SECRET, algorithm=_ALGORITHM))


def decode_session_token(token: str) -> dict[str, Any]:
    """Verify signature and expiry, return the claims.

    Raises:
        UnauthenticatedError: signature mismatch, malformed token, or expired.
    """
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[_ALGORITHM],  # Explicit list prevents algorithm confusion
        )
    except JWTError:
        raise UnauthenticatedError("Invalid or expired token") from None
    return payload
