"""Fast-path session check: token shape, expiry, and principal extraction.

``SessionVerifier.verify`` never touches the database and does NOT check the
signature. Callers that trust the returned principal for anything beyond a
redirect decision must also run ``jwt_handler.decode_session_token``
(``ApiGuard`` does both).
"""

import base64
import binascii
import json
import math
import time
from collections.abc import Callable
from dataclasses import dataclass

from src.rc_common.enums import Role


@dataclass(frozen=True)
class Principal:
    """Authenticated admin for the duration of one request."""

    admin_id: str
    email: str
    role: Role
    issued_at: int | None = None
    expires_at: int | None = None


def _finite_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _b64url_decode(segment: str) -> bytes:
    padded = segment + "=" * (-len(segment) % 4)
    return base64.urlsafe_b64decode(padded.encode("ascii"))


class SessionVerifier:
    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock

    def verify(self, token: str | None) -> Principal | None:
        if not token:
            return None

        parts = token.split(".")
        if len(parts) != 3 or not all(parts):
            return None

        try:
            payload = json.loads(_b64url_decode(parts[1]))
        except (binascii.Error, UnicodeError, ValueError):
            return None
        if not isinstance(payload, dict):
            return None

        exp = payload.get("exp")
        if exp is not None:
            # json.loads accepts NaN, Infinity and 1e400
            if not _finite_number(exp):
                return None
            if exp < int(self._clock()):
                return None

        admin_id = payload.get("sub")
        if not admin_id or not isinstance(admin_id, str):
            return None

        try:
            role = Role(payload.get("role"))
        except ValueError:
            return None

        iat = payload.get("iat")
        return Principal(
            admin_id=admin_id,
            email=str(payload.get("email") or ""),
            role=role,
            issued_at=int(iat) if _finite_number(iat) else None,
            expires_at=int(exp) if exp is not None else None,
        )


def extract_token(authorization: str | None, cookie_token: str | None) -> str | None:
    """Bearer header wins over the session cookie."""
    if authorization:
        scheme, _, value = authorization.partition(" ")
        if scheme.lower() == "bearer" and value.strip():
            return value.strip()
    return cookie_token or None
