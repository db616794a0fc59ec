"""Double-submit CSRF check: header value must equal the csrf cookie."""

import hmac
import secrets

SAFE_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})


def generate_csrf_token() -> str:
    return secrets.token_urlsafe(32)


def validate_csrf(method: str, header_token: str | None, cookie_token: str | None) -> bool:
    if method.upper() in SAFE_METHODS:
        return True
    if not header_token or not cookie_token:
        return False
    return hmac.compare_digest(header_token, cookie_token)
