"""Password hashing and strength rules.

Hashing uses the ``bcrypt`` library directly (>=4.0).  passlib[bcrypt] is
intentionally avoided because passlib is unmaintained and incompatible with
bcrypt >=4.
"""

import re

import bcrypt

from src.rc_gateway.validation.result import FieldError, ValidationResult

BCRYPT_ROUNDS = 12
MIN_PASSWORD_LENGTH = 8

_RULES: tuple[tuple[re.Pattern[str], str, str], ...] = (
    (re.compile(r"[A-Z]"), "missing_uppercase", "Password must contain at least one uppercase letter"),
    (re.compile(r"[a-z]"), "missing_lowercase", "Password must contain at least one lowercase letter"),
    (re.compile(r"\d"), "missing_digit", "Password must contain at least one number"),
)


def hash_password(plain: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password with bcrypt. Returns a utf-8 hash string."""
    hashed_bytes: bytes = bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt(rounds))
    return hashed_bytes.decode("utf-8")


def verify_password(plain: str, hashed: str) -> bool:
    """Verify a plain-text password against a bcrypt hash."""
    return bcrypt.checkpw(plain.encode("utf-8"), hashed.encode("utf-8"))


def validate_password(password: str) -> ValidationResult:
    """Check every strength rule and report all failures at once."""
    errors: list[FieldError] = []
    if len(password) < MIN_PASSWORD_LENGTH:
        errors.append(
            FieldError(
                "password",
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
                "too_short",
            )
        )
    for pattern, code, message in _RULES:
        if not pattern.search(password):
            errors.append(FieldError("password", message, code))

    if errors:
        return ValidationResult.failed(errors)
    return ValidationResult.ok()
