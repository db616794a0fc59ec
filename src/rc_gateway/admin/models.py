"""Domain models for admin accounts: plain dataclasses."""

from dataclasses import dataclass
from datetime import datetime

from src.rc_common.enums import Role


@dataclass
class AdminIdentity:
    id: str
    email: str
    name: str
    role: Role
    created_at: datetime | None


@dataclass
class AdminCredentials:
    """Identity plus stored bcrypt hash; only the auth service sees this."""

    identity: AdminIdentity
    password_hash: str


@dataclass
class AuthResult:
    success: bool
    user: AdminIdentity | None = None
    token: str | None = None
    error: str | None = None
