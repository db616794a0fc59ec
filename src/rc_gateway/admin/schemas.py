"""Pydantic request/response schemas for login and admin accounts.

All responses are wrapped in ApiResponse at the router layer.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator

from src.rc_common.datetime_utils import iso_or_none
from src.rc_common.enums import Role
from src.rc_gateway.admin.models import AdminIdentity
from src.rc_gateway.auth.password import validate_password


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()


class AdminCreateRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., max_length=128)
    name: str = Field(..., min_length=2, max_length=100)
    role: Role = Role.ADMIN

    @field_validator("email")
    @classmethod
    def lower_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 2:
            raise ValueError("Name must be at least 2 characters")
        return v

    @field_validator("password")
    @classmethod
    def password_strength(cls, v: str) -> str:
        """Enforce: at least 8 chars, one uppercase, one lowercase, one digit."""
        result = validate_password(v)
        if not result.is_valid:
            raise ValueError("; ".join(e.message for e in result.errors))
        return v


class AdminInfo(BaseModel):
    """Admin identity as exposed by the API (never includes the hash)."""

    id: str
    email: str
    name: str
    role: Role
    created_at: str | None

    @classmethod
    def from_domain(cls, admin: AdminIdentity) -> "AdminInfo":
        return cls(
            id=admin.id,
            email=admin.email,
            name=admin.name,
            role=admin.role,
            created_at=iso_or_none(admin.created_at),
        )


class LoginResponse(BaseModel):
    token: str
    token_type: str = "Bearer"
    expires_in: int
    user: AdminInfo


class CsrfTokenResponse(BaseModel):
    csrf_token: str
    header_name: str
