"""Validation result value objects shared by every validator."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str
    code: str

    def as_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message, "code": self.code}


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of one validation pass. ``data`` holds the normalized model when valid."""

    is_valid: bool
    errors: tuple[FieldError, ...] = field(default_factory=tuple)
    data: Any = None

    @classmethod
    def ok(cls, data: Any = None) -> "ValidationResult":
        return cls(is_valid=True, errors=(), data=data)

    @classmethod
    def failed(cls, errors: list[FieldError]) -> "ValidationResult":
        return cls(is_valid=False, errors=tuple(errors), data=None)
