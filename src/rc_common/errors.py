"""Unified error codes and custom exceptions.

Every error carries a machine-readable string code that ends up in the
response envelope as ``error.code``. HTTP status mapping:

  400  VALIDATION_ERROR / INVALID_JSON
  401  UNAUTHORIZED / LOGIN_FAILED
  403  FORBIDDEN / CSRF_TOKEN_INVALID
  404  NOT_FOUND
  405  METHOD_NOT_ALLOWED
  409  CONFLICT
  429  RATE_LIMIT_EXCEEDED
  500  INTERNAL_ERROR
"""

from typing import Any


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: str,
        message: str,
        http_status: int = 500,
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        self.details = details
        self.headers = headers
        super().__init__(message)


# --- 400 ---

class ValidationFailedError(AppError):
    def __init__(
        self,
        errors: list[dict[str, str]],
        message: str = "Request validation failed",
    ) -> None:
        super().__init__("VALIDATION_ERROR", message, 400, {"errors": errors})


class InvalidJsonError(AppError):
    def __init__(self) -> None:
        super().__init__("INVALID_JSON", "Invalid JSON format", 400)


# --- 401 / 403: Auth ---

class UnauthenticatedError(AppError):
    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__("UNAUTHORIZED", message, 401)


class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__("LOGIN_FAILED", "Invalid email or password", 401)


class InsufficientPermissionsError(AppError):
    def __init__(self, message: str = "Insufficient permissions") -> None:
        super().__init__("FORBIDDEN", message, 403)


class CsrfTokenInvalidError(AppError):
    def __init__(self) -> None:
        super().__init__("CSRF_TOKEN_INVALID", "Invalid or missing CSRF token", 403)


# --- 404 / 405 / 409 ---

class NotFoundError(AppError):
    def __init__(self, entity: str, entity_id: str) -> None:
        super().__init__("NOT_FOUND", f"{entity} not found: {entity_id}", 404)


class ProductNotFoundError(NotFoundError):
    def __init__(self, product_id: str) -> None:
        super().__init__("Product", product_id)


class MethodNotAllowedError(AppError):
    def __init__(self, method: str) -> None:
        super().__init__("METHOD_NOT_ALLOWED", f"Method not allowed: {method}", 405)


class ConflictError(AppError):
    def __init__(self, message: str) -> None:
        super().__init__("CONFLICT", message, 409)


class EmailExistsError(ConflictError):
    def __init__(self) -> None:
        super().__init__("Email already exists")


# --- 429 / 500: System ---

class RateLimitExceededError(AppError):
    def __init__(self, retry_after: int, policy: str) -> None:
        super().__init__(
            "RATE_LIMIT_EXCEEDED",
            "Too many requests. Please try again later.",
            429,
            details={"retryAfter": retry_after, "type": policy},
            headers={"Retry-After": str(retry_after)},
        )


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__("INTERNAL_ERROR", detail, 500)
