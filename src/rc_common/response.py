"""Unified API response envelope.

All API endpoints return this format:
{
    "success": true,          // false on error
    "data": { ... },          // null on error
    "error": null,            // {"code", "message", "details"} on error
    "timestamp": "...",
    "request_id": "..."
}
"""

import uuid
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field
from starlette.requests import Request


class ErrorBody(BaseModel):
    code: str
    message: str
    details: dict[str, Any] | None = None


class ApiResponse(BaseModel):
    success: bool = True
    data: Any = None
    error: ErrorBody | None = None
    timestamp: str = Field(default_factory=lambda: datetime.now(timezone.utc).isoformat())
    request_id: str = Field(default_factory=lambda: f"req_{uuid.uuid4().hex[:12]}")


def request_id_of(request: Request) -> str | None:
    """Read request_id injected by RequestLogMiddleware, None if absent."""
    return getattr(request.state, "request_id", None)


def success_response(data: Any = None, request_id: str | None = None) -> ApiResponse:
    resp = ApiResponse(success=True, data=data)
    if request_id:
        resp.request_id = request_id
    return resp


def error_response(
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
    request_id: str | None = None,
) -> ApiResponse:
    resp = ApiResponse(
        success=False,
        data=None,
        error=ErrorBody(code=code, message=message, details=details),
    )
    if request_id:
        resp.request_id = request_id
    return resp
