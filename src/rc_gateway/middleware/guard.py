"""ApiGuard: per-route request pipeline as a FastAPI dependency.

Stages run in a fixed order and the first failure short-circuits:

    method -> rate limit -> CSRF -> authentication -> role -> validation

Usage:
    @router.post("/products")
    async def create(ctx: RequestContext = Depends(ApiGuard(schema=SchemaName.PRODUCT_CREATE,
                                                             require_csrf=True))):
        body: ProductCreateRequest = ctx.payload
"""

import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from starlette.requests import Request

from config.settings import settings
from src.rc_common.enums import Role
from src.rc_common.errors import (
    CsrfTokenInvalidError,
    InvalidJsonError,
    MethodNotAllowedError,
    RateLimitExceededError,
    UnauthenticatedError,
    ValidationFailedError,
)
from src.rc_gateway.auth.csrf import validate_csrf
from src.rc_gateway.auth.jwt_handler import decode_session_token
from src.rc_gateway.auth.roles import require_role
from src.rc_gateway.auth.session import Principal, SessionVerifier, extract_token
from src.rc_gateway.middleware.rate_limit import (
    FixedWindowRateLimiter,
    RateLimitPolicy,
    client_key,
    preset_for,
)
from src.rc_gateway.validation.registry import SchemaName, query_to_dict, validate

logger = logging.getLogger("rc.auth")

_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


@dataclass(frozen=True)
class RequestContext:
    """What the guard hands to the route handler."""

    principal: Principal | None
    payload: Any
    client_key: str


class ApiGuard:
    def __init__(
        self,
        *,
        rate_limit: RateLimitPolicy | None = RateLimitPolicy.API,
        require_auth: bool = True,
        role: Role | None = None,
        schema: SchemaName | None = None,
        methods: Iterable[str] | None = None,
        require_csrf: bool = False,
        verifier: SessionVerifier | None = None,
    ) -> None:
        self.rate_limit = rate_limit
        self.require_auth = require_auth or role is not None
        self.role = role
        self.schema = schema
        self.methods = frozenset(m.upper() for m in methods) if methods else None
        self.require_csrf = require_csrf
        self._verifier = verifier or SessionVerifier()

    async def __call__(self, request: Request) -> RequestContext:
        method = request.method.upper()
        if self.methods is not None and method not in self.methods:
            raise MethodNotAllowedError(method)

        key = client_key(request.headers, request.client.host if request.client else None)
        if self.rate_limit is not None:
            self._check_rate_limit(request, key)

        if self.require_csrf and not validate_csrf(
            method,
            request.headers.get(settings.CSRF_HEADER_NAME),
            request.cookies.get(settings.CSRF_COOKIE_NAME),
        ):
            logger.warning("csrf check failed %s %s client=%s", method, request.url.path, key)
            raise CsrfTokenInvalidError()

        principal: Principal | None = None
        if self.require_auth:
            principal = self._authenticate(request)
            if self.role is not None:
                require_role(principal.role, self.role)

        payload: Any = None
        if self.schema is not None:
            raw = await self._read_input(request, method)
            result = validate(self.schema, raw)
            if not result.is_valid:
                raise ValidationFailedError([e.as_dict() for e in result.errors])
            payload = result.data

        return RequestContext(principal=principal, payload=payload, client_key=key)

    def _check_rate_limit(self, request: Request, key: str) -> None:
        assert self.rate_limit is not None
        limiter: FixedWindowRateLimiter = request.app.state.rate_limiter
        preset = preset_for(self.rate_limit)
        if not limiter.allow(key, preset.max_requests, preset.window_ms):
            retry_after = limiter.retry_after_seconds(preset.window_ms)
            logging.getLogger("rc.ratelimit").warning(
                "rate limit exceeded client=%s policy=%s retry_after=%ds",
                key,
                self.rate_limit.value,
                retry_after,
            )
            raise RateLimitExceededError(retry_after, self.rate_limit.value)

    def _authenticate(self, request: Request) -> Principal:
        token = extract_token(
            request.headers.get("authorization"),
            request.cookies.get(settings.SESSION_COOKIE_NAME),
        )
        if token is None:
            raise UnauthenticatedError()

        principal = self._verifier.verify(token)
        if principal is None:
            raise UnauthenticatedError("Invalid or expired token")

        # Signature check; raises UnauthenticatedError on mismatch
        decode_session_token(token)
        return principal

    @staticmethod
    async def _read_input(request: Request, method: str) -> Any:
        if method not in _BODY_METHODS:
            return query_to_dict(request.query_params)

        body = await request.body()
        if not body.strip():
            return {}
        try:
            return json.loads(body)
        except ValueError:
            raise InvalidJsonError() from None
