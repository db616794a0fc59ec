"""Redirect unauthenticated browser page requests to the login page.

Only the fast-path ``SessionVerifier`` check runs here; the API routes do the
full signature check through ``ApiGuard``.
"""

import logging
from urllib.parse import quote

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import RedirectResponse, Response
from starlette.types import ASGIApp

from config.settings import settings
from src.rc_gateway.auth.session import SessionVerifier

logger = logging.getLogger("rc.auth")

PROTECTED_PREFIXES: tuple[str, ...] = ("/dashboard",)
LOGIN_PATH = "/login"


def is_protected(path: str, prefixes: tuple[str, ...] = PROTECTED_PREFIXES) -> bool:
    return any(path == p or path.startswith(f"{p}/") for p in prefixes)


class ProtectedPageMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        verifier: SessionVerifier | None = None,
        prefixes: tuple[str, ...] = PROTECTED_PREFIXES,
    ) -> None:
        super().__init__(app)
        self._verifier = verifier or SessionVerifier()
        self._prefixes = prefixes

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if is_protected(path, self._prefixes):
            token = request.cookies.get(settings.SESSION_COOKIE_NAME)
            if self._verifier.verify(token) is None:
                logger.info("redirecting unauthenticated page request %s", path)
                return RedirectResponse(
                    f"{LOGIN_PATH}?redirect={quote(path, safe='/')}", status_code=307
                )
        return await call_next(request)
