"""FastAPI application entry point.

Run with: uvicorn src.main:app --reload --port 8000
"""

# ruff: noqa: E402  -- uvloop.install() must run before other imports

import uvloop

uvloop.install()

import asyncio
import contextlib
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.settings import settings
from src.rc_admin.api.router import router as admin_router
from src.rc_common.database import engine, ping_database
from src.rc_common.errors import AppError, InternalError
from src.rc_common.response import error_response, request_id_of
from src.rc_gateway.api.router import router as auth_router
from src.rc_gateway.middleware.page_auth import ProtectedPageMiddleware
from src.rc_gateway.middleware.rate_limit import FixedWindowRateLimiter
from src.rc_gateway.middleware.request_log import RequestLogMiddleware
from src.rc_gateway.middleware.security_headers import SecurityHeadersMiddleware
from src.rc_metrics.api.router import router as metrics_router
from src.rc_product.api.router import router as product_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger("rc.app")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: verify DB, start the rate-limit sweeper. Shutdown: stop it, dispose."""
    await ping_database()
    sweeper = asyncio.create_task(
        app.state.rate_limiter.run_sweeper(settings.RATE_LIMIT_SWEEP_SECONDS)
    )
    yield
    sweeper.cancel()
    with contextlib.suppress(asyncio.CancelledError):
        await sweeper
    await engine.dispose()


app = FastAPI(
    title=settings.APP_NAME,
    version="0.1.0",
    lifespan=lifespan,
)
app.state.rate_limiter = FixedWindowRateLimiter()

# Last added runs first: request id is assigned before anything else
app.add_middleware(ProtectedPageMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestLogMiddleware)


def _error_json(request: Request, status_code: int, code: str, message: str,
                details: dict | None = None, headers: dict[str, str] | None = None) -> JSONResponse:
    resp = error_response(code, message, details, request_id_of(request))
    return JSONResponse(status_code=status_code, content=resp.model_dump(), headers=headers)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return _error_json(request, exc.http_status, exc.code, exc.message, exc.details, exc.headers)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {
            "field": ".".join(str(p) for p in err.get("loc", ())) or "__root__",
            "message": str(err.get("msg", "Invalid value")),
            "code": str(err.get("type", "invalid")),
        }
        for err in exc.errors()
    ]
    return _error_json(request, 400, "VALIDATION_ERROR", "Request validation failed", {"errors": errors})


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        code, message = "NOT_FOUND", "Resource not found"
    elif exc.status_code == 405:
        code, message = "METHOD_NOT_ALLOWED", f"Method not allowed: {request.method}"
    else:
        code, message = "HTTP_ERROR", str(exc.detail)
    return _error_json(request, exc.status_code, code, message, headers=getattr(exc, "headers", None))


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    err = InternalError(str(exc)) if settings.DEBUG else InternalError()
    return _error_json(request, err.http_status, err.code, err.message)


app.include_router(auth_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")
app.include_router(product_router, prefix="/api/v1")
app.include_router(metrics_router, prefix="/api/v1")


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "version": "0.1.0"}
