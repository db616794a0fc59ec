"""Auth API router: login, logout, me, csrf.

All endpoints return ApiResponse. request_id is read from request.state
(injected by RequestLogMiddleware). Auth routes use the stricter ``auth``
rate-limit preset except ``/me``.
"""

from fastapi import APIRouter, Depends, Request, Response
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.rc_common.database import get_db_session
from src.rc_common.errors import InvalidCredentialsError
from src.rc_common.response import ApiResponse, request_id_of, success_response
from src.rc_gateway.admin.schemas import AdminInfo, CsrfTokenResponse, LoginRequest, LoginResponse
from src.rc_gateway.admin.service import AuthService
from src.rc_gateway.auth.csrf import generate_csrf_token
from src.rc_gateway.auth.jwt_handler import session_max_age_seconds
from src.rc_gateway.middleware.guard import ApiGuard, RequestContext
from src.rc_gateway.middleware.rate_limit import RateLimitPolicy
from src.rc_gateway.validation.registry import SchemaName

router = APIRouter(prefix="/auth", tags=["auth"])
_service = AuthService()


def get_auth_service() -> AuthService:
    return _service


@router.post("/login", response_model=ApiResponse, summary="Admin login")
async def login(
    request: Request,
    response: Response,
    ctx: RequestContext = Depends(
        ApiGuard(rate_limit=RateLimitPolicy.AUTH, require_auth=False, schema=SchemaName.LOGIN)
    ),
    db: AsyncSession = Depends(get_db_session),
    service: AuthService = Depends(get_auth_service),
) -> ApiResponse:
    body: LoginRequest = ctx.payload
    result = await service.login(body.email, body.password, db)
    if not result.success or result.user is None or result.token is None:
        raise InvalidCredentialsError()

    max_age = session_max_age_seconds()
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        result.token,
        max_age=max_age,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
        path="/",
    )
    data = LoginResponse(
        token=result.token,
        expires_in=max_age,
        user=AdminInfo.from_domain(result.user),
    )
    return success_response(data.model_dump(mode="json"), request_id_of(request))


@router.post("/logout", response_model=ApiResponse, summary="Clear the session cookie")
async def logout(
    request: Request,
    response: Response,
    ctx: RequestContext = Depends(ApiGuard(rate_limit=RateLimitPolicy.AUTH, require_auth=False)),
) -> ApiResponse:
    response.delete_cookie(settings.SESSION_COOKIE_NAME, path="/")
    return success_response({"message": "Logged out successfully"}, request_id_of(request))


@router.get("/me", response_model=ApiResponse, summary="Current admin")
async def me(
    request: Request,
    ctx: RequestContext = Depends(ApiGuard()),
    db: AsyncSession = Depends(get_db_session),
    service: AuthService = Depends(get_auth_service),
) -> ApiResponse:
    admin = await service.current_admin(ctx.principal, db)
    return success_response(
        AdminInfo.from_domain(admin).model_dump(mode="json"), request_id_of(request)
    )


@router.get("/csrf", response_model=ApiResponse, summary="Issue a CSRF token")
async def csrf_token(
    request: Request,
    response: Response,
    ctx: RequestContext = Depends(ApiGuard(rate_limit=RateLimitPolicy.AUTH, require_auth=False)),
) -> ApiResponse:
    token = generate_csrf_token()
    # Readable by the dashboard script, which echoes it in the header
    response.set_cookie(
        settings.CSRF_COOKIE_NAME,
        token,
        httponly=False,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="strict",
        path="/",
    )
    data = CsrfTokenResponse(csrf_token=token, header_name=settings.CSRF_HEADER_NAME)
    return success_response(data.model_dump(), request_id_of(request))
