"""Admin account API: create and list (super_admin only)."""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.rc_admin.application.service import AdminService
from src.rc_common.database import get_db_session
from src.rc_common.enums import Role
from src.rc_common.response import ApiResponse, request_id_of, success_response
from src.rc_gateway.admin.schemas import AdminCreateRequest, AdminInfo
from src.rc_gateway.middleware.guard import ApiGuard, RequestContext
from src.rc_gateway.validation.registry import SchemaName

router = APIRouter(prefix="/admin", tags=["admin"])
_service = AdminService()


def get_admin_service() -> AdminService:
    return _service


@router.post(
    "/users",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse,
    summary="Create an admin account",
)
async def create_admin(
    request: Request,
    ctx: RequestContext = Depends(
        ApiGuard(role=Role.SUPER_ADMIN, schema=SchemaName.ADMIN_CREATE, require_csrf=True)
    ),
    db: AsyncSession = Depends(get_db_session),
    service: AdminService = Depends(get_admin_service),
) -> ApiResponse:
    body: AdminCreateRequest = ctx.payload
    async with db.begin():
        admin = await service.create_admin(body, ctx.principal, db)
    return success_response(
        AdminInfo.from_domain(admin).model_dump(mode="json"), request_id_of(request)
    )


@router.get("/users", response_model=ApiResponse, summary="List admin accounts")
async def list_admins(
    request: Request,
    ctx: RequestContext = Depends(ApiGuard(role=Role.SUPER_ADMIN)),
    db: AsyncSession = Depends(get_db_session),
    service: AdminService = Depends(get_admin_service),
) -> ApiResponse:
    admins = await service.list_admins(ctx.principal, db)
    data = [AdminInfo.from_domain(a).model_dump(mode="json") for a in admins]
    return success_response(data, request_id_of(request))
