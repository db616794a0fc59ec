"""Product API router.

Static paths (/stats, /low-stock, /batch-delete) are declared before
/{product_id} so they are not captured by the path parameter.
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.rc_common.database import get_db_session
from src.rc_common.response import ApiResponse, request_id_of, success_response
from src.rc_gateway.middleware.guard import ApiGuard, RequestContext
from src.rc_gateway.validation.registry import SchemaName
from src.rc_product.application.schemas import (
    BatchDeleteOut,
    ProductBatchDeleteRequest,
    ProductCreateRequest,
    ProductFilterParams,
    ProductOut,
    ProductStatsOut,
    ProductUpdateRequest,
)
from src.rc_product.application.service import ProductApplicationService

router = APIRouter(prefix="/products", tags=["products"])
_service = ProductApplicationService()


def get_product_service() -> ProductApplicationService:
    return _service


@router.get("", response_model=ApiResponse, summary="List products with filters")
async def list_products(
    request: Request,
    ctx: RequestContext = Depends(ApiGuard(schema=SchemaName.PRODUCT_FILTERS)),
    db: AsyncSession = Depends(get_db_session),
    service: ProductApplicationService = Depends(get_product_service),
) -> ApiResponse:
    params: ProductFilterParams = ctx.payload
    page = await service.list_products(db, params.to_criteria())
    return success_response(page.model_dump(mode="json"), request_id_of(request))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse,
    summary="Create a product",
)
async def create_product(
    request: Request,
    ctx: RequestContext = Depends(
        ApiGuard(schema=SchemaName.PRODUCT_CREATE, require_csrf=True)
    ),
    db: AsyncSession = Depends(get_db_session),
    service: ProductApplicationService = Depends(get_product_service),
) -> ApiResponse:
    body: ProductCreateRequest = ctx.payload
    async with db.begin():
        product = await service.create_product(db, body)
    return success_response(
        ProductOut.from_domain(product).model_dump(mode="json"), request_id_of(request)
    )


@router.get("/stats", response_model=ApiResponse, summary="Catalog statistics")
async def product_stats(
    request: Request,
    ctx: RequestContext = Depends(ApiGuard()),
    db: AsyncSession = Depends(get_db_session),
    service: ProductApplicationService = Depends(get_product_service),
) -> ApiResponse:
    stats = await service.get_stats(db)
    return success_response(ProductStatsOut.from_domain(stats).model_dump(), request_id_of(request))


@router.get("/low-stock", response_model=ApiResponse, summary="Products at or below threshold")
async def low_stock(
    request: Request,
    ctx: RequestContext = Depends(ApiGuard()),
    db: AsyncSession = Depends(get_db_session),
    service: ProductApplicationService = Depends(get_product_service),
) -> ApiResponse:
    products = await service.low_stock_products(db)
    data = [ProductOut.from_domain(p).model_dump(mode="json") for p in products]
    return success_response(data, request_id_of(request))


@router.post("/batch-delete", response_model=ApiResponse, summary="Delete several products")
async def batch_delete(
    request: Request,
    ctx: RequestContext = Depends(
        ApiGuard(schema=SchemaName.PRODUCT_BATCH_DELETE, require_csrf=True)
    ),
    db: AsyncSession = Depends(get_db_session),
    service: ProductApplicationService = Depends(get_product_service),
) -> ApiResponse:
    body: ProductBatchDeleteRequest = ctx.payload
    async with db.begin():
        result = await service.batch_delete(db, body.ids)
    return success_response(BatchDeleteOut.from_domain(result).model_dump(), request_id_of(request))


@router.get("/{product_id}", response_model=ApiResponse, summary="Get one product")
async def get_product(
    request: Request,
    product_id: str,
    ctx: RequestContext = Depends(ApiGuard()),
    db: AsyncSession = Depends(get_db_session),
    service: ProductApplicationService = Depends(get_product_service),
) -> ApiResponse:
    product = await service.get_product(db, product_id)
    return success_response(
        ProductOut.from_domain(product).model_dump(mode="json"), request_id_of(request)
    )


@router.put("/{product_id}", response_model=ApiResponse, summary="Update a product")
async def update_product(
    request: Request,
    product_id: str,
    ctx: RequestContext = Depends(
        ApiGuard(schema=SchemaName.PRODUCT_UPDATE, require_csrf=True)
    ),
    db: AsyncSession = Depends(get_db_session),
    service: ProductApplicationService = Depends(get_product_service),
) -> ApiResponse:
    body: ProductUpdateRequest = ctx.payload
    async with db.begin():
        product = await service.update_product(db, product_id, body)
    return success_response(
        ProductOut.from_domain(product).model_dump(mode="json"), request_id_of(request)
    )


@router.delete("/{product_id}", response_model=ApiResponse, summary="Delete a product")
async def delete_product(
    request: Request,
    product_id: str,
    ctx: RequestContext = Depends(ApiGuard(require_csrf=True)),
    db: AsyncSession = Depends(get_db_session),
    service: ProductApplicationService = Depends(get_product_service),
) -> ApiResponse:
    async with db.begin():
        await service.delete_product(db, product_id)
    return success_response({"id": product_id, "deleted": True}, request_id_of(request))


@router.post(
    "/{product_id}/duplicate",
    status_code=status.HTTP_201_CREATED,
    response_model=ApiResponse,
    summary="Copy a product as a draft",
)
async def duplicate_product(
    request: Request,
    product_id: str,
    ctx: RequestContext = Depends(ApiGuard(require_csrf=True)),
    db: AsyncSession = Depends(get_db_session),
    service: ProductApplicationService = Depends(get_product_service),
) -> ApiResponse:
    async with db.begin():
        product = await service.duplicate_product(db, product_id)
    return success_response(
        ProductOut.from_domain(product).model_dump(mode="json"), request_id_of(request)
    )
