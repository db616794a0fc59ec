"""Metrics API router: sales, stock, per-product performance."""

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.rc_common.database import get_db_session
from src.rc_common.response import ApiResponse, request_id_of, success_response
from src.rc_gateway.middleware.guard import ApiGuard, RequestContext
from src.rc_gateway.validation.registry import SchemaName
from src.rc_metrics.application.schemas import (
    MetricsRangeParams,
    ProductPerformanceOut,
    SalesMetricsOut,
    StockMetricsOut,
)
from src.rc_metrics.application.service import MetricsApplicationService

router = APIRouter(prefix="/metrics", tags=["metrics"])
_service = MetricsApplicationService()


def get_metrics_service() -> MetricsApplicationService:
    return _service


@router.get("/sales", response_model=ApiResponse, summary="Sales metrics for a date range")
async def sales_metrics(
    request: Request,
    ctx: RequestContext = Depends(ApiGuard(schema=SchemaName.METRICS_RANGE)),
    db: AsyncSession = Depends(get_db_session),
    service: MetricsApplicationService = Depends(get_metrics_service),
) -> ApiResponse:
    rng: MetricsRangeParams = ctx.payload
    metrics = await service.sales_metrics(db, rng.start, rng.end)
    return success_response(SalesMetricsOut.from_domain(metrics).model_dump(), request_id_of(request))


@router.get("/stock", response_model=ApiResponse, summary="Stock metrics")
async def stock_metrics(
    request: Request,
    ctx: RequestContext = Depends(ApiGuard()),
    db: AsyncSession = Depends(get_db_session),
    service: MetricsApplicationService = Depends(get_metrics_service),
) -> ApiResponse:
    metrics = await service.stock_metrics(db)
    return success_response(
        StockMetricsOut.from_domain(metrics).model_dump(mode="json"), request_id_of(request)
    )


@router.get(
    "/products/{product_id}",
    response_model=ApiResponse,
    summary="Sales performance of one product",
)
async def product_performance(
    request: Request,
    product_id: str,
    ctx: RequestContext = Depends(ApiGuard(schema=SchemaName.METRICS_RANGE)),
    db: AsyncSession = Depends(get_db_session),
    service: MetricsApplicationService = Depends(get_metrics_service),
) -> ApiResponse:
    rng: MetricsRangeParams = ctx.payload
    perf = await service.product_performance(db, product_id, rng.start, rng.end)
    return success_response(
        ProductPerformanceOut.from_domain(perf).model_dump(), request_id_of(request)
    )
