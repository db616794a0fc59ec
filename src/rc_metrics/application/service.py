"""MetricsApplicationService: sales, stock and per-product aggregates.

Aggregates are read-only. ``create_sample_sales`` writes and expects the caller
to own the transaction.
"""

import logging
import random
from collections.abc import Callable
from datetime import date, datetime, timedelta

from sqlalchemy.ext.asyncio import AsyncSession

from src.rc_common.cents import average_cents
from src.rc_common.datetime_utils import start_of_day, utc_now, utc_today
from src.rc_common.enums import ProductStatus
from src.rc_common.errors import ProductNotFoundError
from src.rc_metrics.domain.aggregation import (
    TOP_PRODUCTS_LIMIT,
    fill_daily_series,
    group_stock_by_category,
    low_stock,
    resolve_range,
    stock_turnover,
)
from src.rc_metrics.domain.models import (
    DateRange,
    ProductPerformance,
    SalesMetrics,
    StockMetrics,
)
from src.rc_metrics.domain.repository import MetricsRepositoryProtocol
from src.rc_metrics.domain.sample_data import generate_sample_sales
from src.rc_metrics.infrastructure.persistence import MetricsRepository

logger = logging.getLogger("rc.metrics")


def _bounds(rng: DateRange) -> tuple[datetime, datetime]:
    """[start of first day, start of the day after the last day)."""
    return start_of_day(rng.start), start_of_day(rng.end + timedelta(days=1))


class MetricsApplicationService:
    def __init__(
        self,
        repo: MetricsRepositoryProtocol | None = None,
        today: Callable[[], date] = utc_today,
    ) -> None:
        self._repo: MetricsRepositoryProtocol = repo or MetricsRepository()
        self._today = today

    async def sales_metrics(
        self, db: AsyncSession, start: date | None = None, end: date | None = None
    ) -> SalesMetrics:
        rng = resolve_range(start, end, self._today())
        start_at, end_at = _bounds(rng)

        totals = await self._repo.sales_totals(db, start_at, end_at)
        daily = await self._repo.daily_sales(db, start_at, end_at)
        top = await self._repo.top_products(db, start_at, end_at, TOP_PRODUCTS_LIMIT)

        return SalesMetrics(
            range=rng,
            total_sales_cents=totals.total_cents,
            total_quantity=totals.quantity,
            sales_by_day=fill_daily_series(rng, daily),
            top_products=top,
        )

    async def stock_metrics(self, db: AsyncSession) -> StockMetrics:
        products = await self._repo.list_stocked_products(db)
        return StockMetrics(
            total_products=len(products),
            low_stock_products=low_stock(products),
            stock_by_category=group_stock_by_category(products),
        )

    async def product_performance(
        self,
        db: AsyncSession,
        product_id: str,
        start: date | None = None,
        end: date | None = None,
    ) -> ProductPerformance:
        snapshot = await self._repo.get_product_snapshot(db, product_id)
        if snapshot is None:
            raise ProductNotFoundError(product_id)

        rng = resolve_range(start, end, self._today())
        start_at, end_at = _bounds(rng)
        totals = await self._repo.sales_totals(db, start_at, end_at, product_id=product_id)
        daily = await self._repo.daily_sales(db, start_at, end_at, product_id=product_id)

        return ProductPerformance(
            product_id=snapshot.id,
            product_name=snapshot.name,
            range=rng,
            total_sales_cents=totals.total_cents,
            total_quantity_sold=totals.quantity,
            order_count=totals.order_count,
            average_order_value_cents=average_cents(totals.total_cents, totals.order_count),
            sales_trend=fill_daily_series(rng, daily),
            current_stock=snapshot.stock,
            stock_turnover=stock_turnover(totals.quantity, snapshot.stock),
        )

    async def create_sample_sales(
        self,
        db: AsyncSession,
        rng: random.Random | None = None,
        now: datetime | None = None,
    ) -> int:
        """Insert random sales for active products over the last 30 days.

        Returns the number of rows written; 0 when there is no active product.
        The caller owns the transaction.
        """
        products = [
            p
            for p in await self._repo.list_stocked_products(db)
            if p.status == ProductStatus.ACTIVE.value
        ]
        if not products:
            logger.info("no active products, sample sales skipped")
            return 0

        sales = generate_sample_sales(products, now or utc_now(), rng or random.Random())
        written = await self._repo.insert_sales(db, sales)
        logger.info("created %d sample sales rows", written)
        return written
