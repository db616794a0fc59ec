"""Unit tests for MetricsApplicationService (mocked repository)."""

from datetime import UTC, date, datetime
from unittest.mock import AsyncMock

import pytest

from src.rc_common.errors import ProductNotFoundError, ValidationFailedError
from src.rc_metrics.application.schemas import SalesMetricsOut
from src.rc_metrics.application.service import MetricsApplicationService
from src.rc_metrics.domain.models import ProductSnapshot, SalesTotals, TopProduct
from src.rc_product.domain.models import Product

TODAY = date(2024, 3, 31)


@pytest.fixture
def repo() -> AsyncMock:
    mock = AsyncMock()
    mock.sales_totals.return_value = SalesTotals(total_cents=0, quantity=0, order_count=0)
    mock.daily_sales.return_value = {}
    mock.top_products.return_value = []
    return mock


@pytest.fixture
def service(repo: AsyncMock) -> MetricsApplicationService:
    return MetricsApplicationService(repo, today=lambda: TODAY)


class TestSalesMetrics:
    async def test_default_range_and_bounds(self, service: MetricsApplicationService, repo: AsyncMock) -> None:
        metrics = await service.sales_metrics(AsyncMock())

        assert metrics.range.start == date(2024, 3, 1)
        assert metrics.range.end == TODAY
        assert len(metrics.sales_by_day) == 31
        _, start_at, end_at = repo.sales_totals.await_args.args
        assert start_at == datetime(2024, 3, 1, tzinfo=UTC)
        assert end_at == datetime(2024, 4, 1, tzinfo=UTC)

    async def test_totals_series_and_top_products(self, service: MetricsApplicationService, repo: AsyncMock) -> None:
        repo.sales_totals.return_value = SalesTotals(total_cents=12_500, quantity=7, order_count=3)
        repo.daily_sales.return_value = {date(2024, 1, 2): 12_500}
        repo.top_products.return_value = [TopProduct("p1", "Lamp", 12_500, 7)]

        metrics = await service.sales_metrics(AsyncMock(), date(2024, 1, 1), date(2024, 1, 3))

        assert metrics.total_sales_cents == 12_500
        assert metrics.total_quantity == 7
        assert [p.value_cents for p in metrics.sales_by_day] == [0, 12_500, 0]
        assert repo.top_products.await_args.args[3] == 10

        out = SalesMetricsOut.from_domain(metrics).model_dump()
        assert out["total_sales_display"] == "$125.00"
        assert out["sales_by_day"][1] == {"date": "2024-01-02", "value_cents": 12_500}

    @pytest.mark.parametrize(
        ("start", "end"),
        [(None, date(9999, 12, 31)), (None, date(1, 1, 5)), (date(1, 1, 1), None), (date(2030, 1, 1), None)],
    )
    async def test_bad_range_rejected_before_querying(
        self, service: MetricsApplicationService, repo: AsyncMock, start: date | None, end: date | None
    ) -> None:
        with pytest.raises(ValidationFailedError):
            await service.sales_metrics(AsyncMock(), start, end)
        repo.sales_totals.assert_not_awaited()


class TestStockMetrics:
    async def test_stock_metrics(self, service: MetricsApplicationService, repo: AsyncMock) -> None:
        repo.list_stocked_products.return_value = [
            Product("a", "A", "", 100, 3, "Books", "active"),
            Product("b", "B", "", 100, 40, "Toys", "inactive"),
        ]
        metrics = await service.stock_metrics(AsyncMock())

        assert metrics.total_products == 2
        assert [p.id for p in metrics.low_stock_products] == ["a"]
        assert [c.category for c in metrics.stock_by_category] == ["Toys", "Books"]


class TestProductPerformance:
    async def test_performance(self, service: MetricsApplicationService, repo: AsyncMock) -> None:
        repo.get_product_snapshot.return_value = ProductSnapshot("p1", "Lamp", 20)
        repo.sales_totals.return_value = SalesTotals(total_cents=10_000, quantity=30, order_count=3)

        perf = await service.product_performance(AsyncMock(), "p1", date(2024, 3, 30), None)

        assert perf.product_name == "Lamp"
        assert perf.average_order_value_cents == 3333
        assert perf.stock_turnover == 1.5
        assert perf.current_stock == 20
        assert len(perf.sales_trend) == 2
        assert repo.sales_totals.await_args.kwargs == {"product_id": "p1"}

    async def test_unknown_product(self, service: MetricsApplicationService, repo: AsyncMock) -> None:
        repo.get_product_snapshot.return_value = None
        with pytest.raises(ProductNotFoundError):
            await service.product_performance(AsyncMock(), "missing")
        repo.sales_totals.assert_not_awaited()

    async def test_no_sales(self, service: MetricsApplicationService, repo: AsyncMock) -> None:
        repo.get_product_snapshot.return_value = ProductSnapshot("p1", "Lamp", 0)
        perf = await service.product_performance(AsyncMock(), "p1")
        assert perf.average_order_value_cents == 0
        assert perf.stock_turnover == 0.0
