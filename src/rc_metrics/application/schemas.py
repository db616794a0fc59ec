"""Pydantic schemas for rc_metrics query params and responses."""

from datetime import date, timedelta

from pydantic import BaseModel, Field, model_validator

from src.rc_common.cents import cents_to_display
from src.rc_metrics.domain.aggregation import EARLIEST_DATE, LATEST_DATE, MAX_RANGE_DAYS
from src.rc_metrics.domain.models import (
    CategoryStock,
    DailyPoint,
    ProductPerformance,
    SalesMetrics,
    StockMetrics,
    TopProduct,
)
from src.rc_product.application.schemas import ProductOut


class MetricsRangeParams(BaseModel):
    """Optional ``start``/``end`` as YYYY-MM-DD.

    Missing bounds are filled by ``resolve_range``, which re-checks order and
    span once the defaults are in.
    """

    start: date | None = Field(None, ge=EARLIEST_DATE, le=LATEST_DATE)
    end: date | None = Field(None, ge=EARLIEST_DATE, le=LATEST_DATE)

    @model_validator(mode="after")
    def check_order(self) -> "MetricsRangeParams":
        if self.start is not None and self.end is not None:
            if self.start > self.end:
                raise ValueError("start must be on or before end")
            if self.end - self.start > timedelta(days=MAX_RANGE_DAYS):
                raise ValueError(f"Date range must not exceed {MAX_RANGE_DAYS} days")
        return self


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class DailyPointOut(BaseModel):
    date: str
    value_cents: int

    @classmethod
    def from_domain(cls, p: DailyPoint) -> "DailyPointOut":
        return cls(date=p.day.isoformat(), value_cents=p.value_cents)


class TopProductOut(BaseModel):
    product_id: str
    product_name: str
    total_sales_cents: int
    quantity: int

    @classmethod
    def from_domain(cls, t: TopProduct) -> "TopProductOut":
        return cls(
            product_id=t.product_id,
            product_name=t.product_name,
            total_sales_cents=t.total_sales_cents,
            quantity=t.quantity,
        )


class SalesMetricsOut(BaseModel):
    start: str
    end: str
    total_sales_cents: int
    total_sales_display: str
    total_quantity: int
    sales_by_day: list[DailyPointOut]
    top_products: list[TopProductOut]

    @classmethod
    def from_domain(cls, m: SalesMetrics) -> "SalesMetricsOut":
        return cls(
            start=m.range.start.isoformat(),
            end=m.range.end.isoformat(),
            total_sales_cents=m.total_sales_cents,
            total_sales_display=cents_to_display(m.total_sales_cents),
            total_quantity=m.total_quantity,
            sales_by_day=[DailyPointOut.from_domain(p) for p in m.sales_by_day],
            top_products=[TopProductOut.from_domain(t) for t in m.top_products],
        )


class CategoryStockOut(BaseModel):
    category: str
    total_stock: int
    product_count: int

    @classmethod
    def from_domain(cls, c: CategoryStock) -> "CategoryStockOut":
        return cls(category=c.category, total_stock=c.total_stock, product_count=c.product_count)


class StockMetricsOut(BaseModel):
    total_products: int
    low_stock_count: int
    low_stock_products: list[ProductOut]
    stock_by_category: list[CategoryStockOut]

    @classmethod
    def from_domain(cls, m: StockMetrics) -> "StockMetricsOut":
        return cls(
            total_products=m.total_products,
            low_stock_count=len(m.low_stock_products),
            low_stock_products=[ProductOut.from_domain(p) for p in m.low_stock_products],
            stock_by_category=[CategoryStockOut.from_domain(c) for c in m.stock_by_category],
        )


class ProductPerformanceOut(BaseModel):
    product_id: str
    product_name: str
    start: str
    end: str
    total_sales_cents: int
    total_quantity_sold: int
    order_count: int
    average_order_value_cents: int
    sales_trend: list[DailyPointOut]
    current_stock: int
    stock_turnover: float

    @classmethod
    def from_domain(cls, p: ProductPerformance) -> "ProductPerformanceOut":
        return cls(
            product_id=p.product_id,
            product_name=p.product_name,
            start=p.range.start.isoformat(),
            end=p.range.end.isoformat(),
            total_sales_cents=p.total_sales_cents,
            total_quantity_sold=p.total_quantity_sold,
            order_count=p.order_count,
            average_order_value_cents=p.average_order_value_cents,
            sales_trend=[DailyPointOut.from_domain(d) for d in p.sales_trend],
            current_stock=p.current_stock,
            stock_turnover=p.stock_turnover,
        )
