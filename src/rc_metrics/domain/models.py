"""Domain models for rc_metrics: plain dataclasses."""

from dataclasses import dataclass, field
from datetime import date, datetime

from src.rc_product.domain.models import Product


@dataclass(frozen=True)
class DateRange:
    """Inclusive calendar-day range (UTC)."""

    start: date
    end: date


@dataclass
class DailyPoint:
    day: date
    value_cents: int


@dataclass(frozen=True)
class NewSale:
    """A sales_data row to insert."""

    product_id: str
    quantity: int
    unit_price_cents: int
    total_amount_cents: int
    sale_date: datetime


@dataclass
class SalesTotals:
    total_cents: int
    quantity: int
    order_count: int


@dataclass
class TopProduct:
    product_id: str
    product_name: str
    total_sales_cents: int
    quantity: int


@dataclass
class CategoryStock:
    category: str
    total_stock: int
    product_count: int


@dataclass
class ProductSnapshot:
    id: str
    name: str
    stock: int


@dataclass
class SalesMetrics:
    range: DateRange
    total_sales_cents: int
    total_quantity: int
    sales_by_day: list[DailyPoint] = field(default_factory=list)
    top_products: list[TopProduct] = field(default_factory=list)


@dataclass
class StockMetrics:
    total_products: int
    low_stock_products: list[Product] = field(default_factory=list)
    stock_by_category: list[CategoryStock] = field(default_factory=list)


@dataclass
class ProductPerformance:
    product_id: str
    product_name: str
    range: DateRange
    total_sales_cents: int
    total_quantity_sold: int
    order_count: int
    average_order_value_cents: int
    sales_trend: list[DailyPoint]
    current_stock: int
    stock_turnover: float
