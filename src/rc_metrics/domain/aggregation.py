"""Pure aggregation helpers for sales and stock metrics.

Zero I/O. The service layer feeds these with rows from the repository.
"""

from collections.abc import Iterable, Mapping
from datetime import date, timedelta

from src.rc_common.errors import ValidationFailedError
from src.rc_metrics.domain.models import CategoryStock, DailyPoint, DateRange
from src.rc_product.domain.models import Product

DEFAULT_RANGE_DAYS = 30
TOP_PRODUCTS_LIMIT = 10
MAX_RANGE_DAYS = 366
EARLIEST_DATE = date(2000, 1, 1)
LATEST_DATE = date(2100, 12, 31)


def _range_error(field: str, message: str) -> ValidationFailedError:
    return ValidationFailedError([{"field": field, "message": message, "code": "invalid_range"}])


def resolve_range(start: date | None, end: date | None, today: date) -> DateRange:
    """Fill a missing bound, then check the resolved range.

    ``end`` defaults to today and ``start`` to 30 days before ``end``. Bounds
    must fall inside [EARLIEST_DATE, LATEST_DATE], ``start`` must not be after
    ``end`` and the range spans at most MAX_RANGE_DAYS.
    """
    for field, value in (("start", start), ("end", end)):
        if value is not None and not EARLIEST_DATE <= value <= LATEST_DATE:
            raise _range_error(field, f"Date must be between {EARLIEST_DATE} and {LATEST_DATE}")

    end = end or today
    start = start or max(end - timedelta(days=DEFAULT_RANGE_DAYS), EARLIEST_DATE)
    if start > end:
        raise _range_error("start", "start must be on or before end")
    if end - start > timedelta(days=MAX_RANGE_DAYS):
        raise _range_error("__root__", f"Date range must not exceed {MAX_RANGE_DAYS} days")
    return DateRange(start=start, end=end)


def fill_daily_series(rng: DateRange, totals: Mapping[date, int]) -> list[DailyPoint]:
    """One point per day in ``rng`` (inclusive); days without sales get 0."""
    points: list[DailyPoint] = []
    day = rng.start
    while day <= rng.end:
        points.append(DailyPoint(day=day, value_cents=totals.get(day, 0)))
        day += timedelta(days=1)
    return points


def stock_turnover(quantity_sold: int, current_stock: int) -> float:
    """Units sold per unit currently on hand; 0 when out of stock."""
    if current_stock <= 0:
        return 0.0
    return round(quantity_sold / current_stock, 4)


def low_stock(products: Iterable[Product]) -> list[Product]:
    return [p for p in products if p.is_low_stock]


def group_stock_by_category(products: Iterable[Product]) -> list[CategoryStock]:
    """Sum stock per category, largest total first (ties by category name)."""
    buckets: dict[str, CategoryStock] = {}
    for p in products:
        bucket = buckets.setdefault(p.category, CategoryStock(p.category, 0, 0))
        bucket.total_stock += p.stock
        bucket.product_count += 1
    return sorted(buckets.values(), key=lambda c: (-c.total_stock, c.category))
