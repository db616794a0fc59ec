"""Product filter engine.

Every criterion is optional; a product is kept iff it passes all active
predicates. Input order is preserved. Price bounds are applied independently,
so an inverted range (min > max) simply matches nothing.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from src.rc_product.domain.models import Product

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20


@dataclass(frozen=True)
class ProductFilterCriteria:
    search: str | None = None
    category: str | None = None
    status: str | None = None
    min_price_cents: int | None = None
    max_price_cents: int | None = None
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT


def matches(product: Product, criteria: ProductFilterCriteria) -> bool:
    if criteria.search:
        needle = criteria.search.lower()
        if needle not in product.name.lower() and needle not in (product.description or "").lower():
            return False
    if criteria.category is not None and product.category != criteria.category:
        return False
    if criteria.status is not None and product.status != criteria.status:
        return False
    if criteria.min_price_cents is not None and product.price_cents < criteria.min_price_cents:
        return False
    if criteria.max_price_cents is not None and product.price_cents > criteria.max_price_cents:
        return False
    return True


def filter_products(products: Iterable[Product], criteria: ProductFilterCriteria) -> list[Product]:
    return [p for p in products if matches(p, criteria)]
