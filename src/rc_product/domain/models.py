"""Domain models for rc_product: plain dataclasses."""

from dataclasses import dataclass, field
from datetime import datetime


@dataclass
class Product:
    id: str
    name: str
    description: str
    price_cents: int
    stock: int
    category: str
    status: str
    cost_price_cents: int | None = None
    low_stock_threshold: int = 10
    specifications: dict[str, str] = field(default_factory=dict)
    tags: list[str] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_low_stock(self) -> bool:
        return self.stock <= self.low_stock_threshold


@dataclass
class ProductStats:
    total_products: int
    active_products: int
    draft_products: int
    inactive_products: int
    total_value_cents: int
    average_price_cents: int
    low_stock_count: int


@dataclass
class BatchDeleteResult:
    successful: list[str]
    failed: list[str]
