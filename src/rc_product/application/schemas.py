"""Pydantic schemas for rc_product requests and responses.

All money fields are integer cents. Query parameters use the camelCase names
the dashboard sends (``minPriceCents``/``maxPriceCents``); snake_case is accepted too.
"""

from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from config.settings import settings
from src.rc_common.cents import MAX_PRICE_CENTS, cents_to_display
from src.rc_common.datetime_utils import iso_or_none
from src.rc_common.enums import ProductStatus
from src.rc_product.domain.filters import DEFAULT_LIMIT, DEFAULT_PAGE, ProductFilterCriteria
from src.rc_product.domain.models import BatchDeleteResult, Product, ProductStats

MAX_STOCK = 999_999
MAX_TAGS = 20

# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class ProductFilterParams(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    search: str | None = Field(None, max_length=100)
    category: str | None = Field(None, max_length=100)
    status: ProductStatus | None = None
    min_price: int | None = Field(None, ge=0, alias="minPriceCents")
    max_price: int | None = Field(None, ge=0, alias="maxPriceCents")
    page: int = Field(DEFAULT_PAGE, ge=1, le=1000)
    limit: int = Field(DEFAULT_LIMIT, ge=1, le=100)

    def to_criteria(self) -> ProductFilterCriteria:
        return ProductFilterCriteria(
            search=self.search.strip() if self.search else None,
            category=self.category,
            status=self.status.value if self.status else None,
            min_price_cents=self.min_price,
            max_price_cents=self.max_price,
            page=self.page,
            limit=self.limit,
        )


def _check_specifications(v: dict[str, str]) -> dict[str, str]:
    for key, value in v.items():
        if len(value) > 500:
            raise ValueError(f"Specification '{key}' must be at most 500 characters")
    return v


def _check_tags(v: list[str]) -> list[str]:
    if len(v) > MAX_TAGS:
        raise ValueError(f"At most {MAX_TAGS} tags are allowed")
    if any(len(tag) > 50 for tag in v):
        raise ValueError("Tags must be at most 50 characters")
    return v


Specifications = Annotated[dict[str, str], AfterValidator(_check_specifications)]
Tags = Annotated[list[str], AfterValidator(_check_tags)]


class ProductCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field("", max_length=2000)
    price_cents: int = Field(..., ge=0, le=MAX_PRICE_CENTS)
    cost_price_cents: int | None = Field(None, ge=0, le=MAX_PRICE_CENTS)
    stock: int = Field(..., ge=0, le=MAX_STOCK)
    low_stock_threshold: int = Field(settings.LOW_STOCK_DEFAULT_THRESHOLD, ge=0)
    category: str = Field(..., min_length=1, max_length=100)
    status: ProductStatus = ProductStatus.DRAFT
    specifications: Specifications | None = None
    tags: Tags | None = None


class ProductUpdateRequest(BaseModel):
    """Partial update; only fields present in the body are applied."""

    name: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, max_length=2000)
    price_cents: int | None = Field(None, ge=0, le=MAX_PRICE_CENTS)
    cost_price_cents: int | None = Field(None, ge=0, le=MAX_PRICE_CENTS)
    stock: int | None = Field(None, ge=0, le=MAX_STOCK)
    low_stock_threshold: int | None = Field(None, ge=0)
    category: str | None = Field(None, min_length=1, max_length=100)
    status: ProductStatus | None = None
    specifications: Specifications | None = None
    tags: Tags | None = None


class ProductBatchDeleteRequest(BaseModel):
    ids: list[str] = Field(..., min_length=1, max_length=100)


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class ProductOut(BaseModel):
    id: str
    name: str
    description: str
    price_cents: int
    price_display: str
    cost_price_cents: int | None
    stock: int
    low_stock_threshold: int
    category: str
    status: str
    specifications: dict[str, str]
    tags: list[str]
    created_at: str | None
    updated_at: str | None

    @classmethod
    def from_domain(cls, p: Product) -> "ProductOut":
        return cls(
            id=p.id,
            name=p.name,
            description=p.description,
            price_cents=p.price_cents,
            price_display=cents_to_display(p.price_cents),
            cost_price_cents=p.cost_price_cents,
            stock=p.stock,
            low_stock_threshold=p.low_stock_threshold,
            category=p.category,
            status=p.status,
            specifications=dict(p.specifications),
            tags=list(p.tags),
            created_at=iso_or_none(p.created_at),
            updated_at=iso_or_none(p.updated_at),
        )


class ProductListResponse(BaseModel):
    items: list[ProductOut]
    total: int
    page: int
    limit: int
    total_pages: int


class ProductStatsOut(BaseModel):
    total_products: int
    active_products: int
    draft_products: int
    inactive_products: int
    total_value_cents: int
    total_value_display: str
    average_price_cents: int
    low_stock_count: int

    @classmethod
    def from_domain(cls, s: ProductStats) -> "ProductStatsOut":
        return cls(
            total_products=s.total_products,
            active_products=s.active_products,
            draft_products=s.draft_products,
            inactive_products=s.inactive_products,
            total_value_cents=s.total_value_cents,
            total_value_display=cents_to_display(s.total_value_cents),
            average_price_cents=s.average_price_cents,
            low_stock_count=s.low_stock_count,
        )


class BatchDeleteOut(BaseModel):
    successful: list[str]
    failed: list[str]

    @classmethod
    def from_domain(cls, r: BatchDeleteResult) -> "BatchDeleteOut":
        return cls(successful=list(r.successful), failed=list(r.failed))
