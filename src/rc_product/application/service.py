"""ProductApplicationService: repository access plus the filter engine.

Write methods expect the caller (router) to own the transaction via
``async with db.begin()``.
"""

import logging
import math
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from src.rc_common.cents import average_cents
from src.rc_common.enums import ProductStatus
from src.rc_common.errors import ProductNotFoundError
from src.rc_product.application.schemas import (
    ProductCreateRequest,
    ProductListResponse,
    ProductOut,
    ProductUpdateRequest,
)
from src.rc_product.domain.filters import ProductFilterCriteria, filter_products
from src.rc_product.domain.models import BatchDeleteResult, Product, ProductStats
from src.rc_product.domain.repository import ProductRepositoryProtocol
from src.rc_product.infrastructure.persistence import ProductRepository

logger = logging.getLogger("rc.product")

# Columns that may be explicitly cleared with null in an update body.
_NULLABLE_FIELDS = frozenset({"cost_price_cents"})


class ProductApplicationService:
    def __init__(self, repo: ProductRepositoryProtocol | None = None) -> None:
        self._repo: ProductRepositoryProtocol = repo or ProductRepository()

    async def list_products(
        self, db: AsyncSession, criteria: ProductFilterCriteria
    ) -> ProductListResponse:
        products = await self._repo.list_products(db)
        matched = filter_products(products, criteria)

        total = len(matched)
        offset = (criteria.page - 1) * criteria.limit
        page = matched[offset : offset + criteria.limit]
        return ProductListResponse(
            items=[ProductOut.from_domain(p) for p in page],
            total=total,
            page=criteria.page,
            limit=criteria.limit,
            total_pages=math.ceil(total / criteria.limit),
        )

    async def get_product(self, db: AsyncSession, product_id: str) -> Product:
        product = await self._repo.get_product(db, product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    async def create_product(self, db: AsyncSession, body: ProductCreateRequest) -> Product:
        fields = body.model_dump(mode="json")
        fields["specifications"] = fields["specifications"] or {}
        fields["tags"] = fields["tags"] or []
        product = await self._repo.create_product(db, fields)
        logger.info("product created id=%s name=%r", product.id, product.name)
        return product

    async def update_product(
        self, db: AsyncSession, product_id: str, body: ProductUpdateRequest
    ) -> Product:
        fields: dict[str, Any] = {
            k: v
            for k, v in body.model_dump(mode="json", exclude_unset=True).items()
            if v is not None or k in _NULLABLE_FIELDS
        }
        if not fields:
            return await self.get_product(db, product_id)

        product = await self._repo.update_product(db, product_id, fields)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product

    async def delete_product(self, db: AsyncSession, product_id: str) -> None:
        deleted = await self._repo.delete_product(db, product_id)
        if not deleted:
            raise ProductNotFoundError(product_id)
        logger.info("product deleted id=%s", product_id)

    async def duplicate_product(self, db: AsyncSession, product_id: str) -> Product:
        """Copy a product as a new draft named '<name> (Copy)'."""
        source = await self.get_product(db, product_id)
        fields = {
            "name": f"{source.name} (Copy)"[:255],
            "description": source.description,
            "price_cents": source.price_cents,
            "cost_price_cents": source.cost_price_cents,
            "stock": source.stock,
            "low_stock_threshold": source.low_stock_threshold,
            "category": source.category,
            "status": ProductStatus.DRAFT.value,
            "specifications": dict(source.specifications),
            "tags": list(source.tags),
        }
        return await self._repo.create_product(db, fields)

    async def batch_delete(self, db: AsyncSession, product_ids: list[str]) -> BatchDeleteResult:
        """Delete each id independently; missing ids land in ``failed``."""
        result = BatchDeleteResult(successful=[], failed=[])
        for product_id in dict.fromkeys(product_ids):
            if await self._repo.delete_product(db, product_id):
                result.successful.append(product_id)
            else:
                result.failed.append(product_id)
        if result.failed:
            logger.warning("batch delete: %d of %d ids not found", len(result.failed), len(product_ids))
        return result

    async def low_stock_products(self, db: AsyncSession) -> list[Product]:
        products = await self._repo.list_products(db)
        return [p for p in products if p.is_low_stock]

    async def get_stats(self, db: AsyncSession) -> ProductStats:
        products = await self._repo.list_products(db)
        by_status = {s.value: 0 for s in ProductStatus}
        for p in products:
            by_status[p.status] = by_status.get(p.status, 0) + 1

        return ProductStats(
            total_products=len(products),
            active_products=by_status[ProductStatus.ACTIVE.value],
            draft_products=by_status[ProductStatus.DRAFT.value],
            inactive_products=by_status[ProductStatus.INACTIVE.value],
            total_value_cents=sum(p.price_cents * p.stock for p in products),
            average_price_cents=average_cents(sum(p.price_cents for p in products), len(products)),
            low_stock_count=sum(1 for p in products if p.is_low_stock),
        )
