"""ProductRepository implements ProductRepositoryProtocol.

Uses the ORM mapping for row-level CRUD; callers own the transaction.
"""

from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.rc_product.domain.models import Product
from src.rc_product.infrastructure.db_models import ProductORM

# ---------------------------------------------------------------------------
# Row mapper
# ---------------------------------------------------------------------------


def orm_to_product(row: ProductORM) -> Product:
    return Product(
        id=row.id,
        name=row.name,
        description=row.description or "",
        price_cents=row.price_cents,
        cost_price_cents=row.cost_price_cents,
        stock=row.stock,
        low_stock_threshold=row.low_stock_threshold,
        category=row.category,
        status=row.status,
        specifications=dict(row.specifications or {}),
        tags=list(row.tags or []),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class ProductRepository:
    async def list_products(self, db: AsyncSession) -> list[Product]:
        result = await db.execute(
            select(ProductORM).order_by(ProductORM.created_at.desc(), ProductORM.id.desc())
        )
        return [orm_to_product(row) for row in result.scalars().all()]

    async def get_product(self, db: AsyncSession, product_id: str) -> Product | None:
        row = await db.get(ProductORM, product_id)
        return orm_to_product(row) if row is not None else None

    async def create_product(self, db: AsyncSession, fields: dict[str, Any]) -> Product:
        row = ProductORM(**fields)
        db.add(row)
        await db.flush()
        return orm_to_product(row)

    async def update_product(
        self, db: AsyncSession, product_id: str, fields: dict[str, Any]
    ) -> Product | None:
        row = await db.get(ProductORM, product_id)
        if row is None:
            return None
        for key, value in fields.items():
            setattr(row, key, value)
        await db.flush()
        return orm_to_product(row)

    async def delete_product(self, db: AsyncSession, product_id: str) -> bool:
        result = await db.execute(delete(ProductORM).where(ProductORM.id == product_id))
        return bool(result.rowcount)
