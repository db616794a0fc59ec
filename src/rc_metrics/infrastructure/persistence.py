"""MetricsRepository implements MetricsRepositoryProtocol.

Aggregates use raw text() SQL; inserts go through SaleORM.
asyncpg NULL parameter pattern: CAST(:param AS TYPE) IS NULL required for None values.
"""

from datetime import date, datetime

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession

from src.rc_common.enums import ProductStatus
from src.rc_metrics.domain.models import NewSale, ProductSnapshot, SalesTotals, TopProduct
from src.rc_metrics.infrastructure.db_models import SaleORM
from src.rc_product.domain.models import Product
from src.rc_product.infrastructure.db_models import ProductORM
from src.rc_product.infrastructure.persistence import orm_to_product

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_SALES_TOTALS_SQL = text("""
    SELECT COALESCE(SUM(total_amount_cents), 0) AS total_cents,
           COALESCE(SUM(quantity), 0)           AS quantity,
           COUNT(id)                            AS order_count
    FROM sales_data
    WHERE sale_date >= :start_at
      AND sale_date < :end_at
      AND (CAST(:product_id AS TEXT) IS NULL OR product_id = CAST(:product_id AS TEXT))
""")

_DAILY_SALES_SQL = text("""
    SELECT CAST(sale_date AT TIME ZONE 'UTC' AS DATE) AS day,
           SUM(total_amount_cents)                  AS total_cents
    FROM sales_data
    WHERE sale_date >= :start_at
      AND sale_date < :end_at
      AND (CAST(:product_id AS TEXT) IS NULL OR product_id = CAST(:product_id AS TEXT))
    GROUP BY day
    ORDER BY day
""")

_TOP_PRODUCTS_SQL = text("""
    SELECT s.product_id,
           COALESCE(p.name, 'Unknown Product') AS product_name,
           SUM(s.total_amount_cents)           AS total_cents,
           SUM(s.quantity)                     AS quantity
    FROM sales_data s
    LEFT JOIN products p ON p.id = s.product_id
    WHERE s.sale_date >= :start_at
      AND s.sale_date < :end_at
      AND s.product_id IS NOT NULL
    GROUP BY s.product_id, p.name
    ORDER BY total_cents DESC, s.product_id
    LIMIT :limit
""")

_PRODUCT_SNAPSHOT_SQL = text("""
    SELECT id, name, stock
    FROM products
    WHERE id = :product_id
""")


class MetricsRepository:
    async def sales_totals(
        self,
        db: AsyncSession,
        start_at: datetime,
        end_at: datetime,
        product_id: str | None = None,
    ) -> SalesTotals:
        result = await db.execute(
            _SALES_TOTALS_SQL,
            {"start_at": start_at, "end_at": end_at, "product_id": product_id},
        )
        row = result.one()
        return SalesTotals(
            total_cents=int(row.total_cents),
            quantity=int(row.quantity),
            order_count=int(row.order_count),
        )

    async def daily_sales(
        self,
        db: AsyncSession,
        start_at: datetime,
        end_at: datetime,
        product_id: str | None = None,
    ) -> dict[date, int]:
        result = await db.execute(
            _DAILY_SALES_SQL,
            {"start_at": start_at, "end_at": end_at, "product_id": product_id},
        )
        return {row.day: int(row.total_cents) for row in result.fetchall()}

    async def top_products(
        self, db: AsyncSession, start_at: datetime, end_at: datetime, limit: int
    ) -> list[TopProduct]:
        result = await db.execute(
            _TOP_PRODUCTS_SQL, {"start_at": start_at, "end_at": end_at, "limit": limit}
        )
        return [
            TopProduct(
                product_id=row.product_id,
                product_name=row.product_name,
                total_sales_cents=int(row.total_cents),
                quantity=int(row.quantity),
            )
            for row in result.fetchall()
        ]

    async def list_stocked_products(self, db: AsyncSession) -> list[Product]:
        result = await db.execute(
            select(ProductORM)
            .where(ProductORM.status != ProductStatus.DRAFT.value)
            .order_by(ProductORM.created_at.desc())
        )
        return [orm_to_product(row) for row in result.scalars().all()]

    async def get_product_snapshot(
        self, db: AsyncSession, product_id: str
    ) -> ProductSnapshot | None:
        result = await db.execute(_PRODUCT_SNAPSHOT_SQL, {"product_id": product_id})
        row = result.fetchone()
        if row is None:
            return None
        return ProductSnapshot(id=row.id, name=row.name, stock=row.stock)

    async def insert_sales(self, db: AsyncSession, sales: list[NewSale]) -> int:
        db.add_all(
            SaleORM(
                product_id=s.product_id,
                quantity=s.quantity,
                unit_price_cents=s.unit_price_cents,
                total_amount_cents=s.total_amount_cents,
                sale_date=s.sale_date,
            )
            for s in sales
        )
        await db.flush()
        return len(sales)
