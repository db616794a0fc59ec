# src/rc_metrics/domain/repository.py
"""Repository Protocol for sales/stock aggregates.

``start_at`` is inclusive and ``end_at`` exclusive (UTC datetimes).
"""

from datetime import date, datetime
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.rc_metrics.domain.models import NewSale, ProductSnapshot, SalesTotals, TopProduct
from src.rc_product.domain.models import Product


class MetricsRepositoryProtocol(Protocol):
    async def sales_totals(
        self,
        db: AsyncSession,
        start_at: datetime,
        end_at: datetime,
        product_id: str | None = None,
    ) -> SalesTotals: ...

    async def daily_sales(
        self,
        db: AsyncSession,
        start_at: datetime,
        end_at: datetime,
        product_id: str | None = None,
    ) -> dict[date, int]: ...

    async def top_products(
        self, db: AsyncSession, start_at: datetime, end_at: datetime, limit: int
    ) -> list[TopProduct]: ...

    async def list_stocked_products(self, db: AsyncSession) -> list[Product]:
        """Every non-draft product."""
        ...

    async def get_product_snapshot(
        self, db: AsyncSession, product_id: str
    ) -> ProductSnapshot | None: ...

    async def insert_sales(self, db: AsyncSession, sales: list[NewSale]) -> int: ...
