# src/rc_product/domain/repository.py
"""Repository protocol for product storage.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Any, Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.rc_product.domain.models import Product


class ProductRepositoryProtocol(Protocol):
    async def list_products(self, db: AsyncSession) -> list[Product]:
        """All products, newest first."""
        ...

    async def get_product(self, db: AsyncSession, product_id: str) -> Product | None: ...

    async def create_product(self, db: AsyncSession, fields: dict[str, Any]) -> Product: ...

    async def update_product(
        self, db: AsyncSession, product_id: str, fields: dict[str, Any]
    ) -> Product | None: ...

    async def delete_product(self, db: AsyncSession, product_id: str) -> bool: ...
