"""Integration-test fixtures.

The real application is exercised over ASGITransport with its services bound
to in-memory repositories, so no database is needed. The lifespan (DB ping,
sweeper task) does not run under ASGITransport.
"""

import uuid
from collections.abc import AsyncGenerator, Awaitable, Callable
from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from config.settings import settings
from src.main import app
from src.rc_admin.api.router import get_admin_service
from src.rc_admin.application.service import AdminService
from src.rc_common.database import get_db_session
from src.rc_common.datetime_utils import utc_now
from src.rc_common.enums import Role
from src.rc_gateway.admin.models import AdminCredentials, AdminIdentity
from src.rc_gateway.admin.service import AuthService
from src.rc_gateway.api.router import get_auth_service
from src.rc_gateway.auth.password import hash_password
from src.rc_gateway.middleware.rate_limit import FixedWindowRateLimiter
from src.rc_metrics.api.router import get_metrics_service
from src.rc_metrics.application.service import MetricsApplicationService
from src.rc_metrics.domain.models import ProductSnapshot, SalesTotals, TopProduct
from src.rc_product.api.router import get_product_service
from src.rc_product.application.service import ProductApplicationService
from src.rc_product.domain.models import Product

PASSWORD = "Password1"
TODAY = date(2024, 3, 31)


class _NullTransaction:
    async def __aenter__(self) -> "_NullTransaction":
        return self

    async def __aexit__(self, *exc: object) -> bool:
        return False


class FakeSession:
    """Stands in for AsyncSession; the in-memory repositories ignore it."""

    def begin(self) -> _NullTransaction:
        return _NullTransaction()


# ---------------------------------------------------------------------------
# In-memory repositories
# ---------------------------------------------------------------------------


class InMemoryAdminRepository:
    def __init__(self) -> None:
        self.rows: dict[str, AdminCredentials] = {}

    def add(self, email: str, password: str, name: str, role: Role) -> AdminIdentity:
        identity = AdminIdentity(str(uuid.uuid4()), email, name, role, utc_now())
        self.rows[identity.id] = AdminCredentials(identity, hash_password(password, rounds=4))
        return identity

    async def find_by_email(self, db: Any, email: str) -> AdminCredentials | None:
        return next((c for c in self.rows.values() if c.identity.email == email), None)

    async def find_by_id(self, db: Any, admin_id: str) -> AdminIdentity | None:
        creds = self.rows.get(admin_id)
        return creds.identity if creds else None

    async def create(
        self, db: Any, email: str, password_hash: str, name: str, role: Role
    ) -> AdminIdentity:
        identity = AdminIdentity(str(uuid.uuid4()), email, name, role, utc_now())
        self.rows[identity.id] = AdminCredentials(identity, password_hash)
        return identity

    async def list_all(self, db: Any) -> list[AdminIdentity]:
        return [c.identity for c in reversed(list(self.rows.values()))]


class InMemoryProductRepository:
    def __init__(self) -> None:
        self.rows: dict[str, Product] = {}

    async def list_products(self, db: Any) -> list[Product]:
        return list(reversed(list(self.rows.values())))

    async def get_product(self, db: Any, product_id: str) -> Product | None:
        return self.rows.get(product_id)

    async def create_product(self, db: Any, fields: dict[str, Any]) -> Product:
        now = utc_now()
        product = Product(id=str(uuid.uuid4()), created_at=now, updated_at=now, **fields)
        self.rows[product.id] = product
        return product

    async def update_product(
        self, db: Any, product_id: str, fields: dict[str, Any]
    ) -> Product | None:
        current = self.rows.get(product_id)
        if current is None:
            return None
        updated = replace(current, updated_at=utc_now(), **fields)
        self.rows[product_id] = updated
        return updated

    async def delete_product(self, db: Any, product_id: str) -> bool:
        return self.rows.pop(product_id, None) is not None


@dataclass
class Sale:
    product_id: str | None
    quantity: int
    total_cents: int
    sale_date: datetime


class InMemoryMetricsRepository:
    def __init__(self, products: InMemoryProductRepository) -> None:
        self.products = products
        self.sales: list[Sale] = []

    def record_sale(
        self, product_id: str | None, quantity: int, total_cents: int, sale_date: datetime
    ) -> None:
        self.sales.append(Sale(product_id, quantity, total_cents, sale_date))

    def _select(self, start_at: datetime, end_at: datetime, product_id: str | None) -> list[Sale]:
        return [
            s
            for s in self.sales
            if start_at <= s.sale_date < end_at and (product_id is None or s.product_id == product_id)
        ]

    async def sales_totals(
        self, db: Any, start_at: datetime, end_at: datetime, product_id: str | None = None
    ) -> SalesTotals:
        rows = self._select(start_at, end_at, product_id)
        return SalesTotals(
            total_cents=sum(s.total_cents for s in rows),
            quantity=sum(s.quantity for s in rows),
            order_count=len(rows),
        )

    async def daily_sales(
        self, db: Any, start_at: datetime, end_at: datetime, product_id: str | None = None
    ) -> dict[date, int]:
        totals: dict[date, int] = {}
        for s in self._select(start_at, end_at, product_id):
            day = s.sale_date.date()
            totals[day] = totals.get(day, 0) + s.total_cents
        return totals

    async def top_products(
        self, db: Any, start_at: datetime, end_at: datetime, limit: int
    ) -> list[TopProduct]:
        by_product: dict[str, TopProduct] = {}
        for s in self._select(start_at, end_at, None):
            if s.product_id is None:
                continue
            product = self.products.rows.get(s.product_id)
            top = by_product.setdefault(
                s.product_id,
                TopProduct(s.product_id, product.name if product else "Unknown Product", 0, 0),
            )
            top.total_sales_cents += s.total_cents
            top.quantity += s.quantity
        ranked = sorted(by_product.values(), key=lambda t: (-t.total_sales_cents, t.product_id))
        return ranked[:limit]

    async def list_stocked_products(self, db: Any) -> list[Product]:
        return [p for p in await self.products.list_products(db) if p.status != "draft"]

    async def get_product_snapshot(self, db: Any, product_id: str) -> ProductSnapshot | None:
        product = self.products.rows.get(product_id)
        return ProductSnapshot(product.id, product.name, product.stock) if product else None


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def admin_repo() -> InMemoryAdminRepository:
    repo = InMemoryAdminRepository()
    repo.add("super@example.com", PASSWORD, "Super Admin", Role.SUPER_ADMIN)
    repo.add("admin@example.com", PASSWORD, "Plain Admin", Role.ADMIN)
    return repo


@pytest.fixture
def product_repo() -> InMemoryProductRepository:
    return InMemoryProductRepository()


@pytest.fixture
def metrics_repo(product_repo: InMemoryProductRepository) -> InMemoryMetricsRepository:
    return InMemoryMetricsRepository(product_repo)


@pytest.fixture
async def client(
    admin_repo: InMemoryAdminRepository,
    product_repo: InMemoryProductRepository,
    metrics_repo: InMemoryMetricsRepository,
) -> AsyncGenerator[AsyncClient, None]:
    app.state.rate_limiter = FixedWindowRateLimiter()
    app.dependency_overrides[get_db_session] = FakeSession
    app.dependency_overrides[get_auth_service] = lambda: AuthService(admin_repo)
    app.dependency_overrides[get_admin_service] = lambda: AdminService(admin_repo, bcrypt_rounds=4)
    app.dependency_overrides[get_product_service] = lambda: ProductApplicationService(product_repo)
    app.dependency_overrides[get_metrics_service] = lambda: MetricsApplicationService(
        metrics_repo, today=lambda: TODAY
    )

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def login(client: AsyncClient) -> Callable[[str], Awaitable[dict[str, str]]]:
    """Log in and return Bearer + CSRF headers; the client jar keeps both cookies."""

    async def _login(email: str) -> dict[str, str]:
        resp = await client.post("/api/v1/auth/login", json={"email": email, "password": PASSWORD})
        assert resp.status_code == 200, resp.text
        token = resp.json()["data"]["token"]
        csrf = (await client.get("/api/v1/auth/csrf")).json()["data"]["csrf_token"]
        return {"Authorization": f"Bearer {token}", settings.CSRF_HEADER_NAME: csrf}

    return _login
