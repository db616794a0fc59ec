"""002: create products table

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE products (
            id                  VARCHAR(36)     PRIMARY KEY,
            name                VARCHAR(255)    NOT NULL,
            description         TEXT            NOT NULL DEFAULT '',
            price_cents         BIGINT          NOT NULL,
            cost_price_cents    BIGINT,
            stock               INTEGER         NOT NULL DEFAULT 0,
            low_stock_threshold INTEGER         NOT NULL DEFAULT 10,
            category            VARCHAR(100)    NOT NULL,
            status              VARCHAR(16)     NOT NULL DEFAULT 'draft',
            specifications      JSONB           NOT NULL DEFAULT '{}'::jsonb,
            tags                JSONB           NOT NULL DEFAULT '[]'::jsonb,
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_products_status CHECK (status IN ('active', 'inactive', 'draft')),
            CONSTRAINT ck_products_price  CHECK (price_cents BETWEEN 0 AND 99999999),
            CONSTRAINT ck_products_cost   CHECK (cost_price_cents IS NULL OR cost_price_cents >= 0),
            CONSTRAINT ck_products_stock  CHECK (stock >= 0 AND low_stock_threshold >= 0)
        );
    """)
    op.execute("CREATE INDEX idx_products_created_at ON products (created_at DESC);")
    op.execute("CREATE INDEX idx_products_category_status ON products (category, status);")
    op.execute("""
        CREATE TRIGGER trg_products_updated_at
            BEFORE UPDATE ON products
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS products CASCADE;")
