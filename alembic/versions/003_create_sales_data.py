"""003: create sales_data table

Revision ID: 003
Revises: 002
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE sales_data (
            id                  VARCHAR(36)     PRIMARY KEY DEFAULT gen_random_uuid()::text,
            product_id          VARCHAR(36)     REFERENCES products (id) ON DELETE SET NULL,
            quantity            INTEGER         NOT NULL,
            unit_price_cents    BIGINT          NOT NULL,
            total_amount_cents  BIGINT          NOT NULL,
            sale_date           TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_sales_quantity CHECK (quantity > 0),
            CONSTRAINT ck_sales_amounts  CHECK (unit_price_cents >= 0 AND total_amount_cents >= 0)
        );
    """)
    op.execute("CREATE INDEX idx_sales_data_sale_date ON sales_data (sale_date);")
    op.execute("CREATE INDEX idx_sales_data_product_date ON sales_data (product_id, sale_date);")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS sales_data CASCADE;")
