"""001: create updated_at trigger function and admin_users table

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE OR REPLACE FUNCTION fn_update_timestamp()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)
    op.execute("""
        CREATE TABLE admin_users (
            id              VARCHAR(36)     PRIMARY KEY,
            email           VARCHAR(255)    NOT NULL,
            password_hash   VARCHAR(255)    NOT NULL,
            name            VARCHAR(100)    NOT NULL,
            role            VARCHAR(32)     NOT NULL DEFAULT 'admin',
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_admin_users_email UNIQUE (email),
            CONSTRAINT ck_admin_users_role  CHECK (role IN ('admin', 'super_admin')),
            CONSTRAINT ck_admin_users_email_lower CHECK (email = LOWER(email))
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_admin_users_updated_at
            BEFORE UPDATE ON admin_users
            FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS admin_users CASCADE;")
    op.execute("DROP FUNCTION IF EXISTS fn_update_timestamp();")
