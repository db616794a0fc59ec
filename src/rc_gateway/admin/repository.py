"""Admin account storage: Protocol plus the SQLAlchemy implementation.

Emails are stored lower-cased; lookups expect an already lower-cased email.
"""

from typing import Protocol

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.rc_common.enums import Role
from src.rc_common.errors import EmailExistsError
from src.rc_gateway.admin.db_models import AdminUserORM
from src.rc_gateway.admin.models import AdminCredentials, AdminIdentity

# Named in alembic/versions/001_create_admin_users.py
EMAIL_UNIQUE_CONSTRAINT = "uq_admin_users_email"


class AdminRepositoryProtocol(Protocol):
    async def find_by_email(self, db: AsyncSession, email: str) -> AdminCredentials | None: ...

    async def find_by_id(self, db: AsyncSession, admin_id: str) -> AdminIdentity | None: ...

    async def create(
        self, db: AsyncSession, email: str, password_hash: str, name: str, role: Role
    ) -> AdminIdentity: ...

    async def list_all(self, db: AsyncSession) -> list[AdminIdentity]: ...


def _to_identity(row: AdminUserORM) -> AdminIdentity:
    return AdminIdentity(
        id=row.id,
        email=row.email,
        name=row.name,
        role=Role(row.role),
        created_at=row.created_at,
    )


class AdminRepository:
    async def find_by_email(self, db: AsyncSession, email: str) -> AdminCredentials | None:
        result = await db.execute(select(AdminUserORM).where(AdminUserORM.email == email))
        row = result.scalar_one_or_none()
        if row is None:
            return None
        return AdminCredentials(identity=_to_identity(row), password_hash=row.password_hash)

    async def find_by_id(self, db: AsyncSession, admin_id: str) -> AdminIdentity | None:
        row = await db.get(AdminUserORM, admin_id)
        return _to_identity(row) if row is not None else None

    async def create(
        self, db: AsyncSession, email: str, password_hash: str, name: str, role: Role
    ) -> AdminIdentity:
        row = AdminUserORM(email=email, password_hash=password_hash, name=name, role=role.value)
        db.add(row)
        try:
            await db.flush()  # Get row.id without committing
        except IntegrityError as exc:
            # Concurrent create with the same email lost the race
            if EMAIL_UNIQUE_CONSTRAINT in str(exc.orig):
                raise EmailExistsError() from exc
            raise
        return _to_identity(row)

    async def list_all(self, db: AsyncSession) -> list[AdminIdentity]:
        result = await db.execute(select(AdminUserORM).order_by(AdminUserORM.created_at.desc()))
        return [_to_identity(row) for row in result.scalars().all()]
