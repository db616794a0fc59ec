"""Admin account management, restricted to super_admin.

The router guard already enforces the role; the service checks it again so
the rule holds for any caller. Transactions are managed by the router.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.rc_common.enums import Role
from src.rc_common.errors import EmailExistsError
from src.rc_gateway.admin.models import AdminIdentity
from src.rc_gateway.admin.repository import AdminRepository, AdminRepositoryProtocol
from src.rc_gateway.admin.schemas import AdminCreateRequest
from src.rc_gateway.auth.password import BCRYPT_ROUNDS, hash_password
from src.rc_gateway.auth.roles import require_role
from src.rc_gateway.auth.session import Principal

logger = logging.getLogger("rc.admin")


class AdminService:
    def __init__(
        self,
        repo: AdminRepositoryProtocol | None = None,
        bcrypt_rounds: int = BCRYPT_ROUNDS,
    ) -> None:
        self._repo: AdminRepositoryProtocol = repo or AdminRepository()
        self._rounds = bcrypt_rounds

    async def create_admin(
        self, body: AdminCreateRequest, current: Principal, db: AsyncSession
    ) -> AdminIdentity:
        require_role(current.role, Role.SUPER_ADMIN)

        # AdminRepository.create maps a lost race on the unique email to the same error
        if await self._repo.find_by_email(db, body.email) is not None:
            raise EmailExistsError()

        admin = await self._repo.create(
            db,
            body.email,
            hash_password(body.password, rounds=self._rounds),
            body.name,
            body.role,
        )
        logger.info(
            "admin created id=%s role=%s by=%s", admin.id, admin.role.value, current.admin_id
        )
        return admin

    async def list_admins(self, current: Principal, db: AsyncSession) -> list[AdminIdentity]:
        require_role(current.role, Role.SUPER_ADMIN)
        return await self._repo.list_all(db)
