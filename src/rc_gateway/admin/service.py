"""Auth service: credential check and current-admin lookup.

All DB operations use the injected AsyncSession.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.rc_common.errors import UnauthenticatedError
from src.rc_gateway.admin.models import AdminIdentity, AuthResult
from src.rc_gateway.admin.repository import AdminRepository, AdminRepositoryProtocol
from src.rc_gateway.auth.jwt_handler import create_session_token
from src.rc_gateway.auth.password import verify_password
from src.rc_gateway.auth.session import Principal

logger = logging.getLogger("rc.auth")

INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:
    """Stateless; one instance is shared across requests."""

    def __init__(self, repo: AdminRepositoryProtocol | None = None) -> None:
        self._repo: AdminRepositoryProtocol = repo or AdminRepository()

    async def login(self, email: str, password: str, db: AsyncSession) -> AuthResult:
        """Check credentials and issue a session token.

        Unknown email and wrong password produce the same failure so the
        response does not reveal which accounts exist.
        """
        creds = await self._repo.find_by_email(db, email.lower())
        if creds is None or not verify_password(password, creds.password_hash):
            logger.warning("login failed for %s", email)
            return AuthResult(success=False, error=INVALID_CREDENTIALS)

        admin = creds.identity
        token = create_session_token(admin.id, admin.email, admin.role.value)
        logger.info("login ok admin=%s role=%s", admin.id, admin.role.value)
        return AuthResult(success=True, user=admin, token=token)

    async def current_admin(self, principal: Principal, db: AsyncSession) -> AdminIdentity:
        """Resolve the principal to its stored account; deleted accounts are unauthenticated."""
        admin = await self._repo.find_by_id(db, principal.admin_id)
        if admin is None:
            raise UnauthenticatedError("Admin account no longer exists")
        return admin
