"""Create the first super_admin account, optionally with demo sales.

Run with: python -m src.rc_gateway.admin.seed [--sample-sales]
Reads SEED_ADMIN_EMAIL / SEED_ADMIN_PASSWORD / SEED_ADMIN_NAME from settings.
Idempotent: an existing account with the same email is left untouched.
``--sample-sales`` also inserts 30 days of random sales for active products.
"""

import asyncio
import logging
import sys

import click
from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.rc_common.database import async_session_factory, engine
from src.rc_common.enums import Role
from src.rc_gateway.admin.models import AdminIdentity
from src.rc_gateway.admin.repository import AdminRepository, AdminRepositoryProtocol
from src.rc_gateway.auth.password import hash_password, validate_password
from src.rc_metrics.application.service import MetricsApplicationService

logger = logging.getLogger("rc.seed")


async def seed_super_admin(
    repo: AdminRepositoryProtocol,
    db: AsyncSession,
    email: str,
    password: str,
    name: str,
) -> AdminIdentity | None:
    """Insert the account; returns None when the email is already taken.

    Raises:
        ValueError: the password fails the strength rules.
    """
    strength = validate_password(password)
    if not strength.is_valid:
        raise ValueError("; ".join(e.message for e in strength.errors))

    email = email.strip().lower()
    if await repo.find_by_email(db, email) is not None:
        logger.info("admin %s already exists, skipping", email)
        return None

    admin = await repo.create(db, email, hash_password(password), name.strip(), Role.SUPER_ADMIN)
    logger.info("created super_admin %s (%s)", admin.email, admin.id)
    return admin


async def _main(sample_sales: bool) -> int:
    if not settings.SEED_ADMIN_EMAIL or not settings.SEED_ADMIN_PASSWORD:
        logger.error("SEED_ADMIN_EMAIL and SEED_ADMIN_PASSWORD must be set")
        return 1

    try:
        async with async_session_factory() as db, db.begin():
            await seed_super_admin(
                AdminRepository(),
                db,
                settings.SEED_ADMIN_EMAIL,
                settings.SEED_ADMIN_PASSWORD,
                settings.SEED_ADMIN_NAME,
            )
            if sample_sales:
                await MetricsApplicationService().create_sample_sales(db)
    except ValueError as exc:
        logger.error("seed password rejected: %s", exc)
        return 1
    finally:
        await engine.dispose()
    return 0


@click.command()
@click.option(
    "--sample-sales/--no-sample-sales",
    default=False,
    help="Also insert 30 days of random sales for active products.",
)
def main(sample_sales: bool) -> None:
    logging.basicConfig(level=settings.LOG_LEVEL, format="%(levelname)s %(name)s %(message)s")
    sys.exit(asyncio.run(_main(sample_sales)))


if __name__ == "__main__":
    main()
