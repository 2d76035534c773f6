"""Idempotent seed data: the two built-in roles and an optional admin account."""

import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from superfarmer.core.config import settings
from superfarmer.core.security import hash_password
from superfarmer.domain.role import ADMIN, ADMIN_ROLE_ID, FARMER, FARMER_ROLE_ID
from superfarmer.repositories.identity import RoleRepository, UserRepository

logger = logging.getLogger(__name__)


async def seed(session: AsyncSession) -> None:
    roles = RoleRepository(session)
    for role_id, name in ((ADMIN_ROLE_ID, ADMIN), (FARMER_ROLE_ID, FARMER)):
        if await roles.find_one(id=role_id, include_deleted=True) is None:
            await roles.create(id=role_id, name=name)
            logger.info("Seeded role %s", name)

    # Roles were inserted with explicit ids; keep the PostgreSQL sequence ahead of them
    if session.bind.dialect.name == "postgresql":
        await session.execute(
            text("SELECT setval(pg_get_serial_sequence('roles', 'id'), (SELECT MAX(id) FROM roles))")
        )

    if settings.seed_admin:
        users = UserRepository(session)
        if await users.get_by_email(settings.admin_email, include_deleted=True) is None:
            await users.create(
                name="Administrator",
                email=settings.admin_email.lower(),
                password=hash_password(settings.admin_password),
                role_id=ADMIN_ROLE_ID,
            )
            logger.info("Seeded admin user %s", settings.admin_email)
