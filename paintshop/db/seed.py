"""
Database seeding utilities for minimal reference data.

Seeds (each step is skipped when its data already exists):
- Administrator account (SEED_ADMIN_* settings)
- Default material dilution/catalyst settings
- Default consumption configuration

Usage:
  python -m paintshop.db.run_migrations upgrade head
  python -m paintshop.db.seed
"""

from __future__ import annotations

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from paintshop.core.logging import configure_logging
from paintshop.core.security import get_password_hash
from paintshop.core.settings import get_app_settings
from paintshop.db.session import get_async_session
from paintshop.repositories.materials import ConsumptionConfigRepository, MaterialSettingRepository
from paintshop.repositories.security import UserRepository
from paintshop.services.consumption import DEFAULT_MATERIAL_SETTINGS, default_configuration

logger = logging.getLogger(__name__)


# PUBLIC_INTERFACE
async def seed_all() -> None:
    """Seed the administrator, material settings and consumption configuration."""
    async for session in get_async_session():
        await _seed_admin(session)
        await _seed_material_settings(session)
        await _seed_consumption_configuration(session)


async def _seed_admin(session: AsyncSession) -> None:
    settings = get_app_settings()
    repo = UserRepository(session)
    if await repo.get_user_by_username(settings.SEED_ADMIN_USERNAME):
        return
    await repo.create_user(
        username=settings.SEED_ADMIN_USERNAME,
        email=settings.SEED_ADMIN_EMAIL,
        nome=settings.SEED_ADMIN_NAME,
        senha_hash=get_password_hash(settings.SEED_ADMIN_PASSWORD),
        papel="admin",
    )
    logger.info("Seeded admin user %s", settings.SEED_ADMIN_USERNAME)


async def _seed_material_settings(session: AsyncSession) -> None:
    repo = MaterialSettingRepository(session)
    if await repo.list_settings():
        return
    await repo.insert_many(dict(row) for row in DEFAULT_MATERIAL_SETTINGS)
    logger.info("Seeded %d material settings", len(DEFAULT_MATERIAL_SETTINGS))


async def _seed_consumption_configuration(session: AsyncSession) -> None:
    repo = ConsumptionConfigRepository(session)
    if await repo.get_latest():
        return
    await repo.create(default_configuration())
    logger.info("Seeded default consumption configuration")


# PUBLIC_INTERFACE
def main() -> None:
    """Command-line entry: configure logging, then seed."""
    configure_logging(get_app_settings().LOG_LEVEL)
    asyncio.run(seed_all())


if __name__ == "__main__":
    main()
