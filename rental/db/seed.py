"""Create the schema and load the default vehicle catalog.

Usage: python -m rental.db.seed
"""
import asyncio
import logging
import sys

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

from rental.core.logging_config import setup_logging
from rental.db.session import AsyncSessionLocal, engine, init_db
from rental.models.vehicle import Vehicle

logger = logging.getLogger(__name__)

DEFAULT_CATALOG = [
    ("Avanza", 640000),
    ("Innova", 890000),
    ("New Altis", 1500000),
    ("New Camry", 2190000),
    ("Alphard", 3220000),
]


async def seed_catalog(db: AsyncSession, catalog=DEFAULT_CATALOG) -> int:
    """Insert the catalog into an empty cars table; returns rows added."""
    res = await db.execute(select(func.count()).select_from(Vehicle))
    if res.scalar_one() > 0:
        logger.info("Catalog already populated, skipping seed")
        return 0

    db.add_all([Vehicle(name=name, price_per_day=price) for name, price in catalog])
    await db.commit()
    logger.info(f"Seeded {len(catalog)} vehicles")
    return len(catalog)


async def _main() -> int:
    await init_db()
    async with AsyncSessionLocal() as db:
        added = await seed_catalog(db)
    await engine.dispose()
    return added


def main():
    setup_logging()
    try:
        asyncio.run(_main())
    except Exception as e:
        logger.error(f"Seeding failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
