# app/db/init_db.py
from sqlalchemy.ext.asyncio import AsyncEngine

from app.db.base import Base

# model modules register their tables on Base.metadata when imported
from app.db.models import catalog, expenses, orders, purchases, settings, users  # noqa: F401


async def create_all(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
