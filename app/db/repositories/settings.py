# app/db/repositories/settings.py
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import select

from app.db.models.settings import SETTINGS_ID, StoreSettings


async def get_settings_row(db: AsyncSession) -> Optional[StoreSettings]:
    result = await db.execute(
        select(StoreSettings).where(StoreSettings.id == SETTINGS_ID)
    )
    return result.scalar_one_or_none()
