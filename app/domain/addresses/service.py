# app/domain/addresses/service.py
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func, select, update

from app.core.security import Identity
from app.db.base import atomic
from app.db.models.users import Address
from app.db.repositories.users import ensure_user
from .schemas import AddressCreate


async def create_address(db: AsyncSession, identity: Identity, data: AddressCreate) -> Address:
    async with atomic(db):
        await ensure_user(db, identity)
        existing = await db.execute(
            select(func.count(Address.id)).where(Address.user_id == identity.user_id)
        )
        # the first address becomes the default one
        is_default = data.is_default or existing.scalar() == 0
        if is_default:
            await db.execute(
                update(Address)
                .where(Address.user_id == identity.user_id, Address.is_default.is_(True))
                .values(is_default=False)
                .execution_options(synchronize_session=False)
            )
        address = Address(user_id=identity.user_id, **data.model_dump(exclude={"is_default"}), is_default=is_default)
        db.add(address)
    return address


async def list_addresses(db: AsyncSession, identity: Identity) -> List[Address]:
    result = await db.execute(
        select(Address).where(Address.user_id == identity.user_id).order_by(Address.id)
    )
    return list(result.scalars().all())
