# app/db/repositories/orders.py
from datetime import datetime
from typing import List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import select

from app.db.models.orders import Order, OrderItem


async def get_order_by_id(
    db: AsyncSession,
    order_id: int
) -> Optional[Order]:
    result = await db.execute(
        select(Order).options(selectinload(Order.items)).where(Order.id == order_id)
    )
    return result.scalar_one_or_none()


async def list_orders(
    db: AsyncSession,
    user_id: Optional[int] = None,
) -> List[Order]:
    stmt = (
        select(Order)
        .options(selectinload(Order.items))
        .order_by(Order.created_at.desc(), Order.id.desc())
    )
    if user_id is not None:
        stmt = stmt.where(Order.user_id == user_id)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_orders_in_range(
    db: AsyncSession,
    start: Optional[datetime],
    end: Optional[datetime],
) -> List[Order]:
    stmt = select(Order).order_by(Order.id)
    if start is not None:
        stmt = stmt.where(Order.created_at >= start)
    if end is not None:
        stmt = stmt.where(Order.created_at <= end)
    result = await db.execute(stmt)
    return list(result.scalars().all())


async def get_items_for_orders(
    db: AsyncSession,
    order_ids: Sequence[int],
) -> List[OrderItem]:
    if not order_ids:
        return []
    result = await db.execute(
        select(OrderItem)
        .where(OrderItem.order_id.in_(order_ids))
        .order_by(OrderItem.order_id, OrderItem.id)
    )
    return list(result.scalars().all())
