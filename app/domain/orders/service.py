# app/domain/orders/service.py
import logging
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import NotFoundError, ValidationError
from app.core.security import Identity
from app.db.base import atomic
from app.db.models.orders import Order, OrderStatus
from app.db.repositories.orders import get_order_by_id, list_orders
from .schemas import OrderStatusOut

logger = logging.getLogger(__name__)

VALID_STATUSES = {s.value for s in OrderStatus}


async def list_orders_for_user(db: AsyncSession, identity: Identity) -> List[Order]:
    return await list_orders(db, user_id=identity.user_id)


async def list_all_orders(db: AsyncSession) -> List[Order]:
    return await list_orders(db)


async def update_order_status(db: AsyncSession, order_id: int, status: str) -> OrderStatusOut:
    """Change the status of an order; totals and items are never touched."""
    if status not in VALID_STATUSES:
        raise ValidationError(
            "Invalid status",
            code="invalid_status",
            details={"status": status, "allowed": sorted(VALID_STATUSES)},
        )

    async with atomic(db):
        order = await get_order_by_id(db, order_id)
        if order is None:
            raise NotFoundError("Order not found", details={"order_id": order_id})
        previous = order.status
        order.status = status

    logger.info("Order %s status %s -> %s", order_id, previous, status)
    return OrderStatusOut(id=order_id, status=OrderStatus(status))
