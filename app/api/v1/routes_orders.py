# app/api/v1/routes_orders.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_identity, require_admin
from app.core.security import Identity
from app.db.base import get_db
from app.domain.orders.schemas import OrderOut, OrderStatusOut, OrderStatusUpdate
from app.domain.orders.service import list_all_orders, list_orders_for_user, update_order_status


router = APIRouter(prefix="/api/v1", tags=["orders"])


@router.get("/orders/mine", response_model=List[OrderOut])
async def my_orders_endpoint(
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    return await list_orders_for_user(db, identity)


@router.get("/admin/orders", response_model=List[OrderOut], dependencies=[Depends(require_admin)])
async def all_orders_endpoint(db: AsyncSession = Depends(get_db)):
    return await list_all_orders(db)


@router.patch("/admin/orders/{order_id}/status", response_model=OrderStatusOut, dependencies=[Depends(require_admin)])
async def update_status_endpoint(
    order_id: int,
    payload: OrderStatusUpdate,
    db: AsyncSession = Depends(get_db),
):
    return await update_order_status(db, order_id, payload.status)
