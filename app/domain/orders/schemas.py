# app/domain/orders/schemas.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from app.db.models.orders import OrderStatus


class OrderItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    product_id: int
    variant_id: int
    name_snapshot: str
    color_snapshot: Optional[str]
    size_snapshot: Optional[str]
    qty: int
    unit_price_cent: int
    line_total_cent: int


class OrderOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    address_id: int
    status: str
    subtotal_cent: int
    discount_cent: int
    tax_cent: int
    shipping_cent: int
    total_cent: int
    created_at: datetime
    items: List[OrderItemOut] = []


class OrderStatusUpdate(BaseModel):
    # plain str so unknown values surface as our own validation error
    status: str


class OrderStatusOut(BaseModel):
    id: int
    status: OrderStatus
