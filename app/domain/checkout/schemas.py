# app/domain/checkout/schemas.py
from typing import List, Optional

from pydantic import BaseModel, Field


class CheckoutItem(BaseModel):
    # qty is checked by the checkout engine so that errors come out in line order
    variant_id: int
    qty: int


class CheckoutRequest(BaseModel):
    items: List[CheckoutItem] = Field(default_factory=list)
    address_id: Optional[int] = None


class OrderTotals(BaseModel):
    subtotal_cent: int
    discount_cent: int
    tax_cent: int
    shipping_cent: int
    total_cent: int


class CheckoutOut(BaseModel):
    order_id: int
    totals: OrderTotals
