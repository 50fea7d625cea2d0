# app/domain/purchasing/schemas.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SupplierCreate(BaseModel):
    name: str = Field(min_length=1)
    tax_id: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None


class SupplierOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    tax_id: Optional[str]
    phone: Optional[str]
    email: Optional[str]


class PurchaseLine(BaseModel):
    variant_id: int
    qty: int = Field(gt=0)
    unit_cost_cent: int = Field(gt=0)
    iva_unit_cent: int = Field(default=0, ge=0)


class PurchaseCreate(BaseModel):
    supplier_id: int
    items: List[PurchaseLine] = Field(min_length=1)
    invoice_number: Optional[str] = None
    notes: Optional[str] = None


class PurchaseCreated(BaseModel):
    purchase_id: int


class PurchaseItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    variant_id: int
    qty: int
    unit_cost_cent: int
    iva_unit_cent: int
    line_subtotal_cent: int


class PurchaseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    supplier_id: int
    invoice_number: Optional[str]
    notes: Optional[str]
    subtotal_cent: int
    iva_cent: int
    retefuente_cent: int
    total_cent: int
    created_at: datetime
    items: List[PurchaseItemOut] = []
