# app/domain/catalog/schemas.py
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1)


class CategoryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    slug: str


class ProductCreate(BaseModel):
    name: str = Field(min_length=1)
    category_id: int
    short_description: Optional[str] = None
    discount_percent: Optional[Decimal] = Field(default=None, ge=0, le=100)
    active: bool = True


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    category_id: Optional[int] = None
    short_description: Optional[str] = None
    discount_percent: Optional[Decimal] = Field(default=None, ge=0, le=100)


class ActiveToggle(BaseModel):
    active: bool


class VariantCreate(BaseModel):
    price_cent: int = Field(gt=0)
    stock: int = Field(default=0, ge=0)
    cost_cent: int = Field(default=0, ge=0)
    sku: Optional[str] = None
    color: Optional[str] = None
    size: Optional[str] = None
    active: bool = True


class VariantUpdate(BaseModel):
    price_cent: Optional[int] = Field(default=None, gt=0)
    stock: Optional[int] = Field(default=None, ge=0)
    cost_cent: Optional[int] = Field(default=None, ge=0)
    sku: Optional[str] = None
    color: Optional[str] = None
    size: Optional[str] = None
    active: Optional[bool] = None


class VariantOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    product_id: int
    sku: Optional[str]
    color: Optional[str]
    size: Optional[str]
    price_cent: int
    cost_cent: int
    stock: int
    active: bool


class ImageCreate(BaseModel):
    url: str = Field(min_length=1)
    sort_order: int = 0


class ImageOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    url: str
    sort_order: int


class ProductOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    category_id: int
    name: str
    slug: str
    short_description: Optional[str]
    discount_percent: Optional[Decimal]
    active: bool
    variants: List[VariantOut] = []
    images: List[ImageOut] = []


class InventoryRow(BaseModel):
    variant_id: int
    product_id: int
    product: str
    sku: Optional[str]
    color: Optional[str]
    size: Optional[str]
    stock: int
    cost_cent: int
    price_cent: int
    profit_cent: int
    margin_pct: float
    stock_value_cost_cent: int
    stock_value_sale_cent: int
    active: bool
