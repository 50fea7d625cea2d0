# app/api/v1/routes_catalog.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.db.base import get_db
from app.domain.catalog.schemas import (
    ActiveToggle,
    CategoryCreate,
    CategoryOut,
    ImageCreate,
    ImageOut,
    InventoryRow,
    ProductCreate,
    ProductOut,
    ProductUpdate,
    VariantCreate,
    VariantOut,
    VariantUpdate,
)
from app.domain.catalog import service


router = APIRouter(prefix="/api/v1", tags=["catalog"])
admin_router = APIRouter(prefix="/api/v1/admin", tags=["catalog"], dependencies=[Depends(require_admin)])


@router.get("/categories", response_model=List[CategoryOut])
async def list_categories_endpoint(db: AsyncSession = Depends(get_db)):
    return await service.list_categories(db)


@router.get("/products", response_model=List[ProductOut])
async def list_products_endpoint(
    search: Optional[str] = None,
    category: Optional[str] = None,
    min_cent: Optional[int] = Query(default=None, ge=0, alias="min"),
    max_cent: Optional[int] = Query(default=None, ge=0, alias="max"),
    db: AsyncSession = Depends(get_db),
):
    return await service.list_products(db, search=search, category=category, min_cent=min_cent, max_cent=max_cent)


@admin_router.post("/categories", response_model=CategoryOut)
async def create_category_endpoint(payload: CategoryCreate, db: AsyncSession = Depends(get_db)):
    return await service.create_category(db, payload)


@admin_router.post("/products", response_model=ProductOut)
async def create_product_endpoint(payload: ProductCreate, db: AsyncSession = Depends(get_db)):
    return await service.create_product(db, payload)


@admin_router.put("/products/{product_id}", response_model=ProductOut)
async def update_product_endpoint(
    product_id: int,
    payload: ProductUpdate,
    db: AsyncSession = Depends(get_db),
):
    return await service.update_product(db, product_id, payload)


@admin_router.put("/products/{product_id}/active", response_model=ProductOut)
async def toggle_product_endpoint(
    product_id: int,
    payload: ActiveToggle,
    db: AsyncSession = Depends(get_db),
):
    return await service.set_product_active(db, product_id, payload.active)


@admin_router.post("/products/{product_id}/variants", response_model=VariantOut)
async def create_variant_endpoint(
    product_id: int,
    payload: VariantCreate,
    db: AsyncSession = Depends(get_db),
):
    return await service.create_variant(db, product_id, payload)


@admin_router.put("/variants/{variant_id}", response_model=VariantOut)
async def update_variant_endpoint(
    variant_id: int,
    payload: VariantUpdate,
    db: AsyncSession = Depends(get_db),
):
    return await service.update_variant(db, variant_id, payload)


@admin_router.post("/products/{product_id}/images", response_model=ImageOut)
async def add_image_endpoint(
    product_id: int,
    payload: ImageCreate,
    db: AsyncSession = Depends(get_db),
):
    return await service.add_product_image(db, product_id, payload)


@admin_router.get("/inventory", response_model=List[InventoryRow])
async def inventory_endpoint(db: AsyncSession = Depends(get_db)):
    return await service.inventory_report(db)
