# app/api/v1/routes_purchases.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.db.base import get_db
from app.domain.purchasing.schemas import (
    PurchaseCreate,
    PurchaseCreated,
    PurchaseOut,
    SupplierCreate,
    SupplierOut,
)
from app.domain.purchasing.service import (
    create_supplier,
    get_purchase,
    list_purchases,
    list_suppliers,
    receive_purchase,
)


router = APIRouter(prefix="/api/v1/admin", tags=["purchasing"], dependencies=[Depends(require_admin)])


@router.post("/purchases", response_model=PurchaseCreated)
async def receive_purchase_endpoint(
    payload: PurchaseCreate,
    db: AsyncSession = Depends(get_db),
):
    return await receive_purchase(db, payload)


@router.get("/purchases", response_model=List[PurchaseOut])
async def list_purchases_endpoint(db: AsyncSession = Depends(get_db)):
    return await list_purchases(db)


@router.get("/purchases/{purchase_id}", response_model=PurchaseOut)
async def get_purchase_endpoint(purchase_id: int, db: AsyncSession = Depends(get_db)):
    return await get_purchase(db, purchase_id)


@router.post("/suppliers", response_model=SupplierOut)
async def create_supplier_endpoint(
    payload: SupplierCreate,
    db: AsyncSession = Depends(get_db),
):
    return await create_supplier(db, payload)


@router.get("/suppliers", response_model=List[SupplierOut])
async def list_suppliers_endpoint(db: AsyncSession = Depends(get_db)):
    return await list_suppliers(db)
