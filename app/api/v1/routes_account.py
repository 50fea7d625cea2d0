# app/api/v1/routes_account.py
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_identity
from app.core.security import Identity
from app.db.base import get_db
from app.domain.addresses.schemas import AddressCreate, AddressOut
from app.domain.addresses.service import create_address, list_addresses


router = APIRouter(prefix="/api/v1/me", tags=["account"])


@router.get("/addresses", response_model=List[AddressOut])
async def list_addresses_endpoint(
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    return await list_addresses(db, identity)


@router.post("/addresses", response_model=AddressOut)
async def create_address_endpoint(
    payload: AddressCreate,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    return await create_address(db, identity, payload)
