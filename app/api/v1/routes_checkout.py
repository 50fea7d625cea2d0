# app/api/v1/routes_checkout.py
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import get_identity
from app.core.security import Identity
from app.db.base import get_db
from app.domain.checkout.schemas import CheckoutOut, CheckoutRequest
from app.domain.checkout.service import checkout


router = APIRouter(prefix="/api/v1/checkout", tags=["checkout"])


@router.post("", response_model=CheckoutOut)
async def checkout_endpoint(
    payload: CheckoutRequest,
    identity: Identity = Depends(get_identity),
    db: AsyncSession = Depends(get_db),
):
    return await checkout(db, identity, payload)
