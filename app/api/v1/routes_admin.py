# app/api/v1/routes_admin.py
from typing import List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.db.base import get_db
from app.domain.expenses.schemas import ExpenseCreate, ExpenseOut
from app.domain.expenses.service import create_expense, list_expenses
from app.domain.reporting.dates import parse_range
from app.domain.settings.schemas import SettingsOut, SettingsUpdate
from app.domain.settings.service import load_checkout_settings, update_settings


router = APIRouter(prefix="/api/v1/admin", tags=["admin"], dependencies=[Depends(require_admin)])


@router.post("/expenses", response_model=ExpenseOut)
async def create_expense_endpoint(payload: ExpenseCreate, db: AsyncSession = Depends(get_db)):
    return await create_expense(db, payload)


@router.get("/expenses", response_model=List[ExpenseOut])
async def list_expenses_endpoint(
    desde: Optional[str] = None,
    hasta: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    period = parse_range(desde, hasta) if (desde or hasta) else None
    return await list_expenses(db, period)


@router.get("/settings", response_model=SettingsOut)
async def get_settings_endpoint(db: AsyncSession = Depends(get_db)):
    return await load_checkout_settings(db)


@router.put("/settings", response_model=SettingsOut)
async def update_settings_endpoint(payload: SettingsUpdate, db: AsyncSession = Depends(get_db)):
    return await update_settings(db, payload)
