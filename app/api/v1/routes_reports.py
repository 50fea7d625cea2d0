# app/api/v1/routes_reports.py
from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.deps import require_admin
from app.db.base import get_db
from app.domain.reporting.dates import parse_range
from app.domain.reporting.schemas import BalanceSheet, IncomeStatement, KpiReport
from app.domain.reporting.service import balance_sheet, income_statement, kpis


router = APIRouter(prefix="/api/v1/reports", tags=["reports"], dependencies=[Depends(require_admin)])


@router.get("/kpis", response_model=KpiReport)
async def kpis_endpoint(
    desde: Optional[str] = None,
    hasta: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    return await kpis(db, parse_range(desde, hasta))


@router.get("/income-statement", response_model=IncomeStatement)
async def income_statement_endpoint(
    desde: Optional[str] = None,
    hasta: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    return await income_statement(db, parse_range(desde, hasta))


@router.get("/balance-sheet", response_model=BalanceSheet)
async def balance_sheet_endpoint(
    al: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    return await balance_sheet(db, al)
