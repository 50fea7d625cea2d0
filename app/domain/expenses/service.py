# app/domain/expenses/service.py
import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import select

from app.core.errors import ValidationError
from app.db.base import atomic
from app.db.models.expenses import Expense
from app.domain.reporting.dates import DateRange
from .schemas import ExpenseCreate

logger = logging.getLogger(__name__)


async def create_expense(db: AsyncSession, data: ExpenseCreate) -> Expense:
    if data.amount_cent <= 0:
        raise ValidationError("amount_cent must be positive", code="invalid_amount")

    async with atomic(db):
        expense = Expense(
            category=data.category.strip(),
            detail=data.detail,
            amount_cent=data.amount_cent,
            date=data.date,
        )
        db.add(expense)

    logger.info("Expense %s recorded: %s %s", expense.id, expense.category, expense.amount_cent)
    return expense


async def list_expenses(db: AsyncSession, period: Optional[DateRange] = None) -> List[Expense]:
    stmt = select(Expense).order_by(Expense.date.desc(), Expense.id.desc())
    if period is not None:
        stmt = stmt.where(Expense.date >= period.start.date(), Expense.date <= period.end.date())
    result = await db.execute(stmt)
    return list(result.scalars().all())
