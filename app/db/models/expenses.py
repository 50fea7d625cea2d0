# app/db/models/expenses.py
from sqlalchemy import CheckConstraint, Column, Date, DateTime, Integer, String, Text
from sqlalchemy.sql import func

from app.db.base import Base, utcnow


class Expense(Base):
    """Operating expense (rent, payroll, ...), not tied to any order."""

    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    category = Column(String, nullable=False)
    detail = Column(Text, nullable=True)
    amount_cent = Column(Integer, nullable=False)
    date = Column(Date, nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now())

    __table_args__ = (
        CheckConstraint("amount_cent > 0", name="ck_expenses_amount_positive"),
    )
