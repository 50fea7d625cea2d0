# app/domain/expenses/schemas.py
import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ExpenseCreate(BaseModel):
    category: str = Field(min_length=1)
    detail: Optional[str] = None
    amount_cent: int = Field(gt=0)
    date: dt.date


class ExpenseOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    category: str
    detail: Optional[str]
    amount_cent: int
    date: dt.date
