# app/domain/settings/schemas.py
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class SettingsOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    tax_percent: Decimal
    shipping_fixed_cent: int


class SettingsUpdate(BaseModel):
    tax_percent: Decimal = Field(ge=0, le=100)
    shipping_fixed_cent: int = Field(ge=0)
