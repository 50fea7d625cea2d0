# app/domain/addresses/schemas.py
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AddressCreate(BaseModel):
    label: Optional[str] = None
    recipient: str = Field(min_length=1)
    department: str = Field(min_length=1)
    city: str = Field(min_length=1)
    street: str = Field(min_length=1)
    country: str = "Colombia"
    is_default: bool = False


class AddressOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    label: Optional[str]
    recipient: str
    department: str
    city: str
    street: str
    country: str
    is_default: bool
