# app/db/models/settings.py
from sqlalchemy import Column, Integer, Numeric

from app.db.base import Base

SETTINGS_ID = 1


class StoreSettings(Base):
    """Singleton row (id=1) with the tax rate and the flat shipping fee."""

    __tablename__ = "settings"

    id = Column(Integer, primary_key=True, default=SETTINGS_ID)
    tax_percent = Column(Numeric(5, 2), nullable=False, default=19)
    shipping_fixed_cent = Column(Integer, nullable=False, default=0)
