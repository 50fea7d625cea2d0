# app/domain/settings/service.py
import logging
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings as app_settings
from app.core.errors import ValidationError
from app.core.money import to_decimal
from app.db.base import atomic
from app.db.models.settings import SETTINGS_ID, StoreSettings
from app.db.repositories.settings import get_settings_row
from .schemas import SettingsUpdate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckoutSettings:
    """Tax rate and shipping fee in effect for a single operation."""

    tax_percent: Decimal
    shipping_fixed_cent: int


def default_checkout_settings() -> CheckoutSettings:
    return CheckoutSettings(
        tax_percent=to_decimal(app_settings.DEFAULT_TAX_PERCENT),
        shipping_fixed_cent=app_settings.DEFAULT_SHIPPING_FIXED_CENT,
    )


async def load_checkout_settings(db: AsyncSession) -> CheckoutSettings:
    row = await get_settings_row(db)
    if row is None:
        return default_checkout_settings()
    return CheckoutSettings(
        tax_percent=to_decimal(row.tax_percent),
        shipping_fixed_cent=int(row.shipping_fixed_cent or 0),
    )


async def update_settings(
    db: AsyncSession,
    data: SettingsUpdate,
) -> CheckoutSettings:
    if data.tax_percent < 0 or data.tax_percent > 100:
        raise ValidationError("tax_percent must be between 0 and 100")
    if data.shipping_fixed_cent < 0:
        raise ValidationError("shipping_fixed_cent must not be negative")

    async with atomic(db):
        row = await get_settings_row(db)
        if row is None:
            row = StoreSettings(id=SETTINGS_ID)
            db.add(row)
        row.tax_percent = data.tax_percent
        row.shipping_fixed_cent = data.shipping_fixed_cent

    logger.info(
        "Settings updated: tax_percent=%s shipping_fixed_cent=%s",
        data.tax_percent,
        data.shipping_fixed_cent,
    )
    return CheckoutSettings(
        tax_percent=to_decimal(data.tax_percent),
        shipping_fixed_cent=data.shipping_fixed_cent,
    )
