# app/domain/checkout/service.py
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import select, update

from app.core.errors import ConflictError, ValidationError
from app.core.money import percent_of, to_decimal
from app.core.security import Identity
from app.db.base import atomic
from app.db.models.catalog import Variant
from app.db.models.orders import Order, OrderItem, OrderStatus
from app.db.models.users import Address
from app.db.repositories.catalog import get_variants_for_update
from app.db.repositories.users import ensure_user
from app.domain.settings.service import CheckoutSettings, load_checkout_settings
from .schemas import CheckoutItem, CheckoutOut, CheckoutRequest, OrderTotals

logger = logging.getLogger(__name__)


@dataclass
class PricedLine:
    variant: Variant
    qty: int
    discount_percent: Decimal
    base_cent: int
    discount_cent: int


def product_discount_percent(variant: Variant) -> Decimal:
    pct = variant.product.discount_percent if variant.product is not None else None
    return to_decimal(pct) if pct is not None else Decimal("0")


def price_lines(items: List[CheckoutItem], variants: Dict[int, Variant]) -> List[PricedLine]:
    """Validate every requested line, in input order, and price it."""
    lines = []
    for item in items:
        variant = variants.get(item.variant_id)
        if variant is None:
            raise ConflictError(
                f"Variant {item.variant_id} does not exist",
                code="unknown_variant",
                details={"variant_id": item.variant_id},
            )
        if item.qty <= 0:
            raise ValidationError(
                "Quantity must be a positive integer",
                code="invalid_quantity",
                details={"variant_id": item.variant_id, "qty": item.qty},
            )
        if not variant.active or variant.stock < item.qty:
            raise ConflictError(
                f"Insufficient stock for variant {variant.id}",
                code="insufficient_stock",
                details={"variant_id": variant.id, "requested": item.qty, "available": variant.stock},
            )

        pct = product_discount_percent(variant)
        base = variant.price_cent * item.qty
        lines.append(
            PricedLine(
                variant=variant,
                qty=item.qty,
                discount_percent=pct,
                base_cent=base,
                discount_cent=percent_of(base, pct),
            )
        )
    return lines


def compute_totals(lines: List[PricedLine], settings: CheckoutSettings) -> OrderTotals:
    subtotal = sum(line.base_cent for line in lines)
    discount = sum(line.discount_cent for line in lines)
    taxable = max(subtotal - discount, 0)
    tax = percent_of(taxable, settings.tax_percent)
    shipping = settings.shipping_fixed_cent
    return OrderTotals(
        subtotal_cent=subtotal,
        discount_cent=discount,
        tax_cent=tax,
        shipping_cent=shipping,
        total_cent=taxable + tax + shipping,
    )


async def resolve_address(
    db: AsyncSession,
    identity: Identity,
    address_id: Optional[int],
) -> Address:
    if address_id is not None:
        result = await db.execute(
            select(Address).where(Address.id == address_id, Address.user_id == identity.user_id)
        )
        address = result.scalar_one_or_none()
        if address is None:
            raise ConflictError(
                "Invalid address",
                code="invalid_address",
                details={"address_id": address_id},
            )
        return address

    result = await db.execute(
        select(Address)
        .where(Address.user_id == identity.user_id, Address.is_default.is_(True))
        .order_by(Address.id)
        .limit(1)
    )
    address = result.scalar_one_or_none()
    if address is None:
        raise ConflictError("No default address found, create one first", code="missing_address")
    return address


async def decrement_stock(db: AsyncSession, variant_id: int, qty: int) -> None:
    # the stock guard in the WHERE clause keeps two checkouts from both taking
    # the last units when the engine does not honour FOR UPDATE
    result = await db.execute(
        update(Variant)
        .where(Variant.id == variant_id, Variant.stock >= qty)
        .values(stock=Variant.stock - qty)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount != 1:
        raise ConflictError(
            f"Insufficient stock for variant {variant_id}",
            code="insufficient_stock",
            details={"variant_id": variant_id, "requested": qty},
        )


async def checkout(
    db: AsyncSession,
    identity: Identity,
    data: CheckoutRequest,
    settings: Optional[CheckoutSettings] = None,
) -> CheckoutOut:
    if not data.items:
        raise ValidationError("At least one item is required", code="empty_cart")

    try:
        async with atomic(db):
            if settings is None:
                settings = await load_checkout_settings(db)
            address = await resolve_address(db, identity, data.address_id)
            await ensure_user(db, identity)

            variants = await get_variants_for_update(db, (it.variant_id for it in data.items))
            lines = price_lines(data.items, variants)
            totals = compute_totals(lines, settings)

            order = Order(
                user_id=identity.user_id,
                address_id=address.id,
                status=OrderStatus.PENDING.value,
                **totals.model_dump(),
            )
            db.add(order)
            await db.flush()

            for line in lines:
                variant = line.variant
                unit = variant.price_cent
                unit_discount = percent_of(unit, line.discount_percent)
                line_unit = unit - unit_discount
                db.add(
                    OrderItem(
                        order_id=order.id,
                        product_id=variant.product_id,
                        variant_id=variant.id,
                        name_snapshot=variant.product.name,
                        color_snapshot=variant.color or None,
                        size_snapshot=variant.size or None,
                        cost_snapshot_cent=variant.cost_cent or 0,
                        qty=line.qty,
                        unit_price_cent=unit,
                        line_total_cent=line_unit * line.qty,
                    )
                )
                await decrement_stock(db, variant.id, line.qty)
    except (ConflictError, ValidationError) as exc:
        logger.warning("Checkout rejected for user %s: %s", identity.user_id, exc.message)
        raise

    logger.info(
        "Order %s created for user %s: %s lines, total_cent=%s",
        order.id,
        identity.user_id,
        len(lines),
        totals.total_cent,
    )
    return CheckoutOut(order_id=order.id, totals=totals)
