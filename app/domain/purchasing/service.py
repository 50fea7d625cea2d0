# app/domain/purchasing/service.py
import logging
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import select

from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.core.money import weighted_average_cost
from app.db.base import atomic
from app.db.models.purchases import Purchase, PurchaseItem, Supplier
from app.db.repositories.catalog import get_variant_for_update, get_variants_for_update
from .schemas import PurchaseCreate, PurchaseCreated, PurchaseLine, SupplierCreate

logger = logging.getLogger(__name__)


async def create_supplier(db: AsyncSession, data: SupplierCreate) -> Supplier:
    supplier = Supplier(**data.model_dump())
    try:
        async with atomic(db):
            db.add(supplier)
    except IntegrityError as exc:
        raise ConflictError(
            "Supplier tax id already registered",
            code="duplicate_supplier",
            details={"tax_id": data.tax_id},
        ) from exc
    return supplier


async def list_suppliers(db: AsyncSession) -> List[Supplier]:
    result = await db.execute(select(Supplier).order_by(Supplier.name, Supplier.id))
    return list(result.scalars().all())


def validate_line(line: PurchaseLine) -> None:
    if line.qty <= 0 or line.unit_cost_cent <= 0:
        raise ValidationError(
            "Purchase lines need qty > 0 and unit_cost_cent > 0",
            code="invalid_purchase_line",
            details={"variant_id": line.variant_id},
        )
    if line.iva_unit_cent < 0:
        raise ValidationError(
            "iva_unit_cent must not be negative",
            code="invalid_purchase_line",
            details={"variant_id": line.variant_id},
        )


async def receive_purchase(db: AsyncSession, data: PurchaseCreate) -> PurchaseCreated:
    """Record a supplier invoice and bring its units into stock.

    Every variant on the invoice is locked up front in id order, the same
    order checkout uses. Each line then re-reads its variant before blending
    the cost, so a variant that appears twice in the same invoice sees the
    stock and cost left by the earlier line. Totals are written last; any
    failure rolls back the header, the items and every variant update.
    """
    if not data.items:
        raise ValidationError("At least one item is required", code="empty_purchase")

    try:
        async with atomic(db):
            supplier = await db.get(Supplier, data.supplier_id)
            if supplier is None:
                raise ConflictError(
                    f"Supplier {data.supplier_id} does not exist",
                    code="unknown_supplier",
                    details={"supplier_id": data.supplier_id},
                )

            await get_variants_for_update(db, (line.variant_id for line in data.items))

            purchase = Purchase(
                supplier_id=supplier.id,
                invoice_number=data.invoice_number,
                notes=data.notes,
                subtotal_cent=0,
                iva_cent=0,
                retefuente_cent=0,
                total_cent=0,
            )
            db.add(purchase)
            await db.flush()

            subtotal = 0
            iva = 0
            for line in data.items:
                variant = await get_variant_for_update(db, line.variant_id)
                if variant is None:
                    raise ConflictError(
                        f"Variant {line.variant_id} does not exist",
                        code="unknown_variant",
                        details={"variant_id": line.variant_id},
                    )
                validate_line(line)

                line_subtotal = line.unit_cost_cent * line.qty
                subtotal += line_subtotal
                iva += line.iva_unit_cent * line.qty

                db.add(
                    PurchaseItem(
                        purchase_id=purchase.id,
                        variant_id=variant.id,
                        qty=line.qty,
                        unit_cost_cent=line.unit_cost_cent,
                        iva_unit_cent=line.iva_unit_cent,
                        line_subtotal_cent=line_subtotal,
                    )
                )

                prev_stock = variant.stock or 0
                prev_cost = variant.cost_cent or 0
                variant.cost_cent = weighted_average_cost(prev_stock, prev_cost, line.qty, line.unit_cost_cent)
                variant.stock = prev_stock + line.qty
                await db.flush()

            retefuente = 0
            purchase.subtotal_cent = subtotal
            purchase.iva_cent = iva
            purchase.retefuente_cent = retefuente
            purchase.total_cent = subtotal + iva - retefuente
    except (ConflictError, ValidationError) as exc:
        logger.warning("Purchase from supplier %s rejected: %s", data.supplier_id, exc.message)
        raise

    logger.info(
        "Purchase %s received from supplier %s: %s lines, total_cent=%s",
        purchase.id,
        supplier.id,
        len(data.items),
        purchase.total_cent,
    )
    return PurchaseCreated(purchase_id=purchase.id)


async def list_purchases(db: AsyncSession) -> List[Purchase]:
    result = await db.execute(
        select(Purchase)
        .options(selectinload(Purchase.items))
        .order_by(Purchase.created_at.desc(), Purchase.id.desc())
    )
    return list(result.scalars().all())


async def get_purchase(db: AsyncSession, purchase_id: int) -> Purchase:
    result = await db.execute(
        select(Purchase).options(selectinload(Purchase.items)).where(Purchase.id == purchase_id)
    )
    purchase = result.scalar_one_or_none()
    if purchase is None:
        raise NotFoundError("Purchase not found", details={"purchase_id": purchase_id})
    return purchase
