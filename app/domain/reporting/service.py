# app/domain/reporting/service.py
"""Read-side financial aggregation.

Everything is summed in integer minor units and converted to major units
only when the response is built. Nothing here writes to the database.
"""
import logging
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import func, select

from app.core.money import to_major
from app.db.models.catalog import Variant
from app.db.models.orders import Order, OrderItem
from app.db.repositories.orders import get_items_for_orders, get_orders_in_range
from .dates import DateRange, end_of_day, parse_date_only
from .schemas import Assets, BalanceSheet, IncomeStatement, KpiReport, Liabilities, TopProduct

logger = logging.getLogger(__name__)

TOP_PRODUCTS_LIMIT = 5


def rank_products(items: List[OrderItem], limit: int = TOP_PRODUCTS_LIMIT) -> List[TopProduct]:
    # dicts keep insertion order and sorted() is stable, so ties stay in
    # the order the products were first seen
    by_product: Dict[int, dict] = {}
    for item in items:
        entry = by_product.get(item.product_id)
        if entry is None:
            entry = {
                "producto_id": item.product_id,
                "nombre": item.name_snapshot or f"Producto {item.product_id}",
                "cantidad": 0,
                "ingreso_cent": 0,
            }
            by_product[item.product_id] = entry
        entry["cantidad"] += item.qty
        entry["ingreso_cent"] += item.line_total_cent or 0

    ranked = sorted(by_product.values(), key=lambda e: e["cantidad"], reverse=True)
    return [
        TopProduct(
            producto_id=e["producto_id"],
            nombre=e["nombre"],
            cantidad=e["cantidad"],
            ingreso=to_major(e["ingreso_cent"]),
        )
        for e in ranked[:limit]
    ]


async def kpis(db: AsyncSession, period: DateRange) -> KpiReport:
    orders = await get_orders_in_range(db, period.start, period.end)
    boletas = len(orders)
    ventas_cent = sum(o.total_cent or 0 for o in orders)
    ticket_cent = Decimal(ventas_cent) / Decimal(boletas) if boletas else Decimal(0)

    items = await get_items_for_orders(db, [o.id for o in orders])
    logger.debug("KPIs %s..%s: %s orders, %s items", period.desde, period.hasta, boletas, len(items))

    return KpiReport(
        desde=period.desde,
        hasta=period.hasta,
        ventas_totales=to_major(ventas_cent),
        boletas=boletas,
        ticket_promedio=to_major(ticket_cent),
        top5_productos=rank_products(items),
    )


async def income_statement(db: AsyncSession, period: DateRange) -> IncomeStatement:
    orders = await get_orders_in_range(db, period.start, period.end)
    ingresos_cent = sum(o.total_cent or 0 for o in orders)

    items = await get_items_for_orders(db, [o.id for o in orders])
    # cost comes from the snapshot taken at sale time, never the live variant
    cogs_cent = sum(it.qty * (it.cost_snapshot_cent or 0) for it in items)

    utilidad_bruta_cent = ingresos_cent - cogs_cent
    impuestos_cent = 0
    utilidad_neta_cent = utilidad_bruta_cent - impuestos_cent

    return IncomeStatement(
        desde=period.desde,
        hasta=period.hasta,
        ingresos=to_major(ingresos_cent),
        costo_ventas=to_major(cogs_cent),
        utilidad_bruta=to_major(utilidad_bruta_cent),
        impuestos=to_major(impuestos_cent),
        utilidad_neta=to_major(utilidad_neta_cent),
    )


async def cash_until(db: AsyncSession, until: Optional[datetime]) -> int:
    stmt = select(func.coalesce(func.sum(Order.total_cent), 0))
    if until is not None:
        stmt = stmt.where(Order.created_at <= until)
    result = await db.execute(stmt)
    return int(result.scalar() or 0)


async def inventory_value(db: AsyncSession) -> int:
    result = await db.execute(
        select(func.coalesce(func.sum(Variant.stock * Variant.cost_cent), 0))
    )
    return int(result.scalar() or 0)


async def balance_sheet(db: AsyncSession, al: Optional[str]) -> BalanceSheet:
    """Point-in-time balance.

    Cash is every order total up to the end of ``al``, with no outflows.
    Inventory is valued from current stock and cost since there is no
    historical stock ledger.
    """
    until = end_of_day(parse_date_only(al, "al"))

    caja_cent = await cash_until(db, until)
    inventario_cent = await inventory_value(db)
    pasivos = {"cuentas_por_pagar": 0}
    total_pasivos_cent = sum(pasivos.values())

    return BalanceSheet(
        al=al.strip(),
        activos=Assets(caja_estimada=to_major(caja_cent), inventario=to_major(inventario_cent)),
        pasivos=Liabilities(**{k: to_major(v) for k, v in pasivos.items()}),
        patrimonio=to_major(caja_cent + inventario_cent - total_pasivos_cent),
    )
