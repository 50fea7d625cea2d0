from datetime import datetime, timezone

import pytest
import pytest_asyncio

from app.core.errors import ValidationError
from app.db.models.orders import Order, OrderItem
from app.domain.reporting.dates import parse_range
from app.domain.reporting.service import balance_sheet, income_statement, kpis


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


async def add_order(session, store, created_at, total_cent, lines):
    order = Order(
        user_id=store.customer_id,
        address_id=store.address_id,
        status="pending",
        subtotal_cent=total_cent,
        discount_cent=0,
        tax_cent=0,
        shipping_cent=0,
        total_cent=total_cent,
        created_at=created_at,
    )
    session.add(order)
    await session.flush()
    for product_id, variant_id, name, qty, cost, line_total in lines:
        session.add(
            OrderItem(
                order_id=order.id,
                product_id=product_id,
                variant_id=variant_id,
                name_snapshot=name,
                qty=qty,
                unit_price_cent=line_total // qty,
                line_total_cent=line_total,
                cost_snapshot_cent=cost,
            )
        )
    await session.flush()
    return order


@pytest_asyncio.fixture
async def history(session_factory, store):
    ball = (store.ball_id, store.ball_variant_id, "Balón de fútbol")
    basket = (store.basket_id, store.basket_variant_id, "Balón de basket")
    gloves = (store.gloves_id, store.gloves_variant_id, "Guantes de box")

    async with session_factory() as s:
        await add_order(s, store, utc(2023, 12, 31, 12, 0), 30000, [(*ball, 1, 10000, 30000)])
        await add_order(s, store, utc(2024, 1, 10, 10, 0), 119000, [(*ball, 1, 50000, 100000)])
        await add_order(s, store, utc(2024, 1, 15, 9, 30), 60000, [(*gloves, 1, 20000, 30000), (*basket, 2, 5000, 30000)])
        await add_order(s, store, utc(2024, 1, 20, 18, 0), 90000, [(*ball, 2, 25000, 60000), (*gloves, 1, 20000, 30000)])
        await add_order(s, store, utc(2024, 1, 31, 23, 59, 59), 11000, [(*basket, 1, 4000, 11000)])
        await add_order(s, store, utc(2024, 2, 1, 0, 0), 70000, [(*gloves, 5, 20000, 70000)])
        await s.commit()
    return store


async def test_income_statement_single_order(db, history):
    report = await income_statement(db, parse_range("2024-01-10", "2024-01-10"))

    assert report.ingresos == 1190.0
    assert report.costo_ventas == 500.0
    assert report.utilidad_bruta == 690.0
    assert report.impuestos == 0.0
    assert report.utilidad_neta == 690.0


async def test_income_statement_uses_cost_snapshots(db, history):
    report = await income_statement(db, parse_range("2024-01-01", "2024-01-31"))

    ingresos = 119000 + 60000 + 90000 + 11000
    cogs = 50000 + (20000 + 2 * 5000) + (2 * 25000 + 20000) + 4000
    assert report.ingresos == ingresos / 100
    assert report.costo_ventas == cogs / 100
    assert report.utilidad_bruta == (ingresos - cogs) / 100


async def test_kpis_counts_range_inclusive_of_last_second(db, history):
    report = await kpis(db, parse_range("2024-01-01", "2024-01-31"))

    assert report.boletas == 4
    assert report.ventas_totales == 2800.0
    assert report.ticket_promedio == 700.0
    assert report.desde == "2024-01-01"
    assert report.hasta == "2024-01-31"


async def test_kpis_top_products_by_quantity(db, history):
    report = await kpis(db, parse_range("2024-01-01", "2024-01-31"))

    ranking = [(p.nombre, p.cantidad) for p in report.top5_productos]
    # ball and basket tie on 3 units, ball was sold first; gloves sold in two
    # orders but only 2 units
    assert ranking == [("Balón de fútbol", 3), ("Balón de basket", 3), ("Guantes de box", 2)]
    assert report.top5_productos[0].producto_id == history.ball_id
    assert report.top5_productos[0].ingreso == 1600.0


async def test_kpis_empty_range(db, history):
    report = await kpis(db, parse_range("2030-01-01", "2030-12-31"))

    assert report.boletas == 0
    assert report.ventas_totales == 0.0
    assert report.ticket_promedio == 0.0
    assert report.top5_productos == []


async def test_balance_sheet_accumulates_all_time_cash(db, history):
    report = await balance_sheet(db, "2024-01-31")

    assert report.al == "2024-01-31"
    assert report.activos.caja_estimada == (30000 + 119000 + 60000 + 90000 + 11000) / 100
    # 15 * 1,200,000 + 10 * 2,000,000 + 8 * 3,000,000
    assert report.activos.inventario == 620000.0
    assert report.pasivos.cuentas_por_pagar == 0.0
    assert report.patrimonio == report.activos.caja_estimada + report.activos.inventario


@pytest.mark.parametrize(
    "desde,hasta",
    [(None, "2024-01-31"), ("2024-01-01", None), ("2024-13-01", "2024-12-31"), ("ayer", "hoy"), ("2024-02-01", "2024-01-01")],
)
def test_parse_range_rejects_bad_input(desde, hasta):
    with pytest.raises(ValidationError) as exc:
        parse_range(desde, hasta)
    assert exc.value.code == "invalid_range"


def test_parse_range_extends_to_end_of_day():
    period = parse_range("2024-01-01", "2024-01-31")

    assert period.start == utc(2024, 1, 1)
    assert period.end == utc(2024, 1, 31, 23, 59, 59)


async def test_balance_sheet_requires_date(db, history):
    with pytest.raises(ValidationError):
        await balance_sheet(db, None)


def test_rank_products_keeps_five_and_is_stable():
    from types import SimpleNamespace

    from app.domain.reporting.service import rank_products

    items = [
        SimpleNamespace(product_id=pid, name_snapshot=f"P{pid}", qty=qty, line_total_cent=100 * qty)
        for pid, qty in [(1, 1), (2, 4), (3, 1), (4, 2), (5, 1), (6, 1), (2, 1)]
    ]

    ranked = rank_products(items)

    assert [p.producto_id for p in ranked] == [2, 4, 1, 3, 5]
    assert ranked[0].cantidad == 5
    assert ranked[0].ingreso == 5.0
