from sqlalchemy.sql import select

from app.db.models.catalog import Variant
from app.db.models.orders import Order
from app.db.models.users import User

from conftest import ADMIN_HEADERS, CUSTOMER_HEADERS


async def test_health(client):
    r = await client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


async def test_checkout_requires_identity(client, store):
    r = await client.post("/api/v1/checkout", json={"items": [{"variant_id": store.ball_variant_id, "qty": 1}]})

    assert r.status_code == 401
    assert r.json()["code"] == "unauthenticated"


async def test_checkout_rejects_malformed_identity(client, store):
    r = await client.post(
        "/api/v1/checkout",
        json={"items": [{"variant_id": store.ball_variant_id, "qty": 1}]},
        headers={"X-User-Id": "abc", "X-User-Role": "customer"},
    )
    assert r.status_code == 401


async def test_checkout_endpoint(client, session_factory, store):
    r = await client.post(
        "/api/v1/checkout",
        json={"items": [{"variant_id": store.basket_variant_id, "qty": 2}], "address_id": store.address_id},
        headers=CUSTOMER_HEADERS,
    )

    assert r.status_code == 200
    body = r.json()
    assert body["totals"] == {
        "subtotal_cent": 7000000,
        "discount_cent": 700000,
        "tax_cent": 1197000,
        "shipping_cent": 8000,
        "total_cent": 7505000,
    }
    async with session_factory() as s:
        order = await s.get(Order, body["order_id"])
        assert order.user_id == store.customer_id
        assert (await s.get(Variant, store.basket_variant_id)).stock == 8


async def test_checkout_stock_conflict_is_409(client, store):
    r = await client.post(
        "/api/v1/checkout",
        json={"items": [{"variant_id": store.gloves_variant_id, "qty": 9}]},
        headers=CUSTOMER_HEADERS,
    )

    assert r.status_code == 409
    body = r.json()
    assert body["code"] == "insufficient_stock"
    assert body["details"]["variant_id"] == store.gloves_variant_id


async def test_checkout_empty_cart_is_400(client, store):
    r = await client.post("/api/v1/checkout", json={"items": []}, headers=CUSTOMER_HEADERS)
    assert r.status_code == 400
    assert r.json()["code"] == "empty_cart"


async def test_my_orders_and_admin_status_flow(client, store):
    r = await client.post(
        "/api/v1/checkout",
        json={"items": [{"variant_id": store.ball_variant_id, "qty": 1}]},
        headers=CUSTOMER_HEADERS,
    )
    order_id = r.json()["order_id"]

    mine = await client.get("/api/v1/orders/mine", headers=CUSTOMER_HEADERS)
    assert [o["id"] for o in mine.json()] == [order_id]
    assert mine.json()[0]["items"][0]["name_snapshot"] == "Balón de fútbol"

    forbidden = await client.patch(
        f"/api/v1/admin/orders/{order_id}/status", json={"status": "shipped"}, headers=CUSTOMER_HEADERS
    )
    assert forbidden.status_code == 403

    bad = await client.patch(
        f"/api/v1/admin/orders/{order_id}/status", json={"status": "lost"}, headers=ADMIN_HEADERS
    )
    assert bad.status_code == 400

    missing = await client.patch("/api/v1/admin/orders/999/status", json={"status": "shipped"}, headers=ADMIN_HEADERS)
    assert missing.status_code == 404

    ok = await client.patch(
        f"/api/v1/admin/orders/{order_id}/status", json={"status": "shipped"}, headers=ADMIN_HEADERS
    )
    assert ok.status_code == 200
    assert ok.json() == {"id": order_id, "status": "shipped"}

    everything = await client.get("/api/v1/admin/orders", headers=ADMIN_HEADERS)
    assert everything.json()[0]["status"] == "shipped"
    assert everything.json()[0]["total_cent"] == r.json()["totals"]["total_cent"]


async def test_reports_are_admin_only(client, store):
    r = await client.get("/api/v1/reports/kpis?desde=2024-01-01&hasta=2024-01-31", headers=CUSTOMER_HEADERS)
    assert r.status_code == 403

    r = await client.get("/api/v1/reports/kpis?desde=2024-01-01&hasta=2024-01-31")
    assert r.status_code == 401


async def test_reports_reject_missing_range(client, store):
    r = await client.get("/api/v1/reports/income-statement?desde=2024-01-01", headers=ADMIN_HEADERS)
    assert r.status_code == 400
    assert r.json()["code"] == "invalid_range"

    r = await client.get("/api/v1/reports/balance-sheet?al=mañana", headers=ADMIN_HEADERS)
    assert r.status_code == 400


async def test_reports_after_checkout(client, store):
    r = await client.post(
        "/api/v1/checkout",
        json={"items": [{"variant_id": store.gloves_variant_id, "qty": 1}]},
        headers=CUSTOMER_HEADERS,
    )
    total_cent = r.json()["totals"]["total_cent"]

    income = await client.get(
        "/api/v1/reports/income-statement?desde=2000-01-01&hasta=2999-12-31", headers=ADMIN_HEADERS
    )
    assert income.status_code == 200
    body = income.json()
    assert body["ingresos"] == total_cent / 100
    assert body["costo_ventas"] == 30000.0
    assert body["utilidad_bruta"] == (total_cent - 3000000) / 100

    kpi = await client.get("/api/v1/reports/kpis?desde=2000-01-01&hasta=2999-12-31", headers=ADMIN_HEADERS)
    assert kpi.json()["boletas"] == 1
    assert kpi.json()["top5_productos"][0]["producto_id"] == store.gloves_id

    balance = await client.get("/api/v1/reports/balance-sheet?al=2999-12-31", headers=ADMIN_HEADERS)
    assert balance.json()["activos"]["caja_estimada"] == total_cent / 100


async def test_purchase_endpoint(client, session_factory, store):
    r = await client.post(
        "/api/v1/admin/purchases",
        json={
            "supplier_id": store.supplier_id,
            "invoice_number": "FV-77",
            "items": [{"variant_id": store.gloves_variant_id, "qty": 2, "unit_cost_cent": 3500000}],
        },
        headers=ADMIN_HEADERS,
    )
    assert r.status_code == 200
    purchase_id = r.json()["purchase_id"]

    detail = await client.get(f"/api/v1/admin/purchases/{purchase_id}", headers=ADMIN_HEADERS)
    assert detail.json()["total_cent"] == 7000000
    assert detail.json()["items"][0]["iva_unit_cent"] == 0

    async with session_factory() as s:
        variant = (await s.execute(select(Variant).where(Variant.id == store.gloves_variant_id))).scalar_one()
    assert variant.stock == 10
    assert variant.cost_cent == 3100000


async def test_purchase_schema_rejects_zero_quantity(client, store):
    r = await client.post(
        "/api/v1/admin/purchases",
        json={
            "supplier_id": store.supplier_id,
            "items": [{"variant_id": store.gloves_variant_id, "qty": 0, "unit_cost_cent": 100}],
        },
        headers=ADMIN_HEADERS,
    )
    assert r.status_code == 422


async def test_purchase_unknown_supplier_is_409(client, store):
    r = await client.post(
        "/api/v1/admin/purchases",
        json={"supplier_id": 404, "items": [{"variant_id": store.gloves_variant_id, "qty": 1, "unit_cost_cent": 100}]},
        headers=ADMIN_HEADERS,
    )
    assert r.status_code == 409
    assert r.json()["details"] == {"supplier_id": 404}


async def test_settings_update_feeds_checkout(client, store):
    r = await client.put(
        "/api/v1/admin/settings", json={"tax_percent": "0", "shipping_fixed_cent": 0}, headers=ADMIN_HEADERS
    )
    assert r.status_code == 200

    r = await client.post(
        "/api/v1/checkout",
        json={"items": [{"variant_id": store.ball_variant_id, "qty": 1}]},
        headers=CUSTOMER_HEADERS,
    )
    assert r.json()["totals"]["total_cent"] == 2000000


async def test_addresses_and_expenses(client, store):
    r = await client.post(
        "/api/v1/me/addresses",
        json={"recipient": "Admin", "department": "Antioquia", "city": "Medellín", "street": "Cra 1 #2-3"},
        headers=ADMIN_HEADERS,
    )
    assert r.status_code == 200
    assert r.json()["is_default"] is True

    r = await client.post(
        "/api/v1/checkout",
        json={"items": [{"variant_id": store.ball_variant_id, "qty": 1}]},
        headers=ADMIN_HEADERS,
    )
    assert r.status_code == 200

    r = await client.post(
        "/api/v1/admin/expenses",
        json={"category": "arriendo", "amount_cent": 150000000, "date": "2024-01-05"},
        headers=ADMIN_HEADERS,
    )
    assert r.status_code == 200

    listed = await client.get("/api/v1/admin/expenses?desde=2024-01-01&hasta=2024-01-31", headers=ADMIN_HEADERS)
    assert [e["category"] for e in listed.json()] == ["arriendo"]

    outside = await client.get("/api/v1/admin/expenses?desde=2024-02-01&hasta=2024-02-28", headers=ADMIN_HEADERS)
    assert outside.json() == []


async def test_admin_catalog_routes(client, store):
    r = await client.post(
        "/api/v1/admin/products",
        json={"name": "Balón de fútbol", "category_id": store.category_id},
        headers=ADMIN_HEADERS,
    )
    assert r.status_code == 200
    assert r.json()["slug"] == "balon-de-futbol"

    r = await client.get("/api/v1/products?search=guantes")
    assert [p["slug"] for p in r.json()] == ["guantes-box"]

    inventory = await client.get("/api/v1/admin/inventory", headers=ADMIN_HEADERS)
    assert len(inventory.json()) == 3


async def test_product_images_are_listed_in_order(client, store):
    for url, order in [("https://img.example/b.jpg", 1), ("https://img.example/a.jpg", 0)]:
        r = await client.post(
            f"/api/v1/admin/products/{store.ball_id}/images",
            json={"url": url, "sort_order": order},
            headers=ADMIN_HEADERS,
        )
        assert r.status_code == 200

    missing = await client.post(
        "/api/v1/admin/products/999/images", json={"url": "https://img.example/x.jpg"}, headers=ADMIN_HEADERS
    )
    assert missing.status_code == 404

    products = {p["id"]: p for p in (await client.get("/api/v1/products")).json()}
    assert [i["url"] for i in products[store.ball_id]["images"]] == ["https://img.example/a.jpg", "https://img.example/b.jpg"]


async def test_gateway_user_without_local_row_can_check_out(client, session_factory, store):
    headers = {"X-User-Id": "42", "X-User-Role": "customer"}

    r = await client.post(
        "/api/v1/me/addresses",
        json={"recipient": "Nueva Clienta", "department": "Cundinamarca", "city": "Bogotá", "street": "Cl 80 #10-20"},
        headers=headers,
    )
    assert r.status_code == 200
    assert r.json()["is_default"] is True

    # a second address must not trip over the existing user row
    r = await client.post(
        "/api/v1/me/addresses",
        json={"recipient": "Nueva Clienta", "department": "Cundinamarca", "city": "Chía", "street": "Cra 5 #1-1"},
        headers=headers,
    )
    assert r.status_code == 200

    r = await client.post(
        "/api/v1/checkout",
        json={"items": [{"variant_id": store.ball_variant_id, "qty": 1}]},
        headers=headers,
    )
    assert r.status_code == 200

    async with session_factory() as s:
        user = await s.get(User, 42)
        assert user.role == "customer"
        order = await s.get(Order, r.json()["order_id"])
        assert order.user_id == 42

    mine = await client.get("/api/v1/orders/mine", headers=headers)
    assert [o["id"] for o in mine.json()] == [r.json()["order_id"]]
