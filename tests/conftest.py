import os

# settings are read at import time; the engine is never used by the tests
os.environ.setdefault("DB_URL", "sqlite+aiosqlite:///./storefront-test.db")

from dataclasses import dataclass
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

from app.db.base import get_db
from app.db.init_db import create_all
from app.db.models.catalog import Category, Product, Variant
from app.db.models.purchases import Supplier
from app.db.models.settings import StoreSettings
from app.db.models.users import Address, User
from app.main import app

CUSTOMER_HEADERS = {"X-User-Id": "1", "X-User-Role": "customer"}
ADMIN_HEADERS = {"X-User-Id": "2", "X-User-Role": "admin"}


@dataclass
class Store:
    customer_id: int
    admin_id: int
    address_id: int
    category_id: int
    ball_id: int
    ball_variant_id: int
    basket_id: int
    basket_variant_id: int
    gloves_id: int
    gloves_variant_id: int
    supplier_id: int


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'shop.db'}")

    @event.listens_for(engine.sync_engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        # SQLite leaves foreign keys off unless asked, unlike PostgreSQL
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    await create_all(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


async def seed_store(session: AsyncSession, with_settings: bool = True) -> Store:
    if with_settings:
        session.add(StoreSettings(id=1, tax_percent=Decimal("19.00"), shipping_fixed_cent=8000))

    customer = User(id=1, name="Cliente Demo", email="cliente@correo.com", role="customer")
    admin = User(id=2, name="Admin Demo", email="admin@mitienda.com", role="admin")
    session.add_all([customer, admin])
    await session.flush()

    address = Address(
        user_id=customer.id,
        label="Casa",
        recipient="Cliente Demo",
        department="Santander",
        city="Floridablanca",
        street="Calle 123 #45-67",
        is_default=True,
    )
    category = Category(name="Deportes", slug="deportes")
    session.add_all([address, category])
    await session.flush()

    ball = Product(category_id=category.id, name="Balón de fútbol", slug="balon-futbol")
    basket = Product(
        category_id=category.id,
        name="Balón de basket",
        slug="balon-basket",
        discount_percent=Decimal("10.00"),
    )
    gloves = Product(category_id=category.id, name="Guantes de box", slug="guantes-box")
    session.add_all([ball, basket, gloves])
    await session.flush()

    ball_v = Variant(product_id=ball.id, sku="SKU-FUT-ROJO", color="Rojo", price_cent=2000000, cost_cent=1200000, stock=15)
    basket_v = Variant(product_id=basket.id, sku="SKU-BAS-STD", price_cent=3500000, cost_cent=2000000, stock=10)
    gloves_v = Variant(
        product_id=gloves.id, sku="SKU-BOX-M", color="Rojo", size="M", price_cent=5000000, cost_cent=3000000, stock=8
    )
    supplier = Supplier(name="Deportes Mayoristas SAS", tax_id="900123456")
    session.add_all([ball_v, basket_v, gloves_v, supplier])
    await session.commit()

    return Store(
        customer_id=customer.id,
        admin_id=admin.id,
        address_id=address.id,
        category_id=category.id,
        ball_id=ball.id,
        ball_variant_id=ball_v.id,
        basket_id=basket.id,
        basket_variant_id=basket_v.id,
        gloves_id=gloves.id,
        gloves_variant_id=gloves_v.id,
        supplier_id=supplier.id,
    )


@pytest_asyncio.fixture
async def store(session_factory):
    async with session_factory() as session:
        return await seed_store(session)


@pytest_asyncio.fixture
async def store_without_settings(session_factory):
    async with session_factory() as session:
        return await seed_store(session, with_settings=False)
