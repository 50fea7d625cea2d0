# app/domain/catalog/service.py
import logging
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import or_, select

from app.core.errors import ConflictError, NotFoundError, ValidationError
from app.db.base import atomic
from app.db.models.catalog import Category, Product, ProductImage, Variant
from app.db.repositories.catalog import get_product_by_id, list_all_variants
from .schemas import (
    CategoryCreate,
    ImageCreate,
    InventoryRow,
    ProductCreate,
    ProductUpdate,
    VariantCreate,
    VariantUpdate,
)
from .slugs import unique_slug

logger = logging.getLogger(__name__)

SLUG_ATTEMPTS = 5


async def _insert_with_slug(db: AsyncSession, model, name: str, build):
    """Insert ``build(slug)`` in its own transaction.

    The slug is checked before the insert, so a concurrent create of the same
    name can take it in between. The unique index then rejects the row and the
    insert is retried with a fresh slug.
    """
    for attempt in range(1, SLUG_ATTEMPTS + 1):
        try:
            async with atomic(db):
                row = build(await unique_slug(db, model, name))
                db.add(row)
                await db.flush()
            return row
        except IntegrityError as exc:
            if attempt == SLUG_ATTEMPTS:
                raise ConflictError(
                    "Could not allocate a unique slug",
                    code="slug_conflict",
                    details={"name": name},
                ) from exc
            logger.info("Slug for %r taken concurrently, retrying (attempt %s)", name, attempt)


async def create_category(db: AsyncSession, data: CategoryCreate) -> Category:
    return await _insert_with_slug(
        db, Category, data.name, lambda slug: Category(name=data.name.strip(), slug=slug)
    )


async def list_categories(db: AsyncSession) -> List[Category]:
    result = await db.execute(select(Category).order_by(Category.name))
    return list(result.scalars().all())


async def _require_category(db: AsyncSession, category_id: int) -> Category:
    category = await db.get(Category, category_id)
    if category is None:
        raise ConflictError(
            f"Category {category_id} does not exist",
            code="unknown_category",
            details={"category_id": category_id},
        )
    return category


async def _require_product(db: AsyncSession, product_id: int) -> Product:
    product = await get_product_by_id(db, product_id)
    if product is None:
        raise NotFoundError("Product not found", details={"product_id": product_id})
    return product


async def create_product(db: AsyncSession, data: ProductCreate) -> Product:
    """Create a product; a slug already taken gets a numeric suffix."""
    await _require_category(db, data.category_id)
    product = await _insert_with_slug(
        db,
        Product,
        data.name,
        lambda slug: Product(
            category_id=data.category_id,
            name=data.name.strip(),
            slug=slug,
            short_description=data.short_description,
            discount_percent=data.discount_percent,
            active=data.active,
        ),
    )
    product_id = product.id

    logger.info("Product %s created with slug %s", product_id, product.slug)
    return await _require_product(db, product_id)


async def update_product(db: AsyncSession, product_id: int, data: ProductUpdate) -> Product:
    changes = data.model_dump(exclude_unset=True)
    async with atomic(db):
        product = await _require_product(db, product_id)
        if "category_id" in changes and changes["category_id"] is not None:
            await _require_category(db, changes["category_id"])
            product.category_id = changes["category_id"]
        if changes.get("name"):
            product.name = changes["name"].strip()
            product.slug = await unique_slug(db, Product, product.name, exclude_id=product.id)
        if "short_description" in changes:
            product.short_description = changes["short_description"]
        if "discount_percent" in changes:
            product.discount_percent = changes["discount_percent"]

    return await _require_product(db, product_id)


async def set_product_active(db: AsyncSession, product_id: int, active: bool) -> Product:
    async with atomic(db):
        product = await _require_product(db, product_id)
        product.active = active
    return await _require_product(db, product_id)


async def list_products(
    db: AsyncSession,
    search: Optional[str] = None,
    category: Optional[str] = None,
    min_cent: Optional[int] = None,
    max_cent: Optional[int] = None,
) -> List[Product]:
    stmt = (
        select(Product)
        .options(selectinload(Product.variants), selectinload(Product.images))
        .where(Product.active.is_(True))
        .order_by(Product.created_at.desc(), Product.id.desc())
    )
    if category:
        stmt = stmt.join(Category, Category.id == Product.category_id).where(Category.slug == category)
    if search:
        pattern = f"%{search.strip().lower()}%"
        stmt = stmt.where(
            or_(
                Product.name.ilike(pattern),
                Product.short_description.ilike(pattern),
            )
        )
    if min_cent is not None or max_cent is not None:
        price_filter = Variant.product_id == Product.id
        if min_cent is not None:
            price_filter = price_filter & (Variant.price_cent >= min_cent)
        if max_cent is not None:
            price_filter = price_filter & (Variant.price_cent <= max_cent)
        stmt = stmt.where(select(Variant.id).where(price_filter).exists())

    result = await db.execute(stmt)
    return list(result.scalars().all())


async def create_variant(db: AsyncSession, product_id: int, data: VariantCreate) -> Variant:
    if data.price_cent <= 0:
        raise ValidationError("price_cent must be positive", details={"product_id": product_id})
    if data.stock < 0 or data.cost_cent < 0:
        raise ValidationError("stock and cost_cent must not be negative", details={"product_id": product_id})

    variant = Variant(product_id=product_id, **data.model_dump())
    try:
        async with atomic(db):
            if await db.get(Product, product_id) is None:
                raise NotFoundError("Product not found", details={"product_id": product_id})
            db.add(variant)
    except IntegrityError as exc:
        raise ConflictError("SKU already in use", code="duplicate_sku", details={"sku": data.sku}) from exc
    return variant


async def update_variant(db: AsyncSession, variant_id: int, data: VariantUpdate) -> Variant:
    changes = data.model_dump(exclude_unset=True)
    if changes.get("price_cent") is not None and changes["price_cent"] <= 0:
        raise ValidationError("price_cent must be positive", details={"variant_id": variant_id})
    if changes.get("stock") is not None and changes["stock"] < 0:
        raise ValidationError("stock must not be negative", details={"variant_id": variant_id})

    try:
        async with atomic(db):
            variant = await db.get(Variant, variant_id, with_for_update=True)
            if variant is None:
                raise NotFoundError("Variant not found", details={"variant_id": variant_id})
            for field, value in changes.items():
                if value is None and field in ("price_cent", "stock", "cost_cent", "active"):
                    continue
                setattr(variant, field, value)
    except IntegrityError as exc:
        raise ConflictError("SKU already in use", code="duplicate_sku", details={"sku": changes.get("sku")}) from exc
    return variant


async def add_product_image(db: AsyncSession, product_id: int, data: ImageCreate) -> ProductImage:
    async with atomic(db):
        if await db.get(Product, product_id) is None:
            raise NotFoundError("Product not found", details={"product_id": product_id})
        image = ProductImage(product_id=product_id, url=data.url, sort_order=data.sort_order)
        db.add(image)
    return image


def margin_percent(profit_cent: int, price_cent: int) -> float:
    if not price_cent:
        return 0.0
    pct = Decimal(profit_cent) * Decimal(100) / Decimal(price_cent)
    return float(pct.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


async def inventory_report(db: AsyncSession) -> List[InventoryRow]:
    rows = []
    for v in await list_all_variants(db):
        stock = v.stock or 0
        cost = v.cost_cent or 0
        price = v.price_cent or 0
        profit = price - cost
        rows.append(
            InventoryRow(
                variant_id=v.id,
                product_id=v.product_id,
                product=v.product.name,
                sku=v.sku,
                color=v.color,
                size=v.size,
                stock=stock,
                cost_cent=cost,
                price_cent=price,
                profit_cent=profit,
                margin_pct=margin_percent(profit, price),
                stock_value_cost_cent=stock * cost,
                stock_value_sale_cent=stock * price,
                active=bool(v.active),
            )
        )
    return rows
