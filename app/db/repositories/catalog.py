# app/db/repositories/catalog.py
from typing import Dict, Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import select

from app.db.models.catalog import Product, Variant


async def get_variants_for_update(
    db: AsyncSession,
    variant_ids: Iterable[int],
) -> Dict[int, Variant]:
    """Load variants (with their product) in one query and lock the rows.

    Rows are locked in id order so concurrent callers never wait on each
    other in opposite directions. Engines without row locks ignore the
    ``FOR UPDATE`` clause.
    """
    ids = sorted(set(variant_ids))
    if not ids:
        return {}
    result = await db.execute(
        select(Variant)
        .options(selectinload(Variant.product))
        .where(Variant.id.in_(ids))
        .order_by(Variant.id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    return {v.id: v for v in result.scalars().all()}


async def get_variant_for_update(
    db: AsyncSession,
    variant_id: int,
) -> Optional[Variant]:
    # populate_existing so a variant touched earlier in the same unit of work
    # is refreshed from its current row
    result = await db.execute(
        select(Variant)
        .where(Variant.id == variant_id)
        .with_for_update()
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def get_product_by_id(
    db: AsyncSession,
    product_id: int,
) -> Optional[Product]:
    result = await db.execute(
        select(Product)
        .options(selectinload(Product.variants), selectinload(Product.images))
        .where(Product.id == product_id)
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def slug_exists(
    db: AsyncSession,
    model,
    slug: str,
    exclude_id: Optional[int] = None,
) -> bool:
    stmt = select(model.id).where(model.slug == slug)
    if exclude_id is not None:
        stmt = stmt.where(model.id != exclude_id)
    result = await db.execute(stmt.limit(1))
    return result.first() is not None


async def list_all_variants(db: AsyncSession) -> List[Variant]:
    result = await db.execute(
        select(Variant).options(selectinload(Variant.product)).order_by(Variant.product_id, Variant.id)
    )
    return list(result.scalars().all())
