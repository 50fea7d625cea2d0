# app/domain/catalog/slugs.py
import re
import unicodedata

from sqlalchemy.ext.asyncio import AsyncSession

from app.db.repositories.catalog import slug_exists

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def slugify(value: str) -> str:
    """``"Balón de fútbol"`` -> ``"balon-de-futbol"``."""
    normalized = unicodedata.normalize("NFKD", value or "")
    ascii_only = normalized.encode("ascii", "ignore").decode("ascii")
    slug = _NON_ALNUM.sub("-", ascii_only.lower()).strip("-")
    return slug or "item"


async def unique_slug(db: AsyncSession, model, name: str, exclude_id=None) -> str:
    base = slugify(name)
    candidate = base
    suffix = 2
    while await slug_exists(db, model, candidate, exclude_id=exclude_id):
        candidate = f"{base}-{suffix}"
        suffix += 1
    return candidate
