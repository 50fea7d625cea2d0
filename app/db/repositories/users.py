# app/db/repositories/users.py
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.security import Identity
from app.db.models.users import User

_UPSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


async def ensure_user(db: AsyncSession, identity: Identity) -> None:
    """Make sure the gateway's user has a local row to own addresses and orders.

    Runs inside the caller's transaction. A row that already exists is left
    untouched, including under concurrent first requests for the same id.
    """
    insert = _UPSERTS[db.get_bind().dialect.name]
    await db.execute(
        insert(User)
        .values(id=identity.user_id, role=identity.role.value)
        .on_conflict_do_nothing(index_elements=[User.id])
    )
