# app/api/deps.py
from typing import Optional

from fastapi import Depends, Header

from app.core.security import Identity, Role, authorize, parse_identity


async def get_identity(
    x_user_id: Optional[str] = Header(default=None),
    x_user_role: Optional[str] = Header(default=None),
) -> Identity:
    # the gateway in front of this service has already verified the caller
    return parse_identity(x_user_id, x_user_role)


async def require_admin(identity: Identity = Depends(get_identity)) -> Identity:
    return authorize(identity, Role.ADMIN)
