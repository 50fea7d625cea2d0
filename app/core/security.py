# app/core/security.py
import enum
from dataclasses import dataclass
from typing import Optional

from app.core.errors import AuthenticationError, AuthorizationError


class Role(str, enum.Enum):
    CUSTOMER = "customer"
    ADMIN = "admin"


@dataclass(frozen=True)
class Identity:
    """Verified caller identity handed over by the authentication gateway."""

    user_id: int
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN


def parse_identity(user_id: Optional[str], role: Optional[str]) -> Identity:
    if not user_id or not role:
        raise AuthenticationError("Missing identity")
    try:
        uid = int(user_id)
    except ValueError:
        raise AuthenticationError("Invalid identity") from None
    if uid <= 0:
        raise AuthenticationError("Invalid identity")
    try:
        parsed_role = Role(role.strip().lower())
    except ValueError:
        raise AuthenticationError("Invalid identity") from None
    return Identity(user_id=uid, role=parsed_role)


def authorize(identity: Optional[Identity], required_role: Role) -> Identity:
    if identity is None:
        raise AuthenticationError("Missing identity")
    if required_role is Role.ADMIN and not identity.is_admin:
        raise AuthorizationError(
            "Admin role required",
            details={"user_id": identity.user_id, "role": identity.role.value},
        )
    return identity
