# anthropometric/authz.py
from __future__ import annotations

from enum import Enum
from typing import Callable

from fastapi import Depends

from anthropometric.auth import get_current_user
from anthropometric.errors import Forbidden


class Role(str, Enum):
    PROFESSIONAL = "professional"
    ATHLETE = "athlete"


def role_of(user: dict) -> Role:
    try:
        return Role(user.get("role"))
    except ValueError:
        raise Forbidden("Unknown role")


def require_role(*allowed_roles: Role, message: str = "Insufficient role") -> Callable:
    """
    Usage:
        @router.post("", dependencies=[Depends(require_role(Role.PROFESSIONAL))])
        async def professional_only(...):
            ...
    """
    allowed = set(allowed_roles)

    def _dep(user: dict = Depends(get_current_user)) -> dict:
        if role_of(user) not in allowed:
            raise Forbidden(message)
        return user

    return _dep


def ensure_owner(measurement: dict, user: dict, action: str) -> None:
    """Only the user stored as ``ownerId`` may read or change a measurement."""
    if str(measurement.get("ownerId")) != str(user["_id"]):
        raise Forbidden(f"Not authorized to {action} this measurement")


def athlete_scope(user: dict) -> dict:
    """Query selecting the athlete records ``user`` may list."""
    role = role_of(user)
    if role is Role.PROFESSIONAL:
        return {"role": Role.ATHLETE.value}
    if role is Role.ATHLETE:
        return {"_id": user["_id"], "role": Role.ATHLETE.value}
    raise Forbidden("Unknown role")
