from __future__ import annotations

from typing import Optional

from ..common.datetime_utils import to_iso
from .model import User, UserRef


def session_user_json(user: User) -> dict:
    """The `user` object returned next to a token."""
    return {"id": user.user_id, "name": user.name, "email": user.email, "role": user.role.value}


def public_user_json(user: User) -> dict:
    """A user row without its password hash."""
    return {
        "_id": user.user_id,
        "name": user.name,
        "email": user.email,
        "role": user.role.value,
        "createdAt": to_iso(user.created_at),
    }


def user_ref_json(ref: Optional[UserRef]) -> Optional[dict]:
    if ref is None:
        return None
    return {"_id": ref.user_id, "name": ref.name, "email": ref.email}
