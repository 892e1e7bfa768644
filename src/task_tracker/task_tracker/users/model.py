from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Plain data object (no DB access code). `password_hash` never leaves the
    service layer.
    """

    user_id: int
    name: str
    email: str
    password_hash: str
    role: Role
    created_at: datetime


@dataclass(frozen=True)
class UserRef:
    """The name/email projection embedded in tasks and time logs."""

    user_id: int
    name: str
    email: str
