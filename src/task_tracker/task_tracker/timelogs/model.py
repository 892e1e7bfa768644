from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import TimeLogStatus
from ..users.model import UserRef


@dataclass(frozen=True)
class TimeLogEntry:
    """Domain entity: one attendance span of a user on a calendar day."""

    entry_id: int
    user_id: int
    login_time: datetime
    logout_time: Optional[datetime]
    log_date: str
    total_hours: float
    status: TimeLogStatus


@dataclass(frozen=True)
class TimeLogView:
    """Read-model for listings: the entry plus its user's name/email."""

    entry: TimeLogEntry
    user: Optional[UserRef]
