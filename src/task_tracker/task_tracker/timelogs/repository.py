from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import TimeLogEntry, TimeLogView


class TimeLogRepository(Protocol):
    def get_active(self, user_id: int, log_date: str) -> Optional[TimeLogEntry]:
        raise NotImplementedError

    def create_active(self, *, user_id: int, login_time: datetime, log_date: str) -> Optional[int]:
        """Insert an active entry.

        Returns None instead of inserting when the user already has an active
        entry for `log_date` (enforced by the store, not by a prior read).
        """

        raise NotImplementedError

    def close_entry(self, *, entry_id: int, logout_time: datetime, total_hours: float) -> bool:
        """Mark an active entry logged out; False if it was no longer active."""

        raise NotImplementedError

    def list_views(self, *, user_id: Optional[int] = None) -> Sequence[TimeLogView]:
        raise NotImplementedError
