from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import day_key, hours_between, now_utc, to_iso
from ..core.enums import TimeLogStatus
from .model import TimeLogEntry, TimeLogView
from .repository import TimeLogRepository

logger = logging.getLogger(__name__)


class TimeLedger:
    """Use case: per-user, per-day attendance spans driven by login/logout.

    A user has at most one active entry per day. Further logins on the same
    day reuse it, so intermediate sessions are folded into one span.
    """

    def __init__(self, timelogs: TimeLogRepository):
        self._timelogs = timelogs

    def record_login(self, user_id: int, *, now: Optional[datetime] = None) -> TimeLogEntry:
        now = now or now_utc()
        day = day_key(now)

        existing = self._timelogs.get_active(user_id, day)
        if existing:
            return existing

        entry_id = self._timelogs.create_active(user_id=user_id, login_time=now, log_date=day)
        if entry_id is None:
            # Lost a race with a concurrent login; the store kept the other one.
            logger.info("Concurrent login for user %s on %s reused the active entry", user_id, day)
            winner = self._timelogs.get_active(user_id, day)
            if winner:
                return winner
            raise RuntimeError(f"Active time log for user {user_id} on {day} vanished")

        logger.info("Opened time log %s for user %s on %s", entry_id, user_id, day)
        return TimeLogEntry(
            entry_id=entry_id,
            user_id=int(user_id),
            login_time=now,
            logout_time=None,
            log_date=day,
            total_hours=0.0,
            status=TimeLogStatus.ACTIVE,
        )

    def record_logout(self, user_id: int, *, now: Optional[datetime] = None) -> Optional[TimeLogEntry]:
        now = now or now_utc()
        day = day_key(now)

        entry = self._timelogs.get_active(user_id, day)
        if not entry:
            return None

        total_hours = hours_between(entry.login_time, now)
        if total_hours < 0:
            logger.warning(
                "Negative duration for time log %s (login %s, logout %s); clock skew?",
                entry.entry_id,
                to_iso(entry.login_time),
                to_iso(now),
            )

        if not self._timelogs.close_entry(entry_id=entry.entry_id, logout_time=now, total_hours=total_hours):
            # Closed by a concurrent logout in the meantime.
            return None

        logger.info("Closed time log %s for user %s (%.2f h)", entry.entry_id, user_id, total_hours)
        return TimeLogEntry(
            entry_id=entry.entry_id,
            user_id=entry.user_id,
            login_time=entry.login_time,
            logout_time=now,
            log_date=entry.log_date,
            total_hours=total_hours,
            status=TimeLogStatus.LOGGED_OUT,
        )

    def list_entries(self, *, user_id: Optional[int] = None) -> Sequence[TimeLogView]:
        """Entries newest day first. Callers decide whose entries may be seen."""
        return self._timelogs.list_views(user_id=user_id)
