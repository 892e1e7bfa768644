from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from mysql.connector.errors import IntegrityError

from ..core.enums import TimeLogStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from ..users.model import UserRef
from .model import TimeLogEntry, TimeLogView
from .repository import TimeLogRepository


def _to_entry(row: Dict[str, Any]) -> TimeLogEntry:
    return TimeLogEntry(
        entry_id=int(row["log_id"]),
        user_id=int(row["user_id"]),
        login_time=row["login_time"],
        logout_time=row.get("logout_time"),
        log_date=str(row["log_date"]),
        total_hours=float(row.get("total_hours") or 0),
        status=TimeLogStatus(row["status"]),
    )


class MySQLTimeLogRepository(TimeLogRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_active(self, user_id: int, log_date: str) -> Optional[TimeLogEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT log_id, user_id, login_time, logout_time, log_date, total_hours, status
                FROM time_logs
                WHERE user_id=%s AND log_date=%s AND status=%s
                """,
                (int(user_id), log_date, TimeLogStatus.ACTIVE.value),
            )
            row = fetchone(cur)
            return _to_entry(row) if row else None

    def create_active(self, *, user_id: int, login_time: datetime, log_date: str) -> Optional[int]:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO time_logs(user_id, login_time, log_date, total_hours, status)
                    VALUES(%s,%s,%s,0,%s)
                    """,
                    (int(user_id), login_time, log_date, TimeLogStatus.ACTIVE.value),
                )
                return int(cur.lastrowid)
        except IntegrityError as exc:
            # uq_time_logs_one_active: another request opened the entry first.
            if is_duplicate_key(exc):
                return None
            raise

    def close_entry(self, *, entry_id: int, logout_time: datetime, total_hours: float) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE time_logs
                SET logout_time=%s, total_hours=%s, status=%s
                WHERE log_id=%s AND status=%s
                """,
                (
                    logout_time,
                    float(total_hours),
                    TimeLogStatus.LOGGED_OUT.value,
                    int(entry_id),
                    TimeLogStatus.ACTIVE.value,
                ),
            )
            return cur.rowcount > 0

    def list_views(self, *, user_id: Optional[int] = None) -> Sequence[TimeLogView]:
        where = ""
        params: tuple = ()
        if user_id is not None:
            where = "WHERE tl.user_id=%s"
            params = (int(user_id),)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT tl.log_id, tl.user_id, tl.login_time, tl.logout_time, tl.log_date,
                       tl.total_hours, tl.status,
                       u.name AS user_name, u.email AS user_email
                FROM time_logs tl
                LEFT JOIN users u ON u.user_id = tl.user_id
                {where}
                ORDER BY tl.log_date DESC, tl.login_time DESC
                """,
                params,
            )
            out: list[TimeLogView] = []
            for r in fetchall(cur):
                user = None
                if r.get("user_name") is not None:
                    user = UserRef(user_id=int(r["user_id"]), name=r["user_name"], email=r["user_email"])
                out.append(TimeLogView(entry=_to_entry(r), user=user))
            return out
