from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Sequence

from ..core.enums import TaskPriority, TaskStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from ..users.model import UserRef
from .model import NewTask, Task, TaskView
from .repository import UPDATABLE_COLUMNS, TaskRepository

_VIEW_SELECT = """
    SELECT t.task_id, t.title, t.description, t.assigned_to, t.assigned_by, t.due_date,
           t.priority, t.status, t.task_type, t.created_at,
           ua.name AS assignee_name, ua.email AS assignee_email,
           ub.name AS assigner_name, ub.email AS assigner_email
    FROM tasks t
    LEFT JOIN users ua ON ua.user_id = t.assigned_to
    LEFT JOIN users ub ON ub.user_id = t.assigned_by
"""


def _to_task(row: Dict[str, Any]) -> Task:
    return Task(
        task_id=int(row["task_id"]),
        title=row["title"],
        description=row["description"],
        assigned_to=int(row["assigned_to"]),
        assigned_by=int(row["assigned_by"]),
        due_date=row["due_date"],
        priority=TaskPriority(row["priority"]),
        status=TaskStatus(row["status"]),
        task_type=row["task_type"],
        created_at=row["created_at"],
    )


def _ref(user_id: int, name: Optional[str], email: Optional[str]) -> Optional[UserRef]:
    if name is None:
        return None
    return UserRef(user_id=int(user_id), name=name, email=email or "")


def _to_view(row: Dict[str, Any]) -> TaskView:
    task = _to_task(row)
    return TaskView(
        task=task,
        assignee=_ref(task.assigned_to, row.get("assignee_name"), row.get("assignee_email")),
        assigner=_ref(task.assigned_by, row.get("assigner_name"), row.get("assigner_email")),
    )


class MySQLTaskRepository(TaskRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, task_id: int) -> Optional[Task]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT task_id, title, description, assigned_to, assigned_by, due_date,
                       priority, status, task_type, created_at
                FROM tasks
                WHERE task_id=%s
                """,
                (int(task_id),),
            )
            row = fetchone(cur)
            return _to_task(row) if row else None

    def get_view(self, task_id: int) -> Optional[TaskView]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_VIEW_SELECT + " WHERE t.task_id=%s", (int(task_id),))
            row = fetchone(cur)
            return _to_view(row) if row else None

    def create_task(self, *, new: NewTask, assigned_by: int, created_at: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO tasks(title, description, assigned_to, assigned_by, due_date,
                                  priority, status, task_type, created_at)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    new.title,
                    new.description,
                    int(new.assigned_to),
                    int(assigned_by),
                    new.due_date,
                    new.priority.value,
                    new.status.value,
                    new.task_type,
                    created_at,
                ),
            )
            return int(cur.lastrowid)

    def update_task(self, task_id: int, changes: Mapping[str, Any]) -> bool:
        unknown = set(changes) - UPDATABLE_COLUMNS
        if unknown:
            raise ValueError(f"Not updatable: {sorted(unknown)}")
        if not changes:
            return self.get_by_id(task_id) is not None

        columns = sorted(changes)
        assignments = ", ".join(f"{col}=%s" for col in columns)
        params = [changes[col].value if isinstance(changes[col], Enum) else changes[col] for col in columns]

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"UPDATE tasks SET {assignments} WHERE task_id=%s", (*params, int(task_id)))
            if cur.rowcount > 0:
                return True
            # rowcount is 0 when the values did not change; tell that apart from a missing row.
            cur.execute("SELECT 1 AS found FROM tasks WHERE task_id=%s", (int(task_id),))
            return fetchone(cur) is not None

    def delete_by_id(self, task_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM tasks WHERE task_id=%s", (int(task_id),))
            return cur.rowcount > 0

    def list_views(self, *, assignee_id: Optional[int] = None) -> Sequence[TaskView]:
        where = ""
        params: tuple = ()
        if assignee_id is not None:
            where = " WHERE t.assigned_to=%s"
            params = (int(assignee_id),)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_VIEW_SELECT + where + " ORDER BY t.created_at DESC, t.task_id DESC", params)
            return [_to_view(r) for r in fetchall(cur)]

    def count(self, *, assignee_id: Optional[int] = None, statuses: Optional[Sequence[TaskStatus]] = None) -> int:
        clauses: list[str] = []
        params: list[object] = []

        if assignee_id is not None:
            clauses.append("assigned_to=%s")
            params.append(int(assignee_id))
        if statuses is not None:
            if not statuses:
                return 0
            placeholders, values = in_clause(s.value for s in statuses)
            clauses.append(f"status IN ({placeholders})")
            params.extend(values)

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS n FROM tasks {where}", tuple(params))
            row = fetchone(cur)
            return int(row["n"]) if row else 0
