from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Protocol, Sequence

from ..core.enums import TaskStatus
from .model import NewTask, Task, TaskView

# Column names a task update may touch.
UPDATABLE_COLUMNS = frozenset({"title", "description", "assigned_to", "due_date", "priority", "status", "task_type"})


class TaskRepository(Protocol):
    def get_by_id(self, task_id: int) -> Optional[Task]:
        raise NotImplementedError

    def get_view(self, task_id: int) -> Optional[TaskView]:
        raise NotImplementedError

    def create_task(self, *, new: NewTask, assigned_by: int, created_at: datetime) -> int:
        raise NotImplementedError

    def update_task(self, task_id: int, changes: Mapping[str, Any]) -> bool:
        """Apply `changes` (keys from UPDATABLE_COLUMNS); False if the task is gone."""

        raise NotImplementedError

    def delete_by_id(self, task_id: int) -> bool:
        raise NotImplementedError

    def list_views(self, *, assignee_id: Optional[int] = None) -> Sequence[TaskView]:
        """Tasks newest first, optionally only those assigned to `assignee_id`."""

        raise NotImplementedError

    def count(self, *, assignee_id: Optional[int] = None, statuses: Optional[Sequence[TaskStatus]] = None) -> int:
        raise NotImplementedError
