from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Mapping, Sequence

from ..auth.permissions import AccessContext
from ..common.datetime_utils import now_utc
from ..common.validators import parse_enum, require_datetime, require_int, require_non_empty
from ..core.constants import DESCRIPTION_MAX_LENGTH, TASK_TYPE_MAX_LENGTH, TITLE_MAX_LENGTH
from ..core.enums import Capability, TaskPriority, TaskStatus
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.repository import UserRepository
from .model import NewTask, TaskView
from .repository import TaskRepository

logger = logging.getLogger(__name__)

# JSON field -> column. `assignedBy` and `createdAt` are server-owned.
PATCHABLE_FIELDS: Dict[str, str] = {
    "title": "title",
    "description": "description",
    "assignedTo": "assigned_to",
    "dueDate": "due_date",
    "priority": "priority",
    "status": "status",
    "taskType": "task_type",
}

EMPLOYEE_STATUS_ONLY_FIELDS = frozenset({"status"})

TEXT_LIMITS: Dict[str, int] = {
    "title": TITLE_MAX_LENGTH,
    "description": DESCRIPTION_MAX_LENGTH,
    "taskType": TASK_TYPE_MAX_LENGTH,
}


class TaskService:
    """Use case: task registry (create/list/update/delete) scoped by capability."""

    def __init__(
        self,
        tasks: TaskRepository,
        users: UserRepository,
        *,
        employee_status_only: bool = False,
        clock: Callable[[], datetime] = now_utc,
    ):
        self._tasks = tasks
        self._users = users
        self._employee_status_only = bool(employee_status_only)
        self._clock = clock

    def _require_assignee(self, value: Any) -> int:
        user_id = require_int(value, "assignedTo")
        if not self._users.get_by_id(user_id):
            raise ValidationError("assignedTo does not reference an existing user")
        return user_id

    def _parse_field(self, field: str, value: Any) -> Any:
        if field in TEXT_LIMITS:
            return require_non_empty(value, field, TEXT_LIMITS[field])
        if field == "assignedTo":
            return self._require_assignee(value)
        if field == "dueDate":
            return require_datetime(value, field)
        if field == "priority":
            return parse_enum(TaskPriority, value, field)
        if field == "status":
            return parse_enum(TaskStatus, value, field)
        raise ValidationError(f"Unknown field: {field}")

    def create(self, access: AccessContext, payload: Mapping[str, Any]) -> TaskView:
        access.require(Capability.MANAGE_TASKS, "Admin access required")

        new = NewTask(
            title=self._parse_field("title", payload.get("title")),
            description=self._parse_field("description", payload.get("description")),
            assigned_to=self._require_assignee(payload.get("assignedTo")),
            due_date=require_datetime(payload.get("dueDate"), "dueDate"),
            priority=parse_enum(TaskPriority, payload.get("priority"), "priority", default=TaskPriority.MEDIUM),
            status=parse_enum(TaskStatus, payload.get("status"), "status", default=TaskStatus.NOT_STARTED),
            task_type=self._parse_field("taskType", payload.get("taskType")),
        )

        task_id = self._tasks.create_task(new=new, assigned_by=access.user_id, created_at=self._clock())
        logger.info("User %s created task %s for user %s", access.user_id, task_id, new.assigned_to)
        return self._view_or_404(task_id)

    def list(self, access: AccessContext) -> Sequence[TaskView]:
        if access.can(Capability.VIEW_ALL_TASKS):
            return self._tasks.list_views()
        return self._tasks.list_views(assignee_id=access.user_id)

    def update(self, access: AccessContext, task_id: int, patch: Mapping[str, Any]) -> TaskView:
        task = self._tasks.get_by_id(task_id)
        if not task:
            raise NotFoundError("Task not found")

        may_edit_any = access.can(Capability.EDIT_ANY_TASK)
        if not may_edit_any and task.assigned_to != access.user_id:
            raise AuthorizationError("Access denied")

        requested = [f for f in patch if f in PATCHABLE_FIELDS]
        if self._employee_status_only and not may_edit_any:
            blocked = sorted(set(requested) - EMPLOYEE_STATUS_ONLY_FIELDS)
            if blocked:
                raise AuthorizationError(f"Employees may only change: status (got {', '.join(blocked)})")

        changes = {PATCHABLE_FIELDS[f]: self._parse_field(f, patch[f]) for f in requested}
        if changes and not self._tasks.update_task(task_id, changes):
            raise NotFoundError("Task not found")

        if changes:
            logger.info("User %s updated task %s (%s)", access.user_id, task_id, ", ".join(sorted(changes)))
        return self._view_or_404(task_id)

    def delete(self, access: AccessContext, task_id: int) -> None:
        access.require(Capability.MANAGE_TASKS, "Admin access required")
        if not self._tasks.delete_by_id(task_id):
            raise NotFoundError("Task not found")
        logger.info("User %s deleted task %s", access.user_id, task_id)

    def _view_or_404(self, task_id: int) -> TaskView:
        view = self._tasks.get_view(task_id)
        if not view:
            raise NotFoundError("Task not found")
        return view

