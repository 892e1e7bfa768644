from __future__ import annotations

from typing import Dict

from ..auth.permissions import AccessContext
from ..core.constants import PENDING_TASK_STATUSES
from ..core.enums import Capability, Role, TaskStatus
from ..tasks.repository import TaskRepository
from ..users.repository import UserRepository


class DashboardService:
    """Read-side counts for the dashboard, queried live on every call."""

    def __init__(self, users: UserRepository, tasks: TaskRepository):
        self._users = users
        self._tasks = tasks

    def stats(self, access: AccessContext) -> Dict[str, int]:
        if access.can(Capability.VIEW_ORG_STATS):
            return {
                "totalUsers": self._users.count_by_role(Role.EMPLOYEE),
                "totalTasks": self._tasks.count(),
                "completedTasks": self._tasks.count(statuses=[TaskStatus.COMPLETED]),
                "pendingTasks": self._tasks.count(statuses=list(PENDING_TASK_STATUSES)),
            }

        mine = access.user_id
        return {
            "myTasks": self._tasks.count(assignee_id=mine),
            "completedTasks": self._tasks.count(assignee_id=mine, statuses=[TaskStatus.COMPLETED]),
            "pendingTasks": self._tasks.count(assignee_id=mine, statuses=list(PENDING_TASK_STATUSES)),
        }
