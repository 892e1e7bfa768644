from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import TaskPriority, TaskStatus
from ..users.model import UserRef


@dataclass(frozen=True)
class Task:
    """Domain entity: a unit of work assigned by an admin to an employee."""

    task_id: int
    title: str
    description: str
    assigned_to: int
    assigned_by: int
    due_date: datetime
    priority: TaskPriority
    status: TaskStatus
    task_type: str
    created_at: datetime


@dataclass(frozen=True)
class NewTask:
    title: str
    description: str
    assigned_to: int
    due_date: datetime
    priority: TaskPriority
    status: TaskStatus
    task_type: str


@dataclass(frozen=True)
class TaskView:
    """Read-model: the task with assignee/assigner name and email.

    References are None when the user row no longer exists.
    """

    task: Task
    assignee: Optional[UserRef]
    assigner: Optional[UserRef]
