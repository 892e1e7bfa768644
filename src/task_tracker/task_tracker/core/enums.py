from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for authorization."""

    ADMIN = "admin"
    EMPLOYEE = "employee"


class Capability(str, Enum):
    """Named permissions derived from a role (see auth.permissions)."""

    MANAGE_TASKS = "manage_tasks"
    EDIT_ANY_TASK = "edit_any_task"
    VIEW_ALL_TASKS = "view_all_tasks"
    VIEW_ALL_TIMELOGS = "view_all_timelogs"
    VIEW_EMPLOYEES = "view_employees"
    VIEW_ORG_STATS = "view_org_stats"


class TaskPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class TaskStatus(str, Enum):
    """Task workflow states as stored in the database."""

    NOT_STARTED = "Not Started"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"


class TimeLogStatus(str, Enum):
    ACTIVE = "active"
    LOGGED_OUT = "logged_out"
