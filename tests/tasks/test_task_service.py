from __future__ import annotations

from datetime import datetime

import pytest

from src.task_tracker.task_tracker.core.enums import TaskPriority, TaskStatus
from src.task_tracker.task_tracker.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from src.task_tracker.task_tracker.tasks.service import TaskService


@pytest.fixture
def svc(store, fixed_now) -> TaskService:
    return TaskService(store.tasks, store.users, clock=lambda: fixed_now)


def _payload(assignee_id: int, **overrides) -> dict:
    payload = {
        "title": "Prepare slides",
        "description": "For Monday standup",
        "assignedTo": assignee_id,
        "dueDate": "2026-03-10T17:00:00.000Z",
        "taskType": "Presentation",
    }
    payload.update(overrides)
    return payload


def test_admin_creates_task_with_defaults_and_own_id_as_assigner(svc, admin, employee, as_access, fixed_now):
    view = svc.create(as_access(admin), _payload(employee.user_id, assignedBy=employee.user_id))

    assert view.task.assigned_by == admin.user_id
    assert view.task.assigned_to == employee.user_id
    assert view.task.priority == TaskPriority.MEDIUM
    assert view.task.status == TaskStatus.NOT_STARTED
    assert view.task.due_date == datetime(2026, 3, 10, 17, 0)
    assert view.task.created_at == fixed_now
    assert view.assignee.email == "eve@example.com"
    assert view.assigner.email == "ada@example.com"


def test_employee_cannot_create_task(svc, store, employee, as_access):
    with pytest.raises(AuthorizationError, match="Admin access required"):
        svc.create(as_access(employee), _payload(employee.user_id))
    assert store.tasks.by_id == {}


@pytest.mark.parametrize(
    "overrides",
    [
        {"title": ""},
        {"description": None},
        {"taskType": "   "},
        {"dueDate": "next tuesday"},
        {"dueDate": None},
        {"priority": "Urgent"},
        {"status": "Done"},
        {"assignedTo": "abc"},
        {"assignedTo": 999},
        {"assignedTo": 2.9},
        {"title": "t" * 201},
        {"taskType": "k" * 101},
        {"description": "d" * 16001},
    ],
)
def test_create_rejects_invalid_payload(svc, admin, employee, as_access, overrides):
    with pytest.raises(ValidationError):
        svc.create(as_access(admin), _payload(employee.user_id, **overrides))


def test_list_scopes_by_role(svc, admin, employee, other_employee, as_access, seed_task):
    first = seed_task(employee, title="First")
    seed_task(other_employee, title="Theirs")
    latest = seed_task(employee, title="Latest")

    mine = svc.list(as_access(employee))
    everything = svc.list(as_access(admin))

    assert [v.task.task_id for v in mine] == [latest.task_id, first.task_id]
    assert len(everything) == 3


def test_employee_updates_own_task_status(svc, employee, as_access, seed_task):
    task = seed_task(employee)

    view = svc.update(as_access(employee), task.task_id, {"status": "In Progress"})

    assert view.task.status == TaskStatus.IN_PROGRESS
    assert view.task.title == task.title


def test_employee_cannot_update_someone_elses_task(svc, store, employee, other_employee, as_access, seed_task):
    task = seed_task(other_employee)

    with pytest.raises(AuthorizationError, match="Access denied"):
        svc.update(as_access(employee), task.task_id, {"status": "Completed"})
    assert store.tasks.get_by_id(task.task_id).status == TaskStatus.NOT_STARTED


def test_update_missing_task_is_not_found_before_ownership(svc, employee, as_access):
    with pytest.raises(NotFoundError):
        svc.update(as_access(employee), 4242, {"status": "Completed"})


def test_employee_may_change_other_fields_by_default(svc, employee, as_access, seed_task):
    task = seed_task(employee)

    view = svc.update(as_access(employee), task.task_id, {"title": "Renamed", "priority": "High"})

    assert view.task.title == "Renamed"
    assert view.task.priority == TaskPriority.HIGH


def test_status_only_mode_blocks_employee_field_edits(store, employee, admin, as_access, seed_task):
    svc = TaskService(store.tasks, store.users, employee_status_only=True)
    task = seed_task(employee)

    with pytest.raises(AuthorizationError):
        svc.update(as_access(employee), task.task_id, {"title": "Renamed"})

    assert svc.update(as_access(employee), task.task_id, {"status": "Completed"}).task.status == TaskStatus.COMPLETED
    assert svc.update(as_access(admin), task.task_id, {"title": "Renamed"}).task.title == "Renamed"


def test_update_ignores_server_owned_and_unknown_fields(svc, admin, employee, other_employee, as_access, seed_task):
    task = seed_task(employee)

    view = svc.update(
        as_access(admin),
        task.task_id,
        {"assignedBy": other_employee.user_id, "createdAt": "2020-01-01", "colour": "red"},
    )

    assert view.task == task


def test_admin_reassigns_task(svc, admin, employee, other_employee, as_access, seed_task):
    task = seed_task(employee)

    view = svc.update(as_access(admin), task.task_id, {"assignedTo": other_employee.user_id})

    assert view.task.assigned_to == other_employee.user_id
    assert view.assignee.email == "oscar@example.com"


def test_update_rejects_invalid_values(svc, admin, employee, as_access, seed_task):
    task = seed_task(employee)

    with pytest.raises(ValidationError):
        svc.update(as_access(admin), task.task_id, {"status": "Done"})


def test_delete_task(svc, store, admin, employee, as_access, seed_task):
    task = seed_task(employee)

    svc.delete(as_access(admin), task.task_id)

    assert store.tasks.get_by_id(task.task_id) is None
    with pytest.raises(NotFoundError):
        svc.delete(as_access(admin), task.task_id)


def test_employee_cannot_delete_even_own_task(svc, store, employee, as_access, seed_task):
    task = seed_task(employee)

    with pytest.raises(AuthorizationError):
        svc.delete(as_access(employee), task.task_id)
    assert store.tasks.get_by_id(task.task_id) is not None


@pytest.mark.parametrize("patch", [{"title": "t" * 201}, {"taskType": "k" * 101}, {"assignedTo": 1.5}])
def test_update_rejects_over_long_text_and_fractional_ids(svc, store, admin, employee, as_access, seed_task, patch):
    task = seed_task(employee)

    with pytest.raises(ValidationError):
        svc.update(as_access(admin), task.task_id, patch)
    assert store.tasks.get_by_id(task.task_id) == task


def test_create_accepts_title_at_column_width(svc, admin, employee, as_access):
    view = svc.create(as_access(admin), _payload(employee.user_id, title="t" * 200, assignedTo=float(employee.user_id)))

    assert len(view.task.title) == 200
    assert view.task.assigned_to == employee.user_id
