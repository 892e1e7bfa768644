from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from types import SimpleNamespace
from typing import Optional

import pytest

from src.task_tracker.task_tracker.auth.passwords import PasswordHasher
from src.task_tracker.task_tracker.auth.permissions import AccessContext
from src.task_tracker.task_tracker.container import AuthConfig, assemble_container
from src.task_tracker.task_tracker.core.enums import Role, TaskStatus, TimeLogStatus
from src.task_tracker.task_tracker.core.exceptions import ConflictError
from src.task_tracker.task_tracker.tasks.model import Task, TaskView
from src.task_tracker.task_tracker.timelogs.model import TimeLogEntry, TimeLogView
from src.task_tracker.task_tracker.users.model import User, UserRef

TEST_ROUNDS = 4
TEST_JWT_SECRET = "test-jwt-secret-0123456789abcdefghij"


class InMemoryUsers:
    def __init__(self):
        self.by_id: dict[int, User] = {}
        self._id = 0

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.by_id.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self.by_id.values() if u.email == email), None)

    def create_user(self, *, name, email, password_hash, role, created_at) -> int:
        if self.get_by_email(email):
            raise ConflictError("User already exists")
        self._id += 1
        self.by_id[self._id] = User(
            user_id=self._id,
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            created_at=created_at,
        )
        return self._id

    def list_by_role(self, role: Role):
        items = [u for u in self.by_id.values() if u.role == role]
        return sorted(items, key=lambda u: (u.created_at, u.user_id), reverse=True)

    def count_by_role(self, role: Role) -> int:
        return len(self.list_by_role(role))

    def ref(self, user_id: int) -> Optional[UserRef]:
        u = self.by_id.get(user_id)
        return UserRef(user_id=u.user_id, name=u.name, email=u.email) if u else None


class InMemoryTasks:
    def __init__(self, users: InMemoryUsers):
        self._users = users
        self.by_id: dict[int, Task] = {}
        self._id = 0

    def get_by_id(self, task_id: int) -> Optional[Task]:
        return self.by_id.get(int(task_id))

    def get_view(self, task_id: int) -> Optional[TaskView]:
        task = self.by_id.get(int(task_id))
        return self._view(task) if task else None

    def _view(self, task: Task) -> TaskView:
        return TaskView(task=task, assignee=self._users.ref(task.assigned_to), assigner=self._users.ref(task.assigned_by))

    def create_task(self, *, new, assigned_by: int, created_at: datetime) -> int:
        self._id += 1
        self.by_id[self._id] = Task(
            task_id=self._id,
            title=new.title,
            description=new.description,
            assigned_to=new.assigned_to,
            assigned_by=assigned_by,
            due_date=new.due_date,
            priority=new.priority,
            status=new.status,
            task_type=new.task_type,
            created_at=created_at,
        )
        return self._id

    def update_task(self, task_id: int, changes) -> bool:
        task = self.by_id.get(int(task_id))
        if not task:
            return False
        self.by_id[task.task_id] = replace(task, **changes)
        return True

    def delete_by_id(self, task_id: int) -> bool:
        return self.by_id.pop(int(task_id), None) is not None

    def list_views(self, *, assignee_id=None):
        items = [t for t in self.by_id.values() if assignee_id is None or t.assigned_to == assignee_id]
        items.sort(key=lambda t: (t.created_at, t.task_id), reverse=True)
        return [self._view(t) for t in items]

    def count(self, *, assignee_id=None, statuses=None) -> int:
        return sum(
            1
            for t in self.by_id.values()
            if (assignee_id is None or t.assigned_to == assignee_id) and (statuses is None or t.status in statuses)
        )


class InMemoryTimeLogs:
    """Mirrors the store's unique (user, day, active) index."""

    def __init__(self, users: InMemoryUsers):
        self._users = users
        self.by_id: dict[int, TimeLogEntry] = {}
        self._id = 0

    def get_active(self, user_id: int, log_date: str) -> Optional[TimeLogEntry]:
        return next(
            (
                e
                for e in self.by_id.values()
                if e.user_id == user_id and e.log_date == log_date and e.status == TimeLogStatus.ACTIVE
            ),
            None,
        )

    def create_active(self, *, user_id: int, login_time: datetime, log_date: str) -> Optional[int]:
        if self.get_active(user_id, log_date):
            return None
        self._id += 1
        self.by_id[self._id] = TimeLogEntry(
            entry_id=self._id,
            user_id=user_id,
            login_time=login_time,
            logout_time=None,
            log_date=log_date,
            total_hours=0.0,
            status=TimeLogStatus.ACTIVE,
        )
        return self._id

    def close_entry(self, *, entry_id: int, logout_time: datetime, total_hours: float) -> bool:
        entry = self.by_id.get(entry_id)
        if not entry or entry.status != TimeLogStatus.ACTIVE:
            return False
        self.by_id[entry_id] = replace(
            entry, logout_time=logout_time, total_hours=total_hours, status=TimeLogStatus.LOGGED_OUT
        )
        return True

    def list_views(self, *, user_id=None):
        items = [e for e in self.by_id.values() if user_id is None or e.user_id == user_id]
        items.sort(key=lambda e: (e.log_date, e.login_time), reverse=True)
        return [TimeLogView(entry=e, user=self._users.ref(e.user_id)) for e in items]

    def active_entries(self, user_id: int):
        return [e for e in self.by_id.values() if e.user_id == user_id and e.status == TimeLogStatus.ACTIVE]


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 2, 9, 0, 0)


@pytest.fixture
def store():
    users = InMemoryUsers()
    return SimpleNamespace(users=users, tasks=InMemoryTasks(users), timelogs=InMemoryTimeLogs(users))


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=TEST_ROUNDS)


@pytest.fixture
def make_user(store, hasher, fixed_now):
    def _make(name: str, email: str, role: Role = Role.EMPLOYEE, password: str = "secret123") -> User:
        user_id = store.users.create_user(
            name=name,
            email=email,
            password_hash=hasher.hash(password),
            role=role,
            created_at=fixed_now,
        )
        return store.users.get_by_id(user_id)

    return _make


@pytest.fixture
def admin(make_user) -> User:
    return make_user("Ada Admin", "ada@example.com", Role.ADMIN)


@pytest.fixture
def employee(make_user) -> User:
    return make_user("Eve Employee", "eve@example.com")


@pytest.fixture
def other_employee(make_user) -> User:
    return make_user("Oscar Other", "oscar@example.com")


def access_for(user: User) -> AccessContext:
    return AccessContext.for_user(user.user_id, user.email, user.role)


@pytest.fixture
def as_access():
    return access_for


@pytest.fixture
def auth_config() -> AuthConfig:
    return AuthConfig(jwt_secret=TEST_JWT_SECRET, bcrypt_rounds=TEST_ROUNDS)


@pytest.fixture
def container(store, auth_config):
    return assemble_container(
        users_repo=store.users,
        tasks_repo=store.tasks,
        timelogs_repo=store.timelogs,
        auth=auth_config,
    )


@pytest.fixture
def app(monkeypatch, container):
    from src.task_tracker.task_tracker.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def bearer(container):
    def _headers(user: User) -> dict:
        token = container.token_service.issue(user.user_id, user.email, user.role)
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def seed_task(store, admin, fixed_now):
    from src.task_tracker.task_tracker.core.enums import TaskPriority
    from src.task_tracker.task_tracker.tasks.model import NewTask

    def _seed(assignee: User, *, title: str = "Write report", status: TaskStatus = TaskStatus.NOT_STARTED) -> Task:
        task_id = store.tasks.create_task(
            new=NewTask(
                title=title,
                description="Quarterly numbers",
                assigned_to=assignee.user_id,
                due_date=datetime(2026, 3, 31),
                priority=TaskPriority.MEDIUM,
                status=status,
                task_type="Reporting",
            ),
            assigned_by=admin.user_id,
            created_at=fixed_now,
        )
        return store.tasks.get_by_id(task_id)

    return _seed
