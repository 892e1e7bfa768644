from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .auth.passwords import PasswordHasher
from .auth.tokens import TokenService
from .core.constants import DEFAULT_BCRYPT_ROUNDS, DEFAULT_TOKEN_TTL_HOURS
from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .tasks.mysql_task_repository import MySQLTaskRepository
from .tasks.repository import TaskRepository
from .tasks.service import TaskService
from .timelogs.mysql_timelog_repository import MySQLTimeLogRepository
from .timelogs.repository import TimeLogRepository
from .timelogs.service import TimeLedger
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class AuthConfig:
    jwt_secret: str
    token_ttl_hours: int = DEFAULT_TOKEN_TTL_HOURS
    bcrypt_rounds: int = DEFAULT_BCRYPT_ROUNDS
    allow_admin_registration: bool = True
    employee_status_only: bool = False


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    tasks_repo: TaskRepository
    timelogs_repo: TimeLogRepository

    token_service: TokenService
    time_ledger: TimeLedger
    auth_service: AuthService
    user_service: UserService
    task_service: TaskService
    dashboard_service: DashboardService

    def close(self) -> None:
        if self.conn is not None:
            self.conn.close()


def assemble_container(
    *,
    users_repo: UserRepository,
    tasks_repo: TaskRepository,
    timelogs_repo: TimeLogRepository,
    auth: AuthConfig,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Wire services on top of already-built repositories."""
    token_service = TokenService(auth.jwt_secret, ttl_hours=auth.token_ttl_hours)
    time_ledger = TimeLedger(timelogs_repo)
    auth_service = AuthService(
        users_repo,
        time_ledger,
        token_service,
        PasswordHasher(rounds=auth.bcrypt_rounds),
        allow_admin_registration=auth.allow_admin_registration,
    )

    return Container(
        conn=conn,
        users_repo=users_repo,
        tasks_repo=tasks_repo,
        timelogs_repo=timelogs_repo,
        token_service=token_service,
        time_ledger=time_ledger,
        auth_service=auth_service,
        user_service=UserService(users_repo),
        task_service=TaskService(tasks_repo, users_repo, employee_status_only=auth.employee_status_only),
        dashboard_service=DashboardService(users_repo, tasks_repo),
    )


def build_container(*, db_config: dict, auth: AuthConfig) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).open()

    return assemble_container(
        users_repo=MySQLUserRepository(conn),
        tasks_repo=MySQLTaskRepository(conn),
        timelogs_repo=MySQLTimeLogRepository(conn),
        auth=auth,
        conn=conn,
    )
