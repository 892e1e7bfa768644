from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Sequence

from ..auth.passwords import PasswordHasher
from ..auth.permissions import AccessContext
from ..auth.tokens import TokenService
from ..common.datetime_utils import now_utc
from ..common.validators import parse_enum, require_email, require_non_empty, require_password
from ..core.constants import MIN_PASSWORD_LENGTH, NAME_MAX_LENGTH
from ..core.enums import Capability, Role
from ..core.exceptions import AuthenticationError, AuthorizationError, ConflictError
from ..timelogs.model import TimeLogEntry
from ..timelogs.service import TimeLedger
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthResult:
    """What register/login hand back to the client."""

    token: str
    user: User


class AuthService:
    """Use case: register, login and logout.

    Login opens (or reuses) today's time log entry and logout closes it.
    Logout does not revoke the bearer token.
    """

    def __init__(
        self,
        users: UserRepository,
        ledger: TimeLedger,
        tokens: TokenService,
        hasher: PasswordHasher,
        *,
        allow_admin_registration: bool = True,
    ):
        self._users = users
        self._ledger = ledger
        self._tokens = tokens
        self._hasher = hasher
        self._allow_admin_registration = bool(allow_admin_registration)

    def register(
        self,
        *,
        name: Any,
        email: Any,
        password: Any,
        role: Any = None,
        now: Optional[datetime] = None,
    ) -> AuthResult:
        name = require_non_empty(name, "Name", NAME_MAX_LENGTH)
        email = require_email(email)
        password = require_password(password, "Password", MIN_PASSWORD_LENGTH)
        role = parse_enum(Role, role, "Role", default=Role.EMPLOYEE)

        if role == Role.ADMIN and not self._allow_admin_registration:
            raise AuthorizationError("Admin accounts cannot be self-registered")

        if self._users.get_by_email(email):
            raise ConflictError("User already exists")

        created_at = now or now_utc()
        user_id = self._users.create_user(
            name=name,
            email=email,
            password_hash=self._hasher.hash(password),
            role=role,
            created_at=created_at,
        )
        user = self._users.get_by_id(user_id)
        if not user:
            raise RuntimeError(f"User {user_id} missing right after insert")

        logger.info("Registered %s user %s (%s)", role.value, user.user_id, email)
        return AuthResult(token=self._tokens.issue(user.user_id, user.email, user.role), user=user)

    def login(self, *, email: Any, password: Any, now: Optional[datetime] = None) -> AuthResult:
        if not isinstance(email, str) or not isinstance(password, str):
            raise AuthenticationError("Invalid credentials")

        user = self._users.get_by_email(email.strip().lower())
        if not user or not self._hasher.verify(password, user.password_hash):
            raise AuthenticationError("Invalid credentials")

        self._ledger.record_login(user.user_id, now=now)
        logger.info("User %s logged in", user.user_id)
        return AuthResult(token=self._tokens.issue(user.user_id, user.email, user.role), user=user)

    def logout(self, access: AccessContext, *, now: Optional[datetime] = None) -> Optional[TimeLogEntry]:
        closed = self._ledger.record_logout(access.user_id, now=now)
        logger.info("User %s logged out", access.user_id)
        return closed


class UserService:
    """Use case: user listings for administrators."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_employees(self, access: AccessContext) -> Sequence[User]:
        access.require(Capability.VIEW_EMPLOYEES, "Admin access required")
        return self._users.list_by_role(Role.EMPLOYEE)
