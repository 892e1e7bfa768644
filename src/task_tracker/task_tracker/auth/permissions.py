from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Mapping

from ..core.enums import Capability, Role
from ..core.exceptions import AuthorizationError
from .tokens import TokenClaims

ROLE_CAPABILITIES: Mapping[Role, FrozenSet[Capability]] = {
    Role.ADMIN: frozenset(Capability),
    Role.EMPLOYEE: frozenset(),
}


@dataclass(frozen=True)
class AccessContext:
    """Who is calling and what they may do.

    Built once per request from verified token claims; services take it
    instead of comparing role strings.
    """

    user_id: int
    email: str
    role: Role
    capabilities: FrozenSet[Capability]

    @classmethod
    def for_user(cls, user_id: int, email: str, role: Role) -> "AccessContext":
        return cls(
            user_id=int(user_id),
            email=email,
            role=role,
            capabilities=ROLE_CAPABILITIES.get(role, frozenset()),
        )

    @classmethod
    def from_claims(cls, claims: TokenClaims) -> "AccessContext":
        return cls.for_user(claims.user_id, claims.email, claims.role)

    def can(self, capability: Capability) -> bool:
        return capability in self.capabilities

    def require(self, capability: Capability, message: str = "Access denied") -> None:
        if not self.can(capability):
            raise AuthorizationError(message)
