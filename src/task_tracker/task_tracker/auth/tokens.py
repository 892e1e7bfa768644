"""Bearer tokens (signed JWT).

Tokens carry the user id, email and role and expire after a fixed TTL.
There is no revocation list: a token stays valid until `exp` even after logout.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

from ..core.constants import DEFAULT_TOKEN_TTL_HOURS, JWT_ALGORITHM
from ..core.enums import Role
from ..core.exceptions import UnauthenticatedError


@dataclass(frozen=True)
class TokenClaims:
    user_id: int
    email: str
    role: Role
    expires_at: datetime


class TokenService:
    def __init__(self, secret: str, *, ttl_hours: int = DEFAULT_TOKEN_TTL_HOURS):
        if not secret:
            raise ValueError("TokenService needs a non-empty signing secret")
        self._secret = secret
        self._ttl = timedelta(hours=int(ttl_hours))

    def issue(self, user_id: int, email: str, role: Role, *, now: Optional[datetime] = None) -> str:
        issued_at = now or datetime.now(timezone.utc)
        if issued_at.tzinfo is None:
            issued_at = issued_at.replace(tzinfo=timezone.utc)
        payload = {
            "userId": int(user_id),
            "email": email,
            "role": Role(role).value,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._ttl).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def verify(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                options={"require": ["exp", "userId", "email", "role"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise UnauthenticatedError("Token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise UnauthenticatedError("Invalid token") from exc

        try:
            return TokenClaims(
                user_id=int(payload["userId"]),
                email=str(payload["email"]),
                role=Role(payload["role"]),
                expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc),
            )
        except (TypeError, ValueError) as exc:
            raise UnauthenticatedError("Invalid token") from exc
