from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import g, request

from ..core.enums import Capability
from ..core.exceptions import UnauthenticatedError
from .permissions import AccessContext
from .tokens import TokenService


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.strip().split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1].strip() or None


def current_access() -> AccessContext:
    access = g.get("access")
    if access is None:
        raise UnauthenticatedError("No token provided")
    return access


class RequestGuards:
    """View decorators for the JSON API.

    `login_required` verifies the bearer token and stores an AccessContext in
    `flask.g`; `requires(cap)` additionally enforces one capability.
    """

    def __init__(self, tokens: TokenService):
        self._tokens = tokens

    def _authenticate(self) -> AccessContext:
        token = bearer_token(request.headers.get("Authorization"))
        if not token:
            raise UnauthenticatedError("No token provided")
        access = AccessContext.from_claims(self._tokens.verify(token))
        g.access = access
        return access

    def login_required(self, view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            self._authenticate()
            return view(*args, **kwargs)

        return wrapper

    def requires(self, capability: Capability, message: str = "Admin access required"):
        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                self._authenticate().require(capability, message)
                return view(*args, **kwargs)

            return wrapper

        return decorator
