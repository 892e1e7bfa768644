from __future__ import annotations

import re
from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional, Type, TypeVar

from ..core.constants import EMAIL_MAX_LENGTH, MAX_PASSWORD_BYTES
from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_datetime

E = TypeVar("E", bound=Enum)

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def require_non_empty(value: Any, field_name: str, max_len: Optional[int] = None) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    value = value.strip()
    if max_len is not None and len(value) > max_len:
        raise ValidationError(f"{field_name} must be at most {max_len} characters")
    return value


def require_min_length(value: Any, field_name: str, min_len: int) -> str:
    if not isinstance(value, str) or len(value) < min_len:
        raise ValidationError(f"{field_name} must be at least {min_len} characters")
    return value


def require_password(value: Any, field_name: str, min_len: int) -> str:
    password = require_min_length(value, field_name, min_len)
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(f"{field_name} must be at most {MAX_PASSWORD_BYTES} bytes")
    return password


def require_email(value: Any, field_name: str = "Email") -> str:
    email = require_non_empty(value, field_name, EMAIL_MAX_LENGTH).lower()
    if not _EMAIL_RE.match(email):
        raise ValidationError(f"{field_name} is not a valid email address")
    return email


def require_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or (isinstance(value, float) and not value.is_integer()):
        raise ValidationError(f"{field_name} must be an integer id")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer id")


def require_datetime(value: Any, field_name: str) -> datetime:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} is required")
    try:
        return parse_iso_datetime(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be an ISO date or datetime")


def parse_enum(enum_cls: Type[E], value: Any, field_name: str, *, default: Optional[E] = None) -> E:
    """Map a raw value onto `enum_cls`; empty values fall back to `default`."""
    if value is None or value == "":
        if default is None:
            raise ValidationError(f"{field_name} is required")
        return default
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"{field_name} must be one of: {allowed}")


def require_json_object(payload: Any) -> Mapping[str, Any]:
    if not isinstance(payload, Mapping):
        raise ValidationError("Request body must be a JSON object")
    return payload
