from __future__ import annotations

from datetime import datetime

import pytest

from src.task_tracker.task_tracker.common.datetime_utils import day_key, hours_between, parse_iso_datetime, to_iso
from src.task_tracker.task_tracker.common.validators import (
    parse_enum,
    require_email,
    require_int,
    require_json_object,
    require_non_empty,
    require_password,
)
from src.task_tracker.task_tracker.core.enums import TaskPriority
from src.task_tracker.task_tracker.core.exceptions import ValidationError


def test_email_is_trimmed_and_lowercased():
    assert require_email("  Eve@Example.COM ") == "eve@example.com"


@pytest.mark.parametrize("value", ["", "eve", "eve@", "eve@example", "e ve@example.com", 42])
def test_invalid_emails_are_rejected(value):
    with pytest.raises(ValidationError):
        require_email(value)


def test_password_bounds():
    assert require_password("secret", "Password", 6) == "secret"
    with pytest.raises(ValidationError):
        require_password("short", "Password", 6)
    with pytest.raises(ValidationError):
        require_password("é" * 37, "Password", 6)


def test_require_int_rejects_booleans_and_text():
    assert require_int("12", "assignedTo") == 12
    assert require_int(3.0, "assignedTo") == 3
    for bad in (True, "x", None, 2.9, float("nan")):
        with pytest.raises(ValidationError):
            require_int(bad, "assignedTo")


def test_parse_enum_default_and_error_lists_allowed_values():
    assert parse_enum(TaskPriority, None, "priority", default=TaskPriority.MEDIUM) == TaskPriority.MEDIUM
    assert parse_enum(TaskPriority, "Low", "priority") == TaskPriority.LOW
    with pytest.raises(ValidationError, match="Low, Medium, High"):
        parse_enum(TaskPriority, "Urgent", "priority")


def test_json_body_must_be_an_object():
    assert require_json_object({"a": 1}) == {"a": 1}
    for payload in (None, [1, 2], "text"):
        with pytest.raises(ValidationError, match="JSON object"):
            require_json_object(payload)


def test_iso_parsing_normalises_to_naive_utc():
    assert parse_iso_datetime("2026-03-10") == datetime(2026, 3, 10)
    assert parse_iso_datetime("2026-03-10T17:00:00.000Z") == datetime(2026, 3, 10, 17, 0)
    assert parse_iso_datetime("2026-03-10T19:00:00+02:00") == datetime(2026, 3, 10, 17, 0)


def test_day_key_hours_and_iso_rendering():
    start = datetime(2026, 3, 2, 9, 0)

    assert day_key(start) == "2026-03-02"
    assert hours_between(start, datetime(2026, 3, 2, 17, 30)) == 8.5
    assert to_iso(start) == "2026-03-02T09:00:00.000Z"
    assert to_iso(None) is None


def test_non_empty_trims_then_enforces_max_length():
    assert require_non_empty("  " + "a" * 10 + "  ", "title", 10) == "a" * 10
    with pytest.raises(ValidationError, match="at most 10 characters"):
        require_non_empty("a" * 11, "title", 10)


def test_email_longer_than_its_column_is_rejected():
    with pytest.raises(ValidationError, match="at most 255"):
        require_email("a" * 300 + "@example.com")
