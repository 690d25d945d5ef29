# tests/test_pass_rules.py

"""
Tests for the pure pass decision and display-state rules.
"""

from datetime import datetime, timedelta, timezone

import pytest

from app.models.visitor_pass import VisitorPass, VisitorPassStatus, VisitorEventResult
from app.services.pass_rules import access_message, decide_validation, effective_status, normalize_code


NOW = datetime(2026, 5, 1, 12, 0, 0)


def _pass(**overrides) -> VisitorPass:
    values = dict(
        code="ABCD1234",
        starts_at=NOW - timedelta(hours=1),
        ends_at=NOW + timedelta(hours=1),
        max_uses=2,
        used_count=0,
        status=VisitorPassStatus.ACTIVE,
    )
    values.update(overrides)
    return VisitorPass(**values)


def test_active_pass_in_window_succeeds():
    assert decide_validation(_pass(), NOW) == VisitorEventResult.SUCCESS


def test_revoked_wins_over_everything():
    visitor_pass = _pass(status=VisitorPassStatus.REVOKED, used_count=2, starts_at=NOW + timedelta(days=1),
                         ends_at=NOW + timedelta(days=2))
    assert decide_validation(visitor_pass, NOW) == VisitorEventResult.INVALID


def test_time_window_checked_before_use_budget():
    visitor_pass = _pass(used_count=2, starts_at=NOW + timedelta(days=1), ends_at=NOW + timedelta(days=2))
    assert decide_validation(visitor_pass, NOW) == VisitorEventResult.OUTSIDE_TIME_WINDOW


def test_after_window_is_outside():
    visitor_pass = _pass(starts_at=NOW - timedelta(days=2), ends_at=NOW - timedelta(days=1))
    assert decide_validation(visitor_pass, NOW) == VisitorEventResult.OUTSIDE_TIME_WINDOW


def test_exhausted_budget():
    assert decide_validation(_pass(used_count=2), NOW) == VisitorEventResult.MAX_USES_EXCEEDED


@pytest.mark.parametrize("boundary", ["starts_at", "ends_at"])
def test_window_bounds_are_inclusive(boundary):
    visitor_pass = _pass(**{boundary: NOW})
    assert decide_validation(visitor_pass, NOW) == VisitorEventResult.SUCCESS


def test_effective_status_precedence():
    past = NOW + timedelta(days=3)

    assert effective_status(_pass(status=VisitorPassStatus.REVOKED, used_count=2), past) == VisitorPassStatus.REVOKED
    assert effective_status(_pass(used_count=2), past) == VisitorPassStatus.USED
    assert effective_status(_pass(status=VisitorPassStatus.USED, used_count=2), NOW) == VisitorPassStatus.USED
    assert effective_status(_pass(), past) == VisitorPassStatus.EXPIRED
    assert effective_status(_pass(), NOW) == VisitorPassStatus.ACTIVE


def test_effective_status_does_not_touch_persisted_status():
    visitor_pass = _pass()
    effective_status(visitor_pass, NOW + timedelta(days=3))
    assert visitor_pass.status == VisitorPassStatus.ACTIVE


def test_access_messages():
    assert access_message(VisitorEventResult.SUCCESS) == "Access granted"
    assert access_message(VisitorEventResult.INVALID) == "Access denied: invalid"
    assert access_message(VisitorEventResult.OUTSIDE_TIME_WINDOW) == "Access denied: outside time window"
    assert access_message(VisitorEventResult.MAX_USES_EXCEEDED) == "Access denied: max uses exceeded"


def test_normalize_code():
    assert normalize_code("  ab12cd34 \n") == "AB12CD34"


def test_timezone_aware_now_is_compared_as_utc():
    aware = NOW.replace(tzinfo=timezone.utc)
    seoul = aware.astimezone(timezone(timedelta(hours=9)))

    assert decide_validation(_pass(), aware) == VisitorEventResult.SUCCESS
    assert decide_validation(_pass(), seoul + timedelta(hours=2)) == VisitorEventResult.OUTSIDE_TIME_WINDOW
    assert effective_status(_pass(), seoul + timedelta(hours=2)) == VisitorPassStatus.EXPIRED
