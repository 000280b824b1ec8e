"""Tests for quiet hours."""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from sms_admin.models import QuietHoursConfig, TemplateType


def _config(**kwargs):
    defaults = {"id": "qh-x", "org_id": "org-x", "enabled": True, "timezone": "UTC"}
    return QuietHoursConfig(**{**defaults, **kwargs})


def _utc(day, hour, minute=0):
    # June 2024: the 3rd is a Monday
    return datetime(2024, 6, day, hour, minute, tzinfo=timezone.utc)


def test_defaults():
    """Test default window and scope."""
    config = QuietHoursConfig(id="qh-x", org_id="org-x")
    assert config.enabled is False
    assert config.start_time == "21:00"
    assert config.end_time == "09:00"
    assert config.days_of_week == [0, 1, 2, 3, 4, 5, 6]
    assert config.apply_to_marketing is True
    assert config.apply_to_transactional is False


def test_disabled_is_never_quiet():
    """Test that a disabled config never holds messages."""
    config = _config(enabled=False)
    assert not config.is_quiet_at(_utc(3, 23), TemplateType.MARKETING)


def test_overnight_window():
    """Test a window that crosses midnight."""
    config = _config()
    assert config.is_quiet_at(_utc(3, 21), TemplateType.MARKETING)
    assert config.is_quiet_at(_utc(3, 23, 30), TemplateType.MARKETING)
    assert config.is_quiet_at(_utc(4, 8, 59), TemplateType.MARKETING)
    assert not config.is_quiet_at(_utc(4, 9), TemplateType.MARKETING)
    assert not config.is_quiet_at(_utc(3, 12), TemplateType.MARKETING)


def test_same_day_window():
    """Test a window inside one day."""
    config = _config(start_time="12:00", end_time="14:00")
    assert config.is_quiet_at(_utc(3, 13), TemplateType.MARKETING)
    assert not config.is_quiet_at(_utc(3, 14), TemplateType.MARKETING)
    assert not config.is_quiet_at(_utc(3, 11, 59), TemplateType.MARKETING)


def test_equal_start_and_end_is_never_quiet():
    """Test that an empty window holds nothing."""
    config = _config(start_time="10:00", end_time="10:00")
    assert not config.is_quiet_at(_utc(3, 10), TemplateType.MARKETING)


def test_overnight_window_belongs_to_start_day():
    """Test that early hours follow the previous day's setting."""
    # Friday only (5); Saturday the 8th at 02:00 is Friday night
    config = _config(days_of_week=[5])
    assert config.is_quiet_at(_utc(8, 2), TemplateType.MARKETING)
    assert config.is_quiet_at(_utc(7, 22), TemplateType.MARKETING)
    assert not config.is_quiet_at(_utc(8, 22), TemplateType.MARKETING)


def test_template_type_scope():
    """Test marketing and transactional flags."""
    config = _config()
    assert config.is_quiet_at(_utc(3, 22), TemplateType.MARKETING)
    assert not config.is_quiet_at(_utc(3, 22), TemplateType.TRANSACTIONAL)
    assert config.is_quiet_at(_utc(3, 22))


def test_local_timezone():
    """Test that the window is evaluated in the configured timezone."""
    config = _config(timezone="America/New_York")
    # 01:00 UTC on the 4th is 21:00 EDT on the 3rd
    assert config.is_quiet_at(_utc(4, 1), TemplateType.MARKETING)
    # 20:00 UTC is 16:00 EDT
    assert not config.is_quiet_at(_utc(3, 20), TemplateType.MARKETING)
    assert config.timezone_label == "Eastern Time (ET)"


def test_naive_datetimes_are_utc():
    """Test that naive datetimes are read as UTC."""
    config = _config()
    assert config.is_quiet_at(datetime(2024, 6, 3, 22), TemplateType.MARKETING)


def test_days_are_sorted_and_deduplicated():
    """Test day list normalization."""
    config = _config(days_of_week=[5, 1, 5, 0])
    assert config.days_of_week == [0, 1, 5]


@pytest.mark.parametrize(
    "field,value",
    [
        ("start_time", "24:00"),
        ("end_time", "9:00"),
        ("timezone", "Mars/Olympus_Mons"),
        ("days_of_week", [7]),
        ("days_of_week", [-1]),
    ],
)
def test_invalid_values_rejected(field, value):
    """Test validation of times, timezone and days."""
    with pytest.raises(ValidationError):
        _config(**{field: value})
