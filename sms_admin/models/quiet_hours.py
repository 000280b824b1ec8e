"""Quiet hours configuration."""

from datetime import datetime, time, timedelta
from datetime import timezone as dt_timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator

from sms_admin.models.base import AdminModel, utcnow
from sms_admin.models.template import TemplateType

TIMEZONES: dict[str, str] = {
    "America/New_York": "Eastern Time (ET)",
    "America/Chicago": "Central Time (CT)",
    "America/Denver": "Mountain Time (MT)",
    "America/Los_Angeles": "Pacific Time (PT)",
    "America/Phoenix": "Arizona (AZ)",
    "Pacific/Honolulu": "Hawaii (HT)",
    "America/Anchorage": "Alaska (AKT)",
}

HHMM_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


def _parse_hhmm(value: str) -> time:
    hours, minutes = value.split(":")
    return time(int(hours), int(minutes))


class QuietHoursConfig(AdminModel):
    """Window during which an organization's messages are held back."""

    id: str
    org_id: str
    enabled: bool = False
    start_time: str = Field(default="21:00", pattern=HHMM_PATTERN)
    end_time: str = Field(default="09:00", pattern=HHMM_PATTERN)
    timezone: str = "America/New_York"
    # 0 = Sunday ... 6 = Saturday
    days_of_week: list[int] = Field(default_factory=lambda: [0, 1, 2, 3, 4, 5, 6])
    apply_to_marketing: bool = True
    apply_to_transactional: bool = False

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    @field_validator("timezone")
    @classmethod
    def _known_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown timezone: {value}") from None
        return value

    @field_validator("days_of_week")
    @classmethod
    def _valid_days(cls, value: list[int]) -> list[int]:
        if any(day < 0 or day > 6 for day in value):
            raise ValueError("days_of_week entries must be between 0 and 6")
        return sorted(set(value))

    @property
    def timezone_label(self) -> str:
        return TIMEZONES.get(self.timezone, self.timezone)

    def applies_to(self, template_type: TemplateType | None) -> bool:
        if template_type == TemplateType.MARKETING:
            return self.apply_to_marketing
        if template_type == TemplateType.TRANSACTIONAL:
            return self.apply_to_transactional
        return self.apply_to_marketing or self.apply_to_transactional

    def is_quiet_at(
        self,
        moment: datetime,
        template_type: TemplateType | None = None,
    ) -> bool:
        """Check whether a send at ``moment`` falls inside the quiet window.

        Naive datetimes are treated as UTC. A window that crosses midnight
        belongs to the day it starts on, so 02:00 Saturday is governed by
        Friday's entry in ``days_of_week``.
        """
        if not self.enabled or not self.applies_to(template_type):
            return False

        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=dt_timezone.utc)
        local = moment.astimezone(ZoneInfo(self.timezone))
        now = local.time().replace(tzinfo=None)
        start = _parse_hhmm(self.start_time)
        end = _parse_hhmm(self.end_time)

        if start == end:
            return False

        if start < end:
            if not start <= now < end:
                return False
            window_day = local
        elif now >= start:
            window_day = local
        elif now < end:
            window_day = local - timedelta(days=1)
        else:
            return False

        # datetime.weekday() is Monday = 0
        return (window_day.weekday() + 1) % 7 in self.days_of_week
