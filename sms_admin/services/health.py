"""Organization health score."""

from dataclasses import dataclass
from enum import Enum
from typing import Any

from sms_admin.services.fields import get_field, round_half_up

PROVISIONED_POINTS = 40
PARTIALLY_PROVISIONED_POINTS = 20
DELIVERY_POINTS = 40
DISABLED_CEILING = 30

# (exclusive upper bound on suppression count, points), checked in order
SUPPRESSION_TIERS: tuple[tuple[int, int], ...] = (
    (1, 20),
    (5, 15),
    (10, 10),
    (20, 5),
)


class HealthColor(str, Enum):
    GREEN = "green"
    BLUE = "blue"
    YELLOW = "yellow"
    RED = "red"


# (minimum score, label, color), highest first
HEALTH_TIERS: tuple[tuple[int, str, HealthColor], ...] = (
    (80, "Excellent", HealthColor.GREEN),
    (60, "Good", HealthColor.BLUE),
    (40, "Fair", HealthColor.YELLOW),
    (0, "Poor", HealthColor.RED),
)


@dataclass(frozen=True)
class HealthScore:
    """Scored and labeled health indicator."""

    score: int
    label: str
    color: HealthColor

    def to_dict(self) -> dict[str, Any]:
        return {"score": self.score, "label": self.label, "color": self.color.value}


def _provisioning_points(org: Any) -> int:
    if get_field(org, "sms_ready"):
        return PROVISIONED_POINTS
    if get_field(org, "twilio_subaccount_sid"):
        return PARTIALLY_PROVISIONED_POINTS
    return 0


def _suppression_points(suppression_count: int) -> int:
    for upper_bound, points in SUPPRESSION_TIERS:
        if suppression_count < upper_bound:
            return points
    return 0


def grade(score: int) -> tuple[str, HealthColor]:
    """Label and color tier for a score."""
    for minimum, label, color in HEALTH_TIERS:
        if score >= minimum:
            return label, color
    return HEALTH_TIERS[-1][1], HEALTH_TIERS[-1][2]


def calculate_health_score(
    org: Any,
    delivery_rate: float,
    suppression_count: int,
) -> HealthScore:
    """Blend provisioning state, delivery rate and suppressions into one score.

    Points: 40 for provisioning (20 when only a subaccount exists), up to 40
    for delivery rate, up to 20 for a short suppression list. Organizations
    with SMS disabled are capped at 30.

    Args:
        org: Organization, or any object/mapping with ``sms_enabled``,
            ``sms_ready`` and ``twilio_subaccount_sid``
        delivery_rate: Outbound delivery rate, 0-100
        suppression_count: Number of suppressed numbers for the org

    Returns:
        HealthScore with score 0-100, label and color
    """
    score = _provisioning_points(org)
    score += round_half_up(delivery_rate / 100 * DELIVERY_POINTS)
    score += _suppression_points(suppression_count)

    if not get_field(org, "sms_enabled"):
        score = min(score, DISABLED_CEILING)

    label, color = grade(score)
    return HealthScore(score=score, label=label, color=color)
