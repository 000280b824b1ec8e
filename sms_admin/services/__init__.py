"""Pure computation helpers used by the admin views."""

from sms_admin.services.export import CsvColumn, generate_csv
from sms_admin.services.health import HealthScore, calculate_health_score
from sms_admin.services.stats import DeliveryStats, calculate_delivery_stats
from sms_admin.services.templates import (
    SAMPLE_VARIABLES,
    EffectiveTemplate,
    build_preview,
    find_active_override,
    resolve_effective_body,
    resolve_templates_for_org,
    substitute_variables,
)

__all__ = [
    "CsvColumn",
    "generate_csv",
    "HealthScore",
    "calculate_health_score",
    "DeliveryStats",
    "calculate_delivery_stats",
    "SAMPLE_VARIABLES",
    "EffectiveTemplate",
    "build_preview",
    "find_active_override",
    "resolve_effective_body",
    "resolve_templates_for_org",
    "substitute_variables",
]
