"""Response schemas shared by several routers."""

from sms_admin.models import OrgSmsTemplateOverride, SmsTemplate
from sms_admin.models.base import AdminModel
from sms_admin.services.health import HealthScore
from sms_admin.services.stats import DeliveryStats
from sms_admin.services.templates import EffectiveTemplate


class DeliveryStatsResponse(AdminModel):
    total: int
    delivered: int
    failed: int
    sent: int
    queued: int
    received: int
    delivery_rate: int
    failure_rate: int

    @classmethod
    def from_stats(cls, stats: DeliveryStats) -> "DeliveryStatsResponse":
        return cls(**stats.to_dict())


class HealthScoreResponse(AdminModel):
    score: int
    label: str
    color: str

    @classmethod
    def from_score(cls, health: HealthScore) -> "HealthScoreResponse":
        return cls(**health.to_dict())


class EffectiveTemplateResponse(AdminModel):
    template: SmsTemplate
    effective_body: str
    has_override: bool
    override: OrgSmsTemplateOverride | None = None

    @classmethod
    def from_resolved(cls, resolved: EffectiveTemplate) -> "EffectiveTemplateResponse":
        return cls(
            template=resolved.template,
            effective_body=resolved.effective_body,
            has_override=resolved.has_override,
            override=resolved.override,
        )
