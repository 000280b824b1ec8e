"""Organization (tenant) model."""

from datetime import datetime

from pydantic import Field

from sms_admin.models.base import AdminModel, utcnow


class Organization(AdminModel):
    """Tenant with its SMS provisioning state."""

    id: str = Field(..., description="Unique organization identifier")
    name: str = Field(..., description="Organization display name")

    # SMS state
    sms_enabled: bool = False
    sms_ready: bool = False

    # Provider resources
    twilio_subaccount_sid: str | None = None
    marketing_messaging_service_sid: str | None = None
    transactional_messaging_service_sid: str | None = None

    # A2P 10DLC registration
    a2p_brand_id: str | None = None
    a2p_campaign_ids: list[str] = Field(default_factory=list)

    country: str = "US"

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def readiness_issues(self) -> list[str]:
        """List inconsistencies between the ready flag and provisioned resources."""
        issues = []
        if self.sms_ready and not self.twilio_subaccount_sid:
            issues.append("sms_ready is set but no subaccount is provisioned")
        if self.sms_ready and not (
            self.marketing_messaging_service_sid or self.transactional_messaging_service_sid
        ):
            issues.append("sms_ready is set but no messaging service is provisioned")
        return issues
