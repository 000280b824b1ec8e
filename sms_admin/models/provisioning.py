"""Provisioning job records.

A provisioning job is a snapshot of setup step statuses. Nothing in this
service advances a step once the job is created.
"""

from datetime import datetime

from pydantic import Field

from sms_admin.models.base import AdminModel, utcnow
from sms_admin.models.message import JobStatus

PROVISIONING_STEP_NAMES = (
    "Create Twilio subaccount",
    "Buy numbers",
    "Create messaging services",
    "Register A2P brand",
    "Register A2P campaigns",
)


class ProvisioningStep(AdminModel):
    name: str
    status: JobStatus = JobStatus.PENDING
    message: str | None = None


class ProvisioningJob(AdminModel):
    """Setup steps required before an organization can send messages."""

    id: str
    org_id: str
    status: JobStatus = JobStatus.PENDING
    steps: list[ProvisioningStep] = Field(default_factory=list)

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
    error_message: str | None = None

    @classmethod
    def pending(cls, job_id: str, org_id: str) -> "ProvisioningJob":
        """Build a fresh job with every standard step pending."""
        return cls(
            id=job_id,
            org_id=org_id,
            steps=[ProvisioningStep(name=name) for name in PROVISIONING_STEP_NAMES],
        )
