"""Message log and send job models."""

from datetime import datetime
from enum import Enum

from pydantic import ConfigDict, Field

from sms_admin.models.base import AdminModel, utcnow


class MessageDirection(str, Enum):
    """Direction of the message."""

    OUTBOUND = "OUTBOUND"  # To recipient
    INBOUND = "INBOUND"  # From recipient


class MessageStatus(str, Enum):
    """Delivery status reported for a message."""

    QUEUED = "QUEUED"
    SENT = "SENT"
    DELIVERED = "DELIVERED"
    FAILED = "FAILED"
    RECEIVED = "RECEIVED"  # Inbound only


class JobStatus(str, Enum):
    """Status of a send job or provisioning job."""

    PENDING = "PENDING"
    RUNNING = "RUNNING"
    COMPLETE = "COMPLETE"
    FAILED = "FAILED"


class SendType(str, Enum):
    IMMEDIATE = "IMMEDIATE"
    SCHEDULED = "SCHEDULED"


class SmsJobMeta(AdminModel):
    """Known metadata attached to a send job."""

    model_config = ConfigDict(extra="forbid")

    campaign_name: str | None = None
    recipient_count: int | None = Field(default=None, ge=0)
    audience: str | None = None
    notes: str | None = None


class SmsJob(AdminModel):
    """Batch send of one template for one organization."""

    id: str
    org_id: str
    sms_template_id: str
    status: JobStatus = JobStatus.PENDING
    send_type: SendType = SendType.IMMEDIATE
    scheduled_at: datetime | None = None

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    meta: SmsJobMeta = Field(default_factory=SmsJobMeta)


class SmsMessageLog(AdminModel):
    """One sent or received SMS."""

    id: str
    org_id: str
    user_id: str | None = None
    direction: MessageDirection
    phone_number: str
    body: str

    # References
    sms_template_id: str | None = None
    sms_job_id: str | None = None
    twilio_message_sid: str | None = None

    # Delivery
    status: MessageStatus
    failure_reason: str | None = None
    num_segments: int | None = None

    # Engagement
    clicked: bool | None = None
    clicked_at: datetime | None = None

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
