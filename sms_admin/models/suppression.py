"""Suppression list entries."""

from datetime import datetime
from enum import Enum

from pydantic import Field

from sms_admin.models.base import AdminModel, utcnow


class SuppressionScope(str, Enum):
    ORG = "ORG"
    GLOBAL = "GLOBAL"
    NUMBER = "NUMBER"


class SuppressionReason(str, Enum):
    STOP = "STOP"
    BOUNCE = "BOUNCE"
    MANUAL = "MANUAL"
    OTHER = "OTHER"


class SuppressionSource(str, Enum):
    INBOUND_SMS = "INBOUND_SMS"
    ADMIN = "ADMIN"
    IMPORT = "IMPORT"


class SmsSuppression(AdminModel):
    """Phone number excluded from outbound sends."""

    id: str
    org_id: str
    phone_number: str
    suppression_scope: SuppressionScope = SuppressionScope.ORG
    reason: SuppressionReason
    source: SuppressionSource

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)
