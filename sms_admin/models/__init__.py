"""Data models for the application."""

from sms_admin.models.audit import AuditAction, AuditEntityType, AuditLogEntry, FieldChange
from sms_admin.models.message import (
    JobStatus,
    MessageDirection,
    MessageStatus,
    SendType,
    SmsJob,
    SmsJobMeta,
    SmsMessageLog,
)
from sms_admin.models.organization import Organization
from sms_admin.models.provisioning import (
    PROVISIONING_STEP_NAMES,
    ProvisioningJob,
    ProvisioningStep,
)
from sms_admin.models.quiet_hours import TIMEZONES, QuietHoursConfig
from sms_admin.models.suppression import (
    SmsSuppression,
    SuppressionReason,
    SuppressionScope,
    SuppressionSource,
)
from sms_admin.models.template import (
    OrgSmsTemplateOverride,
    SmsTemplate,
    TemplateType,
    TemplateVersion,
)

__all__ = [
    # Organization
    "Organization",
    # Templates
    "SmsTemplate",
    "TemplateType",
    "OrgSmsTemplateOverride",
    "TemplateVersion",
    # Messages
    "SmsMessageLog",
    "MessageDirection",
    "MessageStatus",
    "SmsJob",
    "SmsJobMeta",
    "JobStatus",
    "SendType",
    # Suppressions
    "SmsSuppression",
    "SuppressionReason",
    "SuppressionScope",
    "SuppressionSource",
    # Provisioning
    "ProvisioningJob",
    "ProvisioningStep",
    "PROVISIONING_STEP_NAMES",
    # Audit
    "AuditLogEntry",
    "AuditAction",
    "AuditEntityType",
    "FieldChange",
    # Quiet hours
    "QuietHoursConfig",
    "TIMEZONES",
]
