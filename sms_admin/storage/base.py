"""Abstract base class for storage backends."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from sms_admin.models import (
    AuditAction,
    AuditEntityType,
    AuditLogEntry,
    FieldChange,
    MessageDirection,
    MessageStatus,
    Organization,
    OrgSmsTemplateOverride,
    ProvisioningJob,
    QuietHoursConfig,
    SmsJob,
    SmsMessageLog,
    SmsSuppression,
    SmsTemplate,
    TemplateVersion,
)


@dataclass
class LogFilters:
    """Message log query. Unset fields don't filter."""

    org_id: str | None = None
    direction: MessageDirection | None = None
    status: MessageStatus | None = None
    template_id: str | None = None
    phone: str | None = None  # substring match
    limit: int | None = None


class StorageBackend(ABC):
    """Abstract storage backend interface.

    Reads return snapshots; a missing single record is ``None``. Mutations
    raise the matching NotFound error when their target doesn't exist.
    """

    # ==================== Organization Operations ====================

    @abstractmethod
    async def list_organizations(
        self,
        sms_enabled: bool | None = None,
        sms_ready: bool | None = None,
    ) -> list[Organization]:
        """List organizations, optionally filtered by SMS flags."""
        ...

    @abstractmethod
    async def get_organization(self, org_id: str) -> Organization | None:
        """Get an organization by ID."""
        ...

    @abstractmethod
    async def set_org_sms_enabled(self, org_id: str, enabled: bool) -> Organization:
        """Turn SMS on or off for an organization."""
        ...

    # ==================== Template Operations ====================

    @abstractmethod
    async def list_templates(self, active: bool | None = None) -> list[SmsTemplate]:
        """List master templates."""
        ...

    @abstractmethod
    async def get_template(self, template_id: str) -> SmsTemplate | None:
        """Get a master template by ID."""
        ...

    @abstractmethod
    async def get_template_by_key(self, key: str) -> SmsTemplate | None:
        """Get a master template by its stable key."""
        ...

    @abstractmethod
    async def update_template(
        self,
        template_id: str,
        changes: dict[str, Any],
        changed_by: str,
        changed_by_name: str,
        change_note: str | None = None,
    ) -> SmsTemplate:
        """Apply changes to a template and record a new version."""
        ...

    @abstractmethod
    async def list_template_versions(self, template_id: str) -> list[TemplateVersion]:
        """Version history for a template, highest version first."""
        ...

    # ==================== Override Operations ====================

    @abstractmethod
    async def list_overrides(self, org_id: str) -> list[OrgSmsTemplateOverride]:
        """List an organization's template overrides."""
        ...

    @abstractmethod
    async def get_override(self, override_id: str) -> OrgSmsTemplateOverride | None:
        """Get an override by ID."""
        ...

    @abstractmethod
    async def get_override_for_template(
        self,
        org_id: str,
        template_id: str,
    ) -> OrgSmsTemplateOverride | None:
        """Get an organization's override of one template."""
        ...

    @abstractmethod
    async def create_override(
        self,
        org_id: str,
        template_id: str,
        override_body: str,
        is_active: bool = True,
    ) -> OrgSmsTemplateOverride:
        """Create an override. At most one may exist per (org, template)."""
        ...

    @abstractmethod
    async def update_override(
        self,
        override_id: str,
        override_body: str | None = None,
        is_active: bool | None = None,
    ) -> OrgSmsTemplateOverride:
        """Update an override's body or active flag."""
        ...

    @abstractmethod
    async def delete_override(self, override_id: str) -> bool:
        """Delete an override. Returns False if it didn't exist."""
        ...

    # ==================== Job & Log Operations ====================

    @abstractmethod
    async def list_jobs(self, org_id: str | None = None) -> list[SmsJob]:
        """List send jobs."""
        ...

    @abstractmethod
    async def list_logs(self, filters: LogFilters | None = None) -> list[SmsMessageLog]:
        """List message logs, newest first."""
        ...

    # ==================== Suppression Operations ====================

    @abstractmethod
    async def list_suppressions(self, org_id: str | None = None) -> list[SmsSuppression]:
        """List suppressed numbers."""
        ...

    # ==================== Provisioning Operations ====================

    @abstractmethod
    async def list_provisioning_jobs(self, org_id: str | None = None) -> list[ProvisioningJob]:
        """List provisioning jobs, newest first."""
        ...

    @abstractmethod
    async def get_latest_provisioning_job(self, org_id: str) -> ProvisioningJob | None:
        """Most recent provisioning job for an organization."""
        ...

    @abstractmethod
    async def trigger_provisioning(self, org_id: str) -> ProvisioningJob:
        """Record a new provisioning job with every step pending."""
        ...

    # ==================== Audit Operations ====================

    @abstractmethod
    async def list_audit_entries(
        self,
        entity_type: AuditEntityType | None = None,
        action: AuditAction | None = None,
    ) -> list[AuditLogEntry]:
        """List audit entries, newest first."""
        ...

    @abstractmethod
    async def add_audit_entry(
        self,
        action: AuditAction,
        entity_type: AuditEntityType,
        entity_id: str,
        entity_name: str,
        user_id: str,
        user_name: str,
        details: str,
        changes: list[FieldChange] | None = None,
    ) -> AuditLogEntry:
        """Append an audit entry."""
        ...

    # ==================== Quiet Hours Operations ====================

    @abstractmethod
    async def get_quiet_hours(self, org_id: str) -> QuietHoursConfig | None:
        """Get an organization's quiet hours config."""
        ...

    @abstractmethod
    async def save_quiet_hours(self, org_id: str, changes: dict[str, Any]) -> QuietHoursConfig:
        """Update quiet hours, creating a default config first if needed."""
        ...

    # ==================== Health Check ====================

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if storage is healthy."""
        ...
