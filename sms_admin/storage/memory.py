"""In-memory storage backend with simulated network latency."""

import asyncio
from typing import Any, TypeVar
from uuid import uuid4

import structlog
from pydantic import BaseModel

from sms_admin.core.config import settings
from sms_admin.core.exceptions import (
    AppException,
    ConfigurationError,
    DuplicateOverride,
    OrganizationNotFound,
    OverrideNotFound,
    TemplateNotFound,
)
from sms_admin.models import (
    AuditAction,
    AuditEntityType,
    AuditLogEntry,
    FieldChange,
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
from sms_admin.models.base import utcnow
from sms_admin.storage.base import LogFilters, StorageBackend
from sms_admin.storage.fixtures import Fixtures, build_demo_fixtures

logger = structlog.get_logger()

M = TypeVar("M", bound=BaseModel)

EDITABLE_TEMPLATE_FIELDS = frozenset(
    {"name", "type", "default_body", "description", "variables", "is_active"}
)


def _copy(model: M) -> M:
    return model.model_copy(deep=True)


def _new_id(prefix: str) -> str:
    return f"{prefix}-{uuid4().hex[:12]}"


class InMemoryStorage(StorageBackend):
    """In-memory storage implementation for development.

    Every call sleeps for a per-operation delay scaled by ``latency_scale``
    to mimic a remote API. Records are copied in and out, so the only way
    to change stored state is through a mutation method.
    """

    def __init__(self, latency_scale: float | None = None) -> None:
        if latency_scale is not None and latency_scale < 0:
            raise ConfigurationError(
                "latency_scale must not be negative",
                details={"latency_scale": latency_scale},
            )
        self._latency_scale = (
            settings.mock_latency_scale if latency_scale is None else latency_scale
        )
        self._organizations: dict[str, Organization] = {}
        self._templates: dict[str, SmsTemplate] = {}
        self._overrides: dict[str, OrgSmsTemplateOverride] = {}
        self._jobs: dict[str, SmsJob] = {}
        self._logs: dict[str, SmsMessageLog] = {}
        self._suppressions: dict[str, SmsSuppression] = {}
        self._provisioning_jobs: list[ProvisioningJob] = []
        self._template_versions: list[TemplateVersion] = []
        self._audit_log: list[AuditLogEntry] = []
        self._quiet_hours: dict[str, QuietHoursConfig] = {}
        self._lock = asyncio.Lock()

    async def _delay(self, ms: int) -> None:
        seconds = ms / 1000 * self._latency_scale
        if seconds > 0:
            await asyncio.sleep(seconds)

    # ==================== Organization Operations ====================

    async def list_organizations(
        self,
        sms_enabled: bool | None = None,
        sms_ready: bool | None = None,
    ) -> list[Organization]:
        await self._delay(300)
        orgs = list(self._organizations.values())
        if sms_enabled is not None:
            orgs = [o for o in orgs if o.sms_enabled == sms_enabled]
        if sms_ready is not None:
            orgs = [o for o in orgs if o.sms_ready == sms_ready]
        return [_copy(o) for o in orgs]

    async def get_organization(self, org_id: str) -> Organization | None:
        await self._delay(200)
        org = self._organizations.get(org_id)
        return _copy(org) if org else None

    async def set_org_sms_enabled(self, org_id: str, enabled: bool) -> Organization:
        await self._delay(400)
        async with self._lock:
            org = self._organizations.get(org_id)
            if org is None:
                raise OrganizationNotFound(org_id)
            org.sms_enabled = enabled
            org.updated_at = utcnow()
        logger.info("Set organization SMS flag", org_id=org_id, sms_enabled=enabled)
        return _copy(org)

    # ==================== Template Operations ====================

    async def list_templates(self, active: bool | None = None) -> list[SmsTemplate]:
        await self._delay(250)
        templates = list(self._templates.values())
        if active is not None:
            templates = [t for t in templates if t.is_active == active]
        return [_copy(t) for t in templates]

    async def get_template(self, template_id: str) -> SmsTemplate | None:
        await self._delay(200)
        template = self._templates.get(template_id)
        return _copy(template) if template else None

    async def get_template_by_key(self, key: str) -> SmsTemplate | None:
        await self._delay(200)
        for template in self._templates.values():
            if template.key == key:
                return _copy(template)
        return None

    def _next_version_number(self, template_id: str) -> int:
        versions = [v.version for v in self._template_versions if v.template_id == template_id]
        return max(versions, default=0) + 1

    def _snapshot(
        self,
        template: SmsTemplate,
        changed_by: str,
        changed_by_name: str,
        change_note: str | None,
    ) -> TemplateVersion:
        version = self._next_version_number(template.id)
        snapshot = TemplateVersion(
            id=f"ver-{template.id}-{version}",
            template_id=template.id,
            version=version,
            name=template.name,
            key=template.key,
            type=template.type,
            default_body=template.default_body,
            description=template.description,
            variables=list(template.variables),
            is_active=template.is_active,
            changed_by=changed_by,
            changed_by_name=changed_by_name,
            change_note=change_note,
        )
        self._template_versions.append(snapshot)
        return snapshot

    async def update_template(
        self,
        template_id: str,
        changes: dict[str, Any],
        changed_by: str,
        changed_by_name: str,
        change_note: str | None = None,
    ) -> SmsTemplate:
        await self._delay(400)
        unknown = set(changes) - EDITABLE_TEMPLATE_FIELDS
        if unknown:
            raise AppException(
                f"Fields cannot be edited: {', '.join(sorted(unknown))}",
                code="INVALID_TEMPLATE_CHANGE",
                details={"fields": sorted(unknown)},
            )

        async with self._lock:
            current = self._templates.get(template_id)
            if current is None:
                raise TemplateNotFound(template_id)

            updated = SmsTemplate.model_validate(
                {**current.model_dump(), **changes, "updated_at": utcnow()}
            )

            # Templates seeded without history get their pre-edit state as v1
            if self._next_version_number(template_id) == 1:
                self._snapshot(current, changed_by, changed_by_name, "Initial version")
            version = self._snapshot(updated, changed_by, changed_by_name, change_note)
            self._templates[template_id] = updated

        logger.info(
            "Updated template",
            template_id=template_id,
            version=version.version,
            fields=sorted(changes),
        )
        return _copy(updated)

    async def list_template_versions(self, template_id: str) -> list[TemplateVersion]:
        await self._delay(200)
        versions = [v for v in self._template_versions if v.template_id == template_id]
        versions.sort(key=lambda v: v.version, reverse=True)
        return [_copy(v) for v in versions]

    # ==================== Override Operations ====================

    async def list_overrides(self, org_id: str) -> list[OrgSmsTemplateOverride]:
        await self._delay(200)
        return [_copy(o) for o in self._overrides.values() if o.org_id == org_id]

    async def get_override(self, override_id: str) -> OrgSmsTemplateOverride | None:
        await self._delay(200)
        override = self._overrides.get(override_id)
        return _copy(override) if override else None

    def _find_override(self, org_id: str, template_id: str) -> OrgSmsTemplateOverride | None:
        for override in self._overrides.values():
            if override.org_id == org_id and override.sms_template_id == template_id:
                return override
        return None

    async def get_override_for_template(
        self,
        org_id: str,
        template_id: str,
    ) -> OrgSmsTemplateOverride | None:
        await self._delay(200)
        override = self._find_override(org_id, template_id)
        return _copy(override) if override else None

    async def create_override(
        self,
        org_id: str,
        template_id: str,
        override_body: str,
        is_active: bool = True,
    ) -> OrgSmsTemplateOverride:
        await self._delay(400)
        async with self._lock:
            if org_id not in self._organizations:
                raise OrganizationNotFound(org_id)
            if template_id not in self._templates:
                raise TemplateNotFound(template_id)
            existing = self._find_override(org_id, template_id)
            if existing is not None:
                raise DuplicateOverride(org_id, template_id, existing.id)

            override = OrgSmsTemplateOverride(
                id=_new_id("override"),
                org_id=org_id,
                sms_template_id=template_id,
                override_body=override_body,
                is_active=is_active,
            )
            self._overrides[override.id] = override

        logger.info(
            "Created template override",
            override_id=override.id,
            org_id=org_id,
            template_id=template_id,
        )
        return _copy(override)

    async def update_override(
        self,
        override_id: str,
        override_body: str | None = None,
        is_active: bool | None = None,
    ) -> OrgSmsTemplateOverride:
        await self._delay(400)
        async with self._lock:
            override = self._overrides.get(override_id)
            if override is None:
                raise OverrideNotFound(override_id)
            if override_body is not None:
                override.override_body = override_body
            if is_active is not None:
                override.is_active = is_active
            override.updated_at = utcnow()

        logger.info("Updated template override", override_id=override_id)
        return _copy(override)

    async def delete_override(self, override_id: str) -> bool:
        await self._delay(300)
        async with self._lock:
            removed = self._overrides.pop(override_id, None)
        if removed is None:
            return False
        logger.info("Deleted template override", override_id=override_id)
        return True

    # ==================== Job & Log Operations ====================

    async def list_jobs(self, org_id: str | None = None) -> list[SmsJob]:
        await self._delay(250 if org_id else 300)
        jobs = list(self._jobs.values())
        if org_id:
            jobs = [j for j in jobs if j.org_id == org_id]
        return [_copy(j) for j in jobs]

    async def list_logs(self, filters: LogFilters | None = None) -> list[SmsMessageLog]:
        await self._delay(300)
        filters = filters or LogFilters()
        logs = list(self._logs.values())

        if filters.org_id:
            logs = [log for log in logs if log.org_id == filters.org_id]
        if filters.direction:
            logs = [log for log in logs if log.direction == filters.direction]
        if filters.status:
            logs = [log for log in logs if log.status == filters.status]
        if filters.template_id:
            logs = [log for log in logs if log.sms_template_id == filters.template_id]
        if filters.phone:
            logs = [log for log in logs if filters.phone in log.phone_number]

        logs.sort(key=lambda log: log.created_at, reverse=True)

        if filters.limit:
            logs = logs[: filters.limit]

        return [_copy(log) for log in logs]

    # ==================== Suppression Operations ====================

    async def list_suppressions(self, org_id: str | None = None) -> list[SmsSuppression]:
        await self._delay(200 if org_id else 250)
        suppressions = list(self._suppressions.values())
        if org_id:
            suppressions = [s for s in suppressions if s.org_id == org_id]
        return [_copy(s) for s in suppressions]

    # ==================== Provisioning Operations ====================

    async def list_provisioning_jobs(self, org_id: str | None = None) -> list[ProvisioningJob]:
        await self._delay(250)
        jobs = list(self._provisioning_jobs)
        if org_id:
            jobs = [j for j in jobs if j.org_id == org_id]
        # Stable sort keeps the most recently triggered job first on ties
        jobs.sort(key=lambda j: j.created_at, reverse=True)
        return [_copy(j) for j in jobs]

    async def get_latest_provisioning_job(self, org_id: str) -> ProvisioningJob | None:
        await self._delay(200)
        jobs = await self.list_provisioning_jobs(org_id)
        return jobs[0] if jobs else None

    async def trigger_provisioning(self, org_id: str) -> ProvisioningJob:
        await self._delay(500)
        async with self._lock:
            if org_id not in self._organizations:
                raise OrganizationNotFound(org_id)
            job = ProvisioningJob.pending(_new_id("prov"), org_id)
            self._provisioning_jobs.insert(0, job)

        logger.info("Triggered provisioning", org_id=org_id, job_id=job.id)
        return _copy(job)

    # ==================== Audit Operations ====================

    async def list_audit_entries(
        self,
        entity_type: AuditEntityType | None = None,
        action: AuditAction | None = None,
    ) -> list[AuditLogEntry]:
        entries = list(self._audit_log)
        if entity_type:
            entries = [e for e in entries if e.entity_type == entity_type]
        if action:
            entries = [e for e in entries if e.action == action]
        entries.sort(key=lambda e: e.timestamp, reverse=True)
        return [_copy(e) for e in entries]

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
        entry = AuditLogEntry(
            id=_new_id("audit"),
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            entity_name=entity_name,
            user_id=user_id,
            user_name=user_name,
            details=details,
            changes=changes or [],
        )
        async with self._lock:
            self._audit_log.insert(0, entry)
        return _copy(entry)

    # ==================== Quiet Hours Operations ====================

    async def get_quiet_hours(self, org_id: str) -> QuietHoursConfig | None:
        config = self._quiet_hours.get(org_id)
        return _copy(config) if config else None

    async def save_quiet_hours(self, org_id: str, changes: dict[str, Any]) -> QuietHoursConfig:
        async with self._lock:
            if org_id not in self._organizations:
                raise OrganizationNotFound(org_id)
            existing = self._quiet_hours.get(org_id)
            base = existing.model_dump() if existing else {"id": _new_id("qh"), "org_id": org_id}
            changes = {k: v for k, v in changes.items() if k not in ("id", "org_id")}
            config = QuietHoursConfig.model_validate(
                {**base, **changes, "updated_at": utcnow()}
            )
            self._quiet_hours[org_id] = config

        logger.info(
            "Saved quiet hours",
            org_id=org_id,
            enabled=config.enabled,
            created=existing is None,
        )
        return _copy(config)

    # ==================== Health Check ====================

    async def health_check(self) -> bool:
        return True

    # ==================== Development Helpers ====================

    async def clear_all(self) -> None:
        """Clear all data (for testing)."""
        self._organizations.clear()
        self._templates.clear()
        self._overrides.clear()
        self._jobs.clear()
        self._logs.clear()
        self._suppressions.clear()
        self._provisioning_jobs.clear()
        self._template_versions.clear()
        self._audit_log.clear()
        self._quiet_hours.clear()

    async def seed(self, fixtures: Fixtures) -> None:
        """Load fixture records, replacing records with the same ID."""
        async with self._lock:
            for org in fixtures.organizations:
                for issue in org.readiness_issues():
                    logger.warning("Organization readiness mismatch", org_id=org.id, issue=issue)
                self._organizations[org.id] = _copy(org)
            self._templates.update({t.id: _copy(t) for t in fixtures.templates})
            self._overrides.update({o.id: _copy(o) for o in fixtures.overrides})
            self._jobs.update({j.id: _copy(j) for j in fixtures.jobs})
            self._logs.update({log.id: _copy(log) for log in fixtures.logs})
            self._suppressions.update({s.id: _copy(s) for s in fixtures.suppressions})
            self._provisioning_jobs.extend(_copy(j) for j in fixtures.provisioning_jobs)
            self._template_versions.extend(_copy(v) for v in fixtures.template_versions)
            self._audit_log.extend(_copy(e) for e in fixtures.audit_log)
            self._quiet_hours.update({q.org_id: _copy(q) for q in fixtures.quiet_hours})

    async def seed_demo_data(self) -> Fixtures:
        """Load the development fixture set."""
        fixtures = build_demo_fixtures()
        await self.seed(fixtures)
        return fixtures
