"""Organization endpoints: detail view, SMS toggle, overrides, provisioning."""

import asyncio

from fastapi import APIRouter, HTTPException, Request, Response, status
from pydantic import Field, ValidationError

from sms_admin.api.audit import diff_fields, record_audit
from sms_admin.api.dependencies import SettingsDep, StorageDep
from sms_admin.api.schemas import (
    DeliveryStatsResponse,
    EffectiveTemplateResponse,
    HealthScoreResponse,
)
from sms_admin.core.exceptions import OrganizationNotFound, TemplateNotFound
from sms_admin.models import (
    AuditAction,
    AuditEntityType,
    FieldChange,
    Organization,
    OrgSmsTemplateOverride,
    ProvisioningJob,
    QuietHoursConfig,
    SmsTemplate,
)
from sms_admin.models.base import AdminModel
from sms_admin.models.quiet_hours import HHMM_PATTERN
from sms_admin.services.health import calculate_health_score
from sms_admin.services.stats import calculate_delivery_stats
from sms_admin.services.templates import (
    build_preview,
    find_active_override,
    resolve_templates_for_org,
)
from sms_admin.storage.base import LogFilters, StorageBackend

router = APIRouter(prefix="/orgs", tags=["Organizations"])


# ==================== Pydantic Schemas ====================


class SmsToggle(AdminModel):
    """Schema for turning SMS on or off."""

    enabled: bool


class OverrideUpsert(AdminModel):
    """Schema for creating or updating a template override."""

    override_body: str = Field(..., min_length=1)
    is_active: bool = True


class QuietHoursUpdate(AdminModel):
    """Schema for updating quiet hours. Unset fields are left alone."""

    enabled: bool | None = None
    start_time: str | None = Field(default=None, pattern=HHMM_PATTERN)
    end_time: str | None = Field(default=None, pattern=HHMM_PATTERN)
    timezone: str | None = None
    days_of_week: list[int] | None = None
    apply_to_marketing: bool | None = None
    apply_to_transactional: bool | None = None


class OrganizationDetail(AdminModel):
    """Everything the organization page shows."""

    organization: Organization
    health: HealthScoreResponse
    delivery_stats: DeliveryStatsResponse
    suppression_count: int
    templates: list[EffectiveTemplateResponse]
    provisioning_job: ProvisioningJob | None = None
    quiet_hours: QuietHoursConfig | None = None
    readiness_issues: list[str] = Field(default_factory=list)


class OverrideView(AdminModel):
    """A template as seen by one organization."""

    template: SmsTemplate
    override: OrgSmsTemplateOverride | None = None
    effective_body: str


class PreviewResponse(AdminModel):
    template_id: str
    has_override: bool
    effective_body: str
    body: str
    character_count: int
    segment_count: int


# ==================== Helpers ====================


async def _require_org(storage: StorageBackend, org_id: str) -> Organization:
    org = await storage.get_organization(org_id)
    if not org:
        raise OrganizationNotFound(org_id)
    return org


async def _require_org_and_template(
    storage: StorageBackend,
    org_id: str,
    template_id: str,
) -> tuple[Organization, SmsTemplate]:
    org, template = await asyncio.gather(
        storage.get_organization(org_id),
        storage.get_template(template_id),
    )
    if not org:
        raise OrganizationNotFound(org_id)
    if not template:
        raise TemplateNotFound(template_id)
    return org, template


# ==================== Organization Endpoints ====================


@router.get("", response_model=list[Organization])
async def list_organizations(
    storage: StorageDep,
    sms_enabled: bool | None = None,
    sms_ready: bool | None = None,
) -> list[Organization]:
    """List organizations, optionally filtered by SMS flags."""
    return await storage.list_organizations(sms_enabled=sms_enabled, sms_ready=sms_ready)


@router.get("/{org_id}", response_model=OrganizationDetail)
async def get_organization(org_id: str, storage: StorageDep) -> OrganizationDetail:
    """Organization detail with health score and effective templates."""
    org, templates, overrides, logs, suppressions, job, quiet_hours = await asyncio.gather(
        storage.get_organization(org_id),
        storage.list_templates(),
        storage.list_overrides(org_id),
        storage.list_logs(LogFilters(org_id=org_id)),
        storage.list_suppressions(org_id),
        storage.get_latest_provisioning_job(org_id),
        storage.get_quiet_hours(org_id),
    )
    if not org:
        raise OrganizationNotFound(org_id)

    stats = calculate_delivery_stats(logs)
    health = calculate_health_score(org, stats.delivery_rate, len(suppressions))

    return OrganizationDetail(
        organization=org,
        health=HealthScoreResponse.from_score(health),
        delivery_stats=DeliveryStatsResponse.from_stats(stats),
        suppression_count=len(suppressions),
        templates=[
            EffectiveTemplateResponse.from_resolved(r)
            for r in resolve_templates_for_org(templates, overrides)
        ],
        provisioning_job=job,
        quiet_hours=quiet_hours,
        readiness_issues=org.readiness_issues(),
    )


@router.post("/{org_id}/sms", response_model=Organization)
async def toggle_sms(org_id: str, data: SmsToggle, storage: StorageDep) -> Organization:
    """Enable or disable SMS for an organization."""
    before = await _require_org(storage, org_id)
    org = await storage.set_org_sms_enabled(org_id, data.enabled)

    await record_audit(
        storage,
        action=AuditAction.TOGGLE,
        entity_type=AuditEntityType.ORG,
        entity_id=org.id,
        entity_name=org.name,
        details=f"{'Enabled' if data.enabled else 'Disabled'} SMS for organization",
        changes=[
            FieldChange(
                field="smsEnabled",
                old_value=str(before.sms_enabled).lower(),
                new_value=str(org.sms_enabled).lower(),
            )
        ],
    )
    return org


# ==================== Override Endpoints ====================


@router.get("/{org_id}/templates/{template_id}/override", response_model=OverrideView)
async def get_override(org_id: str, template_id: str, storage: StorageDep) -> OverrideView:
    """Get an organization's override of a template, with the effective body."""
    _, template = await _require_org_and_template(storage, org_id, template_id)
    override = await storage.get_override_for_template(org_id, template_id)
    active = find_active_override(template, [override] if override else [])

    return OverrideView(
        template=template,
        override=override,
        effective_body=active.override_body if active else template.default_body,
    )


@router.put("/{org_id}/templates/{template_id}/override", response_model=OrgSmsTemplateOverride)
async def save_override(
    org_id: str,
    template_id: str,
    data: OverrideUpsert,
    response: Response,
    storage: StorageDep,
) -> OrgSmsTemplateOverride:
    """Create the override, or update it if the organization already has one."""
    org, template = await _require_org_and_template(storage, org_id, template_id)
    existing = await storage.get_override_for_template(org_id, template_id)
    entity_name = f"{org.name} - {template.name}"

    if existing:
        override = await storage.update_override(
            existing.id,
            override_body=data.override_body,
            is_active=data.is_active,
        )
        await record_audit(
            storage,
            action=AuditAction.UPDATE,
            entity_type=AuditEntityType.OVERRIDE,
            entity_id=override.id,
            entity_name=entity_name,
            details=f"Updated template override for {org.name}",
            changes=diff_fields(
                existing.model_dump(by_alias=True, include={"override_body", "is_active"}),
                override.model_dump(by_alias=True, include={"override_body", "is_active"}),
            ),
        )
        return override

    override = await storage.create_override(
        org_id,
        template_id,
        override_body=data.override_body,
        is_active=data.is_active,
    )
    await record_audit(
        storage,
        action=AuditAction.CREATE,
        entity_type=AuditEntityType.OVERRIDE,
        entity_id=override.id,
        entity_name=entity_name,
        details=f"Created template override for {org.name}",
    )
    response.status_code = status.HTTP_201_CREATED
    return override


@router.delete(
    "/{org_id}/templates/{template_id}/override",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_override(org_id: str, template_id: str, storage: StorageDep) -> None:
    """Delete an organization's override of a template."""
    org, template = await _require_org_and_template(storage, org_id, template_id)
    existing = await storage.get_override_for_template(org_id, template_id)
    if not existing:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No override of {template_id} for {org_id}",
        )

    await storage.delete_override(existing.id)
    await record_audit(
        storage,
        action=AuditAction.DELETE,
        entity_type=AuditEntityType.OVERRIDE,
        entity_id=existing.id,
        entity_name=f"{org.name} - {template.name}",
        details=f"Deleted template override for {org.name}",
    )


@router.get("/{org_id}/templates/{template_id}/preview", response_model=PreviewResponse)
async def preview_template(
    org_id: str,
    template_id: str,
    request: Request,
    storage: StorageDep,
    app_settings: SettingsDep,
) -> PreviewResponse:
    """Render the organization's effective body with sample values.

    Any query parameter is used as a value for the variable of the same name.
    """
    _, template = await _require_org_and_template(storage, org_id, template_id)
    overrides = await storage.list_overrides(org_id)
    active = find_active_override(template, overrides)
    effective_body = active.override_body if active else template.default_body

    preview = build_preview(
        effective_body,
        dict(request.query_params),
        segment_length=app_settings.sms_segment_length,
    )
    return PreviewResponse(
        template_id=template.id,
        has_override=active is not None,
        effective_body=effective_body,
        body=preview.body,
        character_count=preview.character_count,
        segment_count=preview.segment_count,
    )


# ==================== Provisioning Endpoints ====================


@router.post(
    "/{org_id}/provisioning",
    response_model=ProvisioningJob,
    status_code=status.HTTP_201_CREATED,
)
async def trigger_provisioning(org_id: str, storage: StorageDep) -> ProvisioningJob:
    """Record a provisioning job for an organization."""
    org = await _require_org(storage, org_id)
    job = await storage.trigger_provisioning(org_id)

    await record_audit(
        storage,
        action=AuditAction.TRIGGER,
        entity_type=AuditEntityType.PROVISIONING,
        entity_id=job.id,
        entity_name=org.name,
        details="Triggered provisioning job",
    )
    return job


@router.get("/{org_id}/provisioning", response_model=list[ProvisioningJob])
async def list_provisioning_jobs(org_id: str, storage: StorageDep) -> list[ProvisioningJob]:
    """Provisioning history for an organization, newest first."""
    await _require_org(storage, org_id)
    return await storage.list_provisioning_jobs(org_id)


# ==================== Quiet Hours Endpoints ====================


@router.get("/{org_id}/quiet-hours", response_model=QuietHoursConfig | None)
async def get_quiet_hours(org_id: str, storage: StorageDep) -> QuietHoursConfig | None:
    """Get quiet hours. Null means messages can be sent at any time."""
    await _require_org(storage, org_id)
    return await storage.get_quiet_hours(org_id)


@router.put("/{org_id}/quiet-hours", response_model=QuietHoursConfig)
async def save_quiet_hours(
    org_id: str,
    data: QuietHoursUpdate,
    storage: StorageDep,
) -> QuietHoursConfig:
    """Update quiet hours, creating them with defaults if needed."""
    changes = data.model_dump(exclude_unset=True)
    try:
        return await storage.save_quiet_hours(org_id, changes)
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=e.errors(include_url=False, include_context=False),
        ) from e
