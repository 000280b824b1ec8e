"""Master template endpoints."""

from fastapi import APIRouter, HTTPException, status
from pydantic import Field, ValidationError

from sms_admin.api.audit import diff_fields, record_audit
from sms_admin.api.dependencies import SettingsDep, StorageDep
from sms_admin.core.exceptions import TemplateNotFound
from sms_admin.models import (
    AuditAction,
    AuditEntityType,
    SmsTemplate,
    TemplateType,
    TemplateVersion,
)
from sms_admin.models.base import AdminModel

router = APIRouter(prefix="/templates", tags=["Templates"])


class TemplateUpdate(AdminModel):
    """Schema for editing a master template. The key is immutable."""

    name: str | None = Field(default=None, min_length=1)
    type: TemplateType | None = None
    default_body: str | None = Field(default=None, min_length=1)
    description: str | None = None
    variables: list[str] | None = None
    is_active: bool | None = None
    change_note: str | None = None


@router.get("", response_model=list[SmsTemplate])
async def list_templates(storage: StorageDep, active: bool | None = None) -> list[SmsTemplate]:
    """List master templates."""
    return await storage.list_templates(active=active)


@router.get("/{template_id}", response_model=SmsTemplate)
async def get_template(template_id: str, storage: StorageDep) -> SmsTemplate:
    """Get a master template."""
    template = await storage.get_template(template_id)
    if not template:
        raise TemplateNotFound(template_id)
    return template


@router.patch("/{template_id}", response_model=SmsTemplate)
async def update_template(
    template_id: str,
    data: TemplateUpdate,
    storage: StorageDep,
    app_settings: SettingsDep,
) -> SmsTemplate:
    """Edit a template, recording a new version and an audit entry."""
    changes = data.model_dump(exclude_unset=True, exclude={"change_note"})
    if not changes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No template fields to update",
        )

    before = await storage.get_template(template_id)
    if not before:
        raise TemplateNotFound(template_id)

    try:
        template = await storage.update_template(
            template_id,
            changes,
            changed_by=app_settings.audit_user_id,
            changed_by_name=app_settings.audit_user_name,
            change_note=data.change_note,
        )
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=e.errors(include_url=False, include_context=False),
        ) from e

    fields = set(changes)
    await record_audit(
        storage,
        action=AuditAction.UPDATE,
        entity_type=AuditEntityType.TEMPLATE,
        entity_id=template.id,
        entity_name=template.name,
        details=data.change_note or "Updated template",
        changes=diff_fields(
            before.model_dump(by_alias=True, include=fields),
            template.model_dump(by_alias=True, include=fields),
        ),
    )
    return template


@router.get("/{template_id}/versions", response_model=list[TemplateVersion])
async def list_template_versions(template_id: str, storage: StorageDep) -> list[TemplateVersion]:
    """Version history, highest version first."""
    template = await storage.get_template(template_id)
    if not template:
        raise TemplateNotFound(template_id)
    return await storage.list_template_versions(template_id)
