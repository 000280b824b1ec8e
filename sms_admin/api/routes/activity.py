"""Message logs, suppressions and audit history, with CSV exports."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from sms_admin.api.dependencies import StorageDep
from sms_admin.models import (
    AuditAction,
    AuditEntityType,
    AuditLogEntry,
    MessageDirection,
    MessageStatus,
    SmsMessageLog,
    SmsSuppression,
)
from sms_admin.services.export import (
    AUDIT_COLUMNS,
    LOG_COLUMNS,
    SUPPRESSION_COLUMNS,
    generate_csv,
)
from sms_admin.storage.base import LogFilters

router = APIRouter(tags=["Activity"])


def _csv_response(content: str) -> PlainTextResponse:
    return PlainTextResponse(content, media_type="text/csv")


# ==================== Message Logs ====================


@router.get("/logs", response_model=list[SmsMessageLog])
async def list_logs(
    storage: StorageDep,
    org_id: str | None = None,
    direction: MessageDirection | None = None,
    status: MessageStatus | None = None,
    template_id: str | None = None,
    phone: str | None = None,
    limit: int | None = None,
) -> list[SmsMessageLog]:
    """List message logs, newest first."""
    return await storage.list_logs(
        LogFilters(
            org_id=org_id,
            direction=direction,
            status=status,
            template_id=template_id,
            phone=phone,
            limit=limit,
        )
    )


@router.get("/logs/export", response_class=PlainTextResponse)
async def export_logs(
    storage: StorageDep,
    org_id: str | None = None,
    direction: MessageDirection | None = None,
    status: MessageStatus | None = None,
    template_id: str | None = None,
) -> PlainTextResponse:
    """Export the filtered message logs as CSV."""
    logs = await storage.list_logs(
        LogFilters(org_id=org_id, direction=direction, status=status, template_id=template_id)
    )
    return _csv_response(generate_csv(logs, LOG_COLUMNS))


# ==================== Suppressions ====================


@router.get("/suppressions", response_model=list[SmsSuppression])
async def list_suppressions(storage: StorageDep, org_id: str | None = None) -> list[SmsSuppression]:
    """List suppressed numbers."""
    return await storage.list_suppressions(org_id)


@router.get("/suppressions/export", response_class=PlainTextResponse)
async def export_suppressions(storage: StorageDep, org_id: str | None = None) -> PlainTextResponse:
    """Export suppressed numbers as CSV."""
    suppressions = await storage.list_suppressions(org_id)
    return _csv_response(generate_csv(suppressions, SUPPRESSION_COLUMNS))


# ==================== Audit Log ====================


@router.get("/audit", response_model=list[AuditLogEntry])
async def list_audit_entries(
    storage: StorageDep,
    entity_type: AuditEntityType | None = None,
    action: AuditAction | None = None,
) -> list[AuditLogEntry]:
    """List audit entries, newest first."""
    return await storage.list_audit_entries(entity_type=entity_type, action=action)


@router.get("/audit/export", response_class=PlainTextResponse)
async def export_audit_entries(
    storage: StorageDep,
    entity_type: AuditEntityType | None = None,
    action: AuditAction | None = None,
) -> PlainTextResponse:
    """Export the filtered audit log as CSV."""
    entries = await storage.list_audit_entries(entity_type=entity_type, action=action)
    return _csv_response(generate_csv(entries, AUDIT_COLUMNS))
