"""Audit trail helpers for admin mutations."""

from typing import Any

from sms_admin.core.config import settings
from sms_admin.models import AuditAction, AuditEntityType, AuditLogEntry, FieldChange
from sms_admin.services.export import stringify
from sms_admin.storage.base import StorageBackend


def diff_fields(before: dict[str, Any], after: dict[str, Any]) -> list[FieldChange]:
    """Field changes between two dumps (by alias), in ``after`` key order."""
    return [
        FieldChange(
            field=name,
            old_value=stringify(before.get(name)),
            new_value=stringify(value),
        )
        for name, value in after.items()
        if before.get(name) != value
    ]


async def record_audit(
    storage: StorageBackend,
    action: AuditAction,
    entity_type: AuditEntityType,
    entity_id: str,
    entity_name: str,
    details: str,
    changes: list[FieldChange] | None = None,
) -> AuditLogEntry:
    """Append an audit entry attributed to the configured admin user."""
    return await storage.add_audit_entry(
        action=action,
        entity_type=entity_type,
        entity_id=entity_id,
        entity_name=entity_name,
        user_id=settings.audit_user_id,
        user_name=settings.audit_user_name,
        details=details,
        changes=changes,
    )
