"""Audit log entries for admin actions."""

from datetime import datetime
from enum import Enum

from pydantic import Field

from sms_admin.models.base import AdminModel, utcnow


class AuditAction(str, Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    TRIGGER = "TRIGGER"
    TOGGLE = "TOGGLE"


class AuditEntityType(str, Enum):
    TEMPLATE = "TEMPLATE"
    OVERRIDE = "OVERRIDE"
    ORG = "ORG"
    PROVISIONING = "PROVISIONING"
    SUPPRESSION = "SUPPRESSION"


class FieldChange(AdminModel):
    field: str
    old_value: str
    new_value: str


class AuditLogEntry(AdminModel):
    """Record of one admin action."""

    id: str
    timestamp: datetime = Field(default_factory=utcnow)
    action: AuditAction
    entity_type: AuditEntityType
    entity_id: str
    entity_name: str
    user_id: str
    user_name: str
    details: str
    changes: list[FieldChange] = Field(default_factory=list)
