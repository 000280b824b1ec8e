"""Master templates, per-organization overrides and version history."""

import re
from datetime import datetime
from enum import Enum

from pydantic import Field

from sms_admin.models.base import AdminModel, utcnow

PLACEHOLDER_PATTERN = re.compile(r"\{\{([A-Za-z0-9_]+)\}\}")


class TemplateType(str, Enum):
    """Messaging channel a template is sent on."""

    MARKETING = "MARKETING"
    TRANSACTIONAL = "TRANSACTIONAL"


class SmsTemplate(AdminModel):
    """Organization-independent master template."""

    id: str = Field(..., description="Unique template identifier")
    key: str = Field(..., description="Stable template key, e.g. PAYMENT_REMINDER")
    name: str
    type: TemplateType
    default_body: str
    description: str | None = None
    variables: list[str] = Field(default_factory=list)
    is_active: bool = True

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def placeholders(self) -> list[str]:
        """Placeholder names used in the default body, in order of first use."""
        seen: dict[str, None] = {}
        for name in PLACEHOLDER_PATTERN.findall(self.default_body):
            seen.setdefault(name, None)
        return list(seen)


class OrgSmsTemplateOverride(AdminModel):
    """Organization-specific replacement body for a master template."""

    id: str
    org_id: str
    sms_template_id: str
    override_body: str
    is_active: bool = True

    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class TemplateVersion(AdminModel):
    """Snapshot of a master template after an edit."""

    id: str
    template_id: str
    version: int = Field(..., ge=1)
    name: str
    key: str
    type: TemplateType
    default_body: str
    description: str | None = None
    variables: list[str] = Field(default_factory=list)
    is_active: bool = True

    changed_by: str
    changed_by_name: str
    change_note: str | None = None
    created_at: datetime = Field(default_factory=utcnow)
