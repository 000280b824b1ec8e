"""Template override resolution and variable substitution."""

import math
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone

from sms_admin.models import OrgSmsTemplateOverride, SmsTemplate

DEFAULT_SEGMENT_LENGTH = 160

# Preview values for the variables used by the stock templates
SAMPLE_VARIABLES: dict[str, str] = {
    "first_name": "John",
    "last_name": "Smith",
    "equity_change": "$15,000",
    "short_link": "https://link.co/abc123",
    "property_type": "Condo",
    "location": "Downtown",
    "amount": "1,250.00",
    "due_date": "Dec 15, 2024",
    "promotion_details": "20% off closing costs",
    "code": "123456",
    "newsletter_summary": "Home prices up 5% this month",
    "document_type": "Loan Estimate",
}


# ==================== Override Resolution ====================


def _as_utc(moment: datetime) -> datetime:
    # Naive timestamps are UTC
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


@dataclass(frozen=True)
class EffectiveTemplate:
    """A master template as seen by one organization."""

    template: SmsTemplate
    effective_body: str
    override: OrgSmsTemplateOverride | None = None

    @property
    def has_override(self) -> bool:
        return self.override is not None


def find_active_override(
    template: SmsTemplate,
    overrides: Iterable[OrgSmsTemplateOverride],
) -> OrgSmsTemplateOverride | None:
    """Pick the active override for a template, if any.

    When several active overrides match, the most recently updated one wins;
    equal timestamps fall back to the greatest id. Naive timestamps count as
    UTC. Input order never matters.
    """
    candidates = [
        o for o in overrides if o.sms_template_id == template.id and o.is_active
    ]
    if not candidates:
        return None
    return max(candidates, key=lambda o: (_as_utc(o.updated_at), o.id))


def resolve_effective_body(
    template: SmsTemplate,
    overrides: Iterable[OrgSmsTemplateOverride],
) -> str:
    """Body an organization actually sends for a template."""
    override = find_active_override(template, overrides)
    return override.override_body if override else template.default_body


def resolve_templates_for_org(
    templates: Iterable[SmsTemplate],
    overrides: Iterable[OrgSmsTemplateOverride],
) -> list[EffectiveTemplate]:
    """Resolve every template against one organization's overrides."""
    overrides = list(overrides)
    resolved = []
    for template in templates:
        override = find_active_override(template, overrides)
        resolved.append(
            EffectiveTemplate(
                template=template,
                effective_body=override.override_body if override else template.default_body,
                override=override,
            )
        )
    return resolved


# ==================== Variable Substitution ====================


def substitute_variables(
    body: str,
    variables: Mapping[str, str] | None = None,
    *,
    use_samples: bool = True,
) -> str:
    """Replace ``{{name}}`` placeholders in a message body.

    Values come from ``variables`` first, then from SAMPLE_VARIABLES when
    ``use_samples`` is set. Names are matched exactly and case-sensitively.
    Placeholders without a value are left as they are. Replacement is a
    single pass, so a substituted value is never expanded again.
    """
    values: dict[str, str] = dict(SAMPLE_VARIABLES) if use_samples else {}
    if variables:
        values.update(variables)
    if not values:
        return body

    pattern = re.compile("|".join(re.escape("{{" + name + "}}") for name in values))
    return pattern.sub(lambda match: str(values[match.group(0)[2:-2]]), body)


@dataclass(frozen=True)
class MessagePreview:
    body: str
    character_count: int
    segment_count: int


def count_segments(text: str, segment_length: int = DEFAULT_SEGMENT_LENGTH) -> int:
    """Number of SMS segments needed for ``text``."""
    return math.ceil(len(text) / segment_length)


def build_preview(
    body: str,
    variables: Mapping[str, str] | None = None,
    segment_length: int = DEFAULT_SEGMENT_LENGTH,
) -> MessagePreview:
    """Render a body with sample values and measure it."""
    rendered = substitute_variables(body, variables)
    return MessagePreview(
        body=rendered,
        character_count=len(rendered),
        segment_count=count_segments(rendered, segment_length),
    )
