"""Global search across organizations, templates and message logs."""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from itertools import islice

from sms_admin.models import Organization, SmsMessageLog, SmsTemplate
from sms_admin.services.formatting import format_phone_number


class SearchResultType(str, Enum):
    ORG = "org"
    TEMPLATE = "template"
    LOG = "log"


@dataclass(frozen=True)
class SearchResult:
    type: SearchResultType
    id: str
    title: str
    subtitle: str


def global_search(
    query: str,
    orgs: Iterable[Organization],
    templates: Iterable[SmsTemplate],
    logs: Iterable[SmsMessageLog],
    limit: int = 5,
) -> list[SearchResult]:
    """Case-insensitive substring search.

    Matches organizations on name or id, templates on name, key or body,
    and logs on phone number or body. Returns at most ``limit`` hits per
    kind, organizations first. A blank query matches nothing.
    """
    q = query.strip().lower()
    if not q:
        return []

    results: list[SearchResult] = []

    for org in islice(
        (o for o in orgs if q in o.name.lower() or q in o.id.lower()), limit
    ):
        results.append(
            SearchResult(
                type=SearchResultType.ORG,
                id=org.id,
                title=org.name,
                subtitle=f"{org.country} · {'SMS Enabled' if org.sms_enabled else 'SMS Disabled'}",
            )
        )

    for tpl in islice(
        (
            t for t in templates
            if q in t.name.lower() or q in t.key.lower() or q in t.default_body.lower()
        ),
        limit,
    ):
        results.append(
            SearchResult(
                type=SearchResultType.TEMPLATE,
                id=tpl.id,
                title=tpl.name,
                subtitle=f"{tpl.key} · {tpl.type.value}",
            )
        )

    for log in islice(
        (log for log in logs if q in log.phone_number or q in log.body.lower()), limit
    ):
        results.append(
            SearchResult(
                type=SearchResultType.LOG,
                id=log.id,
                title=format_phone_number(log.phone_number),
                subtitle=f"{log.direction.value} · {log.status.value}",
            )
        )

    return results
