"""Dashboard summary and global search."""

import asyncio

from fastapi import APIRouter

from sms_admin.api.dependencies import SettingsDep, StorageDep
from sms_admin.api.schemas import DeliveryStatsResponse
from sms_admin.models import SmsMessageLog
from sms_admin.models.base import AdminModel
from sms_admin.services.search import SearchResultType, global_search
from sms_admin.services.stats import calculate_delivery_stats

router = APIRouter(tags=["Dashboard"])


class DashboardSummary(AdminModel):
    total_organizations: int
    sms_enabled_organizations: int
    sms_ready_organizations: int
    total_templates: int
    active_templates: int
    delivery_stats: DeliveryStatsResponse
    recent_logs: list[SmsMessageLog]


class SearchHit(AdminModel):
    type: SearchResultType
    id: str
    title: str
    subtitle: str


@router.get("/dashboard", response_model=DashboardSummary)
async def dashboard(storage: StorageDep, app_settings: SettingsDep) -> DashboardSummary:
    """Headline counts, overall delivery stats and the latest messages."""
    orgs, templates, logs = await asyncio.gather(
        storage.list_organizations(),
        storage.list_templates(),
        storage.list_logs(),
    )

    return DashboardSummary(
        total_organizations=len(orgs),
        sms_enabled_organizations=sum(1 for o in orgs if o.sms_enabled),
        sms_ready_organizations=sum(1 for o in orgs if o.sms_ready),
        total_templates=len(templates),
        active_templates=sum(1 for t in templates if t.is_active),
        delivery_stats=DeliveryStatsResponse.from_stats(calculate_delivery_stats(logs)),
        recent_logs=logs[: app_settings.recent_logs_limit],
    )


@router.get("/search", response_model=list[SearchHit])
async def search(q: str, storage: StorageDep, app_settings: SettingsDep) -> list[SearchHit]:
    """Search organizations, templates and message logs."""
    if not q.strip():
        return []

    orgs, templates, logs = await asyncio.gather(
        storage.list_organizations(),
        storage.list_templates(),
        storage.list_logs(),
    )
    results = global_search(q, orgs, templates, logs, limit=app_settings.search_results_per_kind)
    return [
        SearchHit(type=r.type, id=r.id, title=r.title, subtitle=r.subtitle)
        for r in results
    ]
