"""API routes."""

from sms_admin.api.routes.activity import router as activity_router
from sms_admin.api.routes.dashboard import router as dashboard_router
from sms_admin.api.routes.health import router as health_router
from sms_admin.api.routes.organizations import router as organizations_router
from sms_admin.api.routes.templates import router as templates_router

__all__ = [
    "activity_router",
    "dashboard_router",
    "health_router",
    "organizations_router",
    "templates_router",
]
