"""Core module - configuration and utilities."""

from sms_admin.core.config import settings
from sms_admin.core.exceptions import (
    AppException,
    ConfigurationError,
    DuplicateOverride,
    NotFoundError,
    OrganizationNotFound,
    OverrideNotFound,
    TemplateNotFound,
)

__all__ = [
    "settings",
    "AppException",
    "ConfigurationError",
    "DuplicateOverride",
    "NotFoundError",
    "OrganizationNotFound",
    "OverrideNotFound",
    "TemplateNotFound",
]
