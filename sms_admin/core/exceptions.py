"""Custom exceptions for the application."""

from typing import Any


class AppException(Exception):
    """Base exception for application errors."""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}


class ConfigurationError(AppException):
    """Raised when there's a configuration problem."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message, code="CONFIGURATION_ERROR", details=details)


class NotFoundError(AppException):
    """Base class for missing records."""


class OrganizationNotFound(NotFoundError):
    """Raised when an organization is not found."""

    def __init__(self, org_id: str) -> None:
        super().__init__(
            f"Organization not found: {org_id}",
            code="ORGANIZATION_NOT_FOUND",
            details={"org_id": org_id},
        )


class TemplateNotFound(NotFoundError):
    """Raised when an SMS template is not found."""

    def __init__(self, template_id: str) -> None:
        super().__init__(
            f"Template not found: {template_id}",
            code="TEMPLATE_NOT_FOUND",
            details={"template_id": template_id},
        )


class OverrideNotFound(NotFoundError):
    """Raised when a template override is not found."""

    def __init__(self, override_id: str) -> None:
        super().__init__(
            f"Override not found: {override_id}",
            code="OVERRIDE_NOT_FOUND",
            details={"override_id": override_id},
        )


class DuplicateOverride(AppException):
    """Raised when an organization already overrides a template."""

    def __init__(self, org_id: str, template_id: str, existing_id: str) -> None:
        super().__init__(
            f"Organization {org_id} already overrides template {template_id}",
            code="DUPLICATE_OVERRIDE",
            details={
                "org_id": org_id,
                "template_id": template_id,
                "existing_override_id": existing_id,
            },
        )
