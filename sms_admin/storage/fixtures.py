"""Development seed data for the in-memory store."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from sms_admin.models import (
    AuditAction,
    AuditEntityType,
    AuditLogEntry,
    FieldChange,
    JobStatus,
    MessageDirection,
    MessageStatus,
    Organization,
    OrgSmsTemplateOverride,
    ProvisioningJob,
    ProvisioningStep,
    PROVISIONING_STEP_NAMES,
    QuietHoursConfig,
    SendType,
    SmsJob,
    SmsJobMeta,
    SmsMessageLog,
    SmsSuppression,
    SmsTemplate,
    SuppressionReason,
    SuppressionScope,
    SuppressionSource,
    TemplateType,
    TemplateVersion,
)
from sms_admin.models.base import utcnow


@dataclass
class Fixtures:
    """Records to load into a store."""

    organizations: list[Organization] = field(default_factory=list)
    templates: list[SmsTemplate] = field(default_factory=list)
    overrides: list[OrgSmsTemplateOverride] = field(default_factory=list)
    jobs: list[SmsJob] = field(default_factory=list)
    logs: list[SmsMessageLog] = field(default_factory=list)
    suppressions: list[SmsSuppression] = field(default_factory=list)
    provisioning_jobs: list[ProvisioningJob] = field(default_factory=list)
    template_versions: list[TemplateVersion] = field(default_factory=list)
    audit_log: list[AuditLogEntry] = field(default_factory=list)
    quiet_hours: list[QuietHoursConfig] = field(default_factory=list)


def _ago(now: datetime, days: float = 0, hours: float = 0) -> datetime:
    return now - timedelta(days=days, hours=hours)


def _organizations(now: datetime) -> list[Organization]:
    return [
        Organization(
            id="org-1",
            name="Acme Realty Group",
            sms_enabled=True,
            sms_ready=True,
            twilio_subaccount_sid="AC1a2b3c4d5e6f7a8b9c0d1e2f3a4b5c6d",
            marketing_messaging_service_sid="MG11111111111111111111111111111111",
            transactional_messaging_service_sid="MG22222222222222222222222222222222",
            a2p_brand_id="BN0a1b2c3d4e5f60718293a4b5c6d7e8f9",
            a2p_campaign_ids=["CM001", "CM002"],
            country="US",
            created_at=_ago(now, days=180),
            updated_at=_ago(now, days=5),
        ),
        Organization(
            id="org-2",
            name="Sunset Mortgage Co",
            sms_enabled=True,
            sms_ready=False,
            twilio_subaccount_sid="AC9f8e7d6c5b4a39281706f5e4d3c2b1a0",
            country="US",
            created_at=_ago(now, days=90),
            updated_at=_ago(now, days=2),
        ),
        Organization(
            id="org-3",
            name="Metro Property Management",
            sms_enabled=False,
            sms_ready=True,
            twilio_subaccount_sid="AC0f1e2d3c4b5a69788796a5b4c3d2e1f0",
            marketing_messaging_service_sid="MG33333333333333333333333333333333",
            transactional_messaging_service_sid="MG44444444444444444444444444444444",
            country="US",
            created_at=_ago(now, days=240),
            updated_at=_ago(now, hours=5),
        ),
        Organization(
            id="org-4",
            name="Pacific Home Loans",
            sms_enabled=False,
            sms_ready=False,
            country="US",
            created_at=_ago(now, days=14),
            updated_at=_ago(now, days=14),
        ),
        Organization(
            id="org-5",
            name="Maple Leaf Realty",
            sms_enabled=False,
            sms_ready=False,
            country="CA",
            created_at=_ago(now, days=30),
            updated_at=_ago(now, days=30),
        ),
    ]


def _templates(now: datetime) -> list[SmsTemplate]:
    return [
        SmsTemplate(
            id="tpl-1",
            key="EQUITY_ALERT",
            name="Home Equity Change Alert",
            type=TemplateType.TRANSACTIONAL,
            default_body=(
                "Hi {{first_name}}, your equity changed by {{equity_change}}. "
                "View: {{short_link}} Reply STOP to opt out."
            ),
            description="Sent when homeowner equity changes significantly",
            variables=["first_name", "equity_change", "short_link"],
            created_at=_ago(now, days=200),
            updated_at=_ago(now, days=10),
        ),
        SmsTemplate(
            id="tpl-2",
            key="MARKETING_NEW_LISTING",
            name="New Property Listing",
            type=TemplateType.MARKETING,
            default_body=(
                "{{first_name}}, check out this new {{property_type}} in {{location}}: "
                "{{short_link}} Reply STOP to unsubscribe."
            ),
            description="Marketing message for new property listings",
            variables=["first_name", "property_type", "location", "short_link"],
            created_at=_ago(now, days=180),
            updated_at=_ago(now, days=5),
        ),
        SmsTemplate(
            id="tpl-3",
            key="PAYMENT_REMINDER",
            name="Payment Reminder",
            type=TemplateType.TRANSACTIONAL,
            default_body=(
                "{{first_name}}, your payment of ${{amount}} is due on {{due_date}}. "
                "Pay now: {{short_link}}"
            ),
            description="Reminder for upcoming payments",
            variables=["first_name", "amount", "due_date", "short_link"],
            created_at=_ago(now, days=150),
            updated_at=_ago(now, days=20),
        ),
        SmsTemplate(
            id="tpl-4",
            key="SPECIAL_PROMOTION",
            name="Special Promotion",
            type=TemplateType.MARKETING,
            default_body=(
                "{{first_name}}, limited time: {{promotion_details}}. "
                "Details: {{short_link}} Reply STOP to opt out."
            ),
            variables=["first_name", "promotion_details", "short_link"],
            created_at=_ago(now, days=60),
            updated_at=_ago(now, days=1),
        ),
        SmsTemplate(
            id="tpl-5",
            key="VERIFICATION_CODE",
            name="Verification Code",
            type=TemplateType.TRANSACTIONAL,
            default_body="Your verification code is {{code}}. It expires in 10 minutes.",
            variables=["code"],
            created_at=_ago(now, days=300),
            updated_at=_ago(now, days=300),
        ),
        SmsTemplate(
            id="tpl-6",
            key="MONTHLY_NEWSLETTER",
            name="Monthly Market Newsletter",
            type=TemplateType.MARKETING,
            default_body="{{first_name}}, this month: {{newsletter_summary}}. More: {{short_link}}",
            variables=["first_name", "newsletter_summary", "short_link"],
            is_active=False,
            created_at=_ago(now, days=120),
            updated_at=_ago(now, days=45),
        ),
    ]


def _overrides(now: datetime) -> list[OrgSmsTemplateOverride]:
    return [
        OrgSmsTemplateOverride(
            id="override-1",
            org_id="org-1",
            sms_template_id="tpl-1",
            override_body=(
                "Hi {{first_name}}! Acme Realty here. Your home equity moved by "
                "{{equity_change}}. See more: {{short_link}} Reply STOP to opt out."
            ),
            is_active=True,
            created_at=_ago(now, days=30),
            updated_at=_ago(now, days=3),
        ),
        OrgSmsTemplateOverride(
            id="override-2",
            org_id="org-1",
            sms_template_id="tpl-2",
            override_body="Acme Realty: new {{property_type}} just listed! {{short_link}}",
            is_active=False,
            created_at=_ago(now, days=25),
            updated_at=_ago(now, days=25),
        ),
        OrgSmsTemplateOverride(
            id="override-5",
            org_id="org-1",
            sms_template_id="tpl-3",
            override_body=(
                "Acme Realty reminder: ${{amount}} due {{due_date}}. Pay: {{short_link}}"
            ),
            is_active=True,
            created_at=_ago(now, hours=3),
            updated_at=_ago(now, hours=3),
        ),
        OrgSmsTemplateOverride(
            id="override-3",
            org_id="org-2",
            sms_template_id="tpl-3",
            override_body=(
                "Sunset Mortgage: {{first_name}}, ${{amount}} is due {{due_date}}. "
                "{{short_link}}"
            ),
            is_active=True,
            created_at=_ago(now, days=40),
            updated_at=_ago(now, days=8),
        ),
    ]


def _logs(now: datetime) -> list[SmsMessageLog]:
    rows = [
        # (id, org, direction, phone, template, status, failure, hours ago)
        ("log-1", "org-1", MessageDirection.OUTBOUND, "+15551234567", "tpl-1", MessageStatus.DELIVERED, None, 1),
        ("log-2", "org-1", MessageDirection.OUTBOUND, "+15552345678", "tpl-3", MessageStatus.DELIVERED, None, 2),
        ("log-3", "org-1", MessageDirection.OUTBOUND, "+15553456789", "tpl-2", MessageStatus.FAILED, "Carrier violation", 4),
        ("log-4", "org-1", MessageDirection.INBOUND, "+15553456789", None, MessageStatus.RECEIVED, None, 3),
        ("log-5", "org-1", MessageDirection.OUTBOUND, "+15554567890", "tpl-1", MessageStatus.SENT, None, 0.5),
        ("log-6", "org-2", MessageDirection.OUTBOUND, "+15555678901", "tpl-3", MessageStatus.DELIVERED, None, 6),
        ("log-7", "org-2", MessageDirection.OUTBOUND, "+15556789012", "tpl-3", MessageStatus.FAILED, "Unreachable destination", 8),
        ("log-8", "org-2", MessageDirection.OUTBOUND, "+15557890123", "tpl-5", MessageStatus.QUEUED, None, 0.1),
        ("log-9", "org-2", MessageDirection.INBOUND, "+15555678901", None, MessageStatus.RECEIVED, None, 5),
        ("log-10", "org-3", MessageDirection.OUTBOUND, "+15558901234", "tpl-1", MessageStatus.DELIVERED, None, 30),
        ("log-11", "org-3", MessageDirection.OUTBOUND, "+15559012345", "tpl-4", MessageStatus.DELIVERED, None, 32),
        ("log-12", "org-1", MessageDirection.OUTBOUND, "+15550123456", "tpl-5", MessageStatus.DELIVERED, None, 48),
    ]
    logs = []
    for log_id, org_id, direction, phone, template_id, status, failure, hours in rows:
        created = _ago(now, hours=hours)
        if direction == MessageDirection.INBOUND:
            body = "STOP" if log_id == "log-4" else "Thanks, got it"
        else:
            body = "Hi John, this is a message from your agent."
        logs.append(
            SmsMessageLog(
                id=log_id,
                org_id=org_id,
                direction=direction,
                phone_number=phone,
                body=body,
                sms_template_id=template_id,
                status=status,
                failure_reason=failure,
                num_segments=1,
                created_at=created,
                updated_at=created,
            )
        )
    return logs


def _jobs(now: datetime) -> list[SmsJob]:
    return [
        SmsJob(
            id="job-1",
            org_id="org-1",
            sms_template_id="tpl-2",
            status=JobStatus.COMPLETE,
            send_type=SendType.IMMEDIATE,
            created_at=_ago(now, days=2),
            updated_at=_ago(now, days=2),
            meta=SmsJobMeta(campaign_name="Spring listings", recipient_count=250),
        ),
        SmsJob(
            id="job-2",
            org_id="org-2",
            sms_template_id="tpl-3",
            status=JobStatus.PENDING,
            send_type=SendType.SCHEDULED,
            scheduled_at=now + timedelta(days=1),
            created_at=_ago(now, hours=6),
            updated_at=_ago(now, hours=6),
            meta=SmsJobMeta(audience="Borrowers with payments due", recipient_count=42),
        ),
    ]


def _suppressions(now: datetime) -> list[SmsSuppression]:
    return [
        SmsSuppression(
            id="sup-1",
            org_id="org-1",
            phone_number="+15553456789",
            suppression_scope=SuppressionScope.ORG,
            reason=SuppressionReason.STOP,
            source=SuppressionSource.INBOUND_SMS,
            created_at=_ago(now, hours=3),
            updated_at=_ago(now, hours=3),
        ),
        SmsSuppression(
            id="sup-2",
            org_id="org-2",
            phone_number="+15556789012",
            suppression_scope=SuppressionScope.NUMBER,
            reason=SuppressionReason.BOUNCE,
            source=SuppressionSource.ADMIN,
            created_at=_ago(now, days=1),
            updated_at=_ago(now, days=1),
        ),
        SmsSuppression(
            id="sup-3",
            org_id="org-2",
            phone_number="+15551112222",
            suppression_scope=SuppressionScope.GLOBAL,
            reason=SuppressionReason.MANUAL,
            source=SuppressionSource.IMPORT,
            created_at=_ago(now, days=20),
            updated_at=_ago(now, days=20),
        ),
        SmsSuppression(
            id="sup-6",
            org_id="org-3",
            phone_number="+15551234567",
            suppression_scope=SuppressionScope.ORG,
            reason=SuppressionReason.BOUNCE,
            source=SuppressionSource.ADMIN,
            created_at=_ago(now, days=3),
            updated_at=_ago(now, days=3),
        ),
    ]


def _provisioning_jobs(now: datetime) -> list[ProvisioningJob]:
    complete = [ProvisioningStep(name=n, status=JobStatus.COMPLETE) for n in PROVISIONING_STEP_NAMES]
    partial = [
        ProvisioningStep(name=PROVISIONING_STEP_NAMES[0], status=JobStatus.COMPLETE),
        ProvisioningStep(name=PROVISIONING_STEP_NAMES[1], status=JobStatus.COMPLETE),
        ProvisioningStep(
            name=PROVISIONING_STEP_NAMES[2],
            status=JobStatus.FAILED,
            message="Messaging service quota exceeded",
        ),
        ProvisioningStep(name=PROVISIONING_STEP_NAMES[3]),
        ProvisioningStep(name=PROVISIONING_STEP_NAMES[4]),
    ]
    return [
        ProvisioningJob(
            id="prov-1",
            org_id="org-4",
            status=JobStatus.PENDING,
            steps=[ProvisioningStep(name=n) for n in PROVISIONING_STEP_NAMES],
            created_at=_ago(now, hours=12),
            updated_at=_ago(now, hours=12),
        ),
        ProvisioningJob(
            id="prov-2",
            org_id="org-1",
            status=JobStatus.COMPLETE,
            steps=complete,
            created_at=_ago(now, days=170),
            updated_at=_ago(now, days=165),
        ),
        ProvisioningJob(
            id="prov-3",
            org_id="org-2",
            status=JobStatus.FAILED,
            steps=partial,
            created_at=_ago(now, days=60),
            updated_at=_ago(now, days=59),
            error_message="Messaging service quota exceeded",
        ),
    ]


def _template_versions(now: datetime, templates: list[SmsTemplate]) -> list[TemplateVersion]:
    by_id = {t.id: t for t in templates}
    history = [
        # (template, version, name, body, author id, author name, note, days ago)
        ("tpl-1", 1, "Equity Alert",
         "{{first_name}}, your equity changed: {{equity_change}}. Details: {{short_link}} STOP to opt out.",
         "admin-1", "Sarah Admin", None, 200),
        ("tpl-1", 2, "Home Equity Change Alert",
         "Hello {{first_name}}, your home equity has changed by {{equity_change}}. "
         "Check details: {{short_link}} Text STOP to unsubscribe.",
         "admin-2", "Mike Support", "Made greeting more formal", 45),
        ("tpl-1", 3, "Home Equity Change Alert", by_id["tpl-1"].default_body,
         "admin-1", "Sarah Admin", "Updated wording for clarity", 10),
        ("tpl-3", 1, "Payment Reminder",
         "{{first_name}}, payment of {{amount}} due {{due_date}}. Pay: {{short_link}}",
         "admin-2", "Mike Support", None, 150),
        ("tpl-3", 2, "Payment Reminder", by_id["tpl-3"].default_body,
         "admin-1", "Sarah Admin", "Added dollar sign to amount", 20),
    ]
    versions = []
    for template_id, version, name, body, author, author_name, note, days in history:
        template = by_id[template_id]
        versions.append(
            TemplateVersion(
                id=f"ver-{template_id}-{version}",
                template_id=template_id,
                version=version,
                name=name,
                key=template.key,
                type=template.type,
                default_body=body,
                description=template.description,
                variables=list(template.variables),
                changed_by=author,
                changed_by_name=author_name,
                change_note=note,
                created_at=_ago(now, days=days),
            )
        )
    return versions


def _audit_log(now: datetime) -> list[AuditLogEntry]:
    return [
        AuditLogEntry(
            id="audit-1",
            timestamp=_ago(now, hours=3),
            action=AuditAction.CREATE,
            entity_type=AuditEntityType.OVERRIDE,
            entity_id="override-5",
            entity_name="Acme Realty Group - Payment Reminder",
            user_id="admin-2",
            user_name="Mike Support",
            details="Created template override for Acme Realty Group",
        ),
        AuditLogEntry(
            id="audit-2",
            timestamp=_ago(now, hours=5),
            action=AuditAction.TOGGLE,
            entity_type=AuditEntityType.ORG,
            entity_id="org-3",
            entity_name="Metro Property Management",
            user_id="admin-1",
            user_name="Sarah Admin",
            details="Disabled SMS for organization",
            changes=[FieldChange(field="smsEnabled", old_value="true", new_value="false")],
        ),
        AuditLogEntry(
            id="audit-3",
            timestamp=_ago(now, hours=12),
            action=AuditAction.TRIGGER,
            entity_type=AuditEntityType.PROVISIONING,
            entity_id="prov-1",
            entity_name="Pacific Home Loans",
            user_id="admin-2",
            user_name="Mike Support",
            details="Triggered provisioning job",
        ),
        AuditLogEntry(
            id="audit-4",
            timestamp=_ago(now, days=3),
            action=AuditAction.CREATE,
            entity_type=AuditEntityType.SUPPRESSION,
            entity_id="sup-6",
            entity_name="+1 (555) 123-4567",
            user_id="admin-2",
            user_name="Mike Support",
            details="Manually added suppression for bounced number",
        ),
    ]


def _quiet_hours(now: datetime) -> list[QuietHoursConfig]:
    return [
        QuietHoursConfig(
            id="qh-1",
            org_id="org-1",
            enabled=True,
            start_time="21:00",
            end_time="09:00",
            timezone="America/New_York",
            apply_to_marketing=True,
            apply_to_transactional=False,
            created_at=_ago(now, days=30),
            updated_at=_ago(now, days=5),
        ),
        QuietHoursConfig(
            id="qh-2",
            org_id="org-4",
            enabled=True,
            start_time="20:00",
            end_time="08:00",
            timezone="America/Los_Angeles",
            apply_to_marketing=True,
            apply_to_transactional=True,
            created_at=_ago(now, days=60),
            updated_at=_ago(now, days=10),
        ),
    ]


def build_demo_fixtures(now: datetime | None = None) -> Fixtures:
    """Build the development data set with timestamps relative to ``now``."""
    now = now or utcnow()
    templates = _templates(now)
    return Fixtures(
        organizations=_organizations(now),
        templates=templates,
        overrides=_overrides(now),
        jobs=_jobs(now),
        logs=_logs(now),
        suppressions=_suppressions(now),
        provisioning_jobs=_provisioning_jobs(now),
        template_versions=_template_versions(now, templates),
        audit_log=_audit_log(now),
        quiet_hours=_quiet_hours(now),
    )
