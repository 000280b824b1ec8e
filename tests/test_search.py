"""Tests for global search and display formatting."""

import pytest

from sms_admin.models import (
    MessageDirection,
    MessageStatus,
    Organization,
    SmsMessageLog,
    SmsTemplate,
    TemplateType,
)
from sms_admin.services.formatting import format_phone_number
from sms_admin.services.search import SearchResultType, global_search


@pytest.fixture
def orgs():
    """Create organizations to search."""
    return [
        Organization(id=f"org-{i}", name=f"Realty Group {i}", sms_enabled=i % 2 == 0)
        for i in range(1, 8)
    ] + [Organization(id="org-x", name="Pacific Home Loans", country="CA")]


@pytest.fixture
def templates():
    """Create templates to search."""
    return [
        SmsTemplate(
            id="tpl-1",
            key="PAYMENT_REMINDER",
            name="Payment Reminder",
            type=TemplateType.TRANSACTIONAL,
            default_body="{{first_name}}, your payment is due",
        ),
        SmsTemplate(
            id="tpl-2",
            key="NEW_LISTING",
            name="New Listing",
            type=TemplateType.MARKETING,
            default_body="A new home just listed in your area",
        ),
    ]


@pytest.fixture
def logs():
    """Create message logs to search."""
    return [
        SmsMessageLog(
            id="log-1",
            org_id="org-1",
            direction=MessageDirection.OUTBOUND,
            phone_number="+15551234567",
            body="Your payment is due",
            status=MessageStatus.DELIVERED,
        ),
        SmsMessageLog(
            id="log-2",
            org_id="org-1",
            direction=MessageDirection.INBOUND,
            phone_number="+15559876543",
            body="STOP",
            status=MessageStatus.RECEIVED,
        ),
    ]


def test_blank_query_matches_nothing(orgs, templates, logs):
    """Test that a blank query returns no results."""
    assert global_search("   ", orgs, templates, logs) == []


def test_org_results_are_limited(orgs, templates, logs):
    """Test the per-kind result limit."""
    results = global_search("realty", orgs, templates, logs)
    assert [r.id for r in results] == ["org-1", "org-2", "org-3", "org-4", "org-5"]
    assert all(r.type == SearchResultType.ORG for r in results)

    results = global_search("realty", orgs, templates, logs, limit=2)
    assert len(results) == 2


def test_org_subtitle(orgs, templates, logs):
    """Test organization result display."""
    [result] = global_search("pacific", orgs, templates, logs)
    assert result.title == "Pacific Home Loans"
    assert result.subtitle == "CA · SMS Disabled"


def test_matches_across_kinds_in_order(orgs, templates, logs):
    """Test that results are grouped by kind, organizations first."""
    results = global_search("PAYMENT", orgs, templates, logs)
    assert [(r.type, r.id) for r in results] == [
        (SearchResultType.TEMPLATE, "tpl-1"),
        (SearchResultType.LOG, "log-1"),
    ]
    assert results[0].subtitle == "PAYMENT_REMINDER · TRANSACTIONAL"
    assert results[1].subtitle == "OUTBOUND · DELIVERED"
    assert results[1].title == "+1 (555) 123-4567"


def test_search_by_phone_and_key(orgs, templates, logs):
    """Test phone number and template key matches."""
    results = global_search("9876", orgs, templates, logs)
    assert [r.id for r in results] == ["log-2"]

    results = global_search("new_listing", orgs, templates, logs)
    assert [r.id for r in results] == ["tpl-2"]


def test_search_by_org_id(orgs, templates, logs):
    """Test that organizations match on id."""
    results = global_search("org-x", orgs, templates, logs)
    assert [r.id for r in results] == ["org-x"]


@pytest.mark.parametrize(
    "phone,expected",
    [
        ("+15551234567", "+1 (555) 123-4567"),
        ("15551234567", "+1 (555) 123-4567"),
        ("5551234567", "(555) 123-4567"),
        ("(555) 123-4567", "(555) 123-4567"),
        ("+442071234567", "+442071234567"),
        ("12345", "12345"),
    ],
)
def test_format_phone_number(phone, expected):
    """Test North American phone formatting."""
    assert format_phone_number(phone) == expected
