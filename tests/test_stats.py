"""Tests for delivery statistics."""

from sms_admin.models import MessageStatus
from sms_admin.services.fields import round_half_up
from sms_admin.services.stats import DeliveryStats, calculate_delivery_stats


def _logs(*statuses):
    return [{"status": s} for s in statuses]


def test_empty_logs():
    """Test that no logs gives all zeros."""
    stats = calculate_delivery_stats([])
    assert stats == DeliveryStats()
    assert stats.delivery_rate == 0
    assert stats.failure_rate == 0


def test_rates_exclude_inbound():
    """Test that received messages count in the total but not the rates."""
    stats = calculate_delivery_stats(
        _logs("DELIVERED", "DELIVERED", "DELIVERED", "FAILED", "RECEIVED", "SENT")
    )
    assert stats.total == 6
    assert stats.delivered == 3
    assert stats.failed == 1
    assert stats.sent == 1
    assert stats.received == 1
    assert stats.outbound == 5
    assert stats.delivery_rate == 60
    assert stats.failure_rate == 20


def test_only_inbound_messages():
    """Test that rates are 0 when there is no outbound traffic."""
    stats = calculate_delivery_stats(_logs("RECEIVED", "RECEIVED"))
    assert stats.total == 2
    assert stats.received == 2
    assert stats.delivery_rate == 0
    assert stats.failure_rate == 0


def test_rates_round_half_up():
    """Test that rates round to the nearest integer, halves up."""
    # 1 of 8 = 12.5%
    stats = calculate_delivery_stats(_logs("DELIVERED", *["QUEUED"] * 7))
    assert stats.delivery_rate == 13
    assert stats.queued == 7

    # 2 of 3 = 66.67%
    stats = calculate_delivery_stats(_logs("DELIVERED", "DELIVERED", "FAILED"))
    assert stats.delivery_rate == 67
    assert stats.failure_rate == 33


def test_accepts_enum_statuses():
    """Test that enum members and plain strings are both counted."""
    stats = calculate_delivery_stats(
        [
            {"status": MessageStatus.DELIVERED},
            {"status": "FAILED"},
        ]
    )
    assert stats.delivered == 1
    assert stats.failed == 1


def test_unknown_status_counts_in_total_only():
    """Test that an unrecognized status only adds to the total."""
    stats = calculate_delivery_stats(_logs("DELIVERED", "UNDELIVERED"))
    assert stats.total == 2
    assert stats.delivered == 1
    assert stats.delivery_rate == 50


def test_round_half_up():
    """Test rounding helper."""
    assert round_half_up(0.5) == 1
    assert round_half_up(2.5) == 3
    assert round_half_up(2.4999) == 2
    assert round_half_up(-0.5) == -1


def test_counts_add_up_to_total():
    """Test that per-status counts always sum to the total."""
    statuses = ["DELIVERED", "FAILED", "SENT", "QUEUED", "RECEIVED"]
    for n in range(1, 12):
        logs = _logs(*(statuses[i % len(statuses)] for i in range(n)))
        stats = calculate_delivery_stats(logs)
        assert stats.delivered + stats.failed + stats.sent + stats.queued + stats.received == stats.total
        assert 0 <= stats.delivery_rate <= 100
        assert 0 <= stats.failure_rate <= 100


def test_same_input_same_output():
    """Test that the calculation has no hidden state."""
    logs = _logs("DELIVERED", "FAILED", "RECEIVED")
    assert calculate_delivery_stats(logs) == calculate_delivery_stats(logs)
