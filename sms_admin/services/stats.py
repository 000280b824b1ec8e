"""Delivery statistics over message logs."""

from collections import Counter
from collections.abc import Iterable
from dataclasses import asdict, dataclass
from typing import Any

from sms_admin.models.message import MessageStatus
from sms_admin.services.fields import get_field, plain_value, round_half_up


@dataclass(frozen=True)
class DeliveryStats:
    """Counts per status plus outbound delivery and failure rates."""

    total: int = 0
    delivered: int = 0
    failed: int = 0
    sent: int = 0
    queued: int = 0
    received: int = 0
    delivery_rate: int = 0  # percent of outbound
    failure_rate: int = 0  # percent of outbound

    @property
    def outbound(self) -> int:
        return self.total - self.received

    def to_dict(self) -> dict[str, int]:
        return asdict(self)


def _percent(part: int, whole: int) -> int:
    if whole <= 0:
        return 0
    return round_half_up(part / whole * 100)


def calculate_delivery_stats(logs: Iterable[Any]) -> DeliveryStats:
    """Aggregate message log statuses.

    Inbound (RECEIVED) messages count towards ``total`` but are left out of the
    rate denominators, which describe outbound send outcomes only. Both rates
    are 0 when there is no outbound traffic.

    Args:
        logs: Message logs, or any objects/mappings exposing ``status``

    Returns:
        DeliveryStats for the collection
    """
    counts: Counter[str] = Counter()
    total = 0
    for log in logs:
        total += 1
        counts[plain_value(get_field(log, "status"))] += 1

    delivered = counts[MessageStatus.DELIVERED.value]
    failed = counts[MessageStatus.FAILED.value]
    received = counts[MessageStatus.RECEIVED.value]
    outbound = total - received

    return DeliveryStats(
        total=total,
        delivered=delivered,
        failed=failed,
        sent=counts[MessageStatus.SENT.value],
        queued=counts[MessageStatus.QUEUED.value],
        received=received,
        delivery_rate=_percent(delivered, outbound),
        failure_rate=_percent(failed, outbound),
    )
