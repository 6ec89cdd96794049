from __future__ import annotations

from collections.abc import Iterable

from .models import AggregatedUsageRecord, RawUsageRecord


def aggregate(records: Iterable[RawUsageRecord]) -> list[AggregatedUsageRecord]:
    """Merge raw records per application and rank them by foreground time.

    The platform may report the same application several times for one
    window (one entry per daily bucket, per launch, ...). Totals are exact
    integer sums. Applications with equal totals keep the order in which
    they were first seen.
    """
    totals: dict[str, int] = {}
    for record in records:
        totals[record.application_id] = totals.get(record.application_id, 0) + record.foreground_ms

    combined = [
        AggregatedUsageRecord(application_id=application_id, total_foreground_ms=total)
        for application_id, total in totals.items()
    ]
    # sorted() is stable, so ties stay in first-seen order.
    return sorted(combined, key=lambda item: -item.total_foreground_ms)
