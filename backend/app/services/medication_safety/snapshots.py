"""
Caller-side helpers for preparing vitals and labs.

The threshold evaluator takes the first value of each type it finds, so
callers that care about recency resolve the latest value per type first.
"""

from datetime import datetime, timezone
from typing import List, Sequence, TypeVar

from .models import Measurement

M = TypeVar("M", bound=Measurement)

_OLDEST = datetime.min.replace(tzinfo=timezone.utc)


def _sort_key(measurement: Measurement) -> datetime:
    recorded = measurement.recorded_at
    if recorded is None:
        return _OLDEST
    if recorded.tzinfo is None:
        return recorded.replace(tzinfo=timezone.utc)
    return recorded


def latest_per_type(snapshots: Sequence[M]) -> List[M]:
    """
    Newest snapshot of each type, newest types first.
    Undated snapshots rank oldest; ties keep input order.
    """
    ordered = sorted(snapshots, key=_sort_key, reverse=True)

    latest: List[M] = []
    seen = set()
    for snapshot in ordered:
        if snapshot.type in seen:
            continue
        seen.add(snapshot.type)
        latest.append(snapshot)
    return latest
