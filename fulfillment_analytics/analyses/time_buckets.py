"""Monthly time-bucketing of fulfillment records.

Each record is mapped to a month label and counted. The resulting axis
follows first-seen order among the records rather than calendar order, so
callers that want a chronological axis should sort their input by
timestamp first.

Bucketing modes
---------------
``YEAR_MONTH`` (default) labels buckets with the short month name and the
year ("Jan 2024"), keeping January 2023 and January 2024 apart.
``MONTH_NAME`` labels by month name only ("Jan"), which folds the same
calendar month of different years into one bucket. It exists for parity
with dashboards that were built on that behaviour.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable

from fulfillment_analytics.foundation.records import FulfillmentRecord


class MonthBucketing(str, Enum):
    """Supported month-bucket label schemes."""

    MONTH_NAME = "month_name"
    YEAR_MONTH = "year_month"


@dataclass(frozen=True)
class TimeBucketCount:
    """Number of fulfillments that fell in one month bucket."""

    label: str
    count: int

    def __post_init__(self) -> None:
        if self.count < 0:
            raise ValueError(f"Bucket count cannot be negative: {self.count}")


@dataclass(frozen=True)
class TimeSeries:
    """Ordered (month label, count) pairs.

    Attributes
    ----------
    points:
        One point per month bucket, in first-seen order.
    """

    points: tuple[TimeBucketCount, ...] = ()

    def __len__(self) -> int:
        return len(self.points)

    @property
    def labels(self) -> list[str]:
        """The month axis shared with the item/month matrix."""
        return [point.label for point in self.points]

    @property
    def counts(self) -> list[int]:
        return [point.count for point in self.points]

    def as_pairs(self) -> list[tuple[str, int]]:
        return [(point.label, point.count) for point in self.points]

    def as_dict(self) -> dict[str, list]:
        return {"labels": self.labels, "counts": self.counts}


def month_label(
    ts: datetime, bucketing: MonthBucketing = MonthBucketing.YEAR_MONTH
) -> str:
    """Return the bucket label for ``ts``.

    Month names come from ``strftime("%b")`` and therefore follow the
    process locale.

    Examples
    --------
    >>> month_label(datetime(2024, 1, 15))
    'Jan 2024'
    >>> month_label(datetime(2024, 1, 15), MonthBucketing.MONTH_NAME)
    'Jan'
    """
    if bucketing is MonthBucketing.MONTH_NAME:
        return ts.strftime("%b")
    if bucketing is MonthBucketing.YEAR_MONTH:
        return f"{ts.strftime('%b')} {ts.year:04d}"
    raise ValueError(f"Unsupported bucketing: {bucketing}")  # pragma: no cover


def count_by_month(
    records: Iterable[FulfillmentRecord],
    bucketing: MonthBucketing = MonthBucketing.YEAR_MONTH,
) -> TimeSeries:
    """Count records per month bucket.

    Parameters
    ----------
    records:
        Filtered fulfillment records.
    bucketing:
        Label scheme for the buckets.

    Returns
    -------
    TimeSeries
        One point per distinct bucket, in order of first appearance.
    """
    counts: dict[str, int] = {}
    for record in records:
        label = month_label(record.created_at, bucketing)
        counts[label] = counts.get(label, 0) + 1

    return TimeSeries(
        points=tuple(TimeBucketCount(label, count) for label, count in counts.items())
    )
