"""Item × month count matrix.

Produces one count series per distinct primary key (an item, or a vendor)
aligned positionally to a month axis that the caller supplies. The axis is
reused from the fulfillments-over-time projection so both charts share
exactly the same labels in the same order.

Every distinct key gets a series; no top-N truncation happens here.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from fulfillment_analytics.analyses.colors import ColorAssigner, HashColorAssigner
from fulfillment_analytics.analyses.time_buckets import MonthBucketing, month_label
from fulfillment_analytics.foundation.records import FulfillmentRecord


@dataclass(frozen=True)
class MatrixSeries:
    """Counts for one primary key, aligned to the matrix axis.

    Attributes
    ----------
    name:
        Primary key of the series (e.g. item name).
    counts:
        Fulfillment count per axis label, zero where the key had no activity.
    color:
        Color assigned for chart rendering, ``None`` when not assigned.
    """

    name: str
    counts: tuple[int, ...]
    color: str | None = None

    @property
    def total(self) -> int:
        return sum(self.counts)


@dataclass(frozen=True)
class MultiSeriesMatrix:
    """A shared month axis plus one aligned count series per key."""

    axis: tuple[str, ...] = ()
    series: tuple[MatrixSeries, ...] = ()

    def __post_init__(self) -> None:
        """Validate series alignment."""
        for item in self.series:
            if len(item.counts) != len(self.axis):
                raise ValueError(
                    f"Series '{item.name}' has {len(item.counts)} counts "
                    f"but the axis has {len(self.axis)} labels"
                )

    def __len__(self) -> int:
        return len(self.series)

    @property
    def names(self) -> list[str]:
        return [item.name for item in self.series]

    def get(self, name: str) -> MatrixSeries | None:
        for item in self.series:
            if item.name == name:
                return item
        return None

    def as_dict(self) -> dict[str, object]:
        return {
            "axis": list(self.axis),
            "series": [
                {"name": item.name, "counts": list(item.counts), "color": item.color}
                for item in self.series
            ],
        }


def count_by_key_and_month(
    records: Iterable[FulfillmentRecord],
    key: Callable[[FulfillmentRecord], str],
    bucketing: MonthBucketing = MonthBucketing.YEAR_MONTH,
) -> dict[str, dict[str, int]]:
    """Two-level counter ``{key: {month label: count}}`` in first-seen key order."""
    counts: dict[str, dict[str, int]] = {}
    for record in records:
        by_month = counts.setdefault(key(record), {})
        label = month_label(record.created_at, bucketing)
        by_month[label] = by_month.get(label, 0) + 1
    return counts


def build_item_month_matrix(
    records: Iterable[FulfillmentRecord],
    axis: Sequence[str],
    *,
    key: Callable[[FulfillmentRecord], str] = lambda r: r.item_name,
    bucketing: MonthBucketing = MonthBucketing.YEAR_MONTH,
    color_assigner: ColorAssigner | None = None,
) -> MultiSeriesMatrix:
    """Build the per-key monthly count matrix.

    Parameters
    ----------
    records:
        Filtered fulfillment records.
    axis:
        Month labels to align every series to. Must have been produced with
        the same ``bucketing`` (normally ``count_by_month(...).labels``).
    key:
        Primary key extractor, item name by default.
    bucketing:
        Label scheme used to place records on the axis.
    color_assigner:
        Strategy used to color each series; hash-based when omitted.

    Returns
    -------
    MultiSeriesMatrix
        One series per distinct key in first-seen order.

    Examples
    --------
    >>> from datetime import datetime
    >>> from fulfillment_analytics.foundation.records import FulfillmentRecord
    >>> records = [
    ...     FulfillmentRecord("A", 1, datetime(2024, 1, 5), "C1"),
    ...     FulfillmentRecord("B", 1, datetime(2024, 2, 5), "C1"),
    ... ]
    >>> matrix = build_item_month_matrix(records, ["Jan 2024", "Feb 2024"])
    >>> [s.counts for s in matrix.series]
    [(1, 0), (0, 1)]
    """
    if color_assigner is None:
        color_assigner = HashColorAssigner()

    axis = tuple(axis)
    counts = count_by_key_and_month(records, key, bucketing)

    series = []
    for name, by_month in counts.items():
        unplaced = set(by_month) - set(axis)
        if unplaced:
            raise ValueError(
                f"Month labels {sorted(unplaced)} for '{name}' are not on the axis"
            )
        series.append(
            MatrixSeries(
                name=name,
                counts=tuple(by_month.get(label, 0) for label in axis),
                color=color_assigner.assign(name),
            )
        )

    return MultiSeriesMatrix(axis=axis, series=tuple(series))
