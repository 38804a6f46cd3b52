"""Top-N ranking over an arbitrary grouping key.

Answers questions like:
- Which catalog items were fulfilled in the largest quantities?
- Which customers received the most units?

Ties are broken by first-seen order in the input: the accumulator keeps
insertion order and the ranking sort is stable, so two keys with the same
total keep the order in which they first appeared.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, TypeVar

from fulfillment_analytics.foundation.records import FulfillmentRecord

# Number of entries kept in a ranked projection
DEFAULT_TOP_N = 10

T = TypeVar("T")


@dataclass(frozen=True)
class RankedEntry:
    """A single (label, value) pair in a ranked projection."""

    label: str
    value: int


@dataclass(frozen=True)
class RankedSeries:
    """Ordered (label, value) pairs, descending by value.

    Attributes
    ----------
    entries:
        Ranked entries, highest value first.
    """

    entries: tuple[RankedEntry, ...] = ()

    def __post_init__(self) -> None:
        """Validate ranking order."""
        values = [entry.value for entry in self.entries]
        if any(a < b for a, b in zip(values, values[1:])):
            raise ValueError(f"Ranked values must be non-increasing: {values}")

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def labels(self) -> list[str]:
        return [entry.label for entry in self.entries]

    @property
    def values(self) -> list[int]:
        return [entry.value for entry in self.entries]

    def as_pairs(self) -> list[tuple[str, int]]:
        return [(entry.label, entry.value) for entry in self.entries]

    def as_dict(self) -> dict[str, list]:
        return {"labels": self.labels, "values": self.values}


def sum_by_key(
    records: Iterable[T],
    key: Callable[[T], str],
    measure: Callable[[T], int],
) -> dict[str, int]:
    """Accumulate ``measure`` per ``key``, preserving first-seen key order."""
    totals: dict[str, int] = {}
    for record in records:
        label = key(record)
        totals[label] = totals.get(label, 0) + measure(record)
    return totals


def rank_top_n(
    records: Iterable[T],
    key: Callable[[T], str],
    measure: Callable[[T], int],
    n: int = DEFAULT_TOP_N,
) -> RankedSeries:
    """Group records by ``key``, sum ``measure`` and keep the top ``n``.

    Parameters
    ----------
    records:
        Records to rank (already filtered to the ones that should count).
    key:
        Extracts the grouping label from a record.
    measure:
        Extracts the numeric amount summed per label.
    n:
        Maximum number of entries to keep. Fewer distinct labels are
        returned as-is with no padding.

    Returns
    -------
    RankedSeries
        Entries in descending order of summed value; ties keep first-seen
        order.

    Examples
    --------
    >>> from datetime import datetime
    >>> from fulfillment_analytics.foundation.records import FulfillmentRecord
    >>> records = [
    ...     FulfillmentRecord("A", 3, datetime(2024, 1, 1), "C1"),
    ...     FulfillmentRecord("B", 5, datetime(2024, 1, 2), "C1"),
    ... ]
    >>> rank_top_n(records, lambda r: r.item_name, lambda r: r.quantity).as_pairs()
    [('B', 5), ('A', 3)]
    """
    if n < 0:
        raise ValueError(f"n cannot be negative: {n}")

    totals = sum_by_key(records, key, measure)
    # sorted() is stable, which is what carries the first-seen tie-break
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return RankedSeries(
        entries=tuple(RankedEntry(label, value) for label, value in ranked[:n])
    )


def top_items(
    records: Iterable[FulfillmentRecord], n: int = DEFAULT_TOP_N
) -> RankedSeries:
    """Top fulfilled items by total quantity."""
    return rank_top_n(records, lambda r: r.item_name, lambda r: r.quantity, n)


def top_customers(
    records: Iterable[FulfillmentRecord], n: int = DEFAULT_TOP_N
) -> RankedSeries:
    """Top customers by total quantity received."""
    return rank_top_n(records, lambda r: r.customer_name, lambda r: r.quantity, n)
