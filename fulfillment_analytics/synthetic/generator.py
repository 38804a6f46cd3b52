from __future__ import annotations

from datetime import date, datetime, time, timedelta
import math
import random
from typing import List, Optional, Sequence

from fulfillment_analytics.foundation.records import FulfillmentRecord, FulfillmentStatus

DEFAULT_CATALOG = (
    "Gift Card $25",
    "Gift Card $50",
    "Coffee Mug",
    "Water Bottle",
    "Hoodie",
    "T-Shirt",
    "Backpack",
    "Wireless Earbuds",
    "Notebook Set",
    "Desk Plant",
    "Movie Tickets",
    "Donation Match",
)

DEFAULT_CUSTOMERS = tuple(f"Customer {i + 1}" for i in range(25))

_NON_SUCCESS = (
    FulfillmentStatus.FAILED,
    FulfillmentStatus.PENDING,
    FulfillmentStatus.CANCELLED,
)


def _weighted_choice(rng: random.Random, options: Sequence[str]) -> str:
    # Zipf-like popularity so rankings have a clear head and long tail
    weights = [1.0 / (rank + 1) for rank in range(len(options))]
    return rng.choices(options, weights=weights, k=1)[0]


def _sample_quantity(rng: random.Random, mean_q: float) -> int:
    q = max(1.0, rng.lognormvariate(mu=math.log(max(mean_q, 0.1)), sigma=0.6))
    return max(1, int(round(q)))


def generate_fulfillments(
    n: int,
    start: date,
    end: date,
    *,
    catalog: Optional[Sequence[str]] = None,
    customers: Optional[Sequence[str]] = None,
    failure_rate: float = 0.1,
    quantity_mean: float = 2.0,
    seed: Optional[int] = None,
) -> List[FulfillmentRecord]:
    """Generate ``n`` fulfillment records between ``start`` and ``end``.

    Items and customers are drawn with Zipf-like popularity. A share of
    records given by ``failure_rate`` gets a non-success status. Output is
    sorted by timestamp and identical for identical arguments and ``seed``.
    """

    if n <= 0:
        return []
    if start > end:
        raise ValueError("start date must be <= end date")
    if not 0.0 <= failure_rate <= 1.0:
        raise ValueError(f"failure_rate must be in [0, 1]: {failure_rate}")

    catalog = list(catalog if catalog is not None else DEFAULT_CATALOG)
    customers = list(customers if customers is not None else DEFAULT_CUSTOMERS)
    if not catalog or not customers:
        raise ValueError("catalog and customers must not be empty")

    rng = random.Random(seed)
    total_seconds = int(
        (datetime.combine(end, time.max) - datetime.combine(start, time.min)).total_seconds()
    )
    origin = datetime.combine(start, time.min)

    records: List[FulfillmentRecord] = []
    for _ in range(n):
        ts = origin + timedelta(seconds=rng.randrange(total_seconds + 1))
        status = (
            rng.choice(_NON_SUCCESS)
            if rng.random() < failure_rate
            else FulfillmentStatus.SUCCESS
        )
        records.append(
            FulfillmentRecord(
                item_name=_weighted_choice(rng, catalog),
                quantity=_sample_quantity(rng, quantity_mean),
                created_at=ts,
                customer_name=_weighted_choice(rng, customers),
                status=status,
            )
        )

    records.sort(key=lambda record: record.created_at)
    return records
