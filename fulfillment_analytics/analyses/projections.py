"""Fulfillment projections: orchestrates the aggregators into chart-ready output.

Given a collection of raw fulfillment records, the builder produces four
independent projections:

1. Top fulfilled items (ranked by total quantity)
2. Fulfillments over time (count per month bucket)
3. Top customers (ranked by total quantity received)
4. Item × month matrix (one colored count series per item)

Projections are always rebuilt from scratch. Nothing is cached between
calls, and the input collection is only read.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Iterable, Literal

import structlog

from fulfillment_analytics.analyses.colors import (
    ColorAssigner,
    ColorMode,
    make_color_assigner,
)
from fulfillment_analytics.analyses.time_buckets import (
    MonthBucketing,
    TimeSeries,
    count_by_month,
)
from fulfillment_analytics.analyses.top_n import (
    DEFAULT_TOP_N,
    RankedSeries,
    top_customers,
    top_items,
)
from fulfillment_analytics.analyses.vendor_matrix import (
    MultiSeriesMatrix,
    build_item_month_matrix,
)
from fulfillment_analytics.foundation.records import (
    FulfillmentContract,
    RawRecord,
)

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ProjectionConfig:
    """Configuration for projection building.

    Attributes
    ----------
    top_n:
        Maximum entries in the top items / top customers rankings.
    bucketing:
        Month-bucket label scheme shared by the time series and the matrix.
    color_mode:
        ``"hash"`` for stable series colors, ``"random"`` for random draws.
    color_seed:
        Seed for ``"random"`` color mode. ``None`` gives different colors on
        every build.
    """

    top_n: int = DEFAULT_TOP_N
    bucketing: MonthBucketing = MonthBucketing.YEAR_MONTH
    color_mode: ColorMode = "hash"
    color_seed: int | None = None

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.top_n < 1:
            raise ValueError(f"top_n must be at least 1: {self.top_n}")
        if not isinstance(self.bucketing, MonthBucketing):
            raise ValueError(f"Unsupported bucketing: {self.bucketing!r}")
        if self.color_mode not in ("hash", "random"):
            raise ValueError(f"Unsupported color mode: {self.color_mode!r}")

    @classmethod
    def from_mode(cls, mode: Literal["stable", "legacy"]) -> ProjectionConfig:
        """Create config from a behaviour preset.

        ``"stable"`` keeps years apart and colors deterministic. ``"legacy"``
        reproduces the original dashboard: month-name buckets and random
        colors.

        Examples
        --------
        >>> ProjectionConfig.from_mode("legacy").bucketing.value
        'month_name'
        """
        if mode == "legacy":
            return cls(bucketing=MonthBucketing.MONTH_NAME, color_mode="random")
        elif mode == "stable":
            return cls()
        raise ValueError(f"Unknown projection mode: {mode!r}")

    def color_assigner(self) -> ColorAssigner:
        return make_color_assigner(self.color_mode, seed=self.color_seed)


_DEFAULT_PROJECTION_CONFIG = ProjectionConfig()


def get_projection_config() -> ProjectionConfig:
    """Get the process-wide default projection configuration."""
    return _DEFAULT_PROJECTION_CONFIG


def set_projection_config(config: ProjectionConfig) -> None:
    """Set the process-wide default projection configuration.

    Examples
    --------
    >>> set_projection_config(ProjectionConfig(top_n=5))
    """
    global _DEFAULT_PROJECTION_CONFIG
    _DEFAULT_PROJECTION_CONFIG = config


@dataclass(frozen=True)
class FulfillmentProjections:
    """The four chart-ready projections built from one record snapshot.

    Attributes
    ----------
    top_items:
        Items ranked by total quantity fulfilled.
    fulfillments_over_time:
        Successful fulfillment count per month bucket.
    top_customers:
        Customers ranked by total quantity received.
    item_month_matrix:
        Per-item monthly counts aligned to ``fulfillments_over_time.labels``.
    record_count:
        Number of successful records the projections were built from.
    rejected_count:
        Number of malformed records excluded by the contract.
    """

    top_items: RankedSeries = field(default_factory=RankedSeries)
    fulfillments_over_time: TimeSeries = field(default_factory=TimeSeries)
    top_customers: RankedSeries = field(default_factory=RankedSeries)
    item_month_matrix: MultiSeriesMatrix = field(default_factory=MultiSeriesMatrix)
    record_count: int = 0
    rejected_count: int = 0

    def __post_init__(self) -> None:
        if list(self.item_month_matrix.axis) != self.fulfillments_over_time.labels:
            raise ValueError("Matrix axis must match the time series labels")

    @property
    def is_empty(self) -> bool:
        """True when there was no successful record to project."""
        return self.record_count == 0

    def as_dict(self) -> dict[str, object]:
        """Return JSON-serialisable representation of the projections."""
        return {
            "top_items": self.top_items.as_dict(),
            "fulfillments_over_time": self.fulfillments_over_time.as_dict(),
            "top_customers": self.top_customers.as_dict(),
            "item_month_matrix": self.item_month_matrix.as_dict(),
            "record_count": self.record_count,
            "rejected_count": self.rejected_count,
            "is_empty": self.is_empty,
        }


class ProjectionBuilder:
    """Build fulfillment projections from raw record collections."""

    def __init__(
        self,
        config: ProjectionConfig | None = None,
        color_assigner: ColorAssigner | None = None,
    ) -> None:
        self.config = config or get_projection_config()
        self._color_assigner = color_assigner
        self._contract = FulfillmentContract()

    def build(self, records: Iterable[RawRecord] | None) -> FulfillmentProjections:
        """Filter the records and compute all four projections.

        Never raises on empty, absent or partially malformed input; an empty
        result (``is_empty``) is the "no data" signal.
        """
        # Snapshot once so generators and live collections are read a single time
        snapshot = list(records) if records is not None else []
        validated = self._contract.validate_records(snapshot)
        successful = [record for record in validated.records if record.is_successful]

        if not successful:
            logger.info(
                "projections_empty",
                input_count=len(snapshot),
                rejected_count=len(validated.rejected),
            )
            return FulfillmentProjections(rejected_count=len(validated.rejected))

        over_time = count_by_month(successful, self.config.bucketing)
        matrix = build_item_month_matrix(
            successful,
            over_time.labels,
            bucketing=self.config.bucketing,
            color_assigner=self._color_assigner or self.config.color_assigner(),
        )
        projections = FulfillmentProjections(
            top_items=top_items(successful, self.config.top_n),
            fulfillments_over_time=over_time,
            top_customers=top_customers(successful, self.config.top_n),
            item_month_matrix=matrix,
            record_count=len(successful),
            rejected_count=len(validated.rejected),
        )

        logger.info(
            "projections_built",
            input_count=len(snapshot),
            record_count=projections.record_count,
            rejected_count=projections.rejected_count,
            axis_length=len(over_time),
            series_count=len(matrix),
        )
        return projections


def build_projections(
    records: Iterable[RawRecord] | None,
    config: ProjectionConfig | None = None,
    color_assigner: ColorAssigner | None = None,
) -> FulfillmentProjections:
    """Compute the four fulfillment projections for ``records``.

    Parameters
    ----------
    records:
        Raw fulfillment records (mappings or :class:`FulfillmentRecord`).
        ``None`` is treated as an empty collection.
    config:
        Projection configuration; the process default when omitted.
    color_assigner:
        Overrides the color strategy derived from ``config``.

    Returns
    -------
    FulfillmentProjections
        Well-formed, possibly empty, projections.

    Examples
    --------
    >>> from datetime import datetime
    >>> records = [
    ...     {"item": "A", "qty": 3, "created_at": datetime(2024, 1, 1), "customer": "C1", "status": "Success"},
    ...     {"item": "B", "qty": 5, "created_at": datetime(2024, 1, 2), "customer": "C2", "status": "Success"},
    ...     {"item": "A", "qty": 2, "created_at": datetime(2024, 1, 3), "customer": "C1", "status": "Failed"},
    ... ]
    >>> build_projections(records).top_items.as_pairs()
    [('B', 5), ('A', 3)]
    """
    return ProjectionBuilder(config, color_assigner).build(records)


def build_projections_from_source(
    loader: Callable[[], Iterable[RawRecord] | None],
    config: ProjectionConfig | None = None,
    color_assigner: ColorAssigner | None = None,
) -> FulfillmentProjections:
    """Retrieve records with ``loader`` and build projections, failing soft.

    Any exception raised by the retrieval, including one raised while a
    lazy loader result is being iterated, is logged and the projections are
    built from an empty collection instead.
    """
    try:
        records = loader()
        if records is not None:
            records = list(records)
    except Exception as exc:
        logger.warning(
            "record_source_failed",
            error=str(exc),
            error_type=type(exc).__name__,
        )
        records = None
    return build_projections(records, config, color_assigner)
