"""Fulfillment analytics aggregations.

Turns filtered fulfillment records into chart-ready projections:

1. Top-N rankings (top items, top customers)
2. Monthly time series (fulfillments over time)
3. Item × month count matrix with per-series colors
4. The projection builder that assembles all of the above
"""

from .colors import (
    ColorAssigner,
    HashColorAssigner,
    RandomColorAssigner,
    make_color_assigner,
)
from .projections import (
    FulfillmentProjections,
    ProjectionBuilder,
    ProjectionConfig,
    build_projections,
    build_projections_from_source,
    get_projection_config,
    set_projection_config,
)
from .time_buckets import MonthBucketing, TimeBucketCount, TimeSeries, count_by_month, month_label
from .top_n import RankedEntry, RankedSeries, rank_top_n, top_customers, top_items
from .vendor_matrix import MatrixSeries, MultiSeriesMatrix, build_item_month_matrix

__all__ = [
    # Top-N
    "RankedEntry",
    "RankedSeries",
    "rank_top_n",
    "top_items",
    "top_customers",
    # Time buckets
    "MonthBucketing",
    "TimeBucketCount",
    "TimeSeries",
    "count_by_month",
    "month_label",
    # Matrix
    "MatrixSeries",
    "MultiSeriesMatrix",
    "build_item_month_matrix",
    # Colors
    "ColorAssigner",
    "HashColorAssigner",
    "RandomColorAssigner",
    "make_color_assigner",
    # Projections
    "FulfillmentProjections",
    "ProjectionBuilder",
    "ProjectionConfig",
    "build_projections",
    "build_projections_from_source",
    "get_projection_config",
    "set_projection_config",
]
