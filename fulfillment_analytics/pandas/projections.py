"""Pandas DataFrame adapters for fulfillment projections."""

from typing import Dict, Optional
import pandas as pd  # type: ignore

from fulfillment_analytics.analyses.projections import (
    FulfillmentProjections,
    ProjectionConfig,
    build_projections,
)
from fulfillment_analytics.analyses.time_buckets import TimeSeries
from fulfillment_analytics.analyses.top_n import RankedSeries
from fulfillment_analytics.analyses.vendor_matrix import MultiSeriesMatrix
from .records import dataframe_to_records


def ranked_series_to_dataframe(
    series: RankedSeries, label_column: str = "label"
) -> pd.DataFrame:
    """Convert a ranked series to DataFrame.

    Args:
        series: RankedSeries object
        label_column: Name of the label column (e.g. "item_name")

    Returns:
        DataFrame with columns: rank, <label_column>, value (rank order)
    """
    return pd.DataFrame(
        {
            "rank": list(range(1, len(series) + 1)),
            label_column: series.labels,
            "value": series.values,
        },
        columns=["rank", label_column, "value"],
    )


def time_series_to_dataframe(series: TimeSeries) -> pd.DataFrame:
    """Convert the fulfillments-over-time series to DataFrame.

    Returns:
        DataFrame with columns: month, count (axis order)
    """
    return pd.DataFrame(
        {"month": series.labels, "count": series.counts}, columns=["month", "count"]
    )


def matrix_to_dataframe(matrix: MultiSeriesMatrix) -> pd.DataFrame:
    """Convert the item × month matrix to a wide DataFrame.

    Returns:
        DataFrame indexed by series name with one integer column per axis
        label (axis order) and a trailing ``color`` column

    Example:
        >>> wide = matrix_to_dataframe(projections.item_month_matrix)
        >>> wide.loc["Mug", "Jan 2024"]
    """
    columns = list(matrix.axis) + ["color"]
    if not len(matrix):
        empty = pd.DataFrame(columns=columns)
        empty.index.name = "series"
        return empty

    rows = {
        item.name: list(item.counts) + [item.color] for item in matrix.series
    }
    df = pd.DataFrame.from_dict(rows, orient="index", columns=columns)
    df.index.name = "series"
    return df


def projections_to_dataframes(
    projections: FulfillmentProjections,
) -> Dict[str, pd.DataFrame]:
    """Convert all four projections to DataFrames keyed by projection name."""
    return {
        "top_items": ranked_series_to_dataframe(projections.top_items, "item_name"),
        "fulfillments_over_time": time_series_to_dataframe(
            projections.fulfillments_over_time
        ),
        "top_customers": ranked_series_to_dataframe(
            projections.top_customers, "customer_name"
        ),
        "item_month_matrix": matrix_to_dataframe(projections.item_month_matrix),
    }


def build_projections_df(
    df: pd.DataFrame, config: Optional[ProjectionConfig] = None
) -> Dict[str, pd.DataFrame]:
    """Build fulfillment projections from a DataFrame.

    Convenience function combining conversion and projection building.

    Args:
        df: DataFrame of raw fulfillment records
        config: Optional projection configuration

    Returns:
        Dictionary of DataFrames keyed by projection name

    Example:
        >>> frames = build_projections_df(fulfillments_df)
        >>> frames["top_items"].to_csv("top_items.csv", index=False)
    """
    projections = build_projections(dataframe_to_records(df), config)
    return projections_to_dataframes(projections)
