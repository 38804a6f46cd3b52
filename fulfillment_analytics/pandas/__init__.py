"""Pandas DataFrame adapters for fulfillment analytics components."""

from .records import (
    records_to_dataframe,
    dataframe_to_records,
)
from .projections import (
    ranked_series_to_dataframe,
    time_series_to_dataframe,
    matrix_to_dataframe,
    projections_to_dataframes,
    build_projections_df,
)

__all__ = [
    # Record adapters
    "records_to_dataframe",
    "dataframe_to_records",
    # Projection adapters
    "ranked_series_to_dataframe",
    "time_series_to_dataframe",
    "matrix_to_dataframe",
    "projections_to_dataframes",
    "build_projections_df",
]
