"""Pandas DataFrame adapters for fulfillment records."""

from typing import Any, Dict, List, Sequence
import pandas as pd  # type: ignore

from fulfillment_analytics.foundation.records import FulfillmentRecord

RECORD_COLUMNS = ["item_name", "quantity", "created_at", "customer_name", "status"]


def records_to_dataframe(records: Sequence[FulfillmentRecord]) -> pd.DataFrame:
    """Convert fulfillment records to pandas DataFrame.

    Args:
        records: Sequence of FulfillmentRecord objects

    Returns:
        DataFrame with columns: item_name, quantity, created_at,
        customer_name, status (in input order)

    Example:
        >>> records = generate_fulfillments(100, date(2024, 1, 1), date(2024, 6, 30), seed=7)
        >>> df = records_to_dataframe(records)
        >>> df.groupby("item_name")["quantity"].sum()
    """
    if not records:
        return pd.DataFrame(columns=RECORD_COLUMNS)

    rows = [
        {
            "item_name": r.item_name,
            "quantity": r.quantity,
            "created_at": r.created_at,
            "customer_name": r.customer_name,
            "status": r.as_dict()["status"],
        }
        for r in records
    ]
    return pd.DataFrame(rows, columns=RECORD_COLUMNS)


def dataframe_to_records(df: pd.DataFrame) -> List[Dict[str, Any]]:
    """Convert a fulfillment DataFrame to raw record mappings.

    Rows are not validated here; pass the result to the record contract
    or the projection builder, which exclude malformed rows. Missing
    values (NaN/NaT) become None so they are reported as missing fields.

    Args:
        df: DataFrame using snake_case or camelCase fulfillment columns

    Returns:
        List of dictionaries, one per row, in row order

    Example:
        >>> raw = dataframe_to_records(pd.read_csv("fulfillments.csv"))
        >>> projections = build_projections(raw)
    """
    if df.empty:
        return []

    cleaned = df.astype(object).where(df.notna(), None)
    return cleaned.to_dict("records")
