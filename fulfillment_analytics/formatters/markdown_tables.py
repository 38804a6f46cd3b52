"""Markdown table formatters for fulfillment projections.

Renders projections as plain markdown for reports, chat output and the
``--format markdown`` CLI mode.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fulfillment_analytics.analyses.projections import FulfillmentProjections
    from fulfillment_analytics.analyses.time_buckets import TimeSeries
    from fulfillment_analytics.analyses.top_n import RankedSeries
    from fulfillment_analytics.analyses.vendor_matrix import MultiSeriesMatrix

NO_DATA = "_No fulfillment data._\n"


def format_ranked_series_table(
    series: RankedSeries, title: str, label_header: str = "Item"
) -> str:
    """Format a ranked series as a numbered markdown table.

    Examples
    --------
    >>> from fulfillment_analytics.analyses.top_n import RankedEntry, RankedSeries
    >>> print(format_ranked_series_table(RankedSeries((RankedEntry("Mug", 1200),)), "Top Items"))
    ### Top Items
    <BLANKLINE>
    | Rank | Item | Quantity |
    |------|------|----------|
    | 1 | Mug | 1,200 |
    <BLANKLINE>
    """
    table = f"### {title}\n\n"
    if not len(series):
        return table + NO_DATA

    table += f"| Rank | {label_header} | Quantity |\n"
    table += f"|------|{'-' * (len(label_header) + 2)}|----------|\n"
    for rank, entry in enumerate(series.entries, start=1):
        table += f"| {rank} | {entry.label} | {entry.value:,} |\n"
    return table


def format_time_series_table(series: TimeSeries) -> str:
    """Format the fulfillments-over-time series as a markdown table."""
    table = "### Fulfillments Over Time\n\n"
    if not len(series):
        return table + NO_DATA

    table += "| Month | Fulfillments |\n"
    table += "|-------|--------------|\n"
    for point in series.points:
        table += f"| {point.label} | {point.count:,} |\n"
    return table


def format_matrix_table(matrix: MultiSeriesMatrix) -> str:
    """Format the item × month matrix with one row per item."""
    table = "### Fulfillments by Item and Month\n\n"
    if not len(matrix):
        return table + NO_DATA

    table += "| Item | " + " | ".join(matrix.axis) + " |\n"
    table += "|------|" + "|".join("---" for _ in matrix.axis) + "|\n"
    for item in matrix.series:
        cells = " | ".join(f"{count:,}" for count in item.counts)
        table += f"| {item.name} | {cells} |\n"
    return table


def format_projections_summary(projections: FulfillmentProjections) -> str:
    """Format every projection in one markdown report."""
    report = "## Fulfillment Analytics\n\n"
    report += f"- Successful fulfillments: {projections.record_count:,}\n"
    if projections.rejected_count:
        report += f"- Rejected records: {projections.rejected_count:,}\n"
    report += "\n"

    if projections.is_empty:
        return report + NO_DATA

    sections = [
        format_ranked_series_table(projections.top_items, "Top Fulfilled Items", "Item"),
        format_time_series_table(projections.fulfillments_over_time),
        format_ranked_series_table(
            projections.top_customers, "Top Customers", "Customer"
        ),
        format_matrix_table(projections.item_month_matrix),
    ]
    return report + "\n".join(sections)
