"""Plotly chart specs for fulfillment projections.

Each function returns a JSON-serializable Plotly figure dict
(``{"data": [...], "layout": {...}}``) that a dashboard can hand straight
to ``Plotly.newPlot`` or wrap with :func:`to_figure`. Drawing is left to
the presentation layer.

Charts are sized as panels of the active ChartConfig (640x360px by default);
ranked bar charts grow with their number of entries.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import plotly.graph_objects as go

    from fulfillment_analytics.analyses.projections import FulfillmentProjections
    from fulfillment_analytics.analyses.time_buckets import TimeSeries
    from fulfillment_analytics.analyses.top_n import RankedSeries
    from fulfillment_analytics.analyses.vendor_matrix import MultiSeriesMatrix
    from fulfillment_analytics.formatters import ChartConfig

BAR_COLOR = "rgb(55, 128, 191)"
LINE_COLOR = "rgb(255, 165, 0)"


def _chart_config() -> ChartConfig:
    from fulfillment_analytics.formatters import get_chart_config

    return get_chart_config()


def _base_layout(
    title: str, height: int | None = None, **overrides: Any
) -> dict[str, Any]:
    config = _chart_config()
    layout = {
        "title": {"text": title, "x": 0.5, "xanchor": "center"},
        "width": config.width,
        "height": height if height is not None else config.height,
    }
    layout.update(overrides)
    return layout


def to_figure(fig_dict: dict[str, Any]) -> go.Figure:
    """Wrap a figure dict in a ``plotly.graph_objects.Figure``.

    Raises
    ------
    ValueError:
        If the dict is not a valid Plotly figure specification.
    """
    import plotly.graph_objects as go

    return go.Figure(fig_dict)


def create_ranked_bar_chart(
    series: RankedSeries, title: str, value_title: str = "Quantity"
) -> dict[str, Any]:
    """Create a horizontal bar chart from a ranked series.

    The highest-ranked label is drawn at the top. The panel grows past the
    configured height when the entries need more room.

    Parameters
    ----------
    series:
        Ranked (label, value) pairs.
    title:
        Chart title.
    value_title:
        Title of the value axis.

    Returns
    -------
    dict:
        Plotly figure specification as JSON-serializable dict
    """
    bar_trace = {
        "type": "bar",
        "orientation": "h",
        "name": value_title,
        "x": series.values,
        "y": series.labels,
        "marker": {"color": BAR_COLOR},
        "hovertemplate": "%{y}<br>" + value_title + ": %{x:,}<extra></extra>",
    }

    layout = _base_layout(
        title,
        height=_chart_config().ranked_height(len(series)),
        xaxis={"title": value_title},
        yaxis={"autorange": "reversed", "automargin": True},
        showlegend=False,
    )
    return {"data": [bar_trace], "layout": layout}


def create_top_items_chart(series: RankedSeries) -> dict[str, Any]:
    """Create the top fulfilled items bar chart.

    Examples
    --------
    >>> from fulfillment_analytics.analyses.top_n import RankedEntry, RankedSeries
    >>> chart = create_top_items_chart(RankedSeries((RankedEntry("Mug", 5),)))
    >>> chart["data"][0]["type"]
    'bar'
    """
    return create_ranked_bar_chart(series, "Top Fulfilled Items", "Units Fulfilled")


def create_top_customers_chart(series: RankedSeries) -> dict[str, Any]:
    """Create the top customers bar chart."""
    return create_ranked_bar_chart(series, "Top Customers", "Units Received")


def create_fulfillments_over_time_chart(series: TimeSeries) -> dict[str, Any]:
    """Create the fulfillments-over-time line chart.

    The x axis is categorical so the month labels keep the order of the
    time series.
    """
    line_trace = {
        "type": "scatter",
        "mode": "lines+markers",
        "name": "Fulfillments",
        "x": series.labels,
        "y": series.counts,
        "line": {"color": LINE_COLOR, "width": 2},
        "marker": {"size": 8},
        "hovertemplate": "%{x}<br>Fulfillments: %{y}<extra></extra>",
    }

    layout = _base_layout(
        "Fulfillments Over Time",
        xaxis={"title": "Month", "type": "category"},
        yaxis={"title": "Fulfillments", "rangemode": "tozero"},
        showlegend=False,
    )
    return {"data": [line_trace], "layout": layout}


def create_item_month_chart(matrix: MultiSeriesMatrix) -> dict[str, Any]:
    """Create the per-item monthly line chart, one trace per series.

    Each trace uses the color assigned to its series when there is one.
    """
    traces = []
    for item in matrix.series:
        trace: dict[str, Any] = {
            "type": "scatter",
            "mode": "lines+markers",
            "name": item.name,
            "x": list(matrix.axis),
            "y": list(item.counts),
            "hovertemplate": f"{item.name}<br>%{{x}}: %{{y}}<extra></extra>",
        }
        if item.color is not None:
            trace["line"] = {"color": item.color}
            trace["marker"] = {"color": item.color}
        traces.append(trace)

    layout = _base_layout(
        "Fulfillments by Item",
        xaxis={"title": "Month", "type": "category"},
        yaxis={"title": "Fulfillments", "rangemode": "tozero"},
        hovermode="x unified",
        showlegend=True,
    )
    return {"data": traces, "layout": layout}


def create_fulfillment_dashboard(
    projections: FulfillmentProjections,
) -> dict[str, dict[str, Any]]:
    """Create all four charts for a projection set, keyed by projection name."""
    return {
        "top_items": create_top_items_chart(projections.top_items),
        "fulfillments_over_time": create_fulfillments_over_time_chart(
            projections.fulfillments_over_time
        ),
        "top_customers": create_top_customers_chart(projections.top_customers),
        "item_month_matrix": create_item_month_chart(projections.item_month_matrix),
    }
