"""Presentation-ready formatting for fulfillment projections.

- Plotly figure specs for the dashboard charts
- Markdown tables for text reports
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from fulfillment_analytics.formatters.markdown_tables import (
    format_matrix_table,
    format_projections_summary,
    format_ranked_series_table,
    format_time_series_table,
)
from fulfillment_analytics.formatters.plotly_charts import (
    create_fulfillment_dashboard,
    create_fulfillments_over_time_chart,
    create_item_month_chart,
    create_ranked_bar_chart,
    create_top_customers_chart,
    create_top_items_chart,
    to_figure,
)


ChartPreset = Literal["compact", "standard", "presentation"]

# Title, axis and padding space a ranked bar panel needs besides its bars
RANKED_MARGIN = 120

_PRESETS: dict[str, tuple[int, int, int]] = {
    # width, height, bar_height
    "compact": (480, 300, 20),
    "standard": (640, 360, 28),
    "presentation": (960, 540, 40),
}


@dataclass(frozen=True)
class ChartConfig:
    """Panel sizes for the four-chart fulfillment dashboard.

    Every chart is one panel of a 2x2 dashboard grid, so all four share a
    width. Ranked bar panels grow taller than ``height`` when their entries
    need the room.

    Attributes
    ----------
    width:
        Panel width in pixels.
    height:
        Minimum panel height in pixels.
    bar_height:
        Pixels per entry in the top items / top customers bar charts.
    preset:
        Name of the preset the sizes came from: 'compact', 'standard'
        (default) or 'presentation'.
    """

    width: int = 640
    height: int = 360
    bar_height: int = 28
    preset: ChartPreset = "standard"

    def __post_init__(self) -> None:
        if self.width < 1 or self.height < 1 or self.bar_height < 1:
            raise ValueError(
                f"Chart sizes must be positive: {self.width}x{self.height}, "
                f"bar_height={self.bar_height}"
            )

    @classmethod
    def from_preset(cls, preset: ChartPreset) -> ChartConfig:
        """Create config from a dashboard size preset.

        Examples
        --------
        >>> ChartConfig.from_preset("compact").width
        480
        """
        if preset not in _PRESETS:
            raise ValueError(f"Unknown chart preset: {preset!r}")
        width, height, bar_height = _PRESETS[preset]
        return cls(width=width, height=height, bar_height=bar_height, preset=preset)

    def ranked_height(self, entries: int) -> int:
        """Height of a ranked bar panel showing ``entries`` bars."""
        return max(self.height, RANKED_MARGIN + entries * self.bar_height)


_DEFAULT_CHART_CONFIG = ChartConfig.from_preset("standard")


def get_chart_config() -> ChartConfig:
    """Get the dashboard panel sizes used by the Plotly formatters."""
    return _DEFAULT_CHART_CONFIG


def set_chart_config(config: ChartConfig) -> None:
    """Set the dashboard panel sizes used by the Plotly formatters.

    Examples
    --------
    >>> from fulfillment_analytics.formatters import ChartConfig, set_chart_config
    >>> set_chart_config(ChartConfig.from_preset("presentation"))
    """
    global _DEFAULT_CHART_CONFIG
    _DEFAULT_CHART_CONFIG = config


__all__ = [
    # Configuration
    "ChartConfig",
    "ChartPreset",
    "get_chart_config",
    "set_chart_config",
    # Markdown tables
    "format_ranked_series_table",
    "format_time_series_table",
    "format_matrix_table",
    "format_projections_summary",
    # Plotly charts
    "create_ranked_bar_chart",
    "create_top_items_chart",
    "create_top_customers_chart",
    "create_fulfillments_over_time_chart",
    "create_item_month_chart",
    "create_fulfillment_dashboard",
    "to_figure",
]
