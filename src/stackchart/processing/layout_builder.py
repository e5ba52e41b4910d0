"""Derive presentation parameters from the chart model and configuration."""

from stackchart.core.models import AxisSpec, ChartConfig, ChartModel, LayoutSpec, Margin
from stackchart.infra.settings import WidgetSettings


class LayoutBuilder:
    """Builds the stacked-bar layout. Pure: no state beyond the injected defaults."""

    def __init__(self, settings: WidgetSettings | None = None) -> None:
        """Initialize the layout builder.

        Args:
            settings: Axis title defaults, margins and background
        """
        self.settings = settings or WidgetSettings()

    def build(self, model: ChartModel, config: ChartConfig) -> LayoutSpec:
        """Build the layout for one render pass.

        ``model.max_value`` is deliberately not consulted; the value axis is
        only anchored at zero.

        Args:
            model: Chart model of the pass
            config: Resolved display configuration

        Returns:
            LayoutSpec handed to the render engine
        """
        settings = self.settings
        return LayoutSpec(
            title=config.title,
            margin=Margin(
                t=settings.margin_top,
                l=settings.margin_left,
                r=settings.margin_right,
                b=settings.margin_bottom,
            ),
            paper_bgcolor=settings.background,
            plot_bgcolor=settings.background,
            xaxis=AxisSpec(
                title=model.category_title or settings.category_axis_title,
                type="category",
                tickangle=settings.tick_angle,
            ),
            yaxis=AxisSpec(
                title=model.value_title or settings.value_axis_title,
                rangemode="tozero",
            ),
            bargap=bar_gap(config.bar_width_ratio),
            bar_depth=config.bar_depth,
        )


def bar_gap(bar_width_ratio: float) -> float:
    """Gap between bars as the complement of the bar width ratio."""
    return 1.0 - bar_width_ratio
