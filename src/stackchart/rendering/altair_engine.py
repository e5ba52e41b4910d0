"""Altair implementation of the render engine contract."""

from collections.abc import Sequence
from typing import Any

import altair as alt
import polars as pl

from stackchart.core.colors import StructuralColors
from stackchart.core.errors import RenderError
from stackchart.core.models import LayoutSpec, Trace
from stackchart.infra.logging import get_logger
from stackchart.rendering.engine import ClickCallback, ContainerHandle, Unsubscribe

logger = get_logger(__name__)

CLICK_SELECTION = "bar_click"
STRUCTURAL_COLORS = StructuralColors()


class AltairChartHandle:
    """Handle of a chart built with Altair.

    Vega-Lite has no server-side click callbacks: the host forwards the
    ``bar_click`` selection (or any click payload) through ``dispatch_click``.
    """

    def __init__(self, chart: alt.Chart) -> None:
        """Initialize the handle.

        Args:
            chart: Rendered Altair chart
        """
        self.chart = chart
        self._callbacks: list[ClickCallback] = []

    def on_point_click(self, callback: ClickCallback) -> Unsubscribe:
        """Subscribe to clicks forwarded by the host."""
        self._callbacks.append(callback)

        def unsubscribe() -> None:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

        return unsubscribe

    def dispatch_click(self, event: Any) -> None:  # noqa: ANN401
        """Deliver a click payload to every subscriber."""
        for callback in list(self._callbacks):
            callback(event)

    @property
    def subscriber_count(self) -> int:
        return len(self._callbacks)


class AltairRenderEngine:
    """Draws stacked bar traces as an Altair chart mounted into the container."""

    def __init__(self, width: int = 800, height: int = 500) -> None:
        """Initialize the engine.

        Args:
            width: Chart width in pixels
            height: Chart height in pixels
        """
        self.width = width
        self.height = height

    async def render(
        self,
        container: ContainerHandle,
        traces: Sequence[Trace],
        layout: LayoutSpec,
    ) -> AltairChartHandle:
        """Build the chart, mount it and return its handle.

        Raises:
            RenderError: If the chart cannot be built
        """
        try:
            chart = self.build_chart(traces, layout)
        except (ValueError, TypeError) as e:
            raise RenderError(f"Failed to build chart: {e}") from e

        container.mount(chart)
        logger.debug("Chart mounted", traces=len(traces))
        return AltairChartHandle(chart)

    def purge(self, container: ContainerHandle) -> None:
        """Remove the chart from the container. Safe to call repeatedly."""
        container.clear()

    def build_chart(self, traces: Sequence[Trace], layout: LayoutSpec) -> alt.Chart:
        """Translate traces and layout into a stacked Altair bar chart.

        Args:
            traces: One trace per stacked series, in stack order
            layout: Presentation parameters

        Returns:
            Configured Altair chart
        """
        frame = self.to_long_frame(traces)
        categories = list(dict.fromkeys(category for trace in traces for category in trace.x))
        names = [trace.name for trace in traces]
        colors = [trace.marker.color for trace in traces]

        click = alt.selection_point(name=CLICK_SELECTION, fields=["category", "series", "value"], on="click")

        chart = (
            alt.Chart({"values": frame.to_dicts()})
            .mark_bar()
            .encode(
                x=alt.X(
                    "category:N",
                    sort=categories,
                    title=layout.xaxis.title,
                    axis=alt.Axis(labelAngle=layout.xaxis.tickangle or 0),
                ),
                y=alt.Y(
                    "value:Q",
                    stack="zero",
                    title=layout.yaxis.title,
                    scale=alt.Scale(zero=layout.yaxis.rangemode == "tozero"),
                ),
                color=alt.Color(
                    "series:N",
                    sort=names,
                    scale=alt.Scale(domain=names, range=colors),
                    legend=alt.Legend(title=None) if layout.showlegend else None,
                ),
                order=alt.Order("stack_order:Q"),
                tooltip=["category:N", "series:N", "value:Q"],
            )
            .add_params(click)
            .properties(
                width=self.width,
                height=self.height,
                title=layout.title,
                padding={
                    "top": layout.margin.t,
                    "left": layout.margin.l,
                    "right": layout.margin.r,
                    "bottom": layout.margin.b,
                },
            )
        )

        return chart.configure(background=layout.paper_bgcolor).configure_view(
            fill=layout.plot_bgcolor,
            strokeWidth=0,
        ).configure_axis(
            domainColor=STRUCTURAL_COLORS.AXIS_LINE,
            tickColor=STRUCTURAL_COLORS.TICK_LINE,
            gridColor=STRUCTURAL_COLORS.GRID_MAJOR,
        ).configure_scale(bandPaddingInner=layout.bargap)

    @staticmethod
    def to_long_frame(traces: Sequence[Trace]) -> pl.DataFrame:
        """Flatten traces into one row per (category, series) segment."""
        return pl.DataFrame(
            {
                "category": [category for trace in traces for category in trace.x],
                "series": [trace.name for trace in traces for _ in trace.x],
                "value": [value for trace in traces for value in trace.y],
                "stack_order": [order for order, trace in enumerate(traces) for _ in trace.x],
            },
            schema={"category": pl.String, "series": pl.String, "value": pl.Float64, "stack_order": pl.Int64},
        )
