"""Unit tests for the Altair render engine."""

import asyncio
from unittest.mock import MagicMock, patch

import altair as alt
import pytest

from stackchart.core.enums import StatusLevel
from stackchart.core.errors import RenderError
from stackchart.core.models import AxisSpec, LayoutSpec, Marker, StatusMessage, Trace
from stackchart.rendering.altair_engine import CLICK_SELECTION, AltairChartHandle, AltairRenderEngine
from stackchart.rendering.container import MemoryContainer


@pytest.fixture
def traces() -> list[Trace]:
    """Create two stacked traces over three categories."""
    return [
        Trace(x=["Q1", "Q2", "Q3"], y=[1.0, 2.0, 3.0], name="Revenue", marker=Marker(color="#111")),
        Trace(x=["Q1", "Q2", "Q3"], y=[4.0, 5.0, 6.0], name="Cost", marker=Marker(color="#222")),
    ]


@pytest.fixture
def layout() -> LayoutSpec:
    """Create a stacked layout."""
    return LayoutSpec(
        title="Sales",
        xaxis=AxisSpec(title="Quarter", type="category", tickangle=-45),
        yaxis=AxisSpec(title="Amount", rangemode="tozero"),
        bargap=0.2,
    )


class TestAltairRenderEngine:
    """Test cases for AltairRenderEngine class."""

    def test_long_frame(self, traces: list[Trace]) -> None:
        """Test flattening traces into segments."""
        frame = AltairRenderEngine.to_long_frame(traces)
        assert frame.height == 6
        assert frame.columns == ["category", "series", "value", "stack_order"]
        assert frame["series"].to_list() == ["Revenue"] * 3 + ["Cost"] * 3
        assert frame["stack_order"].to_list() == [0, 0, 0, 1, 1, 1]

    def test_chart_spec(self, traces: list[Trace], layout: LayoutSpec) -> None:
        """Test the Vega-Lite spec of the built chart."""
        spec = AltairRenderEngine().build_chart(traces, layout).to_dict()
        assert spec["mark"]["type"] == "bar"
        assert spec["title"] == "Sales"
        encoding = spec["encoding"]
        assert encoding["x"]["title"] == "Quarter"
        assert encoding["x"]["axis"]["labelAngle"] == -45
        assert encoding["x"]["sort"] == ["Q1", "Q2", "Q3"]
        assert encoding["y"]["stack"] == "zero"
        assert encoding["y"]["scale"]["zero"] is True
        assert encoding["color"]["scale"] == {"domain": ["Revenue", "Cost"], "range": ["#111", "#222"]}
        assert spec["config"]["scale"]["bandPaddingInner"] == 0.2
        assert spec["params"][0]["name"] == CLICK_SELECTION

    def test_render_mounts_chart(self, traces: list[Trace], layout: LayoutSpec) -> None:
        """Test that render mounts the chart and returns a handle."""
        container = MemoryContainer()
        handle = asyncio.run(AltairRenderEngine().render(container, traces, layout))
        assert isinstance(handle, AltairChartHandle)
        assert isinstance(container.content, alt.Chart)
        assert handle.chart is container.content

    def test_render_failure(self, traces: list[Trace], layout: LayoutSpec) -> None:
        """Test that build failures surface as RenderError."""
        engine = AltairRenderEngine()
        container = MemoryContainer()
        with (
            patch.object(engine, "build_chart", side_effect=ValueError("bad spec")),
            pytest.raises(RenderError),
        ):
            asyncio.run(engine.render(container, traces, layout))
        assert container.is_empty

    def test_purge_idempotent(self, traces: list[Trace], layout: LayoutSpec) -> None:
        """Test that purging twice is harmless."""
        engine = AltairRenderEngine()
        container = MemoryContainer()
        asyncio.run(engine.render(container, traces, layout))
        engine.purge(container)
        engine.purge(container)
        assert container.is_empty


class TestAltairChartHandle:
    """Test click subscription on the chart handle."""

    def test_dispatch_and_unsubscribe(self) -> None:
        """Test that clicks reach subscribers until they unsubscribe."""
        handle = AltairChartHandle(MagicMock())
        callback = MagicMock()
        unsubscribe = handle.on_point_click(callback)
        handle.dispatch_click({"points": []})
        assert callback.call_count == 1

        unsubscribe()
        unsubscribe()
        handle.dispatch_click({"points": []})
        assert callback.call_count == 1
        assert handle.subscriber_count == 0


class TestMemoryContainer:
    """Test the in-memory container."""

    def test_status_replaces_content(self) -> None:
        """Test that showing a status drops mounted content."""
        container = MemoryContainer()
        container.mount("chart")
        container.show_status(StatusMessage(message="No data to display.", level=StatusLevel.WARNING))
        assert container.content is None
        assert container.status_html() == (
            '<div style="color: orange; text-align: center; padding: 20px;">No data to display.</div>'
        )

    def test_status_escaped(self) -> None:
        """Test that status text is HTML-escaped."""
        container = MemoryContainer()
        container.show_status(StatusMessage(message="<b>", level=StatusLevel.ERROR))
        assert "&lt;b&gt;" in container.status_html()

    def test_no_status(self) -> None:
        """Test the markup when no status is shown."""
        assert MemoryContainer().status_html() is None
