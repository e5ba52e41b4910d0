"""Pydantic models for stackchart data structures."""

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .enums import DegradedKind, StatusLevel

ResultRow = Mapping[str, Any]


class ChartConfig(BaseModel):
    """Typed display configuration resolved from the host options bag."""

    model_config = ConfigDict(frozen=True)

    title: str = Field(..., description="Chart title")
    color_palette: tuple[str, ...] = Field(..., min_length=1, description="Ordered series colors")
    bar_width_ratio: float = Field(default=0.8, ge=0.0, le=1.0, description="Bar width as a share of the slot")
    bar_depth: float = Field(default=0.5, description="Bar depth (kept for hosts, not used in layout)")


class FeedMember(BaseModel):
    """A single bound field inside a feed."""

    id: str = Field(..., min_length=1, description="Field identifier used as row key")
    description: str | None = Field(default=None, description="Display label")


class Feed(BaseModel):
    """A named group of bound fields supplied by the host data model."""

    id: str = Field(..., description="Feed identifier (e.g. dimensions, measures)")
    description: str | None = Field(default=None, description="Feed display label")
    members: list[FeedMember] = Field(default_factory=list, description="Bound fields in declared order")


class DataFeed(BaseModel):
    """Resolved category and measure identifiers for one render pass."""

    dimension_id: str = Field(..., description="Row key of the category axis")
    measure_ids: list[str] = Field(..., min_length=1, description="Row keys of stacked measures in stack order")
    measure_labels: dict[str, str] = Field(default_factory=dict, description="Measure id to display label")
    dimension_description: str | None = Field(default=None, description="Category axis label from the host")
    measures_description: str | None = Field(default=None, description="Value axis label from the host")


class Series(BaseModel):
    """One stacked measure aligned with the model categories."""

    name: str
    values: list[float]
    color: str


class Marker(BaseModel):
    """Marker styling of a bar trace."""

    color: str


class Trace(BaseModel):
    """One renderable series handed to the render engine."""

    x: list[str] = Field(..., description="Category labels")
    y: list[float] = Field(..., description="Segment heights")
    name: str = Field(..., description="Legend label")
    type: Literal["bar"] = "bar"
    marker: Marker


class ChartModel(BaseModel):
    """Internal chart model rebuilt from scratch on every render pass."""

    categories: list[str] = Field(..., description="One category per row")
    series: list[Series] = Field(..., description="One series per measure")
    max_value: float = Field(..., description="Global maximum across all cells")
    category_title: str | None = Field(default=None, description="Category axis title from the feed")
    value_title: str | None = Field(default=None, description="Value axis title from the feed")

    @model_validator(mode="after")
    def check_alignment(self) -> "ChartModel":
        """Ensure every series has one value per category."""
        for series in self.series:
            if len(series.values) != len(self.categories):
                raise ValueError(
                    f"Series '{series.name}' has {len(series.values)} values for {len(self.categories)} categories"
                )
        return self

    def to_traces(self) -> list[Trace]:
        """Convert the model series into render engine traces."""
        return [
            Trace(x=list(self.categories), y=list(s.values), name=s.name, marker=Marker(color=s.color))
            for s in self.series
        ]


class Margin(BaseModel):
    """Plot margins in pixels."""

    t: int = 50
    l: int = 40  # noqa: E741
    r: int = 40
    b: int = 80


class AxisSpec(BaseModel):
    """Axis presentation parameters."""

    title: str
    type: str | None = None
    tickangle: int | None = None
    rangemode: str | None = None


class LayoutSpec(BaseModel):
    """Presentation parameters derived from the model and configuration."""

    title: str
    barmode: Literal["stack"] = "stack"
    showlegend: bool = True
    margin: Margin = Field(default_factory=Margin)
    paper_bgcolor: str = "white"
    plot_bgcolor: str = "white"
    xaxis: AxisSpec
    yaxis: AxisSpec
    bargap: float = Field(..., ge=0.0, le=1.0)
    bar_depth: float | None = Field(default=None, description="Passed through for engines with depth support")

    def to_dict(self) -> dict[str, Any]:
        """Dump the layout without unset optional keys."""
        return self.model_dump(exclude_none=True)


class ClickPoint(BaseModel):
    """A single point reported by a render engine click."""

    model_config = ConfigDict(populate_by_name=True)

    x: Any = Field(..., description="Category of the clicked segment")
    y: float = Field(..., description="Value of the clicked segment")
    series_name: str = Field(..., alias="seriesName", description="Series of the clicked segment")

    @model_validator(mode="before")
    @classmethod
    def unwrap_trace_name(cls, data: Any) -> Any:  # noqa: ANN401
        """Accept plotly-style points that carry the series under ``data.name``."""
        if isinstance(data, Mapping) and "seriesName" not in data and "series_name" not in data:
            trace = data.get("data")
            if isinstance(trace, Mapping) and "name" in trace:
                return {**data, "seriesName": trace["name"]}
        return data


class ClickEvent(BaseModel):
    """Click event emitted by a chart handle."""

    points: list[ClickPoint] = Field(default_factory=list)


class SelectionEvent(BaseModel):
    """Selection reported to the host after a click."""

    category: str
    series: str
    value: float

    def to_payload(self) -> dict[str, Any]:
        """Build the outward notification payload."""
        return {"category": self.category, "value": self.value, "series": self.series}


class StatusMessage(BaseModel):
    """Inline status placeholder shown in place of the chart."""

    kind: DegradedKind | None = Field(default=None, description="Degradation kind, if any")
    message: str = Field(..., description="Human-readable status")
    level: StatusLevel = Field(default=StatusLevel.INFO)


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    reason: str | None = Field(default=None, description="Detailed reason for the error")
    suggestion: str | None = Field(default=None, description="Suggested correction")
