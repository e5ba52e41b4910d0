"""Stacked categorical bar chart widget with host data binding and click selection."""

from stackchart.core.models import ChartConfig, ChartModel, DataFeed, SelectionEvent
from stackchart.orchestration import InteractionBridge, StackedChartWidget
from stackchart.rendering import AltairRenderEngine, MemoryContainer

__version__ = "0.1.0"

__all__ = [
    "AltairRenderEngine",
    "ChartConfig",
    "ChartModel",
    "DataFeed",
    "InteractionBridge",
    "MemoryContainer",
    "SelectionEvent",
    "StackedChartWidget",
    "__version__",
]
