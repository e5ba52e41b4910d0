"""Widget lifecycle and click interaction."""

from stackchart.orchestration.interaction import EventSink, InteractionBridge
from stackchart.orchestration.widget import StackedChartWidget

__all__ = [
    "EventSink",
    "InteractionBridge",
    "StackedChartWidget",
]
