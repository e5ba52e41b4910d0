"""Enumerations for stackchart core types."""

from enum import Enum


class ErrorCode(str, Enum):
    """Application error codes for structured error reporting."""

    E400_CONFIG = "E400_CONFIG"
    E422_BINDING = "E422_BINDING"
    E424_FETCH = "E424_FETCH"
    E204_EMPTY_DATA = "E204_EMPTY_DATA"
    E500_RENDER = "E500_RENDER"
    E503_DEPENDENCY_NOT_READY = "E503_DEPENDENCY_NOT_READY"


class PipelinePhase(str, Enum):
    """Render pass phases for tracking and logging."""

    CONFIG_RESOLUTION = "config_resolution"
    DATA_BINDING = "data_binding"
    DATA_FETCH = "data_fetch"
    TRACE_BUILDING = "trace_building"
    LAYOUT_BUILDING = "layout_building"
    RENDERING = "rendering"


class WidgetState(str, Enum):
    """Lifecycle states of a chart widget instance."""

    UNINITIALIZED = "uninitialized"
    AWAITING_DEPENDENCIES = "awaiting_dependencies"  # Render engine not yet available
    AWAITING_DATA = "awaiting_data"  # Binding not yet complete
    RENDERING = "rendering"
    RENDERED = "rendered"
    DEGRADED = "degraded"  # Status message shown instead of the chart
    DISPOSED = "disposed"


class DegradedKind(str, Enum):
    """Reasons a widget shows a status message instead of a chart."""

    BINDING = "binding"
    FETCH = "fetch"
    EMPTY = "empty"
    RENDER = "render"


class StatusLevel(str, Enum):
    """Severity of an inline status message."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
