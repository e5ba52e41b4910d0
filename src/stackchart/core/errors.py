"""Error handling and exception definitions for stackchart."""

from .enums import DegradedKind, ErrorCode, PipelinePhase, StatusLevel
from .models import ErrorDetail, StatusMessage


class StackChartError(Exception):
    """Base exception for all stackchart errors."""

    kind: DegradedKind | None = None
    status_text: str = "The chart could not be displayed."
    status_level: StatusLevel = StatusLevel.ERROR

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        details: list[ErrorDetail] | None = None,
        hint: str | None = None,
        phase: PipelinePhase | None = None,
    ):
        """Initialize stackchart error.

        Args:
            message: Human-readable error message
            code: Error code from ErrorCode enum
            details: Optional detailed error information
            hint: Optional correction hint for the host
            phase: Optional pipeline phase where error occurred
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or []
        self.hint = hint
        self.phase = phase

    def to_status(self) -> StatusMessage:
        """Convert exception to the inline status shown in the container.

        Returns:
            StatusMessage model instance
        """
        return StatusMessage(kind=self.kind, message=self.status_text, level=self.status_level)


class ConfigError(StackChartError):
    """Raised when a display option is malformed.

    Never leaves the config resolver; the offending option falls back to its default.
    """

    def __init__(self, option: str, value: object, reason: str):
        """Initialize config error."""
        super().__init__(
            message=f"Invalid value for option '{option}': {value!r}",
            code=ErrorCode.E400_CONFIG,
            details=[ErrorDetail(field=option, reason=reason)],
            phase=PipelinePhase.CONFIG_RESOLUTION,
        )
        self.option = option


class BindingError(StackChartError):
    """Raised when the binding lacks a required feed or member."""

    kind = DegradedKind.BINDING
    status_text = "Data feed error: check the bound dimensions and measures."

    def __init__(
        self,
        message: str,
        feed_id: str | None = None,
        hint: str | None = None,
    ):
        """Initialize binding error."""
        details = [ErrorDetail(field=feed_id, reason=message)] if feed_id else None
        super().__init__(
            message=message,
            code=ErrorCode.E422_BINDING,
            details=details,
            hint=hint or "Bind at least one dimension and one measure to the widget.",
            phase=PipelinePhase.DATA_BINDING,
        )
        self.feed_id = feed_id


class FetchError(StackChartError):
    """Raised when the row fetch fails or returns a malformed result."""

    kind = DegradedKind.FETCH
    status_text = "Error while fetching data."

    def __init__(self, message: str, hint: str | None = None):
        """Initialize fetch error."""
        super().__init__(
            message=message,
            code=ErrorCode.E424_FETCH,
            hint=hint or "The data source did not deliver rows. The next update will retry.",
            phase=PipelinePhase.DATA_FETCH,
        )


class EmptyDataError(StackChartError):
    """Raised when the row fetch succeeds but yields no rows."""

    kind = DegradedKind.EMPTY
    status_text = "No data to display."
    status_level = StatusLevel.WARNING

    def __init__(self, message: str = "Result set is empty"):
        """Initialize empty data error."""
        super().__init__(
            message=message,
            code=ErrorCode.E204_EMPTY_DATA,
            hint="Adjust filters or bindings so that the result set contains rows.",
            phase=PipelinePhase.DATA_FETCH,
        )


class RenderError(StackChartError):
    """Raised when the render engine rejects a render call."""

    kind = DegradedKind.RENDER
    status_text = "Chart rendering failed."

    def __init__(self, message: str):
        """Initialize render error."""
        super().__init__(
            message=message,
            code=ErrorCode.E500_RENDER,
            phase=PipelinePhase.RENDERING,
        )


class DependencyNotReadyError(StackChartError):
    """Raised when no render engine is available yet.

    Deferral rather than failure: the pass is skipped silently and retried on
    dependency-ready, so this error never reaches the container.
    """

    def __init__(self, dependency: str = "render engine"):
        """Initialize dependency not ready error."""
        super().__init__(
            message=f"Dependency '{dependency}' is not available yet",
            code=ErrorCode.E503_DEPENDENCY_NOT_READY,
            hint="Rendering resumes once the dependency-ready signal arrives.",
            phase=PipelinePhase.RENDERING,
        )


DEGRADING_ERRORS: tuple[type[StackChartError], ...] = (BindingError, FetchError, EmptyDataError, RenderError)
