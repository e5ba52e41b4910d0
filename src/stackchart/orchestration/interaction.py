"""Bridge render engine clicks to host selection notifications."""

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from stackchart.core.models import ClickEvent, ClickPoint, SelectionEvent
from stackchart.infra.logging import get_logger
from stackchart.rendering.engine import ChartHandle, Unsubscribe

logger = get_logger(__name__)

EventSink = Callable[[str, dict[str, Any]], None]


class InteractionBridge:
    """Subscribes to one chart handle at a time and emits selections.

    Only the first point of a multi-point click is reported. Clicks are not
    debounced: every click emits its own notification.
    """

    def __init__(self, event_sink: EventSink, event_name: str = "onBarClick") -> None:
        """Initialize the bridge.

        Args:
            event_sink: Host capability receiving (event name, payload)
            event_name: Name of the outward notification
        """
        self.event_sink = event_sink
        self.event_name = event_name
        self.last_selection: SelectionEvent | None = None
        self._unsubscribe: Unsubscribe | None = None

    @property
    def attached(self) -> bool:
        return self._unsubscribe is not None

    def attach(self, handle: ChartHandle) -> None:
        """Subscribe to a freshly rendered chart, dropping any previous subscription."""
        self.detach()
        self._unsubscribe = handle.on_point_click(self.handle_click)

    def detach(self) -> None:
        """Drop the current subscription, if any."""
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        if unsubscribe is not None:
            unsubscribe()

    def handle_click(self, event: Any) -> SelectionEvent | None:  # noqa: ANN401
        """Map a click event to a selection and notify the host.

        Args:
            event: ClickEvent or an equivalent mapping from the render engine

        Returns:
            Emitted selection, or None when the event carries no usable point
        """
        points = event.points if isinstance(event, ClickEvent) else self._raw_points(event)
        if points is None:
            logger.warning("Ignoring malformed click event", event_type=type(event).__name__)
            return None
        if not points:
            return None

        # Only the first point is validated; later points are ignored
        try:
            point = ClickPoint.model_validate(points[0])
        except PydanticValidationError as e:
            logger.warning("Ignoring malformed click point", errors=e.error_count())
            return None

        selection = SelectionEvent(category=str(point.x), series=point.series_name, value=point.y)
        self.last_selection = selection
        self.event_sink(self.event_name, selection.to_payload())
        logger.debug("Selection emitted", category=selection.category, series=selection.series)
        return selection

    @staticmethod
    def _raw_points(event: Any) -> Sequence[Any] | None:  # noqa: ANN401
        if not isinstance(event, Mapping):
            return None
        points = event.get("points", [])
        if isinstance(points, str) or not isinstance(points, Sequence):
            return None
        return points
