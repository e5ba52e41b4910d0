"""Render engine capability contract.

The widget depends only on these protocols; any drawing library can sit
behind them.
"""

from collections.abc import Callable, Sequence
from typing import Any, Protocol

from stackchart.core.models import LayoutSpec, StatusMessage, Trace

ClickCallback = Callable[[Any], None]
Unsubscribe = Callable[[], None]


class ContainerHandle(Protocol):
    """Rendering surface exclusively owned by one widget instance."""

    def show_status(self, status: StatusMessage) -> None:
        """Replace the surface content with an inline status message."""
        ...

    def mount(self, content: Any) -> None:  # noqa: ANN401
        """Replace the surface content with rendered chart content."""
        ...

    def clear(self) -> None:
        """Remove any content from the surface."""
        ...


class ChartHandle(Protocol):
    """Opaque reference to a rendered chart."""

    def on_point_click(self, callback: ClickCallback) -> Unsubscribe:
        """Subscribe to point clicks; returns a callable that unsubscribes."""
        ...


class RenderEngine(Protocol):
    """Draws traces with a layout into a container."""

    async def render(self, container: ContainerHandle, traces: Sequence[Trace], layout: LayoutSpec) -> ChartHandle:
        """Draw the chart and return its handle."""
        ...

    def purge(self, container: ContainerHandle) -> None:
        """Tear down whatever was drawn into the container. Idempotent."""
        ...
