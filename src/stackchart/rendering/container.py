"""In-process rendering surface."""

import html
from typing import Any

from stackchart.core.colors import StatusColors
from stackchart.core.models import StatusMessage


class MemoryContainer:
    """Container that keeps mounted content and status messages in memory.

    Hosts that embed the chart elsewhere (notebooks, static pages) read
    ``content`` or ``status`` after a render pass.
    """

    def __init__(self, container_id: str = "chartContainer") -> None:
        self.container_id = container_id
        self.content: Any = None
        self.status: StatusMessage | None = None

    def show_status(self, status: StatusMessage) -> None:
        self.content = None
        self.status = status

    def mount(self, content: Any) -> None:  # noqa: ANN401
        self.status = None
        self.content = content

    def clear(self) -> None:
        self.content = None
        self.status = None

    @property
    def is_empty(self) -> bool:
        return self.content is None and self.status is None

    def status_html(self) -> str | None:
        """Render the current status as the inline placeholder markup."""
        if self.status is None:
            return None
        color = getattr(StatusColors(), self.status.level.name)
        return f'<div style="color: {color}; text-align: center; padding: 20px;">{html.escape(self.status.message)}</div>'
