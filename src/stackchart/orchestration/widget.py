"""Stacked chart widget: lifecycle signals, render passes and public operations."""

import asyncio
from collections.abc import Mapping, Sequence
from typing import Any

from stackchart.core.enums import DegradedKind, WidgetState
from stackchart.core.errors import DEGRADING_ERRORS, DependencyNotReadyError, RenderError, StackChartError
from stackchart.core.models import LayoutSpec, SelectionEvent, StatusMessage, Trace
from stackchart.infra.logging import get_logger
from stackchart.infra.settings import WidgetSettings
from stackchart.orchestration.interaction import EventSink, InteractionBridge
from stackchart.processing.binding_adapter import BindingDescriptor, DataBindingAdapter
from stackchart.processing.config_resolver import ConfigResolver
from stackchart.processing.layout_builder import LayoutBuilder
from stackchart.processing.trace_builder import TraceBuilder
from stackchart.rendering.engine import ChartHandle, ContainerHandle, RenderEngine

logger = get_logger(__name__)


class StackedChartWidget:
    """One embedded stacked bar chart.

    Every render pass resolves the options, loads the binding, rebuilds the
    chart model and issues exactly one render call. Passes are numbered; a
    pass that is overtaken by a newer one (or by disposal) discards its
    result instead of applying it.
    """

    def __init__(  # noqa: PLR0913
        self,
        container: ContainerHandle,
        event_sink: EventSink,
        render_engine: RenderEngine | None = None,
        binding: BindingDescriptor | None = None,
        properties: Mapping[str, Any] | None = None,
        settings: WidgetSettings | None = None,
    ) -> None:
        """Initialize the widget.

        Args:
            container: Rendering surface owned by this widget
            event_sink: Host capability receiving click notifications
            render_engine: Render capability, if already loaded
            binding: Host data binding, if already complete
            properties: Initial options bag
            settings: Injectable defaults
        """
        self.settings = settings or WidgetSettings()
        self.container = container
        self.binding = binding
        self.properties: dict[str, Any] = dict(properties or {})

        self.config_resolver = ConfigResolver(self.settings)
        self.binding_adapter = DataBindingAdapter(self.settings)
        self.trace_builder = TraceBuilder()
        self.layout_builder = LayoutBuilder(self.settings)
        self.bridge = InteractionBridge(event_sink, self.settings.click_event_name)

        self._engine = render_engine
        self._state = WidgetState.UNINITIALIZED
        self._generation = 0
        self._render_lock: asyncio.Lock | None = None
        self._render_lock_loop: asyncio.AbstractEventLoop | None = None
        self._status: StatusMessage | None = None
        self.degraded_kind: DegradedKind | None = None
        self.chart_handle: ChartHandle | None = None

    @property
    def state(self) -> WidgetState:
        return self._state

    @property
    def disposed(self) -> bool:
        return self._state is WidgetState.DISPOSED

    # Lifecycle signals

    def connect(self) -> WidgetState:
        """Handle attachment to the host page."""
        if self._state is WidgetState.UNINITIALIZED:
            self._state = (
                WidgetState.AWAITING_DEPENDENCIES if self._engine is None else WidgetState.AWAITING_DATA
            )
        return self._state

    async def on_dependency_ready(self, render_engine: RenderEngine) -> WidgetState:
        """Handle the render capability becoming available."""
        if self.disposed:
            return self._state
        self._engine = render_engine
        return await self._request_render("dependency_ready")

    async def on_properties_updated(self, changed: Mapping[str, Any]) -> WidgetState:
        """Handle a property update carrying the changed options."""
        if self.disposed:
            return self._state
        self.properties.update(changed)
        return await self._request_render("properties_updated", changed=sorted(changed))

    async def on_data_ready(self, binding: BindingDescriptor | None = None) -> WidgetState:
        """Handle the host binding becoming ready (or changing)."""
        if self.disposed:
            return self._state
        if binding is not None:
            self.binding = binding
        return await self._request_render("data_ready")

    def dispose(self) -> None:
        """Tear down the chart. Repeated calls do nothing."""
        if self.disposed:
            return

        self._generation += 1
        self._state = WidgetState.DISPOSED
        self.bridge.detach()
        self.chart_handle = None

        if self._engine is not None:
            self._purge(self._engine)
        logger.debug("Widget disposed")

    # Public operations

    async def set_title(self, title: str) -> WidgetState:
        """Update the title option and re-render."""
        if self.disposed:
            return self._state
        self.properties["title"] = title
        return await self._request_render("set_title")

    async def refresh_chart(self) -> WidgetState:
        """Re-run the whole pipeline with the current options and binding."""
        return await self._request_render("refresh")

    def get_selected_value(self) -> SelectionEvent | None:
        """Return the most recent selection, or None when nothing was clicked yet."""
        return self.bridge.last_selection

    # Render passes

    async def _request_render(self, trigger: str, **context: Any) -> WidgetState:
        if self.disposed:
            logger.debug("Render skipped after dispose", trigger=trigger)
            return self._state

        try:
            engine = self._require_engine()
        except DependencyNotReadyError as e:
            self._state = WidgetState.AWAITING_DEPENDENCIES
            logger.debug("Render deferred", trigger=trigger, reason=e.message)
            return self._state

        if self.binding is None:
            self._state = WidgetState.AWAITING_DATA
            logger.debug("Render deferred until data is ready", trigger=trigger)
            return self._state

        await self._render_pass(engine, trigger, **context)
        return self._state

    def _require_engine(self) -> RenderEngine:
        if self._engine is None:
            raise DependencyNotReadyError()
        return self._engine

    def _is_stale(self, generation: int) -> bool:
        return generation != self._generation

    async def _render_pass(self, engine: RenderEngine, trigger: str, **context: Any) -> None:
        self._generation += 1
        generation = self._generation
        self._state = WidgetState.RENDERING
        logger.debug("Render pass started", trigger=trigger, generation=generation, **context)

        try:
            config = self.config_resolver.resolve(self.properties)
            bound = await self.binding_adapter.load(self.binding)
            if self._is_stale(generation):
                logger.info("Discarding stale render pass", generation=generation, phase="data_fetch")
                return

            model = self.trace_builder.build(bound.rows, bound.feed, config.color_palette)
            layout = self.layout_builder.build(model, config)

            async with self._get_render_lock():
                if self._is_stale(generation):
                    logger.info("Discarding stale render pass", generation=generation, phase="rendering")
                    return
                handle = await self._render(engine, model.to_traces(), layout)

            if self._is_stale(generation):
                logger.info("Discarding stale render result", generation=generation)
                self._restore_display(engine)
                return
        except DEGRADING_ERRORS as e:
            if not self._is_stale(generation):
                self._degrade(e)
            return

        self.chart_handle = handle
        self.bridge.attach(handle)
        self.degraded_kind = None
        self._status = None
        self._state = WidgetState.RENDERED
        logger.info(
            "Chart rendered",
            generation=generation,
            categories=len(model.categories),
            series=len(model.series),
        )

    async def _render(self, engine: RenderEngine, traces: Sequence[Trace], layout: LayoutSpec) -> ChartHandle:
        try:
            return await engine.render(self.container, traces, layout)
        except RenderError:
            raise
        except Exception as e:
            raise RenderError(f"Render engine failed: {e}") from e

    def _degrade(self, error: StackChartError) -> None:
        self.bridge.detach()
        self.chart_handle = None
        self.degraded_kind = error.kind
        self._state = WidgetState.DEGRADED
        self._status = error.to_status()
        self.container.show_status(self._status)
        logger.warning(
            "Render pass degraded",
            kind=error.kind.value if error.kind else None,
            code=error.code.value,
            error=error.message,
        )

    def _purge(self, engine: RenderEngine) -> None:
        try:
            engine.purge(self.container)
        except Exception as e:  # noqa: BLE001
            logger.warning("Purge failed", error=str(e))

    def _restore_display(self, engine: RenderEngine) -> None:
        """Undo a stale pass's drawing so the container matches the newest state."""
        if self.disposed:
            self._purge(engine)
        elif self._state is WidgetState.DEGRADED and self._status is not None:
            self.container.show_status(self._status)

    def _get_render_lock(self) -> asyncio.Lock:
        # Hosts may drive signals from successive event loops; a lock is bound to one
        loop = asyncio.get_running_loop()
        if self._render_lock is None or self._render_lock_loop is not loop:
            self._render_lock = asyncio.Lock()
            self._render_lock_loop = loop
        return self._render_lock
