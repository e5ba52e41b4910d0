"""Extract category and measure identifiers from host binding metadata and fetch rows."""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from stackchart.core.errors import BindingError, EmptyDataError, FetchError
from stackchart.core.models import DataFeed, Feed, ResultRow
from stackchart.infra.logging import get_logger
from stackchart.infra.settings import WidgetSettings

logger = get_logger(__name__)


class BindingDescriptor(Protocol):
    """Host binding exposing feed metadata and an asynchronous row fetch."""

    dimensions: Sequence[Feed | Mapping[str, Any]] | None
    measures: Sequence[Feed | Mapping[str, Any]] | None

    async def get_result_set(self) -> Sequence[ResultRow] | None:
        """Fetch the bound rows."""
        ...


class StaticBinding(BaseModel):
    """Binding over rows already held in memory.

    Useful for hosts that load data themselves (files, notebooks) and for tests.
    """

    dimensions: list[Feed] = Field(default_factory=list)
    measures: list[Feed] = Field(default_factory=list)
    rows: list[dict[str, Any]] = Field(default_factory=list)

    async def get_result_set(self) -> list[dict[str, Any]]:
        """Return the held rows."""
        return list(self.rows)


class BoundData(BaseModel):
    """Resolved feed plus the fetched rows of one render pass."""

    feed: DataFeed
    rows: list[Any] = Field(..., min_length=1)


class DataBindingAdapter:
    """Validates binding metadata at the boundary and fetches result rows."""

    def __init__(self, settings: WidgetSettings | None = None) -> None:
        """Initialize the adapter.

        Args:
            settings: Provides the dimensions/measures feed ids
        """
        settings = settings or WidgetSettings()
        self.dimensions_feed_id = settings.dimensions_feed_id
        self.measures_feed_id = settings.measures_feed_id

    def resolve_feed(self, binding: BindingDescriptor | None) -> DataFeed:
        """Resolve the category key and stacked measures of a binding.

        Args:
            binding: Host binding descriptor

        Returns:
            DataFeed with identifiers in declared order

        Raises:
            BindingError: If a feed is missing or has no usable members
        """
        if binding is None:
            raise BindingError("No data binding is configured")

        dimensions = self._find_feed(getattr(binding, "dimensions", None), self.dimensions_feed_id)
        measures = self._find_feed(getattr(binding, "measures", None), self.measures_feed_id)

        if not measures.members:
            raise BindingError("Measures feed has no members", feed_id=measures.id)
        if not dimensions.members:
            raise BindingError("Dimensions feed has no members", feed_id=dimensions.id)

        return DataFeed(
            dimension_id=dimensions.members[0].id,
            measure_ids=[member.id for member in measures.members],
            measure_labels={member.id: member.description or member.id for member in measures.members},
            dimension_description=dimensions.description or None,
            measures_description=measures.description or None,
        )

    async def fetch_rows(self, binding: BindingDescriptor) -> list[ResultRow]:
        """Fetch rows through the binding's asynchronous capability.

        Args:
            binding: Host binding descriptor

        Returns:
            Non-empty list of rows

        Raises:
            FetchError: If retrieval fails or the result is malformed
            EmptyDataError: If retrieval succeeds with zero rows
        """
        try:
            result = await binding.get_result_set()
        except Exception as e:
            logger.warning("Row fetch failed", error=str(e), error_type=type(e).__name__)
            raise FetchError(f"Failed to fetch result set: {e}") from e

        if result is None:
            raise EmptyDataError("Result set is missing")
        if isinstance(result, str | bytes | Mapping) or not isinstance(result, Sequence):
            raise FetchError(f"Result set must be a sequence of rows, got {type(result).__name__}")
        if len(result) == 0:
            raise EmptyDataError()

        for index, row in enumerate(result):
            if not isinstance(row, Mapping):
                raise FetchError(f"Row {index} is a {type(row).__name__}, expected a mapping")

        return list(result)

    async def load(self, binding: BindingDescriptor | None) -> BoundData:
        """Resolve the feed, then fetch rows.

        Args:
            binding: Host binding descriptor

        Returns:
            BoundData for the trace builder
        """
        feed = self.resolve_feed(binding)
        rows = await self.fetch_rows(binding)  # type: ignore[arg-type]  # resolve_feed rejects None
        logger.debug("Binding loaded", dimension=feed.dimension_id, measures=feed.measure_ids, rows=len(rows))
        return BoundData(feed=feed, rows=rows)

    def _find_feed(self, feeds: Sequence[Feed | Mapping[str, Any]] | None, feed_id: str) -> Feed:
        if not feeds:
            raise BindingError(f"Feed '{feed_id}' is not bound", feed_id=feed_id)

        for raw in feeds:
            raw_id = raw.id if isinstance(raw, Feed) else (raw.get("id") if isinstance(raw, Mapping) else None)
            if raw_id != feed_id:
                continue
            if isinstance(raw, Feed):
                return raw
            try:
                return Feed.model_validate(raw)
            except PydanticValidationError as e:
                raise BindingError(
                    f"Feed '{feed_id}' is malformed: {e.error_count()} invalid fields", feed_id=feed_id
                ) from e

        raise BindingError(f"Feed '{feed_id}' is not bound", feed_id=feed_id)
