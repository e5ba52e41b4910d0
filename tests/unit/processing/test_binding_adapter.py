"""Unit tests for DataBindingAdapter component."""

import asyncio
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock

import pytest

from stackchart.core.errors import BindingError, EmptyDataError, FetchError
from stackchart.core.models import Feed, FeedMember
from stackchart.infra.settings import WidgetSettings
from stackchart.processing.binding_adapter import DataBindingAdapter, StaticBinding

ROWS = [
    {"quarter": "Q1", "rev": "120", "cost": "80"},
    {"quarter": "Q2", "rev": "95", "cost": "70"},
]


def make_binding(
    dimensions: list[Any] | None = None,
    measures: list[Any] | None = None,
    result: Any = None,  # noqa: ANN401
) -> SimpleNamespace:
    """Create a duck-typed host binding with mapping feeds."""
    if dimensions is None:
        dimensions = [
            {"id": "dimensions", "description": "Quarter", "members": [{"id": "quarter", "description": "Quarter"}]}
        ]
    if measures is None:
        measures = [
            {
                "id": "measures",
                "description": "Amount",
                "members": [{"id": "rev", "description": "Revenue"}, {"id": "cost"}],
            }
        ]
    return SimpleNamespace(
        dimensions=dimensions,
        measures=measures,
        get_result_set=AsyncMock(return_value=ROWS if result is None else result),
    )


class TestResolveFeed:
    """Test feed resolution."""

    @pytest.fixture
    def adapter(self) -> DataBindingAdapter:
        """Create an adapter with default feed ids."""
        return DataBindingAdapter(WidgetSettings())

    def test_resolves_identifiers(self, adapter: DataBindingAdapter) -> None:
        """Test category key, measure order and labels."""
        feed = adapter.resolve_feed(make_binding())
        assert feed.dimension_id == "quarter"
        assert feed.measure_ids == ["rev", "cost"]
        assert feed.measure_labels == {"rev": "Revenue", "cost": "cost"}
        assert feed.dimension_description == "Quarter"
        assert feed.measures_description == "Amount"

    def test_first_dimension_member_wins(self, adapter: DataBindingAdapter) -> None:
        """Test that only the first dimension member becomes the category axis."""
        binding = make_binding(
            dimensions=[{"id": "dimensions", "members": [{"id": "region"}, {"id": "quarter"}]}],
        )
        assert adapter.resolve_feed(binding).dimension_id == "region"

    def test_feeds_found_by_id(self, adapter: DataBindingAdapter) -> None:
        """Test that feeds with other ids are skipped."""
        binding = make_binding(
            dimensions=[
                {"id": "filters", "members": [{"id": "country"}]},
                {"id": "dimensions", "members": [{"id": "quarter"}]},
            ],
        )
        assert adapter.resolve_feed(binding).dimension_id == "quarter"

    def test_accepts_feed_models(self, adapter: DataBindingAdapter) -> None:
        """Test bindings that already carry Feed models."""
        binding = StaticBinding(
            dimensions=[Feed(id="dimensions", members=[FeedMember(id="quarter")])],
            measures=[Feed(id="measures", members=[FeedMember(id="rev")])],
        )
        feed = adapter.resolve_feed(binding)
        assert feed.measure_ids == ["rev"]
        assert feed.dimension_description is None

    def test_missing_binding(self, adapter: DataBindingAdapter) -> None:
        """Test that no binding at all is a binding error."""
        with pytest.raises(BindingError):
            adapter.resolve_feed(None)

    def test_missing_dimensions_feed(self, adapter: DataBindingAdapter) -> None:
        """Test that an absent dimensions feed is a binding error."""
        with pytest.raises(BindingError) as exc_info:
            adapter.resolve_feed(make_binding(dimensions=[]))
        assert exc_info.value.feed_id == "dimensions"

    def test_missing_measures_feed(self, adapter: DataBindingAdapter) -> None:
        """Test that a measures list without the measures feed is a binding error."""
        with pytest.raises(BindingError) as exc_info:
            adapter.resolve_feed(make_binding(measures=[{"id": "other", "members": [{"id": "rev"}]}]))
        assert exc_info.value.feed_id == "measures"

    def test_zero_measure_members(self, adapter: DataBindingAdapter) -> None:
        """Test that a measures feed without members is a binding error."""
        with pytest.raises(BindingError):
            adapter.resolve_feed(make_binding(measures=[{"id": "measures", "members": []}]))

    def test_zero_dimension_members(self, adapter: DataBindingAdapter) -> None:
        """Test that a dimensions feed without members is a binding error."""
        with pytest.raises(BindingError):
            adapter.resolve_feed(make_binding(dimensions=[{"id": "dimensions", "members": []}]))

    def test_malformed_feed(self, adapter: DataBindingAdapter) -> None:
        """Test that unparseable feed metadata is a binding error."""
        with pytest.raises(BindingError) as exc_info:
            adapter.resolve_feed(make_binding(measures=[{"id": "measures", "members": [{"description": "no id"}]}]))
        assert "malformed" in exc_info.value.message

    def test_custom_feed_ids(self) -> None:
        """Test feed ids injected through settings."""
        adapter = DataBindingAdapter(WidgetSettings(dimensions_feed_id="rows", measures_feed_id="values"))
        binding = make_binding(
            dimensions=[{"id": "rows", "members": [{"id": "quarter"}]}],
            measures=[{"id": "values", "members": [{"id": "rev"}]}],
        )
        assert adapter.resolve_feed(binding).measure_ids == ["rev"]


class TestFetchRows:
    """Test row fetching."""

    @pytest.fixture
    def adapter(self) -> DataBindingAdapter:
        """Create an adapter with default feed ids."""
        return DataBindingAdapter(WidgetSettings())

    def test_returns_rows(self, adapter: DataBindingAdapter) -> None:
        """Test a successful fetch."""
        rows = asyncio.run(adapter.fetch_rows(make_binding()))
        assert rows == ROWS

    def test_rejection_is_fetch_error(self, adapter: DataBindingAdapter) -> None:
        """Test that a failing fetch becomes a FetchError."""
        binding = make_binding()
        binding.get_result_set = AsyncMock(side_effect=ConnectionError("backend down"))
        with pytest.raises(FetchError) as exc_info:
            asyncio.run(adapter.fetch_rows(binding))
        assert isinstance(exc_info.value.__cause__, ConnectionError)

    def test_empty_result(self, adapter: DataBindingAdapter) -> None:
        """Test that zero rows is an EmptyDataError, not a FetchError."""
        with pytest.raises(EmptyDataError):
            asyncio.run(adapter.fetch_rows(make_binding(result=[])))

    def test_none_result(self, adapter: DataBindingAdapter) -> None:
        """Test that a missing result set counts as empty."""
        binding = make_binding()
        binding.get_result_set = AsyncMock(return_value=None)
        with pytest.raises(EmptyDataError):
            asyncio.run(adapter.fetch_rows(binding))

    def test_non_sequence_result(self, adapter: DataBindingAdapter) -> None:
        """Test that a result that is not a row sequence is a FetchError."""
        with pytest.raises(FetchError):
            asyncio.run(adapter.fetch_rows(make_binding(result={"quarter": "Q1"})))

    def test_non_mapping_row(self, adapter: DataBindingAdapter) -> None:
        """Test that rows must be mappings."""
        with pytest.raises(FetchError) as exc_info:
            asyncio.run(adapter.fetch_rows(make_binding(result=[{"quarter": "Q1"}, ["Q2", 1]])))
        assert "Row 1" in exc_info.value.message


class TestLoad:
    """Test the combined resolve-then-fetch step."""

    def test_load(self) -> None:
        """Test that load returns feed and rows."""
        bound = asyncio.run(DataBindingAdapter().load(make_binding()))
        assert bound.feed.dimension_id == "quarter"
        assert len(bound.rows) == 2

    def test_binding_error_skips_fetch(self) -> None:
        """Test that rows are not fetched when the feeds are invalid."""
        binding = make_binding(dimensions=[])
        with pytest.raises(BindingError):
            asyncio.run(DataBindingAdapter().load(binding))
        binding.get_result_set.assert_not_called()

    def test_static_binding(self) -> None:
        """Test loading rows held in memory."""
        binding = StaticBinding(
            dimensions=[Feed(id="dimensions", members=[FeedMember(id="quarter")])],
            measures=[Feed(id="measures", members=[FeedMember(id="rev")])],
            rows=ROWS,
        )
        bound = asyncio.run(DataBindingAdapter().load(binding))
        assert bound.rows == ROWS
