"""Convert fetched rows into the stacked chart model."""

import math
import re
from collections.abc import Sequence
from typing import Any

import polars as pl

from stackchart.core.colors import cycle_color
from stackchart.core.models import ChartModel, DataFeed, ResultRow, Series
from stackchart.infra.logging import get_logger

logger = get_logger(__name__)

# Leading decimal literal, optionally signed, with optional exponent
_NUMERIC_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")
_INFINITY_PREFIX = re.compile(r"\s*([+-]?)Infinity")


def to_float(value: Any) -> float:  # noqa: ANN401
    """Parse a cell value as a float, falling back to zero.

    Numbers pass through, strings are read up to the end of their leading
    numeric literal ("12.5kg" -> 12.5), everything else counts as zero.
    NaN also becomes zero. Never raises.

    Args:
        value: Raw cell value

    Returns:
        Parsed number or 0.0
    """
    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, int | float):
        number = float(value)
    elif isinstance(value, str):
        match = _NUMERIC_PREFIX.match(value)
        if match:
            number = float(match.group(1))
        else:
            infinity = _INFINITY_PREFIX.match(value)
            if not infinity:
                return 0.0
            number = -math.inf if infinity.group(1) == "-" else math.inf
    else:
        return 0.0
    return 0.0 if math.isnan(number) else number


def to_category(value: Any) -> str:  # noqa: ANN401
    """Coerce a dimension cell to its category label."""
    return "" if value is None else str(value)


class TraceBuilder:
    """Builds a fresh ChartModel from rows, feed and palette."""

    def build(
        self,
        rows: Sequence[ResultRow],
        feed: DataFeed,
        palette: Sequence[str],
    ) -> ChartModel:
        """Build the chart model.

        Args:
            rows: Fetched result rows
            feed: Resolved category and measure identifiers
            palette: Non-empty ordered color tokens

        Returns:
            ChartModel with one series per measure, aligned to categories
        """
        palette = tuple(palette)
        categories = [to_category(row.get(feed.dimension_id)) for row in rows]

        columns = {
            f"s{index}": [to_float(row.get(measure_id)) for row in rows]
            for index, measure_id in enumerate(feed.measure_ids)
        }
        frame = pl.DataFrame(columns, schema={name: pl.Float64 for name in columns})

        series = [
            Series(
                name=feed.measure_labels.get(measure_id, measure_id),
                values=frame.get_column(f"s{index}").to_list(),
                color=cycle_color(palette, index),
            )
            for index, measure_id in enumerate(feed.measure_ids)
        ]

        max_value = frame.max().max_horizontal().item() if frame.height else None

        logger.debug("Chart model built", categories=len(categories), series=len(series))
        return ChartModel(
            categories=categories,
            series=series,
            max_value=max_value if max_value is not None else 0.0,
            category_title=feed.dimension_description,
            value_title=feed.measures_description,
        )
