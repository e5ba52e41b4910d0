"""Command-line entry point: render a CSV file as a stacked bar chart."""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any

import polars as pl

from stackchart.core.enums import WidgetState
from stackchart.core.models import Feed, FeedMember
from stackchart.infra.logging import configure_logging, get_logger
from stackchart.orchestration.widget import StackedChartWidget
from stackchart.processing.binding_adapter import StaticBinding
from stackchart.rendering.altair_engine import AltairRenderEngine
from stackchart.rendering.container import MemoryContainer

logger = get_logger(__name__)

OUTPUT_FORMATS = ("html", "json")


def parse_members(spec: str) -> list[FeedMember]:
    """Parse ``id[=label],id[=label]`` into feed members."""
    members = []
    for token in spec.split(","):
        member_id, _, label = token.strip().partition("=")
        if member_id:
            members.append(FeedMember(id=member_id.strip(), description=label.strip() or None))
    return members


def build_binding(args: argparse.Namespace) -> StaticBinding:
    """Load the CSV and describe it as a static binding."""
    # Read everything as text; cell parsing is the trace builder's job
    frame = pl.read_csv(args.csv, infer_schema_length=0)
    return StaticBinding(
        dimensions=[Feed(id="dimensions", description=args.dimension_title, members=parse_members(args.dimension))],
        measures=[Feed(id="measures", description=args.measures_title, members=parse_members(args.measures))],
        rows=frame.to_dicts(),
    )


def build_options(args: argparse.Namespace) -> dict[str, Any]:
    """Collect the options bag from the command line."""
    options = {
        "title": args.title,
        "colorPalette": args.palette,
        "barWidth": args.bar_width,
        "barDepth": args.bar_depth,
    }
    return {key: value for key, value in options.items() if value is not None}


async def render_to_file(args: argparse.Namespace) -> int:
    """Run one render pass and save the chart.

    Returns:
        Process exit code
    """
    container = MemoryContainer()
    widget = StackedChartWidget(
        container=container,
        event_sink=lambda event, payload: logger.info("Click", event=event, payload=payload),
        render_engine=AltairRenderEngine(width=args.width, height=args.height),
        properties=build_options(args),
    )
    widget.connect()
    state = await widget.on_data_ready(build_binding(args))

    if state is not WidgetState.RENDERED:
        message = container.status.message if container.status else state.value
        sys.stderr.write(f"stackchart: {message}\n")
        widget.dispose()
        return 1

    output = Path(args.output)
    fmt = args.format or output.suffix.lstrip(".").lower() or "html"
    if fmt not in OUTPUT_FORMATS:
        sys.stderr.write(f"stackchart: unsupported output format '{fmt}'\n")
        widget.dispose()
        return 2

    container.content.save(str(output), format=fmt)
    logger.info("Chart written", path=str(output), format=fmt)
    widget.dispose()
    return 0


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the stackchart-render command."""
    parser = argparse.ArgumentParser(
        prog="stackchart-render",
        description="Render a CSV file as a stacked bar chart (HTML or Vega-Lite JSON)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # One dimension, two stacked measures with display labels
  stackchart-render sales.csv -d month -m "rev=Revenue,cost=Cost" -o sales.html

  # Custom palette and narrower bars, written as Vega-Lite JSON
  stackchart-render sales.csv -d month -m rev,cost --palette "#1f77b4, #ff7f0e" --bar-width 0.6 -o sales.json
        """.strip(),
    )
    parser.add_argument("csv", help="input CSV file with a header row")
    parser.add_argument("-d", "--dimension", required=True, help="category column, as id[=label]")
    parser.add_argument("-m", "--measures", required=True, help="stacked columns, as id[=label],id[=label]")
    parser.add_argument("-o", "--output", required=True, help="output file (.html or .json)")
    parser.add_argument("--format", choices=OUTPUT_FORMATS, help="output format (default: from file suffix)")
    parser.add_argument("--title", help="chart title")
    parser.add_argument("--palette", help="comma-delimited series colors")
    parser.add_argument("--bar-width", help="bar width ratio in (0, 1]")
    parser.add_argument("--bar-depth", help="bar depth")
    parser.add_argument("--dimension-title", help="category axis title")
    parser.add_argument("--measures-title", help="value axis title")
    parser.add_argument("--width", type=int, default=800, help="chart width in pixels")
    parser.add_argument("--height", type=int, default=500, help="chart height in pixels")
    parser.add_argument("--debug", action="store_true", help="enable debug logging")

    args = parser.parse_args(argv)
    configure_logging(level=logging.DEBUG if args.debug else logging.WARNING, stream=sys.stderr)

    sys.exit(asyncio.run(render_to_file(args)))


if __name__ == "__main__":
    main()
