"""Resolve the loosely-typed host options bag into a ChartConfig."""

import math
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from stackchart.core.errors import ConfigError
from stackchart.core.models import ChartConfig
from stackchart.infra.logging import get_logger
from stackchart.infra.settings import WidgetSettings

logger = get_logger(__name__)

T = TypeVar("T")

# Host option names
TITLE_OPTION = "title"
PALETTE_OPTION = "colorPalette"
BAR_WIDTH_OPTION = "barWidth"
BAR_DEPTH_OPTION = "barDepth"


def _to_number(option: str, value: Any) -> float:  # noqa: ANN401
    if isinstance(value, bool):
        raise ConfigError(option, value, "booleans are not numbers")
    try:
        number = float(value.strip() if isinstance(value, str) else value)
    except (TypeError, ValueError) as e:
        raise ConfigError(option, value, "not a number") from e
    if not math.isfinite(number):
        raise ConfigError(option, value, "not a finite number")
    return number


def parse_title(value: Any) -> str:  # noqa: ANN401
    """Parse the title option; empty strings count as absent."""
    if not isinstance(value, str):
        raise ConfigError(TITLE_OPTION, value, "title must be a string")
    if not value.strip():
        raise ConfigError(TITLE_OPTION, value, "title is empty")
    return value


def parse_palette(value: Any) -> tuple[str, ...]:  # noqa: ANN401
    """Parse a comma-delimited palette string (or a sequence of tokens).

    Tokens are stripped of surrounding whitespace and passed through
    without color-syntax validation.
    """
    if isinstance(value, str):
        tokens = value.split(",")
    elif isinstance(value, list | tuple):
        tokens = [str(token) for token in value]
    else:
        raise ConfigError(PALETTE_OPTION, value, "palette must be a comma-delimited string")

    palette = tuple(token.strip() for token in tokens if token.strip())
    if not palette:
        raise ConfigError(PALETTE_OPTION, value, "palette has no colors")
    return palette


def parse_bar_width(value: Any) -> float:  # noqa: ANN401
    """Parse the bar width ratio; only (0, 1] is accepted."""
    ratio = _to_number(BAR_WIDTH_OPTION, value)
    if not 0.0 < ratio <= 1.0:
        raise ConfigError(BAR_WIDTH_OPTION, value, "bar width must be in (0, 1]")
    return ratio


def parse_bar_depth(value: Any) -> float:  # noqa: ANN401
    """Parse the bar depth."""
    return _to_number(BAR_DEPTH_OPTION, value)


class ConfigResolver:
    """Normalizes raw display options into a typed configuration.

    Never fails: every missing or malformed option is replaced by the
    default from WidgetSettings.
    """

    def __init__(self, settings: WidgetSettings | None = None) -> None:
        """Initialize the resolver.

        Args:
            settings: Source of default values
        """
        self.settings = settings or WidgetSettings()

    def resolve(self, options: Mapping[str, Any] | None) -> ChartConfig:
        """Resolve an options bag.

        Args:
            options: Untyped host options (may be None)

        Returns:
            Fully populated ChartConfig
        """
        options = options or {}
        return ChartConfig(
            title=self._option(options, TITLE_OPTION, parse_title, self.settings.default_title),
            color_palette=self._option(options, PALETTE_OPTION, parse_palette, tuple(self.settings.default_palette)),
            bar_width_ratio=self._option(options, BAR_WIDTH_OPTION, parse_bar_width, self.settings.default_bar_width),
            bar_depth=self._option(options, BAR_DEPTH_OPTION, parse_bar_depth, self.settings.default_bar_depth),
        )

    def _option(self, options: Mapping[str, Any], name: str, parser: Callable[[Any], T], default: T) -> T:
        value = options.get(name)
        if value is None:
            return default
        try:
            return parser(value)
        except ConfigError as e:
            logger.warning("Ignoring malformed option", option=name, reason=e.details[0].reason, default=str(default))
            return default
