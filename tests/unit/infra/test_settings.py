"""Unit tests for widget settings."""

import os
from unittest.mock import patch

import pytest
from pydantic import ValidationError as PydanticValidationError

from stackchart.core.colors import FALLBACK_PALETTE
from stackchart.infra.settings import WidgetSettings


class TestWidgetSettings:
    """Tests for WidgetSettings defaults and overrides."""

    @patch.dict(os.environ, {}, clear=True)
    def test_defaults(self) -> None:
        """Test documented defaults."""
        settings = WidgetSettings()
        assert settings.default_title == "My 3D Stacked Chart"
        assert settings.default_palette == FALLBACK_PALETTE
        assert len(settings.default_palette) == 10
        assert settings.default_bar_width == 0.8
        assert settings.default_bar_depth == 0.5
        assert settings.category_axis_title == "Date"
        assert settings.value_axis_title == "Quantity"
        assert settings.dimensions_feed_id == "dimensions"
        assert settings.measures_feed_id == "measures"
        assert settings.click_event_name == "onBarClick"

    @patch.dict(os.environ, {"STACKCHART_DEFAULT_TITLE": "Inventory", "STACKCHART_TICK_ANGLE": "-30"}, clear=True)
    def test_env_override(self) -> None:
        """Test that environment variables override defaults."""
        settings = WidgetSettings()
        assert settings.default_title == "Inventory"
        assert settings.tick_angle == -30

    def test_constructor_override(self) -> None:
        """Test injecting defaults directly."""
        settings = WidgetSettings(default_palette=("#111", "#222"), value_axis_title="Units")
        assert settings.default_palette == ("#111", "#222")
        assert settings.value_axis_title == "Units"

    def test_invalid_default_width(self) -> None:
        """Test that an out-of-range default width is rejected."""
        with pytest.raises(PydanticValidationError):
            WidgetSettings(default_bar_width=0.0)
