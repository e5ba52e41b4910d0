"""Injectable widget defaults backed by environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from stackchart.core.colors import FALLBACK_PALETTE, StructuralColors


class WidgetSettings(BaseSettings):
    """Defaults used whenever the host omits or garbles an option."""

    model_config = SettingsConfigDict(
        env_prefix="STACKCHART_",
        env_file=".env",
        extra="ignore",
    )

    default_title: str = Field("My 3D Stacked Chart", description="Title used when none is configured")
    default_palette: tuple[str, ...] = Field(FALLBACK_PALETTE, min_length=1, description="Fallback series colors")
    default_bar_width: float = Field(0.8, gt=0.0, le=1.0, description="Fallback bar width ratio")
    default_bar_depth: float = Field(0.5, description="Fallback bar depth")

    category_axis_title: str = Field("Date", description="Category axis title when the feed has none")
    value_axis_title: str = Field("Quantity", description="Value axis title when the feed has none")
    tick_angle: int = Field(-45, description="Category tick label rotation in degrees")
    margin_top: int = Field(50, ge=0)
    margin_left: int = Field(40, ge=0)
    margin_right: int = Field(40, ge=0)
    margin_bottom: int = Field(80, ge=0)
    background: str = Field(StructuralColors().BACKGROUND, description="Paper and plot background")

    dimensions_feed_id: str = Field("dimensions", description="Feed id holding the category member")
    measures_feed_id: str = Field("measures", description="Feed id holding the stacked measures")
    click_event_name: str = Field("onBarClick", description="Name of the outward click notification")
