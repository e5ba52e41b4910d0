"""Color definitions for stackchart visualization."""

from pydantic import BaseModel, ConfigDict

# Series colors used when the host supplies no palette, assigned by measure index
FALLBACK_PALETTE: tuple[str, ...] = (
    "#a84300",  # Rust
    "#f5c6a5",  # Peach
    "#007bff",  # Blue
    "#28a745",  # Green
    "#dc3545",  # Red
    "#ffc107",  # Amber
    "#6c757d",  # Gray
    "#17a2b8",  # Teal
    "#fd7e14",  # Orange
    "#e83e8c",  # Pink
)


class StructuralColors(BaseModel):
    """Colors for chart structural elements (background, axes)."""

    model_config = ConfigDict(frozen=True)

    BACKGROUND: str = "white"
    AXIS_LINE: str = "#475569"
    TICK_LINE: str = "#CBD5E1"
    GRID_MAJOR: str = "#E2E8F0"


class StatusColors(BaseModel):
    """Text colors of inline status messages by level."""

    model_config = ConfigDict(frozen=True)

    INFO: str = "gray"
    WARNING: str = "orange"
    ERROR: str = "red"


def cycle_color(palette: tuple[str, ...] | list[str], index: int) -> str:
    """Pick the palette entry for a series index, wrapping around.

    Args:
        palette: Non-empty ordered color tokens
        index: Zero-based series index

    Returns:
        Color token for the series
    """
    return palette[index % len(palette)]
