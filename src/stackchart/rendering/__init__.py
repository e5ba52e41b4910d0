"""Render engine contract and the bundled Altair implementation."""

from .altair_engine import AltairChartHandle, AltairRenderEngine
from .container import MemoryContainer
from .engine import ChartHandle, ContainerHandle, RenderEngine

__all__ = [
    "AltairChartHandle",
    "AltairRenderEngine",
    "ChartHandle",
    "ContainerHandle",
    "MemoryContainer",
    "RenderEngine",
]
