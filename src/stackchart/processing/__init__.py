"""Data binding, model and layout components of the render pipeline."""

from .binding_adapter import BindingDescriptor, BoundData, DataBindingAdapter, StaticBinding
from .config_resolver import ConfigResolver
from .layout_builder import LayoutBuilder
from .trace_builder import TraceBuilder, to_float

__all__ = [
    "BindingDescriptor",
    "BoundData",
    "ConfigResolver",
    "DataBindingAdapter",
    "LayoutBuilder",
    "StaticBinding",
    "TraceBuilder",
    "to_float",
]
