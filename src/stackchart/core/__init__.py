"""Core types, errors and defaults for stackchart."""
