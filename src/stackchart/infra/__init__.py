"""Logging and settings infrastructure."""
