"""Kniffel - multi-player dice scoring game rules engine."""

__version__ = "0.1.0"
