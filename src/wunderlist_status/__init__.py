"""Wunderlist status reporter for terminal widgets."""

__version__ = "1.0.0"
