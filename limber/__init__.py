"""Limber: guided stretching timer."""

__version__ = "0.1.0"
