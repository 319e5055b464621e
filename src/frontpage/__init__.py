"""Frontpage: cached feed aggregation and page description lookup."""

__version__ = "0.1.0"
