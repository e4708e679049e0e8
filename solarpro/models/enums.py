"""Enum definitions for dashboard views."""

from enum import Enum


class ViewMode(str, Enum):
    """Period granularity a dashboard view is filtered by."""

    DAY = "day"  # Selector is YYYY-MM-DD
    MONTH = "month"  # Selector is YYYY-MM
    YEAR = "year"  # Selector is YYYY
