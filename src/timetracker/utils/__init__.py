"""Utility modules.

This package provides shared utilities used across the codebase.
"""

from .duration import format_duration
from .time import (
    DATE_PATTERNS,
    PERIODS,
    Clock,
    PartialDate,
    end_of_day,
    normalize,
    now,
    period_window,
    pretty_date,
)

__all__ = [
    # Time utilities (date-string normalization and boundaries)
    "DATE_PATTERNS",
    "PERIODS",
    "Clock",
    "PartialDate",
    "end_of_day",
    "normalize",
    "now",
    "period_window",
    "pretty_date",
    # Display
    "format_duration",
]
