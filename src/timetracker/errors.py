"""Exception types for the time tracker core."""

from __future__ import annotations


class TrackerError(Exception):
    """Base exception for time tracker errors."""


class InvalidDateFormatError(TrackerError, ValueError):
    """Raised when a date string matches none of the recognized patterns."""

    def __init__(self, raw: str) -> None:
        super().__init__(f"Invalid date format '{raw}'")
        self.raw = raw


class CalendarInvalidError(TrackerError, ValueError):
    """Raised when a date string is well-formed but names no real moment.

    The digit patterns accept e.g. day 31 for every month or month 0; the
    ``datetime`` constructor rejects those and its error is chained.
    """


class ProjectMappingError(TrackerError):
    """Raised when the project mapping file cannot be read or decoded."""
