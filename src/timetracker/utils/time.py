"""Date and time utilities for the tracker.

This module is the single source of truth for turning human-entered
date strings into timestamps:
- A reference ``Clock`` (current instant + timezone) replaces implicit
  "now"/"today" lookups, so every resolution is reproducible in tests
- An ordered cascade of pattern matchers, first match wins
- Caller-side helpers for range boundaries (end of day, period windows)
- A display helper for human-friendly timestamps

All resolved timestamps are timezone-aware. A clock without an explicit
``tz`` resolves in the process's local timezone, following the system's
DST rules for the resolved date.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Any

from ..errors import CalendarInvalidError, InvalidDateFormatError

logger = logging.getLogger(__name__)

# Digit-level token grammar; no calendar validation happens here
HOUR_RE = r"(?P<hour>[012]?\d)"
MINUTE_RE = r"(?P<minute>[0-5]?\d)"
DAY_RE = r"(?P<day>[0123]?\d)"
MONTH_RE = r"(?P<month>[01]?\d)"
YEAR_RE = r"(?P<year>2\d{3})"
DATE_SEP_RE = r"[-.]?"
TIME_RE = rf"{HOUR_RE}:{MINUTE_RE}"

PERIODS = ("day", "week", "month", "year")


@dataclass(frozen=True)
class Clock:
    """Reference instant and timezone used to resolve partial dates.

    Attributes:
        now: Timezone-aware current instant.
        tz: Timezone for resolved timestamps. ``None`` means the process's
            local timezone.
    """

    now: datetime
    tz: tzinfo | None = None

    def __post_init__(self) -> None:
        if self.now.tzinfo is None:
            raise ValueError(f"Clock requires a timezone-aware instant, got {self.now}")

    @classmethod
    def system(cls) -> Clock:
        """Return a clock reading the process wall clock in local time."""
        return cls(now=datetime.now().astimezone())

    @classmethod
    def fixed(cls, now: datetime) -> Clock:
        """Return a clock frozen at ``now``, resolving in ``now``'s timezone."""
        return cls(now=now, tz=now.tzinfo)

    @property
    def today(self) -> date:
        """Civil date of ``now`` in the clock's timezone."""
        return self.convert(self.now).date()

    def localize(self, naive: datetime) -> datetime:
        """Attach the clock's timezone to a naive datetime."""
        if self.tz is None:
            return naive.astimezone()
        return naive.replace(tzinfo=self.tz)

    def convert(self, aware: datetime) -> datetime:
        """Express an aware datetime in the clock's timezone."""
        if self.tz is None:
            return aware.astimezone()
        return aware.astimezone(self.tz)


@dataclass(frozen=True)
class PartialDate:
    """Fields extracted by a pattern matcher; ``None`` means "not given"."""

    year: int | None = None
    month: int | None = None
    day: int | None = None
    hour: int | None = None
    minute: int | None = None


Matcher = Callable[[str], PartialDate | None]


def _matcher(pattern: str) -> Matcher:
    regex = re.compile(pattern, re.IGNORECASE)

    def match(raw: str) -> PartialDate | None:
        found = regex.fullmatch(raw)
        if found is None:
            return None
        return PartialDate(**{k: int(v) for k, v in found.groupdict().items()})

    return match


_YMD = rf"{YEAR_RE}{DATE_SEP_RE}{MONTH_RE}{DATE_SEP_RE}{DAY_RE}"
_DMY = rf"{DAY_RE}{DATE_SEP_RE}{MONTH_RE}{DATE_SEP_RE}{YEAR_RE}"

# Priority order matters: an all-digit run is read year-first before day-first
DATE_PATTERNS: tuple[tuple[str, Matcher], ...] = (
    ("time", _matcher(TIME_RE)),  # "13:42"
    ("date", _matcher(_YMD)),  # "2010-02-26"
    ("datetime", _matcher(rf"{_YMD}\s+{TIME_RE}")),  # "2010-02-26 12:34"
    ("date_dayfirst", _matcher(_DMY)),  # "26-02-2010"
    ("datetime_dayfirst", _matcher(rf"{_DMY}\s+{TIME_RE}")),  # "26-02-2010 12:34"
)


def _pick(value: int | None, default: int) -> int:
    return default if value is None else value


def _resolve(partial: PartialDate, raw: str, clock: Clock) -> datetime:
    today = clock.today
    try:
        naive = datetime(
            _pick(partial.year, today.year),
            _pick(partial.month, today.month),
            _pick(partial.day, today.day),
            _pick(partial.hour, 0),
            _pick(partial.minute, 0),
        )
    except ValueError as err:
        raise CalendarInvalidError(f"Invalid calendar date '{raw}': {err}") from err
    return clock.localize(naive)


def normalize(raw: str, *, clock: Clock | None = None) -> datetime:
    """Resolve a human-entered date string into a timezone-aware datetime.

    Recognized shapes, tried in order (first match wins):
    ``HH:MM``, ``YYYY-MM-DD``, ``YYYY-MM-DD HH:MM``, ``DD-MM-YYYY`` and
    ``DD-MM-YYYY HH:MM``. Date separators may be ``-``, ``.`` or absent.
    Missing date fields come from the clock's today, missing time fields
    are zero.

    Args:
        raw: Date string as entered by the user.
        clock: Reference clock. Defaults to the system clock.

    Returns:
        Timezone-aware datetime with zero seconds.

    Raises:
        InvalidDateFormatError: If no pattern matches.
        CalendarInvalidError: If the digits name no real calendar moment.
    """
    if not isinstance(raw, str):
        raise InvalidDateFormatError(repr(raw))

    clock = clock or Clock.system()
    text = raw.strip()
    for name, matcher in DATE_PATTERNS:
        partial = matcher(text)
        if partial is not None:
            logger.debug("Date %r matched pattern %s", raw, name)
            return _resolve(partial, raw, clock)
    raise InvalidDateFormatError(raw)


def now(clock: Clock | None = None) -> datetime:
    """Return the current instant of ``clock`` (system clock by default)."""
    return (clock or Clock.system()).now


def end_of_day(dt: datetime) -> datetime:
    """Round a midnight timestamp up to 23:59:59 of the same day.

    Used by callers turning a date-only upper bound into an inclusive one.
    Timestamps with any other time of day are returned unchanged.
    """
    if dt.time() != time(0):
        return dt
    return dt.replace(hour=23, minute=59, second=59)


def _period_start(period: str, today: date, offset: int) -> date:
    if period == "day":
        return today + timedelta(days=offset)
    if period == "week":
        monday = today - timedelta(days=today.weekday())
        return monday + timedelta(weeks=offset)
    if period == "month":
        index = today.year * 12 + today.month - 1 + offset
        return date(index // 12, index % 12 + 1, 1)
    if period == "year":
        return date(today.year + offset, 1, 1)
    raise ValueError(f"Unknown period {period!r}. Known periods: {', '.join(PERIODS)}")


def period_window(
    period: str, *, clock: Clock | None = None, offset: int = 0
) -> tuple[datetime, datetime]:
    """Return the inclusive ``[start, end]`` window of a calendar period.

    Args:
        period: One of ``day``, ``week`` (Monday first), ``month``, ``year``.
        clock: Reference clock. Defaults to the system clock.
        offset: Number of periods to shift; ``-1`` is the previous period.

    Returns:
        Tuple of (first second, last second) of the period, timezone-aware.

    Raises:
        ValueError: If ``period`` is unknown.
    """
    clock = clock or Clock.system()
    start = _period_start(period, clock.today, offset)
    following = _period_start(period, start, 1)
    start_dt = clock.localize(datetime.combine(start, time(0)))
    end_dt = clock.localize(datetime.combine(following, time(0)) - timedelta(seconds=1))
    return start_dt, end_dt


def pretty_date(value: Any, *, clock: Clock | None = None) -> Any:
    """Format a timestamp relative to today for display.

    Non-datetime values are returned unchanged. Today's timestamps show
    only the time, yesterday's are prefixed with ``yesterday``, anything
    else shows ``DD.MM.YYYY HH:MM:SS``.
    """
    if not isinstance(value, datetime):
        return value

    clock = clock or Clock.system()
    local = clock.convert(value) if value.tzinfo is not None else value
    today = clock.today
    if local.date() == today:
        return local.strftime("%H:%M:%S")
    if local.date() == today - timedelta(days=1):
        return local.strftime("yesterday %H:%M:%S")
    return local.strftime("%d.%m.%Y %H:%M:%S")
