"""Task record discovery and filtering.

Task records are single files named after the moment the task started and
the project it belongs to::

    <home>/2020/01/20200102-093000_acme-web.trc

This module parses that naming convention into a typed value and scans a
directory tree for records matching a time window, a set of projects and a
set of tags. Scans are best-effort: anything that cannot be read is left
out of the result.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from ..global_config import TASK_FILE_SUFFIX, tracker_home
from ..utils.time import Clock, end_of_day, normalize

logger = logging.getLogger(__name__)

TIME_KEY_FORMAT = "%Y%m%d%H%M%S"
TASK_FILENAME_PATTERN = re.compile(
    r"(?P<date>\d{8})-(?P<time>\d{6})(?:_(?P<project>.+?))?"
    + re.escape(TASK_FILE_SUFFIX)
    + r"$"
)


@dataclass(frozen=True)
class TaskFileName:
    """Parsed task record filename.

    Attributes:
        date: ``YYYYMMDD`` token.
        time: ``HHMMSS`` token.
        project: Project identifier, or ``None`` if the name carries none.
    """

    date: str
    time: str
    project: str | None = None

    @property
    def time_key(self) -> str:
        """14-digit sortable key ``YYYYMMDDHHMMSS``."""
        return self.date + self.time


def parse_task_filename(name: str) -> TaskFileName | None:
    """Parse a record filename, returning ``None`` if it breaks the convention.

    Args:
        name: Base name of the file (not a full path).

    Returns:
        TaskFileName, or None if the date/time token pair is missing.
    """
    found = TASK_FILENAME_PATTERN.search(name)
    if found is None:
        return None
    return TaskFileName(
        date=found.group("date"),
        time=found.group("time"),
        project=found.group("project"),
    )


@dataclass(frozen=True, order=True)
class TaskRecordRef:
    """Read-only view over one task record file, ordered by path."""

    path: Path
    time_key: str | None = None
    project: str | None = None

    @classmethod
    def from_path(cls, path: Path) -> TaskRecordRef:
        parsed = parse_task_filename(path.name)
        if parsed is None:
            return cls(path=path)
        return cls(path=path, time_key=parsed.time_key, project=parsed.project)


@dataclass(frozen=True)
class FilterCriteria:
    """Filters applied by :func:`find_task_files`.

    Attributes:
        start: Inclusive lower bound; enables the time-window filter.
        end: Inclusive upper bound. Required when ``start`` is set.
        projects: Project identifiers matched against filenames.
        tags: Substrings searched for in record bodies.
    """

    start: datetime | None = None
    end: datetime | None = None
    projects: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.start is not None and self.end is None:
            raise ValueError("FilterCriteria with a start bound needs an end bound")

    @property
    def has_window(self) -> bool:
        return self.start is not None

    def window_keys(self) -> tuple[str, str] | None:
        if self.start is None or self.end is None:
            return None
        return self.start.strftime(TIME_KEY_FORMAT), self.end.strftime(TIME_KEY_FORMAT)


def _as_datetime(value: str | datetime, clock: Clock) -> datetime:
    if isinstance(value, datetime):
        return value
    return normalize(value, clock=clock)


def build_criteria(
    *,
    start: str | datetime | None = None,
    end: str | datetime | None = None,
    projects: Iterable[str] = (),
    tags: Iterable[str] = (),
    clock: Clock | None = None,
) -> FilterCriteria:
    """Build FilterCriteria from raw user input.

    Boundary strings go through :func:`normalize`. A date-only end bound is
    rounded up to the end of its day, and a missing end bound defaults to
    the clock's now. An end bound without a start bound is ignored.

    Raises:
        InvalidDateFormatError: If a boundary string is not a known format.
        CalendarInvalidError: If a boundary names no real calendar moment.
    """
    clock = clock or Clock.system()
    start_dt = end_dt = None
    if start is not None:
        start_dt = _as_datetime(start, clock)
        end_dt = _as_datetime(end, clock) if end is not None else clock.now
        end_dt = end_of_day(end_dt)
    return FilterCriteria(
        start=start_dt,
        end=end_dt,
        projects=tuple(p for p in projects if p),
        tags=tuple(t for t in tags if t),
    )


def project_pattern(projects: Sequence[str]) -> re.Pattern[str] | None:
    """Compile an alternation matching any of ``projects`` in a filename.

    Hyphens in an identifier match any single character, so ``acme-web``
    also finds ``acme_web`` or ``acme.web``.
    """
    if not projects:
        return None
    alternatives = (".".join(re.escape(part) for part in p.split("-")) for p in projects)
    return re.compile("|".join(alternatives), re.IGNORECASE)


def tag_pattern(tags: Sequence[str]) -> re.Pattern[str] | None:
    """Compile an alternation matching any of ``tags`` in a record body."""
    if not tags:
        return None
    return re.compile("|".join(re.escape(t) for t in tags), re.IGNORECASE)


def iter_task_files(root: Path) -> Iterator[Path]:
    """Yield every task record file below ``root``, in no particular order.

    Unreadable directories are skipped.
    """

    def _skip(err: OSError) -> None:
        logger.debug("Skipping unreadable directory: %s", err)

    for dirpath, _dirnames, filenames in os.walk(root, onerror=_skip):
        for filename in filenames:
            if not filename.endswith(TASK_FILE_SUFFIX):
                continue
            path = Path(dirpath) / filename
            if path.is_file():
                yield path


def _body_matches(path: Path, pattern: re.Pattern[str]) -> bool:
    try:
        content = path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.debug("Skipping unreadable task file %s: %s", path, e)
        return False
    return pattern.search(content) is not None


def find_task_files(
    root: Path | None = None, criteria: FilterCriteria | None = None
) -> list[TaskRecordRef]:
    """Find task records below ``root`` that match ``criteria``.

    Filters run cheapest first: filename window, filename project match,
    then a search of the file body for tags.

    Args:
        root: Directory to scan. Defaults to the tracker home.
        criteria: Filters to apply. ``None`` returns every record.

    Returns:
        Matching records sorted by path, which is chronological per project.
    """
    root = Path(root) if root is not None else tracker_home()
    criteria = criteria or FilterCriteria()

    window = criteria.window_keys()
    projects_re = project_pattern(criteria.projects)
    tags_re = tag_pattern(criteria.tags)

    found: list[TaskRecordRef] = []
    for path in iter_task_files(root):
        record = TaskRecordRef.from_path(path)

        if window is not None:
            if record.time_key is None:
                logger.debug("Skipping task file without timestamp: %s", path)
                continue
            if not window[0] <= record.time_key <= window[1]:
                continue

        if projects_re is not None and not projects_re.search(path.name):
            continue

        if tags_re is not None and not _body_matches(path, tags_re):
            continue

        found.append(record)

    found.sort(key=lambda r: str(r.path))
    logger.debug("Found %d task files under %s", len(found), root)
    return found
