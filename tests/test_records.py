"""Tests for task record discovery and filtering."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from timetracker.errors import InvalidDateFormatError
from timetracker.store.records import (
    FilterCriteria,
    TaskFileName,
    build_criteria,
    find_task_files,
    parse_task_filename,
    project_pattern,
)
from timetracker.utils.time import Clock

UTC = timezone.utc


def _names(records) -> list[str]:
    return [r.path.name for r in records]


class TestParseTaskFilename:
    """Tests for the record filename convention."""

    @pytest.mark.unit
    def test_full_name(self) -> None:
        parsed = parse_task_filename("20200102-093000_acme-web.trc")
        assert parsed == TaskFileName(date="20200102", time="093000", project="acme-web")
        assert parsed.time_key == "20200102093000"

    @pytest.mark.unit
    def test_name_without_project(self) -> None:
        parsed = parse_task_filename("20200102-093000.trc")
        assert parsed is not None
        assert parsed.project is None

    @pytest.mark.unit
    @pytest.mark.parametrize("name", ["notes.trc", "2020-01-02_acme.trc", "20200102-093000_acme.txt"])
    def test_malformed_names(self, name: str) -> None:
        assert parse_task_filename(name) is None


class TestBuildCriteria:
    """Tests for turning raw input into FilterCriteria."""

    @pytest.mark.unit
    def test_date_only_end_is_rounded_to_end_of_day(self, clock: Clock) -> None:
        criteria = build_criteria(start="2020-01-02", end="2020-01-04", clock=clock)
        assert criteria.start == datetime(2020, 1, 2, tzinfo=UTC)
        assert criteria.end == datetime(2020, 1, 4, 23, 59, 59, tzinfo=UTC)
        assert criteria.window_keys() == ("20200102000000", "20200104235959")

    @pytest.mark.unit
    def test_missing_end_defaults_to_now(self, clock: Clock) -> None:
        criteria = build_criteria(start="2020-01-01", clock=clock)
        assert criteria.end == clock.now

    @pytest.mark.unit
    def test_end_without_start_is_ignored(self, clock: Clock) -> None:
        criteria = build_criteria(end="2020-01-04", clock=clock)
        assert not criteria.has_window
        assert criteria.window_keys() is None

    @pytest.mark.unit
    def test_empty_projects_and_tags_are_dropped(self, clock: Clock) -> None:
        criteria = build_criteria(projects=["acme", ""], tags=[""], clock=clock)
        assert criteria.projects == ("acme",)
        assert criteria.tags == ()

    @pytest.mark.unit
    def test_invalid_boundary_raises(self, clock: Clock) -> None:
        with pytest.raises(InvalidDateFormatError):
            build_criteria(start="last tuesday", clock=clock)

    @pytest.mark.unit
    def test_start_without_end_is_rejected_on_direct_construction(self) -> None:
        with pytest.raises(ValueError, match="end bound"):
            FilterCriteria(start=datetime(2020, 1, 1, tzinfo=UTC))


class TestProjectPattern:
    """Tests for the filename project alternation."""

    @pytest.mark.unit
    def test_hyphen_matches_any_delimiter(self) -> None:
        pattern = project_pattern(["acme-web"])
        assert pattern is not None
        assert pattern.search("20200101-090000_acme_web.trc")
        assert pattern.search("20200101-090000_ACME-WEB.trc")
        assert not pattern.search("20200101-090000_acmeweb.trc")

    @pytest.mark.unit
    def test_regex_characters_are_literal(self) -> None:
        pattern = project_pattern(["c++"])
        assert pattern is not None
        assert pattern.search("20200101-090000_c++.trc")
        assert not pattern.search("20200101-090000_ccc.trc")

    @pytest.mark.unit
    def test_no_projects(self) -> None:
        assert project_pattern([]) is None


class TestFindTaskFiles:
    """Tests for scanning the tracker home."""

    @pytest.fixture
    def five_days(self, make_task_file) -> list[Path]:
        return [make_task_file(f"2020010{day}-090000", "acme") for day in range(1, 6)]

    @pytest.mark.integration
    def test_inclusive_window_in_chronological_order(
        self, tracker_home: Path, five_days: list[Path], clock: Clock
    ) -> None:
        criteria = build_criteria(start="2020-01-02", end="2020-01-04", clock=clock)
        records = find_task_files(tracker_home, criteria)
        assert [r.path for r in records] == five_days[1:4]
        assert [r.time_key for r in records] == [
            "20200102090000",
            "20200103090000",
            "20200104090000",
        ]

    @pytest.mark.integration
    def test_window_bounds_are_inclusive_to_the_second(
        self, tracker_home: Path, five_days: list[Path], clock: Clock
    ) -> None:
        criteria = build_criteria(start="2020-01-02 09:00", end="2020-01-03 09:00", clock=clock)
        assert [r.path for r in find_task_files(tracker_home, criteria)] == five_days[1:3]

    @pytest.mark.integration
    def test_open_window_ends_now(
        self, tracker_home: Path, five_days: list[Path], clock: Clock
    ) -> None:
        criteria = build_criteria(start="2020-01-01", clock=clock)
        assert [r.path for r in find_task_files(tracker_home, criteria)] == five_days[:3]

    @pytest.mark.integration
    def test_no_criteria_returns_all_records_sorted(
        self, tracker_home: Path, make_task_file
    ) -> None:
        late = make_task_file("20200301-080000", "acme")
        early = make_task_file("20191231-230000", "acme")
        (tracker_home / "projects.json").write_text("{}")
        (tracker_home / "README.txt").write_text("not a record")
        assert [r.path for r in find_task_files(tracker_home)] == [early, late]

    @pytest.mark.integration
    def test_default_root_is_tracker_home(self, make_task_file) -> None:
        path = make_task_file("20200101-090000", "acme")
        assert [r.path for r in find_task_files()] == [path]

    @pytest.mark.integration
    def test_untimestamped_files_only_excluded_under_window(
        self, tracker_home: Path, make_task_file, clock: Clock
    ) -> None:
        stamped = make_task_file("20200102-090000", "acme")
        loose = tracker_home / "scratch.trc"
        loose.write_text("{}")

        assert {r.path for r in find_task_files(tracker_home)} == {stamped, loose}

        criteria = build_criteria(start="2020-01-01", end="2020-01-05", clock=clock)
        assert [r.path for r in find_task_files(tracker_home, criteria)] == [stamped]

    @pytest.mark.integration
    def test_project_filter_matches_filename_not_body(
        self, tracker_home: Path, make_task_file
    ) -> None:
        web = make_task_file("20200101-090000", "acme_web", body='{"description": "x"}')
        make_task_file("20200101-100000", "other", body='{"project": "acme-web"}')

        criteria = FilterCriteria(projects=("ACME-web",))
        records = find_task_files(tracker_home, criteria)
        assert [r.path for r in records] == [web]
        assert records[0].project == "acme_web"

    @pytest.mark.integration
    def test_multiple_projects(self, tracker_home: Path, make_task_file) -> None:
        make_task_file("20200101-090000", "acme")
        make_task_file("20200101-100000", "globex")
        make_task_file("20200101-110000", "initech")

        criteria = FilterCriteria(projects=("acme", "initech"))
        assert _names(find_task_files(tracker_home, criteria)) == [
            "20200101-090000_acme.trc",
            "20200101-110000_initech.trc",
        ]

    @pytest.mark.integration
    def test_tag_filter_matches_body_case_insensitively(
        self, tracker_home: Path, make_task_file
    ) -> None:
        tagged = make_task_file("20200101-090000", "acme", body='{"tags": ["Meeting"]}')
        make_task_file("20200101-100000", "meeting", body='{"tags": ["review"]}')

        criteria = FilterCriteria(tags=("meeting",))
        assert [r.path for r in find_task_files(tracker_home, criteria)] == [tagged]

    @pytest.mark.integration
    def test_all_filters_combined(
        self, tracker_home: Path, make_task_file, clock: Clock
    ) -> None:
        hit = make_task_file("20200102-090000", "acme", body="tags: billable")
        make_task_file("20200102-100000", "acme", body="tags: internal")
        make_task_file("20200102-110000", "globex", body="tags: billable")
        make_task_file("20200110-090000", "acme", body="tags: billable")

        criteria = build_criteria(
            start="2020-01-01",
            end="2020-01-05",
            projects=["acme"],
            tags=["billable", "overtime"],
            clock=clock,
        )
        assert [r.path for r in find_task_files(tracker_home, criteria)] == [hit]

    @pytest.mark.integration
    def test_missing_root_yields_nothing(self, tmp_path: Path) -> None:
        assert find_task_files(tmp_path / "does-not-exist") == []
