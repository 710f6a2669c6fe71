from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from timetracker.utils.time import Clock


@pytest.fixture(autouse=True)
def app_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """
    Forces test mode. Application code can use this to refuse dangerous behaviors.
    Automatically applied to all tests.
    """
    monkeypatch.setenv("APP_ENV", "test")


@pytest.fixture(autouse=True)
def tracker_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """
    A dedicated tracker home for each test, exported as TRACKER_HOME so code
    falling back to the default home never touches the real ~/.TimeTracker.
    """
    home = tmp_path / "tracker"
    home.mkdir()
    monkeypatch.setenv("TRACKER_HOME", str(home))
    return home


@pytest.fixture
def clock() -> Clock:
    """A clock frozen at 2020-01-03 10:15:30 UTC."""
    return Clock.fixed(datetime(2020, 1, 3, 10, 15, 30, tzinfo=timezone.utc))


@pytest.fixture
def make_task_file(tracker_home: Path):
    """
    Factory writing a task record under <home>/YYYY/MM/ following the
    YYYYMMDD-HHMMSS_<project>.trc naming convention.
    """

    def _make(stamp: str, project: str, body: str = "{}") -> Path:
        directory = tracker_home / stamp[:4] / stamp[4:6]
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / f"{stamp}_{project}.trc"
        path.write_text(body, encoding="utf-8")
        return path

    return _make
