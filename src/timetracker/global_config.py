"""Global, project-wide configuration constants.

This module intentionally contains **no business logic** – only simple,
shared filesystem anchors and naming conventions that many modules
can import.
"""

import os
from pathlib import Path

# Core roots
PACKAGE_ROOT: Path = Path(__file__).resolve().parent

# Core Names
PROJECT_NAME = "timetracker"
PACKAGE_NAME = "timetracker"

# Tracker home: record files and the project mapping live below it
HOME_ENV_VAR = "TRACKER_HOME"
DEFAULT_HOME_DIR: Path = Path.home() / ".TimeTracker"

# File naming
PROJECTS_FILENAME = "projects.json"
TASK_FILE_SUFFIX = ".trc"


def tracker_home() -> Path:
    """Return the tracker home directory, honouring ``TRACKER_HOME``."""
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return DEFAULT_HOME_DIR
