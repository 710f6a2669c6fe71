"""Task record storage: filename convention and filtered discovery."""

from .records import (
    FilterCriteria,
    TaskFileName,
    TaskRecordRef,
    build_criteria,
    find_task_files,
    parse_task_filename,
)

__all__ = [
    "FilterCriteria",
    "TaskFileName",
    "TaskRecordRef",
    "build_criteria",
    "find_task_files",
    "parse_task_filename",
]
