"""
timetracker core package.

Backend for the ``tracker`` command:
- Flexible date-string normalization (`timetracker.utils.time`)
- Task record discovery and filtering (`timetracker.store`)
- Project hierarchy derived from the project mapping (`timetracker.projects`)
- Duration display helpers (`timetracker.utils.duration`)

Configuration:
- Shared filesystem anchors and naming conventions live in
  `timetracker.global_config`.
"""
