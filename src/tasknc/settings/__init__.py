"""Settings management.

This package provides:
- SettingsStore: the mutable settings object passed through the program
- TaskVersion: lazily fetched version of the task binary
"""

from tasknc.settings.store import KEY_SETTERS, SettingsStore, SettingsValues, parse_int
from tasknc.settings.version import TaskVersion, task_version

__all__ = [
    "KEY_SETTERS",
    "SettingsStore",
    "SettingsValues",
    "TaskVersion",
    "parse_int",
    "task_version",
]
