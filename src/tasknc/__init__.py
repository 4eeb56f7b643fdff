"""tasknc - configuration subsystem for a terminal task-list viewer."""

__version__ = "0.1.0"
