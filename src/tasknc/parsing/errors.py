"""Exception classes for configuration parsing.

Every error raised while interpreting a config line derives from
:class:`ConfigError`. None of them are fatal: the loader reports the
offending line and moves on to the next one.
"""

from __future__ import annotations


class ConfigError(Exception):
    """Error while applying a single configuration line.

    Attributes:
        code: Numeric error code, stable across releases
        message: Human-readable error message
    """

    code: int = 1

    def __init__(self, message: str, code: int | None = None) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            code: Optional override for the class error code
        """
        if code is not None:
            self.code = code
        super().__init__(f"[{self.code}] {message}")
        self.message: str = message


class ArgumentCountError(ConfigError):
    """A command received the wrong number of arguments."""

    code = 2

    def __init__(self, command: str, expected: int, received: int) -> None:
        super().__init__(f"'{command}' expects {expected} arguments, got {received}")
        self.command = command
        self.expected = expected
        self.received = received


class UnknownCommandError(ConfigError):
    """The first token of a line is not a known command verb."""

    code = 3

    def __init__(self, command: str) -> None:
        super().__init__(f"unrecognized command '{command}'")
        self.command = command


class UnknownKeyError(ConfigError):
    """A ``set`` command named a variable that is not handled."""

    code = 4

    def __init__(self, key: str) -> None:
        super().__init__(f"unrecognized variable '{key}'")
        self.key = key


class LogPathError(ConfigError):
    """The configured log file could not be opened for append."""

    code = 5

    def __init__(self, path: str, original_error: OSError | ValueError) -> None:
        reason = getattr(original_error, "strerror", None) or original_error
        super().__init__(f"cannot open log file '{path}': {reason}")
        self.path = path
        self.original_error = original_error
