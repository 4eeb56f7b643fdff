"""Config file parsing: line reader, tokenizer and error types."""

from tasknc.parsing.errors import (
    ArgumentCountError,
    ConfigError,
    LogPathError,
    UnknownCommandError,
    UnknownKeyError,
)
from tasknc.parsing.reader import iter_logical_lines
from tasknc.parsing.tokenizer import tokenize

__all__ = [
    "ArgumentCountError",
    "ConfigError",
    "LogPathError",
    "UnknownCommandError",
    "UnknownKeyError",
    "iter_logical_lines",
    "tokenize",
]
