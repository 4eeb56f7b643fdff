"""Interpret token lists as config commands."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Callable, Final, Sequence

from tasknc.parsing.errors import UnknownCommandError
from tasknc.parsing.tokenizer import tokenize

if TYPE_CHECKING:
    from tasknc.settings.store import SettingsStore

logger: Final = logging.getLogger(__name__)


class CommandStatus(Enum):
    """Outcome of a line that raised no error."""

    APPLIED = "applied"  # a command ran and updated the store
    EMPTY = "empty"  # blank, whitespace-only or comment-only line


def _cmd_set(store: SettingsStore, args: Sequence[str]) -> None:
    store.apply_set(args)


# Command verb -> handler receiving the remaining tokens
COMMANDS: Final[dict[str, Callable[[SettingsStore, Sequence[str]], None]]] = {
    "set": _cmd_set,
}


def dispatch(store: SettingsStore, tokens: Sequence[str]) -> CommandStatus:
    """Run the command described by a token list against the store.

    Args:
        store: Settings store to update
        tokens: Output of :func:`tokenize` for one line

    Returns:
        CommandStatus.EMPTY for an empty token list, APPLIED otherwise

    Raises:
        UnknownCommandError: If the first token is not a command verb
        ArgumentCountError: If the command got the wrong number of arguments
        UnknownKeyError: If ``set`` names an unhandled variable
        LogPathError: If a ``logpath`` cannot be opened
    """
    if not tokens:
        return CommandStatus.EMPTY

    verb, *args = tokens
    handler = COMMANDS.get(verb)
    if handler is None:
        raise UnknownCommandError(verb)

    handler(store, args)
    logger.debug("applied: %s", " ".join(tokens))
    return CommandStatus.APPLIED


def parse_line(store: SettingsStore, line: str) -> CommandStatus:
    """Tokenize one logical line and dispatch it."""
    return dispatch(store, tokenize(line))
