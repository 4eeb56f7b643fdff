"""Quote-aware tokenizer for config lines."""

from __future__ import annotations

from typing import Final

WHITESPACE: Final = frozenset(" \t\n\r")
COMMENT: Final = "#"
QUOTE: Final = '"'


def _find(line: str, chars: frozenset[str] | str, start: int) -> int:
    """Index of the first character in ``chars`` at or after ``start``.

    Returns ``len(line)`` when there is none.
    """
    for pos in range(start, len(line)):
        if line[pos] in chars:
            return pos
    return len(line)


def tokenize(line: str) -> list[str]:
    """Split one logical line into tokens.

    Whitespace separates tokens. A ``#`` at the start of a token ends the
    line; inside a bare word it is ordinary text. A token starting with
    ``"`` runs to the next ``"`` (or the end of the line when unclosed)
    and may contain whitespace and ``#``. Quotes are stripped and empty
    tokens are dropped.

    Args:
        line: One logical line, with or without its newline

    Returns:
        Tokens in order of appearance

    Examples:
        >>> tokenize('set filter "project:home +next"  # inbox')
        ['set', 'filter', 'project:home +next']
        >>> tokenize("set filter foo#bar")
        ['set', 'filter', 'foo#bar']
    """
    tokens: list[str] = []
    pos = 0
    end = len(line)

    while pos < end:
        char = line[pos]
        if char in WHITESPACE:
            pos += 1
            continue
        if char == COMMENT:
            break

        if char == QUOTE:
            start = pos + 1
            stop = _find(line, QUOTE, start)
            pos = min(stop + 1, end)
        else:
            start = pos
            stop = _find(line, WHITESPACE, start)
            pos = stop

        if stop > start:
            tokens.append(line[start:stop])

    return tokens
