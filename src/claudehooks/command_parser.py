#!/usr/bin/env python3
"""
Compound shell command splitting.

Splits a command line such as ``cd app && mysql -u root | tee out`` into
its sub-commands so each one can be gated individually. Operators inside
single, double or backtick quotes are literal text.
"""

from typing import List

_QUOTE_CHARS = ('"', "'", "`")

# Internal separator; contains a NUL so it cannot collide with command text
_SEPARATOR = "\x00SPLIT\x00"


def _mark_delimiters(command: str) -> str:
    """
    Replace every unquoted control operator with the internal separator.

    Recognized operators are ``&&``, ``||``, ``;`` and a single ``|``.
    An unterminated quote keeps the rest of the line literal.
    """
    result = []
    in_quotes = False
    quote_char = ""
    i = 0
    length = len(command)

    while i < length:
        char = command[i]

        if char in _QUOTE_CHARS:
            if not in_quotes:
                in_quotes = True
                quote_char = char
            elif char == quote_char:
                in_quotes = False
            result.append(char)
            i += 1
            continue

        if in_quotes:
            result.append(char)
            i += 1
            continue

        pair = command[i : i + 2]
        if pair in ("&&", "||"):
            result.append(_SEPARATOR)
            i += 2
        elif char in (";", "|"):
            result.append(_SEPARATOR)
            i += 1
        else:
            result.append(char)
            i += 1

    return "".join(result)


def split_compound_command(command: str) -> List[str]:
    """
    Split a shell command line into trimmed, non-empty sub-commands.

    Args:
        command: Raw command line (may be empty)

    Returns:
        Sub-commands in their original order

    Example:
        >>> split_compound_command('echo "a && b" && mysql -u root')
        ['echo "a && b"', 'mysql -u root']
    """
    if not command:
        return []

    parts = _mark_delimiters(command).split(_SEPARATOR)
    return [part.strip() for part in parts if part.strip()]
