"""
Line-level lexing for the INI dialect.

Everything here is a pure function over a single line. Malformed quoting
never raises: an unbalanced quote simply leaves the rest of the line in
whatever quote state the last ``"`` selected.
"""

from typing import List, Optional, Tuple

QUOTE = '"'
SEPARATORS = frozenset(" \t=")


def strip_comment(line: str) -> str:
    """Remove a trailing ``;`` comment that is not inside quotes.

    A comment marker counts only when the text before it holds an even
    number of quote characters.
    """
    in_quotes = False
    for index, char in enumerate(line):
        if char == QUOTE:
            in_quotes = not in_quotes
        elif in_quotes:
            continue
        elif char == ";":
            return line[:index]
    return line


def tokenize(line: str) -> List[str]:
    """Split a line on spaces, tabs and ``=`` outside of quoted spans.

    Quoted spans stay single tokens and keep their quote characters.
    Empty tokens are dropped.
    """
    tokens: List[str] = []
    current: List[str] = []
    in_quotes = False

    for char in line:
        if char == QUOTE:
            in_quotes = not in_quotes
            current.append(char)
        elif char in SEPARATORS and not in_quotes:
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(char)

    if current:
        tokens.append("".join(current))
    return tokens


def find_unquoted(line: str, target: str) -> int:
    """Index of the first ``target`` character outside quotes, or -1."""
    in_quotes = False
    for index, char in enumerate(line):
        if char == QUOTE:
            in_quotes = not in_quotes
        elif char == target and not in_quotes:
            return index
    return -1


def split_assignment(line: str) -> Optional[Tuple[str, str]]:
    """Split a property line into ``(key, value_text)``.

    The key is the first token. The value is everything after the first
    unquoted ``=``; lines written without ``=`` use everything after the
    key token. Returns None when the line has a key but neither ``=`` nor
    a value.
    """
    stripped = line.strip()
    tokens = tokenize(stripped)
    if not tokens or stripped.startswith("="):
        return None
    key = tokens[0]

    equals = find_unquoted(stripped, "=")
    if equals >= 0:
        return key, stripped[equals + 1:].strip()

    remainder = stripped[len(key):].strip()
    if not remainder:
        return None
    return key, remainder
