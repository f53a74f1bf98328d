# Optbind Option Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Argument cursor and token classifier.

`ArgumentCursor` walks an immutable sequence of tokens with a single index.
It starts before the first token, so the first `advance()` lands on token 0.
The only backwards move is `retreat()`, which undoes the most recent
`advance()` and may be taken once. `collect_values()` relies on it to give
back the token that stopped a greedy scan.

`OptionGroupCursor` is the same cursor over the letters of a short-option
group such as `-abc`, with `remaining()` returning the text after the current
letter for attached values like `-oVALUE`.

`classify_token()` decides whether a token starts a long option, a short
option group, or is a plain value. Numbers like `-5` and the lone `-` are
values.
"""
from __future__ import annotations

import re
from typing import Sequence

from optbind.exceptions import CursorError
from optbind.parser.parser_types import TokenKind

_NUMERIC_RE = re.compile(r"^\s*[+-]?(?:\d[\d,]*(?:\.\d*)?|\.\d+)\s*$")


def is_numeric(value: str) -> bool:
    """Return True if `value` reads as a decimal number, e.g. `-42` or `3.14`."""
    return bool(_NUMERIC_RE.match(value))


def classify_token(token: str) -> TokenKind:
    """Return the disposition of a single token."""
    if is_numeric(token) or token == "-":
        return TokenKind.VALUE
    if token.startswith("--"):
        return TokenKind.LONG_OPTION
    if token.startswith("-"):
        return TokenKind.SHORT_GROUP
    return TokenKind.VALUE


def is_value(token: str) -> bool:
    return classify_token(token) is TokenKind.VALUE


class ArgumentCursor:
    """Forward cursor over a token sequence with a single-step retreat."""

    def __init__(self, tokens: Sequence[str]) -> None:
        self._tokens: tuple[str, ...] = tuple(tokens)
        self._index: int = -1
        self._can_retreat: bool = False

    @property
    def index(self) -> int:
        return self._index

    @property
    def current(self) -> str:
        if self._index < 0 or self._index >= len(self._tokens):
            raise CursorError("Cursor is not positioned on a token")
        return self._tokens[self._index]

    @property
    def next(self) -> str | None:
        """The token after the current one, or None at the end."""
        if self._index < 0:
            raise CursorError("Cursor is not positioned on a token")
        if self.is_last or self._index >= len(self._tokens):
            return None
        return self._tokens[self._index + 1]

    @property
    def is_last(self) -> bool:
        return self._index == len(self._tokens) - 1

    def advance(self) -> bool:
        """Move to the next token. Returns False once past the end."""
        if self._index >= len(self._tokens):
            self._can_retreat = False
            return False
        self._index += 1
        self._can_retreat = True
        return self._index < len(self._tokens)

    def retreat(self) -> None:
        """Undo the most recent `advance()`."""
        if not self._can_retreat or self._index <= 0:
            raise CursorError("Cursor can only retreat once, directly after an advance")
        self._index -= 1
        self._can_retreat = False

    def __len__(self) -> int:
        return len(self._tokens)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(index={self._index}, tokens={list(self._tokens)!r})"


class OptionGroupCursor(ArgumentCursor):
    """Cursor over the letters of a short-option group."""

    def __init__(self, letters: str) -> None:
        if not letters:
            raise CursorError("An option group needs at least one letter")
        super().__init__(list(letters))

    def remaining(self) -> str:
        """The text after the current letter, e.g. `VALUE` for `-oVALUE` at `o`."""
        if self._index < 0:
            raise CursorError("Cursor is not positioned on a letter")
        return "".join(self._tokens[self._index + 1 :])


def collect_values(cursor: ArgumentCursor) -> list[str]:
    """
    Collect consecutive value tokens after the current one.

    The cursor is left on the last collected token (or where it started when
    nothing was collected), so the caller's next `advance()` lands on the
    token that stopped the scan.
    """
    values: list[str] = []
    while cursor.advance():
        token = cursor.current
        if not is_value(token):
            break
        values.append(token)
    cursor.retreat()
    return values
