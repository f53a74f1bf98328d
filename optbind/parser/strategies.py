# Optbind Option Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Parsing strategies for option tokens.

A strategy consumes the token under the cursor, and possibly the tokens after
it, binds values through the `ValueBinder`, and returns a `ParserState`:

- `SUCCESS`: the token (and any values collected with it) is consumed.
- `SUCCESS | MOVE_ON_NEXT`: the following token was used as the value, so the
  session must step over it.
- `FAILURE`: an error was recorded in `errors`. Only tokens the strategy
  actually consumed are skipped; the session resumes at the next one.

`LongOptionStrategy` handles `--name` and `--name=value`.
`OptionGroupStrategy` handles `-x`, merged switches like `-abc` and attached
values like `-oVALUE`.

With `ignore_unknown_arguments`, an unknown option is skipped together with
the value token after it, unless the option carried its value inline.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from optbind.logger import logger
from optbind.parser.binder import ValueBinder
from optbind.parser.cursor import (
    ArgumentCursor,
    OptionGroupCursor,
    classify_token,
    collect_values,
    is_value,
)
from optbind.parser.option_spec import OptionSpec
from optbind.parser.parser_types import (
    BadOption,
    ParserState,
    ParsingError,
    TokenKind,
)
from optbind.parser.registry import OptionRegistry


def _next_is_value(cursor: ArgumentCursor) -> bool:
    return not cursor.is_last and is_value(cursor.next)


class ArgumentStrategy(ABC):
    """Base class for the strategies that parse one option token."""

    def __init__(
        self, ignore_unknown_arguments: bool = False, binder: ValueBinder | None = None
    ) -> None:
        self.ignore_unknown_arguments: bool = ignore_unknown_arguments
        self.binder: ValueBinder = binder or ValueBinder()
        self.errors: list[ParsingError] = []

    @abstractmethod
    def parse(
        self, cursor: ArgumentCursor, registry: OptionRegistry, target: Any
    ) -> ParserState:
        """Parse the token under `cursor` and bind its values into `target`."""

    @staticmethod
    def create(
        token: str, ignore_unknown_arguments: bool = False, binder: ValueBinder | None = None
    ) -> ArgumentStrategy | None:
        """Return the strategy for `token`, or None when it is a plain value."""
        kind = classify_token(token)
        if kind is TokenKind.LONG_OPTION:
            return LongOptionStrategy(ignore_unknown_arguments, binder)
        if kind is TokenKind.SHORT_GROUP:
            return OptionGroupStrategy(ignore_unknown_arguments, binder)
        return None

    def _unknown(
        self, bad_option: BadOption, token: str, value_follows: bool = False
    ) -> ParserState:
        if self.ignore_unknown_arguments:
            logger.debug("Ignoring unknown option '%s' in '%s'", bad_option, token)
            return ParserState.from_bool(True, move_on_next=value_follows)
        self.errors.append(ParsingError(bad_option, unknown_option=True, token=token))
        return ParserState.FAILURE

    def _missing_value(self, spec: OptionSpec, token: str) -> ParserState:
        self.errors.append(ParsingError.missing(spec, token))
        return ParserState.FAILURE

    def _bind_text(
        self,
        spec: OptionSpec,
        value: str,
        target: Any,
        move_on_next: bool = False,
    ) -> ParserState:
        bound = self.binder.bind_text(spec, value, target)
        if not bound:
            self.errors.append(ParsingError.format_violation(spec, value))
        return ParserState.from_bool(bound, move_on_next)

    def _bind_collected(
        self,
        spec: OptionSpec,
        cursor: ArgumentCursor,
        target: Any,
        first: str | None = None,
    ) -> ParserState:
        values = collect_values(cursor)
        if first is not None:
            values.insert(0, first)
        bound = self.binder.bind_values(spec, values, target)
        if not bound:
            self.errors.append(ParsingError.format_violation(spec, " ".join(values)))
        return ParserState.from_bool(bound)


class LongOptionStrategy(ArgumentStrategy):
    """Parses `--name` and `--name=value` tokens."""

    def parse(
        self, cursor: ArgumentCursor, registry: OptionRegistry, target: Any
    ) -> ParserState:
        token = cursor.current
        name, separator, inline_value = token[2:].partition("=")
        has_inline_value = bool(separator)

        spec = registry.resolve(name)
        if spec is None:
            value_follows = not has_inline_value and _next_is_value(cursor)
            return self._unknown(BadOption(long_name=name), token, value_follows)

        registry.mark_defined(spec, cursor.index)

        if spec.is_boolean:
            if has_inline_value:
                self.errors.append(ParsingError.format_violation(spec, inline_value))
                return ParserState.FAILURE
            return ParserState.from_bool(self.binder.bind_flag(spec, target))

        if not has_inline_value and not _next_is_value(cursor):
            return self._missing_value(spec, token)

        if has_inline_value:
            if spec.is_array:
                return self._bind_collected(spec, cursor, target, first=inline_value)
            return self._bind_text(spec, inline_value, target)

        if spec.is_array:
            return self._bind_collected(spec, cursor, target)
        return self._bind_text(spec, cursor.next, target, move_on_next=True)


class OptionGroupStrategy(ArgumentStrategy):
    """Parses `-x`, merged switches `-abc` and attached values `-oVALUE`."""

    def parse(
        self, cursor: ArgumentCursor, registry: OptionRegistry, target: Any
    ) -> ParserState:
        token = cursor.current
        group = OptionGroupCursor(token[1:])
        while group.advance():
            letter = group.current
            spec = registry.resolve(letter)
            if spec is None:
                value_follows = group.is_last and _next_is_value(cursor)
                return self._unknown(BadOption(short_name=letter), token, value_follows)

            registry.mark_defined(spec, cursor.index)

            if spec.is_boolean:
                self.binder.bind_flag(spec, target)
                continue

            if cursor.is_last and group.is_last:
                return self._missing_value(spec, token)

            if not group.is_last:
                remainder = group.remaining()
                if spec.is_array:
                    return self._bind_collected(spec, cursor, target, first=remainder)
                return self._bind_text(spec, remainder, target)

            if not is_value(cursor.next):
                return self._missing_value(spec, token)
            if spec.is_array:
                return self._bind_collected(spec, cursor, target)
            return self._bind_text(spec, cursor.next, target, move_on_next=True)

        return ParserState.SUCCESS
