# Optbind Option Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
State and result models for optbind's parse session.

Contents:
- `ParserState`: Flag returned by a parsing strategy for one token.
- `TokenKind`: Disposition of a token decided by the classifier.
- `SessionPhase`: Phases of a parse session.
- `OptionState`: Tracks whether an `OptionSpec` has been defined during a parse.
- `BadOption` / `ParsingError`: One recoverable user input error.
- `ParseOutcome`: Overall result of a parse.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, Flag, auto
from typing import Any

from optbind.parser.option_spec import OptionSpec


class ParserState(Flag):
    """Outcome of a strategy for the token under the cursor."""

    SUCCESS = auto()
    FAILURE = auto()
    MOVE_ON_NEXT = auto()

    @classmethod
    def from_bool(cls, value: bool, move_on_next: bool = False) -> ParserState:
        if value and move_on_next:
            return cls.SUCCESS | cls.MOVE_ON_NEXT
        if value:
            return cls.SUCCESS
        return cls.FAILURE


class TokenKind(Enum):
    LONG_OPTION = "long_option"
    SHORT_GROUP = "short_group"
    VALUE = "value"


class SessionPhase(Enum):
    SCANNING = "scanning"
    VALIDATING = "validating"
    DONE = "done"


@dataclass
class OptionState:
    """Tracks an option and whether it has been defined in the current parse."""

    spec: OptionSpec
    defined: bool = False
    defined_position: int | None = None
    defined_order: int | None = None

    def set_defined(self, position: int | None = None, order: int | None = None) -> None:
        """
        Mark this option as defined. Only the first call is recorded.

        `position` is the index of the token that defined the option and
        `order` counts definitions within the parse, so two switches merged in
        one token like `-vq` still have a first and a second.
        """
        if self.defined:
            return
        self.defined = True
        self.defined_position = position
        self.defined_order = order


@dataclass(frozen=True)
class BadOption:
    """Names of the option an error refers to."""

    short_name: str | None = None
    long_name: str | None = None

    @classmethod
    def from_spec(cls, spec: OptionSpec) -> BadOption:
        return cls(short_name=spec.short_name, long_name=spec.long_name)

    def __str__(self) -> str:
        parts = []
        if self.short_name:
            parts.append(f"-{self.short_name}")
        if self.long_name:
            parts.append(f"--{self.long_name}")
        return "/".join(parts)


@dataclass(frozen=True)
class ParsingError:
    """
    One recoverable error found while parsing.

    Attributes:
        bad_option (BadOption): The option the error refers to. Empty for
            positional values.
        violates_format (bool): The value could not be coerced to the declared type.
        violates_required (bool): A required option never appeared.
        violates_mutual_exclusiveness (bool): Another option of the same set appeared.
        unknown_option (bool): No option is declared under the given name.
        missing_value (bool): A value-taking option had no value.
        excess_value (bool): A positional value exceeded the declared maximum.
        token (str | None): The offending token, when there is one.
    """

    bad_option: BadOption = field(default_factory=BadOption)
    violates_format: bool = False
    violates_required: bool = False
    violates_mutual_exclusiveness: bool = False
    unknown_option: bool = False
    missing_value: bool = False
    excess_value: bool = False
    token: str | None = None

    @classmethod
    def format_violation(cls, spec: OptionSpec, token: str | None = None) -> ParsingError:
        return cls(BadOption.from_spec(spec), violates_format=True, token=token)

    @classmethod
    def required_violation(cls, spec: OptionSpec) -> ParsingError:
        return cls(BadOption.from_spec(spec), violates_required=True)

    @classmethod
    def exclusivity_violation(cls, spec: OptionSpec) -> ParsingError:
        return cls(BadOption.from_spec(spec), violates_mutual_exclusiveness=True)

    @classmethod
    def missing(cls, spec: OptionSpec, token: str | None = None) -> ParsingError:
        return cls(BadOption.from_spec(spec), missing_value=True, token=token)


@dataclass(frozen=True)
class ParseOutcome:
    """
    Result of one call to `OptionParser.parse()`.

    The destination is mutated in place and returned for convenience. It does
    not take part in equality.
    """

    success: bool
    errors: tuple[ParsingError, ...] = ()
    destination: Any = field(default=None, compare=False, repr=False)
    help_requested: bool = False

    def __bool__(self) -> bool:
        return self.success
