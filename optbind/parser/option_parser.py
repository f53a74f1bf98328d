# Optbind Option Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
This module implements `OptionParser`, the declaration surface and public entry
point of optbind. Options are declared once with `add_option()` and every call
to `parse()` maps a flat token sequence onto the fields of a destination
object.

Key Features:
- Short (`-c`) and long (`--connect`) names, with `--name=value`, merged
  switches (`-abc`) and attached values (`-oVALUE`)
- Four arities: boolean switches, scalars, arrays of following values and
  delimited lists (`--path a:b:c`)
- Type coercion for `int`, `float`, `Decimal`, `Path`, `Enum`, `Literal`,
  unions, `datetime` and nullable fields
- Required options, defaults and mutually exclusive sets
- A positional value list with an optional maximum
- A help option that short-circuits the parse and prints rich help text
- Every user input problem becomes a `ParsingError`; nothing is raised

Public Interface:
- `add_option(...)`: Declare an option.
- `add_value_list(...)`: Declare where un-prefixed tokens go.
- `add_help_option(...)`: Declare the option that requests the help screen.
- `parse(tokens, destination, settings=None)`: Run a parse session.
- `render_help(...)` / `get_help_text(...)`: Produce the help screen.

Example Usage:
    parser = OptionParser(program="nd-req-ping", version="1.0")
    parser.add_option("-c", "--connect", required=True, help="Socket endpoint.")
    parser.add_option("-n", "--count", type=int, default=10)
    parser.add_help_option()

    options = SimpleNamespace()
    outcome = parser.parse(["-c", "tcp://localhost:5555"], options)

    # outcome.success is True, options.connect == "tcp://localhost:5555"

Declarations are validated eagerly. Mistakes such as duplicate names or a list
field declared without array arity raise `OptionConfigurationError` at
declaration time, never during a parse.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Any, Sequence

from rich.console import Console

from optbind.console import console
from optbind.exceptions import OptionConfigurationError
from optbind.help_text import HelpText
from optbind.logger import logger
from optbind.parser.option_arity import Arity
from optbind.parser.option_spec import (
    DEFAULT_HELP_OPTION_TEXT,
    DEFAULT_MUTUALLY_EXCLUSIVE_SET,
    DEFAULT_SEPARATOR,
    MISSING,
    HelpOptionSpec,
    OptionSpec,
    PositionalValueSpec,
    Setter,
)
from optbind.parser.parser_types import ParseOutcome
from optbind.parser.registry import validate_option_spec, validate_positional_spec
from optbind.parser.session import ParseSession
from optbind.parser.utils import array_element_type, coerce_value, type_name
from optbind.settings import ParserSettings


class OptionParser:
    """
    Declarative option parser.

    Holds an ordered list of immutable `OptionSpec` declarations, an optional
    `PositionalValueSpec` and an optional `HelpOptionSpec`. The parser itself
    keeps no per-parse state, so one instance may serve any number of parses.

    Attributes:
        program (str | None): Program name shown in the help heading.
        version (str | None): Version shown next to the program name.
        copyright (str): Copyright line shown under the heading.
        help_text (str): Text shown before the options list.
        help_epilog (str): Text shown after the options list.
        settings (ParserSettings): Settings used when `parse()` gets none.
        console (Console): Console used by `render_help()` by default.
    """

    def __init__(
        self,
        program: str | None = None,
        version: str | None = None,
        copyright: str = "",
        help_text: str = "",
        help_epilog: str = "",
        settings: ParserSettings | None = None,
        console: Console = console,
    ) -> None:
        self.program: str | None = program
        self.version: str | None = version
        self.copyright: str = copyright
        self.help_text: str = help_text
        self.help_epilog: str = help_epilog
        self.settings: ParserSettings = settings or ParserSettings()
        self.console: Console = console
        self._options: list[OptionSpec] = []
        self._flag_map: dict[str, OptionSpec] = {}
        self._dest_set: set[str] = set()
        self._positional: PositionalValueSpec | None = None
        self._help_option: HelpOptionSpec | None = None

    @property
    def specs(self) -> list[OptionSpec]:
        return list(self._options)

    @property
    def positional(self) -> PositionalValueSpec | None:
        return self._positional

    @property
    def help_option(self) -> HelpOptionSpec | None:
        return self._help_option

    def _split_flags(self, flags: tuple[str, ...]) -> tuple[str | None, str | None]:
        """Split `-x` / `--name` flags into a short name and a long name."""
        if not flags:
            raise OptionConfigurationError("No flags provided")
        short_name = long_name = None
        for flag in flags:
            if not isinstance(flag, str):
                raise OptionConfigurationError(f"Flag '{flag}' must be a string")
            if flag.startswith("--"):
                if long_name is not None:
                    raise OptionConfigurationError(
                        f"Option '{flag}' declares more than one long name"
                    )
                long_name = flag[2:]
            elif flag.startswith("-") and len(flag) == 2:
                if short_name is not None:
                    raise OptionConfigurationError(
                        f"Option '{flag}' declares more than one short name"
                    )
                short_name = flag[1:]
            else:
                raise OptionConfigurationError(
                    f"Flag '{flag}' must be a single character with '-' or start with '--'"
                )
        return short_name, long_name

    def _get_dest_from_names(
        self, short_name: str | None, long_name: str | None, dest: str | None
    ) -> str:
        if not dest:
            dest = (long_name or short_name or "").replace("-", "_")
        if not dest.isidentifier():
            raise OptionConfigurationError(
                f"dest '{dest}' must be a valid identifier "
                "(letters, digits, and underscores only)"
            )
        return dest

    def _resolve_arity_and_type(
        self, arity: Arity | str | None, expected_type: Any
    ) -> tuple[Arity, Any]:
        if arity is not None and not isinstance(arity, Arity):
            try:
                arity = Arity(arity)
            except ValueError as error:
                raise OptionConfigurationError(
                    f"Invalid arity '{arity}'. Choose from: {Arity.choices()}"
                ) from error

        if expected_type is None:
            if arity is Arity.BOOLEAN:
                return arity, bool
            if arity in (Arity.ARRAY, Arity.DELIMITED_LIST):
                return arity, list[str]
            return arity or Arity.SCALAR, str

        if arity is None:
            if expected_type is bool:
                return Arity.BOOLEAN, bool
            if array_element_type(expected_type) is not None:
                return Arity.ARRAY, expected_type
            return Arity.SCALAR, expected_type
        return arity, expected_type

    def _resolve_default(self, default: Any, spec: OptionSpec) -> Any:
        """Coerce a textual default to the declared type."""
        if default is None:
            return default
        try:
            if spec.arity is Arity.BOOLEAN:
                if not isinstance(default, (bool, str)):
                    raise ValueError("boolean defaults must be a bool")
                return coerce_value(default, bool)
            if spec.arity is Arity.DELIMITED_LIST and isinstance(default, str):
                return default.split(spec.separator)
            if spec.arity is Arity.ARRAY:
                if not isinstance(default, (list, tuple)):
                    raise ValueError("array defaults must be a list or tuple")
                return spec.container(
                    coerce_value(item, spec.element_type) if isinstance(item, str) else item
                    for item in default
                )
            if spec.arity is Arity.SCALAR and isinstance(default, str):
                target_type, nullable = spec.scalar_type
                if nullable and default == "":
                    return None
                return coerce_value(default, target_type)
        except ValueError as error:
            raise OptionConfigurationError(
                f"Default value {default!r} for '{spec.dest}' cannot be coerced to "
                f"{type_name(spec.type)} error: {error}"
            ) from error
        return default

    def _check_names_available(self, names: Sequence[str]) -> None:
        for name in names:
            if name in self._flag_map:
                existing = self._flag_map[name]
                raise OptionConfigurationError(
                    f"Option name '{name}' is already used by '{existing.dest}'"
                )
            if self._help_option is not None and name in self._help_option.names:
                raise OptionConfigurationError(
                    f"Option name '{name}' is already used by the help option"
                )

    def add_option(
        self,
        *flags: str,
        dest: str | None = None,
        arity: Arity | str | None = None,
        type: Any = None,
        required: bool = False,
        default: Any = MISSING,
        mutually_exclusive_set: str | None = None,
        separator: str = DEFAULT_SEPARATOR,
        help: str = "",
        setter: Setter | None = None,
    ) -> OptionSpec:
        """
        Declare a new option.

        Args:
            *flags (str): `-x` and/or `--name` flags identifying the option.
            dest (str | None): Destination field. Derived from the long name,
                then the short name, when omitted.
            arity (Arity | str | None): Value cardinality. Inferred from `type`
                when omitted: `bool` gives BOOLEAN, list and tuple types give ARRAY.
            type (Any): Declared field type. Defaults to `str`, `bool` for
                BOOLEAN and `list[str]` for ARRAY and DELIMITED_LIST.
            required (bool): Whether the option must appear in the tokens.
            default (Any): Value written into the destination before parsing.
                Text defaults are coerced to the declared type.
            mutually_exclusive_set (str | None): Name of the exclusive set.
                An empty string means the "Default" set.
            separator (str): Split character for DELIMITED_LIST options.
            help (str): Help text for rendering.
            setter (Setter | None): Custom `(target, value)` writer.

        Returns:
            OptionSpec: The registered declaration.

        Raises:
            OptionConfigurationError: If the declaration is malformed or clashes
                with an earlier one.
        """
        short_name, long_name = self._split_flags(flags)
        dest = self._get_dest_from_names(short_name, long_name, dest)
        if dest in self._dest_set:
            raise OptionConfigurationError(
                f"Destination '{dest}' is already defined.\n"
                "Binding multiple options into the same dest is not supported. "
                "Define a unique 'dest' for each option."
            )
        arity, expected_type = self._resolve_arity_and_type(arity, type)
        if mutually_exclusive_set == "":
            mutually_exclusive_set = DEFAULT_MUTUALLY_EXCLUSIVE_SET

        spec = OptionSpec(
            short_name=short_name,
            long_name=long_name,
            dest=dest,
            arity=arity,
            type=expected_type,
            required=required,
            help=help,
            mutually_exclusive_set=mutually_exclusive_set,
            separator=separator,
            setter=setter,
        )
        validate_option_spec(spec)
        if default is not MISSING:
            spec = replace(spec, default=self._resolve_default(default, spec))
        self._check_names_available(spec.names)
        if self._positional is not None and self._positional.dest == dest:
            raise OptionConfigurationError(
                f"Destination '{dest}' is already bound to the value list"
            )

        for name in spec.names:
            self._flag_map[name] = spec
        self._dest_set.add(dest)
        self._options.append(spec)
        return spec

    def add_value_list(
        self,
        dest: str,
        max_elements: int = -1,
        help: str = "",
        setter: Setter | None = None,
    ) -> PositionalValueSpec:
        """
        Declare the destination for un-prefixed tokens.

        Args:
            dest (str): Destination field, which receives a `list[str]`.
            max_elements (int): -1 for unbounded, 0 to reject every value, or
                a positive bound.
            help (str): Help text for rendering.
            setter (Setter | None): Custom `(target, value)` writer.

        Raises:
            OptionConfigurationError: If a value list is already declared or
                `dest` clashes with an option.
        """
        if self._positional is not None:
            raise OptionConfigurationError(
                f"A value list is already declared for '{self._positional.dest}'"
            )
        if dest in self._dest_set:
            raise OptionConfigurationError(
                f"Destination '{dest}' is already bound to an option"
            )
        positional = PositionalValueSpec(
            dest=dest, max_elements=max_elements, help=help, setter=setter
        )
        validate_positional_spec(positional)
        self._positional = positional
        return positional

    def add_help_option(
        self,
        short_name: str | None = None,
        long_name: str | None = "help",
        help: str = DEFAULT_HELP_OPTION_TEXT,
    ) -> HelpOptionSpec:
        """Declare the option that requests the help screen. It is never required."""
        if self._help_option is not None:
            raise OptionConfigurationError("A help option is already declared")
        help_option = HelpOptionSpec(short_name=short_name, long_name=long_name, help=help)
        if not help_option.names:
            raise OptionConfigurationError(
                "The help option needs a short name or a long name"
            )
        self._check_names_available(help_option.names)
        self._help_option = help_option
        return help_option

    def _help_requested(self, tokens: Sequence[str], settings: ParserSettings) -> bool:
        if self._help_option is None:
            return False
        return any(
            self._help_option.matches(token, settings.case_sensitive) for token in tokens
        )

    def parse(
        self,
        tokens: Sequence[str],
        destination: Any,
        settings: ParserSettings | None = None,
    ) -> ParseOutcome:
        """
        Parse `tokens` into `destination`.

        The destination is mutated in place. When a help option is declared and
        present in the tokens, nothing is bound and the outcome reports
        `help_requested`. When the settings carry a `help_writer`, the help
        screen is printed to it for help requests and failed parses.

        Args:
            tokens (Sequence[str]): Command-line tokens, without the program name.
            destination (Any): Object or mutable mapping receiving the values.
            settings (ParserSettings | None): Overrides the parser's settings.

        Returns:
            ParseOutcome: Success flag, errors and the destination.

        Raises:
            OptionConfigurationError: If the declarations clash under the
                session's case rule or a default cannot be written.
        """
        settings = settings or self.settings
        tokens = list(tokens)

        help_names = self._help_option.names if self._help_option else ()
        session = ParseSession(
            self._options, self._positional, settings, reserved_names=help_names
        )
        if self._help_requested(tokens, settings):
            logger.debug("Help option found in %s", tokens)
            outcome = ParseOutcome(
                success=False, destination=destination, help_requested=True
            )
        else:
            outcome = session.run(tokens, destination)

        if settings.help_writer is not None and not outcome.success:
            self.render_help(settings.help_writer, outcome)
        return outcome

    def get_help_text(self, outcome: ParseOutcome | None = None) -> HelpText:
        """Build the help screen, with an errors section for a failed outcome."""
        return HelpText.auto_build(self, outcome)

    def render_help(
        self, console: Console | None = None, outcome: ParseOutcome | None = None
    ) -> None:
        """Print the help screen to `console`, or the parser's console."""
        self.get_help_text(outcome).print(console or self.console)

    def __str__(self) -> str:
        """Return a human-readable summary of the parser declarations."""
        required = sum(spec.required for spec in self._options)
        return (
            f"OptionParser(program={self.program!r}, options={len(self._options)}, "
            f"names={len(self._flag_map)}, required={required}, "
            f"value_list={self._positional.dest if self._positional else None!r}, "
            f"help={self._help_option is not None})"
        )

    def __repr__(self) -> str:
        return str(self)


def parse(
    tokens: Sequence[str], destination: Any, parser: OptionParser, **settings: Any
) -> ParseOutcome:
    """
    Parse `tokens` into `destination` with `parser`.

    Keyword arguments build the `ParserSettings` for this parse, for example
    `parse(argv, options, parser, case_sensitive=False)`.
    """
    return parser.parse(tokens, destination, ParserSettings(**settings))
