# Optbind Option Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `OptionRegistry`, the per-parse lookup table of declared options.

The registry maps every short and long name to its `OptionSpec`. Options that
declare both names are stored under their short name with the long name kept
in an alias table, so `resolve()` finds them by either. Lookups are exact and
follow the session's case rule.

The registry also owns the per-parse `OptionState` of every spec (the one-shot
"defined" flag) and the list of positional values collected so far.

Building a registry re-checks every declaration. Malformed declarations are
programmer mistakes and raise `OptionConfigurationError` before any token is
looked at.
"""
from __future__ import annotations

from copy import deepcopy
from typing import Any, Sequence

from optbind.exceptions import OptionConfigurationError
from optbind.logger import logger
from optbind.parser.option_arity import Arity
from optbind.parser.option_spec import OptionSpec, PositionalValueSpec
from optbind.parser.parser_types import OptionState
from optbind.parser.utils import array_element_type, split_nullable, type_name
from optbind.utils import CaseInsensitiveDict


def validate_option_spec(spec: OptionSpec) -> None:
    """
    Check a single declaration for structural mistakes.

    Raises:
        OptionConfigurationError: If the names, dest, arity, type or separator
            of the declaration are inconsistent.
    """
    if not spec.short_name and not spec.long_name:
        raise OptionConfigurationError("An option needs a short name or a long name")
    if spec.short_name is not None:
        if len(spec.short_name) != 1:
            raise OptionConfigurationError(
                f"Short name '{spec.short_name}' must be a single character"
            )
        if spec.short_name.isdigit() or spec.short_name in "-= ":
            raise OptionConfigurationError(
                f"Short name '{spec.short_name}' must not be a digit, '-', '=' or space"
            )
    if spec.long_name is not None:
        if len(spec.long_name) < 2:
            raise OptionConfigurationError(
                f"Long name '{spec.long_name}' must be at least 2 characters long"
            )
        if spec.long_name.startswith("-") or "=" in spec.long_name:
            raise OptionConfigurationError(
                f"Long name '{spec.long_name}' must not start with '-' or contain '='"
            )
        if any(char.isspace() for char in spec.long_name):
            raise OptionConfigurationError(
                f"Long name '{spec.long_name}' must not contain whitespace"
            )
    if not spec.dest or not spec.dest.isidentifier():
        raise OptionConfigurationError(
            f"dest '{spec.dest}' must be a valid identifier "
            "(letters, digits, and underscores only)"
        )

    element = array_element_type(spec.type)
    if spec.arity is Arity.BOOLEAN:
        if spec.type is not bool:
            raise OptionConfigurationError(
                f"Boolean option '{spec.display_name}' must bind a bool field, "
                f"not {type_name(spec.type)}"
            )
    elif spec.arity is Arity.ARRAY:
        if element is None:
            raise OptionConfigurationError(
                f"Array option '{spec.display_name}' must bind a list or tuple field, "
                f"not {type_name(spec.type)}"
            )
    elif spec.arity is Arity.DELIMITED_LIST:
        if element != (str, list):
            raise OptionConfigurationError(
                f"Delimited list option '{spec.display_name}' must bind a list[str] field"
            )
        if len(spec.separator) != 1:
            raise OptionConfigurationError(
                f"Separator for '{spec.display_name}' must be a single character"
            )
    else:
        if element is not None:
            raise OptionConfigurationError(
                f"Option '{spec.display_name}' binds a {type_name(spec.type)} field "
                "and must be declared with array arity"
            )
        inner, _ = split_nullable(spec.type)
        if array_element_type(inner) is not None:
            raise OptionConfigurationError(
                f"Option '{spec.display_name}' binds an optional list field "
                "and must be declared with array arity"
            )


def validate_positional_spec(positional: PositionalValueSpec) -> None:
    if not positional.dest or not positional.dest.isidentifier():
        raise OptionConfigurationError(
            f"dest '{positional.dest}' must be a valid identifier"
        )
    if positional.max_elements < -1:
        raise OptionConfigurationError(
            "max_elements must be -1 (unbounded), 0 (disallowed) or a positive bound"
        )


class OptionRegistry:
    """
    Name to `OptionSpec` lookup plus the per-parse state of every option.

    Built once per parse session and read-only during parsing, except for the
    defined flags and the collected positional values. `reserved_names` are
    names owned outside the registry, such as the help option's, and must not
    resolve to an option under the case rule.
    """

    def __init__(
        self,
        specs: Sequence[OptionSpec],
        positional: PositionalValueSpec | None = None,
        case_sensitive: bool = True,
        reserved_names: Sequence[str] = (),
    ) -> None:
        self.case_sensitive: bool = case_sensitive
        self._map: dict[str, OptionSpec] = self._new_table()
        self._names: dict[str, str] = self._new_table()
        self._states: dict[str, OptionState] = {}
        self._defined_count: int = 0
        self._positional: PositionalValueSpec | None = positional
        self._positional_values: list[str] = []
        for spec in specs:
            self._register(spec)
        for name in reserved_names:
            clash = self.resolve(name)
            if clash is not None:
                raise OptionConfigurationError(
                    f"Option name '{name}' clashes with option '{clash.display_name}'"
                )
        if positional is not None:
            validate_positional_spec(positional)
            if positional.dest in self._states:
                raise OptionConfigurationError(
                    f"Destination '{positional.dest}' is already bound to an option"
                )
        logger.debug(
            "Built option registry with %d option(s), positional=%s",
            len(self._states),
            positional.dest if positional else None,
        )

    def _new_table(self) -> dict:
        return {} if self.case_sensitive else CaseInsensitiveDict()

    def _register(self, spec: OptionSpec) -> None:
        validate_option_spec(spec)
        for name in spec.names:
            if name in self._map or name in self._names:
                raise OptionConfigurationError(f"Option name '{name}' is already in use")
        if spec.dest in self._states:
            raise OptionConfigurationError(
                f"Destination '{spec.dest}' is already defined.\n"
                "Binding multiple options into the same dest is not supported."
            )
        self._map[spec.unique_name] = spec
        if spec.has_both_names:
            self._names[spec.long_name] = spec.short_name
        self._states[spec.dest] = OptionState(spec)

    def resolve(self, name: str) -> OptionSpec | None:
        """Return the option declared under a short or long name, if any."""
        if name in self._map:
            return self._map[name]
        if name in self._names:
            return self._map[self._names[name]]
        return None

    def __getitem__(self, name: str) -> OptionSpec | None:
        return self.resolve(name)

    def __contains__(self, name: str) -> bool:
        return self.resolve(name) is not None

    def __iter__(self):
        return (state.spec for state in self._states.values())

    def __len__(self) -> int:
        return len(self._states)

    def state_of(self, spec: OptionSpec) -> OptionState:
        return self._states[spec.dest]

    def states(self) -> list[OptionState]:
        """Option states in declaration order."""
        return list(self._states.values())

    def mark_defined(self, spec: OptionSpec, position: int | None = None) -> None:
        """Flip the defined flag of `spec`. Calling it again has no effect."""
        state = self._states[spec.dest]
        if state.defined:
            return
        state.set_defined(position, self._defined_count)
        self._defined_count += 1

    def is_defined(self, spec: OptionSpec) -> bool:
        return self._states[spec.dest].defined

    @property
    def positional(self) -> PositionalValueSpec | None:
        return self._positional

    @property
    def positional_values(self) -> list[str]:
        return self._positional_values

    def apply_defaults(self, target: Any) -> None:
        """
        Write every declared default into the destination.

        Also binds a fresh empty list to the positional destination, which then
        receives values as they are collected.
        """
        for state in self._states.values():
            spec = state.spec
            if spec.has_default:
                try:
                    spec.bind(target, deepcopy(spec.default))
                except (AttributeError, TypeError) as error:
                    raise OptionConfigurationError(
                        f"Bad default value for '{spec.dest}': {error}"
                    ) from error
        if self._positional is not None:
            self._positional_values = []
            self._positional.bind(target, self._positional_values)

    def add_positional(self, value: str) -> bool:
        """Append a positional value if the declared maximum allows it."""
        if self._positional is None:
            return False
        if not self._positional.accepts(len(self._positional_values)):
            return False
        self._positional_values.append(value)
        return True
