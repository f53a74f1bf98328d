# Optbind Option Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ValueBinder`, which converts raw token text into an option's declared
type and writes it into the destination.

Conversion failures are not exceptions at this level. Every bind method
returns True on success and False on a format violation, leaving the
destination field untouched, so the parse session can record the error and
move on to the next token.

Binding rules by arity:
- BOOLEAN: assigns `True`, never fails.
- SCALAR: coerces the text with `coerce_value()`. For `T | None` fields empty
  text binds `None`.
- DELIMITED_LIST: splits the text on the option's separator, never fails.
- ARRAY: coerces every collected token to the element type. One bad element
  fails the whole binding.
"""
from __future__ import annotations

from typing import Any, Sequence

from optbind.logger import logger
from optbind.parser.option_arity import Arity
from optbind.parser.option_spec import OptionSpec
from optbind.parser.utils import coerce_value


class ValueBinder:
    """Converts raw text to declared types and binds it through each spec's setter."""

    def bind_flag(self, spec: OptionSpec, target: Any, value: bool = True) -> bool:
        spec.bind(target, value)
        return True

    def bind_text(self, spec: OptionSpec, value: str, target: Any) -> bool:
        """Bind a single raw value to a SCALAR or DELIMITED_LIST option."""
        if spec.arity is Arity.DELIMITED_LIST:
            spec.bind(target, value.split(spec.separator))
            return True
        if spec.arity is Arity.ARRAY:
            return self.bind_values(spec, [value], target)
        if spec.arity is Arity.BOOLEAN:
            logger.debug("Boolean option '%s' does not take a value", spec.display_name)
            return False

        target_type, nullable = spec.scalar_type
        if nullable and value == "":
            spec.bind(target, None)
            return True
        try:
            converted = coerce_value(value, target_type)
        except ValueError as error:
            logger.debug(
                "Value %r for '%s' violates format: %s", value, spec.display_name, error
            )
            return False
        spec.bind(target, converted)
        return True

    def bind_values(self, spec: OptionSpec, values: Sequence[str], target: Any) -> bool:
        """Bind collected raw values to an ARRAY option, all or nothing."""
        element_type = spec.element_type
        converted = []
        for value in values:
            try:
                converted.append(coerce_value(value, element_type))
            except ValueError as error:
                logger.debug(
                    "Element %r for '%s' violates format: %s",
                    value,
                    spec.display_name,
                    error,
                )
                return False
        spec.bind(target, spec.container(converted))
        return True
