# Optbind Option Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `Arity`, the enum describing how many values an option takes.

Supports alias coercion for shorthand or config-friendly values so that
declarations loaded from YAML or TOML can use short names.

Example:
    Arity("scalar") → Arity.SCALAR
    Arity("flag")   → Arity.BOOLEAN (via alias)
    Arity("list")   → Arity.DELIMITED_LIST (via alias)
"""
from __future__ import annotations

from enum import Enum


class Arity(Enum):
    """
    Defines the value cardinality of an option.

    Members:
        BOOLEAN: Presence-only switch, binds `True`.
        SCALAR: Exactly one value.
        ARRAY: One or more values, taken from consecutive tokens.
        DELIMITED_LIST: One value split on a separator character.

    Aliases:
        - "bool" / "flag" → "boolean"
        - "single" / "value" → "scalar"
        - "many" / "multiple" → "array"
        - "list" / "delimited" → "delimited_list"
    """

    BOOLEAN = "boolean"
    SCALAR = "scalar"
    ARRAY = "array"
    DELIMITED_LIST = "delimited_list"

    @classmethod
    def choices(cls) -> list[Arity]:
        """Return a list of all arities."""
        return list(cls)

    @classmethod
    def _get_alias(cls, value: str) -> str:
        aliases = {
            "bool": "boolean",
            "flag": "boolean",
            "single": "scalar",
            "value": "scalar",
            "many": "array",
            "multiple": "array",
            "list": "delimited_list",
            "delimited": "delimited_list",
        }
        return aliases.get(value, value)

    @classmethod
    def _missing_(cls, value: object) -> Arity:
        if not isinstance(value, str):
            raise ValueError(f"Invalid {cls.__name__}: {value!r}")
        normalized = value.strip().lower().replace("-", "_")
        alias = cls._get_alias(normalized)
        for member in cls:
            if member.value == alias:
                return member
        valid = ", ".join(member.value for member in cls)
        raise ValueError(f"Invalid {cls.__name__}: '{value}'. Must be one of: {valid}")

    @property
    def takes_value(self) -> bool:
        return self is not Arity.BOOLEAN

    @property
    def is_multi_token(self) -> bool:
        return self is Arity.ARRAY

    def __str__(self) -> str:
        """Return the string representation of the arity."""
        return self.value
