# Optbind Option Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Value coercion and type inspection utilities for optbind.

This module converts the raw text of a command-line token into the type an
option declares, including `Enum`, `bool`, `datetime`, `Literal` and unions.
It also answers the structural questions the registry asks about a declared
type: is it nullable, and is it an array-capable container.

Functions:
- coerce_bool: Convert a string to a boolean.
- coerce_enum: Convert a string to an Enum member, case-insensitively by name.
- coerce_value: General-purpose coercion to a target type.
- split_nullable: Separate `T | None` into `T` and a nullable marker.
- array_element_type: Return the element type and container of a list/tuple type.
"""
import types
from datetime import datetime
from enum import EnumMeta
from typing import Any, Literal, Union, get_args, get_origin

from dateutil import parser as date_parser

NoneType = type(None)


def type_name(target_type: Any) -> str:
    """Return a readable name for a declared type."""
    return getattr(target_type, "__name__", None) or str(target_type)


def coerce_bool(value: str) -> bool:
    """
    Convert a string to a boolean.

    Accepts 'true', 'yes', '1', 'on' and their false counterparts, in any case.

    Raises:
        ValueError: If the text is not a recognised boolean word.
    """
    if isinstance(value, bool):
        return value
    normalized = value.strip().lower()
    if normalized in {"true", "t", "1", "yes", "y", "on"}:
        return True
    elif normalized in {"false", "f", "0", "no", "n", "off"}:
        return False
    raise ValueError(f"Value '{value}' is not a valid boolean")


def coerce_enum(value: Any, enum_type: EnumMeta) -> Any:
    """
    Convert a raw value or string to an Enum instance.

    Member names are matched case-insensitively first, then the member values
    are tried through their base type.

    Args:
        value (Any): The input value to convert.
        enum_type (EnumMeta): The target Enum class.

    Returns:
        Enum: The corresponding Enum instance.

    Raises:
        ValueError: If the value cannot be resolved to a valid Enum member.
    """
    if isinstance(value, enum_type):
        return value

    if isinstance(value, str):
        folded = value.strip().casefold()
        for member in enum_type:
            if member.name.casefold() == folded:
                return member

    members = list(enum_type)
    if not members:
        raise ValueError(f"{enum_type.__name__} has no members")
    base_type = type(members[0].value)
    try:
        coerced_value = base_type(value)
        return enum_type(coerced_value)
    except (ValueError, TypeError):
        names = [member.name for member in enum_type]
        raise ValueError(f"'{value}' should be one of {{{', '.join(names)}}}") from None


def split_nullable(target_type: Any) -> tuple[Any, bool]:
    """
    Split an optional type into its inner type and a nullable marker.

    `int | None` gives `(int, True)`, `int | str | None` gives `(int | str, True)`
    and `int` gives `(int, False)`.
    """
    if not (isinstance(target_type, types.UnionType) or get_origin(target_type) is Union):
        return target_type, False
    args = get_args(target_type)
    if NoneType not in args:
        return target_type, False
    remaining = tuple(arg for arg in args if arg is not NoneType)
    if len(remaining) == 1:
        return remaining[0], True
    return Union[remaining], True


def array_element_type(target_type: Any) -> tuple[Any, type] | None:
    """
    Return `(element_type, container)` for an array-capable type, else None.

    `list`, `list[T]`, `tuple` and `tuple[T, ...]` are array-capable. Elements
    of a bare container are strings.
    """
    if target_type in (list, tuple):
        return str, target_type
    origin = get_origin(target_type)
    if origin not in (list, tuple):
        return None
    args = get_args(target_type)
    if not args:
        return str, origin
    if origin is tuple:
        if len(args) == 2 and args[1] is Ellipsis:
            return args[0], tuple
        if len(set(args)) == 1:
            return args[0], tuple
        return None
    return args[0], list


def coerce_value(value: str, target_type: Any) -> Any:
    """
    Attempt to convert a string to the given target type.

    Handles Union, Literal, Enum, bool and datetime in addition to any callable
    type that accepts a single string (int, float, Decimal, Path, ...).

    Args:
        value (str): The input string to convert.
        target_type (type): The desired type.

    Returns:
        Any: The coerced value.

    Raises:
        ValueError: If conversion fails or the value is invalid.
    """
    if target_type is None or target_type is Any or target_type is str:
        return value

    origin = get_origin(target_type)
    args = get_args(target_type)

    if origin is Literal:
        for arg in args:
            if value == str(arg):
                return arg
        raise ValueError(f"Value '{value}' is not a valid literal for type {target_type}")

    if isinstance(target_type, types.UnionType) or origin is Union:
        for arg in args:
            if arg is NoneType:
                continue
            try:
                return coerce_value(value, arg)
            except ValueError:
                continue
        raise ValueError(f"Value '{value}' could not be coerced to any of {args}")

    if isinstance(target_type, EnumMeta):
        return coerce_enum(value, target_type)

    if target_type is bool:
        return coerce_bool(value)

    if target_type is datetime:
        try:
            return date_parser.parse(value)
        except (ValueError, OverflowError) as error:
            raise ValueError(f"Value '{value}' could not be parsed as a datetime") from error

    try:
        return target_type(value)
    except (TypeError, ArithmeticError) as error:
        raise ValueError(
            f"Value '{value}' could not be coerced to {type_name(target_type)}"
        ) from error
