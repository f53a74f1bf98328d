from datetime import datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Literal, Union

import pytest

from optbind.parser.utils import (
    array_element_type,
    coerce_bool,
    coerce_value,
    split_nullable,
)


# --- Tests ---
@pytest.mark.parametrize(
    "value, target_type, expected",
    [
        ("42", int, 42),
        ("-42", int, -42),
        ("3.14", float, 3.14),
        ("True", bool, True),
        ("hello", str, "hello"),
        ("", str, ""),
        ("False", bool, False),
        ("10.50", Decimal, Decimal("10.50")),
    ],
)
def test_coerce_value_basic(value, target_type, expected):
    assert coerce_value(value, target_type) == expected


@pytest.mark.parametrize(
    "value, target_type, expected",
    [
        ("42", int | float, 42),
        ("3.14", int | float, 3.14),
        ("hello", str | int, "hello"),
        ("1", bool | str, True),
    ],
)
def test_coerce_value_union_success(value, target_type, expected):
    assert coerce_value(value, target_type) == expected


def test_coerce_value_union_failure():
    with pytest.raises(ValueError) as excinfo:
        coerce_value("abc", int | float)
    assert "could not be coerced" in str(excinfo.value)


def test_coerce_value_typing_union_equivalent():
    assert coerce_value("123", Union[int, str]) == 123
    assert coerce_value("abc", Union[int, str]) == "abc"


def test_coerce_value_optional_skips_none():
    assert coerce_value("7", int | None) == 7
    with pytest.raises(ValueError):
        coerce_value("seven", int | None)


@pytest.mark.parametrize("value", ["abc", "1,000", "4.2"])
def test_coerce_value_int_failures(value):
    with pytest.raises(ValueError):
        coerce_value(value, int)


def test_coerce_value_decimal_failure_is_value_error():
    with pytest.raises(ValueError):
        coerce_value("ten", Decimal)


def test_coerce_value_enum():
    class Color(Enum):
        RED = "red"
        GREEN = "green"
        BLUE = "blue"

    assert coerce_value("red", Color) == Color.RED
    assert coerce_value("GREEN", Color) == Color.GREEN
    assert coerce_value("Blue", Color) == Color.BLUE

    with pytest.raises(ValueError):
        coerce_value("yellow", Color)


def test_coerce_value_int_enum():
    class Status(Enum):
        SUCCESS = 0
        FAILURE = 1
        PENDING = 2

    assert coerce_value("0", Status) == Status.SUCCESS
    assert coerce_value(1, Status) == Status.FAILURE
    assert coerce_value("pending", Status) == Status.PENDING
    assert coerce_value(Status.SUCCESS, Status) == Status.SUCCESS

    with pytest.raises(ValueError):
        coerce_value("3", Status)


def test_enum_name_match_wins_over_value():
    class Swapped(Enum):
        ONE = "two"
        TWO = "one"

    assert coerce_value("one", Swapped) == Swapped.ONE
    assert coerce_value("two", Swapped) == Swapped.TWO


def test_literal_coercion():
    assert coerce_value("dev", Literal["dev", "prod"]) == "dev"
    assert coerce_value("3", Literal[1, 2, 3]) == 3
    with pytest.raises(ValueError):
        coerce_value("staging", Literal["dev", "prod"])


def test_path_coercion():
    result = coerce_value("/tmp/test.txt", Path)
    assert isinstance(result, Path)
    assert str(result) == "/tmp/test.txt"


def test_datetime_coercion():
    result = coerce_value("2023-10-01T13:00:00", datetime)
    assert isinstance(result, datetime)
    assert result.year == 2023 and result.month == 10 and result.hour == 13

    with pytest.raises(ValueError):
        coerce_value("not-a-date", datetime)


def test_bool_coercion():
    assert coerce_value("true", bool) is True
    assert coerce_value("False", bool) is False
    assert coerce_value("0", bool) is False
    assert coerce_value("1", bool) is True
    assert coerce_value("yes", bool) is True
    assert coerce_value("no", bool) is False
    assert coerce_value("on", bool) is True
    assert coerce_value("off", bool) is False
    assert coerce_value(True, bool) is True


@pytest.mark.parametrize("value", ["", "maybe", "2"])
def test_coerce_bool_is_strict(value):
    with pytest.raises(ValueError):
        coerce_bool(value)


@pytest.mark.parametrize(
    "target_type, expected",
    [
        (int, (int, False)),
        (int | None, (int, True)),
        (Union[str, None], (str, True)),
        (int | str, (int | str, False)),
    ],
)
def test_split_nullable(target_type, expected):
    assert split_nullable(target_type) == expected


def test_split_nullable_keeps_remaining_union():
    inner, nullable = split_nullable(int | str | None)
    assert nullable is True
    assert coerce_value("5", inner) == 5
    assert coerce_value("five", inner) == "five"


@pytest.mark.parametrize(
    "target_type, expected",
    [
        (list, (str, list)),
        (tuple, (str, tuple)),
        (list[int], (int, list)),
        (tuple[float, ...], (float, tuple)),
        (str, None),
        (int, None),
        (dict[str, int], None),
        (tuple[int, str], None),
    ],
)
def test_array_element_type(target_type, expected):
    assert array_element_type(target_type) == expected
