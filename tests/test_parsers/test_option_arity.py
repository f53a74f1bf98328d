import pytest

from optbind.parser import Arity, OptionSpec


def test_arity():
    arity = Arity.ARRAY
    assert arity == Arity.ARRAY
    assert arity != Arity.SCALAR
    assert arity != "invalid_arity"
    assert arity.value == "array"
    assert str(arity) == "array"
    assert len(Arity.choices()) == 4


@pytest.mark.parametrize(
    "alias, expected",
    [
        ("flag", Arity.BOOLEAN),
        ("BOOL", Arity.BOOLEAN),
        ("value", Arity.SCALAR),
        ("many", Arity.ARRAY),
        ("list", Arity.DELIMITED_LIST),
        ("delimited-list", Arity.DELIMITED_LIST),
    ],
)
def test_arity_aliases(alias, expected):
    assert Arity(alias) is expected


def test_arity_invalid():
    with pytest.raises(ValueError):
        Arity("several")
    with pytest.raises(ValueError):
        Arity(3)


def test_arity_properties():
    assert Arity.BOOLEAN.takes_value is False
    assert Arity.SCALAR.takes_value is True
    assert Arity.ARRAY.is_multi_token is True
    assert Arity.DELIMITED_LIST.is_multi_token is False


@pytest.mark.parametrize("arity", Arity.choices())
def test_spec_shape_follows_arity(arity):
    spec = OptionSpec(short_name="x", long_name=None, dest="x", arity=arity)
    assert spec.is_boolean is not arity.takes_value
    assert spec.is_array is arity.is_multi_token
