from types import SimpleNamespace

import pytest

from optbind.exceptions import OptionConfigurationError
from optbind.parser.option_arity import Arity
from optbind.parser.option_spec import OptionSpec, PositionalValueSpec
from optbind.parser.registry import OptionRegistry, validate_option_spec


def make_spec(short_name="c", long_name="connect", dest="connect", **kwargs):
    return OptionSpec(short_name=short_name, long_name=long_name, dest=dest, **kwargs)


def test_resolve_by_short_and_long_name():
    spec = make_spec()
    registry = OptionRegistry([spec])
    assert registry.resolve("c") is spec
    assert registry.resolve("connect") is spec
    assert registry["connect"] is spec
    assert "c" in registry
    assert registry.resolve("C") is None
    assert registry.resolve("bind") is None


def test_resolve_long_only_and_short_only():
    long_only = make_spec(short_name=None, long_name="bind", dest="bind")
    short_only = make_spec(
        short_name="v", long_name=None, dest="verbose", type=bool, arity=Arity.BOOLEAN
    )
    registry = OptionRegistry([long_only, short_only])
    assert registry.resolve("bind") is long_only
    assert registry.resolve("v") is short_only
    assert len(registry) == 2
    assert list(registry) == [long_only, short_only]


def test_case_insensitive_lookup():
    spec = make_spec()
    registry = OptionRegistry([spec], case_sensitive=False)
    assert registry.resolve("C") is spec
    assert registry.resolve("CONNECT") is spec
    assert registry.resolve("Connect") is spec


def test_duplicate_names_rejected():
    with pytest.raises(OptionConfigurationError):
        OptionRegistry([make_spec(), make_spec(long_name="count", dest="count")])


def test_duplicate_names_rejected_under_case_insensitive_rule():
    first = make_spec(
        short_name="v", long_name=None, dest="verbose", type=bool, arity=Arity.BOOLEAN
    )
    second = make_spec(
        short_name="V", long_name=None, dest="version", type=bool, arity=Arity.BOOLEAN
    )
    OptionRegistry([first, second])
    with pytest.raises(OptionConfigurationError):
        OptionRegistry([first, second], case_sensitive=False)


def test_reserved_names_rejected_under_case_insensitive_rule():
    host = make_spec(short_name="H", long_name="host", dest="host")
    assert OptionRegistry([host], reserved_names=("h", "help")).resolve("h") is None
    with pytest.raises(OptionConfigurationError):
        OptionRegistry([host], case_sensitive=False, reserved_names=("h", "help"))


def test_unique_name_requires_a_name():
    with pytest.raises(OptionConfigurationError):
        make_spec(short_name=None, long_name=None).unique_name


def test_duplicate_dest_rejected():
    with pytest.raises(OptionConfigurationError):
        OptionRegistry([make_spec(), make_spec(short_name="b", long_name="bind")])


def test_positional_dest_clash_rejected():
    with pytest.raises(OptionConfigurationError):
        OptionRegistry([make_spec()], positional=PositionalValueSpec(dest="connect"))


@pytest.mark.parametrize(
    "kwargs",
    [
        {"short_name": None, "long_name": None},
        {"short_name": "ab"},
        {"short_name": "1"},
        {"short_name": "="},
        {"long_name": "x"},
        {"long_name": "-connect"},
        {"long_name": "con=nect"},
        {"long_name": "con nect"},
        {"dest": "not-valid"},
        {"dest": ""},
        {"arity": Arity.BOOLEAN, "type": str},
        {"arity": Arity.ARRAY, "type": int},
        {"arity": Arity.SCALAR, "type": list[int]},
        {"arity": Arity.SCALAR, "type": list[int] | None},
        {"arity": Arity.DELIMITED_LIST, "type": list[int]},
        {"arity": Arity.DELIMITED_LIST, "type": list[str], "separator": "::"},
    ],
)
def test_invalid_declarations(kwargs):
    with pytest.raises(OptionConfigurationError):
        validate_option_spec(make_spec(**kwargs))


@pytest.mark.parametrize(
    "kwargs",
    [
        {},
        {"arity": Arity.BOOLEAN, "type": bool},
        {"arity": Arity.ARRAY, "type": list[int]},
        {"arity": Arity.ARRAY, "type": tuple[float, ...]},
        {"arity": Arity.DELIMITED_LIST, "type": list[str], "separator": ";"},
        {"type": int | None},
    ],
)
def test_valid_declarations(kwargs):
    validate_option_spec(make_spec(**kwargs))


@pytest.mark.parametrize("max_elements", [-2, -10])
def test_invalid_positional(max_elements):
    with pytest.raises(OptionConfigurationError):
        OptionRegistry([], positional=PositionalValueSpec(dest="files", max_elements=max_elements))


def test_mark_defined_is_one_way():
    spec = make_spec()
    registry = OptionRegistry([spec])
    assert not registry.is_defined(spec)
    registry.mark_defined(spec, 3)
    registry.mark_defined(spec, 7)
    assert registry.is_defined(spec)
    assert registry.state_of(spec).defined_position == 3


def test_each_registry_has_fresh_states():
    spec = make_spec()
    first = OptionRegistry([spec])
    first.mark_defined(spec, 0)
    second = OptionRegistry([spec])
    assert not second.is_defined(spec)


def test_apply_defaults_writes_deep_copies():
    default_tags = [1, 2]
    spec = make_spec(
        short_name="t",
        long_name="tags",
        dest="tags",
        arity=Arity.ARRAY,
        type=list[int],
        default=default_tags,
    )
    registry = OptionRegistry([spec], positional=PositionalValueSpec(dest="files"))
    target = SimpleNamespace()
    registry.apply_defaults(target)
    assert target.tags == [1, 2]
    assert target.tags is not default_tags
    assert target.files == []


def test_apply_defaults_skips_options_without_default():
    registry = OptionRegistry([make_spec()])
    target = SimpleNamespace()
    registry.apply_defaults(target)
    assert not hasattr(target, "connect")


def test_apply_defaults_into_mapping():
    registry = OptionRegistry([make_spec(default="tcp://*:5555")])
    target = {}
    registry.apply_defaults(target)
    assert target == {"connect": "tcp://*:5555"}


def test_apply_defaults_reports_unwritable_destination():
    registry = OptionRegistry([make_spec(default="tcp://*:5555")])
    with pytest.raises(OptionConfigurationError):
        registry.apply_defaults(object())


def test_add_positional_respects_maximum():
    registry = OptionRegistry([], positional=PositionalValueSpec(dest="files", max_elements=2))
    registry.apply_defaults(SimpleNamespace())
    assert registry.add_positional("a")
    assert registry.add_positional("b")
    assert not registry.add_positional("c")
    assert registry.positional_values == ["a", "b"]


def test_add_positional_zero_rejects_everything():
    registry = OptionRegistry([], positional=PositionalValueSpec(dest="files", max_elements=0))
    assert not registry.add_positional("a")


def test_add_positional_without_declaration():
    registry = OptionRegistry([])
    assert registry.positional is None
    assert not registry.add_positional("a")
