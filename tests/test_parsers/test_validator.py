from types import SimpleNamespace

import pytest

from optbind.parser import OptionParser, ParsingError
from optbind.parser.parser_types import BadOption
from optbind.settings import ParserSettings

EXCLUSIVE = ParserSettings(enforce_mutual_exclusivity=True)


def build_parser() -> OptionParser:
    parser = OptionParser()
    parser.add_option("-c", "--connect", required=True)
    parser.add_option("-b", "--bind", mutually_exclusive_set="endpoint")
    parser.add_option("-s", "--socket", mutually_exclusive_set="Endpoint")
    parser.add_option("-q", "--quiet", type=bool, mutually_exclusive_set="verbosity")
    parser.add_option("-v", "--verbose", type=bool, mutually_exclusive_set="verbosity")
    parser.add_option("-d", "--debug", type=bool, mutually_exclusive_set="verbosity")
    return parser


def test_required_option_missing():
    outcome = build_parser().parse([], SimpleNamespace())
    assert not outcome.success
    assert outcome.errors == (
        ParsingError(BadOption("c", "connect"), violates_required=True),
    )


def test_required_option_present():
    assert build_parser().parse(["-c", "tcp://*:5555"], SimpleNamespace())


def test_required_option_with_bad_value_is_not_reported_missing():
    parser = OptionParser()
    parser.add_option("-n", "--count", type=int, required=True)
    outcome = parser.parse(["--count", "many"], SimpleNamespace())
    assert len(outcome.errors) == 1
    assert outcome.errors[0].violates_format


def test_mutual_exclusivity_disabled_by_default():
    assert build_parser().parse(["-c", "x", "-q", "-v"], SimpleNamespace())


def test_mutual_exclusivity_reports_first_seen_member():
    options = SimpleNamespace()
    outcome = build_parser().parse(["-c", "x", "-v", "-q"], options, EXCLUSIVE)
    assert outcome.errors == (
        ParsingError(BadOption("v", "verbose"), violates_mutual_exclusiveness=True),
    )
    assert options.verbose is True
    assert options.quiet is True


def test_mutual_exclusivity_one_error_per_set():
    outcome = build_parser().parse(["-c", "x", "-d", "-q", "-v"], SimpleNamespace(), EXCLUSIVE)
    assert len(outcome.errors) == 1
    assert outcome.errors[0].bad_option == BadOption("d", "debug")


def test_mutual_exclusivity_set_names_ignore_case():
    outcome = build_parser().parse(
        ["-c", "x", "--socket", "s", "--bind", "b"], SimpleNamespace(), EXCLUSIVE
    )
    assert outcome.errors == (
        ParsingError(BadOption("s", "socket"), violates_mutual_exclusiveness=True),
    )


def test_mutual_exclusivity_reports_every_conflicting_set():
    outcome = build_parser().parse(
        ["-c", "x", "-b", "b", "-q", "-s", "s", "-v"], SimpleNamespace(), EXCLUSIVE
    )
    assert [error.bad_option.long_name for error in outcome.errors] == ["bind", "quiet"]


def test_single_member_of_a_set_is_fine():
    assert build_parser().parse(["-c", "x", "-b", "b", "-q"], SimpleNamespace(), EXCLUSIVE)


def test_required_errors_come_before_exclusivity_errors():
    outcome = build_parser().parse(["-q", "-v"], SimpleNamespace(), EXCLUSIVE)
    assert outcome.errors == (
        ParsingError(BadOption("c", "connect"), violates_required=True),
        ParsingError(BadOption("q", "quiet"), violates_mutual_exclusiveness=True),
    )


def test_per_token_errors_come_before_validation_errors():
    outcome = build_parser().parse(["--unknown", "-q", "-v"], SimpleNamespace(), EXCLUSIVE)
    assert [error.unknown_option for error in outcome.errors] == [True, False, False]


def test_merged_group_members_conflict():
    outcome = build_parser().parse(["-c", "x", "-vq"], SimpleNamespace(), EXCLUSIVE)
    assert outcome.errors == (
        ParsingError(BadOption("v", "verbose"), violates_mutual_exclusiveness=True),
    )


@pytest.mark.parametrize("set_name", ["", "Default"])
def test_empty_set_name_means_default(set_name):
    parser = OptionParser()
    parser.add_option("-x", type=bool, mutually_exclusive_set="")
    parser.add_option("-y", type=bool, mutually_exclusive_set=set_name)
    outcome = parser.parse(["-x", "-y"], SimpleNamespace(), EXCLUSIVE)
    assert outcome.errors == (
        ParsingError(BadOption(short_name="x"), violates_mutual_exclusiveness=True),
    )
