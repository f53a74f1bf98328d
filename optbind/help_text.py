# Optbind Option Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Help screen rendering for `OptionParser`.

`HelpText` collects a heading (`program version`), a copyright line, free text
shown before and after the options, and one entry per declared option:

    nd-req-ping 1.0
    Copyright (c) 2025 rtj.dev LLC

    ERROR(S):
      -c/--connect required option is missing.

      -c, --connect    Required. Connection socket endpoint to ping.

      --help           Display this help screen.

Option descriptions are word-wrapped into a column next to the option names.
Required options get the required word (default "Required.") in front of
their description.

`render_parsing_errors()` turns `ParsingError` records into one sentence per
error. The words come from a `SentenceBuilder`, which holds the English texts
and can be replaced as a whole.

`HelpText.auto_build()` assembles the complete screen for a parser, including
the errors section for a failed `ParseOutcome`. It is what
`OptionParser.render_help()` prints.
"""
from __future__ import annotations

import textwrap
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterable, Sequence

from rich.console import Console

from optbind.parser.option_spec import HelpOptionSpec, OptionSpec, PositionalValueSpec
from optbind.parser.parser_types import ParseOutcome, ParsingError

if TYPE_CHECKING:
    from optbind.parser.option_parser import OptionParser

DEFAULT_MAXIMUM_WIDTH = 80
DEFAULT_REQUIRED_WORD = "Required."
MINIMUM_DESCRIPTION_WIDTH = 20


@dataclass(frozen=True)
class SentenceBuilder:
    """Words and sentences used in help screens and error lines."""

    option_word: str = "option"
    and_word: str = "and"
    required_option_missing_text: str = "required option is missing"
    violates_format_text: str = "violates format"
    violates_mutual_exclusiveness_text: str = "violates mutual exclusiveness"
    unknown_option_text: str = "unknown option"
    requires_value_text: str = "requires a value"
    value_word: str = "value"
    excess_value_text: str = "exceeds the allowed number of values"
    errors_heading_text: str = "ERROR(S):"


def heading_text(program: str | None, version: str | None) -> str:
    """Return `program version`, or whichever part is present."""
    return " ".join(part for part in (program, version) if part)


def copyright_text(holder: str, year: int | str | None = None) -> str:
    """Return a copyright line such as `Copyright (c) 2025 rtj.dev LLC`."""
    if year is None:
        return f"Copyright (c) {holder}"
    return f"Copyright (c) {year} {holder}"


class HelpText:
    """
    Models a help screen and renders it as plain text.

    Attributes:
        heading (str): First line, usually `program version`.
        copyright (str): Line under the heading.
        sentence_builder (SentenceBuilder): Words used for error lines.
        maximum_width (int): Width the text is wrapped to.
        add_dashes (bool): Show option names as `-c, --connect` instead of `c, connect`.
        additional_new_line_after_option (bool): Separate option entries with a blank line.
    """

    def __init__(
        self,
        heading: str = "",
        copyright: str = "",
        sentence_builder: SentenceBuilder | None = None,
        maximum_width: int = DEFAULT_MAXIMUM_WIDTH,
        add_dashes: bool = True,
        additional_new_line_after_option: bool = False,
    ) -> None:
        self.heading: str = heading
        self.copyright: str = copyright
        self.sentence_builder: SentenceBuilder = sentence_builder or SentenceBuilder()
        self.maximum_width: int = maximum_width
        self.add_dashes: bool = add_dashes
        self.additional_new_line_after_option: bool = additional_new_line_after_option
        self._pre_options_lines: list[str] = []
        self._options_lines: list[str] = []
        self._post_options_lines: list[str] = []

    def _wrap(self, value: str) -> list[str]:
        if not value:
            return [""]
        return textwrap.wrap(value, width=self.maximum_width) or [""]

    def add_pre_options_line(self, value: str) -> None:
        """Add text shown between the heading and the options, wrapped to width."""
        self._pre_options_lines.extend(self._wrap(value))

    def add_post_options_line(self, value: str) -> None:
        """Add text shown after the options, wrapped to width."""
        self._post_options_lines.extend(self._wrap(value))

    def _option_names(self, short_name: str | None, long_name: str | None) -> str:
        short_prefix, long_prefix = ("-", "--") if self.add_dashes else ("", "")
        names = []
        if short_name:
            names.append(f"{short_prefix}{short_name}")
        if long_name:
            names.append(f"{long_prefix}{long_name}")
        return ", ".join(names)

    def add_options(
        self,
        specs: Iterable[OptionSpec],
        required_word: str = DEFAULT_REQUIRED_WORD,
        help_option: HelpOptionSpec | None = None,
        positional: PositionalValueSpec | None = None,
    ) -> None:
        """
        Render one entry per option, replacing any earlier options section.

        Args:
            specs (Iterable[OptionSpec]): Options in declaration order.
            required_word (str): Prefix for the descriptions of required options.
            help_option (HelpOptionSpec | None): Listed after the options.
            positional (PositionalValueSpec | None): Listed first, as `dest...`.
        """
        entries: list[tuple[str, str]] = []
        if positional is not None:
            entries.append((f"{positional.dest}...", positional.help))
        for spec in specs:
            description = spec.help
            if spec.required:
                description = f"{required_word} {description}".strip()
            entries.append((self._option_names(spec.short_name, spec.long_name), description))
        if help_option is not None:
            entries.append(
                (
                    self._option_names(help_option.short_name, help_option.long_name),
                    help_option.help,
                )
            )

        self._options_lines = []
        if not entries:
            return
        max_length = max(len(names) for names, _ in entries)
        description_width = max(
            self.maximum_width - (max_length + 6), MINIMUM_DESCRIPTION_WIDTH
        )
        indent = " " * (max_length + 6)
        for names, description in entries:
            wrapped = textwrap.wrap(description, width=description_width) or [""]
            self._options_lines.append(
                f"  {names.ljust(max_length)}    {wrapped[0]}".rstrip()
            )
            self._options_lines.extend(f"{indent}{line}" for line in wrapped[1:])
            if self.additional_new_line_after_option:
                self._options_lines.append("")

    def render_error_line(self, error: ParsingError) -> str:
        """Return the sentence describing a single `ParsingError`."""
        words = self.sentence_builder
        subject = str(error.bad_option)
        if error.excess_value:
            return f"{words.value_word} '{error.token}' {words.excess_value_text}."
        if error.unknown_option:
            return f"{subject} {words.unknown_option_text}."
        if error.missing_value:
            return f"{subject} {words.option_word} {words.requires_value_text}."

        parts = [subject]
        if error.violates_required:
            parts.append(words.required_option_missing_text)
        else:
            parts.append(words.option_word)
        if error.violates_format:
            parts.append(words.violates_format_text)
        if error.violates_mutual_exclusiveness:
            if error.violates_format or error.violates_required:
                parts.append(words.and_word)
            parts.append(words.violates_mutual_exclusiveness_text)
        return " ".join(parts) + "."

    def render_parsing_errors(self, errors: Sequence[ParsingError], indent: int = 2) -> str:
        """Return one indented line per error, or an empty string."""
        return "\n".join(f"{' ' * indent}{self.render_error_line(error)}" for error in errors)

    @classmethod
    def auto_build(
        cls, parser: OptionParser, outcome: ParseOutcome | None = None
    ) -> HelpText:
        """
        Build the full help screen for `parser`.

        When `outcome` carries errors, an `ERROR(S):` section listing them is
        placed before the options.
        """
        auto = cls(
            heading=heading_text(parser.program, parser.version),
            copyright=parser.copyright,
            additional_new_line_after_option=True,
        )
        if outcome is not None and outcome.errors:
            auto._pre_options_lines.append("")
            auto._pre_options_lines.append(auto.sentence_builder.errors_heading_text)
            auto._pre_options_lines.extend(
                auto.render_parsing_errors(outcome.errors).splitlines()
            )
        if parser.help_text:
            auto.add_pre_options_line(parser.help_text)
        auto.add_options(
            parser.specs, help_option=parser.help_option, positional=parser.positional
        )
        if parser.help_epilog:
            auto.add_post_options_line(parser.help_epilog)
        return auto

    def __str__(self) -> str:
        sections = [self.heading]
        if self.copyright:
            sections.append(self.copyright)
        text = "\n".join(section for section in sections if section)
        if self._pre_options_lines:
            text += "\n" + "\n".join(self._pre_options_lines)
        options = "\n".join(self._options_lines).rstrip("\n")
        if options:
            text += "\n\n" + options
        if self._post_options_lines:
            text += "\n\n" + "\n".join(self._post_options_lines)
        return text.lstrip("\n")

    def print(self, console: Console) -> None:
        """Print the help screen without rich markup or highlighting."""
        console.print(
            str(self), markup=False, highlight=False, emoji=False, soft_wrap=True
        )
