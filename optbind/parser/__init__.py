"""
Optbind Option Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

from .option_arity import Arity
from .option_parser import OptionParser, parse
from .option_spec import HelpOptionSpec, OptionSpec, PositionalValueSpec
from .parser_types import BadOption, ParseOutcome, ParsingError
from .session import ParseSession

__all__ = [
    "Arity",
    "BadOption",
    "HelpOptionSpec",
    "OptionParser",
    "OptionSpec",
    "ParseOutcome",
    "ParseSession",
    "ParsingError",
    "PositionalValueSpec",
    "parse",
]
