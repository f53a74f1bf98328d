"""
Optbind Option Parser

Copyright (c) 2025 rtj.dev LLC.
Licensed under the MIT License. See LICENSE file for details.
"""

import logging

from .exceptions import CursorError, OptbindError, OptionConfigurationError
from .parser import Arity, OptionParser, ParseOutcome, ParsingError, parse
from .settings import ParserSettings

logger = logging.getLogger("optbind")


__all__ = [
    "Arity",
    "CursorError",
    "OptbindError",
    "OptionConfigurationError",
    "OptionParser",
    "ParseOutcome",
    "ParserSettings",
    "ParsingError",
    "parse",
]
