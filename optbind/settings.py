# Optbind Option Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ParserSettings`, the per-parse switches accepted by
`OptionParser.parse()`.

Settings are immutable. A parser keeps a default instance and each call to
`parse()` may pass its own.

Example:
    settings = ParserSettings(case_sensitive=False, enforce_mutual_exclusivity=True)
    outcome = parser.parse(["--CONNECT", "tcp://*:5555"], options, settings=settings)
"""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from rich.console import Console


class ParserSettings(BaseModel):
    """
    Switches that change how a token stream is parsed.

    Attributes:
        case_sensitive (bool): Compare option names case-sensitively. Defaults to True.
        enforce_mutual_exclusivity (bool): Report options from the same mutually
            exclusive set. Defaults to False.
        ignore_unknown_arguments (bool): Skip unknown options instead of reporting them.
        help_writer (Console | None): Where help is printed when the help option is
            requested or a parse fails. Nothing is printed when None.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    case_sensitive: bool = True
    enforce_mutual_exclusivity: bool = False
    ignore_unknown_arguments: bool = False
    help_writer: Console | None = None
