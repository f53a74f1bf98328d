# Optbind Option Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines all custom exception classes used by optbind.

Only programmer mistakes are raised as exceptions. Problems with the tokens a
user typed on the command line are collected as `ParsingError` records on the
`ParseOutcome` instead, so a single parse reports every error it can find.

Exception Hierarchy:
- OptbindError
    ├── OptionConfigurationError
    └── CursorError
"""


class OptbindError(Exception):
    """Base exception for optbind."""


class OptionConfigurationError(OptbindError):
    """Exception raised when an option or positional declaration is malformed."""


class CursorError(OptbindError):
    """Exception raised when an argument cursor is moved in an unsupported way."""
