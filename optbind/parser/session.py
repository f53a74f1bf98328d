# Optbind Option Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Defines `ParseSession`, the state machine that drives one parse.

A session moves through three phases:

    SCANNING   → every token is classified and dispatched to a strategy,
                 or routed to the positional list when it is a plain value.
    VALIDATING → the required and mutual exclusivity rules run over the
                 option states collected while scanning.
    DONE       → the `ParseOutcome` is built.

Failures never stop the scan. Each failing token adds its error and scanning
resumes at the next unconsumed token, so one parse reports every error it can
discover. Per-token errors come first in the error list, validation errors
after them.

A session owns its registry (and therefore its defined flags) and the
destination object for the duration of `run()`. Sessions are not reusable.
"""
from __future__ import annotations

from typing import Any, Sequence

from optbind.exceptions import OptbindError
from optbind.logger import logger
from optbind.parser.binder import ValueBinder
from optbind.parser.cursor import ArgumentCursor
from optbind.parser.option_spec import OptionSpec, PositionalValueSpec
from optbind.parser.parser_types import (
    ParseOutcome,
    ParserState,
    ParsingError,
    SessionPhase,
)
from optbind.parser.registry import OptionRegistry
from optbind.parser.strategies import ArgumentStrategy
from optbind.parser.validator import enforce_rules
from optbind.settings import ParserSettings


class ParseSession:
    """Runs one parse of a token sequence into a destination object."""

    def __init__(
        self,
        specs: Sequence[OptionSpec],
        positional: PositionalValueSpec | None = None,
        settings: ParserSettings | None = None,
        binder: ValueBinder | None = None,
        reserved_names: Sequence[str] = (),
    ) -> None:
        self.settings: ParserSettings = settings or ParserSettings()
        self.registry: OptionRegistry = OptionRegistry(
            specs,
            positional,
            case_sensitive=self.settings.case_sensitive,
            reserved_names=reserved_names,
        )
        self.binder: ValueBinder = binder or ValueBinder()
        self.errors: list[ParsingError] = []
        self.phase: SessionPhase = SessionPhase.SCANNING

    def run(self, tokens: Sequence[str], destination: Any) -> ParseOutcome:
        """
        Parse `tokens` into `destination`.

        Args:
            tokens (Sequence[str]): Raw command-line tokens, without the program name.
            destination (Any): Object or mutable mapping that receives the values.

        Returns:
            ParseOutcome: Success flag, the accumulated errors and the destination.
        """
        if self.phase is not SessionPhase.SCANNING:
            raise OptbindError("A parse session can only run once")

        self.registry.apply_defaults(destination)
        self._scan(ArgumentCursor(tokens), destination)

        self.phase = SessionPhase.VALIDATING
        self.errors.extend(
            enforce_rules(self.registry, self.settings.enforce_mutual_exclusivity)
        )

        self.phase = SessionPhase.DONE
        if self.errors:
            logger.debug("Parse finished with %d error(s)", len(self.errors))
        return ParseOutcome(
            success=not self.errors,
            errors=tuple(self.errors),
            destination=destination,
        )

    def _scan(self, cursor: ArgumentCursor, destination: Any) -> None:
        while cursor.advance():
            token = cursor.current
            if not token:
                continue

            strategy = ArgumentStrategy.create(
                token, self.settings.ignore_unknown_arguments, self.binder
            )
            if strategy is None:
                self._handle_value(token)
                continue

            state = strategy.parse(cursor, self.registry, destination)
            if state & ParserState.FAILURE:
                self.errors.extend(strategy.errors)
                continue

            if state & ParserState.MOVE_ON_NEXT:
                cursor.advance()

    def _handle_value(self, token: str) -> None:
        if self.registry.positional is None:
            logger.debug("Ignoring value '%s': no positional values are declared", token)
            return
        if not self.registry.add_positional(token):
            self.errors.append(ParsingError(excess_value=True, token=token))
