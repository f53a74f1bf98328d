# Optbind Option Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Whole-parse validation, run once after every token has been scanned.

Two independent rules are enforced over the registry's option states:

- Required rule: a required option that was never defined is reported with
  `violates_required`.
- Mutual exclusivity rule (only when enabled): defined options are grouped by
  their exclusive set, compared case-insensitively. A set with more than one
  defined member is reported once, naming the member that appeared first in
  the token stream.
"""
from __future__ import annotations

from optbind.logger import logger
from optbind.parser.parser_types import OptionState, ParsingError
from optbind.parser.registry import OptionRegistry


def enforce_required_rule(registry: OptionRegistry) -> list[ParsingError]:
    errors = []
    for state in registry.states():
        if state.spec.required and not state.defined:
            errors.append(ParsingError.required_violation(state.spec))
    return errors


def enforce_mutually_exclusive_rule(registry: OptionRegistry) -> list[ParsingError]:
    groups: dict[str, list[OptionState]] = {}
    for state in registry.states():
        set_name = state.spec.mutually_exclusive_set
        if state.defined and set_name is not None:
            groups.setdefault(set_name.casefold(), []).append(state)

    errors = []
    for set_name, members in groups.items():
        if len(members) < 2:
            continue
        first = min(
            members,
            key=lambda state: (
                state.defined_order if state.defined_order is not None else -1
            ),
        )
        logger.debug(
            "Mutually exclusive set '%s' has %d members, reporting '%s'",
            set_name,
            len(members),
            first.spec.display_name,
        )
        errors.append(ParsingError.exclusivity_violation(first.spec))
    return errors


def enforce_rules(
    registry: OptionRegistry, enforce_mutual_exclusivity: bool = False
) -> list[ParsingError]:
    """Run the required rule and, when enabled, the mutual exclusivity rule."""
    errors = enforce_required_rule(registry)
    if enforce_mutual_exclusivity:
        errors.extend(enforce_mutually_exclusive_rule(registry))
    return errors
