"""The ``not `` phrase marker."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from ..errors import DoubleNegationError
from ..outcome import Diagnostic, ValidationOutcome
from .assertion import Assertion
from .executor import describe_call
from .parts import NEGATION_PREFIX

logger = logging.getLogger(__name__)


def split_negation(args: Sequence[Any]) -> tuple[tuple[Any, ...], bool]:
    """Strip the negation marker from the phrase token.

    Returns the arguments with a plain phrase and whether they were negated.

    Raises
    ------
    DoubleNegationError
        If the phrase is negated twice, e.g. ``"not not to be"``.
    """
    args = tuple(args)
    if len(args) < 2 or not isinstance(args[1], str) or not args[1].startswith(NEGATION_PREFIX):
        return args, False
    token = args[1][len(NEGATION_PREFIX):]
    if token.startswith(NEGATION_PREFIX) or token == NEGATION_PREFIX.strip():
        raise DoubleNegationError(f"Phrase {args[1]!r} is negated more than once", args)
    logger.debug("Negated phrase %r", token)
    return (args[0], token, *args[2:]), True


def apply_negation(
    outcome: ValidationOutcome, assertion: Assertion, values: Sequence[Any], *, negated: bool
) -> ValidationOutcome:
    """Invert ``outcome`` when the call was negated."""
    if not negated:
        return outcome
    if not outcome.passed:
        return ValidationOutcome.ok(assertion.id)
    return ValidationOutcome.fail(
        Diagnostic(
            message=f"{describe_call(assertion, values, negated=True)}, but the assertion passed",
            assertion_id=assertion.id,
            actual=values[0],
            expected=values[1] if len(values) > 1 else None,
            negated=True,
        )
    )
