"""Resolve an argument tuple to the single best-matching assertion."""

from __future__ import annotations

import difflib
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from ..errors import AmbiguousAssertionError, UnknownAssertionError
from ..formatting import render
from .assertion import Assertion
from .catalog import Catalog
from .parts import Phrase

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class MatchCandidate:
    """An assertion whose phrases match the argument tuple.

    Attributes
    ----------
    assertion : Assertion
        The candidate assertion.
    score : int
        Number of non-wildcard parts; higher is more specific.
    values : tuple
        Coerced subject and parameters, phrases omitted.
    mismatch : bool
        True when some slot rejected its argument.
    reason : str or None
        Why the mismatching slot rejected its argument.
    """

    assertion: Assertion
    score: int
    values: tuple[Any, ...]
    mismatch: bool = False
    reason: str | None = None


def match_assertion(assertion: Assertion, args: Sequence[Any]) -> MatchCandidate | None:
    """Match ``args`` (subject first) against one assertion.

    Returns ``None`` when the arity or any phrase differs.
    """
    if len(args) != len(assertion.parts):
        return None
    if not all(part.matches(arg) for part, arg in zip(assertion.parts, args) if isinstance(part, Phrase)):
        return None

    values = []
    for position, (part, arg) in enumerate(zip(assertion.parts, args)):
        if isinstance(part, Phrase):
            continue
        if part.wildcard:
            values.append(arg)
            continue
        result = part.validator.validate(arg)
        if not result.success:
            which = "subject" if position == 0 else f"argument {position}"
            reason = f"{which} {render(arg)} is not {part.validator.description}"
            return MatchCandidate(assertion, assertion.specificity, tuple(args), mismatch=True, reason=reason)
        values.append(result.data)
    return MatchCandidate(assertion, assertion.specificity, tuple(values))


def resolve(catalog: Catalog, args: Sequence[Any], *, is_async: bool) -> MatchCandidate:
    """Find the unique most specific assertion matching ``args``.

    Raises
    ------
    UnknownAssertionError
        If no assertion matches.
    AmbiguousAssertionError
        If several assertions match with the same specificity.
    """
    args = tuple(args)
    token = args[1] if len(args) > 1 else None
    matches: list[MatchCandidate] = []
    near_misses: list[MatchCandidate] = []
    for assertion in catalog.candidates(token, is_async=is_async):
        candidate = match_assertion(assertion, args)
        if candidate is None:
            continue
        (near_misses if candidate.mismatch else matches).append(candidate)

    if not matches:
        raise _unknown(catalog, args, token, near_misses, is_async=is_async)

    best = max(candidate.score for candidate in matches)
    winners = [candidate for candidate in matches if candidate.score == best]
    if len(winners) > 1:
        ids = [candidate.assertion.id for candidate in winners]
        raise AmbiguousAssertionError(
            f"Phrase {token!r} matches several assertions equally well: {', '.join(ids)}",
            args,
            candidates=ids,
        )
    winner = winners[0]
    logger.debug("Resolved %r to %s (score %d)", token, winner.assertion.id, winner.score)
    return winner


def _accepted_async(catalog: Catalog, args: tuple[Any, ...], token: Any) -> bool:
    """True when some asynchronous assertion would accept ``args`` as given."""
    for assertion in catalog.candidates(token, is_async=True):
        candidate = match_assertion(assertion, args)
        if candidate is not None and not candidate.mismatch:
            return True
    return False


def _unknown(
    catalog: Catalog,
    args: tuple[Any, ...],
    token: Any,
    near_misses: list[MatchCandidate],
    *,
    is_async: bool,
) -> UnknownAssertionError:
    lines = [f"No assertion matches {render(token)} for arguments ({', '.join(render(arg) for arg in args)})"]
    suggestion = None
    if isinstance(token, str):
        for candidate in near_misses:
            lines.append(f"  - {candidate.assertion}: {candidate.reason}")
        if not is_async and _accepted_async(catalog, args, token):
            lines.append(f"  {token!r} is an asynchronous assertion; use check_async()")
        elif not near_misses:
            if not is_async and catalog.has_phrase(token, is_async=True):
                lines.append(f"  {token!r} only exists as an asynchronous assertion, which does not accept these arguments")
            elif catalog.has_phrase(token, is_async=is_async):
                lines.append(f"  {token!r} takes a different number of arguments")
            else:
                close = difflib.get_close_matches(token, catalog.phrases(is_async=is_async), n=1, cutoff=0.0)
                if close:
                    suggestion = close[0]
                    lines.append(f"  Did you mean {suggestion!r}?")
    else:
        lines.append("  The second argument must be a phrase string")
    return UnknownAssertionError(
        "\n".join(lines),
        args,
        suggestion=suggestion,
        near_misses=[candidate.reason for candidate in near_misses],
    )
