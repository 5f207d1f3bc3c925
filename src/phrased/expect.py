"""The assertion facade: dispatch, conjunction, execution and embedding."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from itertools import combinations
from typing import Any, NoReturn

from .assertion.catalog import Catalog
from .assertion.executor import execute, execute_async
from .assertion.matcher import MatchCandidate, resolve
from .assertion.negation import apply_negation, split_negation
from .context import record_outcome
from .embed import EmbeddedAssertion
from .errors import UnknownAssertionError, ValidationFailure
from .outcome import FAIL_ID, Diagnostic, ValidationOutcome, conjoin

logger = logging.getLogger(__name__)

CONJUNCTION_TOKEN = "and"
# Above this many "and" tokens only the full split and no split are tried.
MAX_REJOIN_TOKENS = 8


@dataclass(frozen=True, slots=True)
class Step:
    """One resolved segment of a (possibly conjoined) call."""

    candidate: MatchCandidate
    negated: bool


def _split_choices(positions: list[int]) -> Iterator[tuple[int, ...]]:
    if len(positions) > MAX_REJOIN_TOKENS:
        yield tuple(positions)
        yield ()
        return
    for size in range(len(positions), -1, -1):
        yield from combinations(positions, size)


def _segments(args: tuple[Any, ...], splits: tuple[int, ...]) -> list[tuple[Any, ...]]:
    subject = args[0]
    bounds = (*splits, len(args))
    segments = [args[: bounds[0]]]
    for start, end in zip(bounds, bounds[1:]):
        segments.append((subject, *args[start + 1 : end]))
    return segments


class Expect:
    """Assertion entry points bound to one immutable catalog.

    Parameters
    ----------
    catalog : Catalog or iterable of Assertion, optional
        Assertions available to this facade.
    """

    def __init__(self, catalog: Catalog | Sequence[Any] = ()) -> None:
        self._catalog = catalog if isinstance(catalog, Catalog) else Catalog(catalog)

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    def register(self, *assertions: Any) -> Expect:
        """Return a new facade whose catalog also holds ``assertions``.

        Raises
        ------
        DuplicateAssertionError
            If an id or phrase collides with an existing assertion.
        """
        return Expect(self._catalog.compose(*assertions))

    def _resolve(self, segment: tuple[Any, ...], is_async: bool) -> MatchCandidate:
        if not is_async:
            return resolve(self._catalog, segment, is_async=False)
        try:
            return resolve(self._catalog, segment, is_async=True)
        except UnknownAssertionError:
            token = segment[1] if len(segment) > 1 else None
            if not self._catalog.has_phrase(token, is_async=False):
                raise
        return resolve(self._catalog, segment, is_async=False)

    def _step(self, segment: tuple[Any, ...], is_async: bool) -> Step:
        segment, negated = split_negation(segment)
        return Step(self._resolve(segment, is_async), negated)

    def plan(self, args: Sequence[Any], *, is_async: bool) -> list[Step]:
        """Resolve every segment of a call before anything executes.

        Calls containing ``"and"`` tokens are split into segments sharing the
        subject. When a split leaves some segment unresolvable, fewer splits
        are tried (treating the remaining ``"and"`` tokens as ordinary
        arguments) before the first dispatch error is raised.
        """
        args = tuple(args)
        if len(args) < 2:
            raise UnknownAssertionError("An assertion needs a subject and a phrase", args)
        positions = [
            index
            for index, token in enumerate(args)
            if index >= 2 and isinstance(token, str) and token == CONJUNCTION_TOKEN
        ]
        if not positions:
            return [self._step(args, is_async)]

        first_error: UnknownAssertionError | None = None
        for splits in _split_choices(positions):
            try:
                steps = [self._step(segment, is_async) for segment in _segments(args, splits)]
            except UnknownAssertionError as exc:
                if first_error is None:
                    first_error = exc
                continue
            logger.debug("Split conjunction into %d segment(s)", len(steps))
            return steps
        raise first_error

    def evaluate(self, subject: Any, *args: Any) -> ValidationOutcome:
        """Run an assertion and return its outcome instead of raising on failure.

        Dispatch errors and implementation errors still raise.
        """
        outcomes = []
        for step in self.plan((subject, *args), is_async=False):
            assertion, values = step.candidate.assertion, step.candidate.values
            outcome = execute(assertion, values)
            outcomes.append(apply_negation(outcome, assertion, values, negated=step.negated))
        return conjoin(outcomes)

    async def evaluate_async(self, subject: Any, *args: Any) -> ValidationOutcome:
        """Asynchronous counterpart of :meth:`evaluate`."""
        outcomes = []
        for step in self.plan((subject, *args), is_async=True):
            assertion, values = step.candidate.assertion, step.candidate.values
            outcome = await execute_async(assertion, values)
            outcomes.append(apply_negation(outcome, assertion, values, negated=step.negated))
        return conjoin(outcomes)

    def check(self, subject: Any, *args: Any) -> None:
        """Assert synchronously.

        Parameters
        ----------
        subject : Any
            The value under test.
        *args : Any
            Phrase (optionally prefixed with ``"not "``) and parameters;
            several assertions may be joined with ``"and"``.

        Raises
        ------
        ValidationFailure
            If the assertion fails.
        DispatchError
            If the arguments do not resolve to exactly one assertion.
        """
        outcome = self.evaluate(subject, *args)
        record_outcome(outcome)
        if not outcome.passed:
            raise ValidationFailure.from_outcome(outcome)

    async def check_async(self, subject: Any, *args: Any) -> None:
        """Assert, awaiting asynchronous assertions; see :meth:`check`.

        Phrases resolve against the asynchronous assertions first, then the
        synchronous ones, so templates may hold ``embed_async`` placeholders.
        """
        outcome = await self.evaluate_async(subject, *args)
        record_outcome(outcome)
        if not outcome.passed:
            raise ValidationFailure.from_outcome(outcome)

    def embed(self, *args: Any) -> EmbeddedAssertion:
        """Create a placeholder that runs ``(value, *args)`` inside a template."""
        return EmbeddedAssertion(self, args)

    def embed_async(self, *args: Any) -> EmbeddedAssertion:
        """Create a placeholder for an asynchronous assertion; only valid under check_async()."""
        return EmbeddedAssertion(self, args, is_async=True)

    def fail(self, reason: str = "") -> NoReturn:
        """Fail unconditionally."""
        raise ValidationFailure(diagnostic=Diagnostic(message=reason or "Explicit failure", assertion_id=FAIL_ID))

    def __repr__(self) -> str:
        return f"Expect({self._catalog!r})"
