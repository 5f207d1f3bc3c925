from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from phrased.outcome import ValidationOutcome


OUTCOMES_COLLECTOR: ContextVar[list[ValidationOutcome] | None] = ContextVar(
    "outcomes_collector", default=None
)


def record_outcome(outcome: ValidationOutcome) -> None:
    """Append an outcome to the active collector, if one is bound."""
    collector = OUTCOMES_COLLECTOR.get()
    if collector is not None:
        collector.append(outcome)


@contextmanager
def outcomes_collector(ctx: list[ValidationOutcome]) -> Iterator[None]:
    """Collect the outcome of every top-level check made inside the ``with`` block.

    Parameters
    ----------
    ctx : list[ValidationOutcome]
        List that receives outcomes, passing and failing, in call order.
    """
    token = OUTCOMES_COLLECTOR.set(ctx)
    try:
        yield
    finally:
        OUTCOMES_COLLECTOR.reset(token)
