"""Outcome and diagnostic models produced by assertion execution."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

CONJUNCTION_ID = "AND"
FAIL_ID = "FAIL"


class Diagnostic(BaseModel):
    """Description of a failed assertion.

    Attributes
    ----------
    message : str
        Human-readable explanation.
    assertion_id : str or None
        Id of the assertion that failed.
    actual : Any
        Observed value, when the assertion reports one.
    expected : Any
        Expected value, when the assertion reports one.
    negated : bool
        True when the failure comes from a negated assertion that passed.
    details : tuple[str, ...]
        Individual issue lines, e.g. per-path validator issues.
    failures : tuple[Diagnostic, ...]
        Sub-diagnostics of a failed conjunction.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    message: str
    assertion_id: str | None = None
    actual: Any = None
    expected: Any = None
    negated: bool = False
    details: tuple[str, ...] = ()
    failures: tuple[Diagnostic, ...] = ()


class AssertionFailure(BaseModel):
    """Failure description returned by failure-describing implementations.

    Any field left as ``None`` is filled by the executor with a generic value.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    message: str | None = None
    actual: Any = None
    expected: Any = None


class ValidationOutcome(BaseModel):
    """Normalized pass/fail result of one assertion (or conjunction)."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    passed: bool
    diagnostic: Diagnostic | None = None
    assertion_id: str | None = Field(default=None)

    def __bool__(self) -> bool:
        return self.passed

    @classmethod
    def ok(cls, assertion_id: str | None = None) -> ValidationOutcome:
        return cls(passed=True, assertion_id=assertion_id)

    @classmethod
    def fail(cls, diagnostic: Diagnostic) -> ValidationOutcome:
        return cls(passed=False, diagnostic=diagnostic, assertion_id=diagnostic.assertion_id)


def conjoin(outcomes: Sequence[ValidationOutcome]) -> ValidationOutcome:
    """Combine the outcomes of conjoined assertions.

    The result passes only if every outcome passes. A single failure is
    returned as-is; several failures are folded into one diagnostic that
    lists each failing assertion and its reason.
    """
    if not outcomes:
        raise ValueError("conjoin() requires at least one outcome")
    failed = [outcome.diagnostic for outcome in outcomes if not outcome.passed]
    if not failed:
        return ValidationOutcome.ok(outcomes[0].assertion_id if len(outcomes) == 1 else CONJUNCTION_ID)
    if len(failed) == 1:
        return ValidationOutcome.fail(failed[0])

    lines = [f"{len(failed)} of {len(outcomes)} conjoined assertions failed:"]
    for index, diagnostic in enumerate(failed, start=1):
        lines.append(f"  {index}) [{diagnostic.assertion_id}] {diagnostic.message}")
    return ValidationOutcome.fail(
        Diagnostic(
            message="\n".join(lines),
            assertion_id=CONJUNCTION_ID,
            failures=tuple(failed),
        )
    )
