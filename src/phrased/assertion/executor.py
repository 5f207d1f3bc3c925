"""Run assertion implementations and normalize their verdicts."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Sequence
from typing import Any

from ..errors import AssertionImplementationError, UnexpectedAsyncError, ValidationFailure
from ..formatting import render
from ..outcome import AssertionFailure, Diagnostic, ValidationOutcome
from ..schema.validators import ValidationResult, Validator
from .assertion import Assertion, ImplementationStyle
from .parts import Phrase

logger = logging.getLogger(__name__)


def describe_call(assertion: Assertion, values: Sequence[Any], *, negated: bool = False) -> str:
    """Render an assertion call, e.g. ``Expected [1] to have length 2``."""
    rendered = []
    remaining = iter(values)
    for position, part in enumerate(assertion.parts):
        if isinstance(part, Phrase):
            text = part.values[0]
            rendered.append(f"not {text}" if negated and position == 1 else text)
        else:
            rendered.append(render(next(remaining)))
    return "Expected " + " ".join(rendered)


def _generic_failure(assertion: Assertion, values: Sequence[Any], reason: str | None = None) -> ValidationOutcome:
    message = describe_call(assertion, values)
    if reason:
        message = f"{message}, but it {reason}"
    return ValidationOutcome.fail(
        Diagnostic(
            message=message,
            assertion_id=assertion.id,
            actual=values[0],
            expected=values[1] if len(values) > 1 else None,
        )
    )


def _from_failure(assertion: Assertion, failure: AssertionFailure, values: Sequence[Any]) -> ValidationOutcome:
    return ValidationOutcome.fail(
        Diagnostic(
            message=failure.message or describe_call(assertion, values),
            assertion_id=assertion.id,
            actual=failure.actual,
            expected=failure.expected,
        )
    )


def _from_raised(assertion: Assertion, exc: ValidationFailure) -> ValidationOutcome:
    """Attribute a failure raised inside an implementation to ``assertion``.

    A failure that came from another assertion (a nested ``check``) is kept
    as the single entry of ``failures``.
    """
    inner = exc.diagnostic
    if inner.assertion_id in (None, assertion.id):
        return ValidationOutcome.fail(inner.model_copy(update={"assertion_id": assertion.id}))
    return ValidationOutcome.fail(
        Diagnostic(
            message=inner.message,
            assertion_id=assertion.id,
            actual=inner.actual,
            expected=inner.expected,
            details=inner.details,
            failures=(inner,),
        )
    )


def _from_validation(assertion: Assertion, values: Sequence[Any], result: ValidationResult) -> ValidationOutcome:
    if result.success:
        return ValidationOutcome.ok(assertion.id)
    details = tuple(str(issue) for issue in result.issues)
    message = describe_call(assertion, values) + ":\n" + "\n".join(f"  - {line}" for line in details)
    return ValidationOutcome.fail(
        Diagnostic(
            message=message,
            assertion_id=assertion.id,
            actual=values[0],
            expected=values[1] if len(values) > 1 else None,
            details=details,
        )
    )


def _reject_awaitable(assertion: Assertion, result: Any) -> None:
    if inspect.isawaitable(result):
        close = getattr(result, "close", None)
        if close is not None:
            close()
        raise UnexpectedAsyncError(
            f"Assertion {assertion.id!r} returned an awaitable on the synchronous path; use check_async()"
        )


def _normalize(assertion: Assertion, values: Sequence[Any], result: Any) -> ValidationOutcome:
    if assertion.style is ImplementationStyle.VALIDATOR:
        raise AssertionImplementationError(
            f"Assertion {assertion.id!r} must return a validator, got {type(result).__name__}",
            assertion_id=assertion.id,
            result=result,
        )
    if result is None or result is True:
        return ValidationOutcome.ok(assertion.id)
    if result is False:
        return _generic_failure(assertion, values)
    if isinstance(result, AssertionFailure):
        return _from_failure(assertion, result, values)
    raise AssertionImplementationError(
        f"Assertion {assertion.id!r} returned an unsupported value of type {type(result).__name__}",
        assertion_id=assertion.id,
        result=result,
    )


def execute(assertion: Assertion, values: Sequence[Any]) -> ValidationOutcome:
    """Run ``assertion`` synchronously against coerced ``values``.

    Raises
    ------
    UnexpectedAsyncError
        If the implementation returns an awaitable.
    AssertionImplementationError
        If the implementation returns an unsupported value.
    """
    impl = assertion.impl
    if assertion.style is ImplementationStyle.PREDICATE:
        try:
            result = impl(*values)
        except ValidationFailure as exc:
            return _from_raised(assertion, exc)
        except Exception as exc:
            logger.debug("Predicate %s raised %r", assertion.id, exc)
            return _generic_failure(assertion, values, f"raised {exc!r}")
        _reject_awaitable(assertion, result)
        return ValidationOutcome.ok(assertion.id) if result is True else _generic_failure(assertion, values)

    if isinstance(impl, Validator):
        result = impl
    else:
        try:
            result = impl(*values)
        except ValidationFailure as exc:
            return _from_raised(assertion, exc)
        _reject_awaitable(assertion, result)
    if isinstance(result, Validator):
        return _from_validation(assertion, values, result.validate(values[0]))
    return _normalize(assertion, values, result)


async def execute_async(assertion: Assertion, values: Sequence[Any]) -> ValidationOutcome:
    """Run ``assertion`` on the asynchronous path, awaiting awaitable results."""
    impl = assertion.impl
    if assertion.style is ImplementationStyle.PREDICATE:
        try:
            result = impl(*values)
            if inspect.isawaitable(result):
                result = await result
        except ValidationFailure as exc:
            return _from_raised(assertion, exc)
        except Exception as exc:
            logger.debug("Predicate %s raised %r", assertion.id, exc)
            return _generic_failure(assertion, values, f"raised {exc!r}")
        return ValidationOutcome.ok(assertion.id) if result is True else _generic_failure(assertion, values)

    if isinstance(impl, Validator):
        result = impl
    else:
        try:
            result = impl(*values)
            if inspect.isawaitable(result):
                result = await result
        except ValidationFailure as exc:
            return _from_raised(assertion, exc)
    if isinstance(result, Validator):
        return _from_validation(assertion, values, await result.validate_async(values[0]))
    return _normalize(assertion, values, result)
