"""Assertions comparing the subject with one or more parameters."""

import inspect
import math
import re

from ..assertion import ImplementationStyle, create_assertion
from ..assertion.slots import (
    ANY,
    CALLABLE,
    CLASS,
    EXCEPTION,
    NON_NEGATIVE_INTEGER,
    NUMBER,
    SEQUENCE,
    SIZED,
    STRING,
    STRING_OR_PATTERN,
)
from ..formatting import render
from ..outcome import AssertionFailure
from ._util import diff, exhaustive_validator, match_error, satisfy_validator, shape_validator, trap
from .sync_basic import is_nan


def _class_name(cls):
    if isinstance(cls, tuple):
        return " or ".join(item.__name__ for item in cls)
    return cls.__name__


def instance_of(subject, cls):
    if isinstance(subject, cls):
        return None
    return AssertionFailure(
        message=f"Expected {render(subject)} to be an instance of {_class_name(cls)}",
        actual=type(subject).__name__,
        expected=_class_name(cls),
    )


def identical(subject, expected):
    if subject is expected or (is_nan(subject) and is_nan(expected)):
        return None
    return AssertionFailure(
        message=f"Expected {render(subject)} to be {render(expected)}",
        actual=subject,
        expected=expected,
    )


def equal(subject, expected):
    if subject == expected or (is_nan(subject) and is_nan(expected)):
        return None
    message = f"Expected {render(subject)} to equal {render(expected)}"
    if not isinstance(subject, (str, int, float)) or not isinstance(expected, (str, int, float)):
        message = f"{message}\n{diff(subject, expected)}"
    return AssertionFailure(message=message, actual=subject, expected=expected)


def has_length(subject, expected):
    actual = len(subject)
    if actual == expected:
        return None
    return AssertionFailure(
        message=f"Expected {render(subject)} to have length {expected}, but it has length {actual}",
        actual=actual,
        expected=expected,
    )


def _compare(symbol, test):
    def impl(subject, other):
        if test(subject, other):
            return None
        return AssertionFailure(
            message=f"Expected {render(subject)} {symbol} {render(other)}",
            actual=subject,
            expected=other,
        )

    return impl


def within(subject, low, high):
    if low <= subject <= high:
        return None
    return AssertionFailure(
        message=f"Expected {render(subject)} to be within [{render(low)}, {render(high)}]",
        actual=subject,
        expected=(low, high),
    )


def close_to(subject, expected, tolerance=1e-9):
    if math.isclose(subject, expected, rel_tol=0.0, abs_tol=tolerance):
        return None
    return AssertionFailure(
        message=f"Expected {render(subject)} to be within {tolerance} of {render(expected)}",
        actual=subject,
        expected=expected,
    )


def matches(subject, pattern):
    found = re.search(pattern, subject) if isinstance(pattern, str) else pattern.search(subject)
    if found:
        return None
    source = pattern if isinstance(pattern, str) else pattern.pattern
    return AssertionFailure(message=f"Expected {subject!r} to match {source!r}", actual=subject, expected=source)


def throws(subject):
    if trap(subject) is not None:
        return None
    return AssertionFailure(message=f"Expected {render(subject)} to raise, but it returned normally")


def throws_matching(subject, template):
    error = trap(subject)
    if error is None:
        return AssertionFailure(
            message=f"Expected {render(subject)} to raise, but it returned normally",
            expected=template,
        )
    return match_error(error, template)


def has_arity(subject, expected):
    parameters = inspect.signature(subject).parameters.values()
    positional = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)
    arity = sum(1 for item in parameters if item.kind in positional and item.default is inspect.Parameter.empty)
    if arity == expected:
        return None
    return AssertionFailure(
        message=f"Expected {render(subject)} to have arity {expected}, but it has arity {arity}",
        actual=arity,
        expected=expected,
    )


def has_message(subject, expected):
    return match_error(subject, expected)


def satisfies(subject, template):
    return satisfy_validator(template)


def exhaustively_satisfies(subject, template):
    return exhaustive_validator(template)


def has_shape(subject, template):
    return shape_validator(template)


def one_of(subject, options):
    if subject in options:
        return None
    return AssertionFailure(
        message=f"Expected {render(subject)} to be one of {render(options)}",
        actual=subject,
        expected=options,
    )


ASSERTIONS = [
    create_assertion([ANY, ("to be an instance of", "to be a", "to be an"), CLASS], instance_of),
    create_assertion([ANY, ("to be", "to be identical to"), ANY], identical),
    create_assertion([ANY, ("to equal", "to be equal to"), ANY], equal),
    create_assertion(
        [ANY, ("to deep equal", "to deeply equal", "to exhaustively satisfy"), ANY],
        exhaustively_satisfies,
        ImplementationStyle.VALIDATOR,
    ),
    create_assertion([ANY, ("to satisfy", "to be like"), ANY], satisfies, ImplementationStyle.VALIDATOR),
    create_assertion([ANY, "to have shape", ANY], has_shape, ImplementationStyle.VALIDATOR),
    create_assertion([ANY, ("to be one of", "to be in"), SEQUENCE], one_of),
    create_assertion([SIZED, ("to have length", "to have size"), NON_NEGATIVE_INTEGER], has_length),
    create_assertion([NUMBER, ("to be greater than", "to be above"), NUMBER], _compare(">", lambda a, b: a > b)),
    create_assertion([NUMBER, ("to be less than", "to be below"), NUMBER], _compare("<", lambda a, b: a < b)),
    create_assertion(
        [NUMBER, ("to be at least", "to be greater than or equal to"), NUMBER],
        _compare(">=", lambda a, b: a >= b),
    ),
    create_assertion(
        [NUMBER, ("to be at most", "to be less than or equal to"), NUMBER],
        _compare("<=", lambda a, b: a <= b),
    ),
    create_assertion([NUMBER, ("to be within", "to be between"), NUMBER, NUMBER], within),
    create_assertion([NUMBER, "to be close to", NUMBER], close_to),
    create_assertion([NUMBER, "to be close to", NUMBER, NUMBER], close_to),
    create_assertion([STRING, ("to begin with", "to start with"), STRING], _compare("to begin with", str.startswith)),
    create_assertion([STRING, "to end with", STRING], _compare("to end with", str.endswith)),
    create_assertion([STRING, ("to match", "to match pattern"), STRING_OR_PATTERN], matches),
    create_assertion([STRING, ("to contain", "to include"), STRING], _compare("to contain", str.__contains__)),
    create_assertion([CALLABLE, ("to throw", "to raise")], throws),
    create_assertion(
        [CALLABLE, ("to throw", "to raise", "to throw a", "to throw an", "to throw error satisfying"), ANY],
        throws_matching,
    ),
    create_assertion([CALLABLE, "to have arity", NON_NEGATIVE_INTEGER], has_arity),
    create_assertion([EXCEPTION, "to have message", STRING_OR_PATTERN], has_message),
]
