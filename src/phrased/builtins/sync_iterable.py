"""Assertions about iterables, iterators and generators.

Subjects are consumed one item at a time. Generators that are abandoned
before they are exhausted are closed.
"""

from itertools import islice

from ..assertion import ImplementationStyle, create_assertion
from ..assertion.slots import ANY, ITERABLE, NON_NEGATIVE_INTEGER, SEQUENCE
from ..formatting import render
from ..outcome import AssertionFailure
from ..schema import CollectedValidator, ItemsValidator
from ..schema.validators import close_iterator
from ._util import exhaustive_validator, satisfy_validator


def _take(subject, limit=None):
    """Up to ``limit`` items of ``subject`` (all of them when ``limit`` is None)."""
    iterator = iter(subject)
    try:
        return list(islice(iterator, limit))
    finally:
        close_iterator(iterator)


def _items(build, mode):
    def impl(subject, template):
        return ItemsValidator(build(template), mode)

    return impl


def _collected(build):
    def impl(subject, template):
        return CollectedValidator(build(list(template)))

    return impl


def yields_count(subject, expected):
    count = len(_take(subject, expected + 1))
    if count == expected:
        return None
    more = "more" if count > expected else count
    return AssertionFailure(
        message=f"Expected {render(subject)} to yield {expected} item(s), but it yielded {more}",
        actual=count,
        expected=expected,
    )


def yields_at_least(subject, minimum):
    count = len(_take(subject, minimum))
    if count >= minimum:
        return None
    return AssertionFailure(
        message=f"Expected {render(subject)} to yield at least {minimum} item(s), but it yielded {count}",
        actual=count,
        expected=minimum,
    )


def yields_at_most(subject, maximum):
    if len(_take(subject, maximum + 1)) <= maximum:
        return None
    return AssertionFailure(
        message=f"Expected {render(subject)} to yield at most {maximum} item(s), but it yielded more",
        expected=maximum,
    )


def is_empty(subject):
    first = _take(subject, 1)
    if not first:
        return None
    return AssertionFailure(
        message=f"Expected {render(subject)} to be empty, but it yielded {render(first[0])}",
        actual=first[0],
    )


def completes(subject):
    count = 0
    try:
        for count, _ in enumerate(subject, 1):
            pass
    except Exception as exc:
        return AssertionFailure(
            message=f"Expected {render(subject)} to complete, but it raised {exc!r} after {count} item(s)",
            actual=exc,
        )
    return None


_VALIDATOR = ImplementationStyle.VALIDATOR

ASSERTIONS = [
    create_assertion(
        [ITERABLE, ("to yield", "to emit", "to yield value satisfying"), ANY],
        _items(satisfy_validator, "some"),
        _VALIDATOR,
    ),
    create_assertion(
        [ITERABLE, "to yield value exhaustively satisfying", ANY],
        _items(exhaustive_validator, "some"),
        _VALIDATOR,
    ),
    create_assertion(
        [ITERABLE, ("to yield items satisfying", "to only yield items satisfying"), ANY],
        _items(satisfy_validator, "every"),
        _VALIDATOR,
    ),
    create_assertion(
        [ITERABLE, "to yield items exhaustively satisfying", ANY],
        _items(exhaustive_validator, "every"),
        _VALIDATOR,
    ),
    create_assertion(
        [ITERABLE, ("to yield first", "to emit first", "to yield first satisfying"), ANY],
        _items(satisfy_validator, "first"),
        _VALIDATOR,
    ),
    create_assertion(
        [ITERABLE, "to yield first exhaustively satisfying", ANY],
        _items(exhaustive_validator, "first"),
        _VALIDATOR,
    ),
    create_assertion(
        [ITERABLE, ("to yield last", "to yield last satisfying"), ANY],
        _items(satisfy_validator, "last"),
        _VALIDATOR,
    ),
    create_assertion(
        [ITERABLE, "to yield last exhaustively satisfying", ANY],
        _items(exhaustive_validator, "last"),
        _VALIDATOR,
    ),
    create_assertion(
        [ITERABLE, ("to yield sequence satisfying", "to yield array satisfying"), SEQUENCE],
        _collected(satisfy_validator),
        _VALIDATOR,
    ),
    create_assertion([ITERABLE, "to yield exactly", SEQUENCE], _collected(exhaustive_validator), _VALIDATOR),
    create_assertion([ITERABLE, "to yield count", NON_NEGATIVE_INTEGER], yields_count),
    create_assertion([ITERABLE, "to yield at least", NON_NEGATIVE_INTEGER], yields_at_least),
    create_assertion([ITERABLE, "to yield at most", NON_NEGATIVE_INTEGER], yields_at_most),
    create_assertion([ITERABLE, "to be an empty iterable"], is_empty),
    create_assertion([ITERABLE, ("to complete", "to finish")], completes),
]
