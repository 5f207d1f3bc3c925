"""Assertions about async iterators and async generators."""

from ..assertion.slots import ANY, ASYNC_ITERABLE, NON_NEGATIVE_INTEGER, SEQUENCE
from ..formatting import render
from ..outcome import AssertionFailure
from ._async import drain, timeout_ms
from ._util import describe_issues, exhaustive_validator, satisfy_validator
from .async_parametric import with_timeout


def _stopped(subject, drained, options, expectation):
    if drained.timed_out:
        reason = f"it timed out after {timeout_ms(options):g} ms"
    elif drained.error is not None:
        reason = f"it raised {drained.error!r}"
    else:
        reason = "it completed"
    return AssertionFailure(
        message=f"Expected {render(subject)} {expectation}, but {reason}; items: {render(drained.items)}",
        actual=drained.items,
    )


async def _first(item):
    return True


def _yields(build, wording):
    async def impl(subject, template, options=None):
        validator = build(template)

        async def matched(item):
            return (await validator.validate_async(item)).success

        drained = await drain(subject, options, until=matched)
        if drained.items and not (drained.completed or drained.timed_out or drained.error):
            return None
        return _stopped(subject, drained, options, f"to yield a value {wording} {render(template)}")

    return impl


def _yields_first(build, wording):
    async def impl(subject, template, options=None):
        drained = await drain(subject, options, until=_first)
        if not drained.items:
            return _stopped(subject, drained, options, "to yield at least one value")
        result = await build(template).validate_async(drained.items[0])
        return describe_issues(f"Expected first item {render(drained.items[0])} to {wording} {render(template)}", result)

    return impl


def _yields_last(build, wording):
    async def impl(subject, template, options=None):
        drained = await drain(subject, options)
        if not drained.completed:
            return _stopped(subject, drained, options, "to complete")
        if not drained.items:
            return AssertionFailure(
                message=f"Expected {render(subject)} to yield at least one value, but it was empty",
                actual=[],
            )
        result = await build(template).validate_async(drained.items[-1])
        return describe_issues(f"Expected last item {render(drained.items[-1])} to {wording} {render(template)}", result)

    return impl


def _yields_items(build, wording):
    async def impl(subject, template, options=None):
        drained = await drain(subject, options)
        if not drained.completed:
            return _stopped(subject, drained, options, "to complete")
        validator = build(template)
        for index, item in enumerate(drained.items):
            result = await validator.validate_async(item)
            if not result.success:
                return describe_issues(f"Expected item {index} ({render(item)}) to {wording} {render(template)}", result)
        return None

    return impl


def _yields_list(build, wording):
    async def impl(subject, template, options=None):
        drained = await drain(subject, options)
        if not drained.completed:
            return _stopped(subject, drained, options, "to complete")
        result = await build(list(template)).validate_async(drained.items)
        return describe_issues(f"Expected yielded items {render(drained.items)} to {wording} {render(template)}", result)

    return impl


def _count_failure(subject, drained, expectation, expected):
    return AssertionFailure(
        message=f"Expected {render(subject)} to yield {expectation}, but it yielded {len(drained.items)}",
        actual=len(drained.items),
        expected=expected,
    )


async def yields_count(subject, expected, options=None):
    drained = await drain(subject, options)
    if not drained.completed:
        return _stopped(subject, drained, options, "to complete")
    if len(drained.items) == expected:
        return None
    return _count_failure(subject, drained, f"{expected} item(s)", expected)


async def yields_at_least(subject, minimum, options=None):
    if minimum == 0:
        return None
    seen = 0

    async def enough(item):
        nonlocal seen
        seen += 1
        return seen >= minimum

    drained = await drain(subject, options, until=enough)
    if len(drained.items) >= minimum:
        return None
    if drained.completed:
        return _count_failure(subject, drained, f"at least {minimum} item(s)", minimum)
    return _stopped(subject, drained, options, f"to yield at least {minimum} item(s)")


async def yields_at_most(subject, maximum, options=None):
    seen = 0

    async def exceeded(item):
        nonlocal seen
        seen += 1
        return seen > maximum

    drained = await drain(subject, options, until=exceeded)
    if drained.completed:
        return None
    if len(drained.items) > maximum:
        return AssertionFailure(
            message=f"Expected {render(subject)} to yield at most {maximum} item(s), but it yielded more",
            actual=drained.items,
            expected=maximum,
        )
    return _stopped(subject, drained, options, "to complete")


async def is_empty(subject, options=None):
    drained = await drain(subject, options, until=_first)
    if drained.completed and not drained.items:
        return None
    if drained.items:
        return AssertionFailure(
            message=f"Expected {render(subject)} to be empty, but it yielded {render(drained.items[0])}",
            actual=drained.items,
        )
    return _stopped(subject, drained, options, "to complete without yielding")


async def completes(subject, options=None):
    drained = await drain(subject, options)
    if drained.completed:
        return None
    return _stopped(subject, drained, options, "to complete")


async def raises(subject, options=None):
    drained = await drain(subject, options)
    if drained.error is not None:
        return None
    return _stopped(subject, drained, options, "to raise")


ASSERTIONS = [
    *with_timeout(
        [ASYNC_ITERABLE, ("to yield", "to emit", "to yield value satisfying"), ANY],
        _yields(satisfy_validator, "satisfying"),
    ),
    *with_timeout(
        [ASYNC_ITERABLE, "to yield value exhaustively satisfying", ANY],
        _yields(exhaustive_validator, "exhaustively satisfying"),
    ),
    *with_timeout(
        [ASYNC_ITERABLE, ("to yield first", "to emit first", "to yield first satisfying"), ANY],
        _yields_first(satisfy_validator, "satisfy"),
    ),
    *with_timeout(
        [ASYNC_ITERABLE, "to yield first exhaustively satisfying", ANY],
        _yields_first(exhaustive_validator, "exhaustively satisfy"),
    ),
    *with_timeout(
        [ASYNC_ITERABLE, ("to yield last", "to yield last satisfying"), ANY],
        _yields_last(satisfy_validator, "satisfy"),
    ),
    *with_timeout(
        [ASYNC_ITERABLE, "to yield last exhaustively satisfying", ANY],
        _yields_last(exhaustive_validator, "exhaustively satisfy"),
    ),
    *with_timeout(
        [ASYNC_ITERABLE, ("to yield items satisfying", "to only yield items satisfying"), ANY],
        _yields_items(satisfy_validator, "satisfy"),
    ),
    *with_timeout(
        [ASYNC_ITERABLE, "to yield items exhaustively satisfying", ANY],
        _yields_items(exhaustive_validator, "exhaustively satisfy"),
    ),
    *with_timeout(
        [ASYNC_ITERABLE, ("to yield sequence satisfying", "to yield array satisfying"), SEQUENCE],
        _yields_list(satisfy_validator, "satisfy"),
    ),
    *with_timeout([ASYNC_ITERABLE, "to yield exactly", SEQUENCE], _yields_list(exhaustive_validator, "equal")),
    *with_timeout([ASYNC_ITERABLE, "to yield count", NON_NEGATIVE_INTEGER], yields_count),
    *with_timeout([ASYNC_ITERABLE, "to yield at least", NON_NEGATIVE_INTEGER], yields_at_least),
    *with_timeout([ASYNC_ITERABLE, "to yield at most", NON_NEGATIVE_INTEGER], yields_at_most),
    *with_timeout([ASYNC_ITERABLE, "to be an empty iterable"], is_empty),
    *with_timeout([ASYNC_ITERABLE, ("to complete", "to finish")], completes),
    *with_timeout([ASYNC_ITERABLE, ("to raise", "to error", "to reject", "to be rejected")], raises),
]
