"""Assertions about awaitables and functions returning them."""

import asyncio
import inspect
import re

from ..assertion import create_async_assertion
from ..assertion.parts import Slot
from ..assertion.slots import ANY, AWAITABLE_OR_CALLABLE, EXCEPTION_CLASS
from ..formatting import render
from ..outcome import AssertionFailure
from ..schema import InstanceValidator
from ._async import TIMEOUT_OPTIONS, settle, timeout_ms
from ._util import describe_issues, match_error, satisfy_validator

EVENT = Slot("event", InstanceValidator(asyncio.Event, "an asyncio.Event"))


def _timed_out(subject, verb, options):
    return AssertionFailure(
        message=f"Expected {render(subject)} to {verb} within {timeout_ms(options):g} ms, but it did not settle",
        actual=subject,
    )


async def resolves(subject, options=None):
    settled = await settle(subject, options)
    if settled.timed_out:
        return _timed_out(subject, "resolve", options)
    if settled.error is not None:
        return AssertionFailure(
            message=f"Expected {render(subject)} to resolve, but it rejected with {settled.error!r}",
            actual=settled.error,
        )
    return None


async def rejects(subject, options=None):
    settled = await settle(subject, options)
    if settled.timed_out:
        return _timed_out(subject, "reject", options)
    if settled.error is None:
        return AssertionFailure(
            message=f"Expected {render(subject)} to reject, but it fulfilled with {render(settled.value)}",
            actual=settled.value,
        )
    return None


async def rejects_with_type(subject, cls, options=None):
    settled = await settle(subject, options)
    if settled.timed_out:
        return _timed_out(subject, "reject", options)
    if settled.error is None:
        return AssertionFailure(
            message=f"Expected {render(subject)} to reject, but it fulfilled with {render(settled.value)}",
            actual=settled.value,
        )
    return match_error(settled.error, cls)


def _matches_directly(template):
    if isinstance(template, (str, re.Pattern)):
        return True
    return inspect.isclass(template) and issubclass(template, BaseException)


async def rejects_satisfying(subject, template, options=None):
    settled = await settle(subject, options)
    if settled.timed_out:
        return _timed_out(subject, "reject", options)
    if settled.error is None:
        return AssertionFailure(
            message=f"Expected {render(subject)} to reject, but it fulfilled with {render(settled.value)}",
            actual=settled.value,
            expected=template,
        )
    if _matches_directly(template):
        return match_error(settled.error, template)
    result = await satisfy_validator(template).validate_async(settled.error)
    return describe_issues(f"Expected rejection {settled.error!r} to satisfy {render(template)}", result)


async def fulfills_satisfying(subject, template, options=None):
    settled = await settle(subject, options)
    if settled.timed_out:
        return _timed_out(subject, "fulfill", options)
    if settled.error is not None:
        return AssertionFailure(
            message=f"Expected {render(subject)} to fulfill, but it rejected with {settled.error!r}",
            actual=settled.error,
            expected=template,
        )
    result = await satisfy_validator(template).validate_async(settled.value)
    return describe_issues(f"Expected fulfilled value {render(settled.value)} to satisfy {render(template)}", result)


async def is_set(subject, options=None):
    settled = await settle(subject.wait, options)
    if settled.timed_out:
        return _timed_out(subject, "be set", options)
    return None


def with_timeout(parts, impl):
    """The assertion, plus a variant taking trailing timeout options."""
    return [create_async_assertion(parts, impl), create_async_assertion([*parts, TIMEOUT_OPTIONS], impl)]


ASSERTIONS = [
    *with_timeout([AWAITABLE_OR_CALLABLE, ("to resolve", "to fulfill", "to be fulfilled")], resolves),
    *with_timeout([AWAITABLE_OR_CALLABLE, ("to reject", "to be rejected")], rejects),
    *with_timeout(
        [AWAITABLE_OR_CALLABLE, ("to reject with a", "to reject with an", "to be rejected with a"), EXCEPTION_CLASS],
        rejects_with_type,
    ),
    *with_timeout(
        [AWAITABLE_OR_CALLABLE, ("to reject with error satisfying", "to be rejected with error satisfying"), ANY],
        rejects_satisfying,
    ),
    *with_timeout(
        [AWAITABLE_OR_CALLABLE, ("to fulfill with value satisfying", "to resolve with value satisfying"), ANY],
        fulfills_satisfying,
    ),
    *with_timeout([EVENT, ("to be set", "to fire")], is_set),
]
