"""Deadline-bounded waiting for awaitables and async iterators.

Every wait races a task against a deadline. Whichever way the race ends, a
task that is still pending is cancelled and awaited before returning, and an
async iterator that is abandoned early is closed.
"""

from __future__ import annotations

import asyncio
import contextlib
import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, PositiveFloat

from ..assertion.parts import Slot
from ..config import get_settings
from ..schema import ModelValidator


class TimeoutOptions(BaseModel):
    """Trailing ``{"within": milliseconds}`` options of waiting assertions."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    within: PositiveFloat | None = None


TIMEOUT_OPTIONS = Slot("timeout options", ModelValidator(TimeoutOptions, "{'within': milliseconds}"))


def timeout_ms(options: TimeoutOptions | None) -> float:
    if options is not None and options.within is not None:
        return options.within
    return get_settings().wait_timeout_ms


@dataclass(frozen=True, slots=True)
class Settled:
    """How an awaitable settled: a value, an error, or a timeout."""

    value: Any = None
    error: BaseException | None = None
    timed_out: bool = False

    @property
    def fulfilled(self) -> bool:
        return self.error is None and not self.timed_out


@dataclass(slots=True)
class Drained:
    """Items read from an async iterator and why reading stopped."""

    items: list[Any] = field(default_factory=list)
    error: BaseException | None = None
    timed_out: bool = False
    completed: bool = False


async def race(awaitable: Awaitable[Any], timeout: float) -> Settled:
    """Await ``awaitable`` for at most ``timeout`` seconds."""
    task = asyncio.ensure_future(awaitable)
    try:
        done, _ = await asyncio.wait({task}, timeout=timeout)
        if not done:
            return Settled(timed_out=True)
        error = task.exception()
        if error is not None:
            return Settled(error=error)
        return Settled(value=task.result())
    finally:
        if not task.done():
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task


async def settle(subject: Any, options: TimeoutOptions | None = None) -> Settled:
    """Settle an awaitable, or the result of calling a function.

    A function that raises counts as a rejection; one that returns a
    non-awaitable value counts as fulfilled with that value.
    """
    if callable(subject) and not inspect.isawaitable(subject):
        try:
            subject = subject()
        except Exception as exc:
            return Settled(error=exc)
        if not inspect.isawaitable(subject):
            return Settled(value=subject)
    return await race(subject, timeout_ms(options) / 1000)


async def _next(iterator: Any) -> Any:
    return await iterator.__anext__()


async def drain(
    iterable: Any,
    options: TimeoutOptions | None = None,
    *,
    until: Callable[[Any], Awaitable[bool]] | None = None,
) -> Drained:
    """Read items one at a time until exhaustion, an error, the deadline, or ``until``.

    Parameters
    ----------
    iterable : async iterable or async iterator
        Source to read from.
    options : TimeoutOptions, optional
        Deadline for the whole drain; defaults to the configured wait timeout.
    until : async callable, optional
        Stop as soon as it returns True for an item.
    """
    iterator = iterable.__aiter__() if hasattr(iterable, "__aiter__") else iterable
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout_ms(options) / 1000
    drained = Drained()
    try:
        while True:
            remaining = deadline - loop.time()
            if remaining <= 0:
                drained.timed_out = True
                break
            step = await race(_next(iterator), remaining)
            if step.timed_out:
                drained.timed_out = True
                break
            if isinstance(step.error, StopAsyncIteration):
                drained.completed = True
                break
            if step.error is not None:
                drained.error = step.error
                break
            drained.items.append(step.value)
            if until is not None and await until(step.value):
                break
    finally:
        if not drained.completed and drained.error is None:
            aclose = getattr(iterator, "aclose", None)
            if aclose is not None:
                await aclose()
    return drained
