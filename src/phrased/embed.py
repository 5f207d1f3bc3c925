"""Placeholders for assertions nested inside template values."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .formatting import render_args

if TYPE_CHECKING:
    from .expect import Expect
    from .outcome import ValidationOutcome


class EmbeddedAssertion:
    """An assertion call with the subject left open.

    Placed inside a ``to satisfy`` template, it is evaluated against the
    value found at the same position in the subject, through the catalog of
    the :class:`~phrased.expect.Expect` that created it.

    Parameters
    ----------
    expect : Expect
        Facade whose catalog resolves the assertion.
    args : tuple
        Phrase and parameters, without the subject.
    is_async : bool
        Whether the assertion belongs to the asynchronous partition.
    """

    __slots__ = ("expect", "args", "is_async")

    def __init__(self, expect: Expect, args: tuple[Any, ...], *, is_async: bool = False) -> None:
        self.expect = expect
        self.args = args
        self.is_async = is_async

    def evaluate(self, value: Any) -> ValidationOutcome:
        return self.expect.evaluate(value, *self.args)

    async def evaluate_async(self, value: Any) -> ValidationOutcome:
        if self.is_async:
            return await self.expect.evaluate_async(value, *self.args)
        return self.expect.evaluate(value, *self.args)

    def __repr__(self) -> str:
        name = "embed_async" if self.is_async else "embed"
        return f"{name}({render_args(self.args)})"
