"""The immutable assertion record and its constructors."""

from __future__ import annotations

import inspect
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

from ..errors import InvalidAssertionError
from ..schema.validators import Validator
from .parts import NEGATION_PREFIX, Part, Phrase, Slot, to_parts
from .slots import ANY


Implementation = Union[Callable[..., Any], Validator]


class ImplementationStyle(str, Enum):
    """How an implementation reports its verdict.

    PREDICATE
        Returns ``True`` to pass; anything else, or any exception, fails.
    FAILURE
        Returns ``None``/``True`` to pass, ``False`` or an
        ``AssertionFailure`` to fail, or a validator to apply to the subject.
    VALIDATOR
        Is, or returns, a validator applied to the subject.
    """

    PREDICATE = "predicate"
    FAILURE = "failure"
    VALIDATOR = "validator"


@dataclass(frozen=True, slots=True)
class Assertion:
    """A registered assertion.

    Attributes
    ----------
    id : str
        Deterministic id derived from the part pattern.
    parts : tuple[Part, ...]
        Subject slot, phrase, then further phrases and parameter slots.
    impl : callable or Validator
        The implementation; receives the subject and parameters, phrases omitted.
    style : ImplementationStyle
        How ``impl`` reports its verdict.
    is_async : bool
        Whether the assertion belongs to the asynchronous partition.
    """

    id: str
    parts: tuple[Part, ...]
    impl: Implementation
    style: ImplementationStyle
    is_async: bool = False

    @property
    def phrase(self) -> Phrase:
        return self.parts[1]

    @property
    def slots(self) -> tuple[Slot, ...]:
        return tuple(part for part in self.parts if isinstance(part, Slot))

    @property
    def specificity(self) -> int:
        return sum(1 for part in self.parts if not (isinstance(part, Slot) and part.wildcard))

    def __str__(self) -> str:
        return " ".join(str(part) for part in self.parts)


def assertion_id(parts: Iterable[Part]) -> str:
    parts = tuple(parts)
    tokens = []
    for part in parts:
        tokens.append(" ".join(part.values) if isinstance(part, Phrase) else part.name)
    slug = re.sub(r"[^a-z0-9]+", "-", " ".join(tokens).lower()).strip("-")
    slot_count = sum(1 for part in parts if isinstance(part, Slot))
    return f"{slug}-{slot_count}s{len(parts)}p"


def _build(specs: Iterable[Any], impl: Implementation, style: ImplementationStyle | None, is_async: bool) -> Assertion:
    parts = to_parts(specs)
    if not parts:
        raise InvalidAssertionError("An assertion needs at least one phrase")
    if isinstance(parts[0], Phrase):
        parts = (ANY,) + parts
    if len(parts) < 2 or not isinstance(parts[1], Phrase):
        raise InvalidAssertionError(f"The phrase must directly follow the subject slot in {parts!r}")
    for part in parts:
        if isinstance(part, Phrase) and any(value.startswith(NEGATION_PREFIX) for value in part.values):
            raise InvalidAssertionError(f"Phrase {part} must not start with {NEGATION_PREFIX!r}")

    if style is None:
        style = ImplementationStyle.VALIDATOR if isinstance(impl, Validator) else ImplementationStyle.FAILURE
    if isinstance(impl, Validator):
        if style is not ImplementationStyle.VALIDATOR:
            raise InvalidAssertionError("A validator implementation requires the VALIDATOR style")
    elif not callable(impl):
        raise InvalidAssertionError(f"Implementation must be callable or a validator, got {impl!r}")
    elif not is_async and inspect.iscoroutinefunction(impl):
        raise InvalidAssertionError("Coroutine implementations must be created with create_async_assertion()")

    return Assertion(id=assertion_id(parts), parts=parts, impl=impl, style=style, is_async=is_async)


def create_assertion(parts: Iterable[Any], impl: Implementation, style: ImplementationStyle | None = None) -> Assertion:
    """Create a synchronous assertion.

    Parameters
    ----------
    parts : iterable
        Part specifications. Strings (or tuples of strings) are phrases;
        slots may be given as :class:`Slot`, validators, classes or
        ``typing.Any``. When the first part is a phrase, an ``any`` subject
        slot is prepended.
    impl : callable or Validator
        The implementation.
    style : ImplementationStyle, optional
        Defaults to VALIDATOR for validator implementations and FAILURE
        otherwise.

    Raises
    ------
    InvalidAssertionError
        If the parts or implementation are malformed.
    """
    return _build(parts, impl, style, is_async=False)


def create_async_assertion(
    parts: Iterable[Any], impl: Implementation, style: ImplementationStyle | None = None
) -> Assertion:
    """Create an assertion for the asynchronous partition; ``impl`` may be a coroutine function."""
    return _build(parts, impl, style, is_async=True)
