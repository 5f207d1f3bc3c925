"""Part specifications: literal phrases and typed slots."""

from __future__ import annotations

import typing
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, Union

from ..errors import InvalidAssertionError
from ..schema.validators import ANY, InstanceValidator, Validator


NEGATION_PREFIX = "not "


@dataclass(frozen=True, slots=True)
class Phrase:
    """A set of interchangeable literal phrase tokens."""

    values: tuple[str, ...]

    def matches(self, token: Any) -> bool:
        return isinstance(token, str) and token in self.values

    def __str__(self) -> str:
        return " / ".join(f"'{value}'" for value in self.values)


@dataclass(frozen=True, slots=True)
class Slot:
    """A typed argument position.

    Attributes
    ----------
    name : str
        Short name used in assertion ids and diagnostics.
    validator : Validator
        Validator the argument must satisfy; its coerced data is what the
        implementation receives.
    wildcard : bool
        Accepts anything; does not count towards specificity.
    """

    name: str
    validator: Validator
    wildcard: bool = False

    def __str__(self) -> str:
        return "{" + self.name + "}"


Part = Union[Phrase, Slot]


def phrase(*values: str) -> Phrase:
    if not values or not all(isinstance(value, str) and value for value in values):
        raise InvalidAssertionError(f"Phrase values must be non-empty strings, got {values!r}")
    return Phrase(tuple(values))


def slot(spec: Any, name: str | None = None) -> Slot:
    """Coerce a slot specification into a :class:`Slot`.

    Accepts a :class:`Slot`, a :class:`Validator`, a class, or ``typing.Any``.
    """
    if isinstance(spec, Slot):
        return spec
    if spec is typing.Any or spec is object:
        return Slot(name or "any", ANY, wildcard=True)
    if isinstance(spec, Validator):
        return Slot(name or spec.description, spec)
    if isinstance(spec, type):
        return Slot(name or spec.__name__.lower(), InstanceValidator(spec))
    raise InvalidAssertionError(f"Cannot use {spec!r} as a slot")


def to_part(spec: Any) -> Part:
    """Coerce one element of a part list: strings and string tuples become phrases."""
    if isinstance(spec, Phrase):
        return spec
    if isinstance(spec, str):
        return phrase(spec)
    if isinstance(spec, (list, tuple)):
        return phrase(*spec)
    return slot(spec)


def to_parts(specs: Iterable[Any]) -> tuple[Part, ...]:
    return tuple(to_part(spec) for spec in specs)
