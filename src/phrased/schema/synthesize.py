"""Build validators from example values.

``synthesize`` walks a template value and returns a validator that accepts
values "like" it. Options pick between literal matching (the value itself)
and type matching (any value of the same type), positional or collapsed
sequences, and open or exhaustive objects.
"""

from __future__ import annotations

import dataclasses
import datetime
import inspect
import logging
import math
import re
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any
from uuid import UUID

from ..config import DEFAULT_MAX_DEPTH
from ..embed import EmbeddedAssertion
from ..errors import SynthesisError
from .validators import (
    ANY,
    AWAITABLE,
    CALLABLE,
    SEQUENCE_TYPES,
    AllOfValidator,
    ArrayOfValidator,
    AttributesValidator,
    BackReference,
    EmbeddedValidator,
    EmptyMappingValidator,
    EqualityValidator,
    InstanceValidator,
    LiteralValidator,
    MappingValidator,
    NaNValidator,
    NeverValidator,
    PatternLiteralValidator,
    PatternValidator,
    SequenceValidator,
    UnionValidator,
    Validator,
)

logger = logging.getLogger(__name__)

POISONED_KEYS = frozenset({"__proto__", "__class__"})

SCALAR_TYPES = (
    str,
    bytes,
    int,
    float,
    complex,
    Decimal,
    Fraction,
    datetime.date,
    datetime.time,
    datetime.timedelta,
    UUID,
    Enum,
)


@dataclass(frozen=True, slots=True)
class SynthesisOptions:
    """Options controlling how a template becomes a validator.

    Attributes
    ----------
    literal_primitives : bool
        Match scalars by value instead of by type.
    literal_patterns : bool
        Require compiled patterns to equal the template pattern instead of
        matching the candidate's string form against it.
    literal_empty_mappings : bool
        An empty dict template only accepts empty mappings.
    positional_sequences : bool
        One validator per sequence position; otherwise elements are
        collapsed into a single per-element validator.
    mixed_sequences : bool
        When collapsing, allow a union of differing element validators;
        otherwise the first element's validator is used for all.
    exhaustive : bool
        Reject extra keys, attributes and sequence elements.
    max_depth : int
        Nesting depth below which every value is accepted.
    """

    literal_primitives: bool = True
    literal_patterns: bool = False
    literal_empty_mappings: bool = True
    positional_sequences: bool = True
    mixed_sequences: bool = True
    exhaustive: bool = False
    max_depth: int = DEFAULT_MAX_DEPTH


SATISFY_OPTIONS = SynthesisOptions()
EXHAUSTIVE_OPTIONS = SynthesisOptions(literal_patterns=True, exhaustive=True)
SHAPE_OPTIONS = SynthesisOptions(
    literal_primitives=False,
    literal_empty_mappings=False,
    positional_sequences=False,
)


def synthesize(value: Any, options: SynthesisOptions = SATISFY_OPTIONS) -> Validator:
    """Build a validator that accepts values shaped like ``value``.

    Parameters
    ----------
    value : Any
        Template value. May contain validators and embedded assertions.
    options : SynthesisOptions
        Matching options; see :data:`SATISFY_OPTIONS` and
        :data:`EXHAUSTIVE_OPTIONS`.

    Returns
    -------
    Validator
        The synthesized validator.

    Raises
    ------
    SynthesisError
        If the template contains a poisoned key such as ``__proto__``.
    """
    validator = _Synthesizer(options).build(value, 0)
    logger.debug("Synthesized %r from %s template", validator, type(value).__name__)
    return validator


class _Synthesizer:
    def __init__(self, options: SynthesisOptions) -> None:
        self.options = options
        self.visiting: dict[int, BackReference] = {}

    def build(self, value: Any, depth: int) -> Validator:
        options = self.options
        if depth > options.max_depth:
            return ANY
        if value is None:
            return LiteralValidator(None)
        if isinstance(value, Validator):
            return value
        if isinstance(value, EmbeddedAssertion):
            return EmbeddedValidator(value)
        if isinstance(value, bool):
            return LiteralValidator(value) if options.literal_primitives else InstanceValidator(bool)
        if isinstance(value, float) and math.isnan(value):
            return NaNValidator()
        if isinstance(value, Decimal) and value.is_nan():
            return NaNValidator()
        if isinstance(value, SCALAR_TYPES):
            return LiteralValidator(value) if options.literal_primitives else InstanceValidator(type(value))
        if isinstance(value, re.Pattern):
            return PatternLiteralValidator(value) if options.literal_patterns else PatternValidator(value)
        if isinstance(value, BaseException):
            return InstanceValidator(type(value))
        if inspect.isawaitable(value):
            return AWAITABLE
        if callable(value):
            return CALLABLE

        key = id(value)
        if key in self.visiting:
            return self.visiting[key]
        reference = BackReference()
        self.visiting[key] = reference
        try:
            node = self._container(value, depth)
        finally:
            del self.visiting[key]
        reference.bind(node)
        return node

    def _container(self, value: Any, depth: int) -> Validator:
        options = self.options
        if isinstance(value, (set, frozenset)):
            base = InstanceValidator((set, frozenset), "set")
            if options.literal_primitives:
                return AllOfValidator([base, EqualityValidator(value)])
            return base
        if isinstance(value, dict):
            _reject_poisoned(value.keys())
            if not value and options.literal_empty_mappings:
                return EmptyMappingValidator()
            fields = {name: self.build(item, depth + 1) for name, item in value.items()}
            return MappingValidator(fields, exhaustive=options.exhaustive)
        if isinstance(value, Mapping):
            return InstanceValidator(type(value))
        if isinstance(value, SEQUENCE_TYPES):
            return self._sequence(value, depth)
        if dataclasses.is_dataclass(value) or hasattr(value, "__dict__"):
            attributes = _attributes_of(value)
            _reject_poisoned(attributes.keys())
            fields = {
                name: self.build(item, depth + 1)
                for name, item in attributes.items()
                if not name.startswith("_")
            }
            return AttributesValidator(type(value), fields, exhaustive=options.exhaustive)
        return InstanceValidator(type(value))

    def _sequence(self, value: list | tuple, depth: int) -> Validator:
        options = self.options
        sequence_types = (type(value),) if options.exhaustive else SEQUENCE_TYPES
        items = [self.build(item, depth + 1) for item in value]
        if options.positional_sequences:
            return SequenceValidator(items, exhaustive=options.exhaustive, sequence_types=sequence_types)
        if not items:
            return ArrayOfValidator(NeverValidator(), sequence_types=sequence_types)
        if not options.mixed_sequences:
            return ArrayOfValidator(items[0], sequence_types=sequence_types)
        unique: dict[str, Validator] = {}
        for item in items:
            unique.setdefault(item.signature, item)
        distinct = list(unique.values())
        element = distinct[0] if len(distinct) == 1 else UnionValidator(distinct)
        return ArrayOfValidator(element, sequence_types=sequence_types)


def _attributes_of(value: Any) -> dict[str, Any]:
    if dataclasses.is_dataclass(value):
        return {item.name: getattr(value, item.name) for item in dataclasses.fields(value)}
    return vars(value)


def _reject_poisoned(keys: Any) -> None:
    for key in keys:
        if isinstance(key, str) and key in POISONED_KEYS:
            raise SynthesisError(f"Template contains the reserved key {key!r}")
