"""Type and value-class assertions that take no parameters."""

import datetime
import inspect
import math
import re
from collections.abc import Mapping
from decimal import Decimal

from ..assertion import ImplementationStyle, create_assertion
from ..assertion.slots import ANY, SIZED
from ..schema.validators import is_number, is_scalar


def _predicate(parts, fn):
    return create_assertion(parts, fn, ImplementationStyle.PREDICATE)


def is_finite_number(value):
    return is_integer(value) or (is_number(value) and math.isfinite(value))


def is_infinite(value):
    return is_number(value) and not is_integer(value) and math.isinf(value)


def is_nan(value):
    if isinstance(value, Decimal):
        return value.is_nan()
    return isinstance(value, float) and math.isnan(value)


def is_integer(value):
    return isinstance(value, int) and not isinstance(value, bool)


ASSERTIONS = [
    _predicate([ANY, ("to be a string", "to be a str")], lambda value: isinstance(value, str)),
    _predicate([ANY, ("to be a number", "to be finite")], is_finite_number),
    _predicate([ANY, "to be infinite"], is_infinite),
    _predicate([ANY, "to be NaN"], is_nan),
    _predicate([ANY, ("to be an integer", "to be an int")], is_integer),
    _predicate([ANY, "to be a float"], lambda value: isinstance(value, float)),
    _predicate([ANY, ("to be a boolean", "to be a bool")], lambda value: isinstance(value, bool)),
    _predicate([ANY, "to be positive"], lambda value: is_number(value) and value > 0),
    _predicate([ANY, "to be negative"], lambda value: is_number(value) and value < 0),
    _predicate([ANY, "to be true"], lambda value: value is True),
    _predicate([ANY, "to be false"], lambda value: value is False),
    _predicate([ANY, ("to be None", "to be null")], lambda value: value is None),
    _predicate([ANY, ("to be truthy", "to be ok", "to exist")], lambda value: bool(value)),
    _predicate([ANY, "to be falsy"], lambda value: not value),
    _predicate([ANY, ("to be callable", "to be a function")], callable),
    _predicate([ANY, ("to be a coroutine function", "to be an async function")], inspect.iscoroutinefunction),
    _predicate([ANY, ("to be a class", "to be a type")], inspect.isclass),
    _predicate([ANY, ("to be a list", "to be an array")], lambda value: isinstance(value, list)),
    _predicate([ANY, "to be a tuple"], lambda value: isinstance(value, tuple)),
    _predicate([ANY, ("to be a dict", "to be a mapping")], lambda value: isinstance(value, Mapping)),
    _predicate([ANY, "to be a set"], lambda value: isinstance(value, (set, frozenset))),
    _predicate([ANY, ("to be a pattern", "to be a regex")], lambda value: isinstance(value, re.Pattern)),
    _predicate([ANY, ("to be an exception", "to be an error")], lambda value: isinstance(value, BaseException)),
    _predicate([ANY, ("to be a date", "to be a datetime")], lambda value: isinstance(value, datetime.date)),
    _predicate([ANY, "to be a primitive"], is_scalar),
    _predicate([SIZED, "to be empty"], lambda value: len(value) == 0),
    _predicate([SIZED, "to be non-empty"], lambda value: len(value) > 0),
]
