"""Named slots shared by the builtin catalog."""

import inspect
import re
from collections.abc import Collection, Hashable, Iterable, Mapping, Sized

from ..schema import validators as v
from .parts import Slot


def _is_non_negative_int(value):
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _is_class_or_classes(value):
    if isinstance(value, tuple):
        return bool(value) and all(inspect.isclass(item) for item in value)
    return inspect.isclass(value)


def _is_exception_class(value):
    if isinstance(value, tuple):
        return bool(value) and all(_is_exception_class(item) for item in value)
    return inspect.isclass(value) and issubclass(value, BaseException)


def _is_collection(value):
    return isinstance(value, Collection) and not isinstance(value, (str, bytes))


def _is_iterable(value):
    return isinstance(value, Iterable) and not isinstance(value, (str, bytes))


def _is_size_range(value):
    return (
        isinstance(value, (list, tuple))
        and len(value) == 2
        and all(_is_non_negative_int(bound) for bound in value)
        and value[0] <= value[1]
    )


def is_async_iterable(value):
    return hasattr(value, "__aiter__") or hasattr(value, "__anext__")


ANY = Slot("any", v.ANY, wildcard=True)
NUMBER = Slot("number", v.PredicateValidator(v.is_number, "a number"))
INTEGER = Slot("integer", v.InstanceValidator(int))
NON_NEGATIVE_INTEGER = Slot("non-negative integer", v.PredicateValidator(_is_non_negative_int, "a non-negative integer"))
STRING = Slot("string", v.InstanceValidator(str))
PATTERN = Slot("pattern", v.InstanceValidator(re.Pattern, "a compiled pattern"))
STRING_OR_PATTERN = Slot(
    "string-or-pattern",
    v.UnionValidator([v.InstanceValidator(str), v.InstanceValidator(re.Pattern, "a compiled pattern")]),
)
SIZED = Slot("sized", v.InstanceValidator(Sized, "a sized value"))
MAPPING = Slot("mapping", v.InstanceValidator(Mapping, "a mapping"))
SEQUENCE = Slot("sequence", v.InstanceValidator((list, tuple), "a list or tuple"))
SET = Slot("set", v.InstanceValidator((set, frozenset), "a set"))
COLLECTION = Slot("collection", v.PredicateValidator(_is_collection, "a non-string collection"))
ITERABLE = Slot("iterable", v.PredicateValidator(_is_iterable, "a non-string iterable"))
SIZE_RANGE = Slot("size range", v.PredicateValidator(_is_size_range, "a (min, max) pair of non-negative integers"))
OBJECT = Slot("object", v.PredicateValidator(lambda value: not v.is_scalar(value), "an object"))
KEY = Slot("key", v.InstanceValidator(Hashable, "a hashable key"))
CALLABLE = Slot("callable", v.CALLABLE)
CLASS = Slot("class", v.PredicateValidator(_is_class_or_classes, "a class or tuple of classes"))
EXCEPTION_CLASS = Slot("exception class", v.PredicateValidator(_is_exception_class, "an exception class"))
EXCEPTION = Slot("exception", v.InstanceValidator(BaseException, "an exception"))
AWAITABLE = Slot("awaitable", v.AWAITABLE)
AWAITABLE_OR_CALLABLE = Slot("awaitable-or-callable", v.UnionValidator([v.AWAITABLE, v.CALLABLE]))
ASYNC_ITERABLE = Slot("async iterable", v.PredicateValidator(is_async_iterable, "an async iterable"))
