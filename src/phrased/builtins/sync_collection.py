"""Assertions about mappings, sequences, sets and object keys."""

from ..assertion import ImplementationStyle, create_assertion
from ..assertion.slots import ANY, COLLECTION, KEY, MAPPING, NON_NEGATIVE_INTEGER, OBJECT, SEQUENCE, SET, SIZE_RANGE, SIZED
from ..formatting import render
from ..outcome import AssertionFailure
from ..schema import ArrayOfValidator, ItemsValidator
from ..schema.validators import SEQUENCE_TYPES
from ._util import resolve_keypath, satisfy_validator


def has_key(subject, key):
    found, _ = resolve_keypath(subject, key)
    if found:
        return None
    return AssertionFailure(message=f"Expected {render(subject)} to have key {key!r}", actual=subject, expected=key)


def has_keys(subject, keys):
    missing = [key for key in keys if not resolve_keypath(subject, key)[0]]
    if not missing:
        return None
    return AssertionFailure(
        message=f"Expected {render(subject)} to have keys {render(list(keys))}, missing {render(missing)}",
        actual=subject,
        expected=list(keys),
    )


def has_only_keys(subject, keys):
    actual, expected = set(subject), set(keys)
    if actual == expected:
        return None
    return AssertionFailure(
        message=(
            f"Expected {render(subject)} to have exactly keys {render(sorted(expected, key=repr))}; "
            f"missing {render(sorted(expected - actual, key=repr))}, "
            f"unexpected {render(sorted(actual - expected, key=repr))}"
        ),
        actual=sorted(actual, key=repr),
        expected=sorted(expected, key=repr),
    )


def has_value(subject, value):
    if any(item == value for item in subject.values()):
        return None
    return AssertionFailure(message=f"Expected {render(subject)} to have value {render(value)}", expected=value)


def has_entry(subject, key, value):
    if key not in subject:
        return AssertionFailure(message=f"Expected {render(subject)} to have key {key!r}", expected=key)
    if subject[key] == value:
        return None
    return AssertionFailure(
        message=f"Expected entry {key!r} to be {render(value)}, but it is {render(subject[key])}",
        actual=subject[key],
        expected=value,
    )


def contains(subject, item):
    if item in subject:
        return None
    return AssertionFailure(message=f"Expected {render(subject)} to contain {render(item)}", expected=item)


def all_items_satisfy(subject, template):
    return ArrayOfValidator(satisfy_validator(template))


def some_item_satisfies(subject, template):
    return ItemsValidator(satisfy_validator(template), "some", accepts=SEQUENCE_TYPES, label="list or tuple")


def is_sorted(subject):
    return all(left <= right for left, right in zip(subject, subject[1:]))


def _size_comparison(name, test):
    def impl(subject, bound):
        if test(len(subject), bound):
            return None
        return AssertionFailure(
            message=f"Expected {render(subject)} to have size {name} {bound}, but its size is {len(subject)}",
            actual=len(subject),
            expected=bound,
        )

    return impl


def has_size_between(subject, bounds):
    low, high = bounds
    if low <= len(subject) <= high:
        return None
    return AssertionFailure(
        message=f"Expected {render(subject)} to have size between {low} and {high}, but its size is {len(subject)}",
        actual=len(subject),
        expected=tuple(bounds),
    )


def _set_operation(name, operation):
    def impl(subject, other, expected):
        result = operation(subject, other)
        if result == expected:
            return None
        return AssertionFailure(
            message=(
                f"Expected the {name} of {render(subject)} and {render(other)} to equal {render(expected)}, "
                f"but it is {render(result)}"
            ),
            actual=result,
            expected=expected,
        )

    return impl


def _set_relation(name, test):
    def impl(subject, other):
        if test(subject, other):
            return None
        return AssertionFailure(
            message=f"Expected {render(subject)} {name} {render(other)}",
            actual=subject,
            expected=other,
        )

    return impl


ASSERTIONS = [
    create_assertion([OBJECT, ("to have key", "to have property", "to contain key"), KEY], has_key),
    create_assertion([OBJECT, ("to have keys", "to have properties"), SEQUENCE], has_keys),
    create_assertion([MAPPING, ("to have only keys", "to have exact keys"), SEQUENCE], has_only_keys),
    create_assertion([MAPPING, "to have value", ANY], has_value),
    create_assertion([MAPPING, "to have entry", KEY, ANY], has_entry),
    create_assertion([COLLECTION, ("to contain", "to include"), ANY], contains),
    create_assertion(
        [SEQUENCE, ("to have items satisfying", "to have all items satisfying"), ANY],
        all_items_satisfy,
        ImplementationStyle.VALIDATOR,
    ),
    create_assertion([SEQUENCE, ("to have an item satisfying", "to have some item satisfying"), ANY], some_item_satisfies),
    create_assertion([SEQUENCE, "to be sorted"], is_sorted, ImplementationStyle.PREDICATE),
    create_assertion([SET, "to be a subset of", SET], _set_relation("to be a subset of", lambda a, b: a <= b)),
    create_assertion([SET, "to be a superset of", SET], _set_relation("to be a superset of", lambda a, b: a >= b)),
    create_assertion([SET, ("to intersect with", "to intersect"), SET], _set_relation("to intersect", lambda a, b: bool(a & b))),
    create_assertion([SET, "to be disjoint from", SET], _set_relation("to be disjoint from", lambda a, b: a.isdisjoint(b))),
    create_assertion([SIZED, "to have size greater than", NON_NEGATIVE_INTEGER], _size_comparison("greater than", lambda a, b: a > b)),
    create_assertion([SIZED, "to have size less than", NON_NEGATIVE_INTEGER], _size_comparison("less than", lambda a, b: a < b)),
    create_assertion([SIZED, "to have size between", SIZE_RANGE], has_size_between),
    create_assertion([SET, "to have union", SET, "equal to", SET], _set_operation("union", lambda a, b: a | b)),
    create_assertion([SET, "to have intersection", SET, "equal to", SET], _set_operation("intersection", lambda a, b: a & b)),
    create_assertion([SET, "to have difference", SET, "equal to", SET], _set_operation("difference", lambda a, b: a - b)),
    create_assertion(
        [SET, "to have symmetric difference", SET, "equal to", SET],
        _set_operation("symmetric difference", lambda a, b: a ^ b),
    ),
]
