import math
import re
from dataclasses import dataclass
from decimal import Decimal

import pytest

from phrased.errors import SynthesisError
from phrased.schema import (
    EXHAUSTIVE_OPTIONS,
    SATISFY_OPTIONS,
    SHAPE_OPTIONS,
    InstanceValidator,
    SynthesisOptions,
    synthesize,
)


def issues_of(validator, value):
    return [str(issue) for issue in validator.validate(value).issues]


@dataclass
class Point:
    x: int
    y: int


class Plain:
    def __init__(self, name, tags):
        self.name = name
        self.tags = tags
        self._secret = "hidden"


def test_satisfy_ignores_extra_keys_exhaustive_rejects_them():
    template = {"a": 1}
    value = {"a": 1, "b": 2}

    assert synthesize(template, SATISFY_OPTIONS).validate(value).success
    result = synthesize(template, EXHAUSTIVE_OPTIONS).validate(value)
    assert not result.success
    assert "unexpected key(s): 'b'" in result.error


def test_nested_issue_carries_path():
    validator = synthesize({"a": {"b": [1, 2]}})

    assert issues_of(validator, {"a": {"b": [1, 3]}}) == ["at a.b[1]: expected 2, received 3"]


def test_missing_key_reported_at_its_path():
    validator = synthesize({"user": {"name": "x"}})

    assert issues_of(validator, {"user": {}}) == ["at user.name: missing key"]


def test_booleans_never_equal_numbers():
    assert not synthesize(True).validate(1).success
    assert not synthesize(1).validate(True).success
    assert not synthesize(0).validate(False).success


def test_numbers_compare_numerically():
    assert synthesize(1).validate(1.0).success
    assert synthesize(Decimal("2.5")).validate(2.5).success


def test_nan_matches_nan_and_infinity_matches_infinity():
    assert synthesize(float("nan")).validate(float("nan")).success
    assert not synthesize(float("nan")).validate(1.0).success
    assert synthesize(math.inf).validate(math.inf).success
    assert not synthesize(math.inf).validate(-math.inf).success


def test_none_is_literal():
    assert synthesize(None).validate(None).success
    assert not synthesize(None).validate(0).success


def test_shape_options_match_types_not_values():
    validator = synthesize({"name": "x", "age": 1, "tags": ["a"]}, SHAPE_OPTIONS)

    assert validator.validate({"name": "someone", "age": 42, "tags": ["b", "c"]}).success
    assert issues_of(validator, {"name": "someone", "age": "42", "tags": []}) == [
        "at age: Input should be a valid integer, received '42'"
    ]


def test_pattern_matches_strings_in_satisfy_mode():
    validator = synthesize({"id": re.compile(r"^u-\d+$")})

    assert validator.validate({"id": "u-12"}).success
    assert not validator.validate({"id": "x-12"}).success


def test_pattern_is_literal_in_exhaustive_mode():
    validator = synthesize(re.compile("a+"), EXHAUSTIVE_OPTIONS)

    assert validator.validate(re.compile("a+")).success
    assert not validator.validate("aaa").success
    assert not validator.validate(re.compile("a+", re.I)).success


class TestSequences:
    def test_positional_sequences_accept_extra_elements(self):
        assert synthesize([1, 2]).validate([1, 2, 3]).success

    def test_shorter_candidate_reports_missing_element(self):
        result = synthesize([1, 2]).validate([1])

        assert not result.success
        assert result.issues[0].path == (1,)
        assert "missing element" in result.issues[0].message

    def test_exhaustive_rejects_longer_candidate(self):
        result = synthesize([1, 2], EXHAUSTIVE_OPTIONS).validate([1, 2, 3])

        assert not result.success
        assert "expected exactly 2 element(s), received 3" in result.error

    def test_exhaustive_requires_same_sequence_type(self):
        assert synthesize((1, 2)).validate([1, 2]).success
        assert not synthesize((1, 2), EXHAUSTIVE_OPTIONS).validate([1, 2]).success

    def test_collapsed_sequences_accept_any_length(self):
        validator = synthesize([1], SHAPE_OPTIONS)

        assert validator.validate([]).success
        assert validator.validate([5, 6, 7]).success
        assert not validator.validate([5, "6"]).success

    def test_collapsed_mixed_sequence_becomes_union(self):
        validator = synthesize([1, "a", 2], SHAPE_OPTIONS)

        assert validator.validate(["x", 3, "y"]).success
        assert not validator.validate([1.5]).success

    def test_collapsed_empty_sequence_accepts_only_empty(self):
        validator = synthesize([], SHAPE_OPTIONS)

        assert validator.validate([]).success
        assert not validator.validate([1]).success

    def test_unmixed_sequences_use_first_element(self):
        options = SynthesisOptions(literal_primitives=False, positional_sequences=False, mixed_sequences=False)
        validator = synthesize([1, "a"], options)

        assert validator.validate([1, 2]).success
        assert not validator.validate(["a"]).success


def test_empty_mapping_literal_only_in_literal_mode():
    assert not synthesize({}).validate({"a": 1}).success
    assert synthesize({}).validate({}).success
    assert synthesize({}, SHAPE_OPTIONS).validate({"a": 1}).success


class TestCycles:
    def test_cyclic_dict_template_accepts_itself(self):
        node = {"name": "root"}
        node["self"] = node

        assert synthesize(node).validate(node).success
        assert synthesize(node, EXHAUSTIVE_OPTIONS).validate(node).success

    def test_cyclic_list_template_accepts_itself(self):
        items = [1]
        items.append(items)

        assert synthesize(items).validate(items).success

    def test_cycle_still_detects_mismatch_below_it(self):
        template = {"name": "root"}
        template["child"] = template
        candidate = {"name": "root", "child": {"name": "other", "child": None}}

        result = synthesize(template).validate(candidate)

        assert not result.success
        assert "at child.name: expected 'root', received 'other'" in result.error

    def test_shared_node_is_not_a_cycle(self):
        shared = {"x": 1}
        validator = synthesize({"a": shared, "b": shared})

        assert validator.validate({"a": {"x": 1}, "b": {"x": 1}}).success
        result = validator.validate({"a": {"x": 1}, "b": {"x": 2}})
        assert [issue.path for issue in result.issues] == [("b", "x")]


def test_max_depth_accepts_anything_below_limit():
    options = SynthesisOptions(max_depth=1)
    validator = synthesize({"a": {"b": 1}}, options)

    assert validator.validate({"a": {"b": "anything"}}).success
    assert not validator.validate({}).success


@pytest.mark.parametrize("key", ["__proto__", "__class__"])
def test_poisoned_keys_are_rejected(key):
    with pytest.raises(SynthesisError, match=key):
        synthesize({"a": {key: 1}})
    with pytest.raises(TypeError):
        synthesize({key: 1})


class TestObjects:
    def test_dataclass_template_matches_by_attribute(self):
        validator = synthesize(Point(1, 2))

        assert validator.validate(Point(1, 2)).success
        assert validator.validate({"x": 1, "y": 2}).success
        assert issues_of(validator, Point(1, 3)) == ["at y: expected 2, received 3"]

    def test_plain_object_template_skips_private_attributes(self):
        validator = synthesize(Plain("a", ["t"]))

        other = Plain("a", ["t", "u"])
        other._secret = "different"
        assert validator.validate(other).success

    def test_exhaustive_object_requires_class(self):
        validator = synthesize(Point(1, 2), EXHAUSTIVE_OPTIONS)

        assert validator.validate(Point(1, 2)).success
        assert "expected Point, received dict" in validator.validate({"x": 1, "y": 2}).error

    def test_open_mapping_matches_object_attributes(self):
        assert synthesize({"x": 1}).validate(Point(1, 5)).success
        assert not synthesize({"x": 1}, EXHAUSTIVE_OPTIONS).validate(Point(1, 5)).success


def test_sets_compare_by_value_in_literal_mode():
    validator = synthesize({1, 2})

    assert validator.validate(frozenset({1, 2})).success
    assert not validator.validate({1, 2, 3}).success
    assert synthesize({1, 2}, SHAPE_OPTIONS).validate({9}).success


def test_exception_template_matches_by_class():
    validator = synthesize(ValueError("x"))

    assert validator.validate(ValueError("other")).success
    assert not validator.validate(TypeError("x")).success


def test_callable_template_accepts_any_callable():
    validator = synthesize({"fn": len})

    assert validator.validate({"fn": print}).success
    assert not validator.validate({"fn": 1}).success


def test_validators_pass_through_unchanged():
    integer = InstanceValidator(int)

    assert synthesize(integer) is integer
    assert synthesize({"n": integer}).validate({"n": 3}).success
    assert not synthesize({"n": integer}).validate({"n": True}).success
