import re

import pytest

from phrased.builtins._async import TimeoutOptions
from phrased.errors import UnexpectedAsyncError
from phrased.expect import Expect
from phrased.schema.validators import (
    ANY,
    BackReference,
    EmbeddedValidator,
    InstanceValidator,
    Issue,
    ModelValidator,
    PatternValidator,
    UnionValidator,
    format_path,
    same_value,
)


@pytest.mark.parametrize(
    "path, expected",
    [
        ((), ""),
        (("a", "b", 0), "a.b[0]"),
        ((0, "name"), "[0].name"),
        (("a", "two words"), "a['two words']"),
    ],
)
def test_format_path(path, expected):
    assert format_path(path) == expected


def test_issue_str_includes_path_only_when_nested():
    assert str(Issue((), "boom")) == "boom"
    assert str(Issue(("a", 1), "boom")) == "at a[1]: boom"


def test_same_value_rules():
    assert same_value(1, 1.0)
    assert not same_value(1, True)
    assert not same_value("1", 1)
    assert same_value(None, None)
    assert not same_value(0, None)


def test_strict_scalar_instance_check():
    assert InstanceValidator(int).validate(3).success
    assert not InstanceValidator(int).validate(True).success
    assert not InstanceValidator(str).validate(b"x").success


def test_union_takes_first_matching_option():
    validator = UnionValidator([InstanceValidator(int), InstanceValidator(str)])

    assert validator.validate("x").success
    assert "expected int | str" in validator.validate(1.5).error


def test_pattern_validator_handles_bytes_patterns():
    assert PatternValidator(re.compile(rb"ab")).validate(b"xaby").success
    assert PatternValidator(re.compile("12")).validate(3124).success


def test_model_validator_coerces_mappings():
    validator = ModelValidator(TimeoutOptions)

    result = validator.validate({"within": 20})
    assert result.success
    assert result.data == TimeoutOptions(within=20)


def test_model_validator_reports_field_paths():
    result = ModelValidator(TimeoutOptions).validate({"within": -1, "other": 1})

    assert not result.success
    assert {issue.path for issue in result.issues} == {("within",), ("other",)}


def test_unbound_back_reference_raises():
    with pytest.raises(RuntimeError):
        BackReference().validate(1)


def test_bound_back_reference_delegates():
    reference = BackReference()
    reference.bind(ANY)

    assert reference.validate(object()).success


def test_async_embedded_validator_rejects_sync_validation():
    validator = EmbeddedValidator(Expect().embed_async("to resolve"))

    with pytest.raises(UnexpectedAsyncError):
        validator.validate(1)


def test_back_reference_to_async_embed_rejects_sync_validation():
    reference = BackReference()
    reference.bind(UnionValidator([InstanceValidator(str), EmbeddedValidator(Expect().embed_async("to resolve"))]))

    with pytest.raises(UnexpectedAsyncError):
        reference.validate(1)
