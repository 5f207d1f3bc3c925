import pytest

from phrased import (
    DoubleNegationError,
    UnexpectedAsyncError,
    UnknownAssertionError,
    ValidationFailure,
    check,
    create_assertion,
    embed,
    embed_async,
    evaluate,
    expect,
    fail,
    outcomes_collector,
    register,
)
from phrased.assertion.slots import ANY, NUMBER
from phrased.outcome import CONJUNCTION_ID, FAIL_ID


def test_type_assertion_passes_silently():
    assert check("hello", "to be a string") is None


def test_size_assertion_on_mapping():
    check({"a": 1}, "to have size", 1)


def test_failed_length_reports_actual_and_expected():
    with pytest.raises(ValidationFailure) as excinfo:
        check([1, 2, 3], "to have length", 2)

    failure = excinfo.value
    assert failure.actual == 3
    assert failure.expected == 2
    assert failure.assertion_id == "sized-to-have-length-to-have-size-non-negative-integer-2s3p"
    assert isinstance(failure, AssertionError)


def test_extra_keys_pass_satisfy_and_fail_exhaustive():
    check({"a": 1, "b": 2}, "to satisfy", {"a": 1})

    with pytest.raises(ValidationFailure, match="unexpected key"):
        check({"a": 1, "b": 2}, "to deep equal", {"a": 1})


def test_conjunction_shares_subject():
    check(5, "to be a number", "and", "to be greater than", 3)


class TestNegation:
    def test_negated_failure_passes(self):
        check(5, "not to be a string")

    def test_negated_pass_fails(self):
        with pytest.raises(ValidationFailure) as excinfo:
            check("x", "not to be a string")

        assert excinfo.value.diagnostic.negated
        assert str(excinfo.value) == "Expected 'x' not to be a string, but the assertion passed"

    def test_double_negation_is_a_dispatch_error(self):
        with pytest.raises(DoubleNegationError):
            check(5, "not not to be a string")

    def test_negated_unknown_phrase_is_still_unknown(self):
        with pytest.raises(UnknownAssertionError):
            check(5, "not to be shiny")


class TestConjunction:
    def test_single_failure_keeps_its_assertion_id(self):
        with pytest.raises(ValidationFailure) as excinfo:
            check(5, "to be a number", "and", "to be less than", 3)

        assert excinfo.value.assertion_id == "number-to-be-less-than-to-be-below-number-2s3p"

    def test_several_failures_are_combined(self):
        with pytest.raises(ValidationFailure) as excinfo:
            check(5, "to be a string", "and", "to be less than", 3)

        diagnostic = excinfo.value.diagnostic
        assert diagnostic.assertion_id == CONJUNCTION_ID
        assert len(diagnostic.failures) == 2
        assert str(excinfo.value).startswith("2 of 2 conjoined assertions failed:")

    def test_and_literal_is_rejoined_as_parameter(self):
        check(["and"], "to contain", "and")
        check("this and that", "to contain", "and")

    def test_negation_applies_per_segment(self):
        check(5, "not to be a string", "and", "to be a number")

    def test_every_segment_resolves_before_anything_runs(self):
        calls = []

        def record(subject):
            calls.append(subject)

        custom = register(create_assertion(["to be recorded"], record))

        with pytest.raises(UnknownAssertionError):
            custom.check(1, "to be recorded", "and", "to be shiny")
        assert calls == []


class TestEmbed:
    def test_embedded_assertion_passes(self):
        check({"n": 5, "tags": ["a"]}, "to satisfy", {"n": embed("to be a number"), "tags": embed("to have length", 1)})

    def test_embedded_failure_is_reported_at_its_path(self):
        with pytest.raises(ValidationFailure) as excinfo:
            check({"n": "five"}, "to satisfy", {"n": embed("to be a number")})

        details = excinfo.value.diagnostic.details
        assert details == ("at n: Expected 'five' to be a number",)

    def test_async_embed_on_sync_path_raises(self):
        with pytest.raises(UnexpectedAsyncError):
            check({"job": 1}, "to satisfy", {"job": embed_async("to resolve")})


def test_evaluate_returns_outcome_without_raising():
    outcome = evaluate(4, "to be a string")

    assert not outcome.passed
    assert not outcome
    assert outcome.diagnostic.message == "Expected 4 to be a string"


def test_fail_raises_with_fail_id():
    with pytest.raises(ValidationFailure) as excinfo:
        fail("gave up")

    assert excinfo.value.assertion_id == FAIL_ID
    assert str(excinfo.value) == "gave up"


def test_outcomes_collector_records_top_level_checks():
    outcomes = []
    with outcomes_collector(outcomes):
        check(1, "to be a number")
        with pytest.raises(ValidationFailure):
            check(1, "to be a string")
        check({"n": 1}, "to satisfy", {"n": embed("to be a number")})
    check(2, "to be a number")

    assert [outcome.passed for outcome in outcomes] == [True, False, True]


def test_register_returns_isolated_facade():
    def is_even(subject, *rest):
        return subject % 2 == 0

    custom = register(create_assertion([NUMBER, "to be even"], is_even))

    custom.check(4, "to be even")
    custom.check(4, "to be a number")
    with pytest.raises(UnknownAssertionError):
        check(4, "to be even")
    assert len(custom.catalog) == len(expect.catalog) + 1


def test_custom_embed_uses_its_own_catalog():
    custom = register(create_assertion([ANY, "to be shiny"], lambda subject: subject == "gold"))

    custom.check({"metal": "gold"}, "to satisfy", {"metal": custom.embed("to be shiny")})
    with pytest.raises(ValidationFailure):
        custom.check({"metal": "tin"}, "to satisfy", {"metal": custom.embed("to be shiny")})
