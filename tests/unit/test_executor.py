import pytest

from phrased import check
from phrased.assertion import ImplementationStyle, create_assertion, create_async_assertion
from phrased.assertion.executor import describe_call, execute, execute_async
from phrased.assertion.slots import ANY, NUMBER
from phrased.errors import AssertionImplementationError, UnexpectedAsyncError, ValidationFailure
from phrased.outcome import AssertionFailure
from phrased.schema import InstanceValidator


def is_odd(value):
    return value % 2 == 1


def test_describe_call_uses_first_alias():
    assertion = create_assertion([NUMBER, ("to be around", "to be near"), NUMBER], lambda a, b: None)

    assert describe_call(assertion, (1, 2)) == "Expected 1 to be around 2"
    assert describe_call(assertion, (1, 2), negated=True) == "Expected 1 not to be around 2"


class TestPredicateStyle:
    assertion = create_assertion(["to be odd"], is_odd, ImplementationStyle.PREDICATE)

    def test_true_passes(self):
        outcome = execute(self.assertion, (3,))

        assert outcome.passed
        assert outcome.assertion_id == "any-to-be-odd-1s2p"

    def test_false_fails_with_generic_message(self):
        outcome = execute(self.assertion, (4,))

        assert not outcome.passed
        assert outcome.diagnostic.message == "Expected 4 to be odd"
        assert outcome.diagnostic.actual == 4

    def test_truthy_non_true_result_fails(self):
        assertion = create_assertion(["to be counted"], lambda value: 1, ImplementationStyle.PREDICATE)

        assert not execute(assertion, (0,)).passed

    def test_exception_counts_as_failure(self):
        assertion = create_assertion(["to divide"], lambda value: 1 / value == 1, ImplementationStyle.PREDICATE)

        outcome = execute(assertion, (0,))

        assert not outcome.passed
        assert "ZeroDivisionError" in outcome.diagnostic.message


class TestFailureStyle:
    def test_none_and_true_pass(self):
        for result in (None, True):
            assertion = create_assertion(["to be fine"], lambda value, result=result: result)
            assert execute(assertion, (1,)).passed

    def test_false_fails(self):
        assertion = create_assertion(["to be fine"], lambda value: False)

        assert execute(assertion, (1,)).diagnostic.message == "Expected 1 to be fine"

    def test_failure_fields_are_kept(self):
        assertion = create_assertion(
            ["to be fine"],
            lambda value: AssertionFailure(message="custom", actual="a", expected="b"),
        )

        diagnostic = execute(assertion, (1,)).diagnostic

        assert (diagnostic.message, diagnostic.actual, diagnostic.expected) == ("custom", "a", "b")
        assert diagnostic.assertion_id == assertion.id

    def test_failure_without_message_gets_generic_one(self):
        assertion = create_assertion(["to be fine"], lambda value: AssertionFailure(actual=value))

        assert execute(assertion, (7,)).diagnostic.message == "Expected 7 to be fine"

    def test_raised_validation_failure_is_used_with_assertion_id(self):
        def impl(value):
            raise ValidationFailure("nope", actual=value)

        assertion = create_assertion(["to be fine"], impl)
        outcome = execute(assertion, (1,))

        assert outcome.diagnostic.message == "nope"
        assert outcome.assertion_id == assertion.id

    def test_nested_check_failure_is_reported_under_outer_id(self):
        assertion = create_assertion(["to be a count"], lambda value: check(value, "to be a number"))

        diagnostic = execute(assertion, ("x",)).diagnostic

        assert diagnostic.assertion_id == "any-to-be-a-count-1s2p"
        assert diagnostic.message == "Expected 'x' to be a number"
        assert [inner.assertion_id for inner in diagnostic.failures] == ["any-to-be-a-number-to-be-finite-1s2p"]

    def test_other_exceptions_propagate(self):
        def impl(value):
            raise KeyError("boom")

        with pytest.raises(KeyError):
            execute(create_assertion(["to be fine"], impl), (1,))

    def test_unsupported_return_is_an_implementation_error(self):
        assertion = create_assertion(["to be fine"], lambda value: "yes")

        with pytest.raises(AssertionImplementationError) as excinfo:
            execute(assertion, (1,))

        assert excinfo.value.result == "yes"
        assert excinfo.value.assertion_id == assertion.id

    def test_returned_validator_is_applied_to_subject(self):
        assertion = create_assertion([ANY, "to be like int", ANY], lambda value, other: InstanceValidator(int))

        assert execute(assertion, (1, None)).passed
        outcome = execute(assertion, ("1", None))
        assert not outcome.passed
        assert outcome.diagnostic.details == ("Input should be a valid integer, received '1'",)

    def test_awaitable_on_sync_path_is_rejected(self):
        async def later():
            return None

        assertion = create_assertion(["to be fine"], lambda value: later())

        with pytest.raises(UnexpectedAsyncError):
            execute(assertion, (1,))


class TestValidatorStyle:
    def test_validator_instance_implementation(self):
        assertion = create_assertion(["to be an integer value"], InstanceValidator(int))

        assert execute(assertion, (3,)).passed
        assert not execute(assertion, (3.5,)).passed

    def test_non_validator_return_is_an_implementation_error(self):
        assertion = create_assertion(["to be fine"], lambda value: None, ImplementationStyle.VALIDATOR)

        with pytest.raises(AssertionImplementationError):
            execute(assertion, (1,))


@pytest.mark.asyncio
async def test_async_executor_awaits_coroutines():
    async def impl(value):
        return None if value else AssertionFailure(message="falsy")

    assertion = create_async_assertion(["to eventually be truthy"], impl)

    assert (await execute_async(assertion, (1,))).passed
    assert (await execute_async(assertion, (0,))).diagnostic.message == "falsy"


@pytest.mark.asyncio
async def test_async_executor_runs_sync_predicates():
    assertion = create_assertion(["to be odd"], is_odd, ImplementationStyle.PREDICATE)

    assert (await execute_async(assertion, (1,))).passed
    assert not (await execute_async(assertion, (2,))).passed
