import pytest

from phrased import expect
from phrased.assertion import Catalog, create_assertion
from phrased.assertion.matcher import match_assertion, resolve
from phrased.assertion.slots import ANY, SIZED, STRING
from phrased.errors import AmbiguousAssertionError, DispatchError, UnknownAssertionError


def passes(subject, *params):
    return None


def test_more_specific_slot_wins():
    generic = create_assertion([ANY, "to be tidy"], passes)
    specific = create_assertion([STRING, "to be tidy"], passes)
    catalog = Catalog([generic, specific])

    assert resolve(catalog, ("text", "to be tidy"), is_async=False).assertion is specific
    assert resolve(catalog, (42, "to be tidy"), is_async=False).assertion is generic


def test_equally_specific_matches_are_ambiguous():
    catalog = Catalog(
        [
            create_assertion([STRING, "to be tidy"], passes),
            create_assertion([SIZED, "to be tidy"], passes),
        ]
    )

    with pytest.raises(AmbiguousAssertionError) as excinfo:
        resolve(catalog, ("text", "to be tidy"), is_async=False)

    assert set(excinfo.value.candidates) == {"string-to-be-tidy-1s2p", "sized-to-be-tidy-1s2p"}
    assert isinstance(excinfo.value, DispatchError)


def test_match_candidate_carries_values_without_phrases():
    assertion = create_assertion([ANY, "to be between", ANY, "and also", ANY], passes)

    candidate = match_assertion(assertion, (5, "to be between", 1, "and also", 9))

    assert candidate.values == (5, 1, 9)
    assert not candidate.mismatch


def test_arity_mismatch_is_not_a_candidate():
    assertion = create_assertion([ANY, "to be tidy"], passes)

    assert match_assertion(assertion, (1, "to be tidy", 2)) is None


def test_unknown_phrase_suggests_nearest():
    with pytest.raises(UnknownAssertionError) as excinfo:
        expect.check(1, "to be a numbr")

    assert excinfo.value.suggestion == "to be a number"
    assert "Did you mean 'to be a number'?" in str(excinfo.value)
    assert excinfo.value.arguments == (1, "to be a numbr")


def test_async_phrase_on_sync_path_points_to_check_async():
    async def job():
        return 1

    coroutine = job()
    try:
        with pytest.raises(UnknownAssertionError, match="check_async"):
            expect.check(coroutine, "to resolve")
    finally:
        coroutine.close()


def test_async_hint_needs_an_async_assertion_accepting_the_subject():
    with pytest.raises(UnknownAssertionError) as excinfo:
        expect.check(5, "to resolve")

    assert "check_async" not in str(excinfo.value)
    assert "only exists as an asynchronous assertion" in str(excinfo.value)


def test_async_iterable_on_sync_path_lists_near_miss_and_hint():
    async def stream():
        yield 1

    with pytest.raises(UnknownAssertionError) as excinfo:
        expect.check(stream(), "to yield", 1)

    message = str(excinfo.value)
    assert "is not a non-string iterable" in message
    assert "use check_async()" in message


def test_slot_mismatch_is_reported_as_near_miss():
    with pytest.raises(UnknownAssertionError) as excinfo:
        expect.check("abc", "to have arity", 1)

    assert any("is not a callable" in reason for reason in excinfo.value.near_misses)


def test_wrong_argument_count_is_reported():
    with pytest.raises(UnknownAssertionError, match="different number of arguments"):
        expect.check(1, "to be a number", 2)


def test_non_string_phrase_is_unknown():
    with pytest.raises(UnknownAssertionError, match="must be a phrase string"):
        expect.check(1, 2)


def test_missing_phrase_is_unknown():
    with pytest.raises(UnknownAssertionError):
        expect.check(1)
