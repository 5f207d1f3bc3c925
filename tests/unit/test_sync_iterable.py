import pytest

from phrased import UnknownAssertionError, ValidationFailure, check, embed


def numbers(count, log=None):
    try:
        yield from range(count)
    finally:
        if log is not None:
            log.append("closed")


def broken():
    yield 1
    raise ValueError("broken stream")


def test_yield_accepts_iterators_and_generators():
    check(iter([1, 2]), "to yield", 1)
    check(numbers(3), "to emit", 2)
    check((n * 2 for n in range(3)), "to yield value satisfying", 4)


def test_yield_stops_early_and_closes_generator():
    log = []

    check(numbers(1000, log), "to yield", 3)

    assert log == ["closed"]


def test_yield_reports_when_nothing_matches():
    with pytest.raises(ValidationFailure, match="no item matches 7"):
        check(numbers(3), "to yield", 7)


def test_exhaustive_variants_reject_extra_keys():
    records = [{"id": 1, "extra": True}, {"id": 2}]

    check(iter(records), "to yield value exhaustively satisfying", {"id": 2})
    with pytest.raises(ValidationFailure, match="unexpected key"):
        check(iter(records), "to yield first exhaustively satisfying", {"id": 1})
    check(iter(records), "to yield last exhaustively satisfying", {"id": 2})
    with pytest.raises(ValidationFailure, match=r"at \[0\]"):
        check(iter(records), "to yield items exhaustively satisfying", {"id": embed("to be an integer")})


def test_items_first_and_last():
    check(numbers(4), "to yield items satisfying", embed("to be an integer"))
    check(numbers(4), "to yield first", 0)
    check(numbers(4), "to yield last satisfying", 3)
    with pytest.raises(ValidationFailure, match="received an empty iterable"):
        check(numbers(0), "to yield first satisfying", 0)
    with pytest.raises(ValidationFailure, match=r"at \[3\]"):
        check(numbers(4), "to yield last", 2)


def test_sequence_variants():
    check(numbers(3), "to yield exactly", [0, 1, 2])
    check(numbers(3), "to yield array satisfying", [0, 1])
    with pytest.raises(ValidationFailure, match="exactly 2"):
        check(numbers(3), "to yield exactly", [0, 1])


def test_count_bounds():
    check(numbers(3), "to yield count", 3)
    check({"a": 1, "b": 2}, "to yield at least", 2)
    check(numbers(2), "to yield at most", 5)
    with pytest.raises(ValidationFailure) as excinfo:
        check(numbers(2), "to yield count", 3)
    assert (excinfo.value.actual, excinfo.value.expected) == (2, 3)
    with pytest.raises(ValidationFailure, match="yielded more"):
        check(numbers(10), "to yield at most", 2)


def test_empty_iterable():
    check(set(), "to be an empty iterable")
    check(numbers(0), "to be an empty iterable")
    with pytest.raises(ValidationFailure):
        check(numbers(1), "to be an empty iterable")


def test_complete():
    check(numbers(3), "to complete")
    with pytest.raises(ValidationFailure, match="broken stream"):
        check(broken(), "to finish")


def test_strings_are_not_iterable_subjects():
    with pytest.raises(UnknownAssertionError, match="non-string iterable"):
        check("abc", "to yield", "a")


def test_negated_yield():
    check(numbers(3), "not to yield", 9)
