import datetime
import sys
from typing import List

import pytest

from lazystream import Stream
from tests.utils.func import double, is_even
from tests.utils.source import INTEGERS, N, ints, naturals


def test_take_raises_on_negative_count() -> None:
    with pytest.raises(ValueError, match="`count` must be >= 0 but got -1"):
        ints().take(-1)


@pytest.mark.parametrize(
    "source, count, expected",
    [
        # empty source
        ([], 1, []),
        # take nothing
        (INTEGERS, 0, []),
        (INTEGERS, 1, [0]),
        (INTEGERS, 2, [0, 1]),
        # all elements if count equals source length
        (INTEGERS, N, list(INTEGERS)),
        # all elements if count exceeds source length
        (INTEGERS, sys.maxsize, list(INTEGERS)),
    ],
)
def test_take_cases(source, count: int, expected: List[int]) -> None:
    assert Stream.of(source).take(count).to_list() == expected


def test_take_bounds_pulls_not_accepted_values() -> None:
    assert Stream.range(1, 10).filter(is_even).take(4).to_list() == [2, 4]


def test_take_makes_infinite_stream_safe() -> None:
    stream = naturals().take(10)
    assert not stream.infinite
    assert stream.to_list() == list(range(1, 11))


def test_take_does_not_pull_beyond_count() -> None:
    pulled: List[int] = []

    def source():
        for i in range(10):
            pulled.append(i)
            yield i

    Stream.of(source()).take(3).to_list()
    assert pulled == [0, 1, 2]


@pytest.mark.parametrize(
    "condition, expected",
    [
        (lambda c: c == "-", ["1", "2", "3", "4"]),
        ("-", ["1", "2", "3", "4"]),
        ("1", []),
        ("x", list("1234-56")),
    ],
)
def test_take_until_cases(condition, expected: List[str]) -> None:
    assert Stream.of("1234-56").take_until(condition).to_list() == expected


def test_take_until_makes_infinite_stream_safe() -> None:
    result = (
        naturals()
        .take_until(lambda x: x > 20)
        .filter(lambda x: x % 5 == 0)
        .map(double)
        .first()
    )
    assert result == 10
    stream = naturals().take_until(21)
    assert not stream.infinite
    assert stream.to_list() == list(range(1, 21))


def test_take_until_matches_values_of_the_same_type_only() -> None:
    assert Stream.of([1, 1.0, True, 2]).take_until(2.0).to_list() == [1, 1.0, True, 2]
    assert Stream.of([1, 1.0, True, 2]).take_until(True).to_list() == [1, 1.0]
    assert Stream.of([1, 1.0, True, 2]).take_while(1).to_list() == [1]


def test_take_until_stops_for_good() -> None:
    it = iter(Stream.of([0, 1, 2, 0, 1]).take_until(2))
    assert list(it) == [0, 1]
    assert list(it) == []


def test_take_while_not_flexible_stops_at_first_mismatch() -> None:
    assert Stream.of([2, 4, 5, 6, 8]).take_while(is_even, flexible=False).to_list() == [
        2,
        4,
    ]


def test_take_while_flexible_skips_mismatches() -> None:
    assert Stream.of([2, 4, 5, 6, 8]).take_while(is_even).to_list() == [2, 4, 6, 8]


def test_take_while_compares_non_callables_by_equality() -> None:
    assert Stream.of([1, 1, 2, 1]).take_while(1, flexible=False).to_list() == [1, 1]
    assert Stream.of([1, 1, 2, 1]).take_while(1).to_list() == [1, 1, 1]


def test_take_while_flexible_on_infinite_stream() -> None:
    result = (
        naturals()
        .take_while(lambda x: x > 10)
        .take(20)
        .filter(lambda x: x % 5 == 0)
        .map(double)
        .first()
    )
    assert result == 30


def test_take_while_then_first() -> None:
    assert naturals().take_while(lambda x: x <= 10).filter(is_even).first() == 2


def test_take_while_clears_infinite_flag() -> None:
    stream = naturals().take_while(lambda x: x <= 10, flexible=False)
    assert not stream.infinite
    assert stream.to_list() == list(range(1, 11))


def test_take_until_timeout_with_past_deadline() -> None:
    deadline = datetime.datetime.now() - datetime.timedelta(seconds=1)
    assert naturals().take_until_timeout(deadline).to_list() == []


def test_take_until_timeout_with_future_deadline() -> None:
    deadline = datetime.datetime.now() + datetime.timedelta(hours=1)
    assert ints().take_until_timeout(deadline).to_list() == list(INTEGERS)


def test_take_until_timeout_with_timezone_aware_deadline() -> None:
    deadline = datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(
        hours=1
    )
    assert Stream.range(1, 3).take_until_timeout(deadline).to_list() == [1, 2, 3]


def test_take_until_timeout_ends_infinite_stream() -> None:
    stream = naturals().take_until_timeout(datetime.timedelta(milliseconds=20))
    assert not stream.infinite
    assert stream.count() > 0


def test_take_until_timeout_raises_on_wrong_type() -> None:
    with pytest.raises(TypeError, match="`deadline` must be a datetime or a timedelta"):
        ints().take_until_timeout(10)  # type: ignore
