import sys
from typing import List

import pytest

from lazystream import Stream
from tests.utils.func import is_even
from tests.utils.source import INTEGERS, N, ints, naturals


def test_skip_raises_on_negative_count() -> None:
    with pytest.raises(ValueError, match="`count` must be >= 0 but got -1"):
        ints().skip(-1)


@pytest.mark.parametrize(
    "source, count, expected",
    [
        # empty source
        ([], 0, []),
        # skip nothing
        (INTEGERS, 0, list(INTEGERS)),
        (INTEGERS, 1, list(INTEGERS)[1:]),
        (INTEGERS, 2, list(INTEGERS)[2:]),
        # skip everything if count equals source length
        (INTEGERS, N, []),
        # skip everything if count exceeds source length
        (INTEGERS, sys.maxsize, []),
    ],
)
def test_skip_cases(source, count: int, expected: List[int]) -> None:
    assert Stream.of(source).skip(count).to_list() == expected


def test_skip_counts_pulled_elements_not_accepted_ones() -> None:
    assert Stream.range(1, 10).filter(is_even).skip(4).to_list() == [6, 8, 10]


def test_skip_then_take() -> None:
    assert naturals().skip(5).take(3).to_list() == [6, 7, 8]


def test_skip_keeps_infinite_stream_unsafe() -> None:
    assert naturals().skip(5).infinite
