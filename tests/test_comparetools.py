from typing import Any, NamedTuple

import pytest

from lazystream import CompareValue, ValueResolver
from lazystream.util.comparetools import get_value


class Point(NamedTuple):
    x: int
    y: int


@pytest.mark.parametrize(
    "item, key, expected",
    [
        ({"a": 1}, "a", 1),
        ({"a": {"b": 2}}, "a.b", 2),
        ({"a.b": 3}, "a.b", 3),
        ({"a": [10, 20]}, "a.1", 20),
        (Point(1, 2), "y", 2),
        ({"p": Point(1, 2)}, "p.x", 1),
        ([7, 8], 0, 7),
        ({"a": 1}, "missing", None),
        ({"a": {"b": 2}}, "a.c", None),
        ({"a": 1}, None, {"a": 1}),
    ],
)
def test_get_value(item: Any, key: Any, expected: Any) -> None:
    assert get_value(item, key) == expected


def test_value_resolver_with_key() -> None:
    assert ValueResolver.new("a")({"a": 1}) == 1


def test_value_resolver_with_function() -> None:
    assert ValueResolver(len)("abc") == 3


@pytest.mark.parametrize(
    "args, item, expected",
    [
        (("age", ">", 18), {"age": 21}, True),
        (("age", "<", 18), {"age": 21}, False),
        (("age", "<=", 21), {"age": 21}, True),
        (("age", ">=", 22), {"age": 21}, False),
        (("age", "=", 21), {"age": 21}, True),
        (("age", "==", 21.0), {"age": 21}, True),
        (("age", "===", 21.0), {"age": 21}, False),
        (("age", "!==", 21.0), {"age": 21}, True),
        (("age", "<>", 21), {"age": 21}, False),
        (("age", "!=", 20), {"age": 21}, True),
        # two arguments mean equality
        (("name", "ada"), {"name": "ada"}, True),
        # one argument means the key must be True
        (("active",), {"active": True}, True),
        (("active",), {"active": False}, False),
        # incomparable operands only satisfy negated operators
        (("age", ">", 18), {"age": None}, False),
        (("age", "!=", 18), {"age": None}, True),
    ],
)
def test_compare_value(args, item: Any, expected: bool) -> None:
    assert CompareValue.new(*args)(item) is expected


def test_compare_value_raises_on_unknown_operator() -> None:
    with pytest.raises(ValueError, match="`operator` must be one of"):
        CompareValue("age", "~", 1)


def test_compare_value_new_raises_on_too_many_arguments() -> None:
    with pytest.raises(TypeError, match="at most 3 arguments"):
        CompareValue.new("a", "=", 1, 2)


def test_compare_value_repr() -> None:
    assert repr(CompareValue.new("a", 1)) == "CompareValue('a', '=', 1)"
