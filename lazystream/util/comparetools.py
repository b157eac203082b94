import operator
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Dict, Union

from lazystream.util.functiontools import is_condition_callable, strictly_equal

_MISSING = object()


_OPERATORS: Dict[str, Callable[[Any, Any], bool]] = {
    "=": operator.eq,
    "==": operator.eq,
    "===": strictly_equal,
    "!=": operator.ne,
    "<>": operator.ne,
    "!==": lambda a, b: not strictly_equal(a, b),
    "<": operator.lt,
    ">": operator.gt,
    "<=": operator.le,
    ">=": operator.ge,
}

_NEGATED_OPERATORS = ("!=", "<>", "!==")


def _get_one(item: Any, key: Any) -> Any:
    if isinstance(item, Mapping):
        return item.get(key, _MISSING)
    is_index = isinstance(key, int) or (isinstance(key, str) and key.isdigit())
    if is_index and isinstance(item, Sequence) and not isinstance(item, str):
        try:
            return item[int(key)]
        except IndexError:
            return _MISSING
    if isinstance(key, str):
        return getattr(item, key, _MISSING)
    return _MISSING


def get_value(item: Any, key: Any) -> Any:
    """
    Looks `key` up in `item`, through mappings, attributes and sequence indexes.

    A string key containing dots is a path: `get_value({"a": {"b": 1}}, "a.b") == 1`.
    Returns None if any part of the path is missing.
    """
    if key is None:
        return item
    if isinstance(item, Mapping) and key in item:
        return item[key]
    parts = key.split(".") if isinstance(key, str) else [key]
    for part in parts:
        item = _get_one(item, part)
        if item is _MISSING:
            return None
    return item


class ValueResolver:
    __slots__ = ("key_or_fn",)

    def __init__(self, key_or_fn: Union[str, Callable[[Any], Any]]) -> None:
        self.key_or_fn = key_or_fn

    def __call__(self, item: Any) -> Any:
        if is_condition_callable(self.key_or_fn):
            return self.key_or_fn(item)
        return get_value(item, self.key_or_fn)

    @staticmethod
    def new(key_or_fn: Union[str, Callable[[Any], Any]]) -> "ValueResolver":
        return ValueResolver(key_or_fn)


class CompareValue:
    """
    Predicate comparing the value found at `key` in an element against `value`.

    ```
    CompareValue.new("age", ">=", 18)({"age": 21})  # True
    ```
    """

    __slots__ = ("key", "operator", "value")

    def __init__(self, key: Any, operator: str, value: Any) -> None:
        if operator not in _OPERATORS:
            raise ValueError(
                f"`operator` must be one of {list(_OPERATORS)} but got {repr(operator)}"
            )
        self.key = key
        self.operator = operator
        self.value = value

    def __call__(self, item: Any) -> bool:
        found = ValueResolver(self.key)(item)
        try:
            return bool(_OPERATORS[self.operator](found, self.value))
        except TypeError:
            return self.operator in _NEGATED_OPERATORS

    def __repr__(self) -> str:
        return f"CompareValue({repr(self.key)}, {repr(self.operator)}, {repr(self.value)})"

    @staticmethod
    def new(key: Any, *args: Any) -> "CompareValue":
        if len(args) > 2:
            raise TypeError(
                f"`new` takes at most 3 arguments but got {1 + len(args)}"
            )
        if not args:
            return CompareValue(key, "=", True)
        if len(args) == 1:
            return CompareValue(key, "=", args[0])
        return CompareValue(key, args[0], args[1])
