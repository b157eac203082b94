from functools import partial
from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")
R = TypeVar("R")


def get_name(obj: Any) -> str:
    return getattr(obj, "__name__", obj.__class__.__name__)


def friendly_repr(o: object) -> str:
    representation = repr(o)
    if representation.startswith("<"):  # default repr
        try:
            representation = getattr(o, "__name__")
        except AttributeError:
            representation = f"{o.__class__.__name__}(...)"
    return representation


def _nostop(func: Callable[[T], R], arg: T) -> R:
    try:
        return func(arg)
    except (StopIteration, StopAsyncIteration) as e:
        raise RuntimeError(f"{get_name(func)} raised {e.__class__.__name__}") from e


def nostop(func: Callable[[T], R]) -> Callable[[T], R]:
    """
    Wraps `func` so that a `StopIteration` it raises cannot be mistaken for the end of an iteration.
    """
    return partial(_nostop, func)


def is_condition_callable(value: Any) -> bool:
    # strings are matched literally, never looked up as callables
    return callable(value) and not isinstance(value, str)


def strictly_equal(a: Any, b: Any) -> bool:
    return type(a) is type(b) and a == b


class Equals(Generic[T]):
    __slots__ = ("value",)

    def __init__(self, value: T) -> None:
        self.value = value

    def __call__(self, elem: Any) -> bool:
        return strictly_equal(elem, self.value)

    def __repr__(self) -> str:
        return f"Equals({repr(self.value)})"


def as_predicate(condition: Any) -> Callable[[Any], Any]:
    """
    Resolves a condition into a predicate: callables are used as they are, any other value is matched by strict equality (same type and equal).
    """
    if is_condition_callable(condition):
        return nostop(condition)
    return Equals(condition)


def resolve_default(default: Any) -> Any:
    return default() if callable(default) else default
