from functools import reduce
from typing import (
    Any,
    Callable,
    Generic,
    Iterable,
    NamedTuple,
    Optional,
    TypeVar,
    Union,
)

from lazystream.util.functiontools import friendly_repr, nostop
from lazystream.util.validationtools import validate_callable

T = TypeVar("T")
U = TypeVar("U")


class StreamInput(NamedTuple):
    """
    An element travelling through a pipeline, along with whether it is still accepted.

    `acceptance` is either a bool or a predicate over `value`, evaluated by `accepts`.
    """

    value: Any
    acceptance: Union[bool, Callable[[Any], Any]] = True

    def accepts(self) -> bool:
        if isinstance(self.acceptance, bool):
            return self.acceptance
        return bool(self.acceptance(self.value))

    @staticmethod
    def wrap(
        value: Any, acceptance: Union[bool, Callable[[Any], Any]] = True
    ) -> "StreamInput":
        return StreamInput(value, acceptance)


Stage = Callable[[StreamInput], StreamInput]


class Operator(Generic[T, U]):
    """
    A map stage: transforms the value of accepted inputs, lets rejected inputs through untouched.
    """

    __slots__ = ("callback", "_callback")

    def __init__(self, callback: Optional[Callable[[T], U]] = None) -> None:
        if callback is not None:
            validate_callable(callback, "callback")
        self.callback = callback
        self._callback = nostop(callback) if callback is not None else None

    def apply(self, input: StreamInput) -> StreamInput:
        if not input.accepts():
            return input
        if self._callback is None:
            return input
        return StreamInput.wrap(self._callback(input.value), True)

    __call__ = apply

    def __repr__(self) -> str:
        return f"map({friendly_repr(self.callback)})"

    @staticmethod
    def create(callback: Optional[Callable[[T], U]] = None) -> "Operator[T, U]":
        return Operator(callback)


MapStage = Operator


class FilterStage(Generic[T]):
    """
    A filter stage: re-evaluates the acceptance of accepted inputs, keeps their value unchanged.
    """

    __slots__ = ("predicate", "_predicate")

    def __init__(self, predicate: Callable[[T], Any]) -> None:
        validate_callable(predicate, "predicate")
        self.predicate = predicate
        self._predicate = nostop(predicate)

    def apply(self, input: StreamInput) -> StreamInput:
        if not input.accepts():
            return input
        return StreamInput.wrap(input.value, bool(self._predicate(input.value)))

    __call__ = apply

    def __repr__(self) -> str:
        return f"filter({friendly_repr(self.predicate)})"


def _then(first: Stage, second: Stage) -> Stage:
    return lambda input: second(first(input))


def _identity(input: StreamInput) -> StreamInput:
    return input


def compose(stages: Iterable[Stage]) -> Stage:
    """
    Composes `stages` into a single stage applying them in order, the first registered running first.
    """
    return reduce(_then, stages, _identity)
