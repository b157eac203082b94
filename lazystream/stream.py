import datetime
import logging
from abc import ABC, abstractmethod
from operator import methodcaller
from typing import (
    Any,
    Callable,
    Iterable,
    Iterator,
    List,
    Optional,
    TypeVar,
    Union,
    cast,
)

from lazystream import functions
from lazystream.pipeline import FilterStage, Operator, Stage, compose
from lazystream.util.comparetools import CompareValue
from lazystream.util.constants import DEFAULT_IDENTITY, NO_DEFAULT
from lazystream.util.errors import UnsafeStreamError, ValueNotFoundError
from lazystream.util.functiontools import (
    as_predicate,
    friendly_repr,
    resolve_default,
)
from lazystream.util.loggertools import get_logger
from lazystream.util.validationtools import validate_callable, validate_iterable

T = TypeVar("T")
U = TypeVar("U")
R = TypeVar("R")


class BaseStream(ABC, Iterable[T]):
    """
    Lazy single-pass pipeline over a source iterable.

    Stage operations (`map`, `filter`) are only registered: they run when a terminal operation
    (`collect`, `to_list`, `reduce`, `each`, `first`, `last`, ...) pulls the source, once.
    Bounding operations (`take`, `take_until`, `take_while`, `skip`) replace the source by
    an iterator bounding what is pulled from it.

    A stream is consumed by its first terminal operation: a second one sees an exhausted source.
    """

    __slots__ = (
        "_source",
        "_stages",
        "_infinite",
        "_upstream_source",
        "_origin",
        "_operations",
        "_observed",
    )

    def __init__(self, source: Iterable[T], *, infinite: bool = False) -> None:
        validate_iterable(source)
        self._source: Iterator = iter(source)
        self._stages: List[Stage] = []
        self._infinite = infinite or (
            isinstance(source, BaseStream) and source.infinite
        )
        self._upstream_source = source
        self._origin: Optional[str] = None
        self._operations: List[str] = []
        self._observed: Optional[str] = None

    @property
    def infinite(self) -> bool:
        """
        Returns:
            bool: True if the source has no end and must be bounded before being materialized.
        """
        return self._infinite

    def __iter__(self) -> Iterator[T]:
        """
        Returns:
            Iterator[T]: The accepted values, pulled lazily. Not guarded against infinite sources.
        """
        return functions.pipeline(self._source, compose(self._stages), self._observed)

    def _origin_repr(self) -> str:
        if self._origin is None:
            return f"{self.__class__.__name__}({friendly_repr(self._upstream_source)})"
        return self._origin

    def __repr__(self) -> str:
        return "".join([self._origin_repr(), *(f".{op}" for op in self._operations)])

    def __str__(self) -> str:
        lines = [self._origin_repr(), *(f".{op}" for op in self._operations)]
        return "(\n" + "".join(f"    {line}\n" for line in lines) + ")"

    def _register(self, stage: Stage, description: str) -> None:
        self._stages.append(stage)
        self._operations.append(description)

    def _bound(self, source: Iterator, description: str) -> None:
        self._source = source
        self._operations.append(description)

    def _throw_if_unsafe(self) -> None:
        if self._infinite:
            raise UnsafeStreamError()

    # stages

    @abstractmethod
    def map(self, transformation: Callable[[Any], Any]) -> "BaseStream": ...

    @abstractmethod
    def filter(self, predicate: Callable[[Any], Any] = bool) -> "BaseStream": ...

    @abstractmethod
    def reduce(self, reducer: Callable[[Any, Any], Any], identity: Any = DEFAULT_IDENTITY) -> Any: ...

    # bounding

    def take(self, count: int) -> "BaseStream[T]":
        """
        Bounds the source to its first `count` elements. Makes an infinite stream safe.

        Args:
            count (int): The maximum number of elements to pull from the source.

        Returns:
            BaseStream[T]: This stream.
        """
        self._bound(functions.take(self._source, count), f"take({count})")
        self._infinite = False
        return self

    def take_until(self, condition: Any) -> "BaseStream[T]":
        """
        Bounds the source to the elements preceding the first one satisfying `condition`.

        Args:
            condition (Any): A predicate, or a value the stopping element must be equal to.

        Returns:
            BaseStream[T]: This stream.
        """
        self._bound(
            functions.take_until(self._source, condition),
            f"take_until({friendly_repr(condition)})",
        )
        self._infinite = False
        return self

    def take_while(self, condition: Any, flexible: bool = True) -> "BaseStream[T]":
        """
        Only lets through the source elements satisfying `condition`.

        Careful: in `flexible` mode the elements not satisfying `condition` are skipped but the
        iteration goes on, so an infinite source stays infinite in practice.

        Args:
            condition (Any): A predicate, or a value the elements must be equal to.
            flexible (bool, optional): If False, the iteration stops at the first element not satisfying `condition`. (default: skips it and goes on)

        Returns:
            BaseStream[T]: This stream.
        """
        self._bound(
            functions.take_while(self._source, condition, flexible=flexible),
            f"take_while({friendly_repr(condition)}, flexible={flexible})",
        )
        self._infinite = False
        return self

    def take_until_timeout(
        self, deadline: Union[datetime.datetime, datetime.timedelta]
    ) -> "BaseStream[T]":
        """
        Stops pulling the source once `deadline` has passed.

        Args:
            deadline (Union[datetime.datetime, datetime.timedelta]): The point in time after which the iteration ends, or its delay from now.

        Returns:
            BaseStream[T]: This stream.
        """
        self._bound(
            functions.take_until_timeout(self._source, deadline),
            f"take_until_timeout({repr(deadline)})",
        )
        self._infinite = False
        return self

    def skip(self, count: int) -> "BaseStream[T]":
        """
        Discards the first `count` elements pulled from the source.

        Returns:
            BaseStream[T]: This stream.
        """
        self._bound(functions.skip(self._source, count), f"skip({count})")
        return self

    def observe(self, what: str = "elements") -> "BaseStream[T]":
        """
        Logs how many source elements the pipeline pulled, accepted, rejected and failed on,
        on a logarithmic scale (1st, 2nd, 4th, 8th, ... pull) and once the source is exhausted.

        Observes the whole pipeline whatever its position among the other operations.

        Args:
            what (str): (plural) name of the pulled elements.

        Returns:
            BaseStream[T]: This stream.
        """
        self._observed = what
        self._operations.append(f"observe({repr(what)})")
        return self

    def display(self, level: int = logging.INFO) -> "BaseStream[T]":
        """
        Logs a representation of the stream.
        """
        get_logger().log(level, str(self))
        return self

    # terminal

    def collect(self, collector: Callable[[Iterator[T]], R]) -> R:
        """
        Passes the lazy iterator over the accepted values to `collector`.

        Raises:
            UnsafeStreamError: If the stream is infinite.

        Returns:
            R: The result of `collector`.
        """
        validate_callable(collector, "collector")
        self._throw_if_unsafe()
        return collector(iter(self))

    def to_list(self) -> List[Any]:
        from lazystream.collectors import ArrayCollector

        return self.collect(ArrayCollector())

    def to_json(self, **kwargs: Any) -> str:
        from lazystream.collectors import JsonCollector

        return self.collect(JsonCollector(**kwargs))

    def each(self, callback: Callable[[T], Any]) -> None:
        """
        Calls `callback` on every accepted value.

        Raises:
            UnsafeStreamError: If the stream is infinite.
        """
        validate_callable(callback, "callback")
        self._throw_if_unsafe()
        for value in self:
            callback(value)

    def count(self) -> int:
        self._throw_if_unsafe()
        return sum(1 for _ in self)

    def first_or(self, default: Any = None) -> Any:
        """
        Returns the first accepted value, or `default` (called if callable) if there is none.
        """
        for value in self:
            return value
        return resolve_default(default)

    def first(self, value: Any = None, default: Any = None) -> Any:
        """
        Returns the first accepted value satisfying `value`, or `default` (called if callable) if there is none.

        Args:
            value (Any, optional): A predicate, or a value to look for. (default: any value)
            default (Any, optional): Returned if no value is found; called if callable. (default: None)
        """
        if value is None:
            return self.first_or(default)
        predicate = as_predicate(value)
        for elem in self:
            if predicate(elem):
                return elem
        return resolve_default(default)

    def first_or_fail(
        self, key: Any = NO_DEFAULT, operator: Any = NO_DEFAULT, value: Any = NO_DEFAULT
    ) -> Any:
        """
        Like `first`, but raises if no value is found.

        With a single argument, `key` is a predicate or a value to look for.
        With two or three arguments, elements are matched by comparing the value at `key` (see `CompareValue`):
        ```
        stream.first_or_fail("age", ">=", 18)
        stream.first_or_fail("name", "foo")  # same as "name", "=", "foo"
        ```

        Raises:
            ValueNotFoundError: If no accepted value matches.
        """
        args = [arg for arg in (key, operator, value) if arg is not NO_DEFAULT]
        if len(args) > 1:
            condition = CompareValue.new(*args)
        else:
            condition = None if key is NO_DEFAULT else key
        found = self.first(condition, NO_DEFAULT)
        if found is NO_DEFAULT:
            raise ValueNotFoundError(None if key is NO_DEFAULT else key)
        return found

    def last(self, default: Any = None) -> Any:
        """
        Returns the last accepted value, or `default` (called if callable) if there is none.

        Raises:
            UnsafeStreamError: If the stream is infinite.
        """
        self._throw_if_unsafe()
        last: Any = NO_DEFAULT
        for last in self:
            pass
        return resolve_default(default) if last is NO_DEFAULT else last


class Stream(BaseStream[T]):
    __slots__ = ()

    def __init__(self, source: Iterable[T], *, infinite: bool = False) -> None:
        """
        A `Stream[T]` decorates an `Iterable[T]` with a fluent interface of lazy operations.

        Args:
            source (Iterable[T]): The elements to stream, pulled once.
            infinite (bool, optional): Whether the source never ends. (default: finite)
        """
        super().__init__(source, infinite=infinite)

    @classmethod
    def of(cls, source: Iterable[T]) -> "Stream[T]":
        return cls(source)

    @classmethod
    def iterate(cls, seed: T, successor: Callable[[T], T]) -> "Stream[T]":
        """
        Streams `seed`, `successor(seed)`, `successor(successor(seed))`, ... endlessly.

        The stream is infinite: it must be bounded (`take`, `take_until`, `take_while`) before being materialized.
        """
        stream = cls(functions.iterate(seed, successor), infinite=True)
        stream._origin = (
            f"{cls.__name__}.iterate({repr(seed)}, {friendly_repr(successor)})"
        )
        return stream

    @classmethod
    def range(cls, start: int, end: int, step: int = 1) -> "Stream[int]":
        """
        Streams the integers from `start` to `end` both included, by `step`.

        Raises:
            InvalidRangeError: If `step` never leads from `start` to `end`.
        """
        stream = cls(functions.arange(start, end, step))
        stream._origin = f"{cls.__name__}.range({start}, {end}, {step})"
        return cast("Stream[int]", stream)

    def map(self, transformation: Callable[[T], U]) -> "Stream[U]":
        """
        Registers `transformation` to be applied on the accepted values.

        Returns:
            Stream[U]: This stream.
        """
        validate_callable(transformation, "transformation")
        operator = Operator.create(transformation)
        self._register(operator, repr(operator))
        return cast("Stream[U]", self)

    def map_into(self, constructor: Callable[[T], U]) -> "Stream[U]":
        validate_callable(constructor, "constructor")
        return self.map(constructor)

    def filter(self, predicate: Callable[[T], Any] = bool) -> "Stream[T]":
        """
        Registers `predicate`: the values for which it is falsy are no longer accepted.

        Returns:
            Stream[T]: This stream.
        """
        stage = FilterStage(predicate)
        self._register(stage, repr(stage))
        return self

    def reduce(
        self, reducer: Callable[[R, T], R], identity: R = DEFAULT_IDENTITY  # type: ignore
    ) -> R:
        """
        Folds the accepted values from left to right, starting from `identity`.

        Raises:
            UnsafeStreamError: If the stream is infinite.
        """
        from lazystream.collectors import ReduceCollector

        validate_callable(reducer, "reducer")
        self._throw_if_unsafe()
        return self.collect(ReduceCollector(reducer, identity))


class StreamStream(BaseStream[Stream[T]]):
    """
    A stream of chunk streams: `map` and `filter` are pushed down into each chunk, `reduce` folds across all of them.
    """

    __slots__ = ()

    def __init__(self, chunks: Iterable[Stream[T]]) -> None:
        super().__init__(chunks)

    def map(self, transformation: Callable[[T], U]) -> "StreamStream[U]":
        validate_callable(transformation, "transformation")
        self._register(
            Operator.create(methodcaller("map", transformation)),
            f"map({friendly_repr(transformation)})",
        )
        return cast("StreamStream[U]", self)

    def filter(self, predicate: Callable[[T], Any] = bool) -> "StreamStream[T]":
        validate_callable(predicate, "predicate")
        self._register(
            Operator.create(methodcaller("filter", predicate)),
            f"filter({friendly_repr(predicate)})",
        )
        return self

    def reduce(
        self, reducer: Callable[[R, T], R], identity: R = DEFAULT_IDENTITY  # type: ignore
    ) -> R:
        """
        Folds the values of all chunks from left to right, each chunk starting from the accumulator left by the previous one.
        """
        from lazystream.collectors import ReduceCollector

        validate_callable(reducer, "reducer")
        return self.collect(
            ReduceCollector(
                lambda accumulator, chunk: chunk.reduce(reducer, accumulator),
                identity,
            )
        )

    def to_list(self) -> List[List[T]]:
        return self.collect(_chunks_to_lists)


def _chunks_to_lists(chunks: Iterator[Stream[T]]) -> List[List[T]]:
    return [chunk.to_list() for chunk in chunks]
