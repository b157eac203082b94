import json
from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Iterable, Iterator, List, Optional, TypeVar

from lazystream.forward_list import ForwardList
from lazystream.stream import BaseStream, Stream, StreamStream
from lazystream.util.constants import DEFAULT_CHUNK_SIZE, DEFAULT_IDENTITY
from lazystream.util.loggertools import get_logger
from lazystream.util.validationtools import (
    validate_callable,
    validate_chunk_size,
    validate_iterable,
)

T = TypeVar("T")
R = TypeVar("R")


class Collector(ABC, Generic[T, R]):
    """
    Materializes the lazy output of a stream, see `Stream.collect`.
    """

    @abstractmethod
    def __call__(self, source: Iterable[T]) -> R: ...

    def apply(self, source: Iterable[T]) -> R:
        return self(source)


class ArrayCollector(Collector[T, List[T]]):
    def __call__(self, source: Iterable[T]) -> List[T]:
        return list(source)


class ReduceCollector(Collector[T, R]):
    def __init__(
        self, reducer: Callable[[R, T], R], identity: Optional[R] = DEFAULT_IDENTITY  # type: ignore
    ) -> None:
        validate_callable(reducer, "reducer")
        self.reducer = reducer
        self.identity = DEFAULT_IDENTITY if identity is None else identity

    def __call__(self, source: Iterable[T]) -> R:
        result = self.identity
        for current in source:
            result = self.reducer(result, current)
        return result


def _to_primitive(obj: Any) -> Any:
    if isinstance(obj, (BaseStream, ForwardList)):
        return obj.to_list()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


class JsonCollector(Collector[T, str]):
    """
    Serializes the collected values into a JSON array, streams and forward lists as nested arrays.

    Args:
        **dumps_kwargs: Passed to `json.dumps`.
    """

    def __init__(self, **dumps_kwargs: Any) -> None:
        self.dumps_kwargs = dumps_kwargs

    def __call__(self, source: Iterable[T]) -> str:
        return json.dumps(list(source), default=_to_primitive, **self.dumps_kwargs)


class StreamCollector(Collector[T, StreamStream[T]]):
    """
    Regroups the collected values into chunks of `size` consecutive values, each one a `Stream`.

    Args:
        size (int, optional): The number of values per chunk, the last chunk holding the remainder. (default: the 512 limit)

    Raises:
        ChunkSizeExceededError: If `size` exceeds the 512 limit.
    """

    def __init__(self, size: Optional[int] = DEFAULT_CHUNK_SIZE) -> None:
        size = size or DEFAULT_CHUNK_SIZE
        validate_chunk_size(size)
        self.size = size

    @staticmethod
    def create(size: Optional[int] = DEFAULT_CHUNK_SIZE) -> "StreamCollector":
        return StreamCollector(size)

    def _seal(self, buffer: ForwardList[T], index: int) -> Stream[T]:
        get_logger().debug("sealed chunk #%s of %s elements", index, len(buffer))
        return buffer.stream()

    def _chunks(self, source: Iterable[T]) -> Iterator[Stream[T]]:
        chunks: ForwardList[Stream[T]] = ForwardList()
        buffer: ForwardList[T] = ForwardList()
        for current in source:
            if len(buffer) == self.size:
                chunks.push(self._seal(buffer, len(chunks)))
                buffer = ForwardList()
            buffer.push(current)
        if not buffer.is_empty():
            chunks.push(self._seal(buffer, len(chunks)))
        return iter(chunks)

    def __call__(self, source: Iterable[T]) -> StreamStream[T]:
        validate_iterable(source)
        return StreamStream(self._chunks(source))
