from typing import Any, Iterator

from lazystream.util.constants import CHUNK_SIZE_LIMIT
from lazystream.util.errors import ChunkSizeExceededError, InvalidRangeError


def validate_iterator(iterator: Iterator):
    if not isinstance(iterator, Iterator):
        raise TypeError(f"`iterator` must be an Iterator but got a {type(iterator)}")


def validate_iterable(source: Any) -> None:
    try:
        source.__iter__
    except AttributeError:
        raise TypeError(
            f"`source` must be an Iterable but got a {type(source)}"
        ) from None


def validate_callable(func: Any, name: str) -> None:
    if not callable(func):
        raise TypeError(f"`{name}` must be callable but got a {type(func)}")


def validate_count(count: int):
    if count < 0:
        raise ValueError(f"`count` must be >= 0 but got {count}")


def validate_chunk_size(size: int) -> None:
    if size < 1:
        raise ValueError(f"`size` must be >= 1 but got {size}")
    if size > CHUNK_SIZE_LIMIT:
        raise ChunkSizeExceededError(size, CHUNK_SIZE_LIMIT)


def validate_range(start: int, end: int, step: int) -> None:
    if step == 0 or (end - start) * step < 0:
        raise InvalidRangeError(start, end, step)
