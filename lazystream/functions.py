import datetime
from typing import Any, Callable, Iterator, Optional, TypeVar, Union

from lazystream.iterators import (
    CountSkipIterator,
    CountTakeIterator,
    IterateIterator,
    ObservePipelineIterator,
    PipelineIterator,
    PredicateTakeIterator,
    WhileTakeIterator,
)
from lazystream.pipeline import Stage
from lazystream.util.functiontools import as_predicate
from lazystream.util.validationtools import validate_callable, validate_range

T = TypeVar("T")


def iterate(seed: T, successor: Callable[[T], T]) -> Iterator[T]:
    validate_callable(successor, "successor")
    return IterateIterator(seed, successor)


def arange(start: int, end: int, step: int = 1) -> Iterator[int]:
    """
    Iterates from `start` to `end` both included, by `step`.
    """
    validate_range(start, end, step)
    return iter(range(start, end + (1 if step > 0 else -1), step))


def take(iterator: Iterator[T], count: int) -> Iterator[T]:
    return CountTakeIterator(iterator, count)


def take_until(iterator: Iterator[T], condition: Any) -> Iterator[T]:
    return PredicateTakeIterator(iterator, as_predicate(condition))


def take_while(
    iterator: Iterator[T], condition: Any, *, flexible: bool = True
) -> Iterator[T]:
    return WhileTakeIterator(iterator, as_predicate(condition), flexible)


def _is_before(deadline: datetime.datetime) -> bool:
    return datetime.datetime.now(deadline.tzinfo) < deadline


def take_until_timeout(
    iterator: Iterator[T], deadline: Union[datetime.datetime, datetime.timedelta]
) -> Iterator[T]:
    if isinstance(deadline, datetime.timedelta):
        deadline = datetime.datetime.now() + deadline
    elif not isinstance(deadline, datetime.datetime):
        raise TypeError(
            f"`deadline` must be a datetime or a timedelta but got a {type(deadline)}"
        )
    return take_while(iterator, lambda _: _is_before(deadline), flexible=False)


def skip(iterator: Iterator[T], count: int) -> Iterator[T]:
    return CountSkipIterator(iterator, count)


def pipeline(
    iterator: Iterator[Any], stage: Stage, observed: Optional[str] = None
) -> Iterator[Any]:
    """
    Iterates over the values of `iterator` accepted by `stage`, transformed by it.

    If `observed` is set, progress is logged with `observed` as the name of the pulled elements.
    """
    if observed is None:
        return PipelineIterator(iterator, stage)
    return ObservePipelineIterator(iterator, stage, observed)
