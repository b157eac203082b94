import datetime
import time
from typing import Any, Callable, Iterator, TypeVar

from lazystream.pipeline import Stage, StreamInput
from lazystream.util.functiontools import nostop
from lazystream.util.loggertools import get_logger
from lazystream.util.validationtools import validate_count, validate_iterator

T = TypeVar("T")


class IterateIterator(Iterator[T]):
    def __init__(self, seed: T, successor: Callable[[T], T]) -> None:
        self.successor = nostop(successor)
        self._current = seed
        self._started = False

    def __next__(self) -> T:
        if self._started:
            self._current = self.successor(self._current)
        self._started = True
        return self._current


class CountTakeIterator(Iterator[T]):
    def __init__(self, iterator: Iterator[T], count: int) -> None:
        validate_iterator(iterator)
        validate_count(count)
        self.iterator = iterator
        self._remaining_to_take = count

    def __next__(self) -> T:
        if self._remaining_to_take <= 0:
            raise StopIteration
        elem = next(self.iterator)
        self._remaining_to_take -= 1
        return elem


class PredicateTakeIterator(Iterator[T]):
    """
    Yields upstream elements until one satisfies `until`, which is not yielded.
    """

    def __init__(self, iterator: Iterator[T], until: Callable[[T], Any]) -> None:
        validate_iterator(iterator)
        self.iterator = iterator
        self.until = until
        self._satisfied = False

    def __next__(self) -> T:
        if self._satisfied:
            raise StopIteration
        elem = next(self.iterator)
        if self.until(elem):
            self._satisfied = True
            raise StopIteration
        return elem


class WhileTakeIterator(Iterator[T]):
    """
    Yields upstream elements satisfying `when`.

    If not `flexible`, the iteration ends at the first element not satisfying `when`.
    If `flexible`, such elements are skipped and the iteration goes on until upstream is exhausted.
    """

    def __init__(
        self, iterator: Iterator[T], when: Callable[[T], Any], flexible: bool
    ) -> None:
        validate_iterator(iterator)
        self.iterator = iterator
        self.when = when
        self.flexible = flexible
        self._stopped = False

    def __next__(self) -> T:
        while not self._stopped:
            elem = next(self.iterator)
            if self.when(elem):
                return elem
            if not self.flexible:
                self._stopped = True
        raise StopIteration


class CountSkipIterator(Iterator[T]):
    def __init__(self, iterator: Iterator[T], count: int) -> None:
        validate_iterator(iterator)
        validate_count(count)
        self.iterator = iterator
        self._remaining_to_skip = count

    def __next__(self) -> T:
        while self._remaining_to_skip > 0:
            next(self.iterator)
            self._remaining_to_skip -= 1
        return next(self.iterator)


class PipelineIterator(Iterator[Any]):
    """
    Pushes each upstream element through `stage` and yields the values that are still accepted.
    """

    def __init__(self, iterator: Iterator[Any], stage: Stage) -> None:
        validate_iterator(iterator)
        self.iterator = iterator
        self.stage = stage

    def __next__(self) -> Any:
        while True:
            result = self.stage(StreamInput.wrap(next(self.iterator)))
            if result.accepts():
                return result.value


class ObservePipelineIterator(PipelineIterator):
    """
    A `PipelineIterator` that reports on the `lazystream` logger how many elements it pulled,
    accepted and rejected, and how many raised.

    A report is logged each time the number of pulled elements reaches the next power of `base`
    (1st, 2nd, 4th, 8th, ... pull), and once more when upstream is exhausted.
    """

    def __init__(
        self, iterator: Iterator[Any], stage: Stage, what: str, base: int = 2
    ) -> None:
        super().__init__(iterator, stage)
        if base <= 1:
            raise ValueError(f"`base` must be > 1 but got {base}")
        self.what = what
        self.base = base

        self._pulled = 0
        self._accepted = 0
        self._rejected = 0
        self._errors = 0
        self._reported_pulls = 0
        self._next_report = 1
        self._started_at = time.perf_counter()

    def _report(self) -> None:
        get_logger().info(
            "%s %s pulled in %s: %s accepted, %s rejected, %s errors",
            self._pulled,
            self.what,
            datetime.timedelta(seconds=time.perf_counter() - self._started_at),
            self._accepted,
            self._rejected,
            self._errors,
        )
        self._reported_pulls = self._pulled
        while self._next_report <= self._pulled:
            self._next_report *= self.base

    def _pull(self) -> Any:
        try:
            return next(self.iterator)
        except StopIteration:
            if self._pulled != self._reported_pulls:
                self._report()
            raise
        except Exception:
            self._errors += 1
            raise

    def __next__(self) -> Any:
        while True:
            elem = self._pull()
            self._pulled += 1
            try:
                result = self.stage(StreamInput.wrap(elem))
                if result.accepts():
                    self._accepted += 1
                    return result.value
                self._rejected += 1
            except Exception:
                self._errors += 1
                raise
            finally:
                if self._pulled >= self._next_report:
                    self._report()
