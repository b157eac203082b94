from typing import Any


class StreamError(Exception):
    pass


class UnsafeStreamError(StreamError):
    def __init__(self) -> None:
        super().__init__(
            "stream source is infinite, bound it with `take`, `take_until` or `take_while` before materializing it"
        )


class InvalidRangeError(StreamError, ValueError):
    def __init__(self, start: int, end: int, step: int) -> None:
        super().__init__(
            f"a range from {start} to {end} by step {step} never reaches its end"
        )
        self.start = start
        self.end = end
        self.step = step


class ValueNotFoundError(StreamError, LookupError):
    def __init__(self, value: Any) -> None:
        super().__init__(f"no element matches {repr(value)}")
        self.value = value


class ChunkSizeExceededError(StreamError, ValueError):
    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"`size` must be <= {limit} but got {size}")
        self.size = size
        self.limit = limit
