from lazystream import Stream

N = 256

INTEGERS = range(N)


def ints() -> Stream[int]:
    """A fresh stream over `INTEGERS`: streams are consumed by their first terminal operation."""
    return Stream.of(INTEGERS)


def naturals() -> Stream[int]:
    """The infinite stream 1, 2, 3, ..."""
    return Stream.iterate(1, successor)


def successor(n: int) -> int:
    return n + 1
