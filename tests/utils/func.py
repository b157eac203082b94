from typing import TypeVar

T = TypeVar("T")


def identity(x: T) -> T:
    return x


def square(x):
    return x**2


def double(x):
    return x * 2


def is_even(x: int) -> bool:
    return x % 2 == 0


def add(carry, current):
    return carry + current


def raise_stopiteration(_):
    raise StopIteration()
