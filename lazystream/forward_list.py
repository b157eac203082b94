from typing import TYPE_CHECKING, Any, Generic, Iterable, Iterator, List, Optional, TypeVar

from lazystream.util.functiontools import as_predicate

if TYPE_CHECKING:  # pragma: no cover
    from lazystream.stream import Stream

T = TypeVar("T")


class Node(Generic[T]):
    __slots__ = ("value", "next", "previous")

    def __init__(self, value: T) -> None:
        self.value = value
        self.next: "Optional[Node[T]]" = None
        self.previous: "Optional[Node[T]]" = None


class ForwardList(Generic[T]):
    """
    Doubly linked list with O(1) `push` and `pop` at its tail.
    """

    __slots__ = ("_root", "_tail", "_size")

    def __init__(self, source: Iterable[T] = ()) -> None:
        self._root: Optional[Node[T]] = None
        self._tail: Optional[Node[T]] = None
        self._size = 0
        for value in source:
            self.push(value)

    def __str__(self) -> str:
        return "[ " + "".join(f"{value} " for value in self) + "]"

    def __repr__(self) -> str:
        return f"ForwardList({self.to_list()})"

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[T]:
        current = self._root
        while current is not None:
            yield current.value
            current = current.next

    def push(self, value: T) -> None:
        node = Node(value)
        if self._tail is None:
            self._root = node
        else:
            node.previous = self._tail
            self._tail.next = node
        self._tail = node
        self._size += 1

    def pop(self) -> T:
        if self._tail is None:
            raise IndexError("pop from an empty ForwardList")
        node = self._tail
        self._tail = node.previous
        if self._tail is None:
            self._root = None
        else:
            self._tail.next = None
        node.previous = None
        self._size -= 1
        return node.value

    def is_empty(self) -> bool:
        return self._root is None

    def size(self) -> int:
        return self._size

    def first(self) -> Optional[T]:
        return self._root.value if self._root is not None else None

    def last(self) -> Optional[T]:
        return self._tail.value if self._tail is not None else None

    def clear(self) -> None:
        current = self._root
        while current is not None:
            # unlink so that nodes do not keep each other alive
            current.previous, current = None, current.next
        self._root = None
        self._tail = None
        self._size = 0

    def find(self, condition: Any) -> int:
        """
        Returns the index of the first value satisfying `condition` (a predicate or a value to look for), -1 if none does.
        """
        predicate = as_predicate(condition)
        for index, value in enumerate(self):
            if predicate(value):
                return index
        return -1

    def at(self, index: int) -> Optional[T]:
        for i, value in enumerate(self):
            if i == index:
                return value
        return None

    def to_list(self) -> List[T]:
        return list(self)

    def stream(self) -> "Stream[T]":
        from lazystream.stream import Stream

        return Stream.of(self)
