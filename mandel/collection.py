"""
Fixed-size owned container with eager map / zip / reduce.

A Collection owns a single list buffer whose length is fixed when the
Collection is built. Every derived Collection (map, zip, arithmetic) gets a
freshly materialized buffer; nothing is lazy and nothing aliases.

Ownership can be handed over with ``move()``. The source is left emptied and
raises EmptiedCollectionError on any further element access.

Free functions at the bottom (add, sub, mul, div, sum, prod, dot) are thin
wrappers over zip and reduce and carry no state of their own.
"""

from __future__ import annotations

import operator
from typing import Any, Callable, Generic, Iterator, List, TypeVar

from mandel.errors import EmptiedCollectionError, OutOfBoundsError

T = TypeVar("T")
U = TypeVar("U")


class Cursor(Generic[T]):
    """
    Forward cursor over a Collection.

    Equality compares buffer identity and position, so two cursors over
    distinct collections with equal contents are never equal.
    """

    def __init__(self, src: "Collection[T]", offset: int = 0):
        self._src = src
        self._buffer = src._require_buffer("iterate")
        self._idx = offset

    @property
    def index(self) -> int:
        return self._idx

    @property
    def value(self) -> T:
        return self._src.get(self._idx)

    def advance(self) -> "Cursor[T]":
        self._idx += 1
        return self

    def retreat(self) -> "Cursor[T]":
        self._idx -= 1
        return self

    def __iter__(self) -> "Cursor[T]":
        return self

    def __next__(self) -> T:
        if self._idx >= self._src.size:
            raise StopIteration
        val = self._src.get(self._idx)
        self._idx += 1
        return val

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cursor):
            return NotImplemented
        return self._buffer is other._buffer and self._idx == other._idx

    def __repr__(self) -> str:
        return f"Cursor(index={self._idx}, size={self._src.size})"


class Collection(Generic[T]):
    """
    Fixed-size collection of elements.

    Build one from a generator ``fn(index) -> T``:

        squares = Collection(5, lambda i: i * i)

    or derive one from existing collections with ``map`` / ``zip``.
    """

    __slots__ = ("_buffer", "_size")

    def __init__(self, size: int, fn: Callable[[int], T]):
        size = operator.index(size)
        if size < 0:
            raise ValueError(f"Collection size must be >= 0, got {size}")
        self._size = size
        self._buffer: List[T] | None = [fn(idx) for idx in range(size)]

    @classmethod
    def _adopt(cls, buffer: List[Any]) -> "Collection[Any]":
        # takes ownership of a freshly built list, no copy
        obj = cls.__new__(cls)
        obj._size = len(buffer)
        obj._buffer = buffer
        return obj

    @classmethod
    def from_map(cls, src: "Collection[U]", fn: Callable[[U], T]) -> "Collection[T]":
        data = src._require_buffer("map")
        return cls._adopt([fn(x) for x in data])

    @classmethod
    def from_zip(
        cls,
        u: "Collection[T]",
        v: "Collection[T]",
        fn: Callable[[T, T], T],
    ) -> "Collection[T]":
        """Combine two collections element-wise, truncating to the shorter one."""
        u_data = u._require_buffer("zip")
        v_data = v._require_buffer("zip")
        n = min(u.size, v.size)
        return cls._adopt([fn(u_data[i], v_data[i]) for i in range(n)])

    # -----------------------------
    # Ownership
    # -----------------------------

    def _require_buffer(self, op: str) -> List[T]:
        if self._buffer is None:
            raise EmptiedCollectionError(op)
        return self._buffer

    @property
    def is_valid(self) -> bool:
        return self._buffer is not None

    def move(self) -> "Collection[T]":
        """Transfer the buffer to a new Collection and empty this one."""
        data = self._require_buffer("move")
        self._buffer = None
        return type(self)._adopt(data)

    def copy(self) -> "Collection[T]":
        """Explicit deep-enough copy: a new buffer holding the same elements."""
        return type(self)._adopt(list(self._require_buffer("copy")))

    def __copy__(self):
        raise TypeError("Collection does not support implicit copies; use .copy() or .move()")

    def __deepcopy__(self, memo):
        raise TypeError("Collection does not support implicit copies; use .copy() or .move()")

    # -----------------------------
    # Element access
    # -----------------------------

    @property
    def size(self) -> int:
        return self._size

    def __len__(self) -> int:
        return self._size

    def get(self, idx: int) -> T:
        """
        Element at idx.

        The stored object itself is returned, not a copy. For immutable
        elements (float, int, Color) that is the same thing; a mutable
        element changed through the returned reference changes the buffer.
        """
        data = self._require_buffer("get")
        idx = operator.index(idx)
        if not 0 <= idx < self._size:
            raise OutOfBoundsError("get", idx, self._size)
        return data[idx]

    def set(self, idx: int, value: T) -> None:
        data = self._require_buffer("set")
        idx = operator.index(idx)
        if not 0 <= idx < self._size:
            raise OutOfBoundsError("set", idx, self._size)
        data[idx] = value

    __getitem__ = get
    __setitem__ = set

    def begin(self) -> Cursor[T]:
        return Cursor(self, 0)

    def end(self) -> Cursor[T]:
        return Cursor(self, self._size)

    def __iter__(self) -> Iterator[T]:
        return self.begin()

    def to_list(self) -> List[T]:
        return list(self._require_buffer("to_list"))

    # -----------------------------
    # Map / zip / reduce
    # -----------------------------

    def map(self, fn: Callable[[T], U]) -> "Collection[U]":
        return Collection.from_map(self, fn)

    def zip(self, other: "Collection[T]", fn: Callable[[T, T], T]) -> "Collection[T]":
        return Collection.from_zip(self, other, fn)

    def reduce(self, fn: Callable[[T, T], T], zero: Any = 0.0) -> T:
        """
        Left fold seeded with the first element.

        An empty collection has no first element, so ``zero`` is returned
        instead. It defaults to 0.0 (the numeric convention used by sum and
        prod); pass the identity of your element type for anything else.
        ``zero`` is never folded into a non-empty reduction.
        """
        data = self._require_buffer("reduce")
        if self._size == 0:
            return zero
        acc = data[0]
        for x in data[1:]:
            acc = fn(acc, x)
        return acc

    # -----------------------------
    # Operators
    # -----------------------------

    def __add__(self, other: "Collection[T]") -> "Collection[T]":
        return add(self, other)

    def __sub__(self, other: "Collection[T]") -> "Collection[T]":
        return sub(self, other)

    def __mul__(self, other: "Collection[T]") -> "Collection[T]":
        return mul(self, other)

    def __truediv__(self, other: "Collection[T]") -> "Collection[T]":
        return div(self, other)

    def __repr__(self) -> str:
        if self._buffer is None:
            return f"Collection(<moved>, size={self._size})"
        return "[" + ",".join(str(x) for x in self._buffer) + "]"


def add(u: Collection, v: Collection) -> Collection:
    return Collection.from_zip(u, v, operator.add)


def sub(u: Collection, v: Collection) -> Collection:
    return Collection.from_zip(u, v, operator.sub)


def mul(u: Collection, v: Collection) -> Collection:
    return Collection.from_zip(u, v, operator.mul)


def div(u: Collection, v: Collection) -> Collection:
    return Collection.from_zip(u, v, operator.truediv)


def sum(u: Collection, zero=0.0):
    return u.reduce(operator.add, zero)


def prod(u: Collection, zero=0.0):
    # empty product is 0.0, not 1.0, to stay consistent with sum
    return u.reduce(operator.mul, zero)


def dot(u: Collection, v: Collection, zero=0.0):
    return sum(mul(u, v), zero)
