from __future__ import annotations

import operator
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING, Any, Generic, TypeVar

import numpy as np

from .errors import CapacityExceededError, EmptyCollectionError, FullCollectionError

if TYPE_CHECKING:
    from .config import BufferSettings

T = TypeVar("T")

DEFAULT_CAPACITY = 16


def _validate_capacity(capacity: Any) -> int:
    if isinstance(capacity, bool):
        raise TypeError("capacity must be an int, got bool")
    try:
        capacity = operator.index(capacity)
    except TypeError:
        raise TypeError(f"capacity must be an int, got {type(capacity).__name__}") from None
    if capacity <= 0:
        raise ValueError("capacity must be positive")
    return capacity


class RingBuffer(Generic[T]):
    """
    Fixed-capacity double-ended ring buffer.

    Unlike a streaming ring buffer this one never overwrites: pushing into a
    full buffer raises :class:`FullCollectionError` and popping from an empty
    one raises :class:`EmptyCollectionError`. The slot list is allocated once
    in ``__init__`` and is never replaced or resized afterwards.

    ``None`` marks an empty slot, so it cannot be pushed as a value.
    """

    __slots__ = ("_capacity", "_slots", "_head", "_len", "_mutations")

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        self._capacity = _validate_capacity(capacity)
        self._slots: list[T | None] = [None] * self._capacity
        self._head = 0
        self._len = 0
        self._mutations = 0

    # ---------------------------------------------------------- construction
    @classmethod
    def from_items(cls, items: Iterable[T], capacity: int | None = None) -> RingBuffer[T]:
        """
        Build a full buffer from ``items``, taken in order starting at slot 0.

        ``capacity`` defaults to the number of items; when given it must match.
        """
        values = list(items)
        if any(value is None for value in values):
            raise TypeError("from_items() does not accept None; use from_optional()")
        return cls._filled(values, capacity)

    @classmethod
    def from_optional(
        cls, slots: Iterable[T | None], capacity: int | None = None
    ) -> RingBuffer[T]:
        """
        Build a buffer by copying ``slots`` verbatim.

        Absent (``None``) entries stay absent but still count toward the
        length, so the result is always full. Popping such a slot returns
        ``None``.
        """
        return cls._filled(list(slots), capacity)

    @classmethod
    def from_settings(cls, settings: BufferSettings) -> RingBuffer[T]:
        """Create an empty buffer sized from :class:`~fixed_collections.config.BufferSettings`."""
        return cls(settings.sanitized().capacity)

    @classmethod
    def _filled(cls, values: list[T | None], capacity: int | None) -> RingBuffer[T]:
        if capacity is None:
            capacity = len(values)
        if not values:
            raise ValueError("cannot build a full RingBuffer from an empty sequence")
        buf: RingBuffer[T] = cls(capacity)
        if len(values) != buf._capacity:
            raise ValueError(
                f"expected exactly {buf._capacity} item(s), got {len(values)}"
            )
        buf._slots[:] = values
        buf._len = buf._capacity
        return buf

    # ------------------------------------------------------------ inspection
    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def head(self) -> int:
        """Slot index of the first element; meaningless while empty."""
        return self._head

    def slots(self) -> list[T | None]:
        """Return a copy of the raw slot list, ``None`` marking empty slots."""
        return list(self._slots)

    def len(self) -> int:
        """Return the number of occupied slots."""
        return self._len

    def __len__(self) -> int:
        return self._len

    def __bool__(self) -> bool:
        return self._len != 0

    def is_empty(self) -> bool:
        return self._len == 0

    def is_full(self) -> bool:
        return self._len == self._capacity

    def free_slots(self) -> int:
        """Return how many more elements fit before the buffer is full."""
        return self._capacity - self._len

    # ----------------------------------------------------------------- push
    def push_back(self, value: T) -> int:
        """
        Append ``value`` after the current last element.

        Returns the new length (always >= 1). Raises
        :class:`FullCollectionError` and leaves the buffer untouched when full.
        """
        self._check_value(value)
        if self.is_full():
            raise FullCollectionError()
        index = (self._head + self._len) % self._capacity
        self._slots[index] = value
        self._len += 1
        self._mutations += 1
        return self._len

    def push_front(self, value: T) -> int:
        """
        Prepend ``value`` before the current first element.

        Returns the new length (always >= 1). Raises
        :class:`FullCollectionError` and leaves the buffer untouched when full.
        """
        self._check_value(value)
        if self.is_full():
            raise FullCollectionError()
        index = self._capacity - 1 if self._head == 0 else self._head - 1
        self._slots[index] = value
        self._head = index
        self._len += 1
        self._mutations += 1
        return self._len

    # ------------------------------------------------------------------ pop
    def pop_front(self) -> T:
        """Remove and return the first element."""
        if self.is_empty():
            raise EmptyCollectionError()
        value = self._slots[self._head]
        self._slots[self._head] = None
        self._head = (self._head + 1) % self._capacity
        self._len -= 1
        self._mutations += 1
        return value  # type: ignore[return-value]

    def pop_back(self) -> T:
        """Remove and return the last element."""
        if self.is_empty():
            raise EmptyCollectionError()
        # last occupied slot sits at offset len - 1 from head
        index = (self._head + self._len - 1) % self._capacity
        value = self._slots[index]
        self._slots[index] = None
        self._len -= 1
        self._mutations += 1
        return value  # type: ignore[return-value]

    def peek_front(self) -> T:
        if self.is_empty():
            raise EmptyCollectionError()
        return self._slots[self._head]  # type: ignore[return-value]

    def peek_back(self) -> T:
        if self.is_empty():
            raise EmptyCollectionError()
        return self._slots[(self._head + self._len - 1) % self._capacity]  # type: ignore[return-value]

    # ------------------------------------------------------------------ bulk
    def clear(self) -> None:
        """Drop every element and return to the freshly constructed state."""
        for index in range(self._capacity):
            self._slots[index] = None
        self._head = 0
        self._len = 0
        self._mutations += 1

    def append(self, other: RingBuffer[T]) -> int:
        """
        Move every element of ``other`` after the last element of ``self``.

        ``other`` may have any capacity. Elements keep their logical order and
        ``other`` is left empty. The transfer is all-or-nothing: when ``self``
        has fewer free slots than ``other`` has elements,
        :class:`CapacityExceededError` is raised and neither buffer changes.

        Returns the number of elements moved.
        """
        if not isinstance(other, RingBuffer):
            raise TypeError(f"expected RingBuffer, got {type(other).__name__}")
        if other is self:
            if self._len == 0:
                return 0
            raise ValueError("cannot append a RingBuffer to itself")

        count = other._len
        available = self.free_slots()
        if count > available:
            raise CapacityExceededError(count, available)

        for offset in range(count):
            src = (other._head + offset) % other._capacity
            dst = (self._head + self._len) % self._capacity
            self._slots[dst] = other._slots[src]
            other._slots[src] = None
            self._len += 1

        other._head = 0
        other._len = 0
        if count:
            self._mutations += 1
            other._mutations += 1
        return count

    def drain(self) -> Iterator[T]:
        """Yield and remove elements from the front until the buffer is empty."""
        while self._len:
            yield self.pop_front()

    # ------------------------------------------------------------- iteration
    def __iter__(self) -> Iterator[T]:
        return self._cursor(range(self._len), self._mutations)

    def __reversed__(self) -> Iterator[T]:
        return self._cursor(range(self._len - 1, -1, -1), self._mutations)

    def _cursor(self, offsets: range, expected: int) -> Iterator[T]:
        # expected is captured by the caller when iter()/reversed() is called
        for offset in offsets:
            self._ensure_unchanged(expected)
            yield self._slots[(self._head + offset) % self._capacity]  # type: ignore[misc]
        self._ensure_unchanged(expected)

    def _ensure_unchanged(self, expected: int) -> None:
        if self._mutations != expected:
            raise RuntimeError("RingBuffer mutated during iteration")

    def __getitem__(self, index: int) -> T:
        """Support buf[i] and buf[-1] indexing over the *logical* contents."""
        size = self._len
        if size == 0:
            raise IndexError("RingBuffer is empty")

        if index < 0:
            index += size

        if index < 0 or index >= size:
            raise IndexError("RingBuffer index out of range")

        return self._slots[(self._head + index) % self._capacity]  # type: ignore[return-value]

    # ----------------------------------------------------------- conversions
    def to_list(self) -> list[T]:
        return list(self)

    def to_numpy(self, dtype: Any = None) -> np.ndarray:
        """
        Return the logical contents as a NumPy array.

        With an explicit ``dtype`` the array is filled straight from the
        buffer without building an intermediate list.
        """
        if dtype is not None:
            return np.fromiter(iter(self), dtype=dtype, count=self._len)
        return np.asarray(self.to_list())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RingBuffer):
            return NotImplemented
        if self._capacity != other._capacity or self._len != other._len:
            return False
        return all(a == b for a, b in zip(self, other))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(head={self._head}, len={self._len}, "
            f"buffer={self._slots!r})"
        )

    @staticmethod
    def _check_value(value: Any) -> None:
        if value is None:
            raise TypeError("None marks an empty slot and cannot be stored")


__all__ = ["DEFAULT_CAPACITY", "RingBuffer"]
