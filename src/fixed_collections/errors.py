"""Exceptions raised at the full/empty boundaries of fixed-size containers."""

from __future__ import annotations


class CollectionError(Exception):
    """Base class for errors raised by :mod:`fixed_collections` containers."""


class EmptyCollectionError(CollectionError, IndexError):
    """Raised when removing from (or peeking into) a container with no elements."""

    def __init__(self, message: str = "EmptyCollectionError") -> None:
        super().__init__(message)


class FullCollectionError(CollectionError, OverflowError):
    """Raised when inserting into a container whose length equals its capacity."""

    def __init__(self, message: str = "FullCollectionError") -> None:
        super().__init__(message)


class CapacityExceededError(FullCollectionError):
    """
    Raised when a bulk transfer does not fit into the receiving container.

    ``required`` is the number of elements that had to be moved and
    ``available`` the number of free slots on the receiving side. Neither
    container is modified when this is raised.
    """

    def __init__(self, required: int, available: int) -> None:
        self.required = int(required)
        self.available = int(available)
        super().__init__(
            f"cannot move {self.required} element(s) into {self.available} free slot(s)"
        )


__all__ = [
    "CollectionError",
    "EmptyCollectionError",
    "FullCollectionError",
    "CapacityExceededError",
]
