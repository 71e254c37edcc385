"""Fixed-capacity containers that never grow and never overwrite.

:class:`RingBuffer` is a double-ended circular buffer whose capacity is set
at construction. Pushing into a full buffer or popping from an empty one
raises, so callers handle the boundaries explicitly. Sizing defaults can be
loaded from YAML or the environment via :mod:`fixed_collections.config`.
"""

from .errors import (
    CapacityExceededError,
    CollectionError,
    EmptyCollectionError,
    FullCollectionError,
)
from .ring_buffer import DEFAULT_CAPACITY, RingBuffer
from .config import BufferSettings, load_settings, settings_from_mapping

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_CAPACITY",
    "RingBuffer",
    "CollectionError",
    "EmptyCollectionError",
    "FullCollectionError",
    "CapacityExceededError",
    "BufferSettings",
    "load_settings",
    "settings_from_mapping",
]
