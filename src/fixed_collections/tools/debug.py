"""Minimal helpers for opt-in debug/instrumentation hooks."""

from __future__ import annotations

import logging
import os
import time
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator

from ..config import ENV_DEBUG, BufferSettings, parse_debug_flag
from ..ring_buffer import RingBuffer

logger = logging.getLogger(__name__)

DEBUG_FIXED_COLLECTIONS = parse_debug_flag(os.getenv(ENV_DEBUG))


def debug_enabled(settings: BufferSettings | None = None) -> bool:
    """Return True when lightweight instrumentation should run."""
    return DEBUG_FIXED_COLLECTIONS or bool(settings is not None and settings.debug)


@contextmanager
def time_block(
    label: str,
    *,
    settings: BufferSettings | None = None,
    emitter: Callable[[str], None] | None = None,
) -> Iterator[None]:
    """
    Context manager that emits elapsed time when debugging is enabled.

    Debugging is on when ``FIXED_COLLECTIONS_DEBUG`` was set at import or
    ``settings.debug`` is true. The overhead is essentially a couple of
    perf_counter() calls when disabled.
    """
    if not debug_enabled(settings):
        yield
        return

    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        target = emitter or logger.debug
        target(f"[DEBUG] {label} took {elapsed_ms:.3f} ms")


def describe(buffer: RingBuffer[Any]) -> Dict[str, Any]:
    """
    Return the raw bookkeeping of ``buffer`` for diagnostics.

    ``occupied`` lists the slot indices holding the logical contents, front
    to back.
    """
    capacity = buffer.capacity
    head = buffer.head
    length = len(buffer)
    return {
        "capacity": capacity,
        "head": head,
        "len": length,
        "slots": buffer.slots(),
        "occupied": [(head + offset) % capacity for offset in range(length)],
    }


def log_state(
    buffer: RingBuffer[Any],
    *,
    settings: BufferSettings | None = None,
    log: logging.Logger | None = None,
    level: int = logging.DEBUG,
) -> None:
    """Log :func:`describe` output for ``buffer`` at ``level`` when debugging is enabled."""
    target = log or logger
    if not debug_enabled(settings) or not target.isEnabledFor(level):
        return
    state = describe(buffer)
    target.log(
        level,
        "RingBuffer state: capacity=%d head=%d len=%d occupied=%s slots=%r",
        state["capacity"],
        state["head"],
        state["len"],
        state["occupied"],
        state["slots"],
    )


__all__ = ["debug_enabled", "describe", "log_state", "time_block"]
