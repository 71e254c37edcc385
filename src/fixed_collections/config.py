"""Configuration helpers for sizing ring buffers.

Settings come from an optional YAML file (either flat keys or a nested
``ring_buffer:`` block) and may be overridden from the environment with
``FIXED_COLLECTIONS_CAPACITY`` and ``FIXED_COLLECTIONS_DEBUG``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Mapping, MutableMapping

import yaml

from .ring_buffer import DEFAULT_CAPACITY

logger = logging.getLogger(__name__)

ENV_CAPACITY = "FIXED_COLLECTIONS_CAPACITY"
ENV_DEBUG = "FIXED_COLLECTIONS_DEBUG"
_TRUTHY = {"1", "true", "yes", "on"}


def parse_debug_flag(raw: str | None) -> bool:
    """Interpret a ``FIXED_COLLECTIONS_DEBUG`` style value."""
    return raw is not None and raw.strip().lower() in _TRUTHY


@dataclass(slots=True)
class BufferSettings:
    """Capacity and instrumentation knobs for :class:`RingBuffer` instances."""

    capacity: int = DEFAULT_CAPACITY
    debug: bool = False

    def sanitized(self) -> BufferSettings:
        """Return a copy with derived limits applied."""
        return BufferSettings(
            capacity=max(1, int(self.capacity)),
            debug=bool(self.debug),
        )


def _recognized_fields() -> set[str]:
    return {f.name for f in fields(BufferSettings)}


def _normalize_mapping(data: Mapping[str, Any]) -> MutableMapping[str, Any]:
    """Flatten a top-level ``ring_buffer`` block into the outer mapping."""
    if "ring_buffer" in data and isinstance(data["ring_buffer"], Mapping):
        merged: MutableMapping[str, Any] = {}
        for key, value in data.items():
            if key == "ring_buffer":
                merged.update(value)
            else:
                merged[key] = value
        return merged
    return dict(data)


def settings_from_mapping(data: Mapping[str, Any] | None) -> BufferSettings:
    """Build :class:`BufferSettings` from ``data`` (ignoring unknown keys)."""
    if not data:
        return BufferSettings()
    normalized = _normalize_mapping(data)
    known = _recognized_fields()
    unknown = sorted(str(key) for key in normalized.keys() - known)
    if unknown:
        logger.debug("Ignoring unknown ring buffer settings: %s", ", ".join(unknown))
    payload = {key: normalized[key] for key in normalized.keys() & known}
    return BufferSettings(**payload).sanitized()


def apply_env_overrides(
    settings: BufferSettings, environ: Mapping[str, str] | None = None
) -> BufferSettings:
    """Return ``settings`` with ``FIXED_COLLECTIONS_*`` environment overrides applied."""
    env = os.environ if environ is None else environ
    result = settings

    raw_capacity = env.get(ENV_CAPACITY)
    if raw_capacity:
        try:
            result = replace(result, capacity=int(raw_capacity))
        except ValueError:
            logger.warning("Ignoring invalid %s=%r", ENV_CAPACITY, raw_capacity)

    raw_debug = env.get(ENV_DEBUG)
    if raw_debug is not None:
        result = replace(result, debug=parse_debug_flag(raw_debug))

    return result.sanitized()


def load_settings(path: str | Path | None, *, use_env: bool = True) -> BufferSettings:
    """
    Load settings from ``path``.

    Missing files fall back to default :class:`BufferSettings`. Environment
    overrides are applied last unless ``use_env`` is false.
    """
    settings = BufferSettings()
    if path is not None:
        cfg_path = Path(path)
        if cfg_path.exists():
            with cfg_path.open("r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh) or {}
            if not isinstance(raw, Mapping):
                raise ValueError(f"Expected mapping in {cfg_path}, got {type(raw).__name__}")
            settings = settings_from_mapping(raw)
            logger.debug("Loaded ring buffer settings from %s: %s", cfg_path, settings)
        else:
            logger.debug("Settings file %s not found; using defaults", cfg_path)
    if use_env:
        settings = apply_env_overrides(settings)
    return settings


__all__ = [
    "BufferSettings",
    "ENV_CAPACITY",
    "ENV_DEBUG",
    "apply_env_overrides",
    "load_settings",
    "parse_debug_flag",
    "settings_from_mapping",
]
