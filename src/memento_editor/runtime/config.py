"""Environment-driven settings for editor sessions."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .telemetry import ENV_PREFIX, PRESETS

DEFAULT_CAPACITY = 60
DEFAULT_IDLE_MS = 1200


def _env_int(env: Mapping[str, str], key: str, fallback: int) -> int:
    value = env.get(f"{ENV_PREFIX}{key}")
    if value is None:
        return fallback
    try:
        return int(value)
    except ValueError:
        return fallback


@dataclass(frozen=True, slots=True)
class EditorSettings:
    """Knobs for a document session and its host surface.

    ``capacity`` bounds the number of kept snapshots, ``idle_ms`` is the
    inactivity window before an automatic snapshot, and ``log_preset`` selects
    a telemetry preset (``None`` keeps the environment-derived defaults).
    """

    capacity: int = DEFAULT_CAPACITY
    idle_ms: int = DEFAULT_IDLE_MS
    log_preset: Optional[str] = None

    def __post_init__(self) -> None:
        if self.idle_ms <= 0:
            raise ValueError("idle_ms must be positive")
        if self.log_preset is not None and self.log_preset not in PRESETS:
            raise ValueError(f"Unknown log preset '{self.log_preset}'")

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "EditorSettings":
        source = os.environ if env is None else env
        preset = source.get(f"{ENV_PREFIX}LOG_PRESET") or None
        idle_ms = _env_int(source, "IDLE_MS", DEFAULT_IDLE_MS)
        return cls(
            capacity=_env_int(source, "CAPACITY", DEFAULT_CAPACITY),
            idle_ms=idle_ms if idle_ms > 0 else DEFAULT_IDLE_MS,
            log_preset=preset if preset in PRESETS else None,
        )


__all__ = ["DEFAULT_CAPACITY", "DEFAULT_IDLE_MS", "EditorSettings"]
