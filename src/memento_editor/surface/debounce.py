"""Polled idle timer used to batch keystrokes into one snapshot."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional


@dataclass
class PendingDeadline:
    deadline: float
    generation: int


class IdleDebouncer:
    """Fires once after ``delay_ms`` of inactivity.

    Hosts call ``reset`` on every edit and ``poll`` from their event loop tick;
    nothing runs on a background thread.
    """

    def __init__(
        self,
        delay_ms: int = 1200,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if delay_ms <= 0:
            raise ValueError("delay_ms must be positive")
        self.delay_ms = delay_ms
        self._clock = clock
        self._pending: Optional[PendingDeadline] = None
        self._generation = 0

    @property
    def pending(self) -> bool:
        return self._pending is not None

    @property
    def deadline(self) -> Optional[float]:
        return self._pending.deadline if self._pending else None

    def reset(self) -> None:
        self._generation += 1
        self._pending = PendingDeadline(
            deadline=self._clock() + (self.delay_ms / 1000.0),
            generation=self._generation,
        )

    def cancel(self) -> None:
        self._pending = None

    def poll(self) -> bool:
        """Return True (once) if the idle window has elapsed."""

        timer = self._pending
        if timer is None or timer.deadline > self._clock():
            return False
        return self._fire(timer.generation)

    def force(self) -> bool:
        timer = self._pending
        if timer is None:
            return False
        return self._fire(timer.generation)

    def _fire(self, generation: int) -> bool:
        if not self._pending or self._pending.generation != generation:
            return False
        self._pending = None
        return True


__all__ = ["IdleDebouncer"]
