"""Live document state and its conversion to and from snapshots."""

from __future__ import annotations

from typing import Callable, Optional

from .snapshot import Snapshot, now_ms

Clock = Callable[[], int]


class Originator:
    """Holds the text being edited. Knows nothing about any timeline."""

    def __init__(self, state: str = "", *, clock: Optional[Clock] = None) -> None:
        self._state = state
        self._clock = clock or now_ms

    @property
    def state(self) -> str:
        return self._state

    def set_state(self, text: str) -> None:
        self._state = text

    def get_state(self) -> str:
        return self._state

    def create_snapshot(self) -> Snapshot:
        return Snapshot(content=self._state, created_at=self._clock())

    def restore(self, snapshot: Snapshot) -> None:
        self._state = snapshot.content


__all__ = ["Clock", "Originator"]
