"""Linear, capacity-bounded snapshot history with a current-position cursor."""

from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import List, Optional, Tuple

from memento_editor.runtime import telemetry

from .errors import CapacityTooSmallError, HistoryIndexError
from .snapshot import Snapshot

MIN_CAPACITY = 5


@dataclass(frozen=True, slots=True)
class AddResult:
    """Entries dropped by a single ``add``.

    ``discarded`` counts redo entries lost to the branch overwrite, ``evicted``
    counts the oldest entries pruned to stay within capacity.
    """

    discarded: int = 0
    evicted: int = 0


class HistoryTimeline:
    """Ordered snapshots (oldest first) plus the index of the current one.

    ``has_undo()`` / ``has_redo()`` answer whether a step in that direction is
    possible. They are never inverted: ``has_undo()`` is true exactly when the
    cursor sits past the oldest entry.

    One re-entrant lock serializes every operation, so a background debounce
    timer may call ``add`` while the UI thread calls ``undo``.
    """

    def __init__(
        self,
        capacity: int,
        *,
        seed: Optional[Snapshot] = None,
        strict: bool = False,
        min_capacity: int = MIN_CAPACITY,
    ) -> None:
        if min_capacity < 1:
            raise ValueError("min_capacity must be at least 1")
        if isinstance(capacity, bool) or not isinstance(capacity, int):
            raise TypeError(f"capacity must be an int, got {capacity!r}")
        if capacity < min_capacity and strict:
            raise CapacityTooSmallError(capacity, min_capacity)

        self._lock = threading.RLock()
        self._entries: List[Snapshot] = []
        self._cursor = -1
        self._requested_capacity = capacity
        self._capacity = max(min_capacity, capacity)

        if self.capacity_adjusted:
            telemetry.record_event(
                "history.capacity_adjusted",
                level="warning",
                data={"requested": capacity, "capacity": self._capacity},
            )
        if seed is not None:
            self._entries.append(seed)
            self._cursor = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def requested_capacity(self) -> int:
        return self._requested_capacity

    @property
    def capacity_adjusted(self) -> bool:
        """True when the requested capacity was raised to the floor."""

        return self._capacity != self._requested_capacity

    @property
    def cursor(self) -> int:
        with self._lock:
            return self._cursor

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def add(self, snapshot: Snapshot) -> AddResult:
        """Record ``snapshot`` as the newest, current entry.

        Any entries after the cursor are dropped first; they cannot be redone
        afterwards. The oldest entries are then evicted while over capacity.
        """

        with self._lock, telemetry.span(
            "history::add", component="history", metadata={"cursor": self._cursor}
        ):
            discarded = len(self._entries) - 1 - self._cursor
            if discarded > 0:
                del self._entries[self._cursor + 1 :]
            self._entries.append(snapshot)
            evicted = len(self._entries) - self._capacity
            if evicted > 0:
                del self._entries[:evicted]
            self._cursor = len(self._entries) - 1
            result = AddResult(discarded=max(discarded, 0), evicted=max(evicted, 0))
            self._record(
                "history.add", discarded=result.discarded, evicted=result.evicted
            )
            return result

    def has_undo(self) -> bool:
        with self._lock:
            return self._cursor > 0

    def has_redo(self) -> bool:
        with self._lock:
            return self._cursor < len(self._entries) - 1

    def undo(self) -> Optional[Snapshot]:
        """Step back one entry; ``None`` when already at the oldest."""

        with self._lock:
            if not self.has_undo():
                return None
            self._cursor -= 1
            self._record("history.undo")
            return self._entries[self._cursor]

    def redo(self) -> Optional[Snapshot]:
        """Step forward one entry; ``None`` when already at the newest."""

        with self._lock:
            if not self.has_redo():
                return None
            self._cursor += 1
            self._record("history.redo")
            return self._entries[self._cursor]

    def jump_to(self, index: int) -> Snapshot:
        """Make ``entries[index]`` current without discarding anything.

        Negative indices are rejected rather than counted from the end.
        """

        with self._lock:
            size = len(self._entries)
            if not 0 <= index < size:
                telemetry.record_event(
                    "history.jump_rejected",
                    level="error",
                    data={"index": index, "size": size},
                )
                raise HistoryIndexError(index, size)
            self._cursor = index
            self._record("history.jump")
            return self._entries[index]

    def current(self) -> Optional[Snapshot]:
        with self._lock:
            if self._cursor < 0:
                return None
            return self._entries[self._cursor]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._cursor = -1
            self._record("history.clear")

    def list_all(self) -> Tuple[Snapshot, ...]:
        with self._lock:
            return tuple(self._entries)

    def view(self) -> Tuple[Tuple[Snapshot, ...], int]:
        """Entries and cursor read under one lock acquisition, for rendering."""

        with self._lock:
            return tuple(self._entries), self._cursor

    def _record(self, name: str, **extra: int) -> None:
        telemetry.record_event(
            name,
            level="debug",
            data={"cursor": self._cursor, "size": len(self._entries), **extra},
        )


__all__ = ["AddResult", "HistoryTimeline", "MIN_CAPACITY"]
