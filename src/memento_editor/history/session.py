"""Factory wiring an originator to a freshly seeded timeline."""

from __future__ import annotations

from typing import Optional, Tuple

from memento_editor.runtime import telemetry
from memento_editor.runtime.config import DEFAULT_CAPACITY

from .originator import Clock, Originator
from .timeline import MIN_CAPACITY, HistoryTimeline


def create_document_session(
    capacity: Optional[int] = None,
    *,
    clock: Optional[Clock] = None,
    strict: bool = False,
    min_capacity: int = MIN_CAPACITY,
) -> Tuple[Originator, HistoryTimeline]:
    """Return an empty originator and a timeline seeded with its first snapshot.

    The seed is the empty document, so ``current()`` is never ``None`` until
    the history is cleared and the first real edit can be undone.
    """

    originator = Originator("", clock=clock)
    timeline = HistoryTimeline(
        DEFAULT_CAPACITY if capacity is None else capacity,
        seed=originator.create_snapshot(),
        strict=strict,
        min_capacity=min_capacity,
    )
    telemetry.record_event(
        "history.session",
        data={"capacity": timeline.capacity, "adjusted": timeline.capacity_adjusted},
    )
    return originator, timeline


__all__ = ["create_document_session"]
