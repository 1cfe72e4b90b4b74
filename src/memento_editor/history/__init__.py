"""Snapshot history core: snapshots, originator, and the timeline caretaker."""

from .errors import CapacityTooSmallError, HistoryError, HistoryIndexError
from .originator import Originator
from .session import create_document_session
from .snapshot import Snapshot
from .timeline import MIN_CAPACITY, AddResult, HistoryTimeline

__all__ = [
    "AddResult",
    "CapacityTooSmallError",
    "HistoryError",
    "HistoryIndexError",
    "HistoryTimeline",
    "MIN_CAPACITY",
    "Originator",
    "Snapshot",
    "create_document_session",
]
