"""Exceptions raised by the history timeline."""

from __future__ import annotations


class HistoryError(RuntimeError):
    """Base class for history timeline failures."""


class HistoryIndexError(HistoryError, IndexError):
    """Raised when ``jump_to`` targets an index outside the timeline."""

    def __init__(self, index: int, size: int) -> None:
        super().__init__(f"History index {index} out of range (size {size})")
        self.index = index
        self.size = size


class CapacityTooSmallError(HistoryError, ValueError):
    """Raised by strict timelines constructed below the capacity floor."""

    def __init__(self, requested: object, minimum: int) -> None:
        super().__init__(
            f"Capacity {requested!r} is below the minimum of {minimum}"
        )
        self.requested = requested
        self.minimum = minimum


__all__ = ["HistoryError", "HistoryIndexError", "CapacityTooSmallError"]
