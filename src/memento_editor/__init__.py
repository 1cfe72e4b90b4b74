"""Snapshot-based undo/redo history for a single text document."""

__all__ = [
    "adapters",
    "history",
    "runtime",
    "surface",
]

__version__ = "0.1.0"
