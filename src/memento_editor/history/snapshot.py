"""Immutable captures of document content."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from datetime import datetime

PREVIEW_LIMIT = 60
PREVIEW_ELLIPSIS = "…"
EMPTY_PREVIEW = "(empty)"
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


def now_ms() -> int:
    """Wall-clock time in epoch milliseconds."""

    return time.time_ns() // 1_000_000


@dataclass(frozen=True, slots=True, eq=False)
class Snapshot:
    """Document content frozen at ``created_at`` (epoch milliseconds).

    Snapshots compare by identity: two captures of the same text are still
    distinct history entries.
    """

    content: str
    created_at: int = field(default_factory=now_ms)

    @property
    def created_at_datetime(self) -> datetime:
        return datetime.fromtimestamp(self.created_at / 1000)

    def preview(self) -> str:
        text = self.content.replace("\n", " ")
        if len(text) > PREVIEW_LIMIT:
            text = text[:PREVIEW_LIMIT] + PREVIEW_ELLIPSIS
        return text or EMPTY_PREVIEW

    def formatted_time(self) -> str:
        return self.created_at_datetime.strftime(TIME_FORMAT)

    def __repr__(self) -> str:
        return f"Snapshot(created_at={self.created_at}, preview={self.preview()!r})"


__all__ = ["Snapshot", "now_ms", "PREVIEW_LIMIT"]
