"""Host-agnostic editor surface driving the history core."""

from __future__ import annotations

from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Deque, Iterator, List, Optional, Sequence

from memento_editor.history import (
    HistoryTimeline,
    Originator,
    Snapshot,
    create_document_session,
)
from memento_editor.runtime import telemetry
from memento_editor.runtime.config import EditorSettings

from . import keymaps
from .debounce import IdleDebouncer


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(frozen=True, slots=True)
class HistoryRow:
    """One rendered line of the history list."""

    index: int
    time: str
    preview: str
    current: bool

    @property
    def label(self) -> str:
        return f"{self.index:02d} {self.time} - {self.preview}"


@dataclass(slots=True)
class EditorHooks:
    """Callbacks a host widget toolkit provides to render surface state."""

    update_text: Callable[[str], None]
    update_history: Callable[[Sequence[HistoryRow]], None] = _noop
    update_status: Callable[[str], None] = _noop
    log: Callable[[str], None] = _noop


class EditorSurface:
    """Turns edit, save, and navigation requests into timeline operations.

    Programmatic restores (undo, redo, jump) push text back to the host. The
    host will usually report that as an edit; such echoes are ignored so a
    restore is never captured as user-authored content.
    """

    def __init__(
        self,
        hooks: EditorHooks,
        *,
        settings: Optional[EditorSettings] = None,
        originator: Optional[Originator] = None,
        timeline: Optional[HistoryTimeline] = None,
        debouncer: Optional[IdleDebouncer] = None,
    ) -> None:
        self.settings = settings or EditorSettings()
        if originator is None or timeline is None:
            originator, timeline = create_document_session(self.settings.capacity)
        self.originator = originator
        self.timeline = timeline
        self.debouncer = debouncer or IdleDebouncer(self.settings.idle_ms)
        self.hooks = hooks
        self._restoring = False
        self._echoes: Deque[str] = deque()
        self._status = ""
        self._refresh_history()
        self._set_status("Ready: snapshot saved")

    @property
    def status(self) -> str:
        return self._status

    @property
    def restoring(self) -> bool:
        return self._restoring

    def notify_edit(self, text: str) -> bool:
        """Record a user edit; returns False when the edit was ignored."""

        if self._restoring:
            return False
        if self._consume_echo(text):
            return False
        self._echoes.clear()
        self.originator.set_state(text)
        self.debouncer.reset()
        self._set_status("Editing...")
        return True

    def process_timers(self) -> Optional[Snapshot]:
        """Take the automatic snapshot once the idle window has elapsed."""

        if not self.debouncer.poll():
            return None
        if self._restoring:
            self._log("auto-save suppressed during restore")
            return None
        snapshot = self._record_snapshot("auto")
        self._set_status(f"Auto-snapshot saved: {snapshot.formatted_time()}")
        return snapshot

    def save_snapshot(self, text: Optional[str] = None) -> Snapshot:
        self.debouncer.cancel()
        if text is not None:
            self.originator.set_state(text)
        snapshot = self._record_snapshot("manual")
        self._set_status(f"Manual snapshot saved: {snapshot.formatted_time()}")
        return snapshot

    def undo(self) -> Optional[Snapshot]:
        snapshot = self.timeline.undo()
        if snapshot is None:
            self._set_status("No earlier snapshot to undo")
            return None
        self._apply(snapshot, "Undone to")
        return snapshot

    def redo(self) -> Optional[Snapshot]:
        snapshot = self.timeline.redo()
        if snapshot is None:
            self._set_status("No later snapshot to redo")
            return None
        self._apply(snapshot, "Redone to")
        return snapshot

    def restore_index(self, index: int) -> Snapshot:
        """Jump to ``index``; an invalid index raises ``HistoryIndexError``."""

        snapshot = self.timeline.jump_to(index)
        self._apply(snapshot, "Restored snapshot")
        return snapshot

    def clear_history(self) -> None:
        self.timeline.clear()
        self._refresh_history()
        self._set_status("History cleared")

    def request_capacity(self, value: int) -> int:
        """Acknowledge a capacity change request without applying it.

        Capacity is fixed for the lifetime of a timeline; a new value only
        takes effect when the session is rebuilt on the next start.
        """

        telemetry.record_event(
            "surface.capacity_request",
            data={"requested": value, "capacity": self.timeline.capacity},
        )
        self._set_status(
            f"Max history (display note): {value} (restart app to change cap)"
        )
        return self.timeline.capacity

    def handle_key(self, key: str) -> Optional[str]:
        """Run the action bound to ``key``; returns its name or None."""

        action = keymaps.resolve(key)
        if action is None:
            return None
        getattr(self, action)()
        return action

    def history_rows(self) -> List[HistoryRow]:
        entries, cursor = self.timeline.view()
        return [
            HistoryRow(
                index=index,
                time=snapshot.formatted_time(),
                preview=snapshot.preview(),
                current=index == cursor,
            )
            for index, snapshot in enumerate(entries)
        ]

    def _record_snapshot(self, trigger: str) -> Snapshot:
        with telemetry.span(
            f"surface::{trigger}_save",
            component="surface",
            metadata={"trigger": trigger},
        ):
            snapshot = self.originator.create_snapshot()
            result = self.timeline.add(snapshot)
        self._log(
            f"snapshot {trigger} discarded={result.discarded} evicted={result.evicted}"
        )
        self._refresh_history()
        return snapshot

    def _apply(self, snapshot: Snapshot, verb: str) -> None:
        # A pending idle save would capture the restored text as a new edit.
        self.debouncer.cancel()
        with self._restore_guard(), telemetry.span(
            "surface::restore", component="surface", metadata={"verb": verb}
        ):
            self.originator.restore(snapshot)
            self._echoes.append(snapshot.content)
            self.hooks.update_text(snapshot.content)
            self._refresh_history()
        self._set_status(f"{verb}: {snapshot.formatted_time()}")

    def _consume_echo(self, text: str) -> bool:
        """Drop pending echoes up to the one matching ``text``.

        Hosts deliver change events in the order the restores pushed text, so
        unmatched echoes ahead of a match were never reported and are stale.
        """

        if text not in self._echoes:
            return False
        while self._echoes.popleft() != text:
            pass
        return True

    @contextmanager
    def _restore_guard(self) -> Iterator[None]:
        self._restoring = True
        try:
            yield
        finally:
            self._restoring = False

    def _refresh_history(self) -> None:
        self.hooks.update_history(self.history_rows())

    def _set_status(self, status: str) -> None:
        self._status = status
        self.hooks.update_status(status)
        self._log(f"status -> {status!r}")

    def _log(self, line: str) -> None:
        self.hooks.log(
            f"{line} cursor={self.timeline.cursor} size={len(self.timeline)}"
        )


__all__ = ["EditorHooks", "EditorSurface", "HistoryRow"]
