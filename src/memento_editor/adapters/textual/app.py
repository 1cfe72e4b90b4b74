"""Executable Textual app that hosts the snapshot history editor."""

from __future__ import annotations

import argparse
from dataclasses import replace
from typing import Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.containers import Horizontal, Vertical
    from textual.widgets import (
        Button,
        Footer,
        Header,
        Input,
        Label,
        ListItem,
        ListView,
        Static,
        TextArea,
    )
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use memento_editor.adapters.textual.app"
    ) from exc

from memento_editor.history import create_document_session
from memento_editor.runtime import telemetry
from memento_editor.runtime.config import EditorSettings
from memento_editor.surface import EditorHooks, EditorSurface, HistoryRow

TIMER_TICK_SECONDS = 0.1


class MementoEditorApp(App[None]):
    """Text area on the left, snapshot history on the right."""

    TITLE = "Smart Editor"
    SUB_TITLE = "Snapshots, multi-step undo/redo, and bounded history"

    CSS = """
	#workspace {
		height: 1fr;
	}

	#editor-pane {
		width: 7fr;
		padding: 0 1;
	}

	#history-pane {
		width: 3fr;
		border: round $accent;
		padding: 0 1;
	}

	#controls {
		height: auto;
	}

	#capacity {
		width: 16;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    # Priority bindings win over TextArea's own undo/redo keys.
    BINDINGS = [
        Binding("ctrl+z", "history_undo", "Undo", priority=True),
        Binding("ctrl+y", "history_redo", "Redo", priority=True),
        Binding("ctrl+s", "save_snapshot", "Save Snapshot", priority=True),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, settings: Optional[EditorSettings] = None) -> None:
        super().__init__()
        self.settings = settings or EditorSettings()
        self.surface: EditorSurface | None = None

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="workspace"):
            with Vertical(id="editor-pane"):
                yield TextArea(id="editor")
                with Horizontal(id="controls"):
                    yield Button("Save Snapshot", id="save")
                    yield Button("Undo", id="undo")
                    yield Button("Redo", id="redo")
                    yield Button("Clear History", id="clear")
                    yield Input(
                        str(self.settings.capacity),
                        placeholder="Max history",
                        type="integer",
                        id="capacity",
                    )
            with Vertical(id="history-pane"):
                yield Label("History (select to restore):")
                yield ListView(id="history")
        yield Static("", id="status-line")
        yield Footer()

    def on_mount(self) -> None:
        originator, timeline = create_document_session(self.settings.capacity)
        hooks = EditorHooks(
            update_text=self._update_text,
            update_history=self._update_history,
            update_status=self._update_status,
            log=self._log_line,
        )
        self.surface = EditorSurface(
            hooks,
            settings=self.settings,
            originator=originator,
            timeline=timeline,
        )
        self.set_interval(TIMER_TICK_SECONDS, self._process_timers)
        self.query_one("#editor", TextArea).focus()

    def _process_timers(self) -> None:
        if self.surface:
            self.surface.process_timers()

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        if self.surface:
            self.surface.notify_edit(event.text_area.text)

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if not self.surface:
            return
        button_id = event.button.id
        if button_id == "save":
            self.action_save_snapshot()
        elif button_id == "undo":
            self.action_history_undo()
        elif button_id == "redo":
            self.action_history_redo()
        elif button_id == "clear":
            self.surface.clear_history()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if not self.surface or event.input.id != "capacity":
            return
        try:
            value = int(event.value)
        except ValueError:
            self._update_status(f"Not a capacity: {event.value!r}")
            return
        self.surface.request_capacity(value)

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        index = event.list_view.index
        if self.surface and index is not None:
            self.surface.restore_index(index)

    def action_history_undo(self) -> None:
        if self.surface:
            self.surface.undo()

    def action_history_redo(self) -> None:
        if self.surface:
            self.surface.redo()

    def action_save_snapshot(self) -> None:
        if self.surface:
            text = self.query_one("#editor", TextArea).text
            self.surface.save_snapshot(text)

    def _update_text(self, text: str) -> None:
        self.query_one("#editor", TextArea).load_text(text)

    def _update_history(self, rows: Sequence[HistoryRow]) -> None:
        self.call_later(self._render_history, tuple(rows))

    async def _render_history(self, rows: Sequence[HistoryRow]) -> None:
        history = self.query_one("#history", ListView)
        await history.clear()
        await history.extend(ListItem(Label(row.label)) for row in rows)
        current = next((row.index for row in rows if row.current), None)
        if current is not None:
            history.index = current

    def _update_status(self, status: str) -> None:
        self.query_one("#status-line", Static).update(status)

    def _log_line(self, line: str) -> None:
        telemetry.record_event("surface.log", level="debug", data={"line": line})


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run the snapshot history editor in the terminal."
    )
    parser.add_argument(
        "--capacity",
        type=int,
        default=None,
        help="Maximum number of snapshots kept (floor 5, default 60)",
    )
    parser.add_argument(
        "--idle-ms",
        type=int,
        default=None,
        help="Inactivity window before an automatic snapshot (default 1200)",
    )
    parser.add_argument(
        "--log-preset",
        choices=telemetry.PRESETS,
        default=None,
        help="Telemetry preset (default: production, logging to a file)",
    )
    return parser.parse_args(argv)


def build_settings(argv: Optional[Sequence[str]] = None) -> EditorSettings:
    """Environment settings overridden by command-line flags."""

    args = _parse_args(argv)
    settings = EditorSettings.from_env()
    overrides = {
        key: value
        for key, value in (
            ("capacity", args.capacity),
            ("idle_ms", args.idle_ms),
            ("log_preset", args.log_preset),
        )
        if value is not None
    }
    return replace(settings, **overrides)


def main(argv: Optional[Sequence[str]] = None) -> None:
    settings = build_settings(argv)
    telemetry.configure(preset=settings.log_preset or "production")
    app = MementoEditorApp(settings)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
