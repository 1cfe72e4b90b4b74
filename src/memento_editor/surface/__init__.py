"""Editor surface: idle debounce, shortcuts, and the history-driving controller."""

from .controller import EditorHooks, EditorSurface, HistoryRow
from .debounce import IdleDebouncer
from .keymaps import DEFAULT_KEYMAP

__all__ = [
    "DEFAULT_KEYMAP",
    "EditorHooks",
    "EditorSurface",
    "HistoryRow",
    "IdleDebouncer",
]
