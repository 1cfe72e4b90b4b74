"""Default shortcuts mapped to editor surface actions."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

DEFAULT_KEYMAP: Mapping[str, str] = MappingProxyType(
    {
        "ctrl+z": "undo",
        "ctrl+y": "redo",
        "ctrl+s": "save_snapshot",
    }
)


def normalize_key(key: str) -> str:
    """Lower-case a key token and sort its modifiers.

    ``Shift+Ctrl+Z`` becomes ``ctrl+shift+z``.
    """

    parts = [part.strip().lower() for part in key.split("+") if part.strip()]
    if not parts:
        return ""
    *modifiers, base = parts
    return "+".join([*sorted(dict.fromkeys(modifiers)), base])


def resolve(key: str, keymap: Mapping[str, str] = DEFAULT_KEYMAP) -> Optional[str]:
    return keymap.get(normalize_key(key))


__all__ = ["DEFAULT_KEYMAP", "normalize_key", "resolve"]
