"""Textual terminal host for the snapshot history editor."""

from .app import MementoEditorApp, build_settings, main

__all__ = ["MementoEditorApp", "build_settings", "main"]
