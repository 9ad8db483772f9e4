"""Bind ``QPlainTextEdit`` widgets to the bridge surface contracts."""

from __future__ import annotations

from typing import Callable

from PySide6.QtWidgets import QPlainTextEdit


class PlainTextSourceSurface:
    """Editable source surface; ``textChanged`` is the change notification."""

    def __init__(self, editor: QPlainTextEdit):
        self.editor = editor

    def get_text(self) -> str:
        return self.editor.toPlainText()

    def set_text(self, text: str) -> None:
        if text == self.editor.toPlainText():
            return
        self.editor.setPlainText(text)

    def subscribe(self, handler: Callable[[], None]) -> Callable[[], None]:
        def _on_changed() -> None:
            handler()

        self.editor.textChanged.connect(_on_changed)

        def _unsubscribe() -> None:
            try:
                self.editor.textChanged.disconnect(_on_changed)
            except (RuntimeError, TypeError):
                # widget already destroyed or slot gone
                pass

        return _unsubscribe


class PlainTextOutputSurface:
    def __init__(self, viewer: QPlainTextEdit):
        self.viewer = viewer
        self.viewer.setReadOnly(True)

    def set_text(self, text: str) -> None:
        self.viewer.setPlainText(text)
