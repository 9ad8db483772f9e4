from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QFileDialog,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPlainTextEdit,
    QSplitter,
    QVBoxLayout,
    QWidget,
)

from ..live import BridgeUpdate
from ..transpiler import OutputFormat
from .session import SessionModel
from .surfaces import PlainTextOutputSurface, PlainTextSourceSurface


def _pane(title: str, editor: QPlainTextEdit, parent: QWidget) -> QWidget:
    pane = QWidget(parent)
    layout = QVBoxLayout(pane)
    layout.setContentsMargins(6, 6, 6, 6)
    label = QLabel(title, pane)
    label.setObjectName("PaneTitle")
    layout.addWidget(label)
    layout.addWidget(editor, stretch=1)
    return pane


class StudioMainWindow(QMainWindow):
    def __init__(
        self,
        *,
        sample: Any = None,
        output_format: OutputFormat | str = OutputFormat.YAML,
        live: bool = True,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.setWindowTitle("Postman → OpenAPI Studio")

        self.source_editor = QPlainTextEdit()
        self.source_editor.setObjectName("SourceEditor")
        self.source_editor.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)
        self.output_view = QPlainTextEdit()
        self.output_view.setObjectName("OutputView")
        self.output_view.setLineWrapMode(QPlainTextEdit.LineWrapMode.NoWrap)

        self.session = SessionModel(
            PlainTextSourceSurface(self.source_editor),
            PlainTextOutputSurface(self.output_view),
            sample=sample,
            output_format=output_format,
            live=live,
            parent=self,
        )

        splitter = QSplitter(Qt.Horizontal, self)
        splitter.addWidget(_pane("Postman collection", self.source_editor, splitter))
        fmt = self.session.bridge.output_format.value.upper()
        splitter.addWidget(_pane(f"OpenAPI ({fmt})", self.output_view, splitter))
        splitter.setStretchFactor(0, 1)
        splitter.setStretchFactor(1, 1)
        self.setCentralWidget(splitter)

        self.state_label = QLabel(self)
        self.state_label.setObjectName("BridgeState")
        self.statusBar().addPermanentWidget(self.state_label)

        self.session.updated.connect(self._on_update)
        self.session.statusChanged.connect(self.statusBar().showMessage)
        self.session.errorOccurred.connect(self._show_error)

        self._create_menus()
        self._setup_shortcuts()
        self.resize(1400, 860)
        self.session.start()

    def _create_menus(self) -> None:
        menu = self.menuBar().addMenu("&File")
        open_action = menu.addAction("Open Collection…")
        open_action.triggered.connect(self._open_collection)
        open_action.setShortcut(QKeySequence("Ctrl+O"))
        save_action = menu.addAction("Save OpenAPI As…")
        save_action.triggered.connect(self._save_output)
        save_action.setShortcut(QKeySequence("Ctrl+S"))
        reset_action = menu.addAction("Reset to Sample")
        reset_action.triggered.connect(self.session.reset_to_sample)

        help_menu = self.menuBar().addMenu("&Help")
        shortcuts_action = help_menu.addAction("Keyboard Shortcuts")
        shortcuts_action.triggered.connect(self._show_shortcuts_dialog)

    def _setup_shortcuts(self) -> None:
        self._shortcuts: list[QShortcut] = []
        rerun = QShortcut(QKeySequence("Ctrl+R"), self)
        rerun.activated.connect(self.session.refresh)
        self._shortcuts.append(rerun)

    def _on_update(self, update: BridgeUpdate) -> None:
        self.state_label.setText(update.state.name.title())
        self.state_label.setProperty("state", update.state.name)
        # re-polish so the [state=...] selector applies
        self.state_label.style().unpolish(self.state_label)
        self.state_label.style().polish(self.state_label)

    def _open_collection(self) -> None:
        path_str, _ = QFileDialog.getOpenFileName(
            self,
            "Open Postman Collection",
            filter="Postman Collection (*.postman_collection.json);;JSON (*.json)",
        )
        if not path_str:
            return
        try:
            self.session.load_collection(Path(path_str))
        except (OSError, UnicodeDecodeError) as exc:
            self.session.error(f"Failed to load collection: {exc}")

    def _save_output(self) -> None:
        suffix = self.session.bridge.output_format.value
        path_str, _ = QFileDialog.getSaveFileName(
            self,
            "Save OpenAPI Document",
            filter=f"OpenAPI (*.{suffix});;All files (*)",
        )
        if not path_str:
            return
        try:
            self.session.save_output(Path(path_str))
        except (OSError, ValueError) as exc:
            self.session.error(f"Failed to save document: {exc}")

    def _show_error(self, message: str) -> None:
        QMessageBox.critical(self, "Postman → OpenAPI Studio", message)

    def _show_shortcuts_dialog(self) -> None:
        text = (
            "Ctrl+O – Open a Postman collection\n"
            "Ctrl+S – Save the OpenAPI document\n"
            "Ctrl+R – Re-run the transform"
        )
        QMessageBox.information(self, "Keyboard Shortcuts", text)

    def closeEvent(self, event) -> None:  # noqa: N802
        self.session.close()
        super().closeEvent(event)
