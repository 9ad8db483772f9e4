"""Qt palette and stylesheet for the studio window."""

from __future__ import annotations

from PySide6.QtGui import QColor, QPalette
from PySide6.QtWidgets import QApplication

_WINDOW_BG = "#1b1d23"
_EDITOR_BG = "#22252c"
_TEXT = "#d7dae0"
_MUTED_TEXT = "#8a909c"
_ACCENT = "#61afef"
_ERROR = "#e06c75"
_OK = "#98c379"

_MONOSPACE = '"JetBrains Mono", "Fira Mono", "DejaVu Sans Mono", monospace'


def _build_palette() -> QPalette:
    palette = QPalette()
    palette.setColor(QPalette.Window, QColor(_WINDOW_BG))
    palette.setColor(QPalette.WindowText, QColor(_TEXT))
    palette.setColor(QPalette.Base, QColor(_EDITOR_BG))
    palette.setColor(QPalette.Text, QColor(_TEXT))
    palette.setColor(QPalette.Button, QColor(_EDITOR_BG))
    palette.setColor(QPalette.ButtonText, QColor(_TEXT))
    palette.setColor(QPalette.Highlight, QColor(_ACCENT))
    palette.setColor(QPalette.HighlightedText, QColor(_WINDOW_BG))
    palette.setColor(QPalette.PlaceholderText, QColor(_MUTED_TEXT))
    return palette


_STUDIO_STYLESHEET = f"""
QWidget {{
    color: {_TEXT};
    background-color: {_WINDOW_BG};
}}
QPlainTextEdit {{
    font-family: {_MONOSPACE};
    font-size: 13px;
    background-color: {_EDITOR_BG};
    border: 1px solid #2c313a;
    border-radius: 4px;
    padding: 4px;
}}
QPlainTextEdit:focus {{
    border-color: {_ACCENT};
}}
QPlainTextEdit#OutputView {{
    background-color: #1e2127;
}}
QLabel#PaneTitle {{
    font-weight: 600;
    color: {_MUTED_TEXT};
    letter-spacing: 0.08em;
    text-transform: uppercase;
}}
QStatusBar QLabel#BridgeState[state="SYNCED"] {{
    color: {_OK};
}}
QStatusBar QLabel#BridgeState[state="FAILED"] {{
    color: {_ERROR};
}}
QSplitter::handle:horizontal {{
    background-color: #2c313a;
    width: 4px;
}}
"""


def apply_studio_theme(app: QApplication) -> None:
    """Apply the studio palette/stylesheet once per application."""

    if app.property("pm2openapi_theme_applied"):
        return
    app.setPalette(_build_palette())
    app.setStyleSheet(_STUDIO_STYLESHEET)
    app.setProperty("pm2openapi_theme_applied", True)
