from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

from PySide6.QtWidgets import QApplication

from ..config import live_updates_enabled, resolve_output_format
from .main_window import StudioMainWindow
from .theme import apply_studio_theme


def main(
    *,
    output_format: Optional[str] = None,
    collection: Optional[Path] = None,
    live: Optional[bool] = None,
) -> None:
    app = QApplication.instance()
    owns_app = False
    if app is None:
        app = QApplication(sys.argv)
        owns_app = True
    apply_studio_theme(app)
    sample = Path(collection).read_text(encoding="utf-8") if collection else None
    window = StudioMainWindow(
        sample=sample,
        output_format=resolve_output_format(output_format),
        live=live_updates_enabled(live),
    )
    window.show()
    if owns_app:
        sys.exit(app.exec())
    else:  # pragma: no cover - embedding scenarios
        app.exec()
