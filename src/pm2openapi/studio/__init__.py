"""PySide6 studio: live Postman → OpenAPI editor."""

from .session import SessionModel
from .main_window import StudioMainWindow

__all__ = ["SessionModel", "StudioMainWindow"]
