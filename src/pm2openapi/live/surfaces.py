"""Text surface contracts and in-memory implementations."""

from __future__ import annotations

from typing import Callable, List, Optional, Protocol

from .event_bus import EventBus


class SourceSurface(Protocol):
    def get_text(self) -> str: ...

    def set_text(self, text: str) -> None: ...

    def subscribe(self, handler: Callable[[], None]) -> Callable[[], None]:
        """Register ``handler`` for change notifications; returns an unsubscribe callable."""
        ...


class OutputSurface(Protocol):
    def set_text(self, text: str) -> None: ...


class TextBuffer:
    """Editable text held in memory; notifies subscribers through an :class:`EventBus`."""

    def __init__(self, text: str = "", *, bus: Optional[EventBus] = None):
        self._text = text
        self.bus = bus or EventBus()

    def get_text(self) -> str:
        return self._text

    def set_text(self, text: str) -> None:
        if text == self._text:
            return
        self._text = text
        self.bus.publish(text)

    def subscribe(self, handler: Callable[[], None]) -> Callable[[], None]:
        return self.bus.subscribe(lambda _event: handler())


class TextSink:
    """Display-only surface that remembers everything written to it."""

    def __init__(self) -> None:
        self.text = ""
        self.history: List[str] = []

    def set_text(self, text: str) -> None:
        self.text = text
        self.history.append(text)


__all__ = ["OutputSurface", "SourceSurface", "TextBuffer", "TextSink"]
