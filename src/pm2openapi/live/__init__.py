"""Live update helpers (event bus, text surfaces, transform bridge)."""

from .event_bus import EventBus
from .surfaces import OutputSurface, SourceSurface, TextBuffer, TextSink
from .bridge import BridgeState, BridgeUpdate, LiveTransformBridge, render_error, serialize_sample

__all__ = [
    "BridgeState",
    "BridgeUpdate",
    "EventBus",
    "LiveTransformBridge",
    "OutputSurface",
    "SourceSurface",
    "TextBuffer",
    "TextSink",
    "render_error",
    "serialize_sample",
]
