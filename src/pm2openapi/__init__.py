"""pm2openapi core package."""

from importlib import metadata

from . import live, transpiler
from .live import BridgeState, BridgeUpdate, EventBus, LiveTransformBridge, TextBuffer, TextSink
from .samples import sample_collection
from .transpiler import OutputFormat, TransformError, transpile

try:  # pragma: no cover - metadata only at runtime
    __version__ = metadata.version("pm2openapi")
except metadata.PackageNotFoundError:  # pragma: no cover - source tree / editable installs
    __version__ = "0.0.0"

__all__ = [
    "live",
    "transpiler",
    "BridgeState",
    "BridgeUpdate",
    "EventBus",
    "LiveTransformBridge",
    "OutputFormat",
    "TextBuffer",
    "TextSink",
    "TransformError",
    "sample_collection",
    "transpile",
    "__version__",
]
