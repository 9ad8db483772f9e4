from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from PySide6.QtCore import QObject, Signal

from ..live import BridgeState, BridgeUpdate, EventBus, LiveTransformBridge, serialize_sample
from ..live.bridge import Transform
from ..live.surfaces import OutputSurface, SourceSurface
from ..samples import sample_collection
from ..transpiler import OutputFormat, transpile

LOGGER = logging.getLogger(__name__)


class SessionModel(QObject):
    """One studio session: owns the bridge between the two editor surfaces."""

    updated = Signal(object)
    logMessage = Signal(str)
    statusChanged = Signal(str)
    errorOccurred = Signal(str)

    def __init__(
        self,
        source: SourceSurface,
        output: OutputSurface,
        *,
        sample: Any = None,
        output_format: OutputFormat | str = OutputFormat.YAML,
        live: bool = True,
        transform: Transform = transpile,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._source = source
        self._sample = sample if sample is not None else sample_collection()
        self._events = EventBus(capacity=64)
        self._events.subscribe(self._on_update)
        self.bridge = LiveTransformBridge(
            source,
            output,
            transform=transform,
            output_format=output_format,
            events=self._events,
            live=live,
        )
        self.collection_path: Optional[Path] = None

    @property
    def state(self) -> Optional[BridgeUpdate]:
        return self.bridge.last_update

    def start(self) -> BridgeUpdate:
        update = self.bridge.initialize(self._sample)
        mode = "live" if self.bridge.live else "static"
        self.log(f"Session started ({mode}, {self.bridge.output_format.value} output)")
        return update

    def refresh(self) -> BridgeUpdate:
        return self.bridge.recompute()

    def load_collection(self, path: Path) -> BridgeUpdate:
        text = Path(path).read_text(encoding="utf-8")
        self.collection_path = Path(path)
        self._replace_source(text)
        self.set_status(f"Loaded collection from {path}")
        return self.state

    def reset_to_sample(self) -> BridgeUpdate:
        self.collection_path = None
        self._replace_source(serialize_sample(self._sample))
        self.set_status("Restored sample collection")
        return self.state

    def save_output(self, path: Path) -> None:
        update = self.state
        if update is None or update.state is BridgeState.FAILED:
            raise ValueError("Nothing to save: the current collection does not transform.")
        Path(path).write_text(update.output, encoding="utf-8")
        self.set_status(f"Saved OpenAPI document to {path}")

    def close(self) -> None:
        self.bridge.close()

    def log(self, msg: str) -> None:
        LOGGER.debug("%s", msg)
        self.logMessage.emit(str(msg))

    def set_status(self, message: str) -> None:
        self.statusChanged.emit(str(message))
        self.log(str(message))

    def error(self, message: str) -> None:
        LOGGER.warning("%s", message)
        self.errorOccurred.emit(str(message))
        self.log(str(message))

    def _replace_source(self, text: str) -> None:
        before = self.bridge.revision
        self._source.set_text(text)
        # unchanged text or static mode: no notification reached the bridge
        if self.bridge.revision == before:
            self.bridge.recompute()

    def _on_update(self, update: BridgeUpdate) -> None:
        self.updated.emit(update)
        if update.state is BridgeState.SYNCED:
            self.statusChanged.emit(f"Synced (revision {update.revision})")
        else:
            self.statusChanged.emit(f"Failed: {update.error}")
