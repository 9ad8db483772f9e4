"""Live transform bridge: keeps an output surface in sync with a source surface."""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any, Callable, Optional, Tuple, Type

from ..transpiler import OutputFormat, TransformError, transpile
from .event_bus import EventBus
from .surfaces import OutputSurface, SourceSurface

Transform = Callable[[str, OutputFormat], str]

LOGGER = logging.getLogger(__name__)


class BridgeState(Enum):
    SYNCED = auto()
    FAILED = auto()


@dataclass(frozen=True)
class BridgeUpdate:
    state: BridgeState
    output: str
    source: str
    error: Optional[str] = None
    revision: int = 0

    @property
    def ok(self) -> bool:
        return self.state is BridgeState.SYNCED


def serialize_sample(sample: Any) -> str:
    if isinstance(sample, str):
        return sample
    return json.dumps(sample, indent=2, ensure_ascii=False)


def render_error(exc: BaseException) -> str:
    message = str(exc).strip() or type(exc).__name__
    return f"Error: {message}"


class LiveTransformBridge:
    """Recompute the transformed document whenever the source document changes.

    Every :meth:`recompute` lands in exactly one of two states:
    ``SYNCED`` (output is the transform result for the current source) or
    ``FAILED`` (output is the rendered :class:`TransformError`). The source
    text is read inside the lock, so whatever order notifications arrive in,
    the last recompute reflects the latest source.
    """

    def __init__(
        self,
        source: SourceSurface,
        output: OutputSurface,
        *,
        transform: Transform = transpile,
        output_format: OutputFormat | str = OutputFormat.YAML,
        events: Optional[EventBus] = None,
        live: bool = True,
        errors: Tuple[Type[BaseException], ...] = (TransformError,),
    ):
        self._source = source
        self._output = output
        self._transform = transform
        self._format = OutputFormat.coerce(output_format)
        self._events = events
        self._live = live
        self._errors = errors
        self._lock = threading.RLock()
        self._unsubscribe: Optional[Callable[[], None]] = None
        self._last: Optional[BridgeUpdate] = None
        self._revision = 0

    @property
    def output_format(self) -> OutputFormat:
        return self._format

    @property
    def live(self) -> bool:
        return self._live

    @property
    def state(self) -> Optional[BridgeState]:
        return self._last.state if self._last else None

    @property
    def output(self) -> Optional[str]:
        return self._last.output if self._last else None

    @property
    def last_error(self) -> Optional[str]:
        return self._last.error if self._last else None

    @property
    def last_update(self) -> Optional[BridgeUpdate]:
        return self._last

    @property
    def revision(self) -> int:
        return self._revision

    def initialize(self, sample: Any) -> BridgeUpdate:
        self._source.set_text(serialize_sample(sample))
        update = self.recompute()
        if self._live and self._unsubscribe is None:
            self._unsubscribe = self._source.subscribe(self.on_source_changed)
        return update

    def on_source_changed(self) -> BridgeUpdate:
        return self.recompute()

    def recompute(self) -> BridgeUpdate:
        with self._lock:
            text = self._source.get_text()
            self._revision += 1
            try:
                rendered = self._transform(text, self._format)
            except self._errors as exc:
                LOGGER.info("Transform failed at revision %d: %s", self._revision, exc)
                update = BridgeUpdate(
                    state=BridgeState.FAILED,
                    output=render_error(exc),
                    source=text,
                    error=str(exc),
                    revision=self._revision,
                )
            else:
                update = BridgeUpdate(
                    state=BridgeState.SYNCED,
                    output=rendered,
                    source=text,
                    revision=self._revision,
                )
            LOGGER.debug(
                "recompute revision=%d state=%s format=%s chars=%d",
                update.revision,
                update.state.name,
                self._format.value,
                len(text),
            )
            self._output.set_text(update.output)
            self._last = update
        if self._events is not None:
            self._events.publish(update)
        return update

    def close(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None


__all__ = [
    "BridgeState",
    "BridgeUpdate",
    "LiveTransformBridge",
    "Transform",
    "render_error",
    "serialize_sample",
]
