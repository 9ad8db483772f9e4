"""Change notification bus with immediate or deferred delivery."""

from __future__ import annotations

from collections import deque
from typing import Any, Callable, Deque, List


class EventBus:
    """Observer registry backed by a bounded event history.

    With ``deferred=True`` published events wait in a queue until
    :meth:`dispatch_pending` runs, mimicking platforms that deliver
    notifications through a task queue.
    """

    def __init__(self, capacity: int = 1024, *, deferred: bool = False):
        self.capacity = capacity
        self.deferred = deferred
        self._events: Deque[Any] = deque(maxlen=capacity)
        self._pending: Deque[Any] = deque()
        self._subscribers: List[Callable[[Any], None]] = []

    def publish(self, event: Any) -> None:
        self._events.append(event)
        if self.deferred:
            self._pending.append(event)
            return
        self._deliver(event)

    def subscribe(self, callback: Callable[[Any], None]) -> Callable[[], None]:
        self._subscribers.append(callback)

        def _unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return _unsubscribe

    def dispatch_pending(self) -> int:
        delivered = 0
        while self._pending:
            self._deliver(self._pending.popleft())
            delivered += 1
        return delivered

    def drain(self) -> List[Any]:
        events = list(self._events)
        self._events.clear()
        return events

    @property
    def pending(self) -> int:
        return len(self._pending)

    def _deliver(self, event: Any) -> None:
        for callback in list(self._subscribers):
            callback(event)

    def __len__(self) -> int:  # pragma: no cover - trivial
        return len(self._events)
