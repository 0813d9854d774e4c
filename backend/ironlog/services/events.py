from __future__ import annotations
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable

log = logging.getLogger(__name__)

@dataclass(slots=True, frozen=True)
class SessionEvent:
    kind: str
    data: dict[str, Any] = field(default_factory=dict)

Listener = Callable[[SessionEvent], None]

class EventBus:
    """
    Synchronous fan-out of session events to subscribed listeners.

    Inside ``deferred()`` events are queued and delivered, in order, once the
    outermost block exits, so listeners only ever see a finished transition.
    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []
        self._depth = 0
        self._pending: list[SessionEvent] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)
        return unsubscribe

    @contextmanager
    def deferred(self) -> Iterator[None]:
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1
            if self._depth == 0:
                pending, self._pending = self._pending, []
                for event in pending:
                    self._deliver(event)

    def emit(self, kind: str, **data: Any) -> SessionEvent:
        event = SessionEvent(kind, data)
        log.debug("session event %s %s", kind, data)
        if self._depth:
            self._pending.append(event)
        else:
            self._deliver(event)
        return event

    def _deliver(self, event: SessionEvent) -> None:
        for listener in list(self._listeners):
            listener(event)
