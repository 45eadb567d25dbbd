"""EventBus — pub/sub for calculator observers."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Callable

from calcstate.core.events import Event, EventType

logger = logging.getLogger(__name__)

Handler = Callable[[Event], None]


class EventBus:
    """Synchronous pub/sub bus; handlers run on the publisher's call stack."""

    def __init__(self):
        self._handlers: dict[EventType, list[Handler]] = defaultdict(list)

    def subscribe(self, event_type: EventType, handler: Handler) -> None:
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: EventType, handler: Handler) -> None:
        """Remove a handler; unknown handlers are ignored."""
        handlers = self._handlers.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def subscribers(self, event_type: EventType) -> int:
        return len(self._handlers.get(event_type, ()))

    def publish(self, event: Event) -> None:
        """Dispatch *event* to every handler; a failing handler does not stop the rest."""
        for handler in list(self._handlers.get(event.type, ())):
            try:
                handler(event)
            except Exception:
                logger.exception("EventBus handler error for %s", event.type)
