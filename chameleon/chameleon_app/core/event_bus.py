from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Callable

from chameleon_app.core.events import GameEvent

LOGGER = logging.getLogger(__name__)

Handler = Callable[[GameEvent], None]


class EventBus:
    """Synchronous fan-out of engine events. "*" subscribes to everything."""

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = defaultdict(list)

    def subscribe(self, event_type: str, handler: Handler) -> Callable[[], None]:
        self._handlers[event_type].append(handler)

        def _unsubscribe() -> None:
            handlers = self._handlers.get(event_type, [])
            if handler in handlers:
                handlers.remove(handler)

        return _unsubscribe

    def emit(self, event: GameEvent) -> None:
        for handler in [*self._handlers.get(event.event_type, []), *self._handlers.get("*", [])]:
            try:
                handler(event)
            except Exception:
                # State is already committed when listeners run.
                LOGGER.exception("event handler failed event_type=%s", event.event_type)
