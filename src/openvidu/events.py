"""In-process events published by the OpenVidu client."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeAlias

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SessionDeleted:
    """A session no longer exists on the server.

    Attributes:
        session_id: Identifier of the deleted session.
    """

    session_id: str


EventHandler: TypeAlias = Callable[[Any], None]


class EventDispatcher:
    """Routes events to the handlers subscribed to their type.

    Handlers run synchronously, in subscription order, inside `emit`.
    """

    def __init__(self) -> None:
        self._handlers: dict[type, list[EventHandler]] = {}

    def on(self, event_type: type, handler: EventHandler) -> None:
        """Register a handler for an event type."""
        handlers = self._handlers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)

    def off(self, event_type: type, handler: EventHandler) -> None:
        """Unregister a handler. Unknown handlers are ignored."""
        handlers = self._handlers.get(event_type)
        if handlers and handler in handlers:
            handlers.remove(handler)

    def emit(self, event: Any) -> None:
        """Deliver an event to every handler subscribed to its type."""
        handlers = list(self._handlers.get(type(event), []))
        logger.debug(f"[Events] {type(event).__name__} -> {len(handlers)} handler(s)")
        for handler in handlers:
            handler(event)
