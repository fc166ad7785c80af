"""EventBus and event types for keeping derived graphs consistent."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


class EventType(Enum):
    """Types of network events that invalidate derived state."""

    NETWORK_MODIFIED = "network_modified"
    NETWORK_DESTROYED = "network_destroyed"


@dataclass(frozen=True, slots=True)
class NetworkEvent:
    """Immutable record of a network mutation.

    Attributes:
        event_type: The kind of change that occurred.
        network: Handle of the affected network.
        detail: Optional short description of the change, for logging.
    """

    event_type: EventType
    network: Any
    detail: str | None = None


class EventBus:
    """Dispatches network events to registered handlers.

    Handlers are called synchronously in registration order.
    Exceptions are logged but never propagated; a failing handler
    degrades consistency, it does not crash the emitter.
    """

    def __init__(self) -> None:
        self._handlers: dict[EventType, list[Callable[..., Any]]] = {et: [] for et in EventType}

    def register(self, event_type: EventType, handler: Callable[..., Any]) -> None:
        """Append *handler* to the list for *event_type*."""
        self._handlers[event_type].append(handler)

    def unregister(self, event_type: EventType, handler: Callable[..., Any]) -> bool:
        """Remove first occurrence of *handler*. Return True if found."""
        handlers = self._handlers[event_type]
        try:
            handlers.remove(handler)
            return True
        except ValueError:
            return False

    def emit(self, event: NetworkEvent) -> None:
        """Dispatch *event* to all registered handlers for its type."""
        for handler in list(self._handlers[event.event_type]):
            try:
                handler(event)
            except Exception:
                logger.warning(
                    "Handler %r failed for %s on %r",
                    handler,
                    event.event_type.value,
                    event.network,
                    exc_info=True,
                )

    @property
    def handler_count(self) -> int:
        """Total number of registered handlers across all event types."""
        return sum(len(h) for h in self._handlers.values())

    def clear(self) -> None:
        """Remove all registered handlers."""
        for handlers in self._handlers.values():
            handlers.clear()
