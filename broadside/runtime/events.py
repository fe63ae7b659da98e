"""In-process event bus for presentation collaborators."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, TypeVar

TEvent = TypeVar("TEvent")
EventHandler = Callable[[Any], None]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Subscription:
    """Opaque subscription token."""

    id: int


class RuntimeEventBus:
    """Simple pub/sub dispatching on event type."""

    def __init__(self) -> None:
        self._next_id = 1
        self._subscriptions: dict[int, tuple[type[object], EventHandler]] = {}

    def subscribe(
        self,
        event_type: type[TEvent],
        handler: Callable[[TEvent], None],
    ) -> Subscription:
        """Subscribe handler for an event type."""
        sub_id = self._next_id
        self._next_id += 1
        self._subscriptions[sub_id] = (event_type, handler)
        return Subscription(sub_id)

    def unsubscribe(self, subscription: Subscription) -> None:
        """Remove a subscription if present."""
        self._subscriptions.pop(subscription.id, None)

    def publish(self, event: object) -> int:
        """Publish one event and return number of invoked handlers."""
        invoked = 0
        for subscribed_type, handler in tuple(self._subscriptions.values()):
            if isinstance(event, subscribed_type):
                handler(event)
                invoked += 1
        logger.debug("event_published type=%s handlers=%d", type(event).__name__, invoked)
        return invoked
