"""
Post-commit notification delivery.

The ledger core knows nothing about transports. It hands each committed
event to a NotificationBus, which fans it out to every registered subscriber.
Delivery is fire-and-forget: a subscriber that raises is logged and skipped,
and neither the caller nor the other subscribers see the failure.
"""

import logging
import threading
from collections.abc import Callable

from .models.events import LedgerNotification

logger = logging.getLogger(__name__)

Subscriber = Callable[[LedgerNotification], None]


class NotificationBus:
    """Fans committed ledger events out to subscribers."""

    def __init__(self):
        self._subscribers: list[Subscriber] = []
        self._lock = threading.Lock()

    def subscribe(self, subscriber: Subscriber) -> None:
        with self._lock:
            self._subscribers.append(subscriber)

    def unsubscribe(self, subscriber: Subscriber) -> None:
        with self._lock:
            if subscriber in self._subscribers:
                self._subscribers.remove(subscriber)

    def publish(self, event: LedgerNotification) -> None:
        """Deliver ``event`` to every subscriber in registration order."""
        with self._lock:
            subscribers = list(self._subscribers)

        for subscriber in subscribers:
            try:
                subscriber(event)
            except Exception:
                logger.exception("Subscriber %r failed on %s", subscriber, event.kind)

