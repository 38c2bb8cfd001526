"""Event bus publishing domain events after the owning transaction commits."""

import logging
from typing import Optional

from django.conf import settings
from django.db import transaction
from django.utils.module_loading import import_string

from .backends.base import BaseDelivery
from .events import GroupEvent, UserEvent

logger = logging.getLogger(__name__)


def get_delivery_backend(path: Optional[str] = None) -> BaseDelivery:
    """Instantiate the delivery backend configured by REALTIME_DELIVERY_BACKEND."""
    return import_string(path or settings.REALTIME_DELIVERY_BACKEND)()


class EventBus:
    """
    Publishes events to a delivery backend.

    ``publish`` never delivers immediately: delivery is registered with
    ``transaction.on_commit`` so a rolled-back mutation never notifies
    anyone. Outside a transaction the event is delivered right away.
    Delivery is at-most-once and best effort.
    """

    def __init__(self, backend: Optional[BaseDelivery] = None):
        self._backend = backend

    @property
    def backend(self) -> BaseDelivery:
        if self._backend is None:
            self._backend = get_delivery_backend()
        return self._backend

    def publish(self, event) -> None:
        if not isinstance(event, (UserEvent, GroupEvent)):
            raise TypeError(f"Unsupported event type: {type(event).__name__}")
        transaction.on_commit(lambda: self.deliver(event))

    def deliver(self, event) -> None:
        try:
            if isinstance(event, UserEvent):
                self.backend.emit_to_user(event.user_id, event.name, event.payload())
            else:
                self.backend.emit_to_group(event.group_id, event.name, event.payload())
        except Exception:
            logger.warning("Failed to deliver %s to %s", event.name, event.channel, exc_info=True)


def get_event_bus() -> EventBus:
    """Return a bus bound to the configured delivery backend."""
    return EventBus()
