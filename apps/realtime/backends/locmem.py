"""
In-memory delivery backend for tests.

Delivered events are appended to the module-level ``outbox`` list, the same
way Django's locmem email backend collects sent mail.
"""

from typing import NamedTuple

from .base import BaseDelivery


class Delivery(NamedTuple):
    channel: str
    event: str
    payload: dict


outbox = []


class LocMemDelivery(BaseDelivery):

    def send(self, channel: str, event: str, payload: dict) -> None:
        outbox.append(Delivery(channel, event, payload))
