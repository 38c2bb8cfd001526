"""Delivery backend that writes events to the log."""

import json
import logging

from django.core.serializers.json import DjangoJSONEncoder

from .base import BaseDelivery

logger = logging.getLogger(__name__)


class ConsoleDelivery(BaseDelivery):

    def send(self, channel: str, event: str, payload: dict) -> None:
        logger.info("[%s] %s %s", channel, event, json.dumps(payload, cls=DjangoJSONEncoder))
