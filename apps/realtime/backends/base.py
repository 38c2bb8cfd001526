from uuid import UUID

from ..events import group_channel, user_channel


class BaseDelivery:
    """Base class for real-time delivery backends."""

    def emit_to_user(self, user_id: UUID, event: str, payload: dict) -> None:
        self.send(user_channel(user_id), event, payload)

    def emit_to_group(self, group_id: UUID, event: str, payload: dict) -> None:
        self.send(group_channel(group_id), event, payload)

    def send(self, channel: str, event: str, payload: dict) -> None:
        raise NotImplementedError('Subclasses of BaseDelivery must implement send()')
