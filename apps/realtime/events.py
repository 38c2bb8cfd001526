"""Typed domain events and the channels they are addressed to."""

from dataclasses import dataclass, field
from typing import ClassVar, Optional
from uuid import UUID


INVITATION_RECEIVED = 'invitation_received'
INVITATION_STATUS_UPDATED = 'invitation_status_updated'
LIST_ITEM_ADDED = 'list_item_added'
LIST_ITEM_UPDATED = 'list_item_updated'
LIST_ITEM_DELETED = 'list_item_deleted'
LIST_CLEARED = 'list_cleared'


def user_channel(user_id) -> str:
    return f"user:{user_id}"


def group_channel(group_id) -> str:
    return f"group:{group_id}"


@dataclass(frozen=True)
class UserEvent:
    """Event delivered to a single user's channel."""

    name: ClassVar[str]
    user_id: UUID

    @property
    def channel(self) -> str:
        return user_channel(self.user_id)

    def payload(self) -> dict:
        raise NotImplementedError


@dataclass(frozen=True)
class GroupEvent:
    """Event delivered to every subscriber of a group's channel."""

    name: ClassVar[str]
    group_id: UUID

    @property
    def channel(self) -> str:
        return group_channel(self.group_id)

    def payload(self) -> dict:
        raise NotImplementedError


@dataclass(frozen=True)
class InvitationReceived(UserEvent):
    name: ClassVar[str] = INVITATION_RECEIVED
    invitation: dict = field(default_factory=dict)

    def payload(self) -> dict:
        return dict(self.invitation)


@dataclass(frozen=True)
class InvitationStatusUpdated(UserEvent):
    name: ClassVar[str] = INVITATION_STATUS_UPDATED
    invitation_id: Optional[UUID] = None
    status: str = ''
    invitation_type: str = ''
    recipient_name: str = ''
    group_name: Optional[str] = None
    group_id: Optional[UUID] = None

    def payload(self) -> dict:
        return {
            'invitationId': str(self.invitation_id),
            'status': self.status,
            'invitationType': self.invitation_type,
            'recipientName': self.recipient_name,
            'groupName': self.group_name,
            'groupId': str(self.group_id) if self.group_id else None,
        }


@dataclass(frozen=True)
class ListItemAdded(GroupEvent):
    name: ClassVar[str] = LIST_ITEM_ADDED
    item: dict = field(default_factory=dict)
    added_by: dict = field(default_factory=dict)

    def payload(self) -> dict:
        return {'item': self.item, 'addedBy': self.added_by}


@dataclass(frozen=True)
class ListItemUpdated(GroupEvent):
    name: ClassVar[str] = LIST_ITEM_UPDATED
    item: dict = field(default_factory=dict)
    updated_by: dict = field(default_factory=dict)

    def payload(self) -> dict:
        return {'item': self.item, 'updatedBy': self.updated_by}


@dataclass(frozen=True)
class ListItemDeleted(GroupEvent):
    name: ClassVar[str] = LIST_ITEM_DELETED
    item: dict = field(default_factory=dict)
    deleted_by: dict = field(default_factory=dict)

    def payload(self) -> dict:
        return {'item': self.item, 'deletedBy': self.deleted_by}


@dataclass(frozen=True)
class ListCleared(GroupEvent):
    name: ClassVar[str] = LIST_CLEARED
    list_id: Optional[UUID] = None
    cleared_by: dict = field(default_factory=dict)

    def payload(self) -> dict:
        return {'listId': str(self.list_id), 'clearedBy': self.cleared_by}
