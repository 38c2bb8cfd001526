"""
Invitation sending service.

Creates PENDING invitations of the three types. Each send locks the rows
that scope its duplicate check (the group, or both users for START_GROUP)
so two conflicting concurrent sends cannot both pass it.
Recipients are notified on their user channel after commit.
"""

import logging
from typing import List, Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Q
from django.utils import timezone

from apps.accounts.models import User
from apps.groups.models import Group
from apps.groups.services import (
    AlreadyMemberError,
    GroupNotFoundError,
    NotMemberError,
    is_member,
    list_members_of,
)
from apps.invitations.models import Invitation, InvitationStatus, InvitationType
from apps.realtime.bus import EventBus, get_event_bus
from apps.realtime.events import InvitationReceived

from .exceptions import (
    DuplicateInvitationError,
    GroupCodeNotFoundError,
    InvalidInvitationError,
    SelfInvitationError,
    UserCodeNotFoundError,
)
from .snapshots import invitation_snapshot

logger = logging.getLogger(__name__)


def normalize_code(code: str) -> str:
    return (code or '').strip().upper()


def _live_pending():
    """Pending invitations that have not passed their expiry time."""
    return Invitation.objects.filter(
        status=InvitationStatus.PENDING,
        expires_at__gte=timezone.now()
    )


def _resolve_user_code(code: str) -> User:
    try:
        return User.objects.get(user_code=normalize_code(code), is_active=True)
    except User.DoesNotExist:
        raise UserCodeNotFoundError(f"No user found with code {normalize_code(code)}")


def _notify_received(invitations: List[Invitation], bus: Optional[EventBus]) -> None:
    bus = bus or get_event_bus()
    for invitation in invitations:
        bus.publish(InvitationReceived(
            user_id=invitation.to_user_id,
            invitation=invitation_snapshot(invitation),
        ))


@transaction.atomic
def send_invite(
    *,
    from_user: User,
    to_user_code: str,
    group_id: UUID,
    message: str = '',
    bus: Optional[EventBus] = None
) -> Invitation:
    """
    Invite a user into a group the sender belongs to (GROUP_INVITE).

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotMemberError: If the sender is not a member of the group
        UserCodeNotFoundError: If no user has ``to_user_code``
        SelfInvitationError: If the sender targets themselves
        AlreadyMemberError: If the target already belongs to the group
        DuplicateInvitationError: If the same invite is already pending
    """
    try:
        group = Group.objects.select_for_update().get(id=group_id)
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    if not is_member(user=from_user, group=group):
        raise NotMemberError("Only group members can invite others")

    to_user = _resolve_user_code(to_user_code)
    if to_user.id == from_user.id:
        raise SelfInvitationError()

    if is_member(user=to_user, group=group):
        raise AlreadyMemberError(f"{to_user.get_display_name()} is already a member of {group.name}")

    if _live_pending().filter(
        type=InvitationType.GROUP_INVITE,
        from_user=from_user,
        to_user=to_user,
        group=group
    ).exists():
        raise DuplicateInvitationError("You have already invited this user to this group")

    invitation = Invitation.objects.create(
        type=InvitationType.GROUP_INVITE,
        from_user=from_user,
        to_user=to_user,
        group=group,
        message=message or '',
    )

    _notify_received([invitation], bus)
    logger.info("GROUP_INVITE %s sent by %s to %s for group %s", invitation.id, from_user.id, to_user.id, group.id)
    return invitation


@transaction.atomic
def send_request(
    *,
    from_user: User,
    group_code: str,
    message: str = '',
    bus: Optional[EventBus] = None
) -> List[Invitation]:
    """
    Ask to join a group (JOIN_REQUEST).

    One invitation is created for every current member; whichever member
    accepts first consumes all of them.

    Returns:
        The fanned-out invitations, one per member

    Raises:
        GroupCodeNotFoundError: If no group has ``group_code``
        AlreadyMemberError: If the sender already belongs to the group
        DuplicateInvitationError: If the sender already has a pending request
    """
    try:
        group = Group.objects.select_for_update().get(group_code=normalize_code(group_code))
    except Group.DoesNotExist:
        raise GroupCodeNotFoundError(f"No group found with code {normalize_code(group_code)}")

    if is_member(user=from_user, group=group):
        raise AlreadyMemberError(f"You are already a member of {group.name}")

    if _live_pending().filter(
        type=InvitationType.JOIN_REQUEST,
        from_user=from_user,
        group=group
    ).exists():
        raise DuplicateInvitationError("You already have a pending request for this group")

    invitations = [
        Invitation.objects.create(
            type=InvitationType.JOIN_REQUEST,
            from_user=from_user,
            to_user=membership.user,
            group=group,
            message=message or '',
        )
        for membership in list_members_of(group=group)
    ]

    _notify_received(invitations, bus)
    logger.info(
        "JOIN_REQUEST by %s for group %s fanned out to %d members",
        from_user.id, group.id, len(invitations)
    )
    return invitations


@transaction.atomic
def start_group(
    *,
    from_user: User,
    to_user_code: str,
    group_name: str,
    message: str = '',
    bus: Optional[EventBus] = None
) -> Invitation:
    """
    Propose founding a new group with another user (START_GROUP).

    Raises:
        InvalidInvitationError: If ``group_name`` is blank
        UserCodeNotFoundError: If no user has ``to_user_code``
        SelfInvitationError: If the sender targets themselves
        DuplicateInvitationError: If a START_GROUP between the two users is pending
    """
    group_name = (group_name or '').strip()
    if not group_name:
        raise InvalidInvitationError("Group name is required")

    to_user = _resolve_user_code(to_user_code)
    if to_user.id == from_user.id:
        raise SelfInvitationError()

    # Proposals in either direction lock the same pair, always in id order
    list(
        User.objects
        .select_for_update()
        .filter(id__in=[from_user.id, to_user.id])
        .order_by('id')
    )

    if _live_pending().filter(type=InvitationType.START_GROUP).filter(
        Q(from_user=from_user, to_user=to_user) | Q(from_user=to_user, to_user=from_user)
    ).exists():
        raise DuplicateInvitationError("A group invitation between you and this user is already pending")

    invitation = Invitation.objects.create(
        type=InvitationType.START_GROUP,
        from_user=from_user,
        to_user=to_user,
        group_name=group_name,
        message=message or '',
    )

    _notify_received([invitation], bus)
    logger.info("START_GROUP %s sent by %s to %s", invitation.id, from_user.id, to_user.id)
    return invitation
