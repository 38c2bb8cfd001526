"""
Invitation state machine.

    PENDING -> ACCEPTED | DECLINED | CANCELLED | EXPIRED

Every non-PENDING state is terminal. A pending invitation past its expiry
time is treated as EXPIRED by any transition attempt: the status is
persisted and the caller gets ``InvitationExpiredError``.

Acceptance runs in one transaction and locks the target group before the
invitation, so members accepting sibling JOIN_REQUEST invitations at the
same time are serialized and at most one membership is created.

Retention: GROUP_INVITE and START_GROUP rows are kept as ACCEPTED;
JOIN_REQUEST rows are deleted on acceptance together with their siblings.
"""

import logging
from dataclasses import dataclass
from functools import singledispatch
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.utils import timezone

from apps.accounts.models import User
from apps.groups.models import Group, GroupMembership
from apps.groups.services import (
    AlreadyMemberError,
    NotMemberError,
    add_member,
    create_group_with_members,
    is_member,
    lock_group,
)
from apps.invitations.kinds import GroupInvite, JoinRequest, StartGroup, as_kind
from apps.invitations.models import Invitation, InvitationStatus, InvitationType
from apps.realtime.bus import EventBus, get_event_bus
from apps.realtime.events import InvitationStatusUpdated

from .exceptions import (
    InvitationExpiredError,
    InvitationNotFoundError,
    InvitationNotPendingError,
    NotInvitationRecipientError,
    NotInvitationSenderError,
)

logger = logging.getLogger(__name__)


@dataclass
class AcceptanceResult:
    invitation: Invitation
    group: Group
    membership: GroupMembership


def _get_invitation(invitation_id: UUID) -> Invitation:
    try:
        return (
            Invitation.objects
            .select_related('from_user', 'to_user', 'group')
            .get(id=invitation_id)
        )
    except Invitation.DoesNotExist:
        raise InvitationNotFoundError(f"Invitation with ID {invitation_id} not found")


def _lock_invitation(invitation_id: UUID) -> Optional[Invitation]:
    return (
        Invitation.objects
        .select_for_update()
        .filter(id=invitation_id)
        .first()
    )


def _lock_existing(invitation_id: UUID) -> Invitation:
    locked = _lock_invitation(invitation_id)
    if locked is None:
        raise InvitationNotFoundError(f"Invitation with ID {invitation_id} not found")
    return locked


def _ensure_pending(invitation: Invitation) -> None:
    if invitation.status != InvitationStatus.PENDING:
        raise InvitationNotPendingError(
            f"Invitation is already {invitation.status.lower()}"
        )


def _mark(invitation: Invitation, status: str) -> None:
    invitation.status = status
    invitation.responded_at = timezone.now()
    invitation.save(update_fields=['status', 'responded_at'])


def _notify_status(invitation: Invitation, *, recipient: User, addressee_id: UUID, bus: Optional[EventBus]) -> None:
    group = invitation.group if invitation.group_id else None
    (bus or get_event_bus()).publish(InvitationStatusUpdated(
        user_id=addressee_id,
        invitation_id=invitation.id,
        status=invitation.status,
        invitation_type=invitation.type,
        recipient_name=recipient.get_display_name(),
        group_name=group.name if group else (invitation.group_name or None),
        group_id=group.id if group else None,
    ))


# =============================================================================
# Acceptance effects, one per invitation variant
# =============================================================================

@singledispatch
def apply_acceptance(kind) -> AcceptanceResult:
    raise TypeError(f"No acceptance rule for {type(kind).__name__}")


@apply_acceptance.register
def _accept_start_group(kind: StartGroup) -> AcceptanceResult:
    invitation = kind.invitation
    group = create_group_with_members(
        name=kind.group_name,
        members=[invitation.from_user, invitation.to_user],
    )
    invitation.group = group
    invitation.status = InvitationStatus.ACCEPTED
    invitation.responded_at = timezone.now()
    invitation.save(update_fields=['group', 'status', 'responded_at'])

    membership = GroupMembership.objects.get(group=group, user=kind.joining_user)
    return AcceptanceResult(invitation=invitation, group=group, membership=membership)


@apply_acceptance.register
def _accept_join_request(kind: JoinRequest) -> AcceptanceResult:
    invitation = kind.invitation
    group = invitation.group
    if not is_member(user=invitation.to_user, group=group):
        raise NotMemberError("Only current members can approve join requests")
    membership = add_member(user=kind.joining_user, group=group)

    invitation.status = InvitationStatus.ACCEPTED
    invitation.responded_at = timezone.now()

    # Consume the whole fan-out, including this invitation
    consumed, _ = Invitation.objects.filter(
        type=InvitationType.JOIN_REQUEST,
        from_user_id=invitation.from_user_id,
        group=group,
        status=InvitationStatus.PENDING,
    ).delete()
    logger.info("JOIN_REQUEST fan-out for %s in group %s consumed (%d rows)",
                invitation.from_user_id, group.id, consumed)

    return AcceptanceResult(invitation=invitation, group=group, membership=membership)


@apply_acceptance.register
def _accept_group_invite(kind: GroupInvite) -> AcceptanceResult:
    invitation = kind.invitation
    membership = add_member(user=kind.joining_user, group=invitation.group)
    _mark(invitation, InvitationStatus.ACCEPTED)
    return AcceptanceResult(invitation=invitation, group=invitation.group, membership=membership)


# =============================================================================
# Transitions
# =============================================================================

def accept_invitation(
    *,
    invitation_id: UUID,
    user: User,
    bus: Optional[EventBus] = None
) -> AcceptanceResult:
    """
    Accept an invitation as its recipient.

    Returns:
        AcceptanceResult with the group joined (or created) and the
        joining party's membership

    Raises:
        InvitationNotFoundError: If invitation doesn't exist
        NotInvitationRecipientError: If ``user`` is not the recipient
        InvitationNotPendingError: If the invitation is already terminal
        InvitationExpiredError: If the invitation has expired
        AlreadyMemberError: If the joining party is already a member
    """
    expired = False

    with transaction.atomic():
        invitation = _get_invitation(invitation_id)
        if invitation.to_user_id != user.id:
            raise NotInvitationRecipientError()

        if invitation.group_id:
            lock_group(group_id=invitation.group_id)

        locked = _lock_invitation(invitation_id)
        if locked is None:
            # A sibling acceptance consumed this JOIN_REQUEST while we waited
            if invitation.type == InvitationType.JOIN_REQUEST and is_member(
                user=invitation.from_user, group=invitation.group
            ):
                raise AlreadyMemberError(
                    f"{invitation.from_user.get_display_name()} is already a member of {invitation.group.name}"
                )
            raise InvitationNotFoundError(f"Invitation with ID {invitation_id} not found")

        invitation.status = locked.status
        _ensure_pending(invitation)

        if invitation.is_expired():
            _mark(invitation, InvitationStatus.EXPIRED)
            expired = True
        else:
            result = apply_acceptance(as_kind(invitation))
            _notify_status(invitation, recipient=user, addressee_id=invitation.from_user_id, bus=bus)

    if expired:
        raise InvitationExpiredError()

    logger.info("%s %s accepted by %s", invitation.type, invitation_id, user.id)
    return result


def decline_invitation(
    *,
    invitation_id: UUID,
    user: User,
    bus: Optional[EventBus] = None
) -> Invitation:
    """
    Decline an invitation as its recipient.

    Raises:
        InvitationNotFoundError: If invitation doesn't exist
        NotInvitationRecipientError: If ``user`` is not the recipient
        InvitationNotPendingError: If the invitation is already terminal
        InvitationExpiredError: If the invitation has expired
    """
    with transaction.atomic():
        invitation = _get_invitation(invitation_id)
        if invitation.to_user_id != user.id:
            raise NotInvitationRecipientError()

        invitation.status = _lock_existing(invitation_id).status
        _ensure_pending(invitation)

        if invitation.is_expired():
            _mark(invitation, InvitationStatus.EXPIRED)
        else:
            _mark(invitation, InvitationStatus.DECLINED)
            _notify_status(invitation, recipient=user, addressee_id=invitation.from_user_id, bus=bus)

    if invitation.status == InvitationStatus.EXPIRED:
        raise InvitationExpiredError()

    logger.info("%s %s declined by %s", invitation.type, invitation_id, user.id)
    return invitation


def cancel_invitation(
    *,
    invitation_id: UUID,
    user: User,
    bus: Optional[EventBus] = None
) -> Invitation:
    """
    Cancel an invitation as its sender.

    Cancelling one invitation of a JOIN_REQUEST fan-out cancels all of them.

    Raises:
        InvitationNotFoundError: If invitation doesn't exist
        NotInvitationSenderError: If ``user`` is not the sender
        InvitationNotPendingError: If the invitation is already terminal
        InvitationExpiredError: If the invitation has expired
    """
    with transaction.atomic():
        invitation = _get_invitation(invitation_id)
        if invitation.from_user_id != user.id:
            raise NotInvitationSenderError()

        invitation.status = _lock_existing(invitation_id).status
        _ensure_pending(invitation)

        if invitation.is_expired():
            _mark(invitation, InvitationStatus.EXPIRED)
        else:
            if invitation.type == InvitationType.JOIN_REQUEST:
                siblings = list(
                    Invitation.objects
                    .select_for_update()
                    .filter(
                        type=InvitationType.JOIN_REQUEST,
                        from_user_id=invitation.from_user_id,
                        group_id=invitation.group_id,
                        status=InvitationStatus.PENDING,
                    )
                )
            else:
                siblings = [invitation]

            for sibling in siblings:
                _mark(sibling, InvitationStatus.CANCELLED)
                _notify_status(sibling, recipient=user, addressee_id=sibling.to_user_id, bus=bus)

            invitation.refresh_from_db(fields=['status', 'responded_at'])

    if invitation.status == InvitationStatus.EXPIRED:
        raise InvitationExpiredError()

    logger.info("%s %s cancelled by %s", invitation.type, invitation_id, user.id)
    return invitation


def expire_overdue_invitations(*, now=None) -> int:
    """
    Mark every PENDING invitation past its expiry time as EXPIRED.

    Returns:
        Number of invitations expired
    """
    now = now or timezone.now()
    expired = (
        Invitation.objects
        .filter(status=InvitationStatus.PENDING, expires_at__lt=now)
        .update(status=InvitationStatus.EXPIRED, responded_at=now)
    )
    if expired:
        logger.info("Expired %d overdue invitations", expired)
    return expired
