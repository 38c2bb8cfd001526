"""Read-side queries over invitations."""

from dataclasses import dataclass
from uuid import UUID

from django.db.models import Count, Q, QuerySet
from django.utils import timezone

from apps.accounts.models import User
from apps.groups.services import get_member_group
from apps.invitations.models import Invitation, InvitationStatus

from .exceptions import InvitationNotFoundError, NotInvitationParticipantError


@dataclass
class InvitationHistory:
    invitations: QuerySet
    total: int
    pending: int
    accepted: int
    declined: int


def _with_relations(queryset: QuerySet) -> QuerySet:
    return queryset.select_related('from_user', 'to_user', 'group')


def get_invitation(*, invitation_id: UUID, user: User) -> Invitation:
    """
    Get an invitation visible to its sender or recipient.

    Raises:
        InvitationNotFoundError: If invitation doesn't exist
        NotInvitationParticipantError: If the user neither sent nor received it
    """
    try:
        invitation = _with_relations(Invitation.objects).get(id=invitation_id)
    except Invitation.DoesNotExist:
        raise InvitationNotFoundError(f"Invitation with ID {invitation_id} not found")

    if user.id not in (invitation.from_user_id, invitation.to_user_id):
        raise NotInvitationParticipantError()
    return invitation


def get_received_invitations(*, user: User) -> QuerySet[Invitation]:
    """Pending, unexpired invitations addressed to the user, newest first."""
    return _with_relations(
        Invitation.objects.filter(
            to_user=user,
            status=InvitationStatus.PENDING,
            expires_at__gte=timezone.now(),
        )
    ).order_by('-created_at')


def get_sent_invitations(*, user: User) -> QuerySet[Invitation]:
    """Pending, unexpired invitations sent by the user, newest first."""
    return _with_relations(
        Invitation.objects.filter(
            from_user=user,
            status=InvitationStatus.PENDING,
            expires_at__gte=timezone.now(),
        )
    ).order_by('-created_at')


def get_group_invitation_history(*, group_id: UUID, user: User) -> InvitationHistory:
    """
    Every invitation referencing a group, with per-status counts (members only).

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotMemberError: If the user is not a member
    """
    group = get_member_group(group_id=group_id, user=user)
    invitations = _with_relations(Invitation.objects.filter(group=group)).order_by('-created_at')

    counts = invitations.aggregate(
        total=Count('id'),
        pending=Count('id', filter=Q(status=InvitationStatus.PENDING)),
        accepted=Count('id', filter=Q(status=InvitationStatus.ACCEPTED)),
        declined=Count('id', filter=Q(status=InvitationStatus.DECLINED)),
    )
    return InvitationHistory(invitations=invitations, **counts)
