# ==========================================
# apps/invitations/models.py
# ==========================================

from datetime import timedelta
from django.conf import settings
from django.db import models
from django.utils import timezone
import uuid


class InvitationType(models.TextChoices):
    GROUP_INVITE = 'GROUP_INVITE', 'Group invite'
    JOIN_REQUEST = 'JOIN_REQUEST', 'Join request'
    START_GROUP = 'START_GROUP', 'Start group'


class InvitationStatus(models.TextChoices):
    PENDING = 'PENDING', 'Pending'
    ACCEPTED = 'ACCEPTED', 'Accepted'
    DECLINED = 'DECLINED', 'Declined'
    CANCELLED = 'CANCELLED', 'Cancelled'
    EXPIRED = 'EXPIRED', 'Expired'


TERMINAL_STATUSES = frozenset({
    InvitationStatus.ACCEPTED,
    InvitationStatus.DECLINED,
    InvitationStatus.CANCELLED,
    InvitationStatus.EXPIRED,
})


def default_expiry():
    return timezone.now() + timedelta(days=settings.INVITATION_EXPIRY_DAYS)


class Invitation(models.Model):
    """
    Typed invitation between two users.

    GROUP_INVITE: member of ``group`` invites ``to_user``.
    JOIN_REQUEST: ``from_user`` asks to join ``group``; one row per member.
    START_GROUP: ``from_user`` proposes a new group named ``group_name``.
    """

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    type = models.CharField(max_length=20, choices=InvitationType.choices)
    status = models.CharField(
        max_length=20,
        choices=InvitationStatus.choices,
        default=InvitationStatus.PENDING
    )
    from_user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        related_name='sent_invitations'
    )
    to_user = models.ForeignKey(
        'accounts.User',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='received_invitations'
    )
    group = models.ForeignKey(
        'groups.Group',
        on_delete=models.CASCADE,
        null=True,
        blank=True,
        related_name='invitations'
    )
    group_name = models.CharField(max_length=200, blank=True)
    message = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    expires_at = models.DateTimeField(default=default_expiry)
    responded_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        db_table = 'invitations'
        indexes = [
            models.Index(fields=['to_user', 'status'], name='invitations_to_status_idx'),
            models.Index(fields=['from_user', 'status'], name='invitations_from_status_idx'),
            models.Index(fields=['group', 'type', 'status'], name='invitations_group_type_idx'),
        ]
        ordering = ['-created_at']

    def __str__(self):
        return f"{self.type} from {self.from_user_id} to {self.to_user_id} ({self.status})"

    @property
    def is_pending(self):
        return self.status == InvitationStatus.PENDING

    def is_expired(self, now=None):
        return (now or timezone.now()) > self.expires_at
