"""
Invitations app services layer.

Sending, the PENDING -> terminal state machine, and read queries. All
state-changing operations run in one transaction and notify participants
only after commit.
"""

from apps.groups.services import AlreadyMemberError, GroupNotFoundError, NotMemberError

from .exceptions import (
    InvitationNotFoundError,
    UserCodeNotFoundError,
    GroupCodeNotFoundError,
    SelfInvitationError,
    InvalidInvitationError,
    DuplicateInvitationError,
    NotInvitationRecipientError,
    NotInvitationSenderError,
    NotInvitationParticipantError,
    InvitationNotPendingError,
    InvitationExpiredError,
)

from .sending import (
    send_invite,
    send_request,
    start_group,
)

from .transitions import (
    AcceptanceResult,
    apply_acceptance,
    accept_invitation,
    decline_invitation,
    cancel_invitation,
    expire_overdue_invitations,
)

from .queries import (
    InvitationHistory,
    get_invitation,
    get_received_invitations,
    get_sent_invitations,
    get_group_invitation_history,
)

from .snapshots import invitation_snapshot


__all__ = [
    # Exceptions
    'AlreadyMemberError',
    'GroupNotFoundError',
    'NotMemberError',
    'InvitationNotFoundError',
    'UserCodeNotFoundError',
    'GroupCodeNotFoundError',
    'SelfInvitationError',
    'InvalidInvitationError',
    'DuplicateInvitationError',
    'NotInvitationRecipientError',
    'NotInvitationSenderError',
    'NotInvitationParticipantError',
    'InvitationNotPendingError',
    'InvitationExpiredError',

    # Sending
    'send_invite',
    'send_request',
    'start_group',

    # Transitions
    'AcceptanceResult',
    'apply_acceptance',
    'accept_invitation',
    'decline_invitation',
    'cancel_invitation',
    'expire_overdue_invitations',

    # Queries
    'InvitationHistory',
    'get_invitation',
    'get_received_invitations',
    'get_sent_invitations',
    'get_group_invitation_history',

    'invitation_snapshot',
]
