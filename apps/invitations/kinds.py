"""
Invitation variants.

An ``Invitation`` row is a tagged union over its ``type`` column. ``as_kind``
wraps a row in the variant for its type so transition logic can dispatch on
the variant (see ``services.transitions.apply_acceptance``) instead of
branching on strings.
"""

from dataclasses import dataclass
from typing import Optional, Union

from apps.accounts.models import User
from apps.invitations.models import Invitation, InvitationType


@dataclass(frozen=True)
class GroupInvite:
    """A member invites another user into an existing group."""

    invitation: Invitation

    @property
    def joining_user(self) -> User:
        return self.invitation.to_user

    @property
    def group_name(self) -> Optional[str]:
        return self.invitation.group.name if self.invitation.group_id else None


@dataclass(frozen=True)
class JoinRequest:
    """A user asks to join an existing group; fanned out to every member."""

    invitation: Invitation

    @property
    def joining_user(self) -> User:
        return self.invitation.from_user

    @property
    def group_name(self) -> Optional[str]:
        return self.invitation.group.name if self.invitation.group_id else None


@dataclass(frozen=True)
class StartGroup:
    """A user proposes founding a new two-person group."""

    invitation: Invitation

    @property
    def joining_user(self) -> User:
        return self.invitation.to_user

    @property
    def group_name(self) -> Optional[str]:
        return self.invitation.group_name


InvitationKind = Union[GroupInvite, JoinRequest, StartGroup]

KIND_BY_TYPE = {
    InvitationType.GROUP_INVITE.value: GroupInvite,
    InvitationType.JOIN_REQUEST.value: JoinRequest,
    InvitationType.START_GROUP.value: StartGroup,
}


def as_kind(invitation: Invitation) -> InvitationKind:
    try:
        kind = KIND_BY_TYPE[invitation.type]
    except KeyError:
        raise ValueError(f"Unknown invitation type: {invitation.type}")
    return kind(invitation)
