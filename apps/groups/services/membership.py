"""
Membership store.

Relations between users and groups. Uniqueness of (user, group) is enforced
by the database; a duplicate insert surfaces as ``AlreadyMemberError`` even
when two transactions race past the membership check.
"""

import logging

from django.db import IntegrityError, transaction
from django.db.models import Count, QuerySet

from apps.accounts.models import User
from apps.groups.models import Group, GroupMembership

from .exceptions import AlreadyMemberError, NotMemberError

logger = logging.getLogger(__name__)


def is_member(*, user: User, group: Group) -> bool:
    return GroupMembership.objects.filter(user=user, group=group).exists()


def add_member(*, user: User, group: Group) -> GroupMembership:
    """
    Add a user to a group.

    Raises:
        AlreadyMemberError: If the membership already exists
    """
    if is_member(user=user, group=group):
        raise AlreadyMemberError(f"User is already a member of {group.name}")

    try:
        # Own savepoint: a duplicate must not abort the caller's transaction
        with transaction.atomic():
            membership = GroupMembership.objects.create(user=user, group=group)
    except IntegrityError:
        raise AlreadyMemberError(f"User is already a member of {group.name}")

    logger.info("User %s joined group %s", user.id, group.id)
    return membership


def remove_member(*, user: User, group: Group) -> None:
    """
    Raises:
        NotMemberError: If the user is not a member
    """
    deleted, _ = GroupMembership.objects.filter(user=user, group=group).delete()
    if not deleted:
        raise NotMemberError(f"User is not a member of {group.name}")
    logger.info("User %s left group %s", user.id, group.id)


def member_count(*, group: Group) -> int:
    return GroupMembership.objects.filter(group=group).count()


def list_groups_of(*, user: User) -> QuerySet[GroupMembership]:
    """Memberships of a user, each with its group and the group's member count."""
    return (
        GroupMembership.objects
        .filter(user=user)
        .select_related('group')
        .annotate(member_count=Count('group__memberships'))
        .order_by('joined_at')
    )


def list_members_of(*, group: Group) -> QuerySet[GroupMembership]:
    return (
        GroupMembership.objects
        .filter(group=group)
        .select_related('user')
        .order_by('joined_at')
    )
