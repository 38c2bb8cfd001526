"""
Group lifecycle service.

Groups are created only by accepting a START_GROUP invitation, always
together with their shared list. Disbanding removes the group, its list
and items, its memberships and every invitation referencing it in one
transaction. A member leaving a group of two disbands it.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional
from uuid import UUID

from django.conf import settings
from django.core.files.uploadedfile import UploadedFile
from django.db import transaction
from django.db.models import Count

from apps.accounts.models import User
from apps.core.codes import GROUP_CODE, create_with_unique_code
from apps.core.storage import delete_image, upload_image
from apps.groups.models import Group, GroupMembership
from apps.invitations.models import Invitation, InvitationStatus, InvitationType
from apps.lists.models import Item, ShoppingList

from .exceptions import GroupNotFoundError, NotMemberError
from .membership import add_member, is_member, list_members_of, member_count

logger = logging.getLogger(__name__)


@dataclass
class LeaveResult:
    remaining_members: int
    disbanded: bool


def lock_group(*, group_id: UUID) -> Group:
    """Lock a group row for the rest of the current transaction."""
    try:
        return (
            Group.objects
            .select_for_update()
            .get(id=group_id)
        )
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")


def get_member_group(*, group_id: UUID, user: User) -> Group:
    """
    Get a group the user belongs to.

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotMemberError: If the user is not a member
    """
    try:
        group = (
            Group.objects
            .select_related('shopping_list')
            .annotate(member_count=Count('memberships'))
            .get(id=group_id)
        )
    except Group.DoesNotExist:
        raise GroupNotFoundError(f"Group with ID {group_id} not found")

    if not is_member(user=user, group=group):
        raise NotMemberError()
    return group


def create_group_with_members(*, name: str, members: Iterable[User]) -> Group:
    """
    Create a group, its empty shared list and the given memberships.

    Must run inside the caller's transaction.

    Raises:
        CodeGenerationError: If no unique group code could be generated
        AlreadyMemberError: If a user appears twice in ``members``
    """
    group = create_with_unique_code(
        lambda code: Group.objects.create(name=name, group_code=code),
        kind=GROUP_CODE,
        field='group_code',
    )
    ShoppingList.objects.create(owner_group=group)
    for user in members:
        add_member(user=user, group=group)

    logger.info("Group %s (%s) created", group.id, group.group_code)
    return group


def get_group_members(*, group_id: UUID, user: User):
    """Memberships of a group the user belongs to, oldest first."""
    group = get_member_group(group_id=group_id, user=user)
    return list_members_of(group=group)


@transaction.atomic
def update_group(
    *,
    group_id: UUID,
    user: User,
    name: Optional[str] = None,
    group_image: Optional[UploadedFile] = None
) -> Group:
    """
    Update group name and/or image (members only).

    The previous image is deleted best effort once the update commits.

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotMemberError: If the user is not a member
    """
    group = lock_group(group_id=group_id)
    if not is_member(user=user, group=group):
        raise NotMemberError()

    update_fields = ['updated_at']

    if name is not None:
        group.name = name
        update_fields.append('name')

    if group_image is not None:
        old_image = group.group_image
        group.group_image = upload_image(
            bucket=settings.GROUP_IMAGES_BUCKET,
            owner_id=group.id,
            file=group_image,
            prefix='group_',
        )
        update_fields.append('group_image')
        if old_image:
            transaction.on_commit(
                lambda: delete_image(bucket=settings.GROUP_IMAGES_BUCKET, url=old_image)
            )

    group.save(update_fields=update_fields)
    logger.info("Group %s updated by %s", group.id, user.id)
    return group


def destroy_group(group: Group) -> None:
    """Remove a group and everything hanging off it. Caller holds the group lock."""
    image = group.group_image
    group_id = group.id

    Item.objects.filter(shopping_list__owner_group=group).delete()
    ShoppingList.objects.filter(owner_group=group).delete()
    Invitation.objects.filter(group=group).delete()
    GroupMembership.objects.filter(group=group).delete()
    group.delete()

    if image:
        transaction.on_commit(
            lambda: delete_image(bucket=settings.GROUP_IMAGES_BUCKET, url=image)
        )
    logger.info("Group %s disbanded", group_id)


@transaction.atomic
def disband_group(*, group_id: UUID, user: User) -> None:
    """
    Disband a group regardless of its size (members only).

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotMemberError: If the user is not a member
    """
    group = lock_group(group_id=group_id)
    if not is_member(user=user, group=group):
        raise NotMemberError()
    destroy_group(group)


@transaction.atomic
def leave_group(*, group_id: UUID, user: User) -> LeaveResult:
    """
    Leave a group.

    The group row is locked so concurrent leaves see consistent counts.
    If at most one member would remain the whole group is disbanded.

    Returns:
        LeaveResult with the number of remaining members (0 when disbanded)

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotMemberError: If the user is not a member
    """
    group = lock_group(group_id=group_id)
    if not is_member(user=user, group=group):
        raise NotMemberError()

    count = member_count(group=group)
    if count - 1 <= 1:
        destroy_group(group)
        return LeaveResult(remaining_members=0, disbanded=True)

    GroupMembership.objects.filter(user=user, group=group).delete()
    # Join requests waiting on the leaver can no longer be approved by them
    Invitation.objects.filter(
        type=InvitationType.JOIN_REQUEST,
        to_user=user,
        group=group,
        status=InvitationStatus.PENDING,
    ).delete()
    logger.info("User %s left group %s", user.id, group.id)
    return LeaveResult(remaining_members=count - 1, disbanded=False)
