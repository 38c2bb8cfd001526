"""
Account management service.

Profile reads and updates, the user's groups, and account deletion. Every
operation is limited to the account owner.
"""

import logging
from typing import Optional
from uuid import UUID

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.files.uploadedfile import UploadedFile
from django.db import transaction
from django.db.models import QuerySet

from apps.core.storage import delete_image, upload_image
from apps.groups.models import GroupMembership
from apps.groups.services import destroy_group, list_groups_of, lock_group, member_count
from apps.lists.models import Item, ShoppingList

from .exceptions import NotAccountOwnerError, UserNotFoundError

logger = logging.getLogger(__name__)

User = get_user_model()

# Groups at or below this size are disbanded when one of their members deletes the account
DISBAND_ON_DELETE_MAX_MEMBERS = 2


def ensure_account_owner(*, user_id: UUID, acting_user: User) -> None:
    """
    Raises:
        NotAccountOwnerError: If ``acting_user`` is not the owner of ``user_id``
    """
    if str(acting_user.id) != str(user_id):
        raise NotAccountOwnerError()


def get_user_profile(*, user_id: UUID, acting_user: User) -> User:
    """
    Raises:
        NotAccountOwnerError: If the user is not the account owner
        UserNotFoundError: If user doesn't exist
    """
    ensure_account_owner(user_id=user_id, acting_user=acting_user)
    try:
        return User.objects.get(id=user_id, is_active=True)
    except User.DoesNotExist:
        raise UserNotFoundError(f"User with ID {user_id} not found")


def get_user_groups(*, user_id: UUID, acting_user: User) -> QuerySet[GroupMembership]:
    """Memberships of the user with member counts, oldest first."""
    user = get_user_profile(user_id=user_id, acting_user=acting_user)
    return list_groups_of(user=user)


@transaction.atomic
def update_user_profile(
    *,
    user_id: UUID,
    acting_user: User,
    first_name: Optional[str] = None,
    last_name: Optional[str] = None,
    profile_pic: Optional[UploadedFile] = None
) -> User:
    """
    Update name fields and/or the profile picture.

    The previous picture is deleted best effort once the update commits.

    Raises:
        NotAccountOwnerError: If the user is not the account owner
        UserNotFoundError: If user doesn't exist
    """
    ensure_account_owner(user_id=user_id, acting_user=acting_user)
    try:
        user = User.objects.select_for_update().get(id=user_id)
    except User.DoesNotExist:
        raise UserNotFoundError(f"User with ID {user_id} not found")

    update_fields = ['updated_at']

    if first_name is not None:
        user.first_name = first_name
        update_fields.append('first_name')

    if last_name is not None:
        user.last_name = last_name
        update_fields.append('last_name')

    if profile_pic is not None:
        old_pic = user.profile_pic
        user.profile_pic = upload_image(
            bucket=settings.PROFILE_PICS_BUCKET,
            owner_id=user.id,
            file=profile_pic,
            prefix='profile_',
        )
        update_fields.append('profile_pic')
        if old_pic:
            transaction.on_commit(
                lambda: delete_image(bucket=settings.PROFILE_PICS_BUCKET, url=old_pic)
            )

    user.save(update_fields=update_fields)
    logger.info("User %s updated profile: %s", user.id, ', '.join(update_fields[1:]))
    return user


@transaction.atomic
def delete_user_account(*, user_id: UUID, acting_user: User) -> None:
    """
    Delete an account.

    Groups with two or fewer members are disbanded; from larger groups
    only the membership is removed.
    The personal list and its items go with the user.

    Raises:
        NotAccountOwnerError: If the user is not the account owner
        UserNotFoundError: If user doesn't exist
    """
    ensure_account_owner(user_id=user_id, acting_user=acting_user)
    try:
        user = User.objects.select_for_update().get(id=user_id)
    except User.DoesNotExist:
        raise UserNotFoundError(f"User with ID {user_id} not found")

    group_ids = list(
        GroupMembership.objects
        .filter(user=user)
        .values_list('group_id', flat=True)
    )
    for group_id in group_ids:
        group = lock_group(group_id=group_id)
        if member_count(group=group) <= DISBAND_ON_DELETE_MAX_MEMBERS:
            destroy_group(group)
        else:
            GroupMembership.objects.filter(user=user, group=group).delete()

    Item.objects.filter(shopping_list__owner_user=user).delete()
    ShoppingList.objects.filter(owner_user=user).delete()

    profile_pic = user.profile_pic
    user.delete()

    if profile_pic:
        transaction.on_commit(
            lambda: delete_image(bucket=settings.PROFILE_PICS_BUCKET, url=profile_pic)
        )
    logger.info("Deleted account %s (%d groups touched)", user_id, len(group_ids))
