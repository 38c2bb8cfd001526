"""Authorization of users against shopping lists."""

from uuid import UUID

from apps.accounts.models import User
from apps.groups.models import GroupMembership
from apps.lists.models import ShoppingList

from .exceptions import ListAccessDeniedError, ListNotFoundError


def can_access_list(*, shopping_list: ShoppingList, user: User) -> bool:
    """Owner of a personal list, or member of the group owning a group list."""
    if shopping_list.owner_user_id is not None:
        return shopping_list.owner_user_id == user.id
    return GroupMembership.objects.filter(
        group_id=shopping_list.owner_group_id,
        user=user
    ).exists()


def authorize_list_access(*, shopping_list: ShoppingList, user: User) -> None:
    """
    Raises:
        ListAccessDeniedError: If the user may not read or modify the list
    """
    if not can_access_list(shopping_list=shopping_list, user=user):
        raise ListAccessDeniedError()


def lock_list(*, list_id: UUID) -> ShoppingList:
    """Lock a list row for the rest of the current transaction."""
    try:
        return (
            ShoppingList.objects
            .select_for_update()
            .get(id=list_id)
        )
    except ShoppingList.DoesNotExist:
        raise ListNotFoundError(f"List with ID {list_id} not found")
