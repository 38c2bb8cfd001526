"""Operations on a group's shared list, scoped by group membership."""

from decimal import Decimal
from typing import Optional
from uuid import UUID

from apps.accounts.models import User
from apps.lists.models import Item, ItemStatus, ShoppingList
from apps.lists.services import add_item, clear_list, get_list_with_items
from apps.realtime.bus import EventBus

from .group_management import get_member_group


def get_group_list(*, group_id: UUID, user: User) -> ShoppingList:
    group = get_member_group(group_id=group_id, user=user)
    return get_list_with_items(list_id=group.shopping_list.id, user=user)


def add_group_item(
    *,
    group_id: UUID,
    user: User,
    name: str,
    quantity: int = 1,
    price: Optional[Decimal] = None,
    status: str = ItemStatus.NEEDED,
    bus: Optional[EventBus] = None
) -> Item:
    """
    Add an item to a group's list; announced as ``list_item_added``.

    Raises:
        GroupNotFoundError: If group doesn't exist
        NotMemberError: If the user is not a member
    """
    group = get_member_group(group_id=group_id, user=user)
    return add_item(
        list_id=group.shopping_list.id,
        user=user,
        name=name,
        quantity=quantity,
        price=price,
        status=status,
        bus=bus,
    )


def clear_group_list(*, group_id: UUID, user: User, bus: Optional[EventBus] = None) -> ShoppingList:
    group = get_member_group(group_id=group_id, user=user)
    return clear_list(list_id=group.shopping_list.id, user=user, bus=bus)
