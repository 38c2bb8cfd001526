"""
Item management service.

Every mutation locks the owning list row, applies the change and rewrites
the list totals through the ledger, all in one transaction. Mutations of
group lists are announced on the group channel after commit.
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.db import transaction
from django.db.models import Prefetch

from apps.accounts.models import User
from apps.lists.models import Item, ItemStatus, ShoppingList
from apps.realtime.bus import EventBus, get_event_bus
from apps.realtime.events import ListCleared, ListItemAdded, ListItemDeleted, ListItemUpdated

from .access import authorize_list_access, lock_list
from .exceptions import EmptyItemUpdateError, InvalidItemError, ItemNotFoundError, ListNotFoundError
from .ledger import recompute_list_totals
from .snapshots import item_snapshot, user_snippet

logger = logging.getLogger(__name__)


@dataclass
class DeletedItem:
    item: dict
    shopping_list: ShoppingList
    deleted_by: Optional[dict]


def _validate_item_fields(
    *,
    name: Optional[str] = None,
    quantity: Optional[int] = None,
    price: Optional[Decimal] = None,
    status: Optional[str] = None
) -> None:
    if name is not None and not name.strip():
        raise InvalidItemError("Item name cannot be empty")
    if quantity is not None and quantity < 1:
        raise InvalidItemError("Quantity must be a positive integer")
    if price is not None and price < 0:
        raise InvalidItemError("Price cannot be negative")
    if status is not None and status not in ItemStatus.values:
        raise InvalidItemError(f"Invalid status: {status}")


def _get_item_list_id(item_id: UUID) -> UUID:
    list_id = (
        Item.objects
        .filter(id=item_id)
        .values_list('shopping_list_id', flat=True)
        .first()
    )
    if list_id is None:
        raise ItemNotFoundError(f"Item with ID {item_id} not found")
    return list_id


def _lock_item(item_id: UUID) -> Item:
    try:
        return (
            Item.objects
            .select_for_update()
            .select_related('added_by')
            .get(id=item_id)
        )
    except Item.DoesNotExist:
        raise ItemNotFoundError(f"Item with ID {item_id} not found")


def get_item(*, item_id: UUID, user: User) -> Item:
    """
    Get a single item the user has access to.

    Raises:
        ItemNotFoundError: If item doesn't exist
        ListAccessDeniedError: If the user cannot access the item's list
    """
    try:
        item = (
            Item.objects
            .select_related('shopping_list', 'added_by')
            .get(id=item_id)
        )
    except Item.DoesNotExist:
        raise ItemNotFoundError(f"Item with ID {item_id} not found")

    authorize_list_access(shopping_list=item.shopping_list, user=user)
    return item


@transaction.atomic
def add_item(
    *,
    list_id: UUID,
    user: User,
    name: str,
    quantity: int = 1,
    price: Optional[Decimal] = None,
    status: str = ItemStatus.NEEDED,
    bus: Optional[EventBus] = None
) -> Item:
    """
    Add an item to a list and recompute the list totals.

    Returns:
        Created Item, with ``shopping_list`` holding the updated totals

    Raises:
        ListNotFoundError: If list doesn't exist
        ListAccessDeniedError: If the user cannot access the list
        InvalidItemError: If quantity, price or status are invalid
    """
    _validate_item_fields(name=name, quantity=quantity, price=price, status=status)

    shopping_list = lock_list(list_id=list_id)
    authorize_list_access(shopping_list=shopping_list, user=user)

    item = Item.objects.create(
        shopping_list=shopping_list,
        name=name.strip(),
        quantity=quantity,
        price=price,
        status=status,
        added_by=user,
    )
    item.shopping_list = recompute_list_totals(list_id=shopping_list.id)

    if shopping_list.owner_group_id:
        (bus or get_event_bus()).publish(ListItemAdded(
            group_id=shopping_list.owner_group_id,
            item=item_snapshot(item),
            added_by=user_snippet(user),
        ))

    logger.info("Item %s added to list %s by %s", item.id, shopping_list.id, user.id)
    return item


@transaction.atomic
def update_item_details(
    *,
    item_id: UUID,
    user: User,
    name: Optional[str] = None,
    quantity: Optional[int] = None,
    price: Optional[Decimal] = None,
    status: Optional[str] = None,
    bus: Optional[EventBus] = None
) -> Item:
    """
    Update item fields and recompute the list totals.

    Raises:
        EmptyItemUpdateError: If no field is provided
        ItemNotFoundError: If item doesn't exist
        ListAccessDeniedError: If the user cannot access the item's list
        InvalidItemError: If any provided field is invalid
    """
    changes = {
        field: value
        for field, value in (('name', name), ('quantity', quantity), ('price', price), ('status', status))
        if value is not None
    }
    if not changes:
        raise EmptyItemUpdateError()
    _validate_item_fields(**changes)

    # Lock order: list first, then item
    shopping_list = lock_list(list_id=_get_item_list_id(item_id))
    authorize_list_access(shopping_list=shopping_list, user=user)
    item = _lock_item(item_id)

    if 'name' in changes:
        changes['name'] = changes['name'].strip()
    for field, value in changes.items():
        setattr(item, field, value)
    item.save(update_fields=[*changes, 'updated_at'])

    item.shopping_list = recompute_list_totals(list_id=shopping_list.id)

    if shopping_list.owner_group_id:
        (bus or get_event_bus()).publish(ListItemUpdated(
            group_id=shopping_list.owner_group_id,
            item=item_snapshot(item),
            updated_by=user_snippet(user),
        ))

    logger.info("Item %s updated by %s: %s", item.id, user.id, ', '.join(changes))
    return item


def update_item_status(
    *,
    item_id: UUID,
    user: User,
    status: str,
    bus: Optional[EventBus] = None
) -> Item:
    """Change only the status of an item (NEEDED, OPTIONAL, PURCHASED)."""
    if not status:
        raise InvalidItemError("Status is required")
    return update_item_details(item_id=item_id, user=user, status=status, bus=bus)


@transaction.atomic
def delete_item(
    *,
    item_id: UUID,
    user: User,
    bus: Optional[EventBus] = None
) -> DeletedItem:
    """
    Delete an item and recompute the list totals.

    Returns:
        DeletedItem with the item snapshot taken before deletion

    Raises:
        ItemNotFoundError: If item doesn't exist
        ListAccessDeniedError: If the user cannot access the item's list
    """
    shopping_list = lock_list(list_id=_get_item_list_id(item_id))
    authorize_list_access(shopping_list=shopping_list, user=user)
    item = _lock_item(item_id)

    snapshot = item_snapshot(item)
    item.delete()
    shopping_list = recompute_list_totals(list_id=shopping_list.id)

    deleted = DeletedItem(item=snapshot, shopping_list=shopping_list, deleted_by=user_snippet(user))

    if shopping_list.owner_group_id:
        (bus or get_event_bus()).publish(ListItemDeleted(
            group_id=shopping_list.owner_group_id,
            item=snapshot,
            deleted_by=deleted.deleted_by,
        ))

    logger.info("Item %s deleted by %s", item_id, user.id)
    return deleted


@transaction.atomic
def clear_list(
    *,
    list_id: UUID,
    user: User,
    bus: Optional[EventBus] = None
) -> ShoppingList:
    """
    Delete every item of a list; totals become 0.00.

    Raises:
        ListNotFoundError: If list doesn't exist
        ListAccessDeniedError: If the user cannot access the list
    """
    shopping_list = lock_list(list_id=list_id)
    authorize_list_access(shopping_list=shopping_list, user=user)

    deleted_count, _ = Item.objects.filter(shopping_list=shopping_list).delete()
    shopping_list = recompute_list_totals(list_id=shopping_list.id)

    if shopping_list.owner_group_id:
        (bus or get_event_bus()).publish(ListCleared(
            group_id=shopping_list.owner_group_id,
            list_id=shopping_list.id,
            cleared_by=user_snippet(user),
        ))

    logger.info("List %s cleared by %s (%d items)", list_id, user.id, deleted_count)
    return shopping_list


def get_list_with_items(*, list_id: UUID, user: User) -> ShoppingList:
    """
    Get a list with its items and their authors prefetched.

    Raises:
        ListNotFoundError: If list doesn't exist
        ListAccessDeniedError: If the user cannot access the list
    """
    try:
        shopping_list = (
            ShoppingList.objects
            .prefetch_related(
                Prefetch('items', queryset=Item.objects.select_related('added_by'))
            )
            .get(id=list_id)
        )
    except ShoppingList.DoesNotExist:
        raise ListNotFoundError(f"List with ID {list_id} not found")

    authorize_list_access(shopping_list=shopping_list, user=user)
    return shopping_list
