"""Operations on a user's personal list, limited to its owner."""

from decimal import Decimal
from typing import Optional
from uuid import UUID

from django.contrib.auth import get_user_model

from apps.lists.models import Item, ItemStatus, ShoppingList
from apps.lists.services import ListNotFoundError, add_item, clear_list, get_list_with_items

from .account_management import ensure_account_owner

User = get_user_model()


def _personal_list_id(user: User) -> UUID:
    list_id = (
        ShoppingList.objects
        .filter(owner_user=user)
        .values_list('id', flat=True)
        .first()
    )
    if list_id is None:
        raise ListNotFoundError(f"User {user.id} has no personal list")
    return list_id


def get_personal_list(*, user_id: UUID, acting_user: User) -> ShoppingList:
    ensure_account_owner(user_id=user_id, acting_user=acting_user)
    return get_list_with_items(list_id=_personal_list_id(acting_user), user=acting_user)


def add_personal_item(
    *,
    user_id: UUID,
    acting_user: User,
    name: str,
    quantity: int = 1,
    price: Optional[Decimal] = None,
    status: str = ItemStatus.NEEDED
) -> Item:
    """
    Raises:
        NotAccountOwnerError: If the user is not the list owner
        InvalidItemError: If quantity, price or status are invalid
    """
    ensure_account_owner(user_id=user_id, acting_user=acting_user)
    return add_item(
        list_id=_personal_list_id(acting_user),
        user=acting_user,
        name=name,
        quantity=quantity,
        price=price,
        status=status,
    )


def clear_personal_list(*, user_id: UUID, acting_user: User) -> ShoppingList:
    ensure_account_owner(user_id=user_id, acting_user=acting_user)
    return clear_list(list_id=_personal_list_id(acting_user), user=acting_user)
